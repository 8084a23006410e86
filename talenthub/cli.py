"""Command-line interface for talenthub."""

import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator, Optional

import httpx
import typer
from rich.console import Console
from rich.table import Table

from talenthub import TalentHubConfig, TalentService, __version__, save_json
from talenthub.catalog import find_option, group_by_issuer
from talenthub.config import CacheBackend, LogFormat
from talenthub.exceptions import CacheError, UnknownCredentialError

app = typer.Typer(
    name="talenthub",
    help="Find developers with verified Talent Protocol credentials",
    add_completion=False,
)
console = Console()


def version_callback(value: bool):
    if value:
        console.print(f"talenthub version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
):
    """talenthub - Talent Protocol developer search."""
    pass


@asynccontextmanager
async def _service(proxy_url: Optional[str], quiet: bool = False) -> AsyncIterator[TalentService]:
    """
    Open a TalentService.

    With no proxy URL the proxy route runs in-process through an ASGI transport.
    The ASGI transport skips the app lifespan, so the shared proxy is closed here.
    """
    config = TalentHubConfig(log_format=LogFormat.JSON if quiet else LogFormat.CONSOLE)
    if proxy_url:
        config.proxy_url = proxy_url
        async with TalentService(config) as service:
            yield service
        return

    from talenthub import api

    config.proxy_url = "http://talenthub.local"
    try:
        async with TalentService(config, transport=httpx.ASGITransport(app=api.app)) as service:
            yield service
    finally:
        await api.shutdown_proxy()


@app.command()
def credentials():
    """List the built-in credential filters."""
    table = Table(title="Credentials")
    table.add_column("Issuer", style="dim")
    table.add_column("Credential")
    table.add_column("Slug", style="cyan")

    for issuer, options in group_by_issuer().items():
        for option in options:
            table.add_row(issuer, option.display_name, option.slug or "-")

    console.print(table)


@app.command()
def search(
    credential: str = typer.Argument(..., help="Credential slug, name or display name"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the result to this JSON file"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Force refresh, skip cache"
    ),
    proxy_url: Optional[str] = typer.Option(
        None, "--proxy-url", help="Base URL of a running talenthub server"
    ),
    quiet: bool = typer.Option(
        False, "--quiet", "-q", help="Suppress output, only show errors"
    ),
):
    """Find profiles holding a credential."""
    try:
        option = find_option(credential)
    except UnknownCredentialError as e:
        console.print(f"[red]{e}[/red]")
        console.print("Run [bold]talenthub credentials[/bold] to list the options.")
        raise typer.Exit(1)

    async def run():
        async with _service(proxy_url, quiet) as service:
            result = await service.search(option, force_refresh=force)

        if result.fallback:
            console.print(
                f"[red]API error:[/red] {result.error_message or 'Unknown error'}. "
                "Showing sample profiles."
            )

        if not quiet:
            _print_profiles(result)

        if output:
            save_json(result, output)
            console.print(f"[dim]Saved to {output}[/dim]")

    asyncio.run(run())


@app.command()
def profile(
    profile_id: str = typer.Argument(..., help="Talent Protocol profile id"),
    proxy_url: Optional[str] = typer.Option(None, "--proxy-url"),
):
    """Show credential values for a single profile."""

    async def run():
        async with _service(proxy_url) as service:
            values = await service.fetch_profile_credential_values(profile_id)

        if not values:
            console.print(f"[yellow]No credential values for profile {profile_id}[/yellow]")
            return

        table = Table(title=f"Profile {profile_id}", show_header=False)
        table.add_column("Credential", style="dim")
        table.add_column("Value")
        for slug, value in values.items():
            table.add_row(slug, _format_value(value))
        console.print(table)

    asyncio.run(run())


@app.command()
def details(
    proxy_url: Optional[str] = typer.Option(None, "--proxy-url"),
):
    """Show the upstream credential catalog."""

    async def run():
        async with _service(proxy_url) as service:
            items = await service.fetch_credential_details()

        if not items:
            console.print("[yellow]No credential details available[/yellow]")
            return

        table = Table(title="Talent Protocol credentials")
        table.add_column("Issuer", style="dim")
        table.add_column("Name")
        table.add_column("Slug", style="cyan")
        for item in items:
            table.add_row(
                item.data_issuer_display_name or item.data_issuer or "-",
                item.display_name or item.name or "-",
                item.slug or "-",
            )
        console.print(table)

    asyncio.run(run())


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host"),
    port: int = typer.Option(8000, "--port", "-p"),
):
    """Run the proxy server."""
    import uvicorn

    uvicorn.run("talenthub.api:app", host=host, port=port)


@app.command()
def cache(
    action: str = typer.Argument(..., help="Action: clear, info"),
    credential: Optional[str] = typer.Option(
        None, "--credential", "-c", help="Credential to invalidate"
    ),
):
    """Manage the search result cache."""
    config = TalentHubConfig()

    async def run():
        async with TalentService(config) as service:
            if action == "clear":
                if credential:
                    option = find_option(credential)
                    await service.invalidate_cache(option)
                    console.print(f"[green]OK[/green] Cleared cache for {option.display_name}")
                else:
                    await service.clear_cache()
                    console.print("[green]OK[/green] Cleared all cache")

            elif action == "info":
                console.print(f"Cache backend: {config.cache_backend.value}")
                cache_path = Path(config.sqlite_path)
                if config.cache_backend == CacheBackend.SQLITE and cache_path.exists():
                    console.print(f"Cache path: {cache_path}")
                    console.print(f"Cache size: {cache_path.stat().st_size / 1024:.1f} KB")
                console.print(f"TTL: {config.cache_ttl_seconds}s")

            else:
                console.print(f"[red]Unknown action: {action}[/red]")
                console.print("Available actions: clear, info")
                raise typer.Exit(1)

    try:
        asyncio.run(run())
    except UnknownCredentialError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except CacheError as e:
        console.print(f"[red]Cache error:[/red] {e}")
        raise typer.Exit(1)


def _format_value(value) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return f"{value:,}"
    return str(value)


def _print_profiles(result):
    """Print search results as a table."""
    option = result.credential
    cached_tag = " (cached)" if result.cached else ""

    if not result.profiles:
        console.print(f"No profiles found with {option.display_name} credential.")
        return

    title = f"{option.display_name}{cached_tag}"
    if result.sorted_by_credential:
        title += " - sorted by credential value (highest first)"

    table = Table(title=title)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Name")
    table.add_column("Username", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Value", justify="right")
    table.add_column("Verified")
    table.add_column("Tags", style="dim")

    for i, p in enumerate(result.profiles, start=1):
        table.add_row(
            str(i),
            p.full_name,
            f"@{p.username}" if p.username else "-",
            f"{p.score:g}" if p.score is not None else "-",
            _format_value(p.credential_value) if p.credential_value is not None else "-",
            "yes" if p.human_verified else "no",
            ", ".join(p.tags[:3]),
        )

    console.print(table)


if __name__ == "__main__":
    app()
