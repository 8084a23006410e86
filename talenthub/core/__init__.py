"""Proxy, upstream client, service and transformation pipeline."""
