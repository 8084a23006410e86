"""Unit tests for response transformation and credential ordering."""

from itertools import permutations

import pytest

from talenthub.core.transformer import (
    as_number,
    credential_scalar,
    extract_credential_values,
    sort_by_credential_value,
    transform_credential_details,
    transform_profile,
    transform_profiles,
)
from talenthub.models.profile import TalentProfile

from conftest import load_fixture


def _profile(pid: str, value=None) -> TalentProfile:
    return TalentProfile(id=pid, full_name=f"User {pid}", credential_value=value)


class TestTransformProfile:
    """Upstream record -> TalentProfile."""

    def test_full_record(self):
        raw = load_fixture("search_response")["profiles"][0]
        profile = transform_profile(raw)

        assert profile.id == "a1b2"
        assert profile.full_name == "Ada Lovelace"
        assert profile.username == "ada"
        assert profile.profile_picture == "https://example.com/ada.png"
        assert profile.score == 97
        assert profile.human_verified is True
        assert profile.tags == ["Solidity", "Rust"]
        assert profile.credential_value is None

    def test_name_fallback(self):
        raw = load_fixture("search_response")["profiles"][1]
        profile = transform_profile(raw)
        assert profile.full_name == "grace"
        assert profile.human_verified is False

    def test_unknown_when_no_names(self):
        profile = transform_profile({"id": "x"})
        assert profile.full_name == "Unknown"

    def test_missing_fields_default(self):
        profile = transform_profile({})
        assert profile.id == ""
        assert profile.score is None
        assert profile.tags == []
        assert profile.bio is None

    def test_null_builder_score(self):
        raw = load_fixture("search_response")["profiles"][2]
        assert transform_profile(raw).score is None

    def test_numeric_id_stringified(self):
        assert transform_profile({"id": 42}).id == "42"

    def test_transform_profiles_keeps_order(self):
        profiles = transform_profiles(load_fixture("search_response")["profiles"])
        assert [p.id for p in profiles] == ["a1b2", "c3d4", "e5f6"]

    def test_transform_profiles_skips_non_objects(self):
        assert [p.id for p in transform_profiles([{"id": "1"}, None, "junk"])] == ["1"]


class TestExtractCredentialValues:
    """`profiles/<id>/credentials` -> slug map."""

    def test_fixture(self):
        values = extract_credential_values(load_fixture("profile_credentials"))
        assert values == {"github-stars": 340, "github-repositories": "42"}

    def test_missing_list(self):
        assert extract_credential_values({"error": "nope"}) == {}

    def test_not_a_dict(self):
        assert extract_credential_values(["user_credentials"]) == {}

    def test_null_value_skipped(self):
        payload = {"user_credentials": [{"credential": {"slug": "s"}, "value": None}]}
        assert extract_credential_values(payload) == {}

    def test_zero_value_kept(self):
        payload = {"user_credentials": [{"credential": {"slug": "s"}, "value": 0}]}
        assert extract_credential_values(payload) == {"s": 0}


class TestCredentialDetails:

    def test_fixture(self):
        details = transform_credential_details(load_fixture("credentials"))
        assert [d.slug for d in details] == ["github-stars", "basecamp-attendee"]
        assert details[0].data_issuer_display_name == "GitHub"

    def test_extra_fields_preserved(self):
        details = transform_credential_details(load_fixture("credentials"))
        assert details[0].model_dump()["max_score"] == 10

    def test_missing_key(self):
        assert transform_credential_details({}) == []


class TestAsNumber:

    @pytest.mark.parametrize("value,expected", [
        (120, 120.0),
        (2.5, 2.5),
        ("1500", 1500.0),
        (" 7 ", 7.0),
        ("GitHub", None),
        (True, None),
        ("nan", None),
        (None, None),
    ])
    def test_values(self, value, expected):
        assert as_number(value) == expected


class TestCredentialScalar:

    @pytest.mark.parametrize("value,expected", [
        (120, 120),
        (2.5, 2.5),
        ("gold", "gold"),
        (True, 1),
        (False, 0),
        (float("inf"), None),
        ({"count": 3}, None),
        ([1, 2], None),
        (None, None),
    ])
    def test_values(self, value, expected):
        assert credential_scalar(value) == expected

    def test_bool_becomes_int(self):
        assert type(credential_scalar(True)) is int


class TestSortByCredentialValue:
    """Descending credential order, valueless profiles last."""

    def test_numeric_descending(self):
        profiles = [_profile("a", 10), _profile("b", 50), _profile("c", 30)]
        ordered = sort_by_credential_value(profiles)
        assert [p.credential_value for p in ordered] == [50, 30, 10]

    def test_numeric_not_lexicographic(self):
        profiles = [_profile("a", 9), _profile("b", 100)]
        assert [p.id for p in sort_by_credential_value(profiles)] == ["b", "a"]

    def test_numeric_strings_compare_as_numbers(self):
        profiles = [_profile("a", "9"), _profile("b", "100"), _profile("c", 50)]
        assert [p.id for p in sort_by_credential_value(profiles)] == ["b", "c", "a"]

    def test_text_descending(self):
        profiles = [_profile("a", "alpha"), _profile("b", "gamma"), _profile("c", "beta")]
        assert [p.id for p in sort_by_credential_value(profiles)] == ["b", "c", "a"]

    def test_numbers_rank_above_text(self):
        profiles = [_profile("a", "zeta"), _profile("b", 3), _profile("c", "100")]
        assert [p.id for p in sort_by_credential_value(profiles)] == ["c", "b", "a"]

    @pytest.mark.parametrize("order", list(permutations(["ten", "nine", "text"])))
    def test_mixed_values_order_independent_of_input(self, order):
        values = {"ten": 10, "nine": "9", "text": "1a"}
        profiles = [_profile(pid, values[pid]) for pid in order]
        assert [p.id for p in sort_by_credential_value(profiles)] == ["ten", "nine", "text"]

    def test_missing_values_last_in_original_order(self):
        profiles = [
            _profile("n1"),
            _profile("a", 5),
            _profile("n2"),
            _profile("b", 7),
            _profile("n3"),
        ]
        ordered = sort_by_credential_value(profiles)
        assert [p.id for p in ordered] == ["b", "a", "n1", "n2", "n3"]

    def test_equal_values_keep_order(self):
        profiles = [_profile("a", 5), _profile("b", 5), _profile("c", 5)]
        assert [p.id for p in sort_by_credential_value(profiles)] == ["a", "b", "c"]

    def test_does_not_mutate_input(self):
        profiles = [_profile("a", 1), _profile("b", 2)]
        sort_by_credential_value(profiles)
        assert [p.id for p in profiles] == ["a", "b"]

    def test_empty(self):
        assert sort_by_credential_value([]) == []
