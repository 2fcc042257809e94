"""Tests for catalog derivation and filtering."""

from __future__ import annotations

from pathlib import Path

from profile_switcher.catalog import Catalog, Profile, derive_catalog
from profile_switcher.filtering import (
    filter_profiles,
    move_selection,
    reconcile_selection,
)
from profile_switcher.store import ConfigDocument, load


def _catalog(text: str) -> Catalog:
    return derive_catalog(ConfigDocument.from_string(text))


def _names(profiles: list[Profile]) -> list[str]:
    return [p.name for p in profiles]


class TestDeriveCatalog:
    def test_sample_config(self, aws_config: Path):
        catalog = derive_catalog(load(aws_config))
        assert _names(catalog.profiles) == ["work", "personal"]
        assert len(catalog.warnings) == 1
        assert "[badsection]" in catalog.warnings[0]

    def test_default_any_case_is_skipped_silently(self):
        catalog = _catalog("[DEFAULT]\na = 1\n[Default]\nb = 2\n[profile x]\n")
        assert _names(catalog.profiles) == ["x"]
        assert catalog.warnings == []

    def test_sso_sessions_skipped_silently(self):
        catalog = _catalog("[sso-session corp]\nsso_region = us-east-1\n")
        assert catalog.profiles == []
        assert catalog.warnings == []

    def test_one_warning_per_unknown_section(self):
        catalog = _catalog("[one]\n[profile a]\n[two]\n[Profile b]\n")
        assert _names(catalog.profiles) == ["a"]
        assert len(catalog.warnings) == 3
        assert "[one]" in catalog.warnings[0]
        assert "[two]" in catalog.warnings[1]
        assert "[Profile b]" in catalog.warnings[2]

    def test_empty_profile_name_warns(self):
        catalog = _catalog("[profile ]\nk = v\n")
        assert catalog.profiles == []
        assert len(catalog.warnings) == 1

    def test_document_order_kept(self):
        catalog = _catalog("[profile z]\n[profile a]\n[profile m]\n")
        assert _names(catalog.profiles) == ["z", "a", "m"]

    def test_section_name(self):
        assert Profile("work").section_name == "profile work"

    def test_end_to_end_filter(self):
        catalog = _catalog("[profile a]\n[profile b]\n[badsection]\n")
        assert _names(catalog.profiles) == ["a", "b"]
        assert len(catalog.warnings) == 1
        filtered = filter_profiles(catalog.profiles, "a")
        assert _names(filtered) == ["a"]
        assert reconcile_selection(filtered, None) == 0


PROFILES = [Profile("Work-Prod"), Profile("personal"), Profile("work-dev"), Profile("sandbox")]


class TestFilterProfiles:
    def test_empty_query_returns_everything_in_order(self):
        result = filter_profiles(PROFILES, "")
        assert result == PROFILES
        assert result is not PROFILES

    def test_case_insensitive_substring(self):
        assert _names(filter_profiles(PROFILES, "WORK")) == ["Work-Prod", "work-dev"]

    def test_result_is_ordered_subsequence(self):
        result = filter_profiles(PROFILES, "r")
        assert _names(result) == ["Work-Prod", "personal", "work-dev"]
        positions = [PROFILES.index(p) for p in result]
        assert positions == sorted(positions)

    def test_no_match(self):
        assert filter_profiles(PROFILES, "zzz") == []


class TestReconcileSelection:
    def test_empty_list_is_none(self):
        assert reconcile_selection([], None) is None
        assert reconcile_selection([], 3) is None

    def test_none_becomes_zero(self):
        assert reconcile_selection(PROFILES, None) == 0

    def test_out_of_range_becomes_zero(self):
        assert reconcile_selection(PROFILES, 4) == 0
        assert reconcile_selection(PROFILES, -1) == 0

    def test_in_range_kept(self):
        assert reconcile_selection(PROFILES, 2) == 2

    def test_idempotent(self):
        for previous in (None, -5, 0, 1, 3, 99):
            once = reconcile_selection(PROFILES[:2], previous)
            assert reconcile_selection(PROFILES[:2], once) == once


class TestMoveSelection:
    def test_clamped_to_bounds(self):
        assert move_selection(PROFILES, 0, -1) == 0
        assert move_selection(PROFILES, 3, 5) == 3

    def test_step(self):
        assert move_selection(PROFILES, 1, 1) == 2

    def test_empty(self):
        assert move_selection([], None, 1) is None
