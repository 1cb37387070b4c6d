"""Tests for raw-id resolution and display names."""

from __future__ import annotations

import pytest

from ffu_stats.identity import (
    UNKNOWN_ABBREVIATION,
    UNKNOWN_TEAM_NAME,
    FranchiseIdentity,
    IdentityResolver,
    ResolvedIdentity,
    RosterTable,
)


@pytest.fixture
def resolver() -> IdentityResolver:
    return IdentityResolver()


class TestResolve:
    """Tests for IdentityResolver.resolve."""

    def test_primary_id_resolves_to_itself(self, resolver: IdentityResolver) -> None:
        assert resolver.resolve("ffu-004") == ResolvedIdentity("ffu-004", False)

    def test_platform_id_resolves_to_primary(self, resolver: IdentityResolver) -> None:
        assert resolver.resolve("398576262546735104") == ResolvedIdentity("ffu-004", False)

    def test_legacy_username_resolves_to_primary(self, resolver: IdentityResolver) -> None:
        assert resolver.resolve("beers") == ResolvedIdentity("ffu-004", False)

    def test_unknown_id_fails_open(self, resolver: IdentityResolver) -> None:
        result = resolver.resolve("brand-new-member")

        assert result.primary_id == "brand-new-member"
        assert result.unresolved is True

    def test_resolve_id_drops_flag(self, resolver: IdentityResolver) -> None:
        assert resolver.resolve_id("stallions") == "ffu-001"
        assert resolver.resolve_id("brand-new-member") == "brand-new-member"

    @pytest.mark.parametrize("raw_id", ["ffu-001", "331590801261883392", "stallions", "nobody"])
    def test_resolution_is_idempotent(self, resolver: IdentityResolver, raw_id: str) -> None:
        once = resolver.resolve_id(raw_id)

        assert resolver.resolve_id(once) == once

    def test_custom_roster(self) -> None:
        roster = RosterTable(
            [
                FranchiseIdentity(
                    primary_id="p-1",
                    display_name="Only Team",
                    abbreviation="ONE",
                    legacy_ids=frozenset({"raw-1"}),
                )
            ]
        )
        resolver = IdentityResolver(roster)

        assert resolver.resolve_id("raw-1") == "p-1"
        assert resolver.resolve("ffu-001").unresolved is True


class TestDisplayName:
    """Tests for display name and abbreviation selection."""

    def test_active_franchise_uses_current_name(self, resolver: IdentityResolver) -> None:
        name = resolver.display_name("ffu-004", "Blood, Sweat and Beers", year="2020")

        assert name == "Blood, Sweat, and Beers"

    def test_historical_view_uses_season_name(self, resolver: IdentityResolver) -> None:
        name = resolver.display_name(
            "ffu-004", "Blood, Sweat and Beers", year="2020", current=False
        )

        assert name == "Blood, Sweat and Beers"

    def test_historical_view_falls_back_to_roster_name_for_year(
        self, resolver: IdentityResolver
    ) -> None:
        assert resolver.display_name("ffu-007", year="2020", current=False) == "Purple Parade"

    def test_inactive_franchise_uses_season_name(self, resolver: IdentityResolver) -> None:
        assert resolver.display_name("ffu-h05", "Losers Again", year="2019") == "Losers Again"
        assert resolver.display_name("losers", year="2019") == "The Losers"

    def test_unknown_franchise(self, resolver: IdentityResolver) -> None:
        assert resolver.display_name("nobody", "Observed Name") == "Observed Name"
        assert resolver.display_name("nobody") == UNKNOWN_TEAM_NAME

    def test_abbreviation(self, resolver: IdentityResolver) -> None:
        assert resolver.abbreviation("331590801261883392", "OLD") == "STA"
        assert resolver.abbreviation("ffu-h08", "CASA") == "CASA"
        assert resolver.abbreviation("ffu-h08") == "TTC"
        assert resolver.abbreviation("nobody") == UNKNOWN_ABBREVIATION

    def test_team_name_for_year(self, resolver: IdentityResolver) -> None:
        assert resolver.team_name_for_year("ffu-009", "2020") == "Wisconsian Banana Bread"
        assert resolver.team_name_for_year("ffu-009", "2024") == "Fort Wayne Banana Bread"
        assert resolver.team_name_for_year("nobody", "2024") is None

    def test_has_historical_name(self, resolver: IdentityResolver) -> None:
        assert resolver.has_historical_name("ffu-036", "2018") is True
        assert resolver.has_historical_name("ffu-036", "2019") is False
        assert resolver.has_historical_name("nobody", "2018") is False
