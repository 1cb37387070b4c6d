"""Franchise roster table.

Every league member is a ``FranchiseIdentity`` keyed by a stable ``ffu-NNN``
primary id. Members carry the ids they have been known by on each platform:
the current platform's numeric user id, the legacy platform username, and
synthetic ``historical-*`` placeholders for members who left before the
current platform was adopted.

Example:
    >>> from ffu_stats.identity.roster import DEFAULT_ROSTER
    >>> DEFAULT_ROSTER.by_abbreviation("sta").display_name
    'The Stallions'
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from ffu_stats.types import FranchiseId, RawId, Year

# =============================================================================
# Exceptions
# =============================================================================


class IdentityError(Exception):
    """Base exception for roster and identity errors."""


class DuplicateIdentityError(IdentityError):
    """Raised when an id would map to more than one franchise."""


# =============================================================================
# Data Classes
# =============================================================================


@dataclass(frozen=True)
class FranchiseIdentity:
    """One league member across renames and platform changes.

    Attributes:
        primary_id: Canonical id, stable for the franchise's lifetime.
        display_name: Current team name.
        abbreviation: Current short code.
        is_active: Whether the franchise still fields a team.
        joined_year: First season the member played.
        legacy_ids: Platform-specific ids that resolve to this franchise.
        historical_names: Team name used in a given year, where it differed.
    """

    primary_id: FranchiseId
    display_name: str
    abbreviation: str
    is_active: bool = True
    joined_year: int | None = None
    legacy_ids: frozenset[RawId] = frozenset()
    historical_names: Mapping[Year, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not self.primary_id or not self.primary_id.strip():
            raise IdentityError("primary_id cannot be empty")
        if self.primary_id in self.legacy_ids:
            raise IdentityError(
                f"{self.primary_id} lists its own primary id as a legacy id"
            )
        object.__setattr__(self, "legacy_ids", frozenset(self.legacy_ids))
        object.__setattr__(
            self, "historical_names", MappingProxyType(dict(self.historical_names))
        )

    def with_legacy_id(self, raw_id: RawId) -> FranchiseIdentity:
        """Return a copy that also answers to ``raw_id``."""
        return replace(self, legacy_ids=self.legacy_ids | {raw_id})

    def renamed(
        self,
        display_name: str,
        abbreviation: str | None = None,
        year: Year | None = None,
    ) -> FranchiseIdentity:
        """Return a copy carrying a new display name.

        When ``year`` is given the outgoing name is kept as that year's
        historical name.
        """
        names = dict(self.historical_names)
        if year is not None:
            names.setdefault(str(year), self.display_name)
        return replace(
            self,
            display_name=display_name,
            abbreviation=abbreviation or self.abbreviation,
            historical_names=names,
        )

    def name_for_year(self, year: Year) -> str:
        """Team name used in ``year``, falling back to the current name."""
        return self.historical_names.get(str(year), self.display_name)


class RosterTable:
    """Immutable lookup table of franchises.

    Raises:
        DuplicateIdentityError: If two franchises share a primary id, or a
            legacy id maps to more than one franchise or collides with
            another franchise's primary id.
    """

    def __init__(self, franchises: Iterable[FranchiseIdentity]) -> None:
        by_primary: dict[FranchiseId, FranchiseIdentity] = {}
        by_legacy: dict[RawId, FranchiseId] = {}

        for franchise in franchises:
            if franchise.primary_id in by_primary:
                raise DuplicateIdentityError(
                    f"Duplicate primary id '{franchise.primary_id}'"
                )
            by_primary[franchise.primary_id] = franchise

        for franchise in by_primary.values():
            for raw_id in franchise.legacy_ids:
                if raw_id in by_primary:
                    raise DuplicateIdentityError(
                        f"Legacy id '{raw_id}' of {franchise.primary_id} "
                        "is another franchise's primary id"
                    )
                owner = by_legacy.get(raw_id)
                if owner is not None and owner != franchise.primary_id:
                    raise DuplicateIdentityError(
                        f"Legacy id '{raw_id}' maps to both {owner} "
                        f"and {franchise.primary_id}"
                    )
                by_legacy[raw_id] = franchise.primary_id

        self._by_primary = MappingProxyType(by_primary)
        self._by_legacy = MappingProxyType(by_legacy)

    def __len__(self) -> int:
        return len(self._by_primary)

    def __iter__(self) -> Iterator[FranchiseIdentity]:
        return iter(self._by_primary.values())

    def __contains__(self, primary_id: object) -> bool:
        return primary_id in self._by_primary

    def get(self, primary_id: FranchiseId) -> FranchiseIdentity | None:
        return self._by_primary.get(primary_id)

    def primary_for_legacy(self, raw_id: RawId) -> FranchiseId | None:
        return self._by_legacy.get(raw_id)

    def by_abbreviation(self, abbreviation: str) -> FranchiseIdentity | None:
        """Find a franchise by abbreviation, ignoring case."""
        wanted = (abbreviation or "").strip().lower()
        if not wanted:
            return None
        for franchise in self._by_primary.values():
            if franchise.abbreviation.lower() == wanted:
                return franchise
        return None

    def active(self) -> list[FranchiseIdentity]:
        return [f for f in self._by_primary.values() if f.is_active]

    def joined_in(self, year: int) -> list[FranchiseIdentity]:
        return [f for f in self._by_primary.values() if f.joined_year == year]

    def updated(self, franchise: FranchiseIdentity) -> RosterTable:
        """Return a new table with ``franchise`` added or replaced."""
        merged = dict(self._by_primary)
        merged[franchise.primary_id] = franchise
        return RosterTable(merged.values())


def _f(
    primary_id: str,
    platform_id: str,
    name: str,
    abbreviation: str,
    joined: int,
    active: bool = True,
    legacy_username: str | None = None,
    names: dict[str, str] | None = None,
) -> FranchiseIdentity:
    legacy = {platform_id}
    if legacy_username:
        legacy.add(legacy_username)
    return FranchiseIdentity(
        primary_id=primary_id,
        display_name=name,
        abbreviation=abbreviation,
        is_active=active,
        joined_year=joined,
        legacy_ids=frozenset(legacy),
        historical_names=names or {},
    )


DEFAULT_ROSTER = RosterTable(
    [
        _f("ffu-001", "331590801261883392", "The Stallions", "STA", 2020, legacy_username="stallions", names={"2020": "The Stallions"}),
        _f("ffu-002", "396808818157182976", "FFUcked Up", "FU", 2019),
        _f("ffu-003", "398574272387297280", "Dmandre161", "DMAN", 2021),
        _f("ffu-004", "398576262546735104", "Blood, Sweat, and Beers", "BEER", 2020, legacy_username="beers", names={"2020": "Blood, Sweat and Beers"}),
        _f("ffu-005", "467404039059927040", "Malibu Leopards", "MLBU", 2021),
        _f("ffu-006", "470715135581745152", "Pottsville Maroons", "POTT", 2021),
        _f("ffu-007", "705642514408886272", "The Dark Knights", "BATS", 2021, names={"2020": "Purple Parade"}),
        _f("ffu-008", "710981985102802944", "Frank's Little Beauties", "FLB", 2021),
        _f("ffu-009", "727368657923063808", "Fort Wayne Banana Bread", "FWBB", 2020, legacy_username="bread", names={"2020": "Wisconsian Banana Bread"}),
        _f("ffu-010", "729741648338210816", "ChicagoPick6", "CP6", 2020, legacy_username="picks", names={"2020": "Chicago Pick 6s"}),
        _f("ffu-011", "798327505219096576", "TKO Blow", "TKO", 2021),
        _f("ffu-012", "860973514839199744", "Show Biz Kitten", "SBK", 2021),
        _f("ffu-013", "862142522036703232", "Boca Ciega Banditos", "BOCA", 2021),
        _f("ffu-014", "84604928349585408", "The (Teddy) Bears", "TTB", 2021),
        _f("ffu-015", "398552306884345856", "arcorey15", "ARCO", 2021),
        _f("ffu-016", "578691097983754240", "MustachePapi", "MUST", 2021),
        _f("ffu-017", "602712418325442560", "The Riveters", "RVTR", 2021),
        _f("ffu-018", "804551335088361472", "Crawfordsville's Finest", "CRAW", 2021),
        _f("ffu-019", "821067488811909120", "LegendsRise", "RISE", 2021),
        _f("ffu-020", "856248808915480576", "The Tooth Tuggers", "TT", 2021),
        _f("ffu-021", "864966364937461760", "Nighthawks", "HAWK", 2021),
        _f("ffu-022", "865078270985629696", "The Gaston Ramblers", "TGR", 2021),
        _f("ffu-023", "84006772809285632", "The Minutemen", "MMEN", 2020, legacy_username="mmen", names={"2020": "The Minutemen"}),
        _f("ffu-024", "325766631336714240", "Act More Stupidly", "AMS", 2020, legacy_username="swaggy", names={"2020": "Goat Emoji II"}),
        _f("ffu-025", "386791325690994688", "Indianapolis Aztecs", "AZTC", 2020, legacy_username="aztecs"),
        _f("ffu-026", "462383465753473024", "Raging Rhinos", "RAGE", 2020, legacy_username="rhinos", names={"2020": "Currier Island Raging Rhinos"}),
        _f("ffu-027", "465884883869233152", "CamDelphia", "CAM", 2021),
        _f("ffu-028", "507633950666584064", "El Guapo Puto", "EGP", 2021),
        _f("ffu-029", "508719015656099840", "Team Pancake", "TP", 2021),
        _f("ffu-030", "527884868880531456", "Johnkshire Cats", "CATS", 2021),
        _f("ffu-031", "726572095210930176", "Team Dogecoin", "DOGE", 2020, legacy_username="doge", names={"2020": "Team Dogecoin"}),
        _f("ffu-032", "731211092713402368", "Team Dogecoin", "DOGE", 2021),
        _f("ffu-033", "639877229681147904", "He Hate Me", "HATE", 2021),
        _f("ffu-034", "664739261735591936", "CENATION", "CENA", 2021),
        _f("ffu-035", "715362669380591616", "ZBoser", "ZBOS", 2021),
        _f("ffu-036", "727366898383122432", "Big Ten Bandits", "B1G", 2021, names={"2018": "Disney's PikskinSlingers"}),
        _f("ffu-037", "865323291064291328", "Head Cow Always Grazing", "HCAG", 2021),
        _f("ffu-038", "1124071986805829632", "Odin's Herr", "ODIN", 2024),
        _f("ffu-039", "1133491276038426624", "Bucky Badgers", "BDGR", 2024),
        _f("ffu-040", "1133492104077946880", "The Sha'Dynasty", "NSTY", 2024),
        _f("ffu-041", "399322397750124544", "Team Jacamart", "JACA", 2021),
        _f("ffu-042", "472876832719368192", "Stark Direwolves", "STRK", 2021),
        _f("ffu-043", "399297882890440704", "Circle City Phantoms", "CCP", 2021),
        _f("ffu-044", "467553389673181184", "Shton's Strikers", "SHTN", 2021),
        _f("ffu-045", "599711204499312640", "Team Black Death", "TBD", 2021),
        _f("ffu-046", "739275676649144320", "Birds of War", "BOW", 2021),
        _f("ffu-047", "563223565497249792", "bstarrr", "BSTA", 2021),
        _f("ffu-048", "1003144735223099392", "dewdoc", "DEW", 2021),
        _f("ffu-049", "726584695151734784", "The Ducklings", "DUCK", 2021),
        _f("ffu-050", "729571025750208512", "chetmaynard", "CHET", 2021),
        _f("ffu-051", "399379352174768128", "Stone Cold Steve Irwins", "SCSI", 2020, legacy_username="scsi", names={"2020": "Stone Cold Steve Irwins"}),
        # Joined for 2025
        _f("ffu-052", "1132015239492591616", "The Steel Tigers", "STEEL", 2025),
        _f("ffu-053", "1256013880681832448", "Jawn of Arc", "JAWN", 2025),
        _f("ffu-054", "1259227854642622464", "The Underdogs", "UDOGS", 2025),
        _f("ffu-055", "797222154151247872", "Dawn Island Straw Hats", "STRAW", 2025),
        _f("ffu-056", "866063012375719936", "The Inferno Swarm", "SWARM", 2025),
        # Legacy-platform members who never moved to the current platform
        _f("ffu-h01", "historical-naptown-makos", "Naptown Makos", "NM", 2019, active=False, legacy_username="makos", names={"2019": "Naptown Makos"}),
        _f("ffu-h02", "historical-speedway-ritual-cog", "Speedway's Ritual Cog", "SRC", 2018, active=False, legacy_username="cog", names={"2018": "Speedway's Ritual Cog", "2019": "Speedway's Ritual Cog"}),
        _f("ffu-h03", "historical-well-done-stakes", "The Well Done Stakes", "WDS", 2018, active=False, legacy_username="twds", names={"2018": "The Well Done Stakes"}),
        _f("ffu-h04", "historical-durham-handsome-devils", "Durham Handsome Devils", "DHD", 2018, active=False, legacy_username="devils", names={"2018": "Durham Handsome Devils"}),
        _f("ffu-h05", "historical-the-losers", "The Losers", "TL", 2018, active=False, legacy_username="losers", names={"2018": "The Losers", "2019": "The Losers"}),
        _f("ffu-h06", "historical-gingy-flame", "Gingy Flame", "GF", 2018, active=False, legacy_username="flame", names={"2018": "Gingy Flame", "2019": "Gingy Flame"}),
        _f("ffu-h07", "historical-not-your-average-joes", "Not Your Average Joes", "NYAJ", 2018, active=False, legacy_username="joes", names={"2018": "Not Your Average Joes"}),
        _f("ffu-h08", "historical-team-team-casa", "Team Team Casa", "TTC", 2018, active=False, legacy_username="casa", names={"2018": "Team Team Casa"}),
    ]
)
