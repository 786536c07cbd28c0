"""
Row model for the maintenance workbook.

Each sheet has a title row and a header row, then one row per route or
pitch. Site, convention and sector cells are merged in the source file,
so they are only filled on the first row they apply to; `SheetState`
carries them forward. `advance` is a pure step function so a whole sheet
is a left fold over its rows.
"""
from dataclasses import dataclass, replace
from typing import Optional

from klip.importer.labels import parse_convention

HEADER_ROWS = 2

COL_SITE = 0
COL_CONVENTION = 2
COL_SECTOR = 3
COL_ROUTE = 4
COL_NB_PITCHES = 8
COL_NB_BOLTS = 9


def cell_text(value) -> Optional[str]:
    """Cell as text; 12.0 (how Excel stores integers) becomes "12"."""
    if value is None:
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def cell_int(value, default: int) -> int:
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return int(value)
    text = cell_text(value)
    if text is None:
        return default
    try:
        return int(text.strip())
    except ValueError:
        return default


def _cell(raw: tuple, index: int):
    return raw[index] if index < len(raw) else None


@dataclass(frozen=True)
class SheetRow:
    site: Optional[str]
    convention: Optional[str]
    sector: Optional[str]
    label: Optional[str]
    nb_pitches: int = 1
    nb_bolts: int = 0

    @classmethod
    def from_cells(cls, raw) -> "SheetRow":
        raw = tuple(raw or ())
        return cls(
            site=cell_text(_cell(raw, COL_SITE)),
            convention=cell_text(_cell(raw, COL_CONVENTION)),
            sector=cell_text(_cell(raw, COL_SECTOR)),
            label=cell_text(_cell(raw, COL_ROUTE)),
            nb_pitches=cell_int(_cell(raw, COL_NB_PITCHES), 1),
            nb_bolts=cell_int(_cell(raw, COL_NB_BOLTS), 0),
        )

    @property
    def bolts(self) -> Optional[int]:
        # 0 means "not counted" in the source sheets
        return self.nb_bolts or None


def is_blank_row(raw) -> bool:
    return not raw or all(v is None or (isinstance(v, str) and not v.strip()) for v in raw)


@dataclass(frozen=True)
class SheetState:
    """Values carried from earlier rows of the same sheet."""

    site_name: Optional[str] = None
    convention: Optional[bool] = None
    sector_name: Optional[str] = None
    # Last route created in this sheet; "L2: 6c" rows attach pitches to it
    route_id: Optional[str] = None
    # Pitches created so far on route_id
    route_pitch_count: int = 0

    @property
    def has_location(self) -> bool:
        return bool(self.site_name and self.sector_name)


def carry_forward(state: SheetState, row: SheetRow) -> SheetState:
    """Apply the non-blank site/convention/sector cells of `row`."""
    changes = {}
    if row.site and row.site.strip():
        changes["site_name"] = row.site.strip()
    if row.convention:
        # A filled but unrecognised cell resets the flag to unknown
        changes["convention"] = parse_convention(row.convention)
    if row.sector and row.sector.strip():
        changes["sector_name"] = row.sector.strip()
    return replace(state, **changes) if changes else state


def with_route(state: SheetState, route_id: str) -> SheetState:
    return replace(state, route_id=route_id, route_pitch_count=1)


def with_extra_pitch(state: SheetState) -> SheetState:
    return replace(state, route_pitch_count=state.route_pitch_count + 1)
