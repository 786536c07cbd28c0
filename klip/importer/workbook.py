import zipfile
from dataclasses import dataclass
from itertools import islice
from typing import Iterable, Optional

from flask import current_app
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from klip.importer.labels import parse_route_label
from klip.importer.rows import (
    HEADER_ROWS,
    SheetRow,
    SheetState,
    carry_forward,
    is_blank_row,
    with_extra_pitch,
    with_route,
)
from klip.importer.store import TopoStore, resolve


class WorkbookOpenError(Exception):
    pass


@dataclass
class SheetResult:
    name: str
    routes: int = 0
    pitches: int = 0
    skipped: int = 0


class ImportRun:
    """
    One import of a workbook into the store.

    Crag and sector ids are cached for the whole run; the row state
    (current site, sector, route) restarts with every sheet.
    """

    def __init__(self, store: TopoStore, header_sentinel: str = "VOIE", logger=None):
        self.store = store
        self.header_sentinel = header_sentinel
        self.logger = logger or current_app.logger
        self.crag_cache: dict = {}
        self.sector_cache: dict = {}

    def _crag_id(self, state: SheetState) -> str:
        name = state.site_name
        crag_id, self.crag_cache = resolve(
            self.crag_cache,
            name,
            find=lambda: self.store.find_crag_id(name),
            # first row seen for a crag decides its convention flag
            create=lambda: self.store.create_crag(name, state.convention),
        )
        return crag_id

    def _sector_id(self, crag_id: str, name: str) -> str:
        sector_id, self.sector_cache = resolve(
            self.sector_cache,
            (crag_id, name),
            find=lambda: self.store.find_sector_id(crag_id, name),
            create=lambda: self.store.create_sector(crag_id, name),
        )
        return sector_id

    def process_row(self, state: SheetState, row: SheetRow, result: SheetResult) -> SheetState:
        state = carry_forward(state, row)

        label = (row.label or "").strip()
        if not label or self.header_sentinel in label:
            return state

        if not state.has_location:
            self.logger.warning("  Skipping row: missing site or sector for route %r", label)
            result.skipped += 1
            return state

        crag_id = self._crag_id(state)
        sector_id = self._sector_id(crag_id, state.sector_name)

        parsed = parse_route_label(label)

        # "L2: 6c" under a route: another pitch of that route
        if parsed.pitch_number and not parsed.name and state.route_id:
            self.store.create_pitch(
                state.route_id,
                position=state.route_pitch_count + 1,
                cotation=parsed.grade,
                nb_bolts=row.bolts,
            )
            result.pitches += 1
            return with_extra_pitch(state)

        if parsed.name:
            route_id = self.store.create_route(sector_id, parsed.number, parsed.name)
            self.store.create_pitch(
                route_id,
                position=1,
                cotation=parsed.grade,
                nb_bolts=row.bolts,
            )
            result.routes += 1
            result.pitches += 1
            return with_route(state, route_id)

        self.logger.warning("  Skipping row: cannot determine route for %r", label)
        result.skipped += 1
        return state

    def import_rows(self, sheet_name: str, rows: Iterable) -> SheetResult:
        """Rows are processed strictly in sheet order."""
        self.logger.info("Processing sheet: %s", sheet_name)
        result = SheetResult(name=sheet_name)

        state = SheetState()
        for raw in islice(rows, HEADER_ROWS, None):
            if is_blank_row(raw):
                continue
            state = self.process_row(state, SheetRow.from_cells(raw), result)

        self.logger.info("  Created %d routes, %d pitches", result.routes, result.pitches)
        return result


def open_workbook(path):
    try:
        return load_workbook(filename=path, read_only=True, data_only=True)
    except (OSError, InvalidFileException, KeyError, zipfile.BadZipFile) as exc:
        # KeyError/BadZipFile come out of corrupt .xlsx archives
        raise WorkbookOpenError(f"Cannot open workbook {path}: {exc}") from exc


def import_workbook(
    path,
    store: Optional[TopoStore] = None,
    skip_sheets: Iterable[str] = ("Sheet2",),
    header_sentinel: str = "VOIE",
    logger=None,
) -> list[SheetResult]:
    """
    Wipe the topo tables and rebuild them from the workbook.

    Destructive by design: callers must have been told explicitly to
    start from an empty topo. Each sheet is committed on its own; any
    failure rolls back the current sheet and propagates.
    """
    logger = logger or current_app.logger
    store = store or TopoStore()
    skip = set(skip_sheets or ())

    logger.info("Reading file: %s", path)
    wb = open_workbook(path)

    try:
        logger.info("Found %d sheets", len(wb.worksheets))

        logger.info("Clearing existing data...")
        store.wipe()

        run = ImportRun(store, header_sentinel=header_sentinel, logger=logger)
        results = []
        # Chart sheets are not in worksheets and have no rows
        for ws in wb.worksheets:
            if ws.title in skip:
                continue
            try:
                results.append(run.import_rows(ws.title, ws.iter_rows(values_only=True)))
                store.commit()
            except Exception:
                store.rollback()
                raise
    finally:
        wb.close()

    counts = store.counts()
    logger.info(
        "Import summary: crags=%d sectors=%d routes=%d pitches=%d",
        counts["crags"], counts["sectors"], counts["routes"], counts["pitches"],
    )
    return results
