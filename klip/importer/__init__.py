from .labels import ParsedLabel, parse_convention, parse_route_label
from .rows import SheetRow, SheetState, carry_forward
from .store import TopoStore, resolve
from .workbook import ImportRun, SheetResult, WorkbookOpenError, import_workbook
