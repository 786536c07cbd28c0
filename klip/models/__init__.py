from .user import User
from .crag import Crag
from .sector import Sector
from .route import Route
from .pitch import Pitch
from .report import Report

__all__ = ["User", "Crag", "Sector", "Route", "Pitch", "Report"]
