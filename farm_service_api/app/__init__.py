"""
Application package initializer.

The API is organised by layer: ``core`` (configuration, logging and
the SQLite handle), ``schemas`` (pydantic models), ``services`` (SQL
for each table) and ``api`` (FastAPI routers).  Each domain (users,
bookings, processing guides) has a module in every layer.
"""

from .main import app  # noqa: F401
