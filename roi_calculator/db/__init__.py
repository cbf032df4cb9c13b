"""
Lead storage.
"""

from roi_calculator.db.database import engine, SessionLocal, get_db, init_db
from roi_calculator.db.models import Base, Lead

__all__ = ["engine", "SessionLocal", "get_db", "init_db", "Base", "Lead"]
