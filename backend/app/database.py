"""
Database session dependency for the backend.

Re-exports from devconnect.db. Initialization is handled explicitly in
main.py startup, not at import time.
"""

from devconnect.db import Base, db, get_db

__all__ = ["Base", "db", "get_db"]
