"""
Key-value store - Database Models

One row per store key. The value column holds the JSON document for the key
(a list of rows for tables, an object for counters).
"""

from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func

from mwangaza.db.database import Base


class StoreEntry(Base):
    """JSON document stored under a fixed key"""
    __tablename__ = "store_entries"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)  # NULL marks a removed key; the row keeps its version
    version = Column(Integer, nullable=False, default=1)  # Bumped on every write
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
