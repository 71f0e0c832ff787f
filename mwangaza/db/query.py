"""
Mock query engine over the key-value store.

Understands just enough SQL to serve the services: the verb is the first
word of the statement, the table is found after FROM / INTO / UPDATE, and a
single ``WHERE <column> = ?`` predicate filters SELECT results by equality
against the first parameter. INSERT, UPDATE and DELETE are acknowledged but
never touch storage; writes go through ``mwangaza.db.repository``.
"""

import asyncio
import logging
import re
from typing import Any, Dict, List, Optional, Sequence

from mwangaza.core.config import settings
from mwangaza.core.exceptions import MalformedQueryError
from mwangaza.db.store import KeyValueStore, get_store

logger = logging.getLogger(__name__)

# Mock database tables
DB_KEYS = {
    "clients": "db_clients",
    "parents": "db_parents",
    "home_visits": "db_home_visits",
}

# Keys outside the three query tables
ACADEMIC_RECORDS_KEY = "db_academic_records"
ADMISSION_SEQUENCES_KEY = "db_admission_sequences"
STAFF_KEY = "db_staff"

# Cleared together with the tables because they describe clients
DERIVED_KEYS = (ACADEMIC_RECORDS_KEY, ADMISSION_SEQUENCES_KEY)

# Map DB column names to row property names
COLUMN_MAPPINGS = {
    "client_id": "clientId",
    "admission_number": "admissionNumber",
    "id": "id",
}

TABLE_PATTERNS = {
    "SELECT": re.compile(r"\bFROM\s+([a-zA-Z_]+)", re.IGNORECASE),
    "INSERT": re.compile(r"\bINTO\s+([a-zA-Z_]+)", re.IGNORECASE),
    "UPDATE": re.compile(r"^\s*UPDATE\s+([a-zA-Z_]+)", re.IGNORECASE),
    "DELETE": re.compile(r"\bFROM\s+([a-zA-Z_]+)", re.IGNORECASE),
}

WHERE_PATTERN = re.compile(r"WHERE\s+([a-zA-Z_]+)\s*=\s*\?", re.IGNORECASE)


class QueryEngine:
    """Emulates a relational store on top of a KeyValueStore"""

    def __init__(self, store: KeyValueStore, latency: float = 0.0):
        self.store = store
        self.latency = latency

    async def test_connection(self) -> bool:
        """Create any missing table and report success"""
        try:
            self.initialize()
            logger.info("Mock database connected successfully")
            return True
        except Exception:
            logger.exception("Database connection failed")
            return False

    def initialize(self) -> None:
        for key in DB_KEYS.values():
            if not self.store.contains(key):
                logger.info("Initializing mock table %s", key)
                self.store.set(key, [])

    def reset_database(self) -> None:
        for key in list(DB_KEYS.values()) + list(DERIVED_KEYS):
            self.store.remove(key)
        self.initialize()

    def table_counts(self) -> Dict[str, int]:
        return {table: len(self.store.get(key, [])) for table, key in DB_KEYS.items()}

    async def query(self, sql: str, params: Optional[Sequence[Any]] = None) -> Any:
        logger.debug("Executing mock query: %s %s", sql, params)

        # Simulate database latency
        await asyncio.sleep(self.latency)

        try:
            words = sql.split()
            operation = words[0].upper() if words else ""
            if operation not in TABLE_PATTERNS:
                raise MalformedQueryError(f"Unsupported operation: {operation or sql!r}")

            key = self._table_key(operation, sql)
            if operation == "SELECT":
                return self._select(key, sql, params)
            if operation == "INSERT":
                return {"affectedRows": 1, "insertId": "mock-id"}
            return {"affectedRows": 1}
        except Exception:
            logger.error("Error executing query: %s", sql)
            raise

    def _table_key(self, operation: str, sql: str) -> str:
        match = TABLE_PATTERNS[operation].search(sql)
        table = match.group(1).lower() if match else None
        if table not in DB_KEYS:
            raise MalformedQueryError(f"Unknown table in {operation} query")
        return DB_KEYS[table]

    def _select(self, key: str, sql: str, params: Optional[Sequence[Any]]) -> List[dict]:
        rows = self.store.get(key, [])

        match = WHERE_PATTERN.search(sql)
        if not match or not params:
            return rows

        column = match.group(1)
        field = COLUMN_MAPPINGS.get(column, column)
        value = params[0]
        # Legacy rows may still use the snake_case column name
        return [
            row for row in rows
            if (row[field] if field in row else row.get(column)) == value
        ]


def get_query_engine() -> QueryEngine:
    return QueryEngine(get_store(), settings.QUERY_LATENCY_MS / 1000)


async def test_connection() -> bool:
    return await get_query_engine().test_connection()


async def query(sql: str, params: Optional[Sequence[Any]] = None) -> Any:
    return await get_query_engine().query(sql, params)


def reset_database() -> None:
    """Clear and re-create the tables (test setup)"""
    get_query_engine().reset_database()
