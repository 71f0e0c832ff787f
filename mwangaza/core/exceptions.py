"""
Error types shared by the store, the query engine and the services.
"""


class MwangazaError(Exception):
    """Base class for application errors"""


class MalformedQueryError(MwangazaError):
    """The mock engine could not recognise the verb or table of a statement"""


class StorageError(MwangazaError):
    """A value could not be serialised, parsed or written by the store"""


class RecordNotFoundError(MwangazaError):
    """No row with the requested id exists"""

    def __init__(self, table: str, record_id: str):
        self.table = table
        self.record_id = record_id
        super().__init__(f"No record with id {record_id!r} in {table}")


class ConcurrentUpdateError(MwangazaError):
    """A write was based on a stale version of the stored value"""

    def __init__(self, key: str, expected: int, actual: int):
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Stale write to {key}: expected version {expected}, found {actual}"
        )
