"""
Errors raised by the employee migration phases.
Wrapping errors keep the underlying driver/SQLAlchemy error as __cause__.
"""


class MigrationError(Exception):
    """Base class of every migration failure."""

    phase = "migration"


class SourceUnavailableError(MigrationError):
    """A source relation is missing or cannot be read. Nothing was mutated."""

    phase = "precondition"

    def __init__(self, message: str, missing_tables: list = None):
        super().__init__(message)
        self.missing_tables = missing_tables or []


class SchemaResetError(MigrationError):
    """Dropping or recreating the EmployeeMigration table or its index failed."""

    phase = "schema_reset"


class ExtractionError(MigrationError):
    """The extraction query failed or produced rows that cannot be loaded."""

    phase = "extraction"


class LoadError(MigrationError):
    """The load transaction failed and was rolled back."""

    phase = "load"


class VerificationError(MigrationError):
    """Reading the EmployeeMigration table back after commit failed."""

    phase = "verification"
