from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class MigrationState(str, Enum):
    NOT_STARTED = "NOT_STARTED"
    SCHEMA_RESET = "SCHEMA_RESET"
    EXTRACTED = "EXTRACTED"
    COMMITTED = "COMMITTED"
    ROLLED_BACK = "ROLLED_BACK"
    VERIFIED = "VERIFIED"
    # Precondition, reset or extraction failure before the load transaction opened
    FAILED = "FAILED"
    # Load committed, read-back failed
    VERIFICATION_FAILED = "VERIFICATION_FAILED"


@dataclass
class MigrationResult:
    hire_date_cutoff: date
    dry_run: bool = False
    state: MigrationState = MigrationState.NOT_STARTED
    rows_extracted: int = 0
    rows_loaded: int = 0
    verification: Any = None  # pd.DataFrame of the target rows, or the preview on dry runs
    verification_summary: dict = field(default_factory=dict)
    verification_error: Optional[Exception] = None
    error: Optional[Exception] = None

    @property
    def committed(self) -> bool:
        return self.state in (
            MigrationState.COMMITTED,
            MigrationState.VERIFIED,
            MigrationState.VERIFICATION_FAILED,
        )

    @property
    def succeeded(self) -> bool:
        if self.dry_run:
            return self.state == MigrationState.EXTRACTED
        return self.state == MigrationState.VERIFIED

    def to_dict(self):
        return {
            "hire_date_cutoff": self.hire_date_cutoff.isoformat(),
            "dry_run": self.dry_run,
            "state": self.state.value,
            "rows_extracted": self.rows_extracted,
            "rows_loaded": self.rows_loaded,
            "verification_summary": self.verification_summary,
            "verification_error": str(self.verification_error) if self.verification_error else None,
            "error": str(self.error) if self.error else None,
        }
