"""
This module contains the EmployeeMigrationProcessor class.

The processor runs the full-refresh migration of employees into the
EmployeeMigration table. The phases run strictly one after the other:
- Precondition: the four source relations must exist, nothing is touched otherwise.
- Schema Reset: EmployeeMigration and its job title index are dropped and recreated.
  This discards the output of every previous run.
- Extraction: employees hired on or after the cutoff are joined to their resolved
  department/shift assignment and validated (no duplicate EmployeeID).
- Transactional Load: all rows are inserted in one transaction. Any failure rolls
  the transaction back and is re-raised as LoadError.
- Verification: the table is read back. A read failure is reported on the result,
  the committed load is kept.

Run states:
    NOT_STARTED -> SCHEMA_RESET -> EXTRACTED -> (COMMITTED | ROLLED_BACK) -> VERIFIED
    NOT_STARTED | SCHEMA_RESET -> FAILED
        precondition, reset or extraction error; the load transaction was never opened.
    COMMITTED -> VERIFICATION_FAILED
        the load is committed but reading it back failed.
    NOT_STARTED -> EXTRACTED
        dry run; nothing is reset or written.
Every run starts again from NOT_STARTED; there is no resumption.

The run assumes it is the only writer of EmployeeMigration while it executes.
No lock is taken beyond what the load transaction holds.
"""
from datetime import date

from config.migration_config import HIRE_DATE_CUTOFF, BATCH_SIZE
from config.tables_names import source_tables, target_tables
from extractor.employee_extractor import EmployeeMigrationExtractor
from loader.target_schema_manager import TargetSchemaManager
from loader.bulk_insert_employee_migration import BulkInsertEmployeeMigration
from validator.migration_rows_validator import MigrationRowsValidator
from migration.migration_verifier import MigrationVerifier
from migration.migration_result import MigrationResult, MigrationState
from migration.exceptions import MigrationError, LoadError, VerificationError
from utils.date_converter import parse_cutoff_date
from utils.send_except_email import send_error_notification
from utils.logger import get_logger

Logger = get_logger("migration_processing")


class EmployeeMigrationProcessor:
    """
    Processor class running one employee migration.

    Args:
        engine: SQLAlchemy engine of the data store holding source and target relations.
        hire_date_cutoff (date): employees hired on or after this date are migrated
            (default: MIGRATION_HIRE_DATE_CUTOFF, 2008-01-01).
        batch_size (int): rows per INSERT statement inside the load transaction
            (default: MIGRATION_BATCH_SIZE, 500).
        dry_run (bool): extract and validate only; the target table is not touched.
        source_table_names (dict): see config.tables_names.source_tables.
        target_table_names (dict): see config.tables_names.target_tables.
        notify_on_failure (bool): send an error e-mail when the run fails (if SMTP is configured).
    """

    def __init__(
        self,
        engine,
        hire_date_cutoff: date = None,
        batch_size: int = None,
        dry_run: bool = False,
        source_table_names: dict = source_tables,
        target_table_names: dict = target_tables,
        notify_on_failure: bool = True,
    ):
        if hire_date_cutoff is None:
            hire_date_cutoff = parse_cutoff_date(HIRE_DATE_CUTOFF)
        if batch_size is None:
            batch_size = int(BATCH_SIZE)
        self.engine = engine
        self.hire_date_cutoff = hire_date_cutoff
        self.dry_run = dry_run
        self.notify_on_failure = notify_on_failure

        self.extractor = EmployeeMigrationExtractor(engine, hire_date_cutoff, source_table_names)
        self.schema_manager = TargetSchemaManager(engine, target_table_names)
        self.loader = BulkInsertEmployeeMigration(engine, self.schema_manager.target, batch_size)
        self.verifier = MigrationVerifier(engine, self.schema_manager.target)

        self.state = MigrationState.NOT_STARTED
        self.result = None

    def _transition(self, state: MigrationState):
        Logger.info(f"Migration state: {self.state.value} -> {state.value}")
        self.state = state
        self.result.state = state

    def _notify(self, error: Exception):
        if not self.notify_on_failure:
            return
        send_error_notification(
            error_message=str(error),
            error_type=f"Employee migration {getattr(error, 'phase', 'migration')} error",
            exception=error,
            context={
                "state": self.state.value,
                "hire_date_cutoff": self.hire_date_cutoff.isoformat(),
                "target_table": self.schema_manager.target.fullname,
            },
        )

    def _extract(self):
        employees = self.extractor.extract_data()
        employees = MigrationRowsValidator(employees).validate()
        self.result.rows_extracted = len(employees)
        return employees

    def run(self) -> MigrationResult:
        """
        Runs every phase.

        Returns:
            MigrationResult: state VERIFIED on success, VERIFICATION_FAILED when only the
            read-back failed, EXTRACTED for a dry run.
        Raises:
            SourceUnavailableError, SchemaResetError, ExtractionError: nothing was loaded.
            LoadError: the load transaction was rolled back.
        """
        self.state = MigrationState.NOT_STARTED
        self.result = MigrationResult(hire_date_cutoff=self.hire_date_cutoff, dry_run=self.dry_run)
        Logger.info(
            f"Starting employee migration (cutoff={self.hire_date_cutoff.isoformat()}, dry_run={self.dry_run})"
        )

        try:
            self.extractor.check_source_tables()

            if self.dry_run:
                employees = self._extract()
                self._transition(MigrationState.EXTRACTED)
                self.result.verification = employees
                self.result.verification_summary = {
                    "row_count": len(employees), "expected_count": None, "duplicate_ids": 0,
                }
                Logger.info(f"Dry run: {len(employees)} employees would be migrated; nothing was written.")
                return self.result

            self.schema_manager.reset_target_schema()
            self._transition(MigrationState.SCHEMA_RESET)

            employees = self._extract()
            self._transition(MigrationState.EXTRACTED)
        except MigrationError as e:
            Logger.error(f"Migration failed during {e.phase}: {e}")
            self.result.error = e
            self._transition(MigrationState.FAILED)
            self._notify(e)
            raise

        try:
            self.result.rows_loaded = self.loader.bulk_insert_employees(employees)
        except (LoadError, KeyboardInterrupt) as e:
            self.result.error = e
            self._transition(MigrationState.ROLLED_BACK)
            if isinstance(e, LoadError):
                self._notify(e)
            raise
        self._transition(MigrationState.COMMITTED)

        try:
            migrated, summary = self.verifier.verify(expected_count=self.result.rows_loaded)
        except VerificationError as e:
            # The load is committed; report the read failure without undoing it
            Logger.error(f"Migration committed but verification failed: {e}")
            self.result.verification_error = e
            self._transition(MigrationState.VERIFICATION_FAILED)
            self._notify(e)
            return self.result

        self.result.verification = migrated
        self.result.verification_summary = summary
        self._transition(MigrationState.VERIFIED)
        Logger.info(f"Employee migration completed: {self.result.rows_loaded} rows migrated.")
        return self.result


def run_employee_migration(engine, **kwargs) -> MigrationResult:
    """
    Convenience wrapper used by the Airflow DAG.
    """
    return EmployeeMigrationProcessor(engine, **kwargs).run()
