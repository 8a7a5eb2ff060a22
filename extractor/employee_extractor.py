from datetime import date
from sqlalchemy import inspect, select
from sqlalchemy.exc import SQLAlchemyError
import pandas as pd

from db.migration_tables import build_source_tables, TARGET_COLUMNS
from config.tables_names import source_tables
from queries.migration_queries import build_migration_query
from migration.exceptions import SourceUnavailableError, ExtractionError
from utils.logger import get_logger

logger = get_logger('employee_extractor')


class EmployeeMigrationExtractor:
    """
    Extractor class for the employees to migrate.
    Reads the four source relations and returns the denormalized rows.
    """

    def __init__(self, engine, hire_date_cutoff: date, table_names: dict = source_tables):
        self.engine = engine
        self.hire_date_cutoff = hire_date_cutoff
        self.table_names = table_names
        self.source = build_source_tables(table_names)

    def check_source_tables(self):
        """
        Verifies that every source relation exists and exposes the selected columns.
        Runs before anything is mutated.

        Raises:
            SourceUnavailableError: if a relation is missing or cannot be read.
        """
        schema = self.table_names.get("schema")
        try:
            inspector = inspect(self.engine)
            missing = [
                table.name for table in self.source.values()
                if not inspector.has_table(table.name, schema=schema)
            ]
        except SQLAlchemyError as e:
            logger.error(f"Unable to inspect source relations: {e}")
            raise SourceUnavailableError(f"Unable to inspect source relations: {e}") from e

        if missing:
            msg = f"Missing source relations: {', '.join(missing)}"
            logger.error(msg)
            raise SourceUnavailableError(msg, missing_tables=missing)

        # Probe every relation with an empty read so missing columns or
        # permission problems surface before the target is reset
        try:
            with self.engine.connect() as connection:
                for table in self.source.values():
                    connection.execute(select(*table.c).limit(0)).all()
        except SQLAlchemyError as e:
            logger.error(f"Source relations are not readable: {e}")
            raise SourceUnavailableError(f"Source relations are not readable: {e}") from e

        logger.info(f"All {len(self.source)} source relations are available.")

    def extract_data(self) -> pd.DataFrame:
        """
        Runs the extraction query.

        Returns:
            pd.DataFrame: one row per employee hired on or after the cutoff, columns TARGET_COLUMNS.
            The frame has object dtype so source values are kept exactly as returned by the driver.
        """
        query = build_migration_query(self.source, self.hire_date_cutoff)
        try:
            with self.engine.connect() as connection:
                rows = connection.execute(query).all()
        except SQLAlchemyError as e:
            logger.error(f"Error extracting employees to migrate: {e}")
            raise ExtractionError(f"Error extracting employees to migrate: {e}") from e

        employees = pd.DataFrame([tuple(row) for row in rows], columns=TARGET_COLUMNS, dtype=object)
        logger.info(f"Extracted {len(employees)} employees hired on or after {self.hire_date_cutoff.isoformat()}.")
        return employees
