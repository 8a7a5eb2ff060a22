from sqlalchemy.exc import SQLAlchemyError
import pandas as pd

from queries.migration_queries import build_verification_query
from migration.exceptions import VerificationError
from utils.logger import get_logger

logger = get_logger('migration_verifier')


class MigrationVerifier:
    """
    Reads EmployeeMigration back after the load committed.
    The checks are informational: anomalies are logged, never rolled back.
    """

    def __init__(self, engine, target_table):
        self.engine = engine
        self.target_table = target_table

    def read_target(self) -> pd.DataFrame:
        """
        Returns:
            pd.DataFrame: every row of the target table, in no particular order.
        Raises:
            VerificationError: if the table cannot be read.
        """
        query = build_verification_query(self.target_table)
        try:
            with self.engine.connect() as connection:
                result = connection.execute(query)
                columns = list(result.keys())
                rows = [tuple(row) for row in result]
        except SQLAlchemyError as e:
            logger.error(f"Error reading back {self.target_table.fullname}: {e}")
            raise VerificationError(f"Error reading back {self.target_table.fullname}: {e}") from e
        return pd.DataFrame(rows, columns=columns, dtype=object)

    def verify(self, expected_count: int = None):
        """
        Reads the target table and summarizes it.

        Args:
            expected_count (int): number of rows the load reported.
        Returns:
            tuple: (pd.DataFrame of the target rows, dict summary)
        """
        migrated = self.read_target()
        duplicate_ids = int(migrated['EmployeeID'].duplicated().sum()) if not migrated.empty else 0
        summary = {
            "row_count": len(migrated),
            "expected_count": expected_count,
            "duplicate_ids": duplicate_ids,
        }

        if expected_count is not None and expected_count != len(migrated):
            logger.warning(
                f"{self.target_table.fullname} holds {len(migrated)} rows, "
                f"{expected_count} were loaded."
            )
        if duplicate_ids:
            logger.warning(f"{duplicate_ids} duplicate EmployeeID values found in {self.target_table.fullname}.")

        logger.info(f"Verification read {len(migrated)} rows from {self.target_table.fullname}.")
        return migrated, summary
