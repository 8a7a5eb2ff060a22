from sqlalchemy import insert
import pandas as pd

from config.migration_config import DEFAULT_BATCH_SIZE
from migration.exceptions import LoadError
from utils.date_converter import to_target_timestamp
from utils.logger import get_logger

logger = get_logger('bulk_insert_employee_migration')


def _to_text(value):
    if value is None or pd.isna(value):
        return None
    return str(value)


def to_target_record(row: dict) -> dict:
    """
    Converts one extracted row to the EmployeeMigration column types.

    Raises:
        TypeError / ValueError: if a value cannot be converted.
    """
    return {
        "EmployeeID": int(row["EmployeeID"]),
        "NationalIDNumber": str(row["NationalIDNumber"]),
        "JobTitle": _to_text(row["JobTitle"]),
        "Department": _to_text(row["Department"]),
        "Shift": _to_text(row["Shift"]),
        "HireDate": to_target_timestamp(row["HireDate"]),
        "ModifiedDate": to_target_timestamp(row["ModifiedDate"]),
    }


class BulkInsertEmployeeMigration:
    """
    Loader class inserting the extracted employees into EmployeeMigration.
    All batches share a single transaction: either every row is committed
    or none is.
    """

    def __init__(self, engine, target_table, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        self.engine = engine
        self.target_table = target_table
        self.batch_size = batch_size

    def bulk_insert_employees(self, employees: pd.DataFrame) -> int:
        """
        Inserts the employees inside one transaction.

        Args:
            employees (pd.DataFrame): validated extraction rows.
        Returns:
            int: Number of inserted records.
        Raises:
            LoadError: the transaction was rolled back; the original error is the __cause__.
        """
        insert_statement = insert(self.target_table)
        inserted_count = 0
        try:
            # engine.begin() commits on normal exit and rolls back on any exception,
            # KeyboardInterrupt included
            with self.engine.begin() as connection:
                batch = []
                for row in employees.to_dict('records'):
                    batch.append(to_target_record(row))
                    if len(batch) >= self.batch_size:
                        connection.execute(insert_statement, batch)
                        inserted_count += len(batch)
                        logger.debug(f"Inserted batch of {len(batch)} rows ({inserted_count} so far).")
                        batch = []
                if batch:
                    connection.execute(insert_statement, batch)
                    inserted_count += len(batch)
            logger.info(f"Committed {inserted_count} rows into {self.target_table.fullname}.")
        except KeyboardInterrupt:
            logger.warning("Load interrupted before commit; transaction rolled back.")
            raise
        except Exception as e:
            logger.error(
                f"Error inserting employees after {inserted_count} rows; transaction rolled back: {e}"
            )
            raise LoadError(f"Load into {self.target_table.fullname} failed and was rolled back: {e}") from e

        return inserted_count
