from utils.logger import get_logger
from db.migration_tables import TARGET_COLUMNS, TARGET_STRING_LENGTHS, TARGET_REQUIRED_COLUMNS
from migration.exceptions import ExtractionError
import pandas as pd

logger = get_logger('migration_rows_validator')


class MigrationRowsValidator:
    """
    Validates the extracted rows before they are loaded.
    Any violation fails the run before a single row is inserted.
    """

    def __init__(self, employees: pd.DataFrame):
        self.employees = employees

    def _check_columns(self):
        missing = [column for column in TARGET_COLUMNS if column not in self.employees.columns]
        if missing:
            return [f"Missing columns: {', '.join(missing)}"]
        return []

    def _check_duplicates(self):
        ids = self.employees['EmployeeID']
        duplicated = ids[ids.duplicated(keep=False) & ids.notna()]
        if not duplicated.empty:
            unique_ids = sorted(set(duplicated.tolist()))
            return [f"Duplicate EmployeeID values: {unique_ids}"]
        return []

    def _check_required(self):
        errors = []
        for column in TARGET_REQUIRED_COLUMNS:
            null_rows = self.employees[self.employees[column].isna()]
            if not null_rows.empty:
                errors.append(f"{len(null_rows)} rows have no {column}")
        return errors

    def _check_lengths(self):
        errors = []
        for column, max_length in TARGET_STRING_LENGTHS.items():
            values = self.employees[column].dropna().astype(str)
            too_long = values[values.str.len() > max_length]
            if not too_long.empty:
                ids = self.employees.loc[too_long.index, 'EmployeeID'].tolist()
                errors.append(f"{column} longer than {max_length} characters for EmployeeID {ids}")
        return errors

    def validate(self) -> pd.DataFrame:
        """
        Runs every check.

        Returns:
            pd.DataFrame: the validated rows, unchanged.
        Raises:
            ExtractionError: listing every violation found.
        """
        errors = self._check_columns()
        if not errors:
            errors = self._check_duplicates() + self._check_required() + self._check_lengths()

        if errors:
            msg = "Extracted rows are not valid: " + "; ".join(errors)
            logger.error(msg)
            raise ExtractionError(msg)

        logger.info(f"Validated {len(self.employees)} extracted rows.")
        return self.employees
