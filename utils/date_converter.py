from datetime import date, datetime, time
import pandas as pd
from typing import Optional, Union
from utils.logger import get_logger

"""
Date Converter Utility:

Converts source date values (date, datetime, pandas Timestamp, ISO strings)
to the naive timestamps stored in the EmployeeMigration table.
Values are never shifted between time zones.
"""

logger = get_logger('date_converter')

DATE_FORMATS = [
    "%Y-%m-%d %H:%M:%S.%f",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%d",
]


def to_target_timestamp(date_input: Union[str, date, datetime, pd.Timestamp, None]) -> Optional[datetime]:
    """
    Convert a source date value to a datetime for a target timestamp column.

    Args:
        date_input: Date as datetime, date, pandas Timestamp, ISO string or None/NaT
    Returns:
        datetime or None
    Raises:
        TypeError: if the value cannot be interpreted as a date.
    """
    if date_input is None:
        return None
    if not isinstance(date_input, str) and pd.isna(date_input):
        return None

    if isinstance(date_input, pd.Timestamp):
        return date_input.to_pydatetime()

    # datetime is a subclass of date, so check it first
    if isinstance(date_input, datetime):
        return date_input

    if isinstance(date_input, date):
        return datetime.combine(date_input, time.min)

    if isinstance(date_input, str):
        for fmt in DATE_FORMATS:
            try:
                return datetime.strptime(date_input.strip(), fmt)
            except ValueError:
                continue

    logger.error(f"Unable to convert {date_input!r} ({type(date_input).__name__}) to a timestamp.")
    raise TypeError(f"Cannot convert {date_input!r} of type {type(date_input).__name__} to a timestamp")


def parse_cutoff_date(value: Union[str, date]) -> date:
    """
    Parses the hire-date cutoff (YYYY-MM-DD). Used by the CLI and the DAG.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value.strip())
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid hire date cutoff {value!r}; expected YYYY-MM-DD") from e
