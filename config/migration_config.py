"""
Process-wide settings of the employee migration run.
Every value can be overridden through an environment variable or a CLI argument.
Values are kept as the raw strings read from the environment; they are parsed
where they are used, so a malformed value is reported as a usage error instead
of failing at import.
"""
import os

DEFAULT_HIRE_DATE_CUTOFF = "2008-01-01"
DEFAULT_BATCH_SIZE = 500
DEFAULT_SHOW_ROWS = 20

# Employees hired on or after this date (YYYY-MM-DD) are migrated
HIRE_DATE_CUTOFF = os.environ.get("MIGRATION_HIRE_DATE_CUTOFF", DEFAULT_HIRE_DATE_CUTOFF)

# Number of rows sent per INSERT statement inside the load transaction
BATCH_SIZE = os.environ.get("MIGRATION_BATCH_SIZE", str(DEFAULT_BATCH_SIZE))

# Rows of the verification output printed by the CLI
SHOW_ROWS = os.environ.get("MIGRATION_SHOW_ROWS", str(DEFAULT_SHOW_ROWS))
