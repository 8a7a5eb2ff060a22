from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError

from db.migration_tables import build_target_table
from config.tables_names import target_tables
from migration.exceptions import SchemaResetError
from utils.logger import get_logger

logger = get_logger('target_schema_manager')


class TargetSchemaManager:
    """
    Drops and recreates the EmployeeMigration table and its job title index.

    WARNING: reset_target_schema is destructive. Every row of a previous
    migration is discarded; the table is rebuilt empty on each run.
    """

    def __init__(self, engine, table_names: dict = target_tables):
        self.engine = engine
        self.table_names = table_names
        self.target = build_target_table(table_names)

    def target_exists(self) -> bool:
        return inspect(self.engine).has_table(self.target.name, schema=self.table_names.get("schema"))

    def reset_target_schema(self):
        """
        Drops the table if present, then creates the table and its index.
        The three statements share one transaction: on back-ends with
        transactional DDL (PostgreSQL, SQL Server, and SQLite through
        db.sqlalchemy_connection.enable_sqlite_transactional_ddl) a failure
        leaves the previous table and its rows in place. Back-ends that commit
        DDL implicitly (MySQL, Oracle) cannot offer that guarantee.

        Returns:
            sqlalchemy.Table: the recreated target table.
        Raises:
            SchemaResetError: if any DDL statement fails.
        """
        try:
            with self.engine.begin() as connection:
                self.target.drop(connection, checkfirst=True)
                self.target.create(connection)
            logger.info(
                f"Target table {self.target.fullname} recreated with index "
                f"{self.table_names['job_title_index']}."
            )
            return self.target
        except SQLAlchemyError as e:
            logger.error(f"Error resetting target table {self.target.fullname}: {e}")
            raise SchemaResetError(f"Error resetting target table {self.target.fullname}: {e}") from e
