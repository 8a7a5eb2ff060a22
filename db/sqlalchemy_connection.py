from sqlalchemy import create_engine, event
from sqlalchemy.engine import make_url
from utils.logger import get_logger
from utils.format_db_url import resolve_database_url
from config.db import DB_CONNECTION_TIMEOUT

logger = get_logger('db_connection')

"""
Database connection utilities for the employee migration.
Provides a SQLAlchemy engine for the data store holding both the
source relations and the EmployeeMigration table.
"""


def enable_sqlite_transactional_ddl(engine):
    """
    Makes DDL on a pysqlite engine part of the surrounding transaction.
    pysqlite commits CREATE/DROP statements on its own; with its transaction
    handling turned off and BEGIN emitted by SQLAlchemy, a failed schema reset
    rolls back like on PostgreSQL.
    """
    @event.listens_for(engine, "connect")
    def _disable_pysqlite_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(connection):
        connection.exec_driver_sql("BEGIN")

    return engine


class SQLAlchemyDatabaseConnection():

    def __init__(self, database_url: str = None, postgres_url: dict = None,
                 connect_timeout: int = DB_CONNECTION_TIMEOUT):
        """
        Initializes the connection with a SQLAlchemy URL, either given directly
        or built from PostgreSQL connection parameters.

        Args:
            database_url (str): Any SQLAlchemy URL (e.g. sqlite:///hr.db).
            postgres_url (dict): PostgreSQL connection parameters, used when no URL is given.
            connect_timeout (int): Connection timeout in seconds (PostgreSQL only).
        """
        self.database_url = resolve_database_url(database_url, postgres_url)
        self.connect_timeout = connect_timeout
        self._engine = None

    def _create_engine(self):
        """
        Creates and returns a SQLAlchemy engine.

        Returns:
            sqlalchemy.Engine: SQLAlchemy engine instance.
        """
        url = make_url(self.database_url)
        connect_args = {}
        if url.get_backend_name() == "postgresql":
            connect_args["connect_timeout"] = self.connect_timeout
        try:
            engine = create_engine(url, pool_pre_ping=True, connect_args=connect_args)
            if url.get_backend_name() == "sqlite":
                enable_sqlite_transactional_ddl(engine)
            logger.info(f"{url.get_backend_name()} engine created successfully for {url.render_as_string(hide_password=True)}.")
            return engine
        except Exception as e:
            logger.error(f"Error creating database engine: {e}")
            raise e

    def get_engine(self):
        """
        Returns the engine, creating it on first use.
        """
        if self._engine is None:
            self._engine = self._create_engine()
        return self._engine

    def dispose(self):
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
            logger.info("Database engine disposed.")
