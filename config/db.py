import os

# Full SQLAlchemy URL, takes precedence over the PostgreSQL parts below
database_url = os.environ.get("MIGRATION_DATABASE_URL")

postgres_url = {
    "username": os.environ.get("MIGRATION_DB_USER", ""),
    "password": os.environ.get("MIGRATION_DB_PASSWORD", ""),
    "host": os.environ.get("MIGRATION_DB_HOST", ""),
    "port": int(os.environ.get("MIGRATION_DB_PORT", "5432")),
    "database": os.environ.get("MIGRATION_DB_NAME", ""),
    "schema": os.environ.get("MIGRATION_DB_SCHEMA"),
}

# Connection timeout in seconds
DB_CONNECTION_TIMEOUT = int(os.environ.get("MIGRATION_DB_CONNECT_TIMEOUT", "30"))
