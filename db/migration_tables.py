"""
SQLAlchemy Core definitions of the relations touched by the migration.

Source relations are owned by the HR system and only read; their definitions
list the columns the migration selects. The EmployeeMigration definition is
the contract with downstream reporting queries and must stay stable.
"""
from sqlalchemy import MetaData, Table, Column, Integer, String, Date, DateTime, Index
from config.tables_names import source_tables, target_tables

NATIONAL_ID_LENGTH = 15
NAME_LENGTH = 50


def build_source_tables(table_names: dict = source_tables, metadata: MetaData = None) -> dict:
    """
    Builds the four source tables.

    Args:
        table_names (dict): {"schema": ..., "employee": ..., "employee_department_history": ...,
                             "department": ..., "shift": ...}
        metadata (MetaData): optional metadata to attach the tables to.
    Returns:
        dict: logical name -> sqlalchemy.Table
    """
    metadata = metadata if metadata is not None else MetaData()
    schema = table_names.get("schema")

    employee = Table(
        table_names["employee"], metadata,
        Column("BusinessEntityID", Integer, primary_key=True),
        Column("NationalIDNumber", String(NATIONAL_ID_LENGTH), nullable=False),
        Column("JobTitle", String(NAME_LENGTH)),
        Column("HireDate", Date),
        Column("ModifiedDate", DateTime),
        schema=schema,
    )
    department = Table(
        table_names["department"], metadata,
        Column("DepartmentID", Integer, primary_key=True),
        Column("Name", String(NAME_LENGTH), nullable=False),
        schema=schema,
    )
    shift = Table(
        table_names["shift"], metadata,
        Column("ShiftID", Integer, primary_key=True),
        Column("Name", String(NAME_LENGTH), nullable=False),
        schema=schema,
    )
    history = Table(
        table_names["employee_department_history"], metadata,
        Column("BusinessEntityID", Integer, primary_key=True),
        Column("DepartmentID", Integer, primary_key=True),
        Column("ShiftID", Integer, primary_key=True),
        Column("StartDate", Date, primary_key=True),
        Column("EndDate", Date),
        schema=schema,
    )
    return {
        "employee": employee,
        "employee_department_history": history,
        "department": department,
        "shift": shift,
    }


def build_target_table(table_names: dict = target_tables, metadata: MetaData = None) -> Table:
    """
    Builds the EmployeeMigration table and its job title index.
    EmployeeID carries no uniqueness constraint; the extraction guarantees it.
    """
    metadata = metadata if metadata is not None else MetaData()
    table = Table(
        table_names["employee_migration"], metadata,
        Column("EmployeeID", Integer, nullable=False),
        Column("NationalIDNumber", String(NATIONAL_ID_LENGTH), nullable=False),
        Column("JobTitle", String(NAME_LENGTH)),
        Column("Department", String(NAME_LENGTH)),
        Column("Shift", String(NAME_LENGTH)),
        Column("HireDate", DateTime),
        Column("ModifiedDate", DateTime),
        schema=table_names.get("schema"),
    )
    Index(table_names["job_title_index"], table.c.JobTitle)
    return table


# Column order shared by the extraction query, the loader and the verifier
TARGET_COLUMNS = [
    "EmployeeID",
    "NationalIDNumber",
    "JobTitle",
    "Department",
    "Shift",
    "HireDate",
    "ModifiedDate",
]

# Upper bound of each bounded string column of the target table
TARGET_STRING_LENGTHS = {
    "NationalIDNumber": NATIONAL_ID_LENGTH,
    "JobTitle": NAME_LENGTH,
    "Department": NAME_LENGTH,
    "Shift": NAME_LENGTH,
}

TARGET_REQUIRED_COLUMNS = ["EmployeeID", "NationalIDNumber"]
