"""
Shared fixtures: an SQLite database holding the four source relations,
seeded with a small HR data set.

Employees (cutoff 2008-01-01):
    274  hired 2009-01-14, moved Production/Night -> Marketing/Day (current)
    100  hired 2007-12-31, before the cutoff
    250  hired 2008-01-01, two closed assignments, latest is Production/Evening
    260  hired 2010-03-01, no assignment history, no ModifiedDate
    280  hired 2012-01-01, two current assignments starting the same day
    290  hired 2011-05-30, ModifiedDate with microseconds
"""
from datetime import date, datetime

import pytest
from sqlalchemy import create_engine, insert, select, func, MetaData

from db.migration_tables import build_source_tables, build_target_table
from db.sqlalchemy_connection import enable_sqlite_transactional_ddl

SOURCE_TABLE_NAMES = {
    "schema": None,
    "employee": "Employee",
    "employee_department_history": "EmployeeDepartmentHistory",
    "department": "Department",
    "shift": "Shift",
}

TARGET_TABLE_NAMES = {
    "schema": None,
    "employee_migration": "EmployeeMigration",
    "job_title_index": "IX_EmployeeMigration_JobTitle",
}

CUTOFF = date(2008, 1, 1)

DEPARTMENTS = [
    {"DepartmentID": 1, "Name": "Engineering"},
    {"DepartmentID": 4, "Name": "Marketing"},
    {"DepartmentID": 7, "Name": "Production"},
]

SHIFTS = [
    {"ShiftID": 1, "Name": "Day"},
    {"ShiftID": 2, "Name": "Evening"},
    {"ShiftID": 3, "Name": "Night"},
]

EMPLOYEES = [
    {"BusinessEntityID": 274, "NationalIDNumber": "502097814", "JobTitle": "Marketing Specialist",
     "HireDate": date(2009, 1, 14), "ModifiedDate": datetime(2014, 6, 30, 0, 0, 0)},
    {"BusinessEntityID": 100, "NationalIDNumber": "398223854", "JobTitle": "Production Technician - WC10",
     "HireDate": date(2007, 12, 31), "ModifiedDate": datetime(2014, 6, 30, 0, 0, 0)},
    {"BusinessEntityID": 250, "NationalIDNumber": "615389812", "JobTitle": "Production Supervisor - WC40",
     "HireDate": date(2008, 1, 1), "ModifiedDate": datetime(2014, 6, 30, 0, 0, 0)},
    {"BusinessEntityID": 260, "NationalIDNumber": "345106466", "JobTitle": "Research and Development Engineer",
     "HireDate": date(2010, 3, 1), "ModifiedDate": None},
    {"BusinessEntityID": 280, "NationalIDNumber": "982310417", "JobTitle": "Marketing Assistant",
     "HireDate": date(2012, 1, 1), "ModifiedDate": datetime(2015, 2, 1, 8, 30, 15)},
    {"BusinessEntityID": 290, "NationalIDNumber": "134219713", "JobTitle": "Design Engineer",
     "HireDate": date(2011, 5, 30), "ModifiedDate": datetime(2014, 6, 30, 0, 0, 0, 123456)},
]

HISTORY = [
    {"BusinessEntityID": 274, "DepartmentID": 7, "ShiftID": 3,
     "StartDate": date(2009, 1, 14), "EndDate": date(2010, 5, 30)},
    {"BusinessEntityID": 274, "DepartmentID": 4, "ShiftID": 1,
     "StartDate": date(2010, 5, 31), "EndDate": None},
    {"BusinessEntityID": 100, "DepartmentID": 7, "ShiftID": 1,
     "StartDate": date(2007, 12, 31), "EndDate": None},
    {"BusinessEntityID": 250, "DepartmentID": 1, "ShiftID": 1,
     "StartDate": date(2008, 1, 1), "EndDate": date(2009, 12, 31)},
    {"BusinessEntityID": 250, "DepartmentID": 7, "ShiftID": 2,
     "StartDate": date(2010, 1, 1), "EndDate": date(2011, 6, 30)},
    {"BusinessEntityID": 280, "DepartmentID": 1, "ShiftID": 1,
     "StartDate": date(2012, 1, 1), "EndDate": None},
    {"BusinessEntityID": 280, "DepartmentID": 4, "ShiftID": 2,
     "StartDate": date(2012, 1, 1), "EndDate": None},
    {"BusinessEntityID": 290, "DepartmentID": 1, "ShiftID": 3,
     "StartDate": date(2011, 5, 30), "EndDate": None},
]

QUALIFYING_IDS = {274, 250, 260, 280, 290}


def seed_source(engine, employees=EMPLOYEES, history=HISTORY):
    """Creates the source relations and inserts the sample rows."""
    metadata = MetaData()
    source = build_source_tables(SOURCE_TABLE_NAMES, metadata)
    metadata.create_all(engine)
    with engine.begin() as connection:
        connection.execute(insert(source["department"]), DEPARTMENTS)
        connection.execute(insert(source["shift"]), SHIFTS)
        connection.execute(insert(source["employee"]), employees)
        if history:
            connection.execute(insert(source["employee_department_history"]), history)
    return source


def add_employee(engine, source, employee, history=None):
    with engine.begin() as connection:
        connection.execute(insert(source["employee"]), [employee])
        if history:
            connection.execute(insert(source["employee_department_history"]), history)


def count_target_rows(engine):
    target = build_target_table(TARGET_TABLE_NAMES)
    with engine.connect() as connection:
        return connection.execute(select(func.count()).select_from(target)).scalar_one()


@pytest.fixture
def engine():
    engine = enable_sqlite_transactional_ddl(create_engine("sqlite://"))
    yield engine
    engine.dispose()


@pytest.fixture
def source(engine):
    return seed_source(engine)


@pytest.fixture
def make_processor(engine):
    from migration.migration_processing import EmployeeMigrationProcessor

    def _make(**kwargs):
        kwargs.setdefault("hire_date_cutoff", CUTOFF)
        kwargs.setdefault("source_table_names", SOURCE_TABLE_NAMES)
        kwargs.setdefault("target_table_names", TARGET_TABLE_NAMES)
        kwargs.setdefault("notify_on_failure", False)
        return EmployeeMigrationProcessor(engine, **kwargs)

    return _make
