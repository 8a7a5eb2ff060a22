import os

source_tables = {
    "schema": os.environ.get("MIGRATION_SOURCE_SCHEMA"),
    "employee": "Employee",
    "employee_department_history": "EmployeeDepartmentHistory",
    "department": "Department",
    "shift": "Shift",
}

target_tables = {
    "schema": os.environ.get("MIGRATION_TARGET_SCHEMA"),
    "employee_migration": "EmployeeMigration",
    "job_title_index": "IX_EmployeeMigration_JobTitle",
}
