"""
Extraction query of the employee migration.

Each employee is joined to a single resolved department history row:
    1. the current assignment (EndDate IS NULL) first,
    2. then the latest EndDate,
    3. then the latest StartDate,
    4. then the highest DepartmentID and ShiftID.
Employees without any history row are kept, with NULL department and shift.
"""
from datetime import date
from sqlalchemy import select, func, case


def build_resolved_assignment_query(source: dict):
    """
    Ranks every department history row per employee and keeps rank 1.

    Args:
        source (dict): source tables as returned by build_source_tables.
    Returns:
        sqlalchemy Subquery with BusinessEntityID, DepartmentID, ShiftID.
    """
    history = source["employee_department_history"]

    assignment_rank = func.row_number().over(
        partition_by=history.c.BusinessEntityID,
        order_by=[
            case((history.c.EndDate.is_(None), 0), else_=1),
            history.c.EndDate.desc(),
            history.c.StartDate.desc(),
            history.c.DepartmentID.desc(),
            history.c.ShiftID.desc(),
        ],
    ).label("assignment_rank")

    ranked = select(
        history.c.BusinessEntityID,
        history.c.DepartmentID,
        history.c.ShiftID,
        assignment_rank,
    ).subquery("ranked_history")

    return (
        select(ranked.c.BusinessEntityID, ranked.c.DepartmentID, ranked.c.ShiftID)
        .where(ranked.c.assignment_rank == 1)
        .subquery("resolved_assignment")
    )


def build_migration_query(source: dict, hire_date_cutoff: date):
    """
    Builds the SELECT producing the EmployeeMigration rows.

    Args:
        source (dict): source tables as returned by build_source_tables.
        hire_date_cutoff (date): employees hired on or after this date are selected.
    Returns:
        sqlalchemy Select whose columns match TARGET_COLUMNS.
    """
    employee = source["employee"]
    department = source["department"]
    shift = source["shift"]
    assignment = build_resolved_assignment_query(source)

    joined = (
        employee
        .outerjoin(assignment, assignment.c.BusinessEntityID == employee.c.BusinessEntityID)
        .outerjoin(department, department.c.DepartmentID == assignment.c.DepartmentID)
        .outerjoin(shift, shift.c.ShiftID == assignment.c.ShiftID)
    )

    return (
        select(
            employee.c.BusinessEntityID.label("EmployeeID"),
            employee.c.NationalIDNumber.label("NationalIDNumber"),
            employee.c.JobTitle.label("JobTitle"),
            department.c.Name.label("Department"),
            shift.c.Name.label("Shift"),
            employee.c.HireDate.label("HireDate"),
            employee.c.ModifiedDate.label("ModifiedDate"),
        )
        .select_from(joined)
        .where(employee.c.HireDate >= hire_date_cutoff)
        .order_by(employee.c.BusinessEntityID)
    )


def build_verification_query(target):
    """Full read-back of the EmployeeMigration table."""
    return select(*[target.c[name] for name in target.c.keys()])
