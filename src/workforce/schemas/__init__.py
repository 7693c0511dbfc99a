from .branch import (
    CREATE_BRANCH_RULES,
    UPDATE_BRANCH_RULES,
    BRANCH_ID_RULES,
)
from .employee import (
    CREATE_EMPLOYEE_RULES,
    UPDATE_EMPLOYEE_RULES,
    EMPLOYEE_ID_RULES,
    EMPLOYEES_BY_BRANCH_RULES,
    EMPLOYEES_BY_DEPARTMENT_RULES,
)

__all__ = [
    "CREATE_BRANCH_RULES",
    "UPDATE_BRANCH_RULES",
    "BRANCH_ID_RULES",
    "CREATE_EMPLOYEE_RULES",
    "UPDATE_EMPLOYEE_RULES",
    "EMPLOYEE_ID_RULES",
    "EMPLOYEES_BY_BRANCH_RULES",
    "EMPLOYEES_BY_DEPARTMENT_RULES",
]
