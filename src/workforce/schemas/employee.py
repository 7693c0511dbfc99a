"""
Field rules for employee payloads.
"""
from workforce.validators.request_rules import FieldRule, optional
from .branch import ID_RULE, PHONE_PATTERN

BRANCH_ID_RULE = FieldRule(
    "branchId",
    types=(str, int),
    messages={"required": "Branch ID is required", "empty": "Branch ID cannot be empty"},
)

DEPARTMENT_RULE = FieldRule(
    "department",
    min_length=2,
    max_length=50,
    messages={"required": "Department is required", "empty": "Department cannot be empty"},
)

EMPLOYEE_FIELDS = (
    FieldRule(
        "name",
        min_length=2,
        max_length=50,
        messages={"required": "Name is required", "empty": "Name cannot be empty"},
    ),
    FieldRule(
        "position",
        min_length=2,
        max_length=50,
        messages={"required": "Position is required", "empty": "Position cannot be empty"},
    ),
    DEPARTMENT_RULE,
    FieldRule(
        "email",
        email=True,
        messages={"required": "Email is required", "empty": "Email cannot be empty"},
    ),
    FieldRule(
        "phone",
        pattern=PHONE_PATTERN,
        messages={"required": "Phone number is required", "empty": "Phone number cannot be empty"},
    ),
    BRANCH_ID_RULE,
)

CREATE_EMPLOYEE_RULES = EMPLOYEE_FIELDS
UPDATE_EMPLOYEE_RULES = (ID_RULE, *optional(EMPLOYEE_FIELDS))
EMPLOYEE_ID_RULES = (ID_RULE,)

# Derived reads
EMPLOYEES_BY_BRANCH_RULES = (BRANCH_ID_RULE,)
EMPLOYEES_BY_DEPARTMENT_RULES = (DEPARTMENT_RULE,)
