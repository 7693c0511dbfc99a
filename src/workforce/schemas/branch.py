"""
Field rules for branch payloads.
"""
from workforce.validators.request_rules import FieldRule, optional

PHONE_PATTERN = r"^[0-9\-+() ]+$"

ID_RULE = FieldRule("id", messages={"required": "ID is required", "empty": "ID cannot be empty"})

BRANCH_FIELDS = (
    FieldRule(
        "name",
        min_length=2,
        max_length=50,
        messages={"required": "Branch name is required", "empty": "Branch name cannot be empty"},
    ),
    FieldRule(
        "address",
        min_length=5,
        max_length=100,
        messages={"required": "Address is required", "empty": "Address cannot be empty"},
    ),
    FieldRule(
        "phone",
        pattern=PHONE_PATTERN,
        messages={"required": "Phone number is required", "empty": "Phone number cannot be empty"},
    ),
)

# POST /branches
CREATE_BRANCH_RULES = BRANCH_FIELDS

# PUT /branches/{id}: partial body, id from the path
UPDATE_BRANCH_RULES = (ID_RULE, *optional(BRANCH_FIELDS))

# GET / DELETE /branches/{id}
BRANCH_ID_RULES = (ID_RULE,)
