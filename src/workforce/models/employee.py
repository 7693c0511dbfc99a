from pydantic import BaseModel, ConfigDict, Field


class Employee(BaseModel):
    """
    An employee record.

    `branch_id` (wire name `branchId`) is a soft reference to a Branch: nothing
    checks that the branch exists, and deleting a branch leaves its employees
    in place.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str
    position: str
    department: str
    email: str
    phone: str
    branch_id: int | str = Field(alias="branchId")
