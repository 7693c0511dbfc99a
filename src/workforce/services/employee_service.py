import logging

from workforce.models.employee import Employee
from workforce.repositories.transaction import FieldValuePair, Transaction
from .entity_service import EntityService

logger = logging.getLogger(__name__)


def branch_id_variants(branch_id: int | str) -> list[int | str]:
    """
    Stored values equal to `branch_id` in canonical string form.

    branchId may be stored as a number or a string, so "3" also matches 3.
    "007" has no numeric twin: str(7) != "007".
    """
    text = str(branch_id).strip()
    variants: list[int | str] = [text]
    try:
        number = int(text)
    except ValueError:
        return variants
    if str(number) == text:
        variants.append(number)
    return variants


class EmployeeService(EntityService[Employee]):
    """CRUD over the `employees` collection plus the derived reads."""

    collection = "employees"
    entity_model = Employee
    entity_label = "Employee"
    not_found_code = "EMPLOYEE_NOT_FOUND"

    # Derived reads are full scans filtered in-process

    async def employees_by_branch(self, branch_id: int | str) -> list[Employee]:
        wanted = str(branch_id).strip()
        return [e for e in await self.get_all() if str(e.branch_id) == wanted]

    async def employees_by_department(self, department: str) -> list[Employee]:
        wanted = department.casefold()
        return [e for e in await self.get_all() if e.department.casefold() == wanted]

    async def delete_by_branch(self, branch_id: int | str) -> int:
        """
        Delete every employee of a branch in one transaction; returns the count.
        Never called implicitly by branch deletion.
        """
        variants = branch_id_variants(branch_id)

        async def delete_all_variants(transaction: Transaction) -> int:
            deleted = 0
            for value in variants:
                deleted += await self.repository.delete_by_filter(
                    self.collection,
                    [FieldValuePair("branchId", value)],
                    transaction=transaction,
                )
            return deleted

        deleted = await self.repository.run_transaction(delete_all_variants)
        logger.info("service.employees.deleted_by_branch", extra={"branch_id": str(branch_id), "deleted": deleted})
        return deleted
