"""
Service layer: typed entities on top of the document repository.

    from workforce.services import BranchService, EmployeeService
"""

from .entity_service import EntityService
from .branch_service import BranchService
from .employee_service import EmployeeService

__all__ = ["EntityService", "BranchService", "EmployeeService"]
