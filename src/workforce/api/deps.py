"""
Request-scoped accessors for objects built in the app lifespan.

The repository lives on `app.state`; services are cheap stateless facades and
are created per request around it.
"""
from fastapi import Request

from workforce.repositories.document_repository import DocumentRepository
from workforce.services.branch_service import BranchService
from workforce.services.employee_service import EmployeeService


def get_repository(request: Request) -> DocumentRepository:
    return request.app.state.repository


def get_branch_service(request: Request) -> BranchService:
    return BranchService(get_repository(request))


def get_employee_service(request: Request) -> EmployeeService:
    return EmployeeService(get_repository(request))
