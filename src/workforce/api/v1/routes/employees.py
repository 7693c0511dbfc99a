from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from workforce.api.deps import get_employee_service
from workforce.api.v1.pipeline import read_json_object, validate_request
from workforce.api.v1.responses import success_response
from workforce.schemas.employee import (
    CREATE_EMPLOYEE_RULES,
    UPDATE_EMPLOYEE_RULES,
    EMPLOYEE_ID_RULES,
    EMPLOYEES_BY_BRANCH_RULES,
    EMPLOYEES_BY_DEPARTMENT_RULES,
)
from workforce.services.employee_service import EmployeeService

router = APIRouter(prefix="/employees", tags=["employees"])


@router.get("")
async def get_all_employees(service: EmployeeService = Depends(get_employee_service)) -> JSONResponse:
    employees = await service.get_all()
    return success_response("Employees Retrieved", employees)


# Derived reads and the bulk delete sit on two-segment paths, so they never
# collide with /{id}.

@router.get("/branch/{branchId}", dependencies=[Depends(validate_request(EMPLOYEES_BY_BRANCH_RULES))])
async def get_employees_by_branch(
    branchId: str,
    service: EmployeeService = Depends(get_employee_service),
) -> JSONResponse:
    employees = await service.employees_by_branch(branchId)
    return success_response("Employees Retrieved", employees)


@router.delete("/branch/{branchId}", dependencies=[Depends(validate_request(EMPLOYEES_BY_BRANCH_RULES))])
async def delete_employees_by_branch(
    branchId: str,
    service: EmployeeService = Depends(get_employee_service),
) -> JSONResponse:
    deleted = await service.delete_by_branch(branchId)
    return success_response("Employees Deleted", {"deleted": deleted})


@router.get("/department/{department}", dependencies=[Depends(validate_request(EMPLOYEES_BY_DEPARTMENT_RULES))])
async def get_employees_by_department(
    department: str,
    service: EmployeeService = Depends(get_employee_service),
) -> JSONResponse:
    employees = await service.employees_by_department(department)
    return success_response("Employees Retrieved", employees)


@router.get("/{id}", dependencies=[Depends(validate_request(EMPLOYEE_ID_RULES))])
async def get_employee(id: str, service: EmployeeService = Depends(get_employee_service)) -> JSONResponse:
    employee = await service.get_by_id(id)
    return success_response("Employee Retrieved", employee)


@router.post("", dependencies=[Depends(validate_request(CREATE_EMPLOYEE_RULES))])
async def create_employee(
    body: dict[str, Any] = Depends(read_json_object),
    service: EmployeeService = Depends(get_employee_service),
) -> JSONResponse:
    employee = await service.create(body)
    return success_response("Employee Created", employee, status_code=201)


@router.put("/{id}", dependencies=[Depends(validate_request(UPDATE_EMPLOYEE_RULES))])
async def update_employee(
    id: str,
    body: dict[str, Any] = Depends(read_json_object),
    service: EmployeeService = Depends(get_employee_service),
) -> JSONResponse:
    employee = await service.update(id, body)
    return success_response("Employee Updated", employee)


@router.delete("/{id}", dependencies=[Depends(validate_request(EMPLOYEE_ID_RULES))])
async def delete_employee(id: str, service: EmployeeService = Depends(get_employee_service)) -> JSONResponse:
    await service.delete(id)
    return success_response("Employee Deleted")
