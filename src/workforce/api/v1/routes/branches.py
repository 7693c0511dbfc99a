from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from workforce.api.deps import get_branch_service
from workforce.api.v1.pipeline import read_json_object, validate_request
from workforce.api.v1.responses import success_response
from workforce.schemas.branch import CREATE_BRANCH_RULES, UPDATE_BRANCH_RULES, BRANCH_ID_RULES
from workforce.services.branch_service import BranchService

router = APIRouter(prefix="/branches", tags=["branches"])


@router.get("")
async def get_all_branches(service: BranchService = Depends(get_branch_service)) -> JSONResponse:
    branches = await service.get_all()
    return success_response("Branches Retrieved", branches)


@router.get("/{id}", dependencies=[Depends(validate_request(BRANCH_ID_RULES))])
async def get_branch(id: str, service: BranchService = Depends(get_branch_service)) -> JSONResponse:
    branch = await service.get_by_id(id)
    return success_response("Branch Retrieved", branch)


@router.post("", dependencies=[Depends(validate_request(CREATE_BRANCH_RULES))])
async def create_branch(
    body: dict[str, Any] = Depends(read_json_object),
    service: BranchService = Depends(get_branch_service),
) -> JSONResponse:
    branch = await service.create(body)
    return success_response("Branch Created", branch, status_code=201)


@router.put("/{id}", dependencies=[Depends(validate_request(UPDATE_BRANCH_RULES))])
async def update_branch(
    id: str,
    body: dict[str, Any] = Depends(read_json_object),
    service: BranchService = Depends(get_branch_service),
) -> JSONResponse:
    branch = await service.update(id, body)
    return success_response("Branch Updated", branch)


@router.delete("/{id}", dependencies=[Depends(validate_request(BRANCH_ID_RULES))])
async def delete_branch(id: str, service: BranchService = Depends(get_branch_service)) -> JSONResponse:
    await service.delete(id)
    return success_response("Branch Deleted")
