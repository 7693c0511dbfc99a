"""Success envelope shared by every route: {"message": ..., "data": ...}."""
from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

_NO_DATA = object()


def success_response(message: str, data: Any = _NO_DATA, status_code: int = 200) -> JSONResponse:
    """`data` is omitted from the body when not given (e.g. deletes)."""
    body: dict[str, Any] = {"message": message}
    if data is not _NO_DATA:
        # by_alias keeps wire names such as branchId
        body["data"] = jsonable_encoder(data, by_alias=True)
    return JSONResponse(status_code=status_code, content=body)
