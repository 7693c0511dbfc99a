"""
Request validation stage.

    @router.put("/{id}", dependencies=[Depends(validate_request(UPDATE_BRANCH_RULES))])
    async def update_branch(id: str, body: dict = Depends(read_json_object)):
        ...

The payload validated is body, then path parameters, then query parameters
merged into one mapping; on a key collision the later source wins. The
check is all this stage does: a passing request reaches the route untouched,
so routes address the entity by the path parameter and write the JSON body
only. A rejected payload raises ValidationError before the route body runs,
and the registered handler answers 400 {"error": "..."}.
"""
import json
from typing import Any, Callable, Coroutine, Iterable

from fastapi import Request

from workforce.exceptions.base import ValidationError
from workforce.validators.request_rules import FieldRule, validate


async def read_json_object(request: Request) -> dict[str, Any]:
    """Decoded JSON body; an empty body counts as {}."""
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise ValidationError("Validation error: request body must be valid JSON", ["request body must be valid JSON"])
    if not isinstance(body, dict):
        raise ValidationError('Validation error: "value" must be of type object', ['"value" must be of type object'])
    return body


def merge_request_sources(body: dict[str, Any], path_params: dict[str, Any], query_params: dict[str, Any]) -> dict[str, Any]:
    """body < path params < query params."""
    return {**body, **path_params, **query_params}


def validate_request(rules: Iterable[FieldRule]) -> Callable[[Request], Coroutine[Any, Any, None]]:
    """Build a check-only FastAPI dependency for the merged request payload."""
    rules = tuple(rules)

    async def dependency(request: Request) -> None:
        body = await read_json_object(request)
        validate(rules, merge_request_sources(body, dict(request.path_params), dict(request.query_params)))

    return dependency
