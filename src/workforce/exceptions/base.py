"""
Application error taxonomy.

Every error the repository and service layers raise carries three things:

- message: human-friendly text, safe to return to clients
- code: canonical machine-readable code (e.g. 'DOC_NOT_FOUND', 'UNAVAILABLE')
- http_status: the HTTP status the outermost handler answers with

Errors are raised where a failure is detected and travel up unchanged; only the
API layer turns them into responses.
"""


class WorkforceError(Exception):
    """
    Common base of RepositoryError and ServiceError.

    When no explicit status is given it is looked up from the code in
    CODE_TO_STATUS, falling back to DEFAULT_STATUS.
    """

    DEFAULT_CODE = "INTERNAL"
    DEFAULT_STATUS = 500

    # Map canonical code -> default HTTP status.
    CODE_TO_STATUS = {
        "DOC_NOT_FOUND": 404,
        "NOT_FOUND": 404,
        "BRANCH_NOT_FOUND": 404,
        "EMPLOYEE_NOT_FOUND": 404,
        "VALIDATION_ERROR": 400,
        "INVALID_ARGUMENT": 400,
        "FAILED_PRECONDITION": 400,
        "ALREADY_EXISTS": 409,
        "ABORTED": 409,
        "PERMISSION_DENIED": 403,
        "UNAVAILABLE": 503,
        "DEADLINE_EXCEEDED": 504,
    }

    def __init__(self, message: str, code: str | None = None, http_status: int | None = None):
        super().__init__(message)
        self.message = message
        self.code = code or self.DEFAULT_CODE
        if http_status is None:
            http_status = self.CODE_TO_STATUS.get(self.code, self.DEFAULT_STATUS)
        self.http_status = http_status

    def __str__(self) -> str:
        return f"{self.message} (code: {self.code}; status: {self.http_status})"

    def to_payload(self) -> dict:
        """
        JSON body for HTTP responses: {"message": ..., "code": ...}.
        The status travels separately as the response status code.
        """
        return {"message": self.message, "code": self.code}


class RepositoryError(WorkforceError):
    """Any failure at the document-store boundary, already normalized."""

    DEFAULT_CODE = "REPOSITORY_ERROR"


class NotFoundError(RepositoryError):
    """Referenced document or entity does not exist (HTTP 404)."""

    def __init__(self, message: str = "Not found", code: str = "DOC_NOT_FOUND"):
        super().__init__(message, code, 404)


class ServiceError(WorkforceError):
    """Failure detected by a service (business rule) rather than by the store."""

    DEFAULT_CODE = "SERVICE_ERROR"


class ValidationError(ServiceError):
    """
    Payload failed its declared field rules; always client-caused (HTTP 400).

    `violations` keeps the individual messages, `message` joins them.
    """

    def __init__(self, message: str, violations: list[str] | None = None):
        super().__init__(message, "VALIDATION_ERROR", 400)
        self.violations = list(violations or [])


__all__ = [
    "WorkforceError",
    "RepositoryError",
    "NotFoundError",
    "ServiceError",
    "ValidationError",
]
