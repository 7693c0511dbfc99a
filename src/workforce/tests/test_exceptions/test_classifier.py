import logging

import pytest
from sqlalchemy.exc import DBAPIError, IntegrityError, NoResultFound, OperationalError, ProgrammingError

from workforce.exceptions.base import (
    NotFoundError,
    RepositoryError,
    ServiceError,
    ValidationError,
    WorkforceError,
)
from workforce.exceptions.classifier import classify_store_error, describe_store_error
from workforce.exceptions.mapper import store_error_handler, to_repository_error


class FakePgError(Exception):
    """Driver error carrying a SQLSTATE the way psycopg 3 does."""

    def __init__(self, message: str, sqlstate: str):
        super().__init__(message)
        self.sqlstate = sqlstate


def dbapi(exc_cls, message: str, sqlstate: str | None = None):
    orig = FakePgError(message, sqlstate) if sqlstate else Exception(message)
    return exc_cls("SELECT 1", {}, orig)


class TestClassifyStoreError:

    @pytest.mark.parametrize(
        "sqlstate, code, status",
        [
            ("23505", "ALREADY_EXISTS", 409),
            ("23503", "FAILED_PRECONDITION", 400),
            ("40001", "ABORTED", 409),
            ("40P01", "ABORTED", 409),
            ("42501", "PERMISSION_DENIED", 403),
            ("57014", "DEADLINE_EXCEEDED", 504),
            ("08006", "UNAVAILABLE", 503),
            ("53200", "RESOURCE_EXHAUSTED", 429),
            ("28P01", "PERMISSION_DENIED", 403),
        ],
    )
    def test_sqlstate_takes_precedence(self, sqlstate, code, status):
        exc = dbapi(DBAPIError, "driver says something", sqlstate)
        assert tuple(classify_store_error(exc)) == (code, status)

    def test_unknown_sqlstate_falls_back_to_message(self):
        exc = dbapi(OperationalError, "server closed the connection", "XX999")
        assert classify_store_error(exc).code == "UNAVAILABLE"

    @pytest.mark.parametrize(
        "exc, code, status",
        [
            (dbapi(IntegrityError, "UNIQUE constraint failed: documents.collection, documents.id"), "ALREADY_EXISTS", 409),
            (dbapi(IntegrityError, "NOT NULL constraint failed: documents.data"), "FAILED_PRECONDITION", 400),
            (dbapi(OperationalError, "database is locked"), "ABORTED", 409),
            (dbapi(OperationalError, "query timed out"), "DEADLINE_EXCEEDED", 504),
            (dbapi(OperationalError, "attempt to write a readonly database"), "PERMISSION_DENIED", 403),
            (dbapi(OperationalError, "unable to open database file"), "UNAVAILABLE", 503),
            (dbapi(ProgrammingError, "no such table: documents"), "INTERNAL", 500),
        ],
    )
    def test_message_fallback_without_sqlstate(self, exc, code, status):
        assert tuple(classify_store_error(exc)) == (code, status)

    def test_missing_row_is_not_found(self):
        assert tuple(classify_store_error(NoResultFound("gone"))) == ("NOT_FOUND", 404)

    def test_application_errors_keep_their_code(self):
        error = ServiceError("Invalid input", "INVALID_ARGUMENT", 400)
        assert tuple(classify_store_error(error)) == ("INVALID_ARGUMENT", 400)

    def test_anything_else_is_unknown(self):
        assert tuple(classify_store_error(KeyError("x"))) == ("UNKNOWN", 500)

    def test_describe_uses_driver_message_without_statement(self):
        exc = dbapi(OperationalError, "database is locked")
        assert describe_store_error(exc) == "database is locked"
        assert describe_store_error(RuntimeError()) == "RuntimeError"


class TestErrorTaxonomy:

    def test_status_is_derived_from_code(self):
        assert RepositoryError("x", "DOC_NOT_FOUND").http_status == 404
        assert RepositoryError("x", "UNAVAILABLE").http_status == 503
        assert RepositoryError("x").code == "REPOSITORY_ERROR"
        assert RepositoryError("x").http_status == 500

    def test_explicit_status_wins(self):
        assert ServiceError("x", "DOC_NOT_FOUND", 410).http_status == 410

    def test_not_found_and_validation_defaults(self):
        assert (NotFoundError().code, NotFoundError().http_status) == ("DOC_NOT_FOUND", 404)
        error = ValidationError("Validation error: a, b", ["a", "b"])
        assert (error.code, error.http_status, error.violations) == ("VALIDATION_ERROR", 400, ["a", "b"])
        assert isinstance(error, WorkforceError)

    def test_payload_has_message_and_code_only(self):
        assert RepositoryError("Document not found", "DOC_NOT_FOUND").to_payload() == {
            "message": "Document not found",
            "code": "DOC_NOT_FOUND",
        }


class TestStoreErrorHandler:

    async def test_wraps_and_chains_original(self):
        original = dbapi(OperationalError, "database is locked")

        with pytest.raises(RepositoryError) as exc_info:
            async with store_error_handler("Failed to fetch documents from branches"):
                raise original

        assert exc_info.value.message == "Failed to fetch documents from branches: database is locked"
        assert exc_info.value.__cause__ is original

    async def test_explicit_code_overrides_classified_code_but_not_status(self):
        with pytest.raises(RepositoryError) as exc_info:
            async with store_error_handler("Transaction failed", code="TRANSACTION_FAILED"):
                raise NoResultFound("No document to update")

        assert exc_info.value.code == "TRANSACTION_FAILED"
        assert exc_info.value.http_status == 404

    async def test_clean_block_passes_through(self):
        async with store_error_handler("never used"):
            value = 42
        assert value == 42

    def test_server_side_failures_log_at_warning(self, caplog):
        caplog.set_level(logging.INFO, logger="workforce.exceptions.mapper")

        to_repository_error(dbapi(OperationalError, "unable to open database file"), "ctx")
        to_repository_error(NoResultFound("gone"), "ctx")

        levels = [r.levelno for r in caplog.records if r.getMessage() == "mapper.store_error"]
        assert levels == [logging.WARNING, logging.INFO]
