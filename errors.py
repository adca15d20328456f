"""Errors raised at the repository boundary.

Each error carries the HTTP status the API layer answers with, so routes never
need to inspect database exceptions themselves.
"""
from sqlalchemy.exc import DataError


class ClinicError(Exception):
    status_code = 400

    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConstraintViolation(ClinicError):
    """A unique column or composite already holds this value."""
    status_code = 409


class RequiredFieldViolation(ClinicError):
    status_code = 422


class ReferentialViolation(ClinicError):
    """A foreign reference does not resolve, or the row is still referenced."""
    status_code = 409


class DomainViolation(ClinicError):
    status_code = 422


class NotFound(ClinicError):
    status_code = 404


class InvalidStatusTransition(ClinicError):
    status_code = 409


class SupervisionCycle(ClinicError):
    status_code = 409


# MySQL error codes and PostgreSQL SQLSTATEs for the same four failures.
_MYSQL_CODES = {
    1062: ConstraintViolation,
    1048: RequiredFieldViolation,
    1364: RequiredFieldViolation,
    1216: ReferentialViolation,
    1217: ReferentialViolation,
    1451: ReferentialViolation,
    1452: ReferentialViolation,
    1265: DomainViolation,
    3819: DomainViolation,
}
_PG_CODES = {
    "23505": ConstraintViolation,
    "23502": RequiredFieldViolation,
    "23503": ReferentialViolation,
    "23514": DomainViolation,
    "22P02": DomainViolation,
}
_MESSAGE_MARKERS = (
    ("unique constraint", ConstraintViolation),
    ("duplicate", ConstraintViolation),
    ("not null constraint", RequiredFieldViolation),
    ("cannot be null", RequiredFieldViolation),
    ("foreign key constraint", ReferentialViolation),
    ("check constraint", DomainViolation),
    ("data truncated", DomainViolation),
)


def _classify(orig):
    pgcode = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if pgcode in _PG_CODES:
        return _PG_CODES[pgcode]
    args = getattr(orig, "args", ())
    if args and isinstance(args[0], int) and args[0] in _MYSQL_CODES:
        return _MYSQL_CODES[args[0]]
    text = str(orig).lower()
    for marker, error_cls in _MESSAGE_MARKERS:
        if marker in text:
            return error_cls
    return None


def translate(exc, entity: str):
    """Map an IntegrityError or DataError from the engine onto a ClinicError."""
    error_cls = _classify(exc.orig)
    if error_cls is None:
        error_cls = DomainViolation if isinstance(exc, DataError) else ConstraintViolation
    detail = str(exc.orig)
    messages = {
        ConstraintViolation: f"{entity} violates a uniqueness constraint",
        RequiredFieldViolation: f"{entity} is missing a required field",
        ReferentialViolation: f"{entity} violates referential integrity",
        DomainViolation: f"{entity} has a value outside its allowed set",
    }
    return error_cls(messages[error_cls], {"engine_error": detail})
