# keeptrack/core/errors.py

from enum import Enum


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    INVALID_DATE_ORDER = "invalid_date_order"
    NOT_FOUND = "not_found"
    AUTHENTICATION = "authentication"
    MISSING_TOKEN = "missing_token"
    INVALID_TOKEN = "invalid_token"


# HTTP status per error kind. "Not found" also covers "not owned by caller".
STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INVALID_DATE_ORDER: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.MISSING_TOKEN: 401,
    ErrorKind.INVALID_TOKEN: 403,
}


class ServiceError(Exception):
    """
    Failure raised by the domain layer.
    Handlers choose the response status from `kind`, never from the message.
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def __repr__(self):
        return f"ServiceError({self.kind.value!r}, {self.message!r})"


def validation_error(message: str) -> ServiceError:
    return ServiceError(ErrorKind.VALIDATION, message)


def not_found(message: str) -> ServiceError:
    return ServiceError(ErrorKind.NOT_FOUND, message)
