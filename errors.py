from enum import Enum


class ErrorKind(str, Enum):
    """Categories of failures surfaced to the HTTP boundary"""
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    VALIDATION = "validation"
    INTERNAL = "internal"


STATUS_CODES = {
    ErrorKind.CONFLICT: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.VALIDATION: 400,
    ErrorKind.INTERNAL: 500,
}


class TaskManagerError(Exception):
    """Base error carrying an ErrorKind tag"""
    kind = ErrorKind.INTERNAL

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]


class ConflictError(TaskManagerError):
    kind = ErrorKind.CONFLICT


class UnauthorizedError(TaskManagerError):
    kind = ErrorKind.UNAUTHORIZED


class NotFoundError(TaskManagerError):
    kind = ErrorKind.NOT_FOUND


class InvalidInputError(TaskManagerError):
    kind = ErrorKind.VALIDATION
