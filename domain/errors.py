from domain.constants import (
    ERROR_KIND_ACCESS,
    ERROR_KIND_COPY,
    ERROR_KIND_DIRECTORY_CREATION,
    ERROR_KIND_INVALID_INPUT,
)


class TypeCopierError(Exception):
    """Base error for the project."""
    kind = "ERROR"


class InvalidInputError(TypeCopierError):
    kind = ERROR_KIND_INVALID_INPUT


class AccessError(TypeCopierError):
    kind = ERROR_KIND_ACCESS


class DirectoryCreationError(TypeCopierError):
    kind = ERROR_KIND_DIRECTORY_CREATION


class CopyError(TypeCopierError):
    kind = ERROR_KIND_COPY

    def __init__(self, message: str, code: str = "COPY_FAIL"):
        super().__init__(message)
        self.code = code
