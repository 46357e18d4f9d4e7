"""Errors raised while serving an API operation."""

from __future__ import annotations

from http import HTTPStatus


class OperationError(Exception):
    """Base error tied to an operation; carries the HTTP status to respond with."""

    _stage = "error"

    def __init__(self, operation: str, err: BaseException) -> None:
        super().__init__(operation, err)
        self.operation = operation
        self.err = err
        self.__cause__ = err

    def operation_id(self) -> str:
        return self.operation

    def code(self) -> int:
        return int(HTTPStatus.BAD_REQUEST)

    def __str__(self) -> str:
        return f"operation {self.operation}: {self._stage}: {self.err}"


class SecurityError(OperationError):
    """Failure reported by a security handler."""

    def __init__(self, operation: str, security: str, err: BaseException) -> None:
        super().__init__(operation, err)
        self.security = security

    def __str__(self) -> str:
        return f'operation {self.operation}: security "{self.security}": {self.err}'


class DecodeParamsError(OperationError):
    """Failure while decoding request parameters."""

    _stage = "decode params"


class DecodeRequestError(OperationError):
    """Failure while decoding the request body."""

    _stage = "decode request"