from __future__ import annotations


class GenerationError(Exception):
    """Base class for failures of a suggestion generation request."""

    status_code = 500


class Unauthorized(GenerationError):
    status_code = 401


class UpstreamError(GenerationError):
    status_code = 502


class InvalidModelOutput(GenerationError):
    status_code = 502


class PersistenceError(GenerationError):
    status_code = 500


class AuthError(Exception):
    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class StoreError(Exception):
    pass
