from typing import Any, Optional


class AppError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None, code: str = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code or (str(status_code) if status_code is not None else None)

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AppError):
    def __init__(self, message: str = "Client is not configured"):
        super().__init__(message, code="configuration")


class ValidationError(AppError):
    def __init__(self, message: str = "Validation failed"):
        super().__init__(message, status_code=422, code="validation")


class AuthenticationError(AppError):
    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, status_code=401, code="authentication")


class RemoteError(AppError):
    """Error reported by the gateway in a structured response body."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message, status_code=status_code, code="remote")
        self.body = body
