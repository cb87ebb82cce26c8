from fastapi import status

from src.domain.errors import (
    ConflictError,
    DomainError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

# Domain errors a caller can fix; anything else is a server error
CLIENT_ERROR_STATUS = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    ForbiddenError: status.HTTP_403_FORBIDDEN,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
}


class ClientError(Exception):
    def __init__(self, base_error: DomainError, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: DomainError):
        self.base_error = base_error
        super().__init__(base_error.message)


def to_http_error(error: DomainError) -> Exception:
    for error_type, status_code in CLIENT_ERROR_STATUS.items():
        if isinstance(error, error_type):
            return ClientError(error, status_code=status_code)
    return ServerError(error)
