from fastapi import status
from libs.result import Error
from src.domain.errors import ErrorKind, kind_of


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


STATUS_FOR_KIND = {
    ErrorKind.authentication_failed: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.token_invalid: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.authorization_denied: status.HTTP_403_FORBIDDEN,
    ErrorKind.precondition_failed: status.HTTP_400_BAD_REQUEST,
    ErrorKind.not_found: status.HTTP_404_NOT_FOUND,
    ErrorKind.conflict: status.HTTP_409_CONFLICT,
}


def raise_for_error(error: Error):
    """Raise the HTTP exception for a use case error."""
    kind = kind_of(error.code)
    if kind is None:
        raise ServerError(error)
    raise ClientError(error, status_code=STATUS_FOR_KIND[kind])
