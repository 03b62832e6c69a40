from fastapi import HTTPException, status

from ...application.results import Err, Result
from ...domain.errors import ErrorKind

STATUS_BY_KIND = {
    ErrorKind.ROLE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.DUPLICATE_USERNAME: status.HTTP_409_CONFLICT,
    ErrorKind.DUPLICATE_EMAIL: status.HTTP_409_CONFLICT,
    ErrorKind.SUPER_ADMIN_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.CORRUPT_CREDENTIAL_FORMAT: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http_error(err: Err) -> HTTPException:
    return HTTPException(status_code=STATUS_BY_KIND[err.kind], detail=err.message or err.kind.value)


def unwrap(result: Result):
    """Return the value of an Ok result or raise the HTTP error matching the Err kind."""
    if not result.ok:
        raise to_http_error(result)
    return result.value
