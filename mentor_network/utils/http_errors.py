# mentor_network/utils/http_errors.py
from fastapi import HTTPException, status
from ..exceptions import (
    BusinessLogicError,
    UnauthorizedError,
    ForbiddenError,
    NotFoundError,
    InvalidOperationError,
    ConstraintViolationError,
    StoreUnavailableError,
)

# Checked in order; subclasses map through their parent
STATUS_BY_ERROR = (
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidOperationError, status.HTTP_400_BAD_REQUEST),
    (ConstraintViolationError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)

def to_http_exception(error: BusinessLogicError) -> HTTPException:
    for error_class, status_code in STATUS_BY_ERROR:
        if isinstance(error, error_class):
            return HTTPException(status_code=status_code, detail=str(error))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(error))
