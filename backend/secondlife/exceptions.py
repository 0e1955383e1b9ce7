"""Domain errors raised by services and mapped to HTTP responses"""

from fastapi import Request, status
from fastapi.responses import JSONResponse


class ServiceError(Exception):
    """Base class for service-layer errors"""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(ServiceError):
    status_code = status.HTTP_404_NOT_FOUND


class PermissionDeniedError(ServiceError):
    status_code = status.HTTP_403_FORBIDDEN


class InvalidOperationError(ServiceError):
    status_code = status.HTTP_400_BAD_REQUEST


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    """Render a ServiceError the way HTTPException is rendered"""
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
