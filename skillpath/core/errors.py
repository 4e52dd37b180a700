"""Domain errors raised by services and their HTTP mapping."""
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse


class SkillPathError(Exception):
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class InvalidInputError(SkillPathError):
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(SkillPathError):
    status_code = status.HTTP_404_NOT_FOUND


class PermissionDenied(SkillPathError):
    status_code = status.HTTP_403_FORBIDDEN


class ConflictError(SkillPathError):
    status_code = status.HTTP_409_CONFLICT


class GenerationError(SkillPathError):
    """Content provider failed or returned unusable output."""

    status_code = status.HTTP_502_BAD_GATEWAY


async def _handle_domain_error(request: Request, exc: SkillPathError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SkillPathError, _handle_domain_error)
