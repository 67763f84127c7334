"""Error taxonomy shared by the services, and its HTTP translation."""
from fastapi import Request
from fastapi.responses import JSONResponse


class SchoolRegistryError(Exception):
    """Base class for failures the caller is expected to react to."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class DuplicateKeyError(SchoolRegistryError):
    """A unique value (NISN, username, generated number) is already taken."""

    status_code = 409


class NotFoundError(SchoolRegistryError):
    """A referenced record does not exist."""

    status_code = 404


class InvalidInputError(SchoolRegistryError):
    """Malformed input the schemas could not reject on their own."""

    status_code = 400


class StoreUnavailableError(SchoolRegistryError):
    """The database could not be reached."""

    status_code = 503


async def registry_error_handler(request: Request, exc: SchoolRegistryError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
