"""Error taxonomy for the files manager.

Every error carries the HTTP status and the user-facing message it is
rendered with. `app.main` turns any FilesManagerError into
``{"error": message}`` so services never import FastAPI.
"""


class FilesManagerError(Exception):
    """Base class for all request-terminating errors."""

    status_code: int = 400
    message: str = "Bad request"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthenticated(FilesManagerError):
    status_code = 401
    message = "Unauthorized"


class MissingName(FilesManagerError):
    message = "Missing name"


class MissingType(FilesManagerError):
    message = "Missing type"


class MissingData(FilesManagerError):
    message = "Missing data"


class ParentNotFound(FilesManagerError):
    message = "Parent not found"


class ParentNotFolder(ParentNotFound):
    """Parent exists but is not a folder. Reported exactly like a missing parent."""


class InvalidId(FilesManagerError):
    message = "Invalid id"


class NotFound(FilesManagerError):
    status_code = 404
    message = "Not found"


class PermissionDenied(FilesManagerError):
    status_code = 403
    message = "Permission denied"


class NoContent(FilesManagerError):
    message = "A folder doesn't have content"


class MissingEmail(FilesManagerError):
    message = "Missing email"


class MissingPassword(FilesManagerError):
    message = "Missing password"


class EmailAlreadyExists(FilesManagerError):
    message = "Already exist"
