"""Import all models so SQLAlchemy metadata knows about them."""
from app.models.base import Base
from app.models.user import User
from app.models.auth_token import AuthToken
from app.models.file_record import FileRecord, FileType

__all__ = [
    "Base",
    "User", "AuthToken", "FileRecord", "FileType",
]
