"""FileRecord model - file/folder metadata (actual bytes live in the blob store)."""
import enum
import uuid
from sqlalchemy import Boolean, Enum, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from app.models.base import Base, TimestampMixin, UserMixin


class FileType(str, enum.Enum):
    FOLDER = "folder"
    FILE = "file"
    IMAGE = "image"


class FileRecord(Base, TimestampMixin, UserMixin):
    __tablename__ = "files"

    # Creation order. Listings page over this, never over the uuid.
    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[uuid.UUID] = mapped_column(Uuid, unique=True, nullable=False, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[FileType] = mapped_column(
        Enum(FileType, name="file_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    # NULL is the root folder
    parent_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    local_path: Mapped[str | None] = mapped_column(String(1000), nullable=True)

    @property
    def is_folder(self) -> bool:
        return self.type == FileType.FOLDER
