"""File request/response schemas."""
from typing import Any, Optional, Union
from app.models.file_record import FileType
from app.schemas.base import CamelModel, CamelORMModel


class FileCreate(CamelModel):
    # Left untyped; file_manager.create_file validates each field in order.
    name: Any = None
    type: Any = None
    parent_id: Any = None
    is_public: Any = False
    data: Any = None


class FileResponse(CamelORMModel):
    id: str
    user_id: str
    name: str
    type: FileType
    is_public: bool
    # Root renders as integer 0, any other parent as its id string
    parent_id: Union[str, int] = 0
    local_path: Optional[str] = None
