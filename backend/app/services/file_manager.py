"""File resource manager.

Owns creation, lookup, listing, visibility and deletion of FileRecords.
Every operation takes the caller's resolved user id explicitly (None for an
anonymous caller) and raises app.errors kinds; nothing here knows about HTTP.

Lookups that fail on ownership are reported as NotFound so a caller cannot
probe for other users' ids. delete_file() is the one exception: it reports
PermissionDenied for an existing record owned by someone else.
"""
import base64
import binascii
import logging
import mimetypes
import uuid

from sqlalchemy import Select, delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.errors import (
    InvalidId,
    MissingData,
    MissingName,
    MissingType,
    NoContent,
    NotFound,
    ParentNotFolder,
    ParentNotFound,
    PermissionDenied,
    Unauthenticated,
)
from app.models.file_record import FileRecord, FileType
from app.services.file_storage import file_storage

logger = logging.getLogger(__name__)

PAGE_SIZE = 20
ROOT_PARENT_ID = 0
_DEFAULT_CONTENT_TYPE = "application/octet-stream"


def _require_user(user_id: uuid.UUID | None) -> uuid.UUID:
    if user_id is None:
        raise Unauthenticated()
    return user_id


def parse_id(value) -> uuid.UUID | None:
    """Parse a client-supplied id. Returns None if it is not a valid id."""
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        return None
    try:
        return uuid.UUID(value)
    except ValueError:
        return None


def is_root(parent_id) -> bool:
    """True for every spelling of the root sentinel: missing, 0 or '0'."""
    return parent_id is None or parent_id == "" or str(parent_id) == str(ROOT_PARENT_ID)


def page_number(page) -> int:
    """Lenient page parsing: anything that is not a non-negative integer is page 0."""
    try:
        number = int(page)
    except (TypeError, ValueError):
        return 0
    return max(number, 0)


def paginate(query: Select, page) -> Select:
    """Apply the fixed page window over creation order."""
    return (
        query.order_by(FileRecord.seq)
        .limit(PAGE_SIZE)
        .offset(page_number(page) * PAGE_SIZE)
    )


async def _find(db: AsyncSession, file_id: uuid.UUID) -> FileRecord | None:
    result = await db.execute(select(FileRecord).where(FileRecord.id == file_id))
    return result.scalar_one_or_none()


async def _find_owned(db: AsyncSession, user_id: uuid.UUID, file_id) -> FileRecord:
    parsed = parse_id(file_id)
    if parsed is None:
        raise NotFound()
    result = await db.execute(
        select(FileRecord).where(FileRecord.id == parsed, FileRecord.user_id == user_id)
    )
    record = result.scalar_one_or_none()
    if not record:
        raise NotFound()
    return record


async def create_file(
    db: AsyncSession,
    user_id: uuid.UUID | None,
    name: str | None,
    type: str | None,
    parent_id=None,
    is_public: bool | None = False,
    data: str | None = None,
) -> FileRecord:
    """Validate and persist a new file or folder.

    Checks run in a fixed order and the first failure wins: caller, name,
    type, data (non-folders only), then parent. The parent must be one of
    the caller's own folders; anyone else's is reported as ParentNotFound.

    For non-folders the base64 payload is decoded and written to the blob
    store before the record is saved; a failed metadata write can leave an
    orphan blob behind.
    """
    user_id = _require_user(user_id)
    if not name or not isinstance(name, str):
        raise MissingName()
    try:
        file_type = FileType(type)
    except (TypeError, ValueError):
        raise MissingType()
    if file_type != FileType.FOLDER and (not data or not isinstance(data, str)):
        raise MissingData()

    parent_uuid = None
    if not is_root(parent_id):
        parent_uuid = parse_id(parent_id)
        if parent_uuid is None:
            raise ParentNotFound()
        result = await db.execute(
            select(FileRecord).where(
                FileRecord.id == parent_uuid, FileRecord.user_id == user_id
            )
        )
        parent = result.scalar_one_or_none()
        if not parent:
            raise ParentNotFound()
        if not parent.is_folder:
            raise ParentNotFolder()

    local_path = None
    if file_type != FileType.FOLDER:
        try:
            # MIME-style wrapped payloads carry newlines every 76 chars.
            content = base64.b64decode("".join(data.split()), validate=True)
        except (binascii.Error, ValueError):
            raise MissingData()
        local_path = await file_storage.save(content)

    record = FileRecord(
        user_id=user_id,
        name=name,
        type=file_type,
        is_public=bool(is_public),
        parent_id=parent_uuid,
        local_path=local_path,
    )
    db.add(record)
    await db.commit()
    await db.refresh(record)
    logger.info("Created %s %s for user %s", file_type.value, record.id, user_id)
    return record


async def get_file(db: AsyncSession, user_id: uuid.UUID | None, file_id) -> FileRecord:
    """Fetch one of the caller's records."""
    user_id = _require_user(user_id)
    if parse_id(file_id) is None:
        raise InvalidId()
    return await _find_owned(db, user_id, file_id)


async def list_files(
    db: AsyncSession,
    user_id: uuid.UUID | None,
    parent_id=None,
    page=0,
) -> list[FileRecord]:
    """One page of the caller's records directly under parent_id.

    An unknown, malformed or foreign parent gives an empty page.
    """
    user_id = _require_user(user_id)
    query = select(FileRecord).where(FileRecord.user_id == user_id)
    if is_root(parent_id):
        query = query.where(FileRecord.parent_id.is_(None))
    else:
        parent_uuid = parse_id(parent_id)
        if parent_uuid is None:
            return []
        query = query.where(FileRecord.parent_id == parent_uuid)

    result = await db.execute(paginate(query, page))
    return list(result.scalars().all())


async def list_my_files(db: AsyncSession, user_id: uuid.UUID | None, page=0) -> list[FileRecord]:
    """One page of all the caller's records, whatever their parent."""
    user_id = _require_user(user_id)
    query = select(FileRecord).where(FileRecord.user_id == user_id)
    result = await db.execute(paginate(query, page))
    return list(result.scalars().all())


async def set_visibility(
    db: AsyncSession,
    user_id: uuid.UUID | None,
    file_id,
    is_public: bool,
) -> FileRecord:
    """Publish or unpublish one of the caller's records. Idempotent."""
    user_id = _require_user(user_id)
    record = await _find_owned(db, user_id, file_id)
    if record.is_public != is_public:
        record.is_public = is_public
        await db.commit()
        await db.refresh(record)
    return record


async def collect_subtree(db: AsyncSession, root: FileRecord) -> list[FileRecord]:
    """Breadth-first walk over the parent_id index, root included."""
    subtree = [root]
    seen = {root.id}
    frontier = [root.id]
    while frontier:
        result = await db.execute(select(FileRecord).where(FileRecord.parent_id.in_(frontier)))
        children = [child for child in result.scalars().all() if child.id not in seen]
        seen.update(child.id for child in children)
        subtree.extend(children)
        frontier = [child.id for child in children]
    return subtree


async def delete_file(db: AsyncSession, user_id: uuid.UUID | None, file_id) -> int:
    """Delete a record and, for folders, everything beneath it.

    Blobs go first, then all metadata rows in one transaction. Missing blobs
    are skipped, so re-running after a crash cleans up whatever rows remain.
    Returns the number of records removed.
    """
    user_id = _require_user(user_id)
    parsed = parse_id(file_id)
    if parsed is None:
        raise NotFound()
    record = await _find(db, parsed)
    if not record:
        raise NotFound()
    if record.user_id != user_id:
        raise PermissionDenied()

    subtree = await collect_subtree(db, record)
    for item in subtree:
        if item.local_path:
            await file_storage.delete(item.local_path)

    await db.execute(delete(FileRecord).where(FileRecord.id.in_([item.id for item in subtree])))
    await db.commit()
    logger.info("Deleted %s %s (%d record(s))", record.type.value, record.id, len(subtree))
    return len(subtree)


def guess_content_type(name: str) -> str:
    """MIME type from the file name's extension, octet-stream when unknown."""
    mime_type, _ = mimetypes.guess_type(name)
    if mime_type is None:
        return _DEFAULT_CONTENT_TYPE
    return mime_type


async def get_file_data(
    db: AsyncSession,
    user_id: uuid.UUID | None,
    file_id,
) -> tuple[bytes, str]:
    """Raw bytes and content type of a file.

    Anonymous callers may read public files. A private file read by anyone
    but its owner is reported as NotFound.
    """
    parsed = parse_id(file_id)
    if parsed is None:
        raise NotFound()
    record = await _find(db, parsed)
    if not record:
        raise NotFound()
    if not record.is_public and (user_id is None or record.user_id != user_id):
        raise NotFound()
    if record.is_folder:
        raise NoContent()

    content = await file_storage.read(record.local_path) if record.local_path else None
    if content is None:
        raise NotFound()
    return content, guess_content_type(record.name)
