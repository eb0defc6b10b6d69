"""Base schema classes with camelCase alias generation.

Request and response schemas inherit from these instead of BaseModel
directly, so Python code stays snake_case while the wire format stays
camelCase (isPublic, parentId, localPath, userId).
"""
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for request bodies. Accepts camelCase or snake_case keys."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class CamelORMModel(BaseModel):
    """Base for response schemas. Reads from SQLAlchemy, outputs camelCase."""
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
        "from_attributes": True,
    }
