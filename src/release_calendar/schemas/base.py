"""Base schema class shared by upstream records and published releases."""

from pydantic import BaseModel, ConfigDict


class SchemaBase(BaseModel):
    """Base class for all immutable Pydantic schemas.

    Upstream records and releases are values: once parsed they are never
    mutated, so the same instance can be shared between poll cycles and
    concurrent readers.
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )
