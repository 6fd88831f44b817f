"""
Pydantic schemas for tag categories, tags and tag assignments.
"""

import enum

from pydantic import BaseModel, ConfigDict, Field

from tagmigrator.schemas.inventory import InventoryItem

# Entity type of a category whose tags may be attached to anything
ALL_ENTITY_TYPES = "All"


class CategoryCardinality(str, enum.Enum):
    """How many tags of one category an object may carry."""
    SINGLE = "SINGLE"
    MULTIPLE = "MULTIPLE"


class TagCategory(BaseModel):
    """A tag category as stored on the server."""

    id: str
    name: str
    description: str = ""
    cardinality: CategoryCardinality = CategoryCardinality.SINGLE
    entity_types: list[str] = Field(default_factory=list, alias="associable_types")

    model_config = ConfigDict(populate_by_name=True)


class Tag(BaseModel):
    """A tag as stored on the server."""

    id: str
    name: str
    category_id: str
    description: str = ""


class TagAssignment(BaseModel):
    """Association between one tag and one inventory item."""

    tag: Tag
    item: InventoryItem


def qualified_tag_name(category_name: str, tag_name: str) -> str:
    """Identifier of a tag across categories, e.g. ``Owner/Alice``."""
    return f"{category_name}/{tag_name}"
