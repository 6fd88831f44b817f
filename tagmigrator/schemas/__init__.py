"""
Pydantic schemas for server entities and migration state.
"""

from tagmigrator.schemas.custom_attribute import Annotation, CustomAttributeDefinition
from tagmigrator.schemas.inventory import InventoryItem
from tagmigrator.schemas.migration import (
    AnnotationIndex,
    CategoryRequirements,
    MigrationReport,
    MigrationStage,
)
from tagmigrator.schemas.tag import (
    ALL_ENTITY_TYPES,
    CategoryCardinality,
    Tag,
    TagAssignment,
    TagCategory,
    qualified_tag_name,
)

__all__ = [
    # Custom attribute schemas
    "Annotation",
    "CustomAttributeDefinition",
    "InventoryItem",
    # Tag schemas
    "ALL_ENTITY_TYPES",
    "CategoryCardinality",
    "Tag",
    "TagAssignment",
    "TagCategory",
    "qualified_tag_name",
    # Migration state
    "AnnotationIndex",
    "CategoryRequirements",
    "MigrationReport",
    "MigrationStage",
]
