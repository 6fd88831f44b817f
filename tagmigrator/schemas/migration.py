"""
Schemas describing a migration run: stage names, the transient maps
passed between stages and the final report.
"""

import enum

from pydantic import BaseModel, Field

from tagmigrator.schemas.inventory import InventoryItem

# category name -> entity types, one entry per custom attribute of that name
CategoryRequirements = dict[str, list[str]]

# category name -> tag value -> items holding that value
AnnotationIndex = dict[str, dict[str, list[InventoryItem]]]


class MigrationStage(str, enum.Enum):
    """Ordered stages of a migration run."""
    DERIVE_CATEGORIES = "derive_categories"
    FETCH_EXISTING = "fetch_existing"
    MATERIALIZE_CATEGORIES = "materialize_categories"
    INDEX_ANNOTATIONS = "index_annotations"
    MATERIALIZE_TAGS = "materialize_tags"
    ASSIGN_TAGS = "assign_tags"


class MigrationReport(BaseModel):
    """Counters collected over one migration run."""

    categories_created: int = 0
    categories_updated: int = 0
    annotations_indexed: int = 0
    annotations_skipped: int = 0
    tags_created: int = 0
    tags_existing: int = 0
    assignments_created: int = 0
    completed_stages: list[MigrationStage] = Field(default_factory=list)

    def summary(self) -> str:
        """One-line human readable summary."""
        return (
            f"categories: {self.categories_created} created, {self.categories_updated} updated; "
            f"tags: {self.tags_created} created, {self.tags_existing} already present; "
            f"assignments: {self.assignments_created} created; "
            f"annotations skipped (empty): {self.annotations_skipped}"
        )
