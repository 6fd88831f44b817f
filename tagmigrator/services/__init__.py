"""
Migration services.
Each service runs one group of pipeline stages against a ManagementClient.
"""

from tagmigrator.services.annotation_service import AnnotationService, index_annotations
from tagmigrator.services.category_service import CategoryService, derive_categories
from tagmigrator.services.migration_service import MigrationService
from tagmigrator.services.tag_service import TagService, existing_tag_names

__all__ = [
    "AnnotationService",
    "CategoryService",
    "MigrationService",
    "TagService",
    "derive_categories",
    "existing_tag_names",
    "index_annotations",
]
