"""
Migration service - Runs the custom attribute to tag pipeline.

Stages run once, in order, each consuming the maps returned by the
previous ones:

1. derive categories from custom attribute definitions
2. fetch existing categories and tags
3. create or update categories
4. index annotation values of the inventory
5. create missing tags
6. assign tags to inventory items

The first error aborts the run. Changes already made on the server
are kept.
"""

import logging

from tagmigrator.client.base import ManagementClient
from tagmigrator.schemas import MigrationReport, MigrationStage
from tagmigrator.services.annotation_service import AnnotationService, index_annotations
from tagmigrator.services.category_service import CategoryService, derive_categories
from tagmigrator.services.tag_service import TagService, existing_tag_names

logger = logging.getLogger(__name__)


class MigrationService:
    """Service class for a full migration run against one server."""

    def __init__(self, client: ManagementClient):
        self.client = client
        self.categories = CategoryService(client)
        self.annotations = AnnotationService(client)
        self.tags = TagService(client)

    async def run(self) -> MigrationReport:
        """
        Execute the migration.

        Returns:
            Report of what was created and updated

        Raises:
            MigrationException: If the server rejects any request
        """
        report = MigrationReport()
        stage = MigrationStage.DERIVE_CATEGORIES
        try:
            logger.info("Collecting information about custom attributes")
            definitions = await self.client.list_custom_attributes()
            requirements = derive_categories(definitions)
            report.completed_stages.append(stage)

            stage = MigrationStage.FETCH_EXISTING
            existing_categories = await self.client.list_tag_categories()
            existing_tags = await self.client.list_tags()
            existing_names = existing_tag_names(existing_tags, existing_categories)
            report.completed_stages.append(stage)

            stage = MigrationStage.MATERIALIZE_CATEGORIES
            logger.info("Creating the necessary tag categories")
            categories = await self.categories.materialize(requirements, existing_categories)
            present = {category.name for category in existing_categories}
            report.categories_updated = sum(1 for name in categories if name in present)
            report.categories_created = len(categories) - report.categories_updated
            report.completed_stages.append(stage)

            stage = MigrationStage.INDEX_ANNOTATIONS
            logger.info("Collecting information about annotations")
            pairs = await self.annotations.collect()
            index = index_annotations(pairs)
            total = sum(len(annotations) for _, annotations in pairs)
            report.annotations_indexed = sum(
                len(items) for values in index.values() for items in values.values()
            )
            report.annotations_skipped = total - report.annotations_indexed
            report.completed_stages.append(stage)

            stage = MigrationStage.MATERIALIZE_TAGS
            logger.info("Creating the necessary tags")
            created = await self.tags.materialize(index, categories, existing_names)
            report.tags_created = len(created)
            report.tags_existing = sum(len(values) for values in index.values()) - len(created)
            report.completed_stages.append(stage)

            stage = MigrationStage.ASSIGN_TAGS
            logger.info("Assigning tags to inventory items")
            assignments = await self.tags.assign(index, categories)
            report.assignments_created = len(assignments)
            report.completed_stages.append(stage)
        except Exception:
            logger.error(f"Migration aborted during stage '{stage.value}'")
            raise

        logger.info("Done")
        return report
