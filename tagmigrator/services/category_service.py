"""
Category service - Derives tag categories from custom attributes and
creates or updates them on the server.
"""

import logging

from tagmigrator.client.base import ManagementClient
from tagmigrator.schemas import (
    ALL_ENTITY_TYPES,
    CategoryRequirements,
    CustomAttributeDefinition,
    TagCategory,
)

logger = logging.getLogger(__name__)


def derive_categories(
    definitions: list[CustomAttributeDefinition],
) -> CategoryRequirements:
    """
    Derive the required tag categories from custom attribute definitions.

    Every definition contributes its target type to the category of the
    same name; a definition without a target type contributes "All".
    Repeated types are kept, one entry per definition.

    Args:
        definitions: Custom attribute definitions read from the server

    Returns:
        Mapping of category name to entity types
    """
    requirements: CategoryRequirements = {}
    for definition in definitions:
        entity_type = definition.target_type or ALL_ENTITY_TYPES
        requirements.setdefault(definition.name, []).append(entity_type)
    return requirements


class CategoryService:
    """Service class for tag category operations."""

    def __init__(self, client: ManagementClient):
        self.client = client

    async def materialize(
        self,
        requirements: CategoryRequirements,
        existing: list[TagCategory],
    ) -> dict[str, TagCategory]:
        """
        Create missing categories and extend existing ones.

        A category whose exact name is already on the server is updated by
        adding the required entity types; any other is created with
        single cardinality. Server errors are not caught.

        Args:
            requirements: Derived category requirements
            existing: Categories present on the server before the run

        Returns:
            Mapping of category name to the created or updated category
        """
        existing_by_name = {category.name: category for category in existing}
        categories: dict[str, TagCategory] = {}

        for name, entity_types in requirements.items():
            current = existing_by_name.get(name)
            if current is not None:
                logger.info(f"Updating tag category '{name}' with entity types {entity_types}")
            else:
                logger.info(f"Creating tag category '{name}' for entity types {entity_types}")
            categories[name] = await self.client.upsert_tag_category(
                name,
                entity_types,
                existing=current,
            )

        return categories
