"""
Tag service - Creates tags for indexed annotation values and assigns
them to inventory items.
"""

import logging

from tagmigrator.client.base import ManagementClient
from tagmigrator.core.exceptions import CategoryNotFoundException
from tagmigrator.schemas import (
    AnnotationIndex,
    Tag,
    TagAssignment,
    TagCategory,
    qualified_tag_name,
)

logger = logging.getLogger(__name__)


def existing_tag_names(tags: list[Tag], categories: list[TagCategory]) -> set[str]:
    """
    Qualified names ("Category/Value") of tags already on the server.

    Tags whose category is not in ``categories`` are ignored.
    """
    category_names = {category.id: category.name for category in categories}
    return {
        qualified_tag_name(category_names[tag.category_id], tag.name)
        for tag in tags
        if tag.category_id in category_names
    }


def _category(categories: dict[str, TagCategory], name: str) -> TagCategory:
    try:
        return categories[name]
    except KeyError:
        raise CategoryNotFoundException(name) from None


class TagService:
    """Service class for tag operations."""

    def __init__(self, client: ManagementClient):
        self.client = client

    async def materialize(
        self,
        index: AnnotationIndex,
        categories: dict[str, TagCategory],
        existing_names: set[str],
    ) -> list[Tag]:
        """
        Create a tag for every indexed value not already on the server.

        Args:
            index: Annotation index
            categories: Materialized categories by name
            existing_names: Qualified names of tags present before the run

        Returns:
            The tags created by this call

        Raises:
            CategoryNotFoundException: If an indexed category was never materialized
        """
        created: list[Tag] = []
        for category_name, values in index.items():
            category = _category(categories, category_name)
            for value in values:
                name = qualified_tag_name(category_name, value)
                if name in existing_names:
                    logger.debug(f"Tag '{name}' already exists")
                    continue
                logger.info(f"Creating tag '{name}'")
                created.append(await self.client.create_tag(value, category))
        return created

    async def assign(
        self,
        index: AnnotationIndex,
        categories: dict[str, TagCategory],
    ) -> list[TagAssignment]:
        """
        Assign every indexed tag to the items holding its value.

        Each tag is looked up on the server again before assigning. No
        check is made for an identical existing assignment, so a rerun
        repeats every assignment.

        Args:
            index: Annotation index
            categories: Materialized categories by name

        Returns:
            The assignments created
        """
        assignments: list[TagAssignment] = []
        for category_name, values in index.items():
            category = _category(categories, category_name)
            for value, items in values.items():
                tag = await self.client.get_tag(value, category)
                for item in items:
                    logger.debug(f"Assigning '{qualified_tag_name(category_name, value)}' to {item}")
                    await self.client.create_tag_assignment(tag, item)
                    assignments.append(TagAssignment(tag=tag, item=item))
        return assignments
