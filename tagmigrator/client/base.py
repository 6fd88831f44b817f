"""
Abstract management client interface.
Defines the contract for every server connection the migration runs against.
"""

from abc import ABC, abstractmethod

from tagmigrator.schemas import (
    Annotation,
    CustomAttributeDefinition,
    InventoryItem,
    Tag,
    TagCategory,
)


class ManagementClient(ABC):
    """
    Abstract base class for a connection to one management server.

    Every method is a blocking round trip from the caller's point of
    view: the migration awaits each call before issuing the next.
    """

    async def __aenter__(self) -> "ManagementClient":
        try:
            await self.connect()
        except BaseException:
            # __aexit__ does not run when entering fails
            await self.close()
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def connect(self) -> None:
        """Open the server session. No-op by default."""

    async def close(self) -> None:
        """Close the server session. No-op by default."""

    @abstractmethod
    async def list_custom_attributes(self) -> list[CustomAttributeDefinition]:
        """
        List all custom attribute definitions.

        Returns:
            Custom attribute definitions, in server order
        """
        pass

    @abstractmethod
    async def list_tag_categories(self) -> list[TagCategory]:
        """List all tag categories."""
        pass

    @abstractmethod
    async def create_tag_category(
        self,
        name: str,
        entity_types: list[str],
    ) -> TagCategory:
        """
        Create a single-cardinality tag category.

        Args:
            name: Category name
            entity_types: Entity types the category's tags may be attached to

        Returns:
            The created category

        Raises:
            ServerRequestException: If the server rejects the category
        """
        pass

    @abstractmethod
    async def update_tag_category(
        self,
        category: TagCategory,
        entity_types: list[str],
    ) -> TagCategory:
        """
        Add entity types to an existing category.

        Types already on the category are kept; the update never removes any.

        Args:
            category: Category as previously read from the server
            entity_types: Entity types to add

        Returns:
            The updated category
        """
        pass

    async def upsert_tag_category(
        self,
        name: str,
        entity_types: list[str],
        existing: TagCategory | None = None,
    ) -> TagCategory:
        """
        Create the category, or add entity types to it if it already exists.

        Args:
            name: Category name
            entity_types: Entity types required for the category
            existing: The category with that exact name, if present on the server

        Returns:
            The created or updated category
        """
        if existing is not None:
            return await self.update_tag_category(existing, entity_types)
        return await self.create_tag_category(name, entity_types)

    @abstractmethod
    async def list_tags(self) -> list[Tag]:
        """List all tags of all categories."""
        pass

    @abstractmethod
    async def create_tag(self, name: str, category: TagCategory) -> Tag:
        """
        Create a tag within a category.

        Args:
            name: Tag name (the annotation value)
            category: Owning category

        Returns:
            The created tag
        """
        pass

    @abstractmethod
    async def get_tag(self, name: str, category: TagCategory) -> Tag:
        """
        Look up a tag by name within a category.

        Raises:
            TagNotFoundException: If the category holds no tag with that name
        """
        pass

    @abstractmethod
    async def list_inventory(self) -> list[InventoryItem]:
        """List every inventory item."""
        pass

    @abstractmethod
    async def list_annotations(self, item: InventoryItem) -> list[Annotation]:
        """
        List the custom attribute values of one inventory item.

        Args:
            item: Inventory item

        Returns:
            One annotation per custom attribute applicable to the item;
            values may be empty or missing
        """
        pass

    @abstractmethod
    async def create_tag_assignment(self, tag: Tag, item: InventoryItem) -> None:
        """
        Attach a tag to an inventory item.

        No check for an identical existing assignment is made.
        """
        pass
