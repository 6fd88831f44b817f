"""
Annotation service - Reads custom attribute values from the inventory
and indexes them by category and value.
"""

import logging

from tagmigrator.client.base import ManagementClient
from tagmigrator.schemas import Annotation, AnnotationIndex, InventoryItem

logger = logging.getLogger(__name__)

ItemAnnotations = tuple[InventoryItem, list[Annotation]]


def index_annotations(pairs: list[ItemAnnotations]) -> AnnotationIndex:
    """
    Build the category -> value -> items index.

    Annotations with a missing or empty value are skipped. Items are
    appended as read, without deduplication.
    """
    index: AnnotationIndex = {}
    for item, annotations in pairs:
        for annotation in annotations:
            if not annotation.value:
                continue
            index.setdefault(annotation.name, {}).setdefault(annotation.value, []).append(item)
    return index


class AnnotationService:
    """Service class for annotation collection."""

    def __init__(self, client: ManagementClient):
        self.client = client

    async def collect(self) -> list[ItemAnnotations]:
        """
        Read the annotations of every inventory item.

        Issues one listing for the inventory and one request per item.

        Returns:
            (item, annotations) pairs in inventory order
        """
        items = await self.client.list_inventory()
        logger.info(f"Reading annotations of {len(items)} inventory items")

        pairs: list[ItemAnnotations] = []
        for item in items:
            pairs.append((item, await self.client.list_annotations(item)))
        return pairs
