"""
Pydantic schema for inventory items (VMs, hosts, clusters, ...).
"""

from pydantic import BaseModel, ConfigDict


class InventoryItem(BaseModel):
    """A manageable object of the virtualization platform."""

    id: str
    name: str
    type: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.type}:{self.name}"
