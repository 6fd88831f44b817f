"""
Pydantic schemas for legacy custom attributes and their annotation values.
"""

from pydantic import BaseModel


class CustomAttributeDefinition(BaseModel):
    """
    A custom attribute defined on the server.

    A missing target type means the attribute applies to every
    entity kind.
    """

    name: str
    target_type: str | None = None


class Annotation(BaseModel):
    """Value of one custom attribute on one inventory item."""

    name: str
    value: str | None = None
