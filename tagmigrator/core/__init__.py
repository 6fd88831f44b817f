"""Core utilities and exceptions for the tag migration tool."""

from tagmigrator.core.exceptions import (
    MigrationException,
    ServerRequestException,
    AuthenticationException,
    CategoryNotFoundException,
    TagNotFoundException,
)

__all__ = [
    "MigrationException",
    "ServerRequestException",
    "AuthenticationException",
    "CategoryNotFoundException",
    "TagNotFoundException",
]
