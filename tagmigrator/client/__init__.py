"""
Management server clients.
The migration only depends on the abstract ManagementClient interface.
"""

from tagmigrator.client.base import ManagementClient
from tagmigrator.client.metrics import RequestMetrics
from tagmigrator.client.rest import RestManagementClient
from tagmigrator.client.factory import get_client, normalize_server_url

__all__ = [
    "ManagementClient",
    "RequestMetrics",
    "RestManagementClient",
    "get_client",
    "normalize_server_url",
]
