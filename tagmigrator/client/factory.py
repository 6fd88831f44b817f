"""
Management client factory.
Builds a configured client for the server named on the command line.
"""

from tagmigrator.client.rest import RestManagementClient
from tagmigrator.config import Settings, get_settings


def normalize_server_url(server: str) -> str:
    """Turn a bare host name into an https URL."""
    server = server.strip().rstrip("/")
    if "://" not in server:
        server = f"https://{server}"
    return server


def get_client(
    server: str,
    settings: Settings | None = None,
    *,
    username: str | None = None,
    password: str | None = None,
    verify_ssl: bool | None = None,
    timeout: float | None = None,
) -> RestManagementClient:
    """
    Get a client for one management server.

    Explicit arguments take precedence over the settings.

    Args:
        server: Host name or URL of the server
        settings: Settings to fall back on. Defaults to get_settings()
        username: Login account
        password: Login password
        verify_ssl: Verify the server certificate
        timeout: Per-request timeout in seconds

    Returns:
        An unconnected RestManagementClient
    """
    settings = settings or get_settings()

    return RestManagementClient(
        normalize_server_url(server),
        username=username if username is not None else settings.USERNAME,
        password=password if password is not None else settings.PASSWORD,
        api_prefix=settings.API_PREFIX,
        verify_ssl=settings.VERIFY_SSL if verify_ssl is None else verify_ssl,
        timeout=settings.REQUEST_TIMEOUT if timeout is None else timeout,
    )
