"""
REST management client.

Talks to the server's automation API over HTTPS with httpx. Tagging
calls follow the ``/cis/tagging`` resource layout; custom attributes,
inventory and annotations live under ``/vcenter``.
"""

import logging
import time
from urllib.parse import quote

import httpx

from tagmigrator.client.base import ManagementClient
from tagmigrator.client.metrics import RequestMetrics
from tagmigrator.core.exceptions import (
    AuthenticationException,
    MigrationException,
    ServerRequestException,
    TagNotFoundException,
)
from tagmigrator.schemas import (
    Annotation,
    CategoryCardinality,
    CustomAttributeDefinition,
    InventoryItem,
    Tag,
    TagCategory,
)

logger = logging.getLogger(__name__)

SESSION_HEADER = "vmware-api-session-id"


def _unique(values: list[str]) -> list[str]:
    """Drop repeated values, keeping first-seen order."""
    return list(dict.fromkeys(values))


class RestManagementClient(ManagementClient):
    """
    httpx implementation of the management client.

    One session is opened by :meth:`connect` and closed by :meth:`close`.
    Requests are issued one at a time; nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        username: str | None = None,
        password: str | None = None,
        *,
        api_prefix: str = "/api",
        verify_ssl: bool = True,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the REST client.

        Args:
            base_url: Server URL, e.g. ``https://vcenter.example.com``
            username: Account used to open the session
            password: Password for the account
            api_prefix: Path prefix of the automation API
            verify_ssl: Verify the server certificate
            timeout: Per-request timeout in seconds
            transport: Transport for the underlying HTTP client (in-process servers)
        """
        self.base_url = base_url.rstrip("/")
        self.username = username
        self.password = password
        prefix = api_prefix.strip("/")
        self.api_prefix = f"/{prefix}" if prefix else ""
        self.metrics = RequestMetrics()

        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            verify=verify_ssl,
            timeout=timeout,
            transport=transport,
        )
        self._session_id: str | None = None

    @property
    def connected(self) -> bool:
        return self._session_id is not None

    async def _request(
        self,
        method: str,
        path: str,
        *,
        template: str | None = None,
        params: dict[str, str] | None = None,
        json: dict | None = None,
        auth: httpx.Auth | None = None,
    ) -> httpx.Response:
        """
        Send one request and map error statuses to exceptions.

        Args:
            method: HTTP method
            path: Path below the API prefix
            template: Path template used as the metrics key
            params: Query parameters
            json: JSON body
            auth: Request-level authentication (session login only)

        Raises:
            AuthenticationException: On HTTP 401
            ServerRequestException: On any other 4xx/5xx status
        """
        url = f"{self.api_prefix}{path}"
        headers = {SESSION_HEADER: self._session_id} if self._session_id else {}

        start = time.perf_counter()
        response = await self._http.request(
            method,
            url,
            params=params,
            json=json,
            headers=headers,
            auth=auth,
        )
        duration = time.perf_counter() - start

        self.metrics.record_request(
            method=method,
            path=template or path,
            status_code=response.status_code,
            duration=duration,
        )
        logger.debug(f"{method} {url} -> {response.status_code} ({duration * 1000:.1f}ms)")

        if response.status_code == 401:
            raise AuthenticationException(method, url, response.text)
        if response.status_code >= 400:
            raise ServerRequestException(method, url, response.status_code, response.text)
        return response

    async def connect(self) -> None:
        """Open a session with HTTP basic credentials."""
        if self.connected:
            return
        auth = httpx.BasicAuth(self.username or "", self.password or "")
        response = await self._request("POST", "/session", auth=auth)
        self._session_id = response.json()
        logger.info(f"Connected to {self.base_url} as {self.username}")

    async def close(self) -> None:
        """Log out and release the underlying HTTP client."""
        try:
            if self.connected:
                try:
                    await self._request("DELETE", "/session")
                except (httpx.HTTPError, MigrationException) as e:
                    logger.warning(f"Failed to log out of {self.base_url}: {e}")
                self._session_id = None
        finally:
            await self._http.aclose()

    # Custom attributes and inventory

    async def list_custom_attributes(self) -> list[CustomAttributeDefinition]:
        response = await self._request("GET", "/vcenter/custom-attribute")
        return [CustomAttributeDefinition.model_validate(d) for d in response.json()]

    async def list_inventory(self) -> list[InventoryItem]:
        response = await self._request("GET", "/vcenter/inventory")
        return [InventoryItem.model_validate(d) for d in response.json()]

    async def list_annotations(self, item: InventoryItem) -> list[Annotation]:
        response = await self._request(
            "GET",
            f"/vcenter/inventory/{quote(item.type, safe='')}/{quote(item.id, safe='')}/annotation",
            template="/vcenter/inventory/{type}/{id}/annotation",
        )
        return [Annotation.model_validate(d) for d in response.json()]

    # Tag categories

    async def _get_category(self, category_id: str) -> TagCategory:
        response = await self._request(
            "GET",
            f"/cis/tagging/category/{quote(category_id, safe='')}",
            template="/cis/tagging/category/{id}",
        )
        return TagCategory.model_validate(response.json())

    async def list_tag_categories(self) -> list[TagCategory]:
        response = await self._request("GET", "/cis/tagging/category")
        return [await self._get_category(category_id) for category_id in response.json()]

    async def create_tag_category(
        self,
        name: str,
        entity_types: list[str],
    ) -> TagCategory:
        associable_types = _unique(entity_types)
        response = await self._request(
            "POST",
            "/cis/tagging/category",
            json={
                "name": name,
                "description": "",
                "cardinality": CategoryCardinality.SINGLE.value,
                "associable_types": associable_types,
            },
        )
        return TagCategory(
            id=response.json(),
            name=name,
            cardinality=CategoryCardinality.SINGLE,
            entity_types=associable_types,
        )

    async def update_tag_category(
        self,
        category: TagCategory,
        entity_types: list[str],
    ) -> TagCategory:
        associable_types = _unique([*category.entity_types, *entity_types])
        await self._request(
            "PATCH",
            f"/cis/tagging/category/{quote(category.id, safe='')}",
            template="/cis/tagging/category/{id}",
            json={"associable_types": associable_types},
        )
        return category.model_copy(update={"entity_types": associable_types})

    # Tags

    async def _get_tag(self, tag_id: str) -> Tag:
        response = await self._request(
            "GET",
            f"/cis/tagging/tag/{quote(tag_id, safe='')}",
            template="/cis/tagging/tag/{id}",
        )
        return Tag.model_validate(response.json())

    async def list_tags(self) -> list[Tag]:
        response = await self._request("GET", "/cis/tagging/tag")
        return [await self._get_tag(tag_id) for tag_id in response.json()]

    async def create_tag(self, name: str, category: TagCategory) -> Tag:
        response = await self._request(
            "POST",
            "/cis/tagging/tag",
            json={"category_id": category.id, "name": name, "description": ""},
        )
        return Tag(id=response.json(), name=name, category_id=category.id)

    async def get_tag(self, name: str, category: TagCategory) -> Tag:
        """Look up a tag with a single by-name request."""
        try:
            response = await self._request(
                "POST",
                "/cis/tagging/tag",
                template="/cis/tagging/tag?action=find-by-name",
                params={"action": "find-by-name"},
                json={"category_id": category.id, "name": name},
            )
        except ServerRequestException as e:
            if e.status_code == 404:
                raise TagNotFoundException(name, category.name) from e
            raise
        return Tag.model_validate(response.json())

    async def create_tag_assignment(self, tag: Tag, item: InventoryItem) -> None:
        await self._request(
            "POST",
            f"/cis/tagging/tag-association/{quote(tag.id, safe='')}",
            template="/cis/tagging/tag-association/{id}?action=attach",
            params={"action": "attach"},
            json={"object_id": {"type": item.type, "id": item.id}},
        )
