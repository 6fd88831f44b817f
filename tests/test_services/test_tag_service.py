"""
Tests for tag creation and assignment.
"""

import pytest

from tagmigrator.client import RestManagementClient
from tagmigrator.core.exceptions import CategoryNotFoundException, TagNotFoundException
from tagmigrator.schemas import InventoryItem, Tag, TagCategory
from tagmigrator.services import TagService, existing_tag_names

VM_A = InventoryItem(id="vm-1", name="VM-A", type="VirtualMachine")
VM_B = InventoryItem(id="vm-2", name="VM-B", type="VirtualMachine")


async def _owner_category(client: RestManagementClient) -> dict[str, TagCategory]:
    return {"Owner": await client.create_tag_category("Owner", ["All"])}


def test_existing_tag_names_are_qualified():
    """Test qualifying server tags with their category name."""
    categories = [
        TagCategory(id="c1", name="Owner"),
        TagCategory(id="c2", name="Env"),
    ]
    tags = [
        Tag(id="t1", name="Alice", category_id="c1"),
        Tag(id="t2", name="prod", category_id="c2"),
        Tag(id="t3", name="orphan", category_id="c9"),
    ]

    assert existing_tag_names(tags, categories) == {"Owner/Alice", "Env/prod"}


@pytest.mark.asyncio
async def test_materialize_creates_missing_tags(client: RestManagementClient, fake_server):
    """Test creating one tag per indexed value."""
    categories = await _owner_category(client)
    index = {"Owner": {"Alice": [VM_A], "Bob": [VM_B]}}

    created = await TagService(client).materialize(index, categories, existing_names=set())

    assert sorted(tag.name for tag in created) == ["Alice", "Bob"]
    assert all(tag.category_id == categories["Owner"].id for tag in created)
    assert fake_server.qualified_tag_names() == ["Owner/Alice", "Owner/Bob"]


@pytest.mark.asyncio
async def test_materialize_skips_existing_tags(client: RestManagementClient, fake_server):
    """Test that a pre-existing tag is not created again."""
    categories = await _owner_category(client)
    fake_server.add_tag("Owner", "Alice")
    index = {"Owner": {"Alice": [VM_A], "Bob": [VM_B]}}

    created = await TagService(client).materialize(index, categories, existing_names={"Owner/Alice"})

    assert [tag.name for tag in created] == ["Bob"]
    assert fake_server.qualified_tag_names() == ["Owner/Alice", "Owner/Bob"]


@pytest.mark.asyncio
async def test_materialize_unknown_category(client: RestManagementClient):
    """Test that an index entry without a category aborts."""
    with pytest.raises(CategoryNotFoundException):
        await TagService(client).materialize({"Owner": {"Alice": [VM_A]}}, {}, set())


@pytest.mark.asyncio
async def test_assign_attaches_every_item(client: RestManagementClient, fake_server):
    """Test assigning each tag to every item holding its value."""
    categories = await _owner_category(client)
    fake_server.add_tag("Owner", "Alice")
    fake_server.add_tag("Owner", "Bob")
    index = {"Owner": {"Alice": [VM_A, VM_B], "Bob": [VM_B]}}

    assignments = await TagService(client).assign(index, categories)

    assert [(a.tag.name, a.item.id) for a in assignments] == [
        ("Alice", "vm-1"),
        ("Alice", "vm-2"),
        ("Bob", "vm-2"),
    ]
    assert fake_server.assignments() == [
        ("Owner/Alice", "vm-1"),
        ("Owner/Alice", "vm-2"),
        ("Owner/Bob", "vm-2"),
    ]


@pytest.mark.asyncio
async def test_assign_refetches_tag_per_value(client: RestManagementClient, fake_server):
    """Test that each tag is looked up on the server before assigning."""
    categories = await _owner_category(client)
    fake_server.add_tag("Owner", "Alice")
    fake_server.add_tag("Owner", "Bob")
    index = {"Owner": {"Alice": [VM_A], "Bob": [VM_B]}}

    await TagService(client).assign(index, categories)

    assert client.metrics.requests["POST /cis/tagging/tag?action=find-by-name"] == 2


@pytest.mark.asyncio
async def test_assign_lookup_cost_is_one_request_per_tag(client: RestManagementClient, fake_server):
    """Test that tag lookups grow linearly with the number of values."""
    categories = await _owner_category(client)
    values = [f"user-{i}" for i in range(50)]
    for value in values:
        fake_server.add_tag("Owner", value)
    index = {"Owner": {value: [VM_A] for value in values}}

    await TagService(client).assign(index, categories)

    assert client.metrics.requests["POST /cis/tagging/tag?action=find-by-name"] == 50
    assert client.metrics.requests["GET /cis/tagging/tag/{id}"] == 0
    assert len(fake_server.assignments()) == 50


@pytest.mark.asyncio
async def test_assign_repeats_on_rerun(client: RestManagementClient, fake_server):
    """Test that assignments are issued again when run twice."""
    categories = await _owner_category(client)
    fake_server.add_tag("Owner", "Alice")
    index = {"Owner": {"Alice": [VM_A]}}
    service = TagService(client)

    await service.assign(index, categories)
    await service.assign(index, categories)

    assert fake_server.assignments() == [("Owner/Alice", "vm-1"), ("Owner/Alice", "vm-1")]


@pytest.mark.asyncio
async def test_assign_missing_tag(client: RestManagementClient):
    """Test that assigning a tag that was never created aborts."""
    categories = await _owner_category(client)

    with pytest.raises(TagNotFoundException):
        await TagService(client).assign({"Owner": {"Alice": [VM_A]}}, categories)
