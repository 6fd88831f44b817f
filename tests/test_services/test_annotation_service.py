"""
Tests for annotation collection and indexing.
"""

import pytest

from tagmigrator.client import RestManagementClient
from tagmigrator.schemas import Annotation, InventoryItem
from tagmigrator.services import AnnotationService, index_annotations

VM_A = InventoryItem(id="vm-1", name="VM-A", type="VirtualMachine")
VM_B = InventoryItem(id="vm-2", name="VM-B", type="VirtualMachine")
HOST = InventoryItem(id="host-1", name="esx01", type="VMHost")


def test_index_groups_by_category_and_value():
    """Test building the category -> value -> items index."""
    pairs = [
        (VM_A, [Annotation(name="Owner", value="Alice"), Annotation(name="Env", value="prod")]),
        (VM_B, [Annotation(name="Owner", value="Alice"), Annotation(name="Env", value="dev")]),
        (HOST, [Annotation(name="Owner", value="Bob")]),
    ]

    index = index_annotations(pairs)

    assert index == {
        "Owner": {"Alice": [VM_A, VM_B], "Bob": [HOST]},
        "Env": {"prod": [VM_A], "dev": [VM_B]},
    }


def test_index_skips_empty_and_missing_values():
    """Test that empty or missing values produce nothing."""
    pairs = [
        (VM_A, [Annotation(name="Owner", value=""), Annotation(name="Env", value=None)]),
        (VM_B, [Annotation(name="Owner", value="Bob")]),
    ]

    index = index_annotations(pairs)

    assert index == {"Owner": {"Bob": [VM_B]}}


def test_index_does_not_deduplicate_items():
    """Test that the same value read twice for an item is kept twice."""
    pairs = [
        (VM_A, [Annotation(name="Owner", value="Alice")]),
        (VM_A, [Annotation(name="Owner", value="Alice")]),
    ]

    assert index_annotations(pairs) == {"Owner": {"Alice": [VM_A, VM_A]}}


def test_index_values_are_case_sensitive():
    """Test that values differing in case are separate tags."""
    pairs = [(VM_A, [Annotation(name="Owner", value="alice")]), (VM_B, [Annotation(name="Owner", value="Alice")])]

    assert set(index_annotations(pairs)["Owner"]) == {"alice", "Alice"}


@pytest.mark.asyncio
async def test_collect_reads_every_item(client: RestManagementClient, fake_server):
    """Test reading annotations for the whole inventory."""
    fake_server.add_item("vm-1", "VM-A", Owner="Alice")
    fake_server.add_item("host-1", "esx01", type="VMHost", Owner=None)

    pairs = await AnnotationService(client).collect()

    assert [item.name for item, _ in pairs] == ["VM-A", "esx01"]
    assert pairs[0][1] == [Annotation(name="Owner", value="Alice")]
    assert pairs[1][0].type == "VMHost"
    assert pairs[1][1] == [Annotation(name="Owner", value=None)]
    assert client.metrics.requests["GET /vcenter/inventory/{type}/{id}/annotation"] == 2


@pytest.mark.asyncio
async def test_collect_empty_inventory(client: RestManagementClient):
    """Test collecting from an empty inventory."""
    assert await AnnotationService(client).collect() == []
