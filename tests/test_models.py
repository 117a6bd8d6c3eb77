"""
Tests for the orchestration data model and stack store.
"""

from unittest.mock import patch

import pytest

from orchestration import InMemoryStackStore, ManagementSystem, StackHandle, StackStatus, TemplateRef


class TestTemplateRef:
    """Test TemplateRef dataclass."""

    def test_body_options(self) -> None:
        template = TemplateRef(name="t", body="{}")
        assert template.to_options() == {"template_body": "{}"}

    def test_url_options(self) -> None:
        template = TemplateRef(name="t", url="https://example.com/t.yaml")
        assert template.to_options() == {"template_url": "https://example.com/t.yaml"}

    def test_requires_exactly_one_source(self) -> None:
        with pytest.raises(ValueError):
            TemplateRef(name="t")
        with pytest.raises(ValueError):
            TemplateRef(name="t", body="{}", url="https://example.com/t.yaml")


class TestStackStatus:
    """Test StackStatus predicates."""

    def test_create_complete(self) -> None:
        status = StackStatus("CREATE_COMPLETE", "complete")

        assert status.is_complete
        assert not status.is_failed
        assert not status.is_in_progress
        assert not status.is_rolled_back

    def test_rollback_complete(self) -> None:
        status = StackStatus("ROLLBACK_COMPLETE")

        assert status.is_rolled_back
        assert not status.is_complete

    def test_update_in_progress(self) -> None:
        status = StackStatus("UPDATE_IN_PROGRESS")

        assert status.is_in_progress
        assert not status.is_complete

    def test_delete_complete(self) -> None:
        status = StackStatus("DELETE_COMPLETE")

        assert status.is_deleted
        assert status.is_complete

    def test_failed(self) -> None:
        assert StackStatus("CREATE_FAILED", "Resource failed").is_failed


class TestStackHandle:
    """Test StackHandle dataclass."""

    def test_provider_reference_cannot_change(self) -> None:
        handle = StackHandle(provider_reference="stack_id", name="mystack")

        with pytest.raises(AttributeError):
            handle.provider_reference = "other_id"

        assert handle.provider_reference == "stack_id"

    def test_status_can_be_refreshed(self) -> None:
        handle = StackHandle(provider_reference="stack_id", name="mystack")

        handle.apply_status(StackStatus("UPDATE_COMPLETE", "done"))

        assert handle.status == "UPDATE_COMPLETE"
        assert handle.status_reason == "done"


class TestManagementSystem:
    """Test ManagementSystem client creation."""

    def test_connect(self) -> None:
        management_system = ManagementSystem(name="ems", region="eu-west-1", profile="ops")

        with patch("boto3.Session") as mock_session:
            client = management_system.connect()

        mock_session.assert_called_once_with(region_name="eu-west-1", profile_name="ops")
        mock_session.return_value.client.assert_called_once_with("cloudformation")
        assert client is mock_session.return_value.client.return_value

    def test_connect_cached(self) -> None:
        management_system = ManagementSystem(name="ems")

        with patch("boto3.Session") as mock_session:
            first = management_system.connect()
            second = management_system.connect()

        assert first is second
        mock_session.assert_called_once_with(region_name="us-east-1")


class TestInMemoryStackStore:
    """Test InMemoryStackStore."""

    def test_save_get_remove(self) -> None:
        store = InMemoryStackStore()
        handle = StackHandle(provider_reference="stack_id", name="mystack")

        store.save(handle)
        assert store.get("stack_id") is handle
        assert store.all() == [handle]

        store.remove("stack_id")
        assert store.get("stack_id") is None
        assert store.all() == []

    def test_remove_unknown(self) -> None:
        InMemoryStackStore().remove("missing")
