"""
Tests for the orchestration stack CLI.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from cli.__main__ import cli
from cli.stack import main
from orchestration import ProvisionError, StackHandle, StackStatus, StatusError


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def manager():
    with patch("cli.stack.StackManager") as mock_manager_class:
        yield mock_manager_class.return_value


class TestStackCommands:
    """Test stack commands."""

    def test_create(self, runner, manager) -> None:
        """Test create passes template and parameters to the manager."""
        manager.create.return_value = StackHandle(
            provider_reference="stack_id", name="mystack", status="CREATE_IN_PROGRESS"
        )

        result = runner.invoke(
            main,
            [
                "create",
                "--stack-name", "mystack",
                "--template-url", "https://example.com/t.json",
                "-p", "user=smith",
                "-c", "CAPABILITY_IAM",
            ],
        )

        assert result.exit_code == 0, result.output
        assert "mystack (stack_id): CREATE_IN_PROGRESS" in result.output

        name, template, options = manager.create.call_args[0]
        assert name == "mystack"
        assert template.url == "https://example.com/t.json"
        assert options == {"parameters": {"user": "smith"}, "capabilities": ["CAPABILITY_IAM"]}

    def test_create_from_file_json(self, runner, manager, tmp_path) -> None:
        """Test create reads the template file and prints JSON."""
        template_file = tmp_path / "template.json"
        template_file.write_text('{"Resources": {}}')
        manager.create.return_value = StackHandle(provider_reference="stack_id", name="mystack")

        result = runner.invoke(
            main, ["create", "-s", "mystack", "-t", str(template_file), "--json"]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["stack_id"] == "stack_id"
        assert manager.create.call_args[0][1].body == '{"Resources": {}}'

    def test_create_requires_template(self, runner, manager) -> None:
        result = runner.invoke(main, ["create", "-s", "mystack"])

        assert result.exit_code != 0
        manager.create.assert_not_called()

    def test_create_bad_parameter(self, runner, manager) -> None:
        result = runner.invoke(
            main, ["create", "-s", "mystack", "--template-url", "https://x", "-p", "user"]
        )

        assert result.exit_code != 0
        manager.create.assert_not_called()

    def test_create_error(self, runner, manager) -> None:
        """Test domain errors are reported and exit 1."""
        manager.create.side_effect = ProvisionError(
            "Stack [mystack] already exists", error_code="AlreadyExistsException"
        )

        result = runner.invoke(
            main, ["create", "-s", "mystack", "--template-url", "https://x"]
        )

        assert result.exit_code == 1
        assert "Error: Stack [mystack] already exists" in result.output

    def test_update(self, runner, manager) -> None:
        result = runner.invoke(
            main, ["update", "--stack-id", "stack_id", "--template-url", "https://x"]
        )

        assert result.exit_code == 0, result.output
        handle = manager.update.call_args[0][0]
        assert handle.provider_reference == "stack_id"

    def test_delete(self, runner, manager) -> None:
        manager.delete.return_value = True

        result = runner.invoke(main, ["delete", "-i", "stack_id"])

        assert result.exit_code == 0, result.output
        assert "Deletion of stack_id requested" in result.output

    def test_status(self, runner, manager) -> None:
        manager.raw_status.return_value = StackStatus("CREATE_COMPLETE", "complete")

        result = runner.invoke(main, ["status", "-i", "stack_id", "--json"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"status": "CREATE_COMPLETE", "reason": "complete"}

    def test_status_error(self, runner, manager) -> None:
        manager.raw_status.side_effect = StatusError("Internal failure", error_code="ServiceError")

        result = runner.invoke(main, ["status", "-i", "stack_id"])

        assert result.exit_code == 1

    @pytest.mark.parametrize("found,exit_code,output", [(True, 0, "yes"), (False, 1, "no")])
    def test_exists(self, runner, manager, found, exit_code, output) -> None:
        manager.raw_exists.return_value = found

        result = runner.invoke(main, ["exists", "-i", "stack_id"])

        assert result.exit_code == exit_code
        assert output in result.output


class TestEntryPoint:
    """Test top level CLI group."""

    def test_stack_group_registered(self, runner, manager) -> None:
        manager.raw_status.return_value = StackStatus("DELETE_COMPLETE")

        result = runner.invoke(cli, ["--verbose", "stack", "status", "-i", "stack_id"])

        assert result.exit_code == 0, result.output
        assert "DELETE_COMPLETE" in result.output
