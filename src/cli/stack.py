#!/usr/bin/env python3
"""
Orchestration stack CLI commands.
"""

import json
import sys
from typing import Any, Dict, Optional, Tuple

import click

from config import get_config
from orchestration import (
    ManagementSystem,
    OrchestrationError,
    StackHandle,
    StackManager,
    TemplateRef,
)


def _manager(region: Optional[str], profile: Optional[str]) -> StackManager:
    config = get_config()
    management_system = ManagementSystem(
        name="cli",
        region=region or config.aws_region,
        profile=profile or config.aws_profile,
    )
    return StackManager(management_system)


def _template(template_file: Optional[str], template_url: Optional[str]) -> TemplateRef:
    if template_file:
        with open(template_file, "r") as f:
            return TemplateRef(name=template_file, body=f.read())
    if template_url:
        return TemplateRef(name=template_url, url=template_url)
    raise click.UsageError("Either --template-file or --template-url is required")


def _extra_options(parameters: Tuple[str, ...], capabilities: Tuple[str, ...]) -> Dict[str, Any]:
    params: Dict[str, str] = {}
    for item in parameters:
        if "=" not in item:
            raise click.BadParameter(f"Expected KEY=VALUE, got {item}", param_hint="--parameter")
        key, value = item.split("=", 1)
        params[key] = value

    options: Dict[str, Any] = {"parameters": params}
    if capabilities:
        options["capabilities"] = list(capabilities)
    return options


def _echo_handle(handle: StackHandle, output_json: bool) -> None:
    if output_json:
        click.echo(
            json.dumps(
                {
                    "stack_id": handle.provider_reference,
                    "name": handle.name,
                    "status": handle.status,
                    "status_reason": handle.status_reason,
                    "created_at": handle.created_at,
                },
                indent=2,
                default=str,
            )
        )
    else:
        click.echo(f"{handle.name} ({handle.provider_reference}): {handle.status}")


region_option = click.option("--region", help="AWS region")
profile_option = click.option("--profile", help="AWS profile to use")
stack_id_option = click.option("--stack-id", "-i", required=True, help="Provider stack id")
template_options = [
    click.option("--template-file", "-t", type=click.Path(exists=True, dir_okay=False), help="Template file"),
    click.option("--template-url", help="Template URL"),
    click.option("--parameter", "-p", "parameters", multiple=True, help="Stack parameter as KEY=VALUE"),
    click.option("--capability", "-c", "capabilities", multiple=True, help="Stack capability"),
]


def with_template_options(func):
    for option in reversed(template_options):
        func = option(func)
    return func


@click.group()
def main() -> None:
    """Orchestration stack lifecycle commands."""
    pass


@main.command()
@click.option("--stack-name", "-s", required=True, help="Stack name")
@with_template_options
@region_option
@profile_option
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def create(stack_name, template_file, template_url, parameters, capabilities, region, profile, output_json) -> None:
    """Create a stack."""
    try:
        manager = _manager(region, profile)
        handle = manager.create(
            stack_name,
            _template(template_file, template_url),
            _extra_options(parameters, capabilities),
        )
        _echo_handle(handle, output_json)

    except OrchestrationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@stack_id_option
@with_template_options
@region_option
@profile_option
def update(stack_id, template_file, template_url, parameters, capabilities, region, profile) -> None:
    """Update a stack."""
    try:
        manager = _manager(region, profile)
        handle = StackHandle(provider_reference=stack_id, name=stack_id)
        manager.update(
            handle,
            _template(template_file, template_url),
            _extra_options(parameters, capabilities),
        )
        click.echo(f"Update of {stack_id} requested")

    except OrchestrationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@stack_id_option
@region_option
@profile_option
def delete(stack_id, region, profile) -> None:
    """Delete a stack."""
    try:
        manager = _manager(region, profile)
        manager.delete(StackHandle(provider_reference=stack_id, name=stack_id))
        click.echo(f"Deletion of {stack_id} requested")

    except OrchestrationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@stack_id_option
@region_option
@profile_option
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def status(stack_id, region, profile, output_json) -> None:
    """Show the provider status of a stack."""
    try:
        manager = _manager(region, profile)
        stack_status = manager.raw_status(StackHandle(provider_reference=stack_id, name=stack_id))

        if output_json:
            click.echo(json.dumps({"status": stack_status.status, "reason": stack_status.reason}, indent=2))
        else:
            click.echo(stack_status.status)
            if stack_status.reason:
                click.echo(f"  Reason: {stack_status.reason}")

    except OrchestrationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@stack_id_option
@region_option
@profile_option
def exists(stack_id, region, profile) -> None:
    """Exit 0 if the stack exists, 1 if it does not."""
    try:
        manager = _manager(region, profile)
        found = manager.raw_exists(StackHandle(provider_reference=stack_id, name=stack_id))

    except OrchestrationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    click.echo("yes" if found else "no")
    if not found:
        sys.exit(1)


if __name__ == "__main__":
    main()
