#!/usr/bin/env python3
"""Main CLI entry point for orchestration stack management."""

import logging

import click

from config import get_config
from .stack import main as stack_commands


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Orchestration stack management."""
    level = "DEBUG" if verbose else get_config().log_level
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


cli.add_command(stack_commands, name="stack")


if __name__ == "__main__":
    cli()
