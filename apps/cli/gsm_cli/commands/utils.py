"""Utility functions for gsm CLI commands.

Execution Context:
    CLI command utilities - imported by command modules

Dependencies:
    - click: CLI framework
    - gsm_core: Gateway and configuration

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

import click

from gsm_core.config import GsmConfig
from gsm_core.gateway import GatewayError
from gsm_core.gateway import GitStashGateway
from gsm_core.models import StashRecord


def get_gateway(
        ctx: click.Context,
) -> GitStashGateway:
    """Build the gateway from the group's configuration.

    Args:
        ctx: Click context whose root object is the loaded GsmConfig.

    Returns:
        Gateway bound to a verified git repository.

    Raises:
        click.ClickException: If the directory is not a git repository.
    """
    config = ctx.find_object(GsmConfig) or GsmConfig()
    gateway = config.create_gateway()
    try:
        gateway.ensure_repository()
    except GatewayError as repo_error:
        raise click.ClickException(str(repo_error)) from repo_error
    return gateway


def resolve_stash(
        gateway: GitStashGateway,
        index: int,
) -> StashRecord:
    """Find the stash at a list position.

    Args:
        gateway: Stash gateway.
        index: Stash index (0 = most recent).

    Returns:
        Matching stash record.

    Raises:
        GatewayError: If listing fails or no stash has that index.
    """
    for stash in gateway.list_stashes():
        if stash.index == index:
            return stash
    msg = f"No stash at index {index}"
    raise GatewayError(msg)
