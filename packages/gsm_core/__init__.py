"""gsm Core Library.

Provides the stash gateway, application state and input dispatcher of
the gsm git stash manager.

Execution Context:
    Library package - imported by the CLI and the TUI client

Dependencies:
    - python-dotenv: Configuration loading

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

import logging

from gsm_core.dispatcher import KeyEvent
from gsm_core.dispatcher import dispatch
from gsm_core.gateway import GatewayError
from gsm_core.gateway import GitStashGateway
from gsm_core.models import StashRecord
from gsm_core.state import AppState

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AppState",
    "GatewayError",
    "GitStashGateway",
    "KeyEvent",
    "StashRecord",
    "dispatch",
    "__version__",
]
