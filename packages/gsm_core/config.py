"""Configuration and logging setup for gsm.

Reads settings from environment variables, optionally loaded from a
.env file, into a single configuration object.

Execution Context:
    Library module - imported by the CLI and the client entry points

Dependencies:
    - python-dotenv: Load environment variables from .env file

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from gsm_core.gateway import DEFAULT_GIT_BINARY
from gsm_core.gateway import GitStashGateway


# ---- Constants ----------------------------------------------------------------------------------------------


DEFAULT_POLL_INTERVAL = 0.1
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"

ENV_GIT_BINARY = "GSM_GIT_BINARY"
ENV_REPO_PATH = "GSM_REPO_PATH"
ENV_POLL_INTERVAL = "GSM_POLL_INTERVAL"
ENV_LOG_FILE = "GSM_LOG_FILE"
ENV_LOG_LEVEL = "GSM_LOG_LEVEL"


# ---- Environment Loading ------------------------------------------------------------------------------------


def _load_env_file(
        env_path: Path | None = None,
) -> None:
    """Load environment variables from .env file.

    Searches for .env file in:
    1. Specified path (if provided)
    2. Current working directory
    3. Parent directories (up to 3 levels)

    Args:
        env_path: Explicit path to .env file (optional).
    """
    if env_path:
        if env_path.exists():
            load_dotenv(env_path, override=True)
        return

    cwd_env = Path.cwd() / ".env"
    if cwd_env.exists():
        load_dotenv(cwd_env, override=True)
        return

    current = Path.cwd()
    for _ in range(3):
        parent = current.parent
        parent_env = parent / ".env"
        if parent_env.exists():
            load_dotenv(parent_env, override=True)
            return
        current = parent


# ---- Configuration ------------------------------------------------------------------------------------------


@dataclass
class GsmConfig:
    """Runtime settings.

    Attributes:
        git_binary: git executable used by the gateway.
        repo_path: Repository directory (None for current directory).
        poll_interval: Seconds between periodic re-renders of the TUI.
        log_file: Log destination; logging is off when unset.
        log_level: Logging level name.
    """

    git_binary: str = DEFAULT_GIT_BINARY
    repo_path: Path | None = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    log_file: Path | None = None
    log_level: str = DEFAULT_LOG_LEVEL

    def create_gateway(self) -> GitStashGateway:
        """Build the git gateway for these settings."""
        return GitStashGateway(git_binary=self.git_binary, cwd=self.repo_path)


def _parse_poll_interval(
        value: str | None,
) -> float:
    if not value:
        return DEFAULT_POLL_INTERVAL
    try:
        interval = float(value)
    except ValueError as parse_error:
        msg = f"{ENV_POLL_INTERVAL} must be a number, got '{value}'"
        raise ValueError(msg) from parse_error
    if interval <= 0:
        msg = f"{ENV_POLL_INTERVAL} must be positive, got '{value}'"
        raise ValueError(msg)
    return interval


def load_config(
        env_path: Path | None = None,
        repo_path: Path | str | None = None,
) -> GsmConfig:
    """Load configuration from the environment.

    Args:
        env_path: Explicit .env file (optional).
        repo_path: Repository directory overriding GSM_REPO_PATH.

    Returns:
        GsmConfig instance.

    Raises:
        ValueError: If a variable holds an invalid value.
    """
    _load_env_file(env_path)

    repo = repo_path or os.getenv(ENV_REPO_PATH)
    log_file = os.getenv(ENV_LOG_FILE)
    log_level = os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        msg = f"{ENV_LOG_LEVEL} must be a logging level name, got '{log_level}'"
        raise ValueError(msg)

    return GsmConfig(
        git_binary=os.getenv(ENV_GIT_BINARY) or DEFAULT_GIT_BINARY,
        repo_path=Path(repo).expanduser().resolve() if repo else None,
        poll_interval=_parse_poll_interval(os.getenv(ENV_POLL_INTERVAL)),
        log_file=Path(log_file).expanduser() if log_file else None,
        log_level=log_level,
    )


# ---- Logging ------------------------------------------------------------------------------------------------


def configure_logging(
        config: GsmConfig,
) -> None:
    """Send log records to the configured file.

    The terminal belongs to the TUI, so nothing is configured when no
    log file is set.

    Args:
        config: Loaded configuration.
    """
    if not config.log_file:
        return
    config.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=config.log_level,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(config.log_file),
        ]
    )
