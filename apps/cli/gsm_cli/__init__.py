"""gsm CLI Application.

Command-line interface for browsing and manipulating the git stash list.

Execution Context:
    CLI application - invoked from terminal

Dependencies:
    - click: CLI framework
    - rich: Terminal formatting
    - gsm_core: Core library

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations

__version__ = "0.1.0"
