"""gsm Client - TUI for gsm.

Interactive terminal user interface for the git stash list.
Provides a searchable stash list, diff and file views, and dialogs
for applying, popping, dropping and creating stashes.

Version: 0.1.0
Author: gsm Team
"""
from __future__ import annotations

__version__ = "0.1.0"
