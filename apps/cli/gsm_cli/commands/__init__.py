"""gsm CLI command modules.

Contains the Click command implementations for the gsm CLI.

Execution Context:
    Imported by main.py

Dependencies:
    - click: CLI framework

Metadata:
    Version: 0.1.0
    Author: gsm Team
"""
from __future__ import annotations
