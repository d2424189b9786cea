"""
UI state for the campaign list.
"""

from .dialog import (
    DialogKind,
    DialogMachine,
    DialogState,
)

__all__ = [
    "DialogKind",
    "DialogMachine",
    "DialogState",
]
