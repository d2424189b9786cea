"""
Dialog state machine for the campaign list.

Exactly one of three dialogs is active at any time:

    CLOSED --open_create/open_edit--> CREATE_OR_EDIT
    CLOSED --open_delete-----------> CONFIRM_DELETE
    any    --open_*----------------> the newly opened dialog (replaces)
    any    --close-----------------> CLOSED

Each opening gets a fresh token. Work started for one opening (a save or
delete request) identifies itself by that token, so a response that arrives
after the dialog was closed or replaced cannot touch the new state.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

import structlog

from ..models import Campaign

logger = structlog.get_logger()


class DialogKind(str, Enum):
    """Which dialog is showing."""
    CLOSED = "closed"
    CREATE_OR_EDIT = "create_or_edit"
    CONFIRM_DELETE = "confirm_delete"


@dataclass(frozen=True)
class DialogState:
    """
    Tagged dialog state.

    ``CREATE_OR_EDIT`` with no target means "create new"; with a target it
    means "edit existing". ``CONFIRM_DELETE`` always has a target.
    """
    kind: DialogKind = DialogKind.CLOSED
    target: Optional[Campaign] = None
    busy: bool = False
    token: int = 0

    def __post_init__(self) -> None:
        if self.kind == DialogKind.CLOSED and (self.target is not None or self.busy):
            raise ValueError("A closed dialog has no target and is never busy")
        if self.kind == DialogKind.CONFIRM_DELETE and self.target is None:
            raise ValueError("Delete confirmation requires a target campaign")

    @classmethod
    def closed(cls) -> "DialogState":
        return cls()

    @classmethod
    def create_or_edit(cls, target: Optional[Campaign], token: int) -> "DialogState":
        return cls(kind=DialogKind.CREATE_OR_EDIT, target=target, token=token)

    @classmethod
    def confirm_delete(cls, target: Campaign, token: int) -> "DialogState":
        return cls(kind=DialogKind.CONFIRM_DELETE, target=target, token=token)

    @property
    def is_open(self) -> bool:
        return self.kind != DialogKind.CLOSED

    @property
    def is_create(self) -> bool:
        return self.kind == DialogKind.CREATE_OR_EDIT and self.target is None

    @property
    def is_edit(self) -> bool:
        return self.kind == DialogKind.CREATE_OR_EDIT and self.target is not None

    def with_busy(self, busy: bool) -> "DialogState":
        return replace(self, busy=busy)


class DialogMachine:
    """Holds the current dialog state and applies transitions."""

    def __init__(self):
        self._state = DialogState.closed()
        self._next_token = 1
        self._listeners: list[Callable[[DialogState], None]] = []

    @property
    def state(self) -> DialogState:
        return self._state

    def subscribe(self, listener: Callable[[DialogState], None]) -> None:
        self._listeners.append(listener)

    def open_create(self) -> DialogState:
        return self._open(DialogState.create_or_edit(None, self._take_token()))

    def open_edit(self, campaign: Campaign) -> DialogState:
        return self._open(DialogState.create_or_edit(campaign, self._take_token()))

    def open_delete(self, campaign: Campaign) -> DialogState:
        return self._open(DialogState.confirm_delete(campaign, self._take_token()))

    def close(self) -> DialogState:
        """Close whatever is open, busy or not."""
        if self._state.is_open:
            logger.debug("dialog.closed", kind=self._state.kind.value, token=self._state.token)
        return self._set(DialogState.closed())

    def is_current(self, token: int) -> bool:
        return self._state.is_open and self._state.token == token

    def set_busy(self, token: int, busy: bool) -> bool:
        """
        Set the busy flag of the opening identified by ``token``.

        Returns:
            False if that opening is no longer current (nothing changed)
        """
        if not self.is_current(token):
            return False
        self._set(self._state.with_busy(busy))
        return True

    def close_if_current(self, token: int) -> bool:
        """Close the dialog only if it is still the given opening."""
        if not self.is_current(token):
            return False
        self.close()
        return True

    def _take_token(self) -> int:
        token = self._next_token
        self._next_token += 1
        return token

    def _open(self, state: DialogState) -> DialogState:
        if self._state.is_open:
            logger.debug(
                "dialog.replaced",
                previous=self._state.kind.value,
                kind=state.kind.value,
            )
        logger.debug(
            "dialog.opened",
            kind=state.kind.value,
            target_id=state.target.id if state.target else None,
            token=state.token,
        )
        return self._set(state)

    def _set(self, state: DialogState) -> DialogState:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return state
