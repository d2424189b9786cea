"""
View model for the campaign list section.

Pure projection of controller state into what a renderer shows; no I/O.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..cache import CacheEntry
from ..i18n import Translator
from ..layout import ResponsiveLayout
from ..models import Campaign
from ..state import DialogKind, DialogState


class ListStatus(str, Enum):
    """What the list body shows."""
    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"


class SearchAdornment(str, Enum):
    """Icon at the end of the search field."""
    SEARCH = "search"
    CLEAR = "clear"


@dataclass
class DialogView:
    """The open dialog, if any."""
    kind: DialogKind
    busy: bool
    campaign: Optional[Campaign] = None
    title: str = ""
    confirm_text: str = ""


@dataclass
class CampaignListView:
    """Everything needed to draw the campaign list section."""
    title: str
    badge_count: int
    status: ListStatus
    search_text: str
    search_adornment: SearchAdornment
    new_button_label: str
    campaigns: list[Campaign] = field(default_factory=list)
    empty_text: str = ""
    dialog: Optional[DialogView] = None


def _dialog_view(state: DialogState, translator: Translator) -> Optional[DialogView]:
    if state.kind == DialogKind.CLOSED:
        return None

    if state.kind == DialogKind.CONFIRM_DELETE:
        return DialogView(
            kind=state.kind,
            busy=state.busy,
            campaign=state.target,
            title=translator.t("delete_name", name=state.target.name),
            confirm_text=translator.t("delete"),
        )

    title = translator.t("new_campaign") if state.target is None else state.target.name
    return DialogView(kind=state.kind, busy=state.busy, campaign=state.target, title=title)


def build_campaign_list_view(
    entry: CacheEntry,
    search_text: str,
    dialog_state: DialogState,
    translator: Translator,
    layout: ResponsiveLayout,
    mobile_breakpoint: str = "sm",
) -> CampaignListView:
    """
    Project cache, search and dialog state into a list view.

    Pending data renders as LOADING with a zero badge, never as EMPTY.
    """
    campaigns: list[Campaign] = list(entry.data) if entry.data is not None else []

    if entry.data is None:
        status = ListStatus.LOADING
    elif not campaigns:
        status = ListStatus.EMPTY
    else:
        status = ListStatus.READY

    is_mobile = layout.is_mobile(mobile_breakpoint)

    return CampaignListView(
        title=translator.t("campaigns"),
        badge_count=len(campaigns),
        status=status,
        search_text=search_text,
        search_adornment=SearchAdornment.CLEAR if search_text else SearchAdornment.SEARCH,
        new_button_label=translator.t("new") if is_mobile else translator.t("new_campaign"),
        campaigns=campaigns,
        empty_text=translator.t("no_campaigns") if status == ListStatus.EMPTY else "",
        dialog=_dialog_view(dialog_state, translator),
    )
