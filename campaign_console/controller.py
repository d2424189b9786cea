"""
Campaign list controller.

Owns the search text, the dialog state machine and the mutation flow, and
keeps the rendered list consistent with the server through the cache
binding. The list is never patched locally: every successful mutation is
followed by a revalidation of the active search key.

Mutation flow (save and delete alike):
1. Dialog marked busy (a busy dialog refuses a second request)
2. Request sent
3. Busy cleared as soon as the request settles
4. Success: dialog closed, active key revalidated, success toast
   Failure: dialog left open, one generic error toast
"""

from typing import Callable, Optional, Protocol

import structlog

from .cache import CacheBinding, CacheEntry
from .i18n import Translator
from .layout import ResponsiveLayout
from .models import Campaign, to_save_payload
from .notifications import NotificationSink, Severity
from .state import DialogKind, DialogMachine, DialogState
from .transport import MutationResult
from .views import CampaignListView, build_campaign_list_view

logger = structlog.get_logger()


def search_key(endpoint: str, search_text: str) -> str:
    """Cache key for a search; the same text always gives the same key."""
    return f"{endpoint}?search={search_text}"


class CampaignMutations(Protocol):
    """Write side of the campaigns API."""

    async def save_campaign(self, payload: dict) -> MutationResult:
        ...

    async def delete_campaign(self, campaign_id: str) -> MutationResult:
        ...


class ResourceListController:
    """
    Controller behind the campaign list section.

    Usage:
        controller = ResourceListController(cache, transport, sink, translator, layout)
        controller.set_search_text("summer")
        view = controller.view()          # schedules the fetch for the new key
        controller.open_edit(view.campaigns[0])
        await controller.save(edited_campaign)
    """

    def __init__(
        self,
        cache: CacheBinding[list[Campaign]],
        mutations: CampaignMutations,
        notifier: NotificationSink,
        translator: Translator,
        layout: ResponsiveLayout,
        endpoint: str = "/api/campaigns",
        mobile_breakpoint: str = "sm",
    ):
        self.cache = cache
        self.mutations = mutations
        self.notifier = notifier
        self.translator = translator
        self.layout = layout
        self.endpoint = endpoint
        self.mobile_breakpoint = mobile_breakpoint

        self._search_text = ""
        self._dialogs = DialogMachine()

    # -------------------------------------------------------------------------
    # Search and list
    # -------------------------------------------------------------------------

    @property
    def search_text(self) -> str:
        return self._search_text

    @property
    def cache_key(self) -> str:
        return search_key(self.endpoint, self._search_text)

    def set_search_text(self, text: str) -> None:
        """
        Update the search text.

        The new key is fetched on the next read. There is no debounce, so
        every keystroke may cost one request.
        """
        if text == self._search_text:
            return
        self._search_text = text
        logger.debug("controller.search_changed", search=text, key=self.cache_key)

    def clear_search(self) -> None:
        self.set_search_text("")

    @property
    def entry(self) -> CacheEntry[list[Campaign]]:
        """Cache entry for the active key; reading it may schedule a fetch."""
        return self.cache.get(self.cache_key)

    @property
    def campaigns(self) -> Optional[list[Campaign]]:
        """Loaded campaigns, or None while the first load is pending."""
        return self.entry.data

    async def load(self) -> CacheEntry[list[Campaign]]:
        """Read the active key and wait for any fetch it started."""
        self.cache.get(self.cache_key)
        await self.cache.settle()
        return self.entry

    def view(self) -> CampaignListView:
        return build_campaign_list_view(
            entry=self.entry,
            search_text=self._search_text,
            dialog_state=self._dialogs.state,
            translator=self.translator,
            layout=self.layout,
            mobile_breakpoint=self.mobile_breakpoint,
        )

    # -------------------------------------------------------------------------
    # Dialogs
    # -------------------------------------------------------------------------

    @property
    def dialog(self) -> DialogState:
        return self._dialogs.state

    def subscribe_dialog(self, listener: Callable[[DialogState], None]) -> None:
        """Call ``listener`` with every dialog state transition."""
        self._dialogs.subscribe(listener)

    def open_create(self) -> DialogState:
        return self._dialogs.open_create()

    def open_edit(self, campaign: Campaign) -> DialogState:
        return self._dialogs.open_edit(campaign)

    def open_delete(self, campaign: Campaign) -> DialogState:
        return self._dialogs.open_delete(campaign)

    def close_dialog(self) -> DialogState:
        return self._dialogs.close()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    async def save(self, campaign: Campaign) -> bool:
        """
        Save the campaign from the open create/edit dialog.

        Returns:
            True if the server accepted the save
        """
        state = self._dialogs.state
        if state.kind != DialogKind.CREATE_OR_EDIT:
            logger.warning("controller.save_ignored", reason="no_edit_dialog", dialog=state.kind.value)
            return False
        if state.busy:
            logger.warning("controller.save_ignored", reason="busy", token=state.token)
            return False

        if state.is_create and campaign.id is not None:
            campaign = campaign.model_copy(update={"id": None})
        elif state.is_edit and campaign.id is None:
            campaign = campaign.model_copy(update={"id": state.target.id})

        token = state.token
        payload = to_save_payload(campaign)
        self._dialogs.set_busy(token, True)
        logger.info(
            "controller.save_started",
            mode="edit" if state.is_edit else "create",
            campaign_id=campaign.id,
        )

        try:
            result = await self.mutations.save_campaign(payload)
        finally:
            self._dialogs.set_busy(token, False)

        if not result.ok:
            logger.warning("controller.save_failed", status=result.status, error=result.error)
            self._notify_failure()
            return False

        if not self._dialogs.close_if_current(token):
            logger.debug("controller.save_settled_after_close", token=token)
        await self.cache.revalidate(self.cache_key)

        message_key = "new_campaign_added" if result.created else "campaign_updated"
        logger.info("controller.save_succeeded", status=result.status, campaign_id=campaign.id)
        self.notifier.notify(self.translator.t(message_key), Severity.SUCCESS)
        return True

    async def confirm_delete(self) -> bool:
        """
        Delete the campaign targeted by the open confirmation dialog.

        Returns:
            True if the server accepted the delete
        """
        state = self._dialogs.state
        if state.kind != DialogKind.CONFIRM_DELETE:
            logger.warning("controller.delete_ignored", reason="no_delete_dialog", dialog=state.kind.value)
            return False
        if state.busy:
            logger.warning("controller.delete_ignored", reason="busy", token=state.token)
            return False

        target = state.target
        if target.id is None:
            logger.warning("controller.delete_failed", reason="missing_id", name=target.name)
            self._notify_failure()
            return False

        token = state.token
        self._dialogs.set_busy(token, True)
        logger.info("controller.delete_started", campaign_id=target.id)

        try:
            result = await self.mutations.delete_campaign(target.id)
        finally:
            self._dialogs.set_busy(token, False)

        if not result.ok:
            logger.warning(
                "controller.delete_failed",
                campaign_id=target.id,
                status=result.status,
                error=result.error,
            )
            self._notify_failure()
            return False

        if not self._dialogs.close_if_current(token):
            logger.debug("controller.delete_settled_after_close", token=token)
        await self.cache.revalidate(self.cache_key)

        logger.info("controller.delete_succeeded", campaign_id=target.id)
        self.notifier.notify(self.translator.t("campaign_deleted"), Severity.SUCCESS)
        return True

    def _notify_failure(self) -> None:
        self.notifier.notify(self.translator.t("an_error_occurred"), Severity.ERROR)
