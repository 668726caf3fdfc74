"""
RequestSession: the state behind one open request tab.

Holds the current draft, applies editor commands, saves through the store and
runs the save-then-send flow:
  1. refuse if a send is already running
  2. validate (nothing is saved or sent on failure)
  3. save the draft
  4. assemble and send
  5. normalize the result for the response viewer
"""
from typing import Awaitable, Callable

from loguru import logger

from core import assembler, editor, response_view
from core.actions import ActionResult, run_action
from core.errors import SendInProgressError, ValidationFailedError
from core.models import HTTPResult, OutgoingRequestSpec, RequestDraft, ResponseView
from core.store import CollectionStore

Sender = Callable[[OutgoingRequestSpec], Awaitable[HTTPResult]]


class RequestSession:
    def __init__(self, store: CollectionStore, collection_id: str, item_id: str, sender: Sender):
        self.store = store
        self.collection_id = collection_id
        self.item_id = item_id
        self.sender = sender
        item = store.get_item(collection_id, item_id)
        self.name = item.name
        self.draft: RequestDraft = item.request
        self._saved: RequestDraft = item.request
        self._sending = False

    @property
    def dirty(self) -> bool:
        return self.draft != self._saved

    @property
    def sending(self) -> bool:
        return self._sending

    def dispatch(self, command: editor.Command) -> RequestDraft:
        self.draft = editor.reduce(self.draft, command)
        return self.draft

    def _save(self) -> RequestDraft:
        draft = self.draft
        self.store.update_item(self.collection_id, self.item_id, request=draft)
        self._saved = draft
        return draft

    def save(self) -> ActionResult:
        if not self.dirty:
            return ActionResult(ok=True, value=self.draft)
        return run_action('Save request', self._save)

    def preview(self) -> OutgoingRequestSpec:
        return assembler.assemble(self.draft)

    def _begin_send(self) -> OutgoingRequestSpec:
        if self._sending:
            raise SendInProgressError('A request is already being sent')
        problems = assembler.validate(self.draft)
        if problems:
            raise ValidationFailedError(problems)
        if self.dirty:
            self._save()
        return assembler.assemble(self.draft)

    async def send(self) -> ActionResult:
        """
        Returns ActionResult whose value is a ResponseView on success.
        Validation and store problems come back as ActionResult.error without
        contacting the sender.
        """
        started = run_action('Send request', self._begin_send)
        if not started.ok:
            return started

        spec: OutgoingRequestSpec = started.value
        self._sending = True
        try:
            raw = await self.sender(spec)
            view = response_view.normalize(raw)
        except Exception as exc:
            logger.warning(f'Sender raised for {spec.method} {spec.url}: {exc}')
            view = response_view.error_view(str(exc))
        finally:
            self._sending = False
        return ActionResult(ok=True, value=view)


def view_of(result: ActionResult) -> ResponseView | None:
    """The response view carried by a send result, if any."""
    return result.value if isinstance(result.value, ResponseView) else None
