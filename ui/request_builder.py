"""
Request builder panel: method, URL, params, headers, body and auth tabs.
Every edit is dispatched to the tab's RequestSession; auto-saves on changes
(500 ms debounce). Wires the Send button to RequestSession.send().
"""
import asyncio

from nicegui import ui

from core import editor
from core.models import METHODS
from core.session import RequestSession, view_of


# ── Key-value table helper ─────────────────────────────────────────────────────

def _build_kv_table(container: ui.element, session: RequestSession, table: str, on_change):
    """Render the editable rows of *table* ('params' or 'headers') into *container*."""

    def dispatch(command, redraw=False):
        session.dispatch(command)
        if redraw:
            _build_kv_table(container, session, table, on_change)
        on_change()

    container.clear()
    with container:
        for row in getattr(session.draft, table):
            with ui.row().classes('w-full items-center gap-1 no-wrap'):
                ui.checkbox(
                    value=row.enabled,
                    on_change=lambda e, _id=row.id: dispatch(editor.UpdateRow(
                        table=table, row_id=_id, field='enabled', value=bool(e.value))),
                )

                ui.input(
                    value=row.key,
                    placeholder='Key',
                    on_change=lambda e, _id=row.id: dispatch(editor.UpdateRow(
                        table=table, row_id=_id, field='key', value=e.value or '')),
                ).classes('flex-grow font-mono text-sm')

                ui.input(
                    value=row.value,
                    placeholder='Value',
                    on_change=lambda e, _id=row.id: dispatch(editor.UpdateRow(
                        table=table, row_id=_id, field='value', value=e.value or '')),
                ).classes('flex-grow font-mono text-sm')

                ui.button(
                    icon='delete',
                    on_click=lambda _, _id=row.id: dispatch(
                        editor.RemoveRow(table=table, row_id=_id), redraw=True)
                ).props('flat round dense size=xs color=red-4')

        ui.button('Add row', icon='add',
                  on_click=lambda _: dispatch(editor.AddRow(table=table), redraw=True)).props('flat size=sm')


# ── Main builder ───────────────────────────────────────────────────────────────

def build_request_builder(session: RequestSession, response_viewer=None):
    """
    Render the request builder panel for *session*.
    *response_viewer* is a ResponseViewer instance whose update_response() is called on Send.
    """
    _saved_label_el: list = [None]
    _send_btn_el: list = [None]
    _pending_task: list = [None]

    # ── debounced save ─────────────────────────────────────────────────────────

    def schedule_save():
        task = _pending_task[0]
        if task is not None and not task.done():
            task.cancel()
        try:
            loop = asyncio.get_event_loop()
            _pending_task[0] = loop.create_task(_do_save())
        except RuntimeError:
            pass

    async def _do_save():
        await asyncio.sleep(0.5)
        if session.sending:
            return
        result = session.save()
        if not result.ok:
            ui.notify(result.error, color='negative')
            return
        if _saved_label_el[0]:
            _saved_label_el[0].set_visibility(True)
            await asyncio.sleep(1.5)
            _saved_label_el[0].set_visibility(False)

    def on_edit(command):
        session.dispatch(command)
        schedule_save()

    # ── Send handler ───────────────────────────────────────────────────────────

    async def on_send():
        task = _pending_task[0]
        if task is not None and not task.done():
            task.cancel()

        if _send_btn_el[0]:
            _send_btn_el[0].props(add='loading')
        try:
            result = await session.send()
        finally:
            if _send_btn_el[0]:
                _send_btn_el[0].props(remove='loading')
            # edits typed while the request was in flight were skipped by _do_save
            if session.dirty:
                schedule_save()

        if not result.ok:
            ui.notify(result.error, color='negative')
            return
        if response_viewer is not None:
            response_viewer.update_response(view_of(result))

    # ── UI layout ──────────────────────────────────────────────────────────────

    draft = session.draft
    with ui.column().classes('w-full gap-1'):

        # Top row: method + URL + saved indicator + Send
        with ui.row().classes('w-full items-center gap-2 no-wrap'):
            ui.select(
                METHODS,
                value=draft.method,
                on_change=lambda e: on_edit(editor.SetMethod(method=e.value)),
            ).classes('w-28 shrink-0')

            ui.input(
                placeholder='https://api.example.com/endpoint',
                value=draft.url,
                on_change=lambda e: on_edit(editor.SetUrl(url=e.value or '')),
            ).classes('flex-grow font-mono text-sm')

            _saved_label_el[0] = ui.label('Saved ✓').classes(
                'text-xs text-green-600 shrink-0'
            )
            _saved_label_el[0].set_visibility(False)

            _send_btn_el[0] = ui.button('Send', icon='send', on_click=on_send).props(
                'color=primary'
            )

        ui.separator().classes('my-0')

        # Sub-tabs
        with ui.tabs().classes('w-full shrink-0') as req_tabs:
            p_tab = ui.tab('Params')
            h_tab = ui.tab('Headers')
            b_tab = ui.tab('Body')
            a_tab = ui.tab('Auth')

        with ui.tab_panels(req_tabs, value=p_tab).classes('w-full'):

            with ui.tab_panel(p_tab).classes('p-0 pt-1'):
                params_container = ui.column().classes('w-full gap-1')
                _build_kv_table(params_container, session, 'params', schedule_save)

            with ui.tab_panel(h_tab).classes('p-0 pt-1'):
                headers_container = ui.column().classes('w-full gap-1')
                _build_kv_table(headers_container, session, 'headers', schedule_save)

            with ui.tab_panel(b_tab).classes('p-0 pt-2'):
                ui.codemirror(
                    value=draft.body,
                    language='json',
                    on_change=lambda e: on_edit(editor.SetBody(body=e.value or '')),
                ).classes('w-full mt-1').style('height: 200px')

            with ui.tab_panel(a_tab).classes('p-0 pt-2'):
                from ui.auth_editor import build_auth_editor
                build_auth_editor(session, schedule_save)
