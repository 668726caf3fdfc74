from nicegui import ui, app as nicegui_app

from core import http_client
from core.errors import CampfireError
from core.models import OutgoingRequestSpec
from core.session import RequestSession
from core.store import get_store

MAX_TABS = 10

_tabs_refresh = None
# item id -> editor state of the open tab
_sessions: dict[str, RequestSession] = {}


async def _send_with_settings(spec: OutgoingRequestSpec):
    return await http_client.send(
        spec,
        ssl_verify=getattr(nicegui_app.state, 'ssl_verify', True),
        timeout=getattr(nicegui_app.state, 'request_timeout', 30.0),
    )


def _session_for(tab: dict) -> RequestSession | None:
    session = _sessions.get(tab['item_id'])
    if session is None:
        try:
            session = RequestSession(get_store(), tab['collection_id'], tab['item_id'], _send_with_settings)
        except CampfireError:
            return None
        _sessions[tab['item_id']] = session
    return session


async def build_request_tabs():
    global _tabs_refresh

    @ui.refreshable
    def tabs_ui():
        tabs_data: list[dict] = nicegui_app.storage.user.get('open_tabs', [])

        if not tabs_data:
            with ui.column().classes('w-full h-full items-center justify-center gap-3'):
                ui.icon('open_in_browser').classes('text-6xl text-gray-300')
                ui.label('Click a request to open it').classes('text-gray-400 text-lg')
            return

        active_tab = nicegui_app.storage.user.get('active_tab')
        ids = [t['item_id'] for t in tabs_data]
        if not active_tab or active_tab not in ids:
            active_tab = ids[0]
            nicegui_app.storage.user['active_tab'] = active_tab

        def on_tab_change(e):
            nicegui_app.storage.user['active_tab'] = e.value

        with ui.column().classes('w-full h-full overflow-hidden'):
            with ui.tabs(value=active_tab, on_change=on_tab_change).classes('w-full shrink-0') as qtabs:
                for tab in tabs_data:
                    with ui.tab(name=tab['item_id'], label=''):
                        with ui.row().classes('items-center gap-1 no-wrap'):
                            ui.label(tab['label']).classes('text-sm')
                            ui.button(
                                icon='close',
                                on_click=lambda _e, tid=tab['item_id']: _close_tab(tid)
                            ).props('flat round dense size=xs').classes('text-gray-400 hover:text-red-500')

            with ui.tab_panels(qtabs, value=active_tab).classes('w-full flex-grow overflow-auto'):
                for tab in tabs_data:
                    with ui.tab_panel(tab['item_id']):
                        session = _session_for(tab)
                        if session is not None:
                            from ui.request_builder import build_request_builder
                            from ui.response_viewer import ResponseViewer
                            # Create viewer object first (no DOM yet) so builder can reference it
                            viewer = ResponseViewer()
                            build_request_builder(session, viewer)
                            viewer.build()
                        else:
                            ui.label('Request not found.').classes('text-gray-400')

    # open collections do not survive a restart, the stored tabs do
    _drop_missing_tabs()
    tabs_ui()
    _tabs_refresh = tabs_ui.refresh


def open_request_tab(collection_id: str, item_id: str):
    tabs_data: list[dict] = nicegui_app.storage.user.get('open_tabs', [])

    # Already open, just switch to it
    for tab in tabs_data:
        if tab['item_id'] == item_id:
            nicegui_app.storage.user['active_tab'] = item_id
            if _tabs_refresh:
                _tabs_refresh()
            return

    try:
        item = get_store().get_item(collection_id, item_id)
    except CampfireError as e:
        ui.notify(str(e), color='negative')
        return

    # close oldest if needed
    if len(tabs_data) >= MAX_TABS:
        oldest = tabs_data.pop(0)
        _sessions.pop(oldest['item_id'], None)

    tabs_data.append({
        'collection_id': collection_id,
        'item_id': item_id,
        'label': item.name,
    })
    nicegui_app.storage.user['open_tabs'] = tabs_data
    nicegui_app.storage.user['active_tab'] = item_id

    if _tabs_refresh:
        _tabs_refresh()


def _close_tab(item_id: str):
    session = _sessions.pop(item_id, None)
    if session is not None:
        result = session.save()
        if not result.ok and not result.cancelled:
            ui.notify(result.error, color='negative')

    tabs_data: list[dict] = nicegui_app.storage.user.get('open_tabs', [])
    tabs_data = [t for t in tabs_data if t['item_id'] != item_id]
    nicegui_app.storage.user['open_tabs'] = tabs_data

    active = nicegui_app.storage.user.get('active_tab')
    if active == item_id:
        nicegui_app.storage.user['active_tab'] = tabs_data[0]['item_id'] if tabs_data else None

    if _tabs_refresh:
        _tabs_refresh()


def rename_tab(item_id: str, label: str):
    tabs_data: list[dict] = nicegui_app.storage.user.get('open_tabs', [])
    for tab in tabs_data:
        if tab['item_id'] == item_id:
            tab['label'] = label
            break
    nicegui_app.storage.user['open_tabs'] = tabs_data
    if _tabs_refresh:
        _tabs_refresh()


def close_tabs_missing():
    """Drop tabs whose request was deleted or whose collection was closed."""
    _drop_missing_tabs()
    if _tabs_refresh:
        _tabs_refresh()


def _drop_missing_tabs():
    store = get_store()
    kept = []
    for tab in nicegui_app.storage.user.get('open_tabs', []):
        try:
            store.get_item(tab['collection_id'], tab['item_id'])
        except CampfireError:
            _sessions.pop(tab['item_id'], None)
            continue
        kept.append(tab)
    nicegui_app.storage.user['open_tabs'] = kept


def save_sessions_of(collection_id: str):
    """Flush pending edits of every tab that belongs to *collection_id*."""
    for session in list(_sessions.values()):
        if session.collection_id != collection_id:
            continue
        result = session.save()
        if not result.ok and not result.cancelled:
            ui.notify(result.error, color='negative')
