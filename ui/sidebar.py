from nicegui import ui

from core.actions import run_action
from core.models import CollectionItem
from core.store import get_store
from core.tree import iter_items

_sidebar_container: ui.element | None = None


METHOD_COLORS = {
    'GET': 'text-green-600',
    'POST': 'text-yellow-600',
    'PUT': 'text-blue-600',
    'PATCH': 'text-purple-600',
    'DELETE': 'text-red-600',
}


def _report(result, success_msg: str | None = None) -> bool:
    """Show a failed/cancelled action to the user. Returns True when it succeeded."""
    if result.cancelled:
        return False
    if not result.ok:
        ui.notify(result.error, color='negative')
        return False
    if success_msg:
        ui.notify(success_msg, color='positive')
    return True


# ── Tree rendering ────────────────────────────────────────────────────────────

def _render_collection(col):
    cid = col.id
    # Wrap in a div so the context menu attaches to the whole row (including the
    # expansion header), not just the collapsible body where Quasar puts default-slot content.
    with ui.element('div').classes('w-full'):
        with ui.context_menu():
            ui.menu_item('Add Folder', lambda cid=cid: _add_item_dialog('folder', cid, ''))
            ui.menu_item('Add Request', lambda cid=cid: _add_item_dialog('request', cid, ''))
            ui.separator()
            ui.menu_item('Rename', lambda cid=cid, lbl=col.name: _rename_dialog(cid, '', lbl))
            ui.menu_item('Close', lambda cid=cid: _close_collection(cid))
            ui.separator()
            ui.menu_item('Delete File', lambda cid=cid, lbl=col.name: _delete_dialog('collection', cid, '', lbl))
        with ui.expansion(col.name, icon='inventory_2', value=True).classes('w-full text-sm'):
            ui.label(col.file_path).classes('text-xs text-gray-400 truncate pl-2').tooltip(col.file_path)
            for item in col.items:
                _render_item(cid, item)


def _render_item(cid: str, item: CollectionItem):
    nid = item.id
    label = item.name

    if item.type == 'folder':
        with ui.element('div').classes('w-full'):
            with ui.context_menu():
                ui.menu_item('Add Folder', lambda cid=cid, nid=nid: _add_item_dialog('folder', cid, nid))
                ui.menu_item('Add Request', lambda cid=cid, nid=nid: _add_item_dialog('request', cid, nid))
                ui.separator()
                ui.menu_item('Rename', lambda nid=nid, lbl=label: _rename_dialog(cid, nid, lbl))
                ui.menu_item('Move', lambda nid=nid, lbl=label: _move_dialog(cid, nid, lbl))
                ui.separator()
                ui.menu_item('Delete Folder', lambda nid=nid, lbl=label: _delete_dialog('folder', cid, nid, lbl))
            with ui.expansion(label, icon='folder_open', value=True).classes('w-full text-sm pl-3'):
                for child in item.children:
                    _render_item(cid, child)

    else:
        method = item.request.method
        color = METHOD_COLORS.get(method, 'text-gray-600')
        with ui.row().classes(
            'w-full cursor-pointer hover:bg-blue-50 rounded px-2 py-1 items-center gap-1 pl-6'
        ) as row:
            ui.label(method).classes(f'text-xs font-bold w-14 shrink-0 {color}')
            ui.label(label).classes('text-sm flex-grow truncate')
            with ui.context_menu():
                ui.menu_item('Rename', lambda nid=nid, lbl=label: _rename_dialog(cid, nid, lbl))
                ui.menu_item('Duplicate', lambda nid=nid: _duplicate_request(cid, nid))
                ui.menu_item('Move', lambda nid=nid, lbl=label: _move_dialog(cid, nid, lbl))
                ui.separator()
                ui.menu_item('Delete', lambda nid=nid, lbl=label: _delete_dialog('request', cid, nid, lbl))
            row.on('click', lambda _e, nid=nid: _open_request(cid, nid))


# ── Actions ───────────────────────────────────────────────────────────────────

def _open_request(collection_id: str, item_id: str):
    from ui.request_tabs import open_request_tab
    open_request_tab(collection_id, item_id)


def _name_dialog(title: str, button: str, on_confirm, value: str = ''):
    with ui.dialog() as dialog, ui.card().classes('w-80'):
        ui.label(title).classes('text-lg font-bold')
        name_input = ui.input('Name', value=value).classes('w-full')

        def confirm():
            name = name_input.value.strip()
            if not name:
                ui.notify('Name cannot be empty', color='negative')
                return
            if on_confirm(name):
                dialog.close()
                refresh_tree()

        name_input.on('keydown.enter', lambda _e: confirm())
        with ui.row().classes('mt-2'):
            ui.button(button, on_click=confirm).props('color=primary')
            ui.button('Cancel', on_click=dialog.close).props('flat')
    dialog.open()


def _add_item_dialog(item_type: str, collection_id: str, parent_id: str):
    store = get_store()
    type_label = 'Folder' if item_type == 'folder' else 'Request'

    def create(name: str) -> bool:
        if item_type == 'folder':
            result = run_action('Create folder', store.create_folder, collection_id, parent_id, name)
        else:
            result = run_action('Create request', store.create_request, collection_id, parent_id, name)
        if _report(result) and item_type == 'request':
            _open_request(collection_id, result.value.id)
        return result.ok

    _name_dialog(f'New {type_label}', 'Create', create)


def _rename_dialog(collection_id: str, item_id: str, current_name: str):
    store = get_store()

    def rename(name: str) -> bool:
        if item_id:
            result = run_action('Rename item', store.update_item, collection_id, item_id, name=name)
            if result.ok:
                from ui.request_tabs import rename_tab
                rename_tab(item_id, result.value.name)
        else:
            result = run_action('Rename collection', store.rename, collection_id, name)
        return _report(result)

    _name_dialog('Rename', 'Rename', rename, value=current_name)


def _delete_dialog(item_type: str, collection_id: str, item_id: str, label: str):
    store = get_store()
    with ui.dialog() as dialog, ui.card().classes('w-80'):
        ui.label('Confirm Delete').classes('text-lg font-bold')
        ui.label(f'Delete "{label}"?').classes('text-sm text-gray-600')
        if item_type == 'collection':
            ui.label('The collection file will be removed from disk.').classes('text-sm text-red-500')
        elif item_type == 'folder':
            ui.label('This will also delete all children.').classes('text-sm text-red-500')

        def confirm():
            from ui.request_tabs import close_tabs_missing
            if item_type == 'collection':
                result = run_action('Delete collection', store.delete, collection_id)
            else:
                result = run_action('Delete item', store.delete_item, collection_id, item_id)
            if _report(result):
                dialog.close()
                close_tabs_missing()
                refresh_tree()

        with ui.row().classes('mt-2'):
            ui.button('Delete', on_click=confirm).props('color=negative')
            ui.button('Cancel', on_click=dialog.close).props('flat')
    dialog.open()


def _move_dialog(collection_id: str, item_id: str, label: str):
    store = get_store()
    result = run_action('Load collection', store.get, collection_id)
    if not _report(result):
        return
    moving = run_action('Load item', store.get_item, collection_id, item_id)
    if not _report(moving):
        return
    # a folder cannot go below itself
    blocked = {sub.id for sub in iter_items([moving.value])}
    targets = {'': '(collection root)'} | {
        f.id: f.name for f in iter_items(result.value.items)
        if f.type == 'folder' and f.id not in blocked
    }

    with ui.dialog() as dialog, ui.card().classes('w-80'):
        ui.label(f'Move "{label}"').classes('text-lg font-bold')
        target = ui.select(targets, value='', label='Destination').classes('w-full')

        def confirm():
            moved = run_action('Move item', store.move_item, collection_id, item_id, target.value or '')
            if _report(moved):
                dialog.close()
                refresh_tree()

        with ui.row().classes('mt-2'):
            ui.button('Move', on_click=confirm).props('color=primary')
            ui.button('Cancel', on_click=dialog.close).props('flat')
    dialog.open()


def _duplicate_request(collection_id: str, item_id: str):
    result = run_action('Duplicate request', get_store().duplicate_item, collection_id, item_id)
    if _report(result, f'Duplicated as "{result.value.name}"' if result.ok else None):
        refresh_tree()


def _close_collection(collection_id: str):
    from ui.request_tabs import close_tabs_missing, save_sessions_of
    save_sessions_of(collection_id)
    get_store().close(collection_id)
    close_tabs_missing()
    refresh_tree()


def new_collection_dialog():
    store = get_store()
    with ui.dialog() as dialog, ui.card().classes('w-96'):
        ui.label('New Collection').classes('text-lg font-bold')
        name_input = ui.input('Collection name').classes('w-full')
        path_input = ui.input(
            'Save as (optional)',
            placeholder=str(store.base_dir / 'name.campfire'),
        ).classes('w-full font-mono text-sm')

        def confirm():
            name = name_input.value.strip()
            if not name:
                ui.notify('Name cannot be empty', color='negative')
                return
            result = run_action('Create collection', store.create, name, path_input.value.strip())
            if _report(result, f'Saved to {result.value.file_path}' if result.ok else None):
                dialog.close()
                refresh_tree()

        name_input.on('keydown.enter', lambda _e: confirm())
        with ui.row().classes('mt-2'):
            ui.button('Create', on_click=confirm).props('color=primary')
            ui.button('Cancel', on_click=dialog.close).props('flat')
    dialog.open()


def open_collection_dialog():
    store = get_store()
    with ui.dialog() as dialog, ui.card().classes('w-96'):
        ui.label('Open Collection').classes('text-lg font-bold')
        path_input = ui.input(
            'Collection file',
            placeholder=str(store.base_dir / 'name.campfire'),
        ).classes('w-full font-mono text-sm')

        def confirm():
            result = run_action('Open collection', store.open, path_input.value)
            if result.cancelled:
                dialog.close()
                return
            if _report(result):
                dialog.close()
                refresh_tree()

        path_input.on('keydown.enter', lambda _e: confirm())
        with ui.row().classes('mt-2'):
            ui.button('Open', on_click=confirm).props('color=primary')
            ui.button('Cancel', on_click=dialog.close).props('flat')
    dialog.open()


# ── Sidebar build / refresh ───────────────────────────────────────────────────

def _render_sidebar_content():
    with ui.row().classes('w-full items-center justify-between mb-2 px-1'):
        ui.label('Collections').classes('font-semibold text-gray-700 text-sm')
        with ui.row().classes('gap-0'):
            ui.button(icon='add', on_click=new_collection_dialog).props('flat round dense size=sm').tooltip('New collection')
            ui.button(icon='folder_open', on_click=open_collection_dialog).props('flat round dense size=sm').tooltip('Open collection')

    collections = get_store().list_open()
    if collections:
        for col in collections:
            _render_collection(col)
    else:
        with ui.column().classes('w-full items-center mt-8 gap-2'):
            ui.icon('inventory_2').classes('text-4xl text-gray-300')
            ui.label('No open collections.').classes('text-gray-400 text-sm')
            ui.label('Create or open one to start.').classes('text-gray-400 text-sm')


async def build_sidebar():
    global _sidebar_container
    with ui.column().classes('w-full gap-0') as container:
        _sidebar_container = container
        _render_sidebar_content()


def refresh_tree():
    global _sidebar_container
    if _sidebar_container is None:
        return
    _sidebar_container.clear()
    with _sidebar_container:
        _render_sidebar_content()
