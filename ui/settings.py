"""
Settings dialog: SSL verification, request timeout and where collections are kept.
"""
from nicegui import ui, app as nicegui_app

from core.store import get_store


def open_settings_dialog():
    """Open the Settings modal dialog."""
    with ui.dialog() as dialog, ui.card().classes('w-96'):
        ui.label('Settings').classes('text-xl font-bold mb-2')

        # ── SSL toggle ───────────────────────────────────────────────────────
        ui.label('SSL Verification').classes('text-sm font-semibold text-gray-600')
        ssl_on = getattr(nicegui_app.state, 'ssl_verify', True)

        def on_ssl_change(e):
            nicegui_app.state.ssl_verify = e.value

        ui.switch('SSL Verification', value=ssl_on, on_change=on_ssl_change)

        ui.label(
            'Disable for APIs using self-signed certificates.'
        ).classes('text-xs text-gray-400 mb-3')

        ui.separator()

        # ── Timeout ──────────────────────────────────────────────────────────
        ui.label('Request Timeout').classes('text-sm font-semibold text-gray-600 mt-3')

        def on_timeout_change(e):
            if e.value:
                nicegui_app.state.request_timeout = float(e.value)

        ui.number(
            'Seconds',
            value=getattr(nicegui_app.state, 'request_timeout', 30.0),
            min=1, max=600, step=1,
            on_change=on_timeout_change,
        ).classes('w-32')

        ui.separator()

        # ── Collections ──────────────────────────────────────────────────────
        ui.label('Collections').classes('text-sm font-semibold text-gray-600 mt-3')
        ui.label(str(get_store().base_dir)).classes('text-xs text-gray-500 font-mono')

        ui.button('Close', on_click=dialog.close).props('flat').classes('mt-2')

    dialog.open()
