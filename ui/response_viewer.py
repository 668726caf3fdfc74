"""
Response viewer panel: status line, Body / Headers tabs.
ResponseViewer() holds no DOM until build() is called. request_tabs.py creates
the viewer first, hands it to the request builder for Send-button wiring, and
then builds it below the builder.
"""
from nicegui import ui

from core.models import ResponseView


class ResponseViewer:
    """Holds references to the response panel DOM elements and handles updates."""

    def __init__(self):
        self._status_label = None
        self._time_label = None
        self._size_label = None
        self._error_banner = None
        self._body_container = None
        self._headers_container = None
        self._built = False

    # ── DOM construction (called after request builder is rendered) ────────────

    def build(self):
        """Create all DOM elements for the response viewer in the current NiceGUI context."""
        with ui.column().classes('w-full gap-1 border-t border-gray-200 pt-2 mt-1'):

            # Status line
            with ui.row().classes('items-center gap-4'):
                self._status_label = ui.label('Enter a URL and hit Send').classes(
                    'text-sm font-medium text-gray-600'
                )
                self._time_label = ui.label('').classes('text-xs text-gray-500')
                self._size_label = ui.label('').classes('text-xs text-gray-500')

            # Error banner (hidden by default)
            self._error_banner = ui.label('').classes(
                'w-full bg-red-50 text-red-700 border border-red-200 rounded px-3 py-2 text-sm'
            )
            self._error_banner.set_visibility(False)

            with ui.tabs().classes('w-full shrink-0') as tabs:
                body_tab = ui.tab('Body')
                headers_tab = ui.tab('Headers')

            with ui.tab_panels(tabs, value=body_tab).classes('w-full'):
                with ui.tab_panel(body_tab).classes('p-0 pt-1'):
                    self._body_container = ui.column().classes('w-full')

                with ui.tab_panel(headers_tab).classes('p-0 pt-1'):
                    self._headers_container = ui.column().classes('w-full')

        self._built = True

    # ── Update logic ───────────────────────────────────────────────────────────

    def update_response(self, view: ResponseView | None):
        if not self._built or view is None:
            return

        self._body_container.clear()
        self._headers_container.clear()

        # --- Transport error: only the message is shown ---
        if view.error:
            self._status_label.set_text('Error')
            self._status_label.classes(replace='text-sm font-medium text-red-600')
            self._time_label.set_text('')
            self._size_label.set_text('')
            self._error_banner.set_text(view.error)
            self._error_banner.set_visibility(True)
            return

        self._error_banner.set_visibility(False)
        color = 'text-green-600' if view.success else 'text-red-600'
        self._status_label.set_text(view.status_line)
        self._status_label.classes(replace=f'text-sm font-medium {color}')
        self._time_label.set_text(view.time)
        self._size_label.set_text(view.size)

        with self._body_container:
            if view.is_json:
                ui.code(view.body, language='json').classes('w-full text-sm')
            else:
                ui.textarea(value=view.body).props(
                    'readonly outlined'
                ).classes('w-full font-mono text-sm').style('min-height: 200px')

        with self._headers_container:
            if view.headers:
                for key, val in view.headers:
                    with ui.row().classes(
                        'w-full gap-2 border-b border-gray-100 py-1 no-wrap'
                    ):
                        ui.label(key).classes(
                            'text-xs font-semibold text-gray-700 shrink-0'
                        ).style('min-width: 180px; max-width: 220px; overflow: hidden; text-overflow: ellipsis')
                        ui.label(val).classes(
                            'text-xs text-gray-600 font-mono flex-grow truncate'
                        )
            else:
                ui.label('(no headers)').classes('text-gray-400 text-xs italic')
