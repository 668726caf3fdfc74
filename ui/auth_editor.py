"""
Auth tab of the request builder. Switching the type keeps the values typed for
the other types; only the fields of the active type are shown.
"""
from nicegui import ui

from core import auth as auth_helpers
from core import editor
from core.session import RequestSession

AUTH_TYPE_LABELS = {
    'none': 'No Auth',
    'basic': 'Basic Auth',
    'bearer': 'Bearer Token',
    'apikey': 'API Key',
}

FIELD_LABELS = {
    'basic_username': ('Username', 'Enter username'),
    'basic_password': ('Password', 'Enter password'),
    'bearer_token': ('Token', 'Enter token'),
    'bearer_prefix': ('Prefix', 'Bearer'),
    'api_key_key': ('Key', 'e.g., X-API-Key'),
    'api_key_value': ('Value', 'Enter API key value'),
}


def build_auth_editor(session: RequestSession, on_change):
    container = ui.column().classes('w-full gap-2')

    def dispatch(command, redraw=False):
        session.dispatch(command)
        if redraw:
            render()
        else:
            hint.set_text(auth_helpers.describe(session.draft.auth))
        on_change()

    def render():
        nonlocal hint
        container.clear()
        auth = session.draft.auth
        with container:
            ui.radio(
                AUTH_TYPE_LABELS,
                value=auth.type,
                on_change=lambda e: dispatch(editor.SetAuthType(auth_type=e.value), redraw=True),
            ).props('inline')

            fields = auth_helpers.visible_fields(auth)
            if not fields:
                ui.label('This request will be sent without any authentication headers.').classes(
                    'text-sm text-gray-500'
                )

            for name, value in fields.items():
                if name == 'api_key_location':
                    ui.radio(
                        {'header': 'Header', 'query': 'Query Param'},
                        value=value,
                        on_change=lambda e: dispatch(
                            editor.SetAuthField(field='api_key_location', value=e.value)),
                    ).props('inline')
                    continue
                label, placeholder = FIELD_LABELS[name]
                inp = ui.input(
                    label,
                    value=value,
                    placeholder=placeholder,
                    on_change=lambda e, _name=name: dispatch(
                        editor.SetAuthField(field=_name, value=e.value or '')),
                ).classes('w-full font-mono text-sm')
                if name == 'basic_password':
                    inp.props('type=password')

            hint = ui.label(auth_helpers.describe(auth)).classes(
                'text-xs text-gray-500 font-mono bg-gray-50 rounded px-2 py-1'
            )

    hint = None
    render()
