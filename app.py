from dotenv import load_dotenv
load_dotenv()  # must run before any other import reads os.environ

import os
from loguru import logger
from nicegui import ui, app
from core.logging import setup_logging
from core.store import get_store


@ui.page('/')
async def index():
    from ui.layout import build_layout
    await build_layout()


def main():
    setup_logging(
        debug_mode=os.getenv("CAMPFIRE_DEBUG", "false").lower() == "true",
        log_dir=os.getenv("CAMPFIRE_LOG_DIR", "logs"),
    )

    store = get_store()
    try:
        store.base_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error(f"Cannot create collections directory {store.base_dir}: {e}")
        raise SystemExit(1)
    logger.info(f"Collections directory: {store.base_dir}")

    app.state.ssl_verify = os.getenv("SSL_VERIFY", "true").lower() != "false"
    app.state.request_timeout = float(os.getenv("REQUEST_TIMEOUT", "30"))

    ui.run(
        title='Campfire',
        port=int(os.getenv("CAMPFIRE_PORT", "8080")),
        reload=False,
        storage_secret=os.getenv("STORAGE_SECRET", 'campfire-dev-secret'),
    )


if __name__ == '__main__':
    main()
