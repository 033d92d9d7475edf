"""
Signal Workbench
================
Compose synthetic time-series signals across user-created plot panes.

Features:
- Signal registry with draggable rows
- Plot panes: add, close, resize by dragging the handle
- Drag a signal onto a pane to plot it
- Multi-resolution axis grid (days / hours / 5-minute marks)

Usage:
    python app.py
"""

import dash
import dash_bootstrap_components as dbc
import logging
import webbrowser
import threading
import time

from config import APP_TITLE, APP_VERSION, APP_HOST, APP_PORT, APP_URL, LOGGER_NAME
from core.workbench import WorkbenchController
from ui.layout import create_layout
from ui.callbacks import register_callbacks, register_clientside_callbacks

# Configure logging
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(LOGGER_NAME)


def create_workbench() -> WorkbenchController:
    """Workbench with the default signals and one empty pane."""
    workbench = WorkbenchController()
    workbench.add_pane()
    return workbench


def create_app(workbench: WorkbenchController = None) -> dash.Dash:
    """Create and configure the Dash application."""
    workbench = workbench or create_workbench()

    app = dash.Dash(
        __name__,
        external_stylesheets=[dbc.themes.DARKLY],
        title=APP_TITLE,
        update_title=None,  # Disable "Updating..." title
        suppress_callback_exceptions=True,
    )

    app.layout = create_layout(workbench)

    register_callbacks(app, workbench)
    register_clientside_callbacks(app)

    logger.info(f"App created with {len(app.callback_map)} callbacks")
    return app


def open_browser():
    """Open browser after a short delay."""
    time.sleep(1)
    webbrowser.open(APP_URL)


def main():
    """Main entry point."""
    print("=" * 60)
    print(f"  {APP_TITLE} v{APP_VERSION}")
    print(f"  Server: {APP_URL}")
    print("  Press Ctrl+C to stop")
    print("=" * 60)

    try:
        app = create_app()

        threading.Thread(target=open_browser, daemon=True).start()

        # One frame at a time: the workbench is not shared across threads
        app.run(
            host=APP_HOST,
            port=APP_PORT,
            debug=False,
            use_reloader=False,
            threaded=False,
        )
    except Exception as e:
        logger.exception(f"Application error: {e}")
        raise


if __name__ == "__main__":
    main()
