"""Main application entry point.

Serves the NiceGUI chat interface, by default mounted on a FastAPI host app.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def run_integrated() -> None:
    """Run the NiceGUI interface mounted on the FastAPI host app.

    The chat UI is served at / and the health check at /health.
    """
    import uvicorn
    from nicegui import ui

    from docmind.app import create_app
    from docmind.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    ui.run_with(
        app,
        title="DocuMind AI",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "docmind-secret"),
    )

    port = int(os.getenv("PORT", "8080"))
    logger.info(f"Chat UI available at http://localhost:{port}/")
    logger.info(f"Backend API at {os.getenv('API_BASE_URL', 'http://localhost:8000')}")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_standalone() -> None:
    """Run NiceGUI on its own server, without the host app."""
    from docmind.ui.chat_page import main as run_ui

    run_ui()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=standalone to run plain NiceGUI.
    Default is integrated mode (NiceGUI mounted on FastAPI).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting DocuMind in {mode} mode")

    if mode == "standalone":
        run_standalone()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
