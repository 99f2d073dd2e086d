"""Main entry point for the chatflow bot."""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from chatflow.api import create_fastapi_app
from chatflow.app import Application
from chatflow.config import Settings
from chatflow.logging_config import setup_logging


def main():
    """Run the bot and its HTTP API."""
    project_root = Path(__file__).resolve().parent
    load_dotenv(project_root / ".env")

    settings = Settings.from_env()
    setup_logging(settings.log_level)

    app = create_fastapi_app(Application(settings))

    # Polling runs inside the API lifespan; uvicorn owns signal handling
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
