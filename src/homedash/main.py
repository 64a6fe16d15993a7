"""Application entry point for the dashboard backend server."""

from homedash.app import App
from homedash.config import Config
from homedash.logging import setup_logging
from homedash.web.runner import run_server


def main() -> None:
    config = Config()
    setup_logging(config.debug)
    app = App(config)
    run_server(app, config)


if __name__ == "__main__":
    main()
