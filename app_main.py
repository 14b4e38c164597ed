"""Application entry point for the Banana Monkey desktop client."""

from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from banana_client.api.admin_api import AdminApi
from banana_client.api.auth_api import AuthApi
from banana_client.api.game_api import GameApi
from banana_client.api.http_client import ApiClient
from banana_client.api.player_api import PlayerApi
from banana_client.config import config
from banana_client.core.round_controller import RoundController
from banana_client.core.services.auth_service import AuthService
from banana_client.core.services.player_session import PlayerSession
from banana_client.ui.main_window import MainWindow
from banana_client.ui.qt_runner import QtRequestRunner
from banana_client.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging, restore the saved session, and launch the Qt UI."""
    logger = configure_logging()
    logger.info("Starting %s against %s", config.APP_NAME, config.API_BASE_URL)

    app = QApplication(sys.argv)

    session = PlayerSession.load(config.SESSION_FILE)
    client = ApiClient(session)
    runner = QtRequestRunner()
    game_api = GameApi(client)
    controller = RoundController(game_api, session, runner=runner)

    window = MainWindow(
        session=session,
        auth_service=AuthService(AuthApi(client), session),
        controller=controller,
        game_api=game_api,
        player_api=PlayerApi(client),
        admin_api=AdminApi(client),
        runner=runner,
    )
    window.show()
    exit_code = app.exec()
    runner.wait_for_done()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
