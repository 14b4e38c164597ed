"""Qt main window implementing the login, game, profile, leaderboard and admin pages."""

from __future__ import annotations

import logging
from enum import Enum, auto

from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from banana_client.api.admin_api import AdminApi
from banana_client.api.game_api import GameApi
from banana_client.api.player_api import PlayerApi
from banana_client.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from banana_client.constants.ui_constants import (
    HEADER_TEMPLATE,
    NAV_BUTTON_ABOUT,
    NAV_BUTTON_ADMIN,
    NAV_BUTTON_HELP,
    NAV_BUTTON_LEADERBOARD,
    NAV_BUTTON_LOGOUT,
    NAV_BUTTON_PLAY,
    NAV_BUTTON_PROFILE,
    WINDOW_TITLE,
)
from banana_client.core.models import RoundState, User
from banana_client.core.round_controller import RoundController
from banana_client.core.services.auth_service import AuthService
from banana_client.core.services.player_session import PlayerSession
from banana_client.styling.styles import Styles
from banana_client.ui.components.admin_panel import AdminPanel
from banana_client.ui.components.game_panel import GamePanel
from banana_client.ui.components.leaderboard_panel import LeaderboardPanel
from banana_client.ui.components.login_panel import LoginPanel
from banana_client.ui.components.profile_panel import ProfilePanel
from banana_client.ui.dialog_helpers import confirm_logout, show_info, show_warning

logger = logging.getLogger(__name__)


class ClientPage(Enum):
    """High-level page shown in the main window."""

    LOGIN = auto()
    GAME = auto()
    PROFILE = auto()
    LEADERBOARD = auto()
    ADMIN = auto()


_PAGE_INDEX = {
    ClientPage.LOGIN: 0,
    ClientPage.GAME: 1,
    ClientPage.PROFILE: 2,
    ClientPage.LEADERBOARD: 3,
    ClientPage.ADMIN: 4,
}


class MainWindow(QMainWindow):
    """Main Qt window; routes between pages and guards the logged-in ones."""

    def __init__(
        self,
        session: PlayerSession,
        auth_service: AuthService,
        controller: RoundController,
        game_api: GameApi,
        player_api: PlayerApi,
        admin_api: AdminApi,
        runner,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(960, 760)

        self.session = session
        self.auth_service = auth_service
        self.controller = controller
        self.game_api = game_api
        self.player_api = player_api
        self.admin_api = admin_api
        self.runner = runner

        self._page = ClientPage.LOGIN

        self._build_ui()
        self.controller.on_session_expired = self.handle_session_expired
        self.setStyleSheet(Styles.get_main_window_style())

        if self.session.is_authenticated():
            self._enter_logged_in_state()
        else:
            self._set_page(ClientPage.LOGIN)

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_nav_buttons(root_layout)

        self.page_stack = QStackedWidget(self)
        self.login_panel = LoginPanel(
            self.auth_service,
            self.runner,
            on_logged_in=self._handle_logged_in,
            parent=self
        )
        self.game_panel = GamePanel(
            self.controller,
            self.game_api,
            self.runner,
            on_session_changed=self._update_header,
            parent=self
        )
        self.profile_panel = ProfilePanel(
            self.player_api,
            self.runner,
            on_session_expired=self.handle_session_expired,
            parent=self
        )
        self.leaderboard_panel = LeaderboardPanel(
            self.player_api,
            self.session,
            self.runner,
            on_session_expired=self.handle_session_expired,
            parent=self
        )
        self.admin_panel = AdminPanel(
            self.admin_api,
            self.runner,
            on_session_expired=self.handle_session_expired,
            parent=self
        )

        self.page_stack.addWidget(self.login_panel)
        self.page_stack.addWidget(self.game_panel)
        self.page_stack.addWidget(self.profile_panel)
        self.page_stack.addWidget(self.leaderboard_panel)
        self.page_stack.addWidget(self.admin_panel)
        root_layout.addWidget(self.page_stack, stretch=1)

    def _build_nav_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.header_label = QLabel("", self)
        self.header_label.setStyleSheet(Styles.get_large_label_style())
        button_row.addWidget(self.header_label)
        button_row.addStretch()

        self.play_button = QPushButton(NAV_BUTTON_PLAY, self)
        self.play_button.setCheckable(True)
        self.play_button.clicked.connect(lambda: self._navigate(ClientPage.GAME))
        button_row.addWidget(self.play_button)

        self.profile_button = QPushButton(NAV_BUTTON_PROFILE, self)
        self.profile_button.setCheckable(True)
        self.profile_button.clicked.connect(lambda: self._navigate(ClientPage.PROFILE))
        button_row.addWidget(self.profile_button)

        self.leaderboard_button = QPushButton(NAV_BUTTON_LEADERBOARD, self)
        self.leaderboard_button.setCheckable(True)
        self.leaderboard_button.clicked.connect(lambda: self._navigate(ClientPage.LEADERBOARD))
        button_row.addWidget(self.leaderboard_button)

        self.admin_button = QPushButton(NAV_BUTTON_ADMIN, self)
        self.admin_button.setCheckable(True)
        self.admin_button.clicked.connect(lambda: self._navigate(ClientPage.ADMIN))
        button_row.addWidget(self.admin_button)

        self.help_button = QPushButton(NAV_BUTTON_HELP, self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        self.about_button = QPushButton(NAV_BUTTON_ABOUT, self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.logout_button = QPushButton(NAV_BUTTON_LOGOUT, self)
        self.logout_button.clicked.connect(self._handle_logout)
        button_row.addWidget(self.logout_button)

        layout.addLayout(button_row)

    # --- Navigation ---

    def _set_page(self, page: ClientPage) -> None:
        self._page = page
        logged_in = page is not ClientPage.LOGIN
        for button in (self.play_button, self.profile_button, self.leaderboard_button, self.logout_button):
            button.setVisible(logged_in)
        self.admin_button.setVisible(logged_in and self.session.is_admin())

        self.play_button.setChecked(page is ClientPage.GAME)
        self.profile_button.setChecked(page is ClientPage.PROFILE)
        self.leaderboard_button.setChecked(page is ClientPage.LEADERBOARD)
        self.admin_button.setChecked(page is ClientPage.ADMIN)

        self.page_stack.setCurrentIndex(_PAGE_INDEX[page])
        self._update_header()

    def _navigate(self, page: ClientPage) -> None:
        if not self.session.is_authenticated():
            self._set_page(ClientPage.LOGIN)
            return
        if page is ClientPage.ADMIN and not self.session.is_admin():
            show_warning(self, "Admin", "Only administrators can open the admin console.")
            self._set_page(self._page)
            return
        if page is not ClientPage.GAME and self._page is ClientPage.GAME:
            # Leaving the game page abandons the running round.
            self.game_panel.leave()
        self._set_page(page)
        if page is ClientPage.PROFILE:
            self.profile_panel.refresh()
        elif page is ClientPage.LEADERBOARD:
            self.leaderboard_panel.refresh()
        elif page is ClientPage.ADMIN:
            self.admin_panel.refresh()

    def _update_header(self) -> None:
        user = self.session.user
        if user is None or self._page is ClientPage.LOGIN:
            self.header_label.setText(APP_NAME)
            return
        self.header_label.setText(
            HEADER_TEMPLATE.format(username=user.username or user.email, score=user.score, coins=user.coins)
        )

    # --- Session ---

    def _handle_logged_in(self, user: User) -> None:
        logger.info("Signed in as %s", user.username or user.email)
        self._enter_logged_in_state()

    def _enter_logged_in_state(self) -> None:
        if self.session.is_admin():
            self._navigate(ClientPage.ADMIN)
        else:
            self._navigate(ClientPage.GAME)

    def _handle_logout(self) -> None:
        if self.controller.state in (RoundState.ACTIVE, RoundState.SUBMITTING):
            if not confirm_logout(self):
                return
        self.game_panel.leave()
        # Local session ends here; the worker only revokes the captured token.
        access_token = self.auth_service.end_session()
        self.runner.run(
            lambda: self.auth_service.revoke(access_token),
            lambda _result: None,
            lambda exc: logger.warning("Logout request failed: %s", exc),
        )
        self.login_panel.reset_state()
        self._set_page(ClientPage.LOGIN)

    def handle_session_expired(self) -> None:
        """A token refresh failed: the session is already cleared, go back to login."""
        if self._page is ClientPage.LOGIN:
            return
        logger.info("Session expired; returning to login")
        self.game_panel.leave()
        self.session.clear()
        self.login_panel.reset_state()
        self._set_page(ClientPage.LOGIN)
        show_warning(self, "Session expired", "Your session has expired. Please log in again.")

    # --- Dialogs ---

    def _handle_about(self) -> None:
        details = (
            f"{APP_NAME} v{APP_VERSION}\n"
            f"License: {APP_LICENSE}\n\n"
            f"{APP_ABOUT_TEXT}"
        )
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, "Help", HELP_TEXT)
