"""Component for registration and the two-step (password + emailed code) login."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from banana_client.api.schemas import LoginChallenge, RegisteredUser
from banana_client.constants.game_constants import OTP_CODE_LENGTH
from banana_client.constants.ui_constants import (
    LOGIN_BUTTON,
    LOGIN_TITLE,
    OTP_BACK_BUTTON,
    OTP_PROMPT_TEMPLATE,
    OTP_TITLE,
    OTP_VERIFY_BUTTON,
    REGISTER_BUTTON,
)
from banana_client.core.errors import InputValidationError
from banana_client.core.models import User
from banana_client.core.services.auth_service import AuthService, validate_otp_code
from banana_client.styling.styles import Styles
from banana_client.ui.dialog_helpers import show_error, show_info, show_warning


class LoginPanel(QWidget):
    """UI component for logging in; calls ``on_logged_in`` once the code is verified."""

    def __init__(
        self,
        auth_service: AuthService,
        runner,
        on_logged_in: callable,
        parent: QWidget | None = None
    ) -> None:
        super().__init__(parent)
        self.auth_service = auth_service
        self.runner = runner
        self.on_logged_in = on_logged_in
        self._pending_email: str | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.page_stack = QStackedWidget(self)
        self.page_stack.addWidget(self._build_credentials_page())
        self.page_stack.addWidget(self._build_code_page())
        layout.addStretch()
        layout.addWidget(self.page_stack)
        layout.addStretch()

    def _build_credentials_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout()
        page.setLayout(layout)

        title = QLabel(LOGIN_TITLE, page)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        form = QFormLayout()
        self.username_input = QLineEdit(page)
        form.addRow("Username", self.username_input)
        self.password_input = QLineEdit(page)
        self.password_input.setEchoMode(QLineEdit.Password)
        self.password_input.returnPressed.connect(self._handle_login)
        form.addRow("Password", self.password_input)
        self.email_input = QLineEdit(page)
        self.email_input.setPlaceholderText("Only needed to create an account")
        form.addRow("Email", self.email_input)
        layout.addLayout(form)

        button_row = QHBoxLayout()
        self.login_button = QPushButton(LOGIN_BUTTON, page)
        self.login_button.clicked.connect(self._handle_login)
        button_row.addWidget(self.login_button)
        self.register_button = QPushButton(REGISTER_BUTTON, page)
        self.register_button.clicked.connect(self._handle_register)
        button_row.addWidget(self.register_button)
        layout.addLayout(button_row)
        return page

    def _build_code_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout()
        page.setLayout(layout)

        title = QLabel(OTP_TITLE, page)
        title.setAlignment(Qt.AlignCenter)
        title.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title)

        self.code_prompt_label = QLabel("", page)
        self.code_prompt_label.setAlignment(Qt.AlignCenter)
        layout.addWidget(self.code_prompt_label)

        self.code_input = QLineEdit(page)
        self.code_input.setMaxLength(OTP_CODE_LENGTH)
        self.code_input.setAlignment(Qt.AlignCenter)
        self.code_input.setPlaceholderText("0" * OTP_CODE_LENGTH)
        self.code_input.returnPressed.connect(self._handle_verify)
        layout.addWidget(self.code_input)

        button_row = QHBoxLayout()
        self.back_button = QPushButton(OTP_BACK_BUTTON, page)
        self.back_button.clicked.connect(self.reset_state)
        button_row.addWidget(self.back_button)
        self.verify_button = QPushButton(OTP_VERIFY_BUTTON, page)
        self.verify_button.clicked.connect(self._handle_verify)
        button_row.addWidget(self.verify_button)
        layout.addLayout(button_row)
        return page

    # --- Step 1 ---

    def _handle_login(self) -> None:
        username = self.username_input.text()
        password = self.password_input.text()
        self._set_busy(True)
        self.runner.run(
            lambda: self.auth_service.request_code(username, password),
            self._handle_code_sent,
            self._handle_failure,
        )

    def _handle_code_sent(self, challenge: LoginChallenge) -> None:
        self._set_busy(False)
        if not challenge.otp_sent:
            show_warning(self, "Login", "The server did not send a login code. Please try again.")
            return
        self._pending_email = challenge.email
        self.code_prompt_label.setText(OTP_PROMPT_TEMPLATE.format(email=challenge.email))
        self.code_input.clear()
        self.page_stack.setCurrentIndex(1)
        self.code_input.setFocus()

    def _handle_register(self) -> None:
        username = self.username_input.text()
        email = self.email_input.text()
        password = self.password_input.text()
        self._set_busy(True)
        self.runner.run(
            lambda: self.auth_service.register(username, email, password),
            self._handle_registered,
            self._handle_failure,
        )

    def _handle_registered(self, registered: RegisteredUser) -> None:
        self._set_busy(False)
        show_info(self, "Account created", f"Welcome, {registered.username}! Sending your login code...")
        self._handle_login()

    # --- Step 2 ---

    def _handle_verify(self) -> None:
        if self._pending_email is None:
            self.reset_state()
            return
        try:
            code = validate_otp_code(self.code_input.text())
        except InputValidationError as exc:
            show_warning(self, "Invalid code", str(exc))
            return
        email = self._pending_email
        self._set_busy(True)
        self.runner.run(
            lambda: self.auth_service.verify_code(email, code),
            self._handle_verified,
            self._handle_failure,
        )

    def _handle_verified(self, user: User) -> None:
        self._set_busy(False)
        self.reset_state()
        self.on_logged_in(user)

    def _handle_failure(self, exc: Exception) -> None:
        self._set_busy(False)
        if isinstance(exc, InputValidationError):
            show_warning(self, "Check your input", str(exc))
        else:
            show_error(self, "Login failed", str(exc) or "Something went wrong. Please try again.")

    def _set_busy(self, busy: bool) -> None:
        for button in (self.login_button, self.register_button, self.verify_button, self.back_button):
            button.setEnabled(not busy)

    def reset_state(self) -> None:
        self._pending_email = None
        self.password_input.clear()
        self.code_input.clear()
        self.page_stack.setCurrentIndex(0)
