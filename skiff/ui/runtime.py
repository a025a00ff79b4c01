"""Qt presentation runtime: the only place that touches QApplication."""
import logging
import sys
from typing import Callable, Optional, Sequence

from PySide6.QtCore import QCoreApplication, Qt, QTimer
from PySide6.QtGui import QAction, QGuiApplication, QIcon, QKeySequence
from PySide6.QtWidgets import QApplication, QMessageBox, QWidget

from skiff.services.resources import ResourceBundle
from skiff.shared.errors import ConstructionError
from skiff.shared.models import AboutDialogState, ActionSpec, AppIdentity
from skiff.ui.about_dialog import build_about_dialog
from skiff.ui.main_window import ShellWindow
from skiff.ui.shortcuts import to_qt_shortcut

logger = logging.getLogger(__name__)

STYLESHEET = "main_window.qss"
ICON = "skiff.svg"


class QtRuntime:
    """
    Wraps the QApplication and builds windows and dialogs on request.

    The controller and window manager only hold the opaque handles this
    returns and call back into it; they never touch Qt directly.
    """

    def __init__(
        self,
        identity: AppIdentity,
        argv: Optional[Sequence[str]] = None,
        resources: Optional[ResourceBundle] = None,
    ):
        self.identity = identity
        self.resources = resources or ResourceBundle()
        self.actions: dict[str, QAction] = {}
        # (signal, slot) pairs connected on the shared QApplication
        self._app_hooks: list = []

        app = QApplication.instance()
        if app is None:
            QGuiApplication.setDesktopFileName(identity.identifier)
            app = QApplication(list(argv) if argv is not None else sys.argv)
        app.setApplicationName(identity.name)
        app.setApplicationVersion(identity.version)
        app.setOrganizationName(identity.organization or identity.name)
        app.setApplicationDisplayName(identity.name)
        self.app = app

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def install_action(self, spec: ActionSpec, handler: Callable[[], object]) -> QAction:
        text = QCoreApplication.translate("Actions", spec.label or spec.name)
        action = QAction(text, self.app)
        action.setObjectName(f"action_{spec.name}")
        if spec.accelerators:
            action.setShortcuts([QKeySequence(to_qt_shortcut(a)) for a in spec.accelerators])
            action.setShortcutContext(Qt.ApplicationShortcut)
        if spec.name == "quit":
            action.setMenuRole(QAction.QuitRole)
        elif spec.name == "about":
            action.setMenuRole(QAction.AboutRole)
        action.triggered.connect(lambda checked=False: handler())
        self.actions[spec.name] = action
        return action

    # ------------------------------------------------------------------
    # Windows
    # ------------------------------------------------------------------

    def create_window(self, owner) -> ShellWindow:
        try:
            stylesheet = self.resources.read_text(STYLESHEET)
        except FileNotFoundError as exc:
            raise ConstructionError(f"Main window assets missing: {exc}") from exc

        window = ShellWindow(owner.identity.name, self.actions, stylesheet)
        if self.resources.exists(ICON):
            window.setWindowIcon(QIcon(self.resources.path_for(ICON)))
        else:
            logger.warning(f"No window icon in bundle ({self.resources.path_for(ICON)})")
        return window

    def present(self, handle: QWidget) -> None:
        if handle.isMinimized():
            handle.showNormal()
        else:
            handle.show()
        handle.raise_()
        handle.activateWindow()

    def active_window(self) -> QWidget | None:
        return QApplication.activeWindow()

    def watch_destroyed(self, handle: QWidget, callback: Callable[[], None]) -> None:
        handle.destroyed.connect(lambda *_: callback())

    def show_about(self, state: AboutDialogState) -> QMessageBox:
        box = build_about_dialog(state.parent.handle, state)
        box.open()  # non-blocking
        return box

    # ------------------------------------------------------------------
    # Event loop
    # ------------------------------------------------------------------

    def on_last_window_closed(self, callback: Callable[[], None]) -> None:
        self._hook(self.app.lastWindowClosed, callback)

    def on_reactivated(self, callback: Callable[[], None]) -> None:
        """Dock clicks on macOS re-activate the app without a new launch."""
        if sys.platform != "darwin":
            return

        def on_state(state):
            if state == Qt.ApplicationActive:
                callback()

        self._hook(self.app.applicationStateChanged, on_state)

    def call_soon(self, callback: Callable[[], None]) -> None:
        QTimer.singleShot(0, callback)

    def exec(self) -> int:
        return self.app.exec()

    def exit(self, status: int = 0) -> None:
        self.app.exit(status)

    def shutdown(self) -> None:
        """Unregister actions and app-level hooks; safe to call twice."""
        for signal, slot in self._app_hooks:
            signal.disconnect(slot)
        self._app_hooks.clear()
        for action in self.actions.values():
            action.triggered.disconnect()
            action.deleteLater()
        self.actions.clear()

    def _hook(self, signal, slot) -> None:
        signal.connect(slot)
        self._app_hooks.append((signal, slot))
