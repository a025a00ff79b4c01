"""Main application window."""
from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import (
    QLabel,
    QMainWindow,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

# Which menu each application action is listed under
MENU_LAYOUT = (
    ("&File", ("quit",)),
    ("&Help", ("about",)),
)


class ShellWindow(QMainWindow):
    """
    The single top-level window.

    Menus are built from the application actions installed on the runtime,
    so *File → Quit* and *Help → About* are the action surface. Child
    widgets carry object names and can be looked up with ``child()``.
    """

    def __init__(self, title: str, actions: dict[str, QAction], stylesheet: str = ""):
        super().__init__()
        self.setObjectName("main_window")
        # Closing destroys the window; the manager builds a fresh one next time
        self.setAttribute(Qt.WA_DeleteOnClose)

        self.setWindowTitle(title)
        self.resize(900, 600)

        self._init_ui(title, actions)
        if stylesheet:
            self.setStyleSheet(stylesheet)

    # ------------------------------------------------------------------
    # UI setup
    # ------------------------------------------------------------------

    def _init_ui(self, title: str, actions: dict[str, QAction]):
        central = QWidget()
        central.setObjectName("central")
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)

        welcome = QLabel(self.tr("Welcome to %s") % title)
        welcome.setObjectName("welcome_label")
        welcome.setAlignment(Qt.AlignCenter)
        layout.addWidget(welcome)

        menubar = self.menuBar()
        for menu_title, names in MENU_LAYOUT:
            present = [actions[name] for name in names if name in actions]
            if not present:
                continue
            menu = menubar.addMenu(self.tr(menu_title))
            menu.setObjectName(f"menu_{menu_title.strip('&').lower()}")
            for action in present:
                menu.addAction(action)

        # Shortcuts keep working when the menu bar is native or hidden
        self.addActions(list(actions.values()))

        status = QStatusBar()
        status.setObjectName("status_bar")
        self.setStatusBar(status)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def child(self, name: str) -> QWidget | None:
        """Find a named child widget (e.g. ``"welcome_label"``)."""
        return self.findChild(QWidget, name)
