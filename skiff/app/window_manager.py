"""Single main window per application."""
import logging

from skiff.shared.errors import ConstructionError, ErrorCode, PreconditionError

logger = logging.getLogger(__name__)


class MainWindow:
    """A runtime window handle bound to the application that owns it."""

    def __init__(self, owner, handle):
        self.owner = owner
        self.handle = handle
        self.state = "hidden"  # hidden, visible, focused
        self.destroyed = False

    def child(self, name: str):
        """Look up a named child widget of the underlying window."""
        return self.handle.child(name)

    def __repr__(self) -> str:
        return f"MainWindow({self.owner.identifier}, {self.state})"


class WindowManager:
    """Owns at most one live MainWindow per owning application."""

    def __init__(self, runtime):
        self.runtime = runtime
        self.windows: dict[str, MainWindow] = {}
        self._last_presented: MainWindow | None = None

    def get_or_create(self, owner) -> MainWindow:
        """
        Return the owner's live window, constructing it on first use.

        Raises:
            ConstructionError: If the runtime cannot build the window
        """
        window = self.windows.get(owner.identifier)
        if window is not None and not window.destroyed:
            return window

        try:
            handle = self.runtime.create_window(owner)
        except ConstructionError:
            raise
        except Exception as exc:
            raise ConstructionError(
                f"Could not construct main window for {owner.identifier}: {exc}"
            ) from exc
        if handle is None:
            raise ConstructionError(f"Runtime returned no window for {owner.identifier}")

        window = MainWindow(owner, handle)
        self.windows[owner.identifier] = window
        self.runtime.watch_destroyed(handle, lambda: self._on_window_destroyed(window))
        logger.info(f"Created main window for {owner.identifier}")
        return window

    def present(self, window: MainWindow) -> None:
        """Show, raise and focus *window*; safe to repeat."""
        if window.destroyed:
            raise PreconditionError(
                ErrorCode.WINDOW_DESTROYED,
                f"Cannot present destroyed window of {window.owner.identifier}",
            )
        self.runtime.present(window.handle)
        window.state = "focused"
        self._last_presented = window

    def active_window(self) -> MainWindow | None:
        """The focused window if it is ours, else the most recently presented one."""
        handle = self.runtime.active_window()
        for window in self.windows.values():
            if not window.destroyed and window.handle is handle:
                return window
        if self._last_presented is not None and not self._last_presented.destroyed:
            return self._last_presented
        return None

    def _on_window_destroyed(self, window: MainWindow):
        """Handle window destruction."""
        window.destroyed = True
        window.state = "hidden"
        if self.windows.get(window.owner.identifier) is window:
            del self.windows[window.owner.identifier]
        if self._last_presented is window:
            self._last_presented = None
        logger.info(f"Main window of {window.owner.identifier} destroyed")

    def window_count(self) -> int:
        """Get the number of live windows."""
        return sum(1 for w in self.windows.values() if not w.destroyed)
