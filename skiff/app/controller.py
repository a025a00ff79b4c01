"""Application controller: global actions, activation and the About flow."""
import logging
import weakref
from typing import Optional

from skiff.app.window_manager import MainWindow, WindowManager
from skiff.core.lifecycle import assert_transition
from skiff.shared.errors import ConstructionError, ErrorCode, PreconditionError
from skiff.shared.logging_ import log_lifecycle_event
from skiff.shared.models import AboutDialogState, ActionSpec, AppFlags, AppIdentity

logger = logging.getLogger(__name__)

QUIT_ACCELERATOR = "primary+q"


class ApplicationController:
    """
    Process-wide application object.

    Exactly one is constructed per process, before the event loop starts.
    Constructing a second one is a caller error and is not checked here;
    the underlying QApplication makes the same assumption.
    """

    def __init__(
        self,
        identity: AppIdentity,
        flags: AppFlags = AppFlags.NONE,
        runtime=None,
        window_manager: Optional[WindowManager] = None,
    ):
        self._identity = identity
        self._flags = AppFlags(flags)

        if runtime is None:
            from skiff.ui.runtime import QtRuntime
            runtime = QtRuntime(identity)
        self.runtime = runtime
        self.window_manager = window_manager or WindowManager(runtime)

        self.actions: dict[str, weakref.WeakMethod] = {}
        self.accelerators: dict[str, list[str]] = {}
        self.state = "uninitialized"

        # Both actions exist before run() so no shortcut can hit a missing one
        self._register_action(ActionSpec("quit", (QUIT_ACCELERATOR,), label="&Quit"), self.quit)
        self._register_action(ActionSpec("about", label="&About"), self.show_about)

        self.runtime.on_last_window_closed(self._bind(ApplicationController.on_last_window_closed))
        self.runtime.on_reactivated(self._bind(ApplicationController.handle_activation))

        self._set_state("running", event="startup")

    @property
    def identity(self) -> AppIdentity:
        return self._identity

    @property
    def identifier(self) -> str:
        return self._identity.identifier

    @property
    def flags(self) -> AppFlags:
        return self._flags

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def _register_action(self, spec: ActionSpec, method) -> None:
        if spec.name in self.actions:
            raise PreconditionError(
                ErrorCode.DUPLICATE_ACTION, f"Action {spec.name!r} is already registered"
            )
        self.actions[spec.name] = weakref.WeakMethod(method)
        self.accelerators[spec.name] = list(spec.accelerators)
        self.runtime.install_action(spec, self._bind(ApplicationController.trigger, spec.name))
        logger.debug(f"Registered {spec}")

    def _bind(self, func, *args):
        """Runtime callback holding only a weak reference back to the controller."""
        ref = weakref.ref(self)

        def dispatch():
            controller = ref()
            if controller is None:
                raise PreconditionError(
                    ErrorCode.DEAD_HANDLER,
                    f"{func.__name__}{args!r} dispatched after controller teardown",
                )
            return func(controller, *args)

        return dispatch

    def trigger(self, name: str):
        """Dispatch a registered action by name, as the menus and shortcuts do."""
        if self.state == "terminating":
            log_lifecycle_event(
                logger, "dispatch-ignored", self.state, app_id=self.identifier, action=name
            )
            return None

        ref = self.actions.get(name)
        if ref is None:
            raise PreconditionError(ErrorCode.UNKNOWN_ACTION, f"No action named {name!r}")

        log_lifecycle_event(logger, "dispatch", self.state, app_id=self.identifier, action=name)
        return ref()()

    def action_for_accelerator(self, accelerator: str) -> str | None:
        for name, accels in self.accelerators.items():
            if accelerator in accels:
                return name
        return None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _set_state(self, target: str, event: str = "transition") -> None:
        assert_transition(self.state, target)
        previous, self.state = self.state, target
        if previous != target:
            log_lifecycle_event(
                logger, event, target, app_id=self.identifier, message=f"from={previous}"
            )

    def activate(self) -> MainWindow | None:
        """
        Present the single main window, creating it on the first call.

        Raises:
            ConstructionError: If the window cannot be constructed
        """
        if self.state == "terminating":
            log_lifecycle_event(logger, "activate-ignored", self.state, app_id=self.identifier)
            return None

        try:
            window = self.window_manager.get_or_create(self)
        except ConstructionError as exc:
            log_lifecycle_event(
                logger, "activate", self.state, app_id=self.identifier,
                error_code=exc.code, message=exc.message,
            )
            raise

        self.window_manager.present(window)
        self._set_state("running")
        log_lifecycle_event(logger, "activate", self.state, app_id=self.identifier, window=window)
        return window

    def handle_activation(self) -> None:
        """
        Activation delivered by the event loop (launch, re-launch, dock).

        A window that cannot be built leaves nothing to run, so the loop is
        stopped with a non-zero status instead of idling without a window.
        """
        try:
            self.activate()
        except ConstructionError as exc:
            logger.critical(f"Cannot start without a main window: {exc}")
            if self.state != "terminating":
                self._set_state("terminating", event="fatal")
            self.runtime.exit(1)

    def quit(self) -> None:
        if self.state == "terminating":
            return
        self._set_state("terminating", event="quit")
        self.runtime.exit(0)

    def on_last_window_closed(self) -> None:
        if self.state == "running":
            self._set_state("terminating", event="last-window-closed")

    def run(self) -> int:
        """Enter the event loop; returns its exit status."""
        self.runtime.call_soon(self._bind(ApplicationController.handle_activation))
        status = self.runtime.exec()
        if self.state != "terminating":
            self._set_state("terminating", event="loop-exited")
        logger.info(f"Event loop exited with status {status}")
        # Actions go before the controller does
        self.runtime.shutdown()
        return status

    # ------------------------------------------------------------------
    # About
    # ------------------------------------------------------------------

    def show_about(self) -> AboutDialogState:
        """
        Show the About box over the active window and return immediately.

        Raises:
            PreconditionError: If no window has been activated
        """
        window = self.window_manager.active_window()
        if window is None:
            raise PreconditionError(
                ErrorCode.NO_ACTIVE_WINDOW, "About requested with no active window"
            )

        dialog = AboutDialogState.from_identity(window, self._identity)
        dialog.handle = self.runtime.show_about(dialog)
        log_lifecycle_event(
            logger, "about", self.state, app_id=self.identifier, window=window
        )
        return dialog
