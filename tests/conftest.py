"""Shared fixtures: a display-free stand-in for the Qt runtime, and an offscreen QApplication."""
import os
from unittest.mock import MagicMock

import pytest

from skiff.shared.models import AppIdentity

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Qt consumes "-style fusion"; it must never reach our own option parser
QAPP_ARGV = ["skiff-tests", "-style", "fusion"]


class FakeRuntime:
    """Records what the controller asks of the presentation layer."""

    def __init__(self):
        self.installed = {}  # name -> (spec, handler)
        self.created = []
        self.presented = []
        self.dialogs = []
        self.exit_calls = []
        self.scheduled = []
        self.last_window_closed_cb = None
        self.reactivated_cb = None
        self.focused = None
        self.exec_status = 0
        self.fail_create = None
        self.shutdown_calls = 0
        self._destroy_cbs = {}

    def install_action(self, spec, handler):
        self.installed[spec.name] = (spec, handler)
        return spec

    def create_window(self, owner):
        if self.fail_create is not None:
            raise self.fail_create
        handle = MagicMock(name=f"window{len(self.created)}")
        handle.visible = False
        self.created.append(handle)
        return handle

    def present(self, handle):
        handle.visible = True
        self.focused = handle
        self.presented.append(handle)

    def active_window(self):
        return self.focused

    def watch_destroyed(self, handle, callback):
        self._destroy_cbs[id(handle)] = callback

    def destroy(self, handle):
        """Simulate the user closing a window."""
        handle.visible = False
        if self.focused is handle:
            self.focused = None
        self._destroy_cbs.pop(id(handle))()

    def show_about(self, state):
        dialog = MagicMock(name="about_dialog")
        dialog.parent_handle = state.parent.handle
        self.dialogs.append(dialog)
        return dialog

    def on_last_window_closed(self, callback):
        self.last_window_closed_cb = callback

    def on_reactivated(self, callback):
        self.reactivated_cb = callback

    def call_soon(self, callback):
        self.scheduled.append(callback)

    def exec(self):
        # Run whatever was scheduled before the loop "starts"
        for callback in list(self.scheduled):
            callback()
        return self.exec_status

    def exit(self, status=0):
        self.exit_calls.append(status)

    def shutdown(self):
        self.shutdown_calls += 1
        self.installed.clear()


@pytest.fixture
def runtime():
    return FakeRuntime()


@pytest.fixture
def identity():
    return AppIdentity(
        identifier="com.example.app",
        name="Example",
        version="2.3.4",
        authors=("Ada", "Grace"),
    )


@pytest.fixture
def controller(identity, runtime):
    from skiff.app.controller import ApplicationController
    return ApplicationController(identity, runtime=runtime)


@pytest.fixture(scope="session")
def qapp():
    """Session-scoped QApplication, shared by every real-Qt test."""
    widgets = pytest.importorskip("PySide6.QtWidgets")

    app = widgets.QApplication.instance()
    if app is None:
        app = widgets.QApplication(list(QAPP_ARGV))
    # Closing a test window must not end the session's application
    app.setQuitOnLastWindowClosed(False)
    yield app
