"""Tests for the application controller."""
import gc

import pytest

from skiff.app.controller import QUIT_ACCELERATOR, ApplicationController
from skiff.shared.errors import ConstructionError, ErrorCode, PreconditionError
from skiff.shared.models import ActionSpec, AppFlags


class TestConstruction:
    def test_state_is_running(self, controller):
        assert controller.state == "running"

    def test_identity_and_flags(self, controller, identity):
        assert controller.identifier == "com.example.app"
        assert controller.identity is identity
        assert controller.flags == AppFlags.NONE

    def test_flags_are_kept(self, identity, runtime):
        ctl = ApplicationController(identity, AppFlags.NON_UNIQUE, runtime=runtime)
        assert ctl.flags & AppFlags.NON_UNIQUE

    def test_action_table_is_exactly_quit_and_about(self, controller):
        assert set(controller.actions) == {"quit", "about"}

    def test_accelerators(self, controller):
        assert controller.accelerators["quit"] == [QUIT_ACCELERATOR]
        assert controller.accelerators["about"] == []
        assert controller.action_for_accelerator("primary+q") == "quit"
        assert controller.action_for_accelerator("primary+a") is None

    def test_actions_installed_quit_first(self, controller, runtime):
        assert list(runtime.installed) == ["quit", "about"]
        quit_spec, _ = runtime.installed["quit"]
        assert quit_spec.accelerators == ("primary+q",)

    def test_no_window_before_activation(self, controller, runtime):
        assert runtime.created == []

    def test_duplicate_action_rejected(self, controller):
        with pytest.raises(PreconditionError) as excinfo:
            controller._register_action(ActionSpec("quit"), controller.quit)
        assert excinfo.value.code == ErrorCode.DUPLICATE_ACTION


class TestActivate:
    def test_single_window_over_many_activations(self, controller, runtime):
        first = controller.activate()
        for _ in range(10):
            assert controller.activate() is first

        assert len(runtime.created) == 1
        assert first.handle.visible is True
        assert first.owner is controller

    def test_every_activation_presents(self, controller, runtime):
        window = controller.activate()
        controller.activate()
        assert runtime.presented == [window.handle, window.handle]

    def test_reactivation_callback_activates(self, controller, runtime):
        runtime.reactivated_cb()
        assert len(runtime.created) == 1

    def test_new_window_after_user_closed_it(self, controller, runtime):
        first = controller.activate()
        runtime.destroy(first.handle)

        second = controller.activate()

        assert second is not first
        assert controller.window_manager.window_count() == 1

    def test_construction_failure_propagates(self, controller, runtime):
        runtime.fail_create = RuntimeError("no display")
        with pytest.raises(ConstructionError):
            controller.activate()
        assert controller.state == "running"

    def test_handle_activation_stops_loop_on_failure(self, controller, runtime):
        runtime.fail_create = RuntimeError("no display")

        controller.handle_activation()

        assert controller.state == "terminating"
        assert runtime.exit_calls == [1]


class TestActions:
    def test_trigger_unknown_action(self, controller):
        with pytest.raises(PreconditionError) as excinfo:
            controller.trigger("paste")
        assert excinfo.value.code == ErrorCode.UNKNOWN_ACTION

    def test_installed_handler_dispatches(self, controller, runtime):
        controller.activate()
        _, handler = runtime.installed["about"]

        handler()

        assert len(runtime.dialogs) == 1

    def test_handler_after_teardown_is_dead_reference(self, identity, runtime):
        ctl = ApplicationController(identity, runtime=runtime)
        _, handler = runtime.installed["quit"]

        del ctl
        gc.collect()

        with pytest.raises(PreconditionError) as excinfo:
            handler()
        assert excinfo.value.code == ErrorCode.DEAD_HANDLER


class TestAbout:
    def test_about_without_window_is_precondition_error(self, controller, runtime):
        with pytest.raises(PreconditionError) as excinfo:
            controller.show_about()
        assert excinfo.value.code == ErrorCode.NO_ACTIVE_WINDOW
        assert runtime.dialogs == []

    def test_about_parented_to_active_window(self, controller, runtime):
        window = controller.activate()

        dialog = controller.show_about()

        assert dialog.parent is window
        assert dialog.modal is True
        assert dialog.program_name == "Example"
        assert dialog.version == "2.3.4"
        assert dialog.authors == ["Ada", "Grace"]
        assert dialog.handle is runtime.dialogs[0]
        assert runtime.dialogs[0].parent_handle is window.handle

    def test_about_does_not_change_state(self, controller, runtime):
        window = controller.activate()
        controller.show_about()

        assert controller.state == "running"
        assert controller.activate() is window
        assert len(runtime.created) == 1


class TestQuit:
    def test_quit_terminates(self, controller, runtime):
        controller.trigger("quit")

        assert controller.state == "terminating"
        assert runtime.exit_calls == [0]

    def test_quit_twice_exits_once(self, controller, runtime):
        controller.quit()
        controller.quit()
        assert runtime.exit_calls == [0]

    def test_terminating_is_absorbing(self, controller, runtime):
        controller.activate()
        controller.quit()

        assert controller.trigger("about") is None
        assert controller.activate() is None
        assert runtime.dialogs == []
        assert controller.state == "terminating"

    def test_last_window_closed_terminates(self, controller, runtime):
        controller.activate()
        runtime.last_window_closed_cb()
        assert controller.state == "terminating"


class TestRun:
    def test_run_activates_and_returns_loop_status(self, controller, runtime):
        status = controller.run()

        assert status == 0
        assert len(runtime.created) == 1
        assert controller.state == "terminating"
        assert runtime.shutdown_calls == 1

    def test_run_propagates_nonzero_status(self, controller, runtime):
        runtime.exec_status = 3
        assert controller.run() == 3

    def test_quit_from_loop(self, controller, runtime):
        runtime.call_soon(lambda: controller.trigger("quit"))

        status = controller.run()

        assert status == 0
        assert runtime.exit_calls == [0]
        assert controller.state == "terminating"


def test_full_session(identity, runtime):
    """Launch, re-activate, About, dismiss, quit."""
    ctl = ApplicationController(identity, AppFlags.NONE, runtime=runtime)

    window = ctl.activate()
    assert ctl.window_manager.window_count() == 1
    assert window.handle.visible is True

    assert ctl.activate() is window
    assert len(runtime.created) == 1

    dialog = ctl.trigger("about")
    assert len(runtime.dialogs) == 1
    assert dialog.parent is window

    dialog.handle.close()  # dismissal is handled by the dialog itself
    assert ctl.state == "running"
    assert ctl.window_manager.active_window() is window

    ctl.trigger("quit")
    assert ctl.state == "terminating"
    assert runtime.exit_calls == [0]
