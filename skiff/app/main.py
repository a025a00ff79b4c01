"""Main application entry point."""
import sys
from typing import Optional, Sequence

from PySide6.QtCore import QCommandLineOption, QCommandLineParser

from skiff.app.controller import ApplicationController
from skiff.services.localization import Localization
from skiff.services.resources import ResourceBundle
from skiff.services.single_instance import SingleInstanceGuard
from skiff.shared.config import IDENTITY, TRANSLATION_DOMAIN, load_settings
from skiff.shared.errors import StartupError
from skiff.shared.logging_ import setup_logger
from skiff.shared.models import AppFlags
from skiff.ui.runtime import QtRuntime

NEW_INSTANCE_OPTION = "new-instance"


def build_parser() -> QCommandLineParser:
    parser = QCommandLineParser()
    parser.setApplicationDescription(IDENTITY.comments or IDENTITY.name)
    parser.addHelpOption()
    parser.addVersionOption()
    parser.addOption(QCommandLineOption(
        [NEW_INSTANCE_OPTION],
        "Start a separate instance instead of activating the running one.",
    ))
    return parser


def _fail(logger, message: str) -> int:
    logger.critical(message)
    print(f"{IDENTITY.name}: {message}", file=sys.stderr)
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the application; returns the process exit status."""
    argv = list(sys.argv if argv is None else argv)
    try:
        settings = load_settings()
    except ValueError as exc:
        print(f"{IDENTITY.name}: {exc}", file=sys.stderr)
        return 1
    logger = setup_logger(level=settings.log_level, log_file=settings.log_file)

    resources = ResourceBundle()
    runtime = QtRuntime(IDENTITY, argv, resources=resources)

    # Qt has already stripped its own options (-style, -platform, ...) here.
    # --help / --version print and exit.
    parser = build_parser()
    parser.process(runtime.app.arguments())
    flags = AppFlags.NON_UNIQUE if parser.isSet(NEW_INSTANCE_OPTION) else AppFlags.NONE

    try:
        localization = Localization(settings.locale)
        localization.bind(TRANSLATION_DOMAIN, settings.translation_dir)
        localization.set_encoding(TRANSLATION_DOMAIN, "UTF-8")
        localization.activate_domain(TRANSLATION_DOMAIN)
        resources.register(settings.resource_dir)
    except StartupError as exc:
        return _fail(logger, f"Startup failed: {exc}")

    guard = None
    if not flags & AppFlags.NON_UNIQUE:
        guard = SingleInstanceGuard(IDENTITY.identifier)
        if not guard.acquire():
            if guard.notify_existing_instance():
                logger.info("Activated the running instance")
                return 0
            # The other instance may have exited between the two calls
            if not guard.acquire():
                return _fail(logger, "The running instance is not responding")
            logger.info("Running instance went away, starting as the primary instance")

    controller = ApplicationController(IDENTITY, flags, runtime=runtime)
    if guard is not None:
        guard.activation_requested.connect(controller.handle_activation)

    try:
        return controller.run()
    finally:
        if guard is not None:
            guard.release()


if __name__ == "__main__":
    sys.exit(main())
