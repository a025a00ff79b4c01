"""Resource bundle registration."""
import logging
from pathlib import Path
from typing import List

from PySide6.QtCore import QDir, QFile, QIODevice, QResource

from skiff.shared.errors import ErrorCode, StartupError

logger = logging.getLogger(__name__)

SEARCH_PREFIX = "skiff"


class ResourceBundle:
    """
    Make the window's assets reachable under the ``skiff:`` prefix.

    A bundle handle is either a compiled ``.rcc`` file or a plain directory.
    Registration must succeed before the main window is constructed.
    """

    def __init__(self, prefix: str = SEARCH_PREFIX):
        self.prefix = prefix
        self.registered: List[Path] = []

    def register(self, bundle_handle) -> None:
        path = Path(bundle_handle)

        if path.is_dir():
            QDir.addSearchPath(self.prefix, str(path))
        elif path.is_file() and path.suffix == ".rcc":
            if not QResource.registerResource(str(path)):
                raise StartupError(
                    ErrorCode.RESOURCE_REGISTER_FAILED,
                    f"Failed to register resource bundle {path}",
                )
            # Compiled bundles are rooted at :/<prefix>
            QDir.addSearchPath(self.prefix, f":/{self.prefix}")
        else:
            raise StartupError(
                ErrorCode.RESOURCE_REGISTER_FAILED,
                f"Resource bundle not found or unsupported: {path}",
            )

        self.registered.append(path)
        logger.info(f"Registered resource bundle {path}")

    def path_for(self, name: str) -> str:
        return f"{self.prefix}:{name}"

    def exists(self, name: str) -> bool:
        return QFile.exists(self.path_for(name))

    def read_text(self, name: str) -> str:
        """Read a bundled text asset; raises FileNotFoundError if missing."""
        qfile = QFile(self.path_for(name))
        if not qfile.open(QIODevice.ReadOnly | QIODevice.Text):
            raise FileNotFoundError(f"Resource not found: {self.path_for(name)}")
        try:
            return bytes(qfile.readAll()).decode("utf-8")
        finally:
            qfile.close()
