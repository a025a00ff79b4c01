"""Single-instance channel: forwards re-launches to the running process."""
import getpass
import logging

from PySide6.QtCore import QObject, Signal
from PySide6.QtNetwork import QLocalServer, QLocalSocket

logger = logging.getLogger(__name__)

ACTIVATE_MESSAGE = b"activate\n"
CONNECT_TIMEOUT_MS = 500


def server_name_for(app_id: str) -> str:
    """Per-user local server name, so two users don't share an instance."""
    try:
        user = getpass.getuser()
    except (KeyError, OSError):
        user = "default"
    return f"{app_id}.{user}.singleton"


class SingleInstanceGuard(QObject):
    """
    Owns the local server of the first instance.

    Later launches call ``notify_existing_instance()`` and exit 0, or
    take over the name when the old owner no longer answers; the first
    instance emits ``activation_requested`` on the GUI thread.
    """

    activation_requested = Signal()

    def __init__(self, app_id: str, parent=None):
        super().__init__(parent)
        self.server_name = server_name_for(app_id)
        self._server: QLocalServer | None = None

    def acquire(self) -> bool:
        """Return True if this process is now the primary instance."""
        peer = QLocalSocket()
        peer.connectToServer(self.server_name)
        if peer.waitForConnected(CONNECT_TIMEOUT_MS):
            peer.disconnectFromServer()
            logger.info(f"Another instance owns {self.server_name}")
            return False

        # A crashed primary can leave a stale socket behind
        QLocalServer.removeServer(self.server_name)
        server = QLocalServer(self)
        if not server.listen(self.server_name):
            logger.warning(f"Could not listen on {self.server_name}: {server.errorString()}")
            return True

        server.newConnection.connect(self._on_new_connection)
        self._server = server
        logger.debug(f"Listening for re-activation on {self.server_name}")
        return True

    def notify_existing_instance(self) -> bool:
        sock = QLocalSocket()
        sock.connectToServer(self.server_name)
        if not sock.waitForConnected(CONNECT_TIMEOUT_MS):
            logger.error(f"Running instance did not respond: {sock.errorString()}")
            return False
        sock.write(ACTIVATE_MESSAGE)
        sock.flush()
        sock.waitForBytesWritten(CONNECT_TIMEOUT_MS)
        sock.disconnectFromServer()
        return True

    def release(self) -> None:
        if self._server is not None:
            self._server.close()
            self._server = None

    def _on_new_connection(self):
        while self._server is not None and self._server.hasPendingConnections():
            conn = self._server.nextPendingConnection()
            conn.readyRead.connect(lambda c=conn: self._on_ready_read(c))
            conn.disconnected.connect(conn.deleteLater)
            self._on_ready_read(conn)

    def _on_ready_read(self, conn: QLocalSocket):
        # A message may arrive split across reads; wait for the full line
        while conn.canReadLine():
            line = bytes(conn.readLine()).strip()
            if line == ACTIVATE_MESSAGE.strip():
                logger.info("Activation requested by another launch")
                self.activation_requested.emit()
            else:
                logger.warning(f"Ignoring unknown message {line!r}")
