"""About dialog."""
import html

from PySide6.QtCore import QCoreApplication, Qt
from PySide6.QtWidgets import QMessageBox, QWidget

from skiff.shared.models import AboutDialogState


def _tr(text: str) -> str:
    return QCoreApplication.translate("AboutDialog", text)


def about_html(state: AboutDialogState) -> str:
    """Rich-text body for the About box."""
    lines = [
        f"<h3>{html.escape(state.program_name)}</h3>",
        f"<p>{_tr('Version')} {html.escape(state.version)}</p>",
    ]
    if state.comments:
        lines.append(f"<p>{html.escape(state.comments)}</p>")
    if state.authors:
        lines.append(f"<p>{_tr('Authors')}: {html.escape(state.author_text)}</p>")
    if state.website:
        url = html.escape(state.website, quote=True)
        lines.append(f'<p><a href="{url}">{url}</a></p>')
    if state.copyright:
        lines.append(f"<p><small>{html.escape(state.copyright)}</small></p>")
    return "\n".join(lines)


def build_about_dialog(parent: QWidget, state: AboutDialogState) -> QMessageBox:
    """
    Build the About box, window-modal over *parent*.

    The dialog deletes itself when dismissed; nothing else observes it.
    """
    box = QMessageBox(parent)
    box.setObjectName("about_dialog")
    box.setWindowTitle(_tr("About %s") % state.program_name)
    box.setTextFormat(Qt.RichText)
    box.setText(about_html(state))
    box.setStandardButtons(QMessageBox.Close)
    box.setAttribute(Qt.WA_DeleteOnClose)
    if state.modal:
        box.setWindowModality(Qt.WindowModal)

    icon = parent.windowIcon()
    if not icon.isNull():
        box.setIconPixmap(icon.pixmap(64, 64))
    return box
