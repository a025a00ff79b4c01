"""Translation catalogue setup backed by QTranslator."""
import codecs
import logging
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QCoreApplication, QLocale, QTranslator

from skiff.shared.errors import ErrorCode, StartupError

logger = logging.getLogger(__name__)


class Localization:
    """
    Bind translation domains to catalogue directories and install them.

    Catalogues are compiled Qt ``.qm`` files named ``<domain>_<locale>.qm``.
    Must run after the QApplication exists and before any window is built.
    """

    def __init__(self, locale: Optional[str] = None):
        self.locale = QLocale(locale) if locale else QLocale.system()
        self._dirs: dict[str, Path] = {}
        self._encodings: dict[str, str] = {}
        # Keep references to installed translators so they aren't GC'd
        self._translators: dict[str, QTranslator] = {}

    def bind(self, domain: str, locale_dir) -> None:
        path = Path(locale_dir)
        if not path.is_dir():
            raise StartupError(
                ErrorCode.LOCALE_BIND_FAILED,
                f"Translation directory for {domain!r} not found: {path}",
            )
        self._dirs[domain] = path
        logger.debug(f"Bound domain {domain!r} to {path}")

    def set_encoding(self, domain: str, encoding: str) -> None:
        self._require_bound(domain)
        try:
            name = codecs.lookup(encoding).name
        except LookupError as exc:
            raise StartupError(
                ErrorCode.LOCALE_ENCODING_INVALID,
                f"Unknown encoding {encoding!r} for domain {domain!r}",
            ) from exc
        self._encodings[domain] = name

    def encoding(self, domain: str) -> str:
        return self._encodings.get(domain, "utf-8")

    def activate_domain(self, domain: str) -> bool:
        """
        Load and install the catalogue for the current locale.

        Returns:
            True if a catalogue was installed, False if the locale has no
            catalogue and source strings are used.

        Raises:
            StartupError: If the domain is unbound, or a catalogue exists
                but cannot be loaded or installed.
        """
        self._require_bound(domain)
        catalogue = self.find_catalogue(domain)
        if catalogue is None:
            logger.info(
                f"No {domain!r} catalogue for locale {self.locale.name()}, using source strings"
            )
            return False

        translator = QTranslator()
        if not translator.load(str(catalogue)):
            raise StartupError(
                ErrorCode.LOCALE_ACTIVATE_FAILED,
                f"Failed to load translation catalogue {catalogue}",
            )
        if not QCoreApplication.installTranslator(translator):
            raise StartupError(
                ErrorCode.LOCALE_ACTIVATE_FAILED,
                f"Failed to install translation catalogue {catalogue}",
            )

        old = self._translators.pop(domain, None)
        if old is not None:
            QCoreApplication.removeTranslator(old)
        self._translators[domain] = translator
        logger.info(f"Activated {domain!r} catalogue {catalogue.name}")
        return True

    def find_catalogue(self, domain: str) -> Optional[Path]:
        """Return the best matching catalogue file for the locale, if any."""
        directory = self._require_bound(domain)
        for language in self.locale.uiLanguages():
            tag = language.replace("-", "_")
            candidates = [tag]
            if "_" in tag:
                candidates.append(tag.split("_", 1)[0])
            for candidate in candidates:
                path = directory / f"{domain}_{candidate}.qm"
                if path.is_file():
                    return path
        return None

    def _require_bound(self, domain: str) -> Path:
        if domain not in self._dirs:
            raise StartupError(
                ErrorCode.LOCALE_BIND_FAILED,
                f"Translation domain {domain!r} is not bound",
            )
        return self._dirs[domain]
