"""Data models for Skiff."""
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Any, List, Optional, Tuple


class AppFlags(IntFlag):
    """Startup flags, fixed for the lifetime of the application."""

    NONE = 0
    NON_UNIQUE = 1  # Skip the single-instance channel


@dataclass(frozen=True)
class AppIdentity:
    """Static identity of the program (what the About box and the OS see)."""

    identifier: str  # Reverse-DNS application id (e.g., io.skiff.Skiff)
    name: str
    version: str
    authors: Tuple[str, ...] = ()
    organization: Optional[str] = None
    comments: Optional[str] = None
    website: Optional[str] = None
    copyright: Optional[str] = None

    def __post_init__(self):
        """Validate identity."""
        if not self.identifier:
            raise ValueError("Application identifier must not be empty")
        if not self.name:
            raise ValueError("Application name must not be empty")


@dataclass(frozen=True)
class ActionSpec:
    """A named, parameterless application action and its key combos."""

    name: str
    accelerators: Tuple[str, ...] = ()
    label: str = ""  # Menu text, e.g. "&Quit"

    def __str__(self) -> str:
        accels = ", ".join(self.accelerators) or "-"
        return f"Action({self.name}, {accels})"


@dataclass
class AboutDialogState:
    """One About dialog invocation, parented to and modal over a window."""

    parent: Any  # MainWindow wrapper the dialog is anchored to
    program_name: str
    version: str
    authors: List[str] = field(default_factory=list)
    comments: Optional[str] = None
    website: Optional[str] = None
    copyright: Optional[str] = None
    modal: bool = True

    # Runtime dialog object, attached once presented
    handle: Any = None

    @classmethod
    def from_identity(cls, parent: Any, identity: AppIdentity) -> "AboutDialogState":
        return cls(
            parent=parent,
            program_name=identity.name,
            version=identity.version,
            authors=list(identity.authors),
            comments=identity.comments,
            website=identity.website,
            copyright=identity.copyright,
        )

    @property
    def author_text(self) -> str:
        return ", ".join(self.authors)
