"""Portable accelerator names -> Qt key-sequence strings."""

# Qt maps "Ctrl" to Command on macOS, which is what "primary" means.
_MODIFIERS = {
    "primary": "Ctrl",
    "ctrl": "Ctrl",
    "control": "Ctrl",
    "shift": "Shift",
    "alt": "Alt",
    "meta": "Meta",
    "super": "Meta",
}


def to_qt_shortcut(accelerator: str) -> str:
    """
    Translate a portable accelerator ("primary+q") into Qt syntax ("Ctrl+Q").

    Raises:
        ValueError: If the accelerator is empty or uses an unknown modifier
    """
    parts = [p.strip() for p in accelerator.split("+") if p.strip()]
    if not parts:
        raise ValueError(f"Empty accelerator: {accelerator!r}")

    *modifiers, key = parts
    names = []
    for mod in modifiers:
        try:
            names.append(_MODIFIERS[mod.lower()])
        except KeyError:
            raise ValueError(f"Unknown modifier {mod!r} in {accelerator!r}") from None

    key = key.upper() if len(key) == 1 else key.capitalize()
    return "+".join(names + [key])
