"""ANSI color utilities for terminal reports."""

import sys
from typing import Tuple

_CODES = {
    "BOLD": "\033[1m",
    "DIM": "\033[2m",
    "CYAN": "\033[36m",
    "GREEN": "\033[32m",
    "YELLOW": "\033[33m",
    "RED": "\033[31m",
    "MAGENTA": "\033[35m",
    "RESET": "\033[0m",
}


class Colors:
    """ANSI color codes for terminal output."""

    BOLD = _CODES["BOLD"]
    DIM = _CODES["DIM"]
    CYAN = _CODES["CYAN"]
    GREEN = _CODES["GREEN"]
    YELLOW = _CODES["YELLOW"]
    RED = _CODES["RED"]
    MAGENTA = _CODES["MAGENTA"]
    RESET = _CODES["RESET"]

    _enabled = True

    @classmethod
    def _apply(cls, enabled: bool) -> None:
        cls._enabled = enabled
        for name, code in _CODES.items():
            setattr(cls, name, code if enabled else "")

    @classmethod
    def disable(cls):
        """Render reports and swatches as plain text."""
        cls._apply(False)

    @classmethod
    def enable(cls):
        """Restore escape sequences in reports and swatches."""
        cls._apply(True)

    @classmethod
    def auto_detect(cls, stream=None):
        """Use plain text unless ``stream`` (stdout by default) is a terminal."""
        stream = sys.stdout if stream is None else stream
        isatty = getattr(stream, "isatty", None)
        if isatty is None or not isatty():
            cls.disable()

    @classmethod
    def swatch(cls, rgb: Tuple[int, int, int], text: str = "●") -> str:
        """Text in a 24-bit foreground color, plain when colors are off."""
        if not cls._enabled:
            return text
        r, g, b = rgb
        return f"\033[38;2;{r};{g};{b}m{text}{cls.RESET}"


# Auto-detect on import
Colors.auto_detect()
