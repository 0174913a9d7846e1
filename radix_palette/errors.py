"""Error types raised while generating a palette."""

from typing import Optional


class PaletteError(Exception):
    pass


class InvalidSeed(PaletteError):
    def __init__(self, raw: Optional[str]):
        super().__init__(f"Invalid seed color: {raw!r}")
        self.raw = raw


class BrowserLaunchError(PaletteError):
    pass


class SessionUnavailable(PaletteError):
    def __init__(self, mode: str, reason: str = ""):
        message = f"Session for {mode} mode unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.mode = mode


class SwatchReadFailure(PaletteError):
    def __init__(self, index: int, reason: str = ""):
        message = f"Could not read swatch {index}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.index = index


class RequestTimeout(PaletteError):
    def __init__(self, timeout_s: float):
        super().__init__(f"Request timeout after {timeout_s:g}s")
        self.timeout_s = timeout_s
