"""
Error types for SkinWatch
"""

from pathlib import Path
from typing import Optional, Union


class SkinWatchError(Exception):
    """Base class for all SkinWatch errors"""


class WatchSetupError(SkinWatchError):
    """A watch session could not be started (adapter creation or registration)"""

    def __init__(self, path: Union[str, Path], reason: Optional[BaseException] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Unable to watch {self.path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class WatchFatalError(SkinWatchError):
    """The file watch adapter reported a runtime error; the session stops"""

    def __init__(self, path: Union[str, Path], reason: Optional[BaseException] = None):
        self.path = Path(path)
        self.reason = reason
        message = f"Watcher failed for {self.path}"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class ConfigError(SkinWatchError):
    """Base class for configuration load failures"""

    def __init__(self, path: Union[str, Path], detail: str = ""):
        self.path = Path(path)
        self.detail = detail
        super().__init__(f"{self.path}: {detail}" if detail else str(self.path))


class ConfigNotFound(ConfigError):
    """The configuration file does not exist"""


class ConfigParseError(ConfigError):
    """The configuration file exists but its content is malformed"""
