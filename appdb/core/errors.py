"""Exceptions raised while building the application database."""


class AppDBError(Exception):
    """Base class for failures that abort a whole appdb build."""


class MissingHomeError(AppDBError):
    """HOME is not set, so the default data-home cannot be computed."""

    def __init__(self) -> None:
        super().__init__("HOME environment variable is not set.")


class DesktopFileReadError(AppDBError):
    """A candidate .desktop file could not be opened or read."""

    def __init__(self, path: str, reason: OSError) -> None:
        super().__init__(f"Failed to read '{path}': {reason.strerror or reason}")
        self.path = path
        self.reason = reason


class DirectoryScanError(AppDBError):
    """Listing an applications directory failed part way through."""

    def __init__(self, path: str, reason: OSError) -> None:
        super().__init__(f"Failed to scan '{path}': {reason.strerror or reason}")
        self.path = path
        self.reason = reason
