from typing import Optional


class LauncherError(RuntimeError):
    """Base error for launcher failures. Carries the process exit status."""

    exit_code = 1

    def __init__(self, message: str, exit_code: Optional[int] = None) -> None:
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class LauncherConfigError(LauncherError):
    """Invalid launcher environment settings."""


class ProvisionError(LauncherError):
    """Template could not be copied to the runtime config path."""


class HandoffError(LauncherError):
    """Bridge binary could not be started."""

    exit_code = 126
