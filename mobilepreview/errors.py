"""
Error Types

Exceptions shared by the requirements engine and the simulator layer.
"""

from typing import Optional, Sequence


class MobilePreviewError(Exception):
    """Base class for all mobile preview errors."""
    pass


class RequirementUnmet(MobilePreviewError):
    """A requirement check did not pass. The message is shown to the user."""
    pass


class DeviceCatalogError(MobilePreviewError):
    """A device or runtime listing could not be parsed or was empty."""
    pass


class ExternalCommandError(MobilePreviewError):
    """An external command exited with an error or could not be started."""

    def __init__(
        self,
        command: str,
        message: str,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        self.command = command
        self.message = message
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(f"The command '{command}' failed to execute: {message}")


class LifecycleError(MobilePreviewError):
    """A fatal simulator lifecycle step failed."""

    def __init__(self, step, device_id: str, cause: Exception, outcomes: Sequence = ()):
        self.step = step
        self.device_id = device_id
        self.cause = cause
        self.outcomes = list(outcomes)
        step_name = getattr(step, "value", step)
        super().__init__(f"Step '{step_name}' failed for device {device_id}: {cause}")
