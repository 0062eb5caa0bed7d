"""
Simulator Lifecycle

Boots a simulator, waits for it to be ready and opens a URL or launches a
native app in it.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Union

from ..config.models import LaunchConfig
from ..errors import ExternalCommandError, LifecycleError
from .runner import CommandRunner


# Substrings of simctl boot errors that mean the device is already booted.
# Matched case-insensitively. The tool's wording is the only signal we get.
ALREADY_BOOTED_MARKERS = (
    "state: booted",
)


class LifecycleStep(str, Enum):
    """Stages of bringing a simulator online."""
    BOOT = "boot"
    WAIT_READY = "wait_ready"
    TERMINATE = "terminate"
    LAUNCH = "launch"


class StepSeverity(str, Enum):
    """Whether a failed step aborts the workflow."""
    FATAL = "fatal"
    BEST_EFFORT = "best_effort"


@dataclass(frozen=True)
class UrlTarget:
    """Open a URL in the simulator's browser."""
    url: str


@dataclass(frozen=True)
class AppTarget:
    """Launch a native app with preview arguments."""
    bundle_id: str
    component_name: str = ""
    project_dir: str = ""
    extra_args: str = ""


LaunchTarget = Union[UrlTarget, AppTarget]


@dataclass(frozen=True)
class StepOutcome:
    """Result of one executed lifecycle step."""
    step: LifecycleStep
    severity: StepSeverity
    command: str
    succeeded: bool
    error: Optional[str] = None


@dataclass(frozen=True)
class PlannedStep:
    """A step scheduled for execution, with the command it will issue."""
    step: LifecycleStep
    severity: StepSeverity
    command: str
    description: str
    action: Callable[[], Awaitable[bool]]

    def outcome(self, succeeded: bool, error: Optional[str] = None) -> StepOutcome:
        return StepOutcome(
            step=self.step,
            severity=self.severity,
            command=self.command,
            succeeded=succeeded,
            error=error,
        )


def is_already_booted_error(message: str) -> bool:
    """True if a boot error only says the device is booted already."""
    text = (message or "").lower()
    return any(marker in text for marker in ALREADY_BOOTED_MARKERS)


def build_launch_args(target: AppTarget, prefixes: Optional[LaunchConfig] = None) -> str:
    """
    Build the key=value argument string passed to the launched app.

    Component name and project dir are always sent. Custom arguments are
    left out when empty. Values are not escaped.
    """
    prefixes = prefixes or LaunchConfig()
    fragments = [
        f"{prefixes.component_name_arg_prefix}={target.component_name}",
        f"{prefixes.project_dir_arg_prefix}={target.project_dir}",
    ]
    if target.extra_args:
        fragments.append(f"{prefixes.custom_args_prefix}={target.extra_args}")
    return " ".join(fragments)


StepCallback = Callable[[LifecycleStep, str], None]


class SimulatorLifecycleController:
    """
    Drives one simulator through boot, readiness, terminate and launch.

    Steps run strictly in order, one command at a time. Nothing about the
    device is cached between steps or between calls.
    """

    def __init__(
        self,
        runner: CommandRunner,
        xcrun_path: str = "/usr/bin/xcrun",
        launch_config: Optional[LaunchConfig] = None,
        logger: Optional[logging.Logger] = None,
        on_step: Optional[StepCallback] = None,
    ):
        """
        Initialize the controller.

        Args:
            runner: Executes the simctl commands
            xcrun_path: Path to xcrun
            launch_config: Argument key names for native app launches
            logger: Logger for step progress and swallowed failures
            on_step: Called with (step, description) before each step
        """
        self.runner = runner
        self.xcrun_path = xcrun_path
        self.launch_config = launch_config or LaunchConfig()
        self.logger = logger or logging.getLogger(__name__)
        self.on_step = on_step

    # ============================================================
    # Commands
    # ============================================================

    def boot_command(self, device_id: str) -> str:
        return f"{self.xcrun_path} simctl boot {device_id}"

    def wait_command(self, device_id: str) -> str:
        return f'{self.xcrun_path} simctl bootstatus "{device_id}"'

    def terminate_command(self, device_id: str, bundle_id: str) -> str:
        return f'{self.xcrun_path} simctl terminate "{device_id}" {bundle_id}'

    def launch_command(self, device_id: str, target: AppTarget) -> str:
        launch_args = build_launch_args(target, self.launch_config)
        return f'{self.xcrun_path} simctl launch "{device_id}" {target.bundle_id} {launch_args}'

    def open_url_command(self, device_id: str, url: str) -> str:
        return f'{self.xcrun_path} simctl openurl "{device_id}" {url}'

    # ============================================================
    # Individual steps
    # ============================================================

    async def boot(self, device_id: str) -> bool:
        """
        Boot the device. A device that is already booted counts as success.

        Raises:
            ExternalCommandError: For any other boot failure
        """
        command = self.boot_command(device_id)
        try:
            await self.runner.run(command)
        except ExternalCommandError as e:
            if not is_already_booted_error(e.message):
                raise
            self.logger.debug("Device %s is already booted", device_id)
        return True

    async def wait_until_ready(self, device_id: str) -> bool:
        """Block until simctl reports the device finished booting."""
        await self.runner.run(self.wait_command(device_id))
        return True

    async def terminate_app(self, device_id: str, bundle_id: str) -> bool:
        await self.runner.run(self.terminate_command(device_id, bundle_id))
        return True

    async def launch_app(self, device_id: str, target: AppTarget) -> bool:
        await self.runner.run(self.launch_command(device_id, target))
        return True

    async def open_url(self, device_id: str, url: str) -> bool:
        await self.runner.run(self.open_url_command(device_id, url))
        return True

    # ============================================================
    # Workflow
    # ============================================================

    def plan(self, device_id: str, target: LaunchTarget) -> List[PlannedStep]:
        """Build the ordered step list for a target."""
        steps = [
            PlannedStep(
                step=LifecycleStep.BOOT,
                severity=StepSeverity.FATAL,
                command=self.boot_command(device_id),
                description=f"Starting device {device_id}",
                action=lambda: self.boot(device_id),
            ),
            PlannedStep(
                step=LifecycleStep.WAIT_READY,
                severity=StepSeverity.FATAL,
                command=self.wait_command(device_id),
                description=f"Waiting for device {device_id} to boot",
                action=lambda: self.wait_until_ready(device_id),
            ),
        ]

        if isinstance(target, AppTarget):
            steps.append(PlannedStep(
                step=LifecycleStep.TERMINATE,
                severity=StepSeverity.BEST_EFFORT,
                command=self.terminate_command(device_id, target.bundle_id),
                description=f"Stopping running instance of {target.bundle_id}",
                action=lambda: self.terminate_app(device_id, target.bundle_id),
            ))
            steps.append(PlannedStep(
                step=LifecycleStep.LAUNCH,
                severity=StepSeverity.FATAL,
                command=self.launch_command(device_id, target),
                description=f"Launching app {target.bundle_id}",
                action=lambda: self.launch_app(device_id, target),
            ))
        elif isinstance(target, UrlTarget):
            steps.append(PlannedStep(
                step=LifecycleStep.LAUNCH,
                severity=StepSeverity.FATAL,
                command=self.open_url_command(device_id, target.url),
                description=f"Opening browser with url {target.url}",
                action=lambda: self.open_url(device_id, target.url),
            ))
        else:
            raise TypeError(f"Unsupported launch target: {type(target).__name__}")

        return steps

    async def bring_device_online_and_open(
        self,
        device_id: str,
        target: LaunchTarget,
    ) -> List[StepOutcome]:
        """
        Run the full workflow against one device.

        Args:
            device_id: Simulator UDID
            target: UrlTarget or AppTarget

        Returns:
            One StepOutcome per executed step

        Raises:
            LifecycleError: On the first failed fatal step. Its `outcomes`
                holds every step run so far, the failed one last.
        """
        outcomes: List[StepOutcome] = []

        for planned in self.plan(device_id, target):
            if self.on_step is not None:
                self.on_step(planned.step, planned.description)
            self.logger.debug("%s: %s", planned.step.value, planned.description)

            try:
                await planned.action()
            except ExternalCommandError as e:
                outcomes.append(planned.outcome(succeeded=False, error=str(e)))
                if planned.severity is StepSeverity.FATAL:
                    raise LifecycleError(planned.step, device_id, e, outcomes=outcomes) from e
                self.logger.warning("Ignoring failed %s step: %s", planned.step.value, e)
                continue

            outcomes.append(planned.outcome(succeeded=True))

        return outcomes
