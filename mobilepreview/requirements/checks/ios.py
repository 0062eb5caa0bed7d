"""
iOS Requirement Checks

Validates the host can run iOS simulators.
"""

import platform
from typing import List

from ...config.models import PreviewConfig
from ...errors import DeviceCatalogError, ExternalCommandError, RequirementUnmet
from ...simulator.runner import CommandRunner
from ...simulator.xcode import XcodeService
from ..models import RequirementCheck


def _check_host_os() -> str:
    system = platform.system()
    if system != "Darwin":
        raise RequirementUnmet(f"iOS simulators require macOS, found {system or 'unknown'}")
    return f"Running on macOS {platform.mac_ver()[0]}".rstrip()


def ios_requirements(
    runner: CommandRunner,
    xcode: XcodeService,
    config: PreviewConfig,
) -> List[RequirementCheck]:
    """
    Build the iOS requirement checks.

    Args:
        runner: Command runner for the Xcode lookup
        xcode: Simulator catalog queries
        config: Preview configuration

    Returns:
        Checks in reporting order
    """

    async def check_xcode() -> str:
        try:
            result = await runner.run("xcode-select -p")
        except ExternalCommandError:
            raise RequirementUnmet("Xcode is not installed. Install Xcode from the App Store")

        path = result.stdout.strip()
        if not path:
            raise RequirementUnmet("No Xcode developer directory is selected")
        return f"Xcode developer directory: {path}"

    async def check_runtimes() -> str:
        try:
            runtimes = await xcode.supported_runtimes()
        except (ExternalCommandError, DeviceCatalogError) as e:
            raise RequirementUnmet(
                "No supported iOS simulator runtime found "
                f"({', '.join(config.ios.supported_runtimes)}): {e}"
            )
        return f"Supported runtimes: {', '.join(runtimes)}"

    return [
        RequirementCheck(title="macOS Host", run=_check_host_os),
        RequirementCheck(title="Xcode", run=check_xcode),
        RequirementCheck(title="iOS Simulator Runtime", run=check_runtimes),
    ]
