"""
Requirement Check Implementations

Built-in checks for each supported platform.
"""

from typing import List, Optional

from ...config.models import PreviewConfig
from ...simulator.runner import CommandRunner
from ...simulator.xcode import XcodeService
from ..models import RequirementCheck
from .android import android_requirements
from .common import server_plugin_check
from .ios import ios_requirements

PLATFORMS = ("ios", "android")


def setup_requirements(
    platform: str,
    runner: CommandRunner,
    config: PreviewConfig,
    xcode: Optional[XcodeService] = None,
) -> List[RequirementCheck]:
    """
    Get the common checks followed by the platform's checks.

    Raises:
        ValueError: For an unknown platform
    """
    platform = platform.lower()
    checks = [server_plugin_check(runner, config)]

    if platform == "ios":
        xcode = xcode or XcodeService(runner, config.ios)
        checks.extend(ios_requirements(runner, xcode, config))
    elif platform == "android":
        checks.extend(android_requirements(runner, config))
    else:
        raise ValueError(f"Unknown platform: {platform}. Expected one of {', '.join(PLATFORMS)}")

    return checks


__all__ = [
    "PLATFORMS",
    "setup_requirements",
    "server_plugin_check",
    "ios_requirements",
    "android_requirements",
]
