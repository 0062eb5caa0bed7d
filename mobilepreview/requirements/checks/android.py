"""
Android Requirement Checks

Validates the Android SDK installation.
"""

import asyncio
import os
from pathlib import Path
from typing import List

from ...config.models import PreviewConfig
from ...errors import ExternalCommandError, RequirementUnmet
from ...simulator.catalog import SdkPackage, parse_sdk_packages
from ...simulator.runner import CommandRunner
from ..models import RequirementCheck


def android_requirements(runner: CommandRunner, config: PreviewConfig) -> List[RequirementCheck]:
    """Build the Android requirement checks."""
    android = config.android

    def check_sdk_root() -> str:
        value = os.environ.get(android.sdk_root_env)
        if not value:
            raise RequirementUnmet(f"{android.sdk_root_env} is not set")
        if not Path(value).is_dir():
            raise RequirementUnmet(f"{android.sdk_root_env} points to a missing directory: {value}")
        return f"Android SDK at {value}"

    # One sdkmanager listing per setup run, shared by the platform and image checks.
    listing = {}

    async def list_packages() -> List[SdkPackage]:
        try:
            result = await runner.run(android.sdkmanager_command)
        except ExternalCommandError as e:
            raise RequirementUnmet(f"Unable to list Android SDK packages: {e.message}")
        return parse_sdk_packages(result.stdout)

    def installed_packages() -> "asyncio.Task[List[SdkPackage]]":
        loop = asyncio.get_running_loop()
        if listing.get("loop") is not loop:
            listing["loop"] = loop
            listing["task"] = loop.create_task(list_packages())
        return listing["task"]

    async def check_platform() -> str:
        platforms = [
            p for p in await installed_packages()
            if p.is_platform and p.api_level in android.supported_api_levels
        ]
        if not platforms:
            levels = ", ".join(str(level) for level in android.supported_api_levels)
            raise RequirementUnmet(f"No supported Android platform installed (API {levels})")
        latest = max(platforms, key=lambda p: p.api_level)
        return f"Android platform installed: {latest.path}"

    async def check_system_image() -> str:
        images = []
        for package in await installed_packages():
            if not package.is_system_image or package.api_level not in android.supported_api_levels:
                continue
            parts = package.path.split(";")
            if len(parts) > 2 and parts[2] in android.supported_images:
                images.append(package)

        if not images:
            raise RequirementUnmet(
                "No supported Android system image installed "
                f"({', '.join(android.supported_images)})"
            )
        latest = max(images, key=lambda p: p.api_level)
        return f"System image installed: {latest.path}"

    return [
        RequirementCheck(title="Android SDK", run=check_sdk_root),
        RequirementCheck(title="Android Platform", run=check_platform),
        RequirementCheck(title="Android System Image", run=check_system_image),
    ]
