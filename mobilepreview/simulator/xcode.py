"""
Xcode Simulator Queries

Lists runtimes, device types and simulators through `xcrun simctl`.
"""

import logging
from typing import List, Optional

from ..config.models import IOSConfig
from ..errors import DeviceCatalogError, ExternalCommandError
from .catalog import (
    DeviceRecord,
    filter_supported_runtimes,
    parse_available_runtimes,
    parse_device_catalog,
    parse_device_types,
)
from .runner import CommandRunner


DEVICE_TYPE_PREFIX = "com.apple.CoreSimulator.SimDeviceType"
RUNTIME_TYPE_PREFIX = "com.apple.CoreSimulator.SimRuntime"


class XcodeService:
    """
    Queries the simulator catalog.

    Every call runs a fresh listing. Device state can change between
    invocations, so nothing is cached.
    """

    def __init__(
        self,
        runner: CommandRunner,
        config: Optional[IOSConfig] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.runner = runner
        self.config = config or IOSConfig()
        self.logger = logger or logging.getLogger(__name__)

    @property
    def simctl(self) -> str:
        return f"{self.config.xcrun_path} simctl"

    async def simulator_runtimes(self) -> List[str]:
        """
        Get all available runtimes, latest first.

        Raises:
            ExternalCommandError: If the listing command fails
            DeviceCatalogError: If no runtime is available
        """
        command = f"{self.simctl} list --json runtimes available"
        result = await self.runner.run(command)
        runtimes = parse_available_runtimes(result.stdout)
        if not runtimes:
            raise DeviceCatalogError(f"The command '{command}' could not find available runtimes")
        return runtimes

    async def supported_runtimes(self) -> List[str]:
        """Get available runtimes matching the configured prefixes."""
        runtimes = filter_supported_runtimes(
            await self.simulator_runtimes(),
            self.config.supported_runtimes,
        )
        if not runtimes:
            raise DeviceCatalogError(
                "No supported simulator runtime is installed. Supported: "
                + ", ".join(self.config.supported_runtimes)
            )
        return runtimes

    async def supported_simulators(self) -> List[DeviceRecord]:
        """
        Get available simulators on supported runtimes.

        Failures are logged and give an empty list.
        """
        try:
            runtimes = await self.supported_runtimes()
            result = await self.runner.run(f"{self.simctl} list --json devices available")
            return parse_device_catalog(result.stdout, runtimes)
        except (ExternalCommandError, DeviceCatalogError) as e:
            self.logger.warning("Unable to list simulators: %s", e)
            return []

    async def find_simulator(self, name_or_udid: str) -> Optional[DeviceRecord]:
        """Find a supported simulator by exact name or UDID."""
        for device in await self.supported_simulators():
            if name_or_udid in (device.name, device.identifier):
                return device

        self.logger.info("Unable to find simulator: %s", name_or_udid)
        return None

    async def supported_device_types(self) -> List[str]:
        """Get device type names matching the configured pattern."""
        command = f"{self.simctl} list --json devicetypes"
        result = await self.runner.run(command)
        device_types = parse_device_types(result.stdout, self.config.device_type_pattern)
        if not device_types:
            raise DeviceCatalogError(
                f"Could not find any available devices. '{command}' returned no supported device types"
            )
        return device_types

    async def create_device(self, name: str, device_type: str, runtime: str) -> str:
        """
        Create a simulator.

        Returns:
            UDID of the new device
        """
        command = (
            f"{self.simctl} create {name} "
            f"{DEVICE_TYPE_PREFIX}.{device_type} {RUNTIME_TYPE_PREFIX}.{runtime}"
        )
        result = await self.runner.run(command)
        return result.stdout.strip()

    async def open_simulator_app(self) -> None:
        await self.runner.run("open -a Simulator")
