"""
Simulator Module

Runs simctl commands, parses device listings and drives the simulator
lifecycle.
"""

from .runner import CommandRunner, CommandResult
from .catalog import (
    DeviceRecord,
    SdkPackage,
    filter_supported_runtimes,
    parse_available_runtimes,
    parse_device_catalog,
    parse_device_types,
    parse_sdk_packages,
)
from .lifecycle import (
    AppTarget,
    LifecycleStep,
    SimulatorLifecycleController,
    StepOutcome,
    StepSeverity,
    UrlTarget,
    build_launch_args,
    is_already_booted_error,
)
from .xcode import XcodeService

__all__ = [
    "CommandRunner",
    "CommandResult",
    "DeviceRecord",
    "SdkPackage",
    "filter_supported_runtimes",
    "parse_available_runtimes",
    "parse_device_catalog",
    "parse_device_types",
    "parse_sdk_packages",
    "AppTarget",
    "LifecycleStep",
    "SimulatorLifecycleController",
    "StepOutcome",
    "StepSeverity",
    "UrlTarget",
    "build_launch_args",
    "is_already_booted_error",
    "XcodeService",
]
