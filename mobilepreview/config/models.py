"""
Pydantic models for configuration validation.

These models define the schema for the iOS, Android and launch settings.
"""

import re
from typing import List

from pydantic import BaseModel, Field, field_validator


class IOSConfig(BaseModel):
    """iOS simulator tooling settings."""

    xcrun_path: str = Field(default="/usr/bin/xcrun", description="Path to xcrun")
    supported_runtimes: List[str] = Field(
        default_factory=lambda: ["iOS-13", "iOS-14"],
        description="Runtime prefixes accepted for previews",
    )
    device_type_pattern: str = Field(
        default=r"SimDeviceType\.iPhone-[81X]",
        description="Regex selecting supported device types",
    )
    open_simulator_app: bool = Field(
        default=True,
        description="Bring Simulator.app to the foreground before booting",
    )

    @field_validator("supported_runtimes")
    @classmethod
    def validate_runtimes(cls, v: List[str]) -> List[str]:
        """At least one non-empty runtime prefix is required."""
        v = [r.strip() for r in v if r and r.strip()]
        if not v:
            raise ValueError("At least one supported runtime is required")
        return v

    @field_validator("device_type_pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        try:
            re.compile(v)
        except re.error as e:
            raise ValueError(f"Invalid device type pattern: {e}")
        return v


class AndroidConfig(BaseModel):
    """Android SDK settings."""

    sdk_root_env: str = Field(default="ANDROID_HOME", description="SDK root environment variable")
    sdkmanager_command: str = Field(default="sdkmanager --list", description="Package listing command")
    supported_api_levels: List[int] = Field(
        default_factory=lambda: [28, 29, 30],
        description="Accepted Android API levels",
    )
    supported_images: List[str] = Field(
        default_factory=lambda: ["default", "google_apis"],
        description="Accepted system image variants",
    )

    @field_validator("supported_api_levels")
    @classmethod
    def validate_api_levels(cls, v: List[int]) -> List[int]:
        if not v:
            raise ValueError("At least one supported API level is required")
        for level in v:
            if level <= 0:
                raise ValueError(f"Invalid API level: {level}")
        return v


class LaunchConfig(BaseModel):
    """Key names used when building native app launch arguments."""

    component_name_arg_prefix: str = "ComponentName"
    project_dir_arg_prefix: str = "ProjectDir"
    custom_args_prefix: str = "CustomArgs"


class PreviewConfig(BaseModel):
    """Complete mobile preview configuration."""

    sfdx_path: str = Field(default="sfdx", description="Salesforce CLI executable")
    server_plugin: str = Field(
        default="@salesforce/lwc-dev-server",
        description="CLI plugin serving components to the preview",
    )
    ios: IOSConfig = Field(default_factory=IOSConfig)
    android: AndroidConfig = Field(default_factory=AndroidConfig)
    launch: LaunchConfig = Field(default_factory=LaunchConfig)
