"""
Default configuration values.

Provides the defaults used when no configuration file is given and the
template written by `mobile-preview init`.
"""

from typing import Any, Dict


def get_default_config() -> Dict[str, Any]:
    """Get default configuration template."""
    return {
        "sfdx_path": "sfdx",
        "server_plugin": "@salesforce/lwc-dev-server",
        "ios": {
            "xcrun_path": "/usr/bin/xcrun",
            "supported_runtimes": ["iOS-13", "iOS-14"],
            "device_type_pattern": r"SimDeviceType\.iPhone-[81X]",
            "open_simulator_app": True,
        },
        "android": {
            "sdk_root_env": "ANDROID_HOME",
            "sdkmanager_command": "sdkmanager --list",
            "supported_api_levels": [28, 29, 30],
            "supported_images": ["default", "google_apis"],
        },
        "launch": {
            "component_name_arg_prefix": "ComponentName",
            "project_dir_arg_prefix": "ProjectDir",
            "custom_args_prefix": "CustomArgs",
        },
    }
