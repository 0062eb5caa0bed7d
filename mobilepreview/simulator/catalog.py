"""
Device Catalog Parsing

Turns simctl and sdkmanager listings into structured records. All functions
here are pure: they take raw command output and never run anything.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..errors import DeviceCatalogError


RUNTIME_ID_PATTERN = re.compile(r".*SimRuntime\.((iOS|watchOS|tvOS)-[\d\-]+)$")
DEFAULT_DEVICE_TYPE_PATTERN = r"SimDeviceType\.iPhone-[81X]"

SDK_PACKAGE_PREFIXES = ("platforms;", "system-images;")


@dataclass(frozen=True)
class DeviceRecord:
    """A simulator device as reported by the device listing."""
    name: str
    identifier: str
    runtime_version: str
    state: str = "Unknown"

    @property
    def is_booted(self) -> bool:
        return self.state == "Booted"

    def __str__(self) -> str:
        return f"{self.name}, {self.identifier}, {self.runtime_version}"


@dataclass(frozen=True)
class SdkPackage:
    """An installed Android SDK package row."""
    path: str
    version: str
    description: str
    location: str

    @property
    def api_level(self) -> Optional[int]:
        """API level from 'platforms;android-N' or 'system-images;android-N;...'."""
        parts = self.path.split(";")
        if len(parts) < 2 or not parts[1].startswith("android-"):
            return None
        try:
            return int(parts[1][len("android-"):])
        except ValueError:
            return None

    @property
    def is_platform(self) -> bool:
        return self.path.startswith("platforms;")

    @property
    def is_system_image(self) -> bool:
        return self.path.startswith("system-images;")


def _load_json(raw: str, what: str) -> Dict[str, Any]:
    try:
        data = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DeviceCatalogError(f"Invalid {what} listing: {e}")
    if not isinstance(data, dict):
        raise DeviceCatalogError(f"Invalid {what} listing: expected a JSON object")
    return data


def _field(data: Dict[str, Any], key: str, kind: type, what: str):
    """Return data[key], or an empty `kind` when missing; reject other types."""
    value = data.get(key)
    if value is None:
        return kind()
    if not isinstance(value, kind):
        raise DeviceCatalogError(
            f"Invalid {what} listing: unexpected {type(value).__name__} for '{key}'"
        )
    return value


def _objects(entries: Iterable[Any]) -> List[Dict[str, Any]]:
    return [entry for entry in entries if isinstance(entry, dict)]


def runtime_short_id(identifier: str) -> Optional[str]:
    """'com.apple.CoreSimulator.SimRuntime.iOS-14-4' -> 'iOS-14-4'."""
    match = RUNTIME_ID_PATTERN.match(identifier or "")
    return match.group(1) if match else None


def _version_key(runtime: str):
    digits = re.findall(r"\d+", runtime)
    return tuple(int(d) for d in digits)


def filter_supported_runtimes(
    runtimes: Iterable[str],
    supported: Iterable[str],
) -> List[str]:
    """Keep runtimes that start with one of the supported prefixes."""
    prefixes = tuple(supported)
    return [r for r in runtimes if r.startswith(prefixes)]


def parse_available_runtimes(
    raw: str,
    supported: Optional[Iterable[str]] = None,
) -> List[str]:
    """
    Extract runtime ids from `simctl list --json runtimes`.

    Args:
        raw: JSON listing
        supported: Optional runtime prefixes to keep (e.g. ["iOS"])

    Returns:
        Short runtime ids, latest version first
    """
    data = _load_json(raw, "runtimes")

    runtimes = []
    for entry in _objects(_field(data, "runtimes", list, "runtimes")):
        short_id = runtime_short_id(str(entry.get("identifier") or ""))
        if short_id:
            runtimes.append(short_id)

    runtimes.sort(key=_version_key, reverse=True)

    if supported is not None:
        runtimes = filter_supported_runtimes(runtimes, supported)
    return runtimes


def parse_device_catalog(raw: str, supported_runtimes: Iterable[str]) -> List[DeviceRecord]:
    """
    Parse `simctl list --json devices` into device records.

    Devices that are unavailable, or whose runtime does not start with one
    of the supported runtimes, are dropped. So are entries that are not
    JSON objects.

    Raises:
        DeviceCatalogError: If the listing or its 'devices' field has the wrong shape
    """
    data = _load_json(raw, "devices")
    prefixes = tuple(supported_runtimes)

    records = []
    for runtime_key, devices in _field(data, "devices", dict, "devices").items():
        runtime = runtime_short_id(runtime_key)
        if runtime is None or not runtime.startswith(prefixes):
            continue
        if not isinstance(devices, list):
            continue
        for device in _objects(devices):
            if not device.get("isAvailable", True):
                continue
            if not device.get("udid") or not device.get("name"):
                continue
            records.append(DeviceRecord(
                name=device["name"],
                identifier=device["udid"],
                runtime_version=runtime,
                state=device.get("state", "Unknown"),
            ))
    return records


def parse_device_types(raw: str, pattern: str = DEFAULT_DEVICE_TYPE_PATTERN) -> List[str]:
    """Return device type names (e.g. 'iPhone-11') whose identifier matches pattern."""
    data = _load_json(raw, "device types")
    regex = re.compile(pattern)

    names = []
    for entry in _objects(_field(data, "devicetypes", list, "device types")):
        identifier = str(entry.get("identifier") or "")
        if regex.search(identifier):
            names.append(identifier.split(".")[-1])
    return names


def parse_sdk_packages(raw: str) -> List[SdkPackage]:
    """
    Parse the installed platform and system image rows of `sdkmanager --list`.

    A listing without a well-formed "Installed packages" table yields an
    empty list.
    """
    lines = (raw or "").splitlines()

    start = None
    for i, line in enumerate(lines):
        if "Installed packages:" in line:
            start = i + 1
            break
    if start is None:
        return []

    packages = []
    for line in lines[start:]:
        stripped = line.strip()
        if stripped.startswith("Available Packages:") or stripped.startswith("Available Updates:"):
            break

        columns = [c.strip() for c in stripped.split("|")]
        if len(columns) < 4:
            continue
        path, version, description, location = columns[:4]
        if not path.startswith(SDK_PACKAGE_PREFIXES):
            continue
        packages.append(SdkPackage(
            path=path,
            version=version,
            description=description,
            location=location,
        ))
    return packages
