from __future__ import annotations

import json

import pytest

from fakes import DEVICE_TYPES_JSON, DEVICES_JSON, RUNTIMES_JSON, SDK_PACKAGES
from mobilepreview.errors import DeviceCatalogError
from mobilepreview.simulator.catalog import (
    DeviceRecord,
    filter_supported_runtimes,
    parse_available_runtimes,
    parse_device_catalog,
    parse_device_types,
    parse_sdk_packages,
    runtime_short_id,
)


def _runtimes(*identifiers: str) -> str:
    return json.dumps({"runtimes": [{"identifier": i} for i in identifiers]})


def test_runtime_filter_keeps_only_supported_platform() -> None:
    raw = _runtimes(
        "com.apple.CoreSimulator.SimRuntime.iOS-14-4",
        "com.apple.CoreSimulator.SimRuntime.watchOS-7-0",
    )
    assert parse_available_runtimes(raw, ["iOS"]) == ["iOS-14-4"]


def test_runtimes_sorted_latest_first() -> None:
    assert parse_available_runtimes(RUNTIMES_JSON, ["iOS"]) == ["iOS-14-4", "iOS-13-0"]
    assert parse_available_runtimes(RUNTIMES_JSON) == [
        "iOS-14-4",
        "tvOS-14-3",
        "iOS-13-0",
        "watchOS-7-0",
    ]


def test_runtimes_sort_numerically() -> None:
    raw = _runtimes(
        "com.apple.CoreSimulator.SimRuntime.iOS-14-4",
        "com.apple.CoreSimulator.SimRuntime.iOS-14-10",
        "com.apple.CoreSimulator.SimRuntime.iOS-9-3",
    )
    assert parse_available_runtimes(raw) == ["iOS-14-10", "iOS-14-4", "iOS-9-3"]


def test_runtimes_ignore_unknown_identifiers() -> None:
    raw = _runtimes("com.apple.CoreSimulator.SimRuntime.xrOS-1-0", "garbage")
    assert parse_available_runtimes(raw) == []
    assert parse_available_runtimes(json.dumps({})) == []


def test_runtime_short_id() -> None:
    assert runtime_short_id("com.apple.CoreSimulator.SimRuntime.iOS-13-0") == "iOS-13-0"
    assert runtime_short_id("com.apple.CoreSimulator.SimRuntime.iOS") is None


def test_filter_supported_runtimes_uses_prefixes() -> None:
    runtimes = ["iOS-14-4", "iOS-13-0", "iOS-12-4", "watchOS-7-0"]
    assert filter_supported_runtimes(runtimes, ["iOS-13", "iOS-14"]) == ["iOS-14-4", "iOS-13-0"]
    assert filter_supported_runtimes(runtimes, []) == []


def test_device_catalog_filters_runtime_and_availability() -> None:
    devices = parse_device_catalog(DEVICES_JSON, ["iOS-13", "iOS-14"])

    assert devices == [
        DeviceRecord(name="iPhone 11", identifier="AAAA-1111", runtime_version="iOS-14-4", state="Shutdown"),
        DeviceRecord(name="iPhone 12", identifier="BBBB-2222", runtime_version="iOS-14-4", state="Booted"),
    ]
    assert devices[1].is_booted is True
    assert str(devices[0]) == "iPhone 11, AAAA-1111, iOS-14-4"


def test_device_catalog_rebuilt_each_call() -> None:
    first = parse_device_catalog(DEVICES_JSON, ["iOS"])
    second = parse_device_catalog(DEVICES_JSON, ["iOS"])
    assert first == second
    assert first is not second
    assert {d.runtime_version for d in first} == {"iOS-14-4", "iOS-12-4"}


def test_malformed_json_raises_catalog_error() -> None:
    with pytest.raises(DeviceCatalogError):
        parse_device_catalog("not json", ["iOS"])
    with pytest.raises(DeviceCatalogError):
        parse_available_runtimes("[1, 2]")


def test_device_types_match_pattern() -> None:
    assert parse_device_types(DEVICE_TYPES_JSON) == ["iPhone-8", "iPhone-11", "iPhone-X"]
    assert parse_device_types(DEVICE_TYPES_JSON, r"SimDeviceType\.iPad") == ["iPad-Air"]


def test_sdk_packages_keep_platforms_and_system_images() -> None:
    packages = parse_sdk_packages(SDK_PACKAGES)

    assert len(packages) == 13
    assert packages[0].path == "platforms;android-25"
    assert packages[0].version == "3"
    assert packages[0].api_level == 25
    assert packages[0].is_platform is True
    assert packages[-1].path == "system-images;android-30;google_apis;x86_64"
    assert packages[-1].is_system_image is True
    assert all(p.api_level != 31 for p in packages)


def test_sdk_packages_bad_listing() -> None:
    assert parse_sdk_packages("Installed packages:=====================]") == []
    assert parse_sdk_packages("") == []


def test_runtimes_skip_entries_that_are_not_objects() -> None:
    raw = json.dumps({"runtimes": ["iOS", None, {"identifier": "com.apple.CoreSimulator.SimRuntime.iOS-14-4"}]})
    assert parse_available_runtimes(raw) == ["iOS-14-4"]


def test_runtimes_field_of_wrong_type_raises_catalog_error() -> None:
    with pytest.raises(DeviceCatalogError, match="runtimes"):
        parse_available_runtimes(json.dumps({"runtimes": {"identifier": "x"}}))


def test_device_catalog_devices_must_be_an_object() -> None:
    with pytest.raises(DeviceCatalogError, match="devices"):
        parse_device_catalog(json.dumps({"devices": ["iPhone 11"]}), ["iOS"])


def test_device_catalog_skips_wrong_shape_entries() -> None:
    raw = json.dumps({
        "devices": {
            "com.apple.CoreSimulator.SimRuntime.iOS-14-4": [
                "x",
                42,
                {"name": "iPhone 11", "udid": "AAAA-1111", "state": "Shutdown"},
            ],
            "com.apple.CoreSimulator.SimRuntime.iOS-13-0": "not a list",
        }
    })
    assert parse_device_catalog(raw, ["iOS"]) == [
        DeviceRecord(name="iPhone 11", identifier="AAAA-1111", runtime_version="iOS-14-4", state="Shutdown"),
    ]


def test_device_types_skip_entries_that_are_not_objects() -> None:
    raw = json.dumps({"devicetypes": ["iPhone-11", {"identifier": "com.apple.CoreSimulator.SimDeviceType.iPhone-X"}]})
    assert parse_device_types(raw) == ["iPhone-X"]

    with pytest.raises(DeviceCatalogError, match="devicetypes"):
        parse_device_types(json.dumps({"devicetypes": "iPhone-11"}))
