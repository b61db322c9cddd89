from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Optional

from typer.models import OptionInfo

from .sysfs import (
    DEFAULT_SYSFS_ROOT,
    BatteryInfo,
    ReadError,
    find_battery_ids,
    read_battery,
)

log = logging.getLogger(__name__)

LEGACY_BATTERY_ID = "BAT1"


@dataclass
class Collection:
    infos: list[BatteryInfo] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def all_failed(self) -> bool:
        return bool(self.skipped) and not self.infos


def resolve_sysfs_root(sysfs_root: Optional[Path | os.PathLike | str]) -> Path:
    if isinstance(sysfs_root, OptionInfo):
        sysfs_root = sysfs_root.default

    if isinstance(sysfs_root, (str, os.PathLike)):
        return Path(sysfs_root)
    return DEFAULT_SYSFS_ROOT


def collect(
    battery_ids: Optional[Iterable[str]] = None,
    sysfs_root: Optional[Path] = None,
    *,
    read_status: bool = True,
) -> Collection:
    """Read every battery in *battery_ids* (discovered when omitted).

    Batteries that fail to read are logged and listed in ``skipped``.
    Discovery failures propagate as ``DiscoveryError``.
    """
    root = resolve_sysfs_root(sysfs_root)
    if battery_ids is None:
        battery_ids = find_battery_ids(root)
        if not battery_ids:
            log.debug("No batteries found in %s", root)

    collection = Collection()
    for battery_id in battery_ids:
        try:
            info = read_battery(battery_id, root, read_status=read_status)
        except ReadError as exc:
            log.warning("Skipping battery %s: %s", battery_id, exc)
            collection.skipped.append(battery_id)
            continue
        log.debug(
            "Read %s: voltage=%.0fuV current=%.0fuA state=%s",
            battery_id,
            info.voltage,
            info.current,
            info.state.value if info.state else "n/a",
        )
        collection.infos.append(info)
    return collection


def collect_legacy(sysfs_root: Optional[Path] = None) -> Optional[BatteryInfo]:
    collection = collect([LEGACY_BATTERY_ID], sysfs_root, read_status=False)
    return collection.infos[0] if collection.infos else None
