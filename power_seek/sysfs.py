from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

DEFAULT_SYSFS_ROOT = Path("/sys/class/power_supply")
BATTERY_PREFIX = "BAT"


class SysfsError(Exception):
    pass


class DiscoveryError(SysfsError):
    """The power-supply root could not be listed."""


class ReadError(SysfsError):
    def __init__(self, battery_id: str, attribute: str, reason: str) -> None:
        super().__init__(f"{battery_id}/{attribute}: {reason}")
        self.battery_id = battery_id
        self.attribute = attribute


class State(enum.Enum):
    CHARGING = "Charging"
    DISCHARGING = "Discharging"


@dataclass(frozen=True)
class BatteryInfo:
    name: str
    voltage: float  # microvolts
    current: float  # microamps
    state: Optional[State]
    capacity_pct: Optional[float] = None

    @property
    def volts(self) -> float:
        return self.voltage / 1_000_000.0

    @property
    def amps(self) -> float:
        return self.current / 1_000_000.0

    @property
    def watts(self) -> float:
        # microvolts * microamps
        return (self.voltage * self.current) / 1_000_000_000_000.0


def parse_state(token: str) -> State:
    if token == "Charging":
        return State.CHARGING
    return State.DISCHARGING


def _read_token(path: Path, battery_id: str) -> str:
    try:
        raw = path.read_text()
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(battery_id, path.name, str(exc)) from exc
    tokens = raw.split()
    return tokens[0] if tokens else ""


def _read_float(path: Path, battery_id: str) -> float:
    token = _read_token(path, battery_id)
    try:
        return float(token)
    except ValueError as exc:
        raise ReadError(battery_id, path.name, f"not a number: {token!r}") from exc


def _read_optional_float(path: Path) -> Optional[float]:
    try:
        raw = path.read_text().strip()
    except (OSError, UnicodeDecodeError):
        return None
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        log.debug("Non-numeric value in %s: %s", path, raw)
        return None


def find_battery_ids(sysfs_root: Path = DEFAULT_SYSFS_ROOT) -> list[str]:
    """Return the names of ``BAT*`` directories or symlinks under *sysfs_root*.

    Entries keep the order the OS lists them in. ``DirEntry`` consults
    ``lstat()`` when the filesystem does not report an entry type, so such
    entries are classified rather than dropped.
    """
    try:
        with os.scandir(sysfs_root) as entries:
            found = []
            for entry in entries:
                if not entry.name.startswith(BATTERY_PREFIX):
                    continue
                if entry.is_symlink() or entry.is_dir(follow_symlinks=False):
                    log.debug("Found battery %s", entry.name)
                    found.append(entry.name)
                else:
                    log.debug("Ignoring %s: not a directory or symlink", entry.name)
    except OSError as exc:
        raise DiscoveryError(f"cannot list {sysfs_root}: {exc}") from exc
    return found


def read_battery(
    battery_id: str,
    sysfs_root: Path = DEFAULT_SYSFS_ROOT,
    *,
    read_status: bool = True,
) -> BatteryInfo:
    path = sysfs_root / battery_id
    voltage = _read_float(path / "voltage_now", battery_id)
    current = _read_float(path / "current_now", battery_id)

    state = None
    capacity_pct = None
    if read_status:
        state = parse_state(_read_token(path / "status", battery_id))
        capacity_pct = _read_optional_float(path / "capacity")

    return BatteryInfo(
        name=battery_id,
        voltage=voltage,
        current=current,
        state=state,
        capacity_pct=capacity_pct,
    )
