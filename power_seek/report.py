from __future__ import annotations

from typing import Iterable

from .sysfs import BatteryInfo


def _format_number(value: float) -> str:
    return f"{value:.2f}"


def format_power_draw(info: BatteryInfo) -> str:
    return f"Current power draw: {_format_number(info.watts)}W"


def format_battery(info: BatteryInfo) -> list[str]:
    """Render the report block for one battery, one string per line.

    *info* must carry a state, i.e. have been read with ``read_status=True``.
    """
    state = info.state.value
    lines = [
        f"Battery:  {info.name}",
        f"Status:   {state}",
    ]
    if info.capacity_pct is not None and info.capacity_pct > 0:
        lines.append(f"Charge:   {_format_number(info.capacity_pct)}%")
    lines.extend(
        [
            f"Voltage:  {_format_number(info.volts)}V",
            f"Current:  {_format_number(info.amps)}A",
            f"Power:    {_format_number(info.watts)}W",
        ]
    )
    return lines


def format_report(infos: Iterable[BatteryInfo]) -> str:
    blocks = ["\n".join(format_battery(info)) for info in infos]
    return "\n\n".join(blocks)
