"""Named starting points for the half-Atwood lab and the tuning-fork set."""

from __future__ import annotations

from physlab.sim.schema import Preset

PRESETS: dict[str, Preset] = {
    "baseline": Preset(
        name="baseline",
        description="Frictionless baseline.",
        mass_table_kg=2.5,
        mass_hanging_kg=1.2,
        mu=0.2,
        friction_enabled=False,
    ),
    "packet": Preset(
        name="packet",
        description="Packet-style friction scenario.",
        mass_table_kg=2.5,
        mass_hanging_kg=1.8,
        mu=0.2,
        friction_enabled=True,
    ),
    "cliff": Preset(
        name="cliff",
        description="Car + rock analog (packet-style Atwood context).",
        mass_table_kg=1000.0,
        mass_hanging_kg=50.0,
        mu=0.2,
        friction_enabled=False,
    ),
}

FORK_FREQUENCIES_HZ: tuple[int, ...] = (256, 288, 320, 341, 384, 426, 480, 512, 640, 768)


def get_preset(name: str) -> Preset | None:
    return PRESETS.get(name)


__all__ = ["PRESETS", "FORK_FREQUENCIES_HZ", "get_preset"]
