"""Force and kinematics solver for the half-Atwood machine.

A block of mass ``m_t`` rests on a horizontal table and is tied over an ideal
pulley to a hanging mass ``m_h``. Positive displacement/velocity points toward
the pulley (hanging mass descending).

Conventions:
- Massless rope, frictionless pulley wheel
- One friction coefficient serves both as the static cap and the kinetic magnitude
- Normal force on the table block is ``m_t * g``
"""
from __future__ import annotations

import math

from physlab.sim.schema import DynamicInput, DynamicResult, HalfAtwoodInput, HalfAtwoodResult

# Below this speed the block is treated as momentarily at rest and static
# friction gets a chance to hold it again.
VELOCITY_EPSILON = 1e-4


def clamp(value: float, lo: float, hi: float) -> float:
    return min(hi, max(lo, value))


def _time_to_target(acceleration: float, distance: float) -> float | None:
    if acceleration > 0 and distance > 0:
        return math.sqrt(2.0 * distance / acceleration)
    return None


def calculate_half_atwood_from_rest(params: HalfAtwoodInput) -> HalfAtwoodResult:
    """Classify the regime for a release from rest and solve forces.

    Negative inputs are floored at zero. A system with no mass reports
    ``static_hold`` with every force zeroed except the drive force.
    """
    m_table = max(0.0, params.mass_table_kg)
    m_hanging = max(0.0, params.mass_hanging_kg)
    g = max(0.0, params.gravity)
    mu = max(0.0, params.mu)
    distance = max(0.0, params.target_distance_m)

    total_mass = m_table + m_hanging
    drive = m_hanging * g

    if total_mass <= 0:
        return HalfAtwoodResult(
            acceleration_mps2=0.0,
            tension_n=0.0,
            friction_n=0.0,
            net_force_n=0.0,
            drive_force_n=drive,
            moved=False,
            time_to_target_s=None,
            mode="static_hold",
        )

    if not params.friction_enabled or mu == 0:
        a = drive / total_mass
        return HalfAtwoodResult(
            acceleration_mps2=a,
            tension_n=m_hanging * (g - a),
            friction_n=0.0,
            net_force_n=drive,
            drive_force_n=drive,
            moved=a > 0,
            time_to_target_s=_time_to_target(a, distance),
            mode="frictionless",
        )

    friction_cap = mu * m_table * g

    if drive <= friction_cap:
        # Static friction matches the drive exactly, not the Coulomb maximum
        return HalfAtwoodResult(
            acceleration_mps2=0.0,
            tension_n=drive,
            friction_n=drive,
            net_force_n=0.0,
            drive_force_n=drive,
            moved=False,
            time_to_target_s=None,
            mode="static_hold",
        )

    net = drive - friction_cap
    a = net / total_mass
    return HalfAtwoodResult(
        acceleration_mps2=a,
        tension_n=m_hanging * (g - a),
        friction_n=friction_cap,
        net_force_n=net,
        drive_force_n=drive,
        moved=a > 0,
        time_to_target_s=_time_to_target(a, distance),
        mode="kinetic",
    )


def resolve_dynamic_forces(params: DynamicInput) -> DynamicResult:
    """Solve forces for a system already in motion at ``params.velocity_mps``.

    While moving, kinetic friction opposes the current velocity regardless of
    the drive direction. Within ``VELOCITY_EPSILON`` of rest the static
    decision is taken again so the block can stick at a turnaround.
    """
    m_table = max(0.0, params.mass_table_kg)
    m_hanging = max(0.0, params.mass_hanging_kg)
    g = max(0.0, params.gravity)
    mu = max(0.0, params.mu)

    total_mass = m_table + m_hanging
    drive = m_hanging * g

    if total_mass <= 0:
        return DynamicResult(
            acceleration_mps2=0.0,
            tension_n=0.0,
            friction_signed_n=0.0,
            friction_magnitude_n=0.0,
            net_force_n=0.0,
            drive_force_n=drive,
            mode="static_hold",
        )

    if not params.friction_enabled or mu == 0:
        a = drive / total_mass
        return DynamicResult(
            acceleration_mps2=a,
            tension_n=m_hanging * (g - a),
            friction_signed_n=0.0,
            friction_magnitude_n=0.0,
            net_force_n=drive,
            drive_force_n=drive,
            mode="frictionless",
        )

    kinetic = mu * m_table * g
    v = params.velocity_mps

    if abs(v) <= VELOCITY_EPSILON:
        if drive <= kinetic:
            return DynamicResult(
                acceleration_mps2=0.0,
                tension_n=drive,
                friction_signed_n=-drive,
                friction_magnitude_n=drive,
                net_force_n=0.0,
                drive_force_n=drive,
                mode="static_hold",
            )
        net = drive - kinetic
        a = net / total_mass
        return DynamicResult(
            acceleration_mps2=a,
            tension_n=m_hanging * (g - a),
            friction_signed_n=-kinetic,
            friction_magnitude_n=kinetic,
            net_force_n=net,
            drive_force_n=drive,
            mode="kinetic",
        )

    friction_signed = -kinetic if v > 0 else kinetic
    net = drive + friction_signed
    a = net / total_mass
    return DynamicResult(
        acceleration_mps2=a,
        tension_n=m_hanging * (g - a),
        friction_signed_n=friction_signed,
        friction_magnitude_n=kinetic,
        net_force_n=net,
        drive_force_n=drive,
        mode="kinetic",
    )


__all__ = [
    "VELOCITY_EPSILON",
    "clamp",
    "calculate_half_atwood_from_rest",
    "resolve_dynamic_forces",
]
