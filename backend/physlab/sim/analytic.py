from __future__ import annotations

from typing import List

from physlab.sim.half_atwood import (
    VELOCITY_EPSILON,
    calculate_half_atwood_from_rest,
    clamp,
    resolve_dynamic_forces,
)
from physlab.sim.schema import DynamicInput, HalfAtwoodInput, RunConfig, RunFrame, RunResult

MAX_DT_S = 0.035
MAX_FRAMES = 20000


def _frame(t: float, x: float, v: float, config: RunConfig) -> RunFrame:
    forces = resolve_dynamic_forces(DynamicInput(
        mass_table_kg=config.mass_table_kg,
        mass_hanging_kg=config.mass_hanging_kg,
        mu=config.mu,
        friction_enabled=config.friction_enabled,
        gravity=config.gravity,
        velocity_mps=v,
    ))
    return RunFrame(
        t=round(t, 5),
        displacement_m=x,
        velocity_mps=v,
        acceleration_mps2=forces.acceleration_mps2,
        tension_n=forces.tension_n,
        friction_signed_n=forces.friction_signed_n,
        net_force_n=forces.net_force_n,
        mode=forces.mode,
    )


def simulate_half_atwood_run(
    config: RunConfig,
    max_dt_s: float = MAX_DT_S,
    max_frames: int = MAX_FRAMES,
) -> RunResult:
    """Generate fixed-step frames for one run of the half-Atwood apparatus.

    Conventions:
    - Displacement starts at 0 and is measured toward the pulley
    - Semi-implicit Euler: velocity first, then displacement
    - The block rests against ``travel_min_m``; reaching ``travel_max_m``
      (hanging mass on the floor) ends the run with zero velocity
    - Forces are re-resolved every step so friction follows the velocity sign
    """
    dt = min(config.dt_s, max_dt_s)
    rest = calculate_half_atwood_from_rest(HalfAtwoodInput(
        mass_table_kg=config.mass_table_kg,
        mass_hanging_kg=config.mass_hanging_kg,
        mu=config.mu,
        friction_enabled=config.friction_enabled,
        gravity=config.gravity,
        target_distance_m=config.travel_max_m - max(0.0, config.travel_min_m),
    ))

    t = 0.0
    x = clamp(0.0, config.travel_min_m, config.travel_max_m)
    v = config.initial_velocity_mps
    frames: List[RunFrame] = [_frame(t, x, v, config)]

    # Released from rest and the drive cannot beat static friction
    if abs(v) <= VELOCITY_EPSILON and not rest.moved:
        return RunResult(frames=frames, stop_reason="static_hold", from_rest=rest)

    while True:
        remaining = config.total_time_s - t
        if remaining <= 1e-12:
            return RunResult(frames=frames, stop_reason="time_limit", from_rest=rest)
        if len(frames) >= max_frames:
            return RunResult(frames=frames, stop_reason="frame_limit", from_rest=rest)

        current = frames[-1]
        if current.mode == "static_hold" and abs(v) <= VELOCITY_EPSILON:
            return RunResult(frames=frames, stop_reason="static_hold", from_rest=rest)

        step = min(dt, remaining)
        v += current.acceleration_mps2 * step
        x += v * step
        if x < config.travel_min_m:
            x = config.travel_min_m
            if v < 0:
                v = 0.0
        t += step

        hit_floor = x >= config.travel_max_m
        if hit_floor:
            x = config.travel_max_m
            v = 0.0

        frames.append(_frame(t, x, v, config))
        if hit_floor:
            return RunResult(frames=frames, stop_reason="boundary", from_rest=rest)


__all__ = ["MAX_DT_S", "MAX_FRAMES", "simulate_half_atwood_run"]
