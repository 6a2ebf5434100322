from __future__ import annotations

import pytest
from pydantic import ValidationError

from physlab.sim.analytic import simulate_half_atwood_run
from physlab.sim.schema import RunConfig


def make_config(**overrides) -> RunConfig:
  params = dict(mass_table_kg=2.0, mass_hanging_kg=1.0, mu=0.2, friction_enabled=False, gravity=10.0)
  params.update(overrides)
  return RunConfig(**params)


def test_frictionless_run_reaches_floor():
  res = simulate_half_atwood_run(make_config())
  assert res.stop_reason == "boundary"
  last = res.frames[-1]
  assert last.displacement_m == 2.1
  assert last.velocity_mps == 0.0
  # constant acceleration while moving
  for frame in res.frames[:-1]:
    assert abs(frame.acceleration_mps2 - 10 / 3) < 1e-9
  # roughly sqrt(2 * 2.1 / (10/3)) ≈ 1.12 s
  assert 1.0 < last.t < 1.25


def test_static_hold_run_never_starts():
  res = simulate_half_atwood_run(make_config(mass_table_kg=6.0, friction_enabled=True))
  assert res.stop_reason == "static_hold"
  assert len(res.frames) == 1
  assert res.frames[0].mode == "static_hold"
  assert res.from_rest.moved is False


def test_no_mass_run_stops_immediately():
  res = simulate_half_atwood_run(make_config(mass_table_kg=0.0, mass_hanging_kg=0.0))
  assert res.stop_reason == "static_hold"
  assert len(res.frames) == 1


def test_time_limit():
  res = simulate_half_atwood_run(make_config(total_time_s=0.5))
  assert res.stop_reason == "time_limit"
  assert abs(res.frames[-1].t - 0.5) < 1e-6
  assert 0.0 < res.frames[-1].displacement_m < 2.1


def test_step_is_capped():
  res = simulate_half_atwood_run(make_config(dt_s=0.1, total_time_s=0.2))
  assert res.frames[1].t == 0.035


def test_frame_limit():
  res = simulate_half_atwood_run(make_config(), max_frames=3)
  assert res.stop_reason == "frame_limit"
  assert len(res.frames) == 3


def test_block_cannot_pass_left_stop():
  res = simulate_half_atwood_run(make_config(initial_velocity_mps=-1.0))
  assert all(frame.displacement_m >= 0.0 for frame in res.frames)
  assert res.frames[1].velocity_mps == 0.0
  assert res.stop_reason == "boundary"


def test_friction_follows_velocity_sign_during_run():
  res = simulate_half_atwood_run(make_config(mass_table_kg=2.5, mass_hanging_kg=1.8, friction_enabled=True, initial_velocity_mps=-1.0))
  assert res.frames[0].friction_signed_n > 0
  moving_right = [f for f in res.frames if f.velocity_mps > 1e-3]
  assert moving_right
  assert all(f.friction_signed_n < 0 for f in moving_right)


def test_launch_overcomes_static_hold():
  # too little drive to start from rest, but a push still moves the block
  res = simulate_half_atwood_run(make_config(mass_table_kg=6.0, friction_enabled=True, initial_velocity_mps=1.0))
  assert len(res.frames) > 1
  assert res.frames[1].displacement_m > 0.0
  assert res.frames[1].velocity_mps < 1.0


def test_run_config_validation():
  with pytest.raises(ValidationError):
    make_config(travel_min_m=1.0, travel_max_m=0.5)
  with pytest.raises(ValidationError):
    make_config(dt_s=0.0)
