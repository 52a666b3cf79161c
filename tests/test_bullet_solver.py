import math

import pytest

from rmcontrol.bullet_solver import BulletSolver, BulletSolverConfig
from rmcontrol.types import Vec3d


def _solve(solver, pos, vel=None, speed=18.0, yaw=0.0, v_yaw=0.0, r1=0.0, r2=0.0, dz=0.0, armors=4):
    return solver.solve(pos, vel or Vec3d(), speed, yaw, v_yaw, r1, r2, dz, armors)


@pytest.mark.parametrize(
    "speed, expected",
    [(10, 0.45), (12.5, 1.0), (15, 1.0), (16, 0.7), (18, 0.55), (24, 5.0), (30, 5.0)],
)
def test_resistance_coefficient_by_speed_class(speed, expected):
    assert BulletSolver().resistance_coefficient(speed) == expected


def test_static_target_straight_ahead():
    solver = BulletSolver()
    assert _solve(solver, Vec3d(5.0, 0.0, 0.0)) is True
    assert solver.yaw() == pytest.approx(0.0, abs=1e-9)
    assert solver.pitch() < 0.0
    assert solver.target_pos.x == pytest.approx(5.0)


def test_farther_target_needs_more_elevation():
    near, far = BulletSolver(), BulletSolver()
    assert _solve(near, Vec3d(3.0, 0.0, 0.0))
    assert _solve(far, Vec3d(6.0, 0.0, 0.0))
    assert far.pitch() < near.pitch()


def test_target_to_the_side_gives_quarter_turn_yaw():
    solver = BulletSolver()
    assert _solve(solver, Vec3d(0.0, 5.0, 0.0))
    assert solver.yaw() == pytest.approx(math.pi / 2)


def test_mirrored_target_mirrors_yaw():
    left, right = BulletSolver(), BulletSolver()
    assert _solve(left, Vec3d(4.0, 2.0, 0.5))
    assert _solve(right, Vec3d(4.0, -2.0, 0.5))
    assert left.yaw() == pytest.approx(-right.yaw())
    assert left.pitch() == pytest.approx(right.pitch())


def test_moving_target_is_led():
    still, moving = BulletSolver(), BulletSolver()
    assert _solve(still, Vec3d(5.0, 0.0, 0.0))
    assert _solve(moving, Vec3d(5.0, 0.0, 0.0), vel=Vec3d(0.0, 1.0, 0.0))
    assert moving.yaw() > still.yaw()
    assert moving.fly_time > 0.0


def test_tracked_armor_offset_by_radius():
    solver = BulletSolver()
    assert _solve(solver, Vec3d(5.0, 0.0, 0.0), r1=0.2)
    assert solver.track_target is True
    assert solver.target_pos.x == pytest.approx(4.8)
    assert solver.target_pos.y == pytest.approx(0.0, abs=1e-9)


def test_fast_spin_aims_at_centre_line():
    solver = BulletSolver()
    assert _solve(solver, Vec3d(3.0, 4.0, 0.0), v_yaw=10.0, r1=0.5, armors=2)
    assert solver.track_target is False
    assert solver.selected_armor == -1
    assert math.hypot(solver.target_pos.x, solver.target_pos.y) == pytest.approx(4.5)
    assert solver.yaw() == pytest.approx(math.atan2(4.0, 3.0))


def test_unreachable_target_fails():
    solver = BulletSolver()
    assert _solve(solver, Vec3d(100.0, 0.0, 0.0)) is False


def test_zero_bullet_speed_fails():
    solver = BulletSolver()
    assert _solve(solver, Vec3d(5.0, 0.0, 0.0), speed=0.0) is False


def test_zero_coefficient_falls_back():
    solver = BulletSolver(config=BulletSolverConfig(resistance_coff_qd_18=0.0))
    _solve(solver, Vec3d(5.0, 0.0, 0.0))
    assert solver.resistance_coff == 0.001
    assert solver.bullet_speed == 18.0