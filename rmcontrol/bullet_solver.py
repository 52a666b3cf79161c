"""Ballistic solver that aims at a spinning, moving armour target under air drag."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from rmcontrol.types import Vec3d

_MAX_ITERATIONS = 20
_TOLERANCE = 0.001


def _div(a: float, b: float) -> float:
    if b != 0:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a)


def _log(x: float) -> float:
    if x > 0:
        return math.log(x)
    if x == 0:
        return -math.inf
    return math.nan


def _exp(x: float) -> float:
    try:
        return math.exp(x)
    except OverflowError:
        return math.inf


def _cos(x: float) -> float:
    return math.cos(x) if math.isfinite(x) else math.nan


def _sin(x: float) -> float:
    return math.sin(x) if math.isfinite(x) else math.nan


def _acos(x: float) -> float:
    return math.acos(x) if -1.0 <= x <= 1.0 else math.nan


@dataclass(frozen=True)
class BulletSolverConfig:
    """Drag coefficients per muzzle-speed class and gravity."""

    resistance_coff_qd_10: float = 0.45
    resistance_coff_qd_15: float = 1.0
    resistance_coff_qd_16: float = 0.7
    resistance_coff_qd_18: float = 0.55
    resistance_coff_qd_30: float = 5.0
    g: float = 9.81


@dataclass
class BulletSolver:
    """Iteratively finds the yaw and pitch needed to hit a target armour plate."""

    config: BulletSolverConfig = field(default_factory=BulletSolverConfig)
    max_track_target_vel: float = 5.0
    target_pos: Vec3d = field(default_factory=Vec3d)
    bullet_speed: float = 0.0
    resistance_coff: float = 0.0
    selected_armor: int = 0
    track_target: bool = False
    fly_time: float = 0.0
    _output_yaw: float = 0.0
    _output_pitch: float = 0.0

    def resistance_coefficient(self, bullet_speed: float) -> float:
        """Return the drag coefficient for the given muzzle speed."""
        cfg = self.config
        if bullet_speed < 12.5:
            return cfg.resistance_coff_qd_10
        if bullet_speed < 15.5:
            return cfg.resistance_coff_qd_15
        if bullet_speed < 17:
            return cfg.resistance_coff_qd_16
        if bullet_speed < 24:
            return cfg.resistance_coff_qd_18
        return cfg.resistance_coff_qd_30

    def yaw(self) -> float:
        """Yaw angle of the last solution."""
        return self._output_yaw

    def pitch(self) -> float:
        """Pitch angle of the last solution, positive pointing down."""
        return -self._output_pitch

    def _time_of_flight(self, rho: float, pitch: float) -> float:
        k = self.resistance_coff
        ratio = _div(rho * k, self.bullet_speed * _cos(pitch))
        return -_log(1 - ratio) / k

    def solve(
        self,
        pos: Vec3d,
        vel: Vec3d,
        bullet_speed: float,
        yaw: float,
        v_yaw: float,
        r1: float,
        r2: float,
        dz: float,
        armors_num: int,
    ) -> bool:
        """Solve for the aim angles; return False if no solution converges."""
        self.bullet_speed = bullet_speed
        coff = self.resistance_coefficient(bullet_speed)
        self.resistance_coff = coff if coff != 0 else 0.001
        k = self.resistance_coff
        g = self.config.g

        temp_z = pos.z
        target_rho = math.hypot(pos.x, pos.y)
        self._output_yaw = math.atan2(pos.y, pos.x)
        self._output_pitch = math.atan2(temp_z, target_rho)
        rough_fly_time = self._time_of_flight(target_rho, self._output_pitch)

        self.selected_armor = 0
        r = r1
        z = pos.z
        self.track_target = abs(v_yaw) < self.max_track_target_vel
        if self.track_target:
            base = _acos(_div(r, target_rho))
            switch_armor_angle = (
                base - math.pi / 12 + (-base + math.pi / 6) * abs(v_yaw) / self.max_track_target_vel
            )
        else:
            switch_armor_angle = math.pi / 12

        predicted_yaw = yaw + v_yaw * rough_fly_time
        if (predicted_yaw > self._output_yaw + switch_armor_angle and v_yaw > 0.0) or (
            predicted_yaw < self._output_yaw - switch_armor_angle and v_yaw < 0.0
        ):
            self.selected_armor = -1 if v_yaw > 0.0 else 1
            if armors_num == 4:
                r = r2
                z = pos.z + dz

        armor_offset = _div(self.selected_armor * 2 * math.pi, armors_num)

        if self.track_target:
            angle = yaw + armor_offset
            tx = pos.x - r * _cos(angle)
            ty = pos.y - r * _sin(angle)
        else:
            bearing = math.atan2(pos.y, pos.x)
            tx = pos.x - r * _cos(bearing)
            ty = pos.y - r * _sin(bearing)
        self.target_pos = Vec3d(tx, ty, z)

        count = 0
        error = 999.0
        while error >= _TOLERANCE:
            self._output_yaw = math.atan2(ty, tx)
            target_rho = math.hypot(tx, ty)
            self._output_pitch = math.atan2(temp_z, target_rho)
            fly = self._time_of_flight(target_rho, self._output_pitch)
            self.fly_time = fly
            real_z = (bullet_speed * _sin(self._output_pitch) + g / k) * (1 - _exp(-k * fly)) / k - g * fly / k

            if self.track_target:
                angle = yaw + v_yaw * fly + armor_offset
                tx = pos.x + vel.x * fly - r * _cos(angle)
                ty = pos.y + vel.y * fly - r * _sin(angle)
            else:
                ahead_x = pos.x + vel.x * fly
                ahead_y = pos.y + vel.y * fly
                bearing = math.atan2(ahead_y, ahead_x)
                tx = ahead_x - r * _cos(bearing)
                ty = ahead_y - r * _sin(bearing)
            tz = z + vel.z * fly
            self.target_pos = Vec3d(tx, ty, tz)

            error_theta = math.atan2(ty, tx) - self._output_yaw
            error_z = tz - real_z
            temp_z += error_z
            arc = error_theta * target_rho
            error = math.sqrt(arc * arc + error_z * error_z)
            count += 1

            if count >= _MAX_ITERATIONS or math.isnan(error):
                return False
        return True