"""Particles that travel along a single curve segment. / 沿单段曲线运动的粒子。

Each particle owns its progress ``t`` and advances it once per tick; no particle reads another particle's
state, so the collection may update them in any order. / 每个粒子维护自身的进度 ``t`` 并在每个时钟节拍推进一次；
粒子之间互不读取状态，因此集合可以任意顺序更新它们。
"""
from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, List, Optional

from .bezier import CubicBezier, evaluate_bezier
from .catmull_rom import CENTRIPETAL_ALPHA, PrecomputedSegment, evaluate_catmull_rom, precompute_catmull_rom
from .errors import InvalidInputError
from .geometry import ControlPoints, Point2D

if TYPE_CHECKING:
    from .rendering import Sprite

logger = logging.getLogger(__name__)


def _check_elapsed(elapsed: float) -> None:
    if not math.isfinite(elapsed) or elapsed < 0.0:
        raise InvalidInputError(f"elapsed must be a non-negative finite number, got {elapsed}")


class CurveKind(enum.Enum):
    BEZIER = "bezier"
    CATMULL_ROM = "catmull_rom"


@dataclass(eq=False)
class Particle:
    """A sprite moving along one Bézier or Catmull-Rom segment. / 沿一段贝塞尔或 Catmull-Rom 曲线移动的精灵。

    ``curve`` always holds Bézier control points: the raw ones for :attr:`CurveKind.BEZIER`, the precomputed
    ``segment`` for :attr:`CurveKind.CATMULL_ROM`. / ``curve`` 始终保存贝塞尔控制点：对 :attr:`CurveKind.BEZIER`
    为原始控制点，对 :attr:`CurveKind.CATMULL_ROM` 为预计算的 ``segment``。
    """

    curve_kind: CurveKind
    curve: CubicBezier
    speed: float
    sprite: Optional["Sprite"] = None
    segment: Optional[PrecomputedSegment] = None
    progress: float = 0.0
    position: Point2D = field(init=False)

    def __post_init__(self) -> None:
        self.position = self._evaluate(self.progress)

    @classmethod
    def create(
        cls,
        control_points: ControlPoints,
        speed: float,
        curve_kind: CurveKind = CurveKind.BEZIER,
        sprite: Optional["Sprite"] = None,
        *,
        alpha: float = CENTRIPETAL_ALPHA,
    ) -> "Particle":
        """Build a particle at the start of its path. / 在路径起点创建粒子。

        Bézier paths take exactly four control points; Catmull-Rom paths take three or four waypoints and are
        converted to Bézier form here, once. / 贝塞尔路径需要恰好四个控制点；Catmull-Rom 路径接受三个或四个路径点，
        并在此处一次性转换为贝塞尔形式。

        Raises
        ------
        InvalidInputError
            For an unsupported point count or a speed that is not a positive finite number.
            / 点数不受支持，或速度不是正的有限数时抛出。
        """

        speed = float(speed)
        if not math.isfinite(speed) or speed <= 0.0:
            raise InvalidInputError(f"speed must be a positive finite number, got {speed}")

        if curve_kind is CurveKind.BEZIER:
            particle = cls(curve_kind, CubicBezier.from_points(control_points), speed, sprite)
        elif curve_kind is CurveKind.CATMULL_ROM:
            segment = precompute_catmull_rom(control_points, alpha)
            particle = cls(curve_kind, segment.as_bezier(), speed, sprite, segment=segment)
        else:
            raise InvalidInputError(f"Unsupported curve kind: {curve_kind!r}")

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Created {curve_kind.value} particle at {particle.position.as_tuple()} "
                f"(speed={speed}, path length ~{float(particle.curve.length()):.1f})"
            )
        return particle

    @property
    def finished(self) -> bool:
        return self.progress >= 1.0

    def _evaluate(self, t: float) -> Point2D:
        if self.curve_kind is CurveKind.BEZIER:
            return evaluate_bezier(self.curve, t)
        if self.curve_kind is CurveKind.CATMULL_ROM:
            return evaluate_catmull_rom(self.curve, t)
        raise InvalidInputError(f"Unsupported curve kind: {self.curve_kind!r}")

    def advance(self, elapsed: float = 1.0) -> None:
        """Move ``speed * elapsed`` further along the curve, stopping exactly at ``t = 1``.
        / 沿曲线前进 ``speed * elapsed``，并恰好停在 ``t = 1``。

        With the default ``elapsed`` of one tick, ``speed`` is progress per tick. A driver that passes elapsed
        seconds turns ``speed`` into progress per second. / 默认 ``elapsed`` 为一个节拍，此时 ``speed`` 表示每节拍的进度；
        若驱动器传入经过的秒数，则 ``speed`` 表示每秒的进度。

        Raises
        ------
        InvalidInputError
            If ``elapsed`` is negative or not finite. / ``elapsed`` 为负数或非有限数时抛出。
        """

        _check_elapsed(elapsed)
        if self.finished:
            return
        self.progress = min(1.0, self.progress + self.speed * elapsed)
        self.position = self._evaluate(self.progress)
        if self.finished:
            logger.info(f"Particle reached the end of its {self.curve_kind.value} path at {self.position.as_tuple()}")


class ParticleCollection:
    """Ordered particles; insertion order is draw order. / 有序粒子集合；插入顺序即绘制顺序。"""

    def __init__(self, particles: Optional[List[Particle]] = None):
        self._particles: List[Particle] = list(particles or [])

    def __iter__(self) -> Iterator[Particle]:
        return iter(self._particles)

    def __len__(self) -> int:
        return len(self._particles)

    def __getitem__(self, index: int) -> Particle:
        return self._particles[index]

    def add(
        self,
        control_points: ControlPoints,
        speed: float,
        curve_kind: CurveKind = CurveKind.BEZIER,
        sprite: Optional["Sprite"] = None,
        *,
        alpha: float = CENTRIPETAL_ALPHA,
    ) -> Particle:
        particle = Particle.create(control_points, speed, curve_kind, sprite, alpha=alpha)
        self._particles.append(particle)
        return particle

    def advance_all(self, elapsed: float = 1.0) -> None:
        _check_elapsed(elapsed)
        for particle in self._particles:
            particle.advance(elapsed)

    def positions(self) -> List[Point2D]:
        return [p.position for p in self._particles]

    @property
    def all_finished(self) -> bool:
        return all(p.finished for p in self._particles)


__all__ = ["CurveKind", "Particle", "ParticleCollection"]
