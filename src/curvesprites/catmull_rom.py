"""Centripetal Catmull-Rom segments expressed as cubic Bézier curves. / 以三次贝塞尔曲线表示的向心 Catmull-Rom 曲线段。

A Catmull-Rom segment through waypoints ``(P0, P1, P2, P3)`` spans ``P1 → P2``. Converting it once into the
equivalent Bézier control points ``(P1, bp1, bp2, P2)`` means every later frame only pays for the Bernstein
polynomial, with no distance or power computations. / 经过路径点 ``(P0, P1, P2, P3)`` 的 Catmull-Rom 曲线段覆盖
``P1 → P2``。预先将其转换为等价的贝塞尔控制点 ``(P1, bp1, bp2, P2)`` 后，之后每一帧只需计算伯恩斯坦多项式，无需再计算距离和幂。

The parametrisation exponent ``alpha`` defaults to ``0.5`` (centripetal), which keeps unevenly spaced
waypoints free of cusps and self-intersections. / 参数化指数 ``alpha`` 默认为 ``0.5``（向心参数化），
可避免路径点间距不均时产生尖点与自相交。
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Union

import torch

from .bezier import CubicBezier
from .geometry import ControlPoints, Point2D, as_control_points

Tensor = torch.Tensor

logger = logging.getLogger(__name__)

CENTRIPETAL_ALPHA = 0.5


@dataclass(frozen=True)
class PrecomputedSegment:
    """Bézier form of one Catmull-Rom segment. / 单段 Catmull-Rom 曲线的贝塞尔形式。"""

    anchor_start: Point2D
    tangent_control1: Point2D
    tangent_control2: Point2D
    anchor_end: Point2D

    def as_tensor(self) -> Tensor:
        """Stack the four points into a ``(4, 2)`` tensor. / 将四个点堆叠为 ``(4, 2)`` 张量。"""

        return torch.stack(
            [
                self.anchor_start.as_tensor(),
                self.tangent_control1.as_tensor(),
                self.tangent_control2.as_tensor(),
                self.anchor_end.as_tensor(),
            ]
        )

    def as_bezier(self) -> CubicBezier:
        return CubicBezier(self.as_tensor())


def _safe_reciprocal(value: Tensor) -> Tensor:
    # Exactly zero maps to zero so coincident waypoints stay defined. / 分母恰为零时返回零，使重合路径点仍有定义。
    return torch.where(value != 0, 1.0 / value, torch.zeros_like(value))


def _substitute_origin(control: Tensor, anchor: Tensor, name: str) -> Tensor:
    if bool((control == 0).all()):
        logger.debug(f"Catmull-Rom {name} collapsed to the origin; using anchor {anchor.tolist()}")
        return anchor.clone()
    return control


def precompute_catmull_rom(points: ControlPoints, alpha: float = CENTRIPETAL_ALPHA) -> PrecomputedSegment:
    """Convert 3 or 4 waypoints into the Bézier control points of the ``P1 → P2`` segment.
    / 将 3 或 4 个路径点转换为 ``P1 → P2`` 曲线段的贝塞尔控制点。

    Parameters
    ----------
    points:
        Three or four waypoints. With three, the last point is repeated so the path ends with no outgoing tangent.
        / 三个或四个路径点。仅有三个时重复最后一点，使路径末端没有出射切向。
    alpha:
        Parametrisation exponent: ``0`` uniform, ``0.5`` centripetal, ``1`` chordal.
        / 参数化指数：``0`` 为均匀，``0.5`` 为向心，``1`` 为弦长。

    Raises
    ------
    InvalidInputError
        If ``points`` does not hold 3 or 4 finite 2D points. / ``points`` 不是 3 或 4 个有限二维点时抛出。
    """

    cp = as_control_points(points, allowed_counts=(3, 4))
    if cp.shape[0] == 3:
        cp = torch.cat([cp, cp[2:3]], dim=0)
    p0, p1, p2, p3 = cp

    # d1 = |P1 - P0|, d2 = |P2 - P1|, d3 = |P3 - P2|
    distances = torch.linalg.norm(cp[1:] - cp[:-1], dim=-1)
    pow_a = distances ** alpha
    pow_2a = distances ** (2.0 * alpha)
    d1_a, d2_a, d3_a = pow_a
    d1_2a, d2_2a, d3_2a = pow_2a

    a = 2.0 * d1_2a + 3.0 * d1_a * d2_a + d2_2a
    b = 2.0 * d3_2a + 3.0 * d3_a * d2_a + d2_2a
    n = _safe_reciprocal(3.0 * d1_a * (d1_a + d2_a))
    m = _safe_reciprocal(3.0 * d3_a * (d3_a + d2_a))

    bp1 = n * (-d2_2a * p0 + a * p1 + d1_2a * p2)
    bp2 = m * (d3_2a * p1 + b * p2 - d2_2a * p3)
    bp1 = _substitute_origin(bp1, p1, "bp1")
    bp2 = _substitute_origin(bp2, p2, "bp2")

    return PrecomputedSegment(
        anchor_start=Point2D.from_tensor(p1),
        tangent_control1=Point2D.from_tensor(bp1),
        tangent_control2=Point2D.from_tensor(bp2),
        anchor_end=Point2D.from_tensor(p2),
    )


def evaluate_catmull_rom(segment: Union[PrecomputedSegment, CubicBezier], t: float) -> Point2D:
    """Evaluate a precomputed segment at ``t``; ``0`` gives ``P1`` and ``1`` gives ``P2``.
    / 在 ``t`` 处对预计算曲线段求值；``0`` 对应 ``P1``，``1`` 对应 ``P2``。
    """

    curve = segment if isinstance(segment, CubicBezier) else segment.as_bezier()
    return Point2D.from_tensor(curve.evaluate(t))


__all__ = ["CENTRIPETAL_ALPHA", "PrecomputedSegment", "evaluate_catmull_rom", "precompute_catmull_rom"]
