"""Cubic Bézier evaluation. / 三次贝塞尔曲线求值。

Every particle path, whether given directly as Bézier control points or derived from Catmull-Rom waypoints,
ends up as one cubic segment ``(p0, p1, p2, p3)``. / 每条粒子路径，无论直接以贝塞尔控制点给出，还是由 Catmull-Rom
路径点推导，最终都表示为一段三次曲线 ``(p0, p1, p2, p3)``。
The container works on PyTorch tensors so a whole batch of segments can be evaluated at once.
/ 容器基于 PyTorch 张量实现，可一次性对一批曲线段求值。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Union

import torch

from .geometry import ControlPoints, Point2D, as_control_points

Tensor = torch.Tensor


@dataclass
class CubicBezier:
    """Light-weight container for batches of cubic Bézier control points. / 用于批量存储三次贝塞尔控制点的轻量级容器。

    The control points are stored in the order ``(p0, p1, p2, p3)`` where each entry is a 2D vector.
    / 控制点按照 ``(p0, p1, p2, p3)`` 的顺序存储，每个元素都是二维向量。
    The tensor layout follows the PyTorch convention ``(..., 4, 2)`` allowing arbitrary batch dimensions.
    / 张量布局遵循 PyTorch 的 ``(..., 4, 2)`` 约定，可灵活支持任意批次维度。
    """

    control_points: Tensor

    def __post_init__(self) -> None:
        if self.control_points.shape[-2:] != (4, 2):
            raise ValueError(
                "CubicBezier.control_points must have shape (..., 4, 2). "
                f"Received {tuple(self.control_points.shape)}"
            )

    @classmethod
    def from_points(cls, points: ControlPoints) -> "CubicBezier":
        """Build a single segment from four points. / 使用四个点构建单段曲线。"""

        return cls(as_control_points(points, allowed_counts=(4,)))

    @property
    def dtype(self) -> torch.dtype:
        return self.control_points.dtype

    @property
    def start(self) -> Tensor:
        return self.control_points[..., 0, :]

    @property
    def end(self) -> Tensor:
        return self.control_points[..., 3, :]

    def evaluate(self, t: Union[float, Tensor]) -> Tensor:
        """Evaluate positions along the curve for parameter ``t``. / 计算参数 ``t`` 对应的曲线上位置。

        Parameters
        ----------
        t:
            A float or a tensor of shape ``(...,)``. Values outside ``[0, 1]`` are extrapolated, not rejected.
            / 浮点数或形状为 ``(...,)`` 的张量。超出 ``[0, 1]`` 的值按多项式外推，不会被拒绝。
        """

        t = torch.as_tensor(t, dtype=self.dtype).unsqueeze(-1)  # (..., 1) shape / 张量形状 (..., 1)
        u = 1.0 - t
        cp = self.control_points
        return (
            (u ** 3) * cp[..., 0, :]
            + 3.0 * (u ** 2) * t * cp[..., 1, :]
            + 3.0 * u * (t ** 2) * cp[..., 2, :]
            + (t ** 3) * cp[..., 3, :]
        )

    def tangent(self, t: Union[float, Tensor]) -> Tensor:
        """Compute the first derivative (tangent) with respect to ``t``. / 计算关于 ``t`` 的一阶导数（切向量）。"""

        t = torch.as_tensor(t, dtype=self.dtype).unsqueeze(-1)
        u = 1.0 - t
        cp = self.control_points
        return (
            3.0 * (u ** 2) * (cp[..., 1, :] - cp[..., 0, :])
            + 6.0 * u * t * (cp[..., 2, :] - cp[..., 1, :])
            + 3.0 * (t ** 2) * (cp[..., 3, :] - cp[..., 2, :])
        )

    def sample(self, num_samples: int) -> Tensor:
        """Sample ``num_samples`` evenly spaced parameters including both endpoints. / 在包含端点的均匀参数上采样。"""

        if num_samples < 2:
            raise ValueError("num_samples must be at least 2")
        t_values = torch.linspace(0.0, 1.0, num_samples, dtype=self.dtype)
        return self.evaluate(t_values)

    def length(self, num_samples: int = 64) -> Tensor:
        """Approximate arc length with a polyline through the samples. / 用采样点折线近似弧长。"""

        positions = self.sample(num_samples)
        deltas = positions[..., 1:, :] - positions[..., :-1, :]
        return torch.linalg.norm(deltas, dim=-1).sum(dim=-1)


def evaluate_bezier(points: Union[ControlPoints, CubicBezier], t: float) -> Point2D:
    """Evaluate the cubic Bézier defined by exactly four ``points`` at ``t``. / 在 ``t`` 处计算由四个点定义的三次贝塞尔曲线。"""

    curve = points if isinstance(points, CubicBezier) else CubicBezier.from_points(points)
    return Point2D.from_tensor(curve.evaluate(t))


__all__ = ["CubicBezier", "evaluate_bezier"]
