"""Points and control-point sets. / 点与控制点集合。

Curves are evaluated on ``float64`` tensors laid out as ``(n, 2)``; :class:`Point2D` is the small immutable
value handed back to callers. / 曲线在形状为 ``(n, 2)`` 的 ``float64`` 张量上求值；:class:`Point2D` 是返回给调用方的不可变小型值对象。
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple, Union

import torch

from .errors import InvalidInputError

Tensor = torch.Tensor
DTYPE = torch.float64


@dataclass(frozen=True)
class Point2D:
    """Immutable 2D position. / 不可变的二维位置。"""

    x: float
    y: float

    @classmethod
    def from_tensor(cls, value: Tensor) -> "Point2D":
        if value.shape != (2,):
            raise InvalidInputError(f"Point2D expects a tensor of shape (2,), received {tuple(value.shape)}")
        return cls(float(value[0]), float(value[1]))

    def as_tensor(self) -> Tensor:
        return torch.tensor([self.x, self.y], dtype=DTYPE)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


PointLike = Union[Point2D, Sequence[float]]
ControlPoints = Union[Tensor, Sequence[PointLike]]


def _point_values(point: PointLike) -> Tuple[float, float]:
    if isinstance(point, Point2D):
        return point.as_tuple()
    if len(point) != 2:
        raise InvalidInputError(f"Control points must have two coordinates, received {len(point)}")
    return float(point[0]), float(point[1])


def as_control_points(points: ControlPoints, allowed_counts: Tuple[int, ...] = (4,)) -> Tensor:
    """Normalise ``points`` into an ``(n, 2)`` ``float64`` tensor. / 将 ``points`` 规范化为 ``(n, 2)`` 的 ``float64`` 张量。

    Parameters
    ----------
    points:
        ``Point2D`` instances, ``(x, y)`` pairs or a tensor of shape ``(n, 2)``.
        / ``Point2D`` 实例、``(x, y)`` 坐标对或形状为 ``(n, 2)`` 的张量。
    allowed_counts:
        Accepted values of ``n``. / 允许的点数 ``n``。

    The returned tensor is a fresh copy, so later changes to the caller's data never reach a particle.
    / 返回的张量是新的副本，调用方之后修改原数据不会影响粒子。
    """

    if isinstance(points, Tensor):
        tensor = points.detach().to(dtype=DTYPE).clone()
    else:
        tensor = torch.tensor([_point_values(p) for p in points], dtype=DTYPE)

    if tensor.dim() != 2 or tensor.shape[-1] != 2:
        raise InvalidInputError(f"Control points must have shape (n, 2), received {tuple(tensor.shape)}")
    if tensor.shape[0] not in allowed_counts:
        expected = " or ".join(str(n) for n in allowed_counts)
        raise InvalidInputError(f"Expected {expected} control points, received {tensor.shape[0]}")
    if not torch.isfinite(tensor).all():
        raise InvalidInputError("Control point coordinates must be finite")
    return tensor


__all__ = ["DTYPE", "ControlPoints", "Point2D", "PointLike", "as_control_points"]
