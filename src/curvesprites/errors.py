"""Exceptions raised by the curve and particle core. / 曲线与粒子核心抛出的异常。"""
from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised for control points or speeds outside the supported contract. / 控制点或速度超出支持范围时抛出。

    Subclasses :class:`ValueError` so callers catching the usual validation error keep working.
    / 继承自 :class:`ValueError`，捕获常规校验错误的调用方无需修改。
    """


__all__ = ["InvalidInputError"]
