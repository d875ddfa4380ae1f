"""Sprite particles that follow spline paths. / 沿样条路径运动的精灵粒子。

Particles move along a single cubic segment, given either as Bézier control points or as centripetal
Catmull-Rom waypoints converted once into Bézier form. / 粒子沿单段三次曲线运动，曲线可直接由贝塞尔控制点给出，
也可由向心 Catmull-Rom 路径点一次性转换为贝塞尔形式。
A frame driver advances every particle once per tick and composites its sprite onto an explicit render target.
/ 帧驱动器在每个节拍推进所有粒子，并将其精灵合成到显式的渲染目标上。
"""

from .animation import AnimationConfig, FrameDriver, save_gif
from .bezier import CubicBezier, evaluate_bezier
from .catmull_rom import PrecomputedSegment, evaluate_catmull_rom, precompute_catmull_rom
from .errors import InvalidInputError
from .geometry import Point2D
from .logging_config import setup_logging
from .particles import CurveKind, Particle, ParticleCollection
from .rendering import RenderConfig, RenderTarget, Sprite, SpriteRenderer, load_sprite, star_sprite

__all__ = [
    "AnimationConfig",
    "CubicBezier",
    "CurveKind",
    "FrameDriver",
    "InvalidInputError",
    "Particle",
    "ParticleCollection",
    "Point2D",
    "PrecomputedSegment",
    "RenderConfig",
    "RenderTarget",
    "Sprite",
    "SpriteRenderer",
    "evaluate_bezier",
    "evaluate_catmull_rom",
    "load_sprite",
    "precompute_catmull_rom",
    "save_gif",
    "setup_logging",
    "star_sprite",
]
