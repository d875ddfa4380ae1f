"""Drawing particles onto an explicit render target. / 将粒子绘制到显式的渲染目标上。

The render target is an ``(H, W, 3)`` RGB tensor in ``[0, 1]`` with ``(0, 0)`` at the top-left pixel.
Sprites are RGBA tensors composited with straight alpha, centred on each particle position.
/ 渲染目标是取值在 ``[0, 1]`` 的 ``(H, W, 3)`` RGB 张量，``(0, 0)`` 位于左上角像素。
精灵为 RGBA 张量，以非预乘 Alpha 合成，并以粒子位置为中心绘制。
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Tuple, Union

import numpy as np
import torch
from PIL import Image, ImageDraw

from .particles import Particle

Tensor = torch.Tensor

logger = logging.getLogger(__name__)

DEFAULT_SPRITE_SIZE = 50
STAR_COLOR = (1.0, 0.84, 0.0)


@dataclass
class RenderConfig:
    """Configuration shared by render targets and the sprite renderer. / 渲染目标与精灵渲染器共享的配置。"""

    canvas_width: int = 800
    canvas_height: int = 600
    background: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    sprite_size: int = DEFAULT_SPRITE_SIZE  # Drawn width and height in pixels / 绘制宽高（像素）

    def validate(self) -> None:
        if self.canvas_height <= 0 or self.canvas_width <= 0:
            raise ValueError("Canvas dimensions must be positive integers")
        if self.sprite_size <= 0:
            raise ValueError("sprite_size must be positive")
        if len(self.background) != 3 or not all(0.0 <= c <= 1.0 for c in self.background):
            raise ValueError("background must be an RGB triple with components in [0, 1]")


@dataclass
class RenderTarget:
    """Drawing surface handed to the renderer each frame. / 每帧传递给渲染器的绘图表面。"""

    width: int
    height: int
    background: Tuple[float, float, float] = (1.0, 1.0, 1.0)
    pixels: Tensor = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.pixels = torch.empty((self.height, self.width, 3), dtype=torch.float32)
        self.clear()

    @classmethod
    def from_config(cls, config: RenderConfig) -> "RenderTarget":
        config.validate()
        return cls(config.canvas_width, config.canvas_height, config.background)

    def clear(self) -> None:
        self.pixels[:] = torch.tensor(self.background, dtype=self.pixels.dtype)

    def snapshot(self) -> Tensor:
        return self.pixels.clone()

    def to_image(self) -> Image.Image:
        return tensor_to_image(self.pixels)


@dataclass
class Sprite:
    """RGBA image in ``[0, 1]`` with shape ``(S, S, 4)``. / 形状为 ``(S, S, 4)``、取值 ``[0, 1]`` 的 RGBA 图像。"""

    pixels: Tensor

    def __post_init__(self) -> None:
        if self.pixels.dim() != 3 or self.pixels.shape[-1] != 4:
            raise ValueError(f"Sprite.pixels must have shape (H, W, 4), received {tuple(self.pixels.shape)}")

    @classmethod
    def from_image(cls, image: Image.Image, size: int = DEFAULT_SPRITE_SIZE) -> "Sprite":
        image = image.convert("RGBA")
        if image.size != (size, size):
            image = image.resize((size, size), Image.Resampling.LANCZOS)
        data = torch.from_numpy(np.asarray(image, dtype=np.float32) / 255.0)
        return cls(data)

    def resized(self, size: int) -> "Sprite":
        if self.pixels.shape[:2] == (size, size):
            return self
        # interpolate expects (N, C, H, W) / interpolate 需要 (N, C, H, W) 布局
        chw = self.pixels.permute(2, 0, 1).unsqueeze(0)
        scaled = torch.nn.functional.interpolate(chw, size=(size, size), mode="bilinear", align_corners=False)
        return Sprite(scaled.squeeze(0).permute(1, 2, 0).clamp(0.0, 1.0))


def load_sprite(path: Union[str, Path], size: int = DEFAULT_SPRITE_SIZE) -> Sprite:
    """Load any Pillow-readable image as a square sprite. / 将 Pillow 可读取的图像加载为方形精灵。"""

    with Image.open(path) as image:
        sprite = Sprite.from_image(image, size)
    logger.debug(f"Loaded sprite {path} at {size}x{size}")
    return sprite


def star_sprite(size: int = DEFAULT_SPRITE_SIZE, color: Tuple[float, float, float] = STAR_COLOR) -> Sprite:
    """Draw a five-pointed star on a transparent square. / 在透明方形画布上绘制五角星。"""

    image = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    centre = (size - 1) / 2.0
    outer = size / 2.0
    inner = outer * 0.4
    vertices = []
    for i in range(10):
        radius = outer if i % 2 == 0 else inner
        angle = -math.pi / 2.0 + i * math.pi / 5.0
        vertices.append((centre + radius * math.cos(angle), centre + radius * math.sin(angle)))
    fill = tuple(int(round(c * 255)) for c in color) + (255,)
    ImageDraw.Draw(image).polygon(vertices, fill=fill)
    return Sprite.from_image(image, size)


def tensor_to_image(pixels: Tensor) -> Image.Image:
    data = (pixels.clamp(0.0, 1.0).cpu().numpy() * 255.0).round().astype("uint8")
    return Image.fromarray(data)


class SpriteRenderer:
    """Composites particle sprites onto a :class:`RenderTarget`. / 将粒子精灵合成到 :class:`RenderTarget` 上。"""

    def __init__(self, config: RenderConfig | None = None):
        self.config = config or RenderConfig()
        self.config.validate()
        # id(source) -> (source, scaled); holding the source keeps its id from being reused.
        self._scaled: Dict[int, Tuple[Sprite, Sprite]] = {}

    def create_target(self) -> RenderTarget:
        return RenderTarget.from_config(self.config)

    def draw(self, particles: Iterable[Particle], target: RenderTarget) -> None:
        """Paint every particle in order; later particles paint over earlier ones.
        / 按顺序绘制所有粒子；后绘制的粒子覆盖先绘制的粒子。

        Particles whose sprite is not available yet are skipped. / 精灵尚未就绪的粒子会被跳过。
        """

        for particle in particles:
            if particle.sprite is None:
                continue
            self._blit(self._sized(particle.sprite), particle.position.x, particle.position.y, target)

    def _sized(self, sprite: Sprite) -> Sprite:
        """Return ``sprite`` at ``sprite_size``, scaling each source sprite only once. / 返回 ``sprite_size`` 尺寸的精灵，每个源精灵只缩放一次。"""

        cached = self._scaled.get(id(sprite))
        if cached is None or cached[0] is not sprite:
            cached = (sprite, sprite.resized(self.config.sprite_size))
            self._scaled[id(sprite)] = cached
        return cached[1]

    def _blit(self, sprite: Sprite, x: float, y: float, target: RenderTarget) -> None:
        size = sprite.pixels.shape[0]
        left = int(math.floor(x - size / 2.0))
        top = int(math.floor(y - size / 2.0))

        # Clip the sprite rectangle to the canvas. / 将精灵矩形裁剪到画布范围内。
        x0, y0 = max(left, 0), max(top, 0)
        x1, y1 = min(left + size, target.width), min(top + size, target.height)
        if x0 >= x1 or y0 >= y1:
            return

        patch = sprite.pixels[y0 - top : y1 - top, x0 - left : x1 - left].to(target.pixels.dtype)
        alpha = patch[..., 3:4]
        region = target.pixels[y0:y1, x0:x1]
        target.pixels[y0:y1, x0:x1] = patch[..., :3] * alpha + region * (1.0 - alpha)


__all__ = [
    "RenderConfig",
    "RenderTarget",
    "Sprite",
    "SpriteRenderer",
    "load_sprite",
    "star_sprite",
    "tensor_to_image",
]
