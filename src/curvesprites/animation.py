"""Frame driver: advance, draw, repeat. / 帧驱动器：推进、绘制、循环。"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence, Union

import torch

from .particles import ParticleCollection
from .rendering import RenderTarget, SpriteRenderer, tensor_to_image

Tensor = torch.Tensor

logger = logging.getLogger(__name__)


@dataclass
class AnimationConfig:
    """Frame count and timing for a run. / 一次运行的帧数与时间设置。"""

    frame_count: int = 120
    fps: float = 60.0
    realtime: bool = False  # Speeds are progress per second instead of per tick / 速度按每秒而非每节拍计

    def validate(self) -> None:
        if self.frame_count <= 0:
            raise ValueError("frame_count must be positive")
        if self.fps <= 0:
            raise ValueError("fps must be positive")

    @property
    def elapsed_per_tick(self) -> float:
        return 1.0 / self.fps if self.realtime else 1.0


class FrameDriver:
    """Calls into the particle model once per frame, the way a display refresh callback would.
    / 每帧调用一次粒子模型，相当于显示刷新回调。
    """

    def __init__(
        self,
        particles: ParticleCollection,
        renderer: SpriteRenderer | None = None,
        config: AnimationConfig | None = None,
    ):
        self.particles = particles
        self.renderer = renderer or SpriteRenderer()
        self.config = config or AnimationConfig()
        self.config.validate()

    def tick(self, target: RenderTarget) -> None:
        target.clear()
        self.particles.advance_all(self.config.elapsed_per_tick)
        self.renderer.draw(self.particles, target)

    def run(self) -> List[Tensor]:
        """Render ``frame_count`` frames and return a snapshot of each. / 渲染 ``frame_count`` 帧并返回每帧快照。"""

        cfg = self.config
        target = self.renderer.create_target()
        logger.info(
            f"Rendering {cfg.frame_count} frames of {len(self.particles)} particles "
            f"at {target.width}x{target.height}"
        )
        frames = []
        for _ in range(cfg.frame_count):
            self.tick(target)
            frames.append(target.snapshot())
        logger.info(f"Finished rendering; all particles settled: {self.particles.all_finished}")
        return frames


def save_gif(frames: Sequence[Tensor], path: Union[str, Path], fps: float = 60.0) -> Path:
    """Write frames as a looping animated GIF. / 将帧写为循环播放的 GIF 动画。"""

    if not frames:
        raise ValueError("save_gif needs at least one frame")
    path = Path(path)
    images = [tensor_to_image(frame) for frame in frames]
    images[0].save(
        path,
        save_all=True,
        append_images=images[1:],
        duration=max(1, int(round(1000.0 / fps))),
        loop=0,
    )
    logger.info(f"Saved {len(images)} frames to {path}")
    return path


__all__ = ["AnimationConfig", "FrameDriver", "save_gif"]
