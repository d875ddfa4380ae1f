"""Animate two stars along a Bézier and a Catmull-Rom path. / 让两颗星星分别沿贝塞尔与 Catmull-Rom 路径运动。

Run the script with ``python examples/animate_stars.py``; it saves a GIF next to this file. /
使用 ``python examples/animate_stars.py`` 运行脚本，会在本文件旁保存 GIF。
"""
from __future__ import annotations

from pathlib import Path

from curvesprites import (
    AnimationConfig,
    CurveKind,
    FrameDriver,
    ParticleCollection,
    RenderConfig,
    SpriteRenderer,
    save_gif,
    setup_logging,
    star_sprite,
)

OUTPUT_PATH = Path(__file__).with_suffix(".gif")


def make_particles() -> ParticleCollection:
    star = star_sprite()
    particles = ParticleCollection()
    particles.add(
        [(100, 100), (375, 75), (431, 296), (500, 300)],
        speed=0.01,
        curve_kind=CurveKind.BEZIER,
        sprite=star,
    )
    # Waypoints; the segment runs from the second to the third point. / 路径点；曲线段从第二点延伸到第三点。
    particles.add(
        [(100, 100), (100, 300), (500, 500), (700, 100)],
        speed=0.01,
        curve_kind=CurveKind.CATMULL_ROM,
        sprite=star,
    )
    return particles


def main() -> None:
    setup_logging()
    renderer = SpriteRenderer(RenderConfig(canvas_width=800, canvas_height=600))
    config = AnimationConfig(frame_count=120, fps=30.0)
    frames = FrameDriver(make_particles(), renderer, config).run()
    save_gif(frames, OUTPUT_PATH, fps=config.fps)
    print(f"Saved star animation to {OUTPUT_PATH}")  # 提示保存路径 / Notify where the output was saved


if __name__ == "__main__":
    main()
