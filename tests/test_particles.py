import logging

import pytest
import torch

from curvesprites import (
    CubicBezier,
    CurveKind,
    InvalidInputError,
    Particle,
    ParticleCollection,
    Point2D,
    evaluate_bezier,
    evaluate_catmull_rom,
)

S_SHAPE = [(0.0, 0.0), (0.0, 100.0), (100.0, 100.0), (100.0, 0.0)]


def test_particle_starts_at_curve_start() -> None:
    bezier = Particle.create(S_SHAPE, speed=0.1)
    catmull = Particle.create(S_SHAPE, speed=0.1, curve_kind=CurveKind.CATMULL_ROM)
    assert bezier.progress == 0.0
    assert bezier.position == Point2D(0.0, 0.0)
    # The Catmull-Rom segment starts at the second waypoint.
    assert catmull.position == Point2D(0.0, 100.0)
    assert catmull.segment is not None
    assert bezier.segment is None


def test_advance_moves_by_speed() -> None:
    particle = Particle.create(S_SHAPE, speed=0.25)
    particle.advance()
    particle.advance()
    assert particle.progress == pytest.approx(0.5)
    assert particle.position.x == pytest.approx(50.0)
    assert particle.position.y == pytest.approx(75.0)


def test_progress_is_monotonic_and_clamped() -> None:
    particle = Particle.create(S_SHAPE, speed=0.07, curve_kind=CurveKind.CATMULL_ROM)
    previous = particle.progress
    for _ in range(30):
        particle.advance()
        assert particle.progress >= previous
        assert particle.progress <= 1.0
        # The position is always the curve point for the current progress.
        assert particle.position == evaluate_catmull_rom(particle.segment, particle.progress)
        previous = particle.progress
    assert particle.finished
    assert particle.progress == 1.0
    assert particle.position.x == pytest.approx(100.0)
    assert particle.position.y == pytest.approx(100.0)


def test_finished_particle_is_frozen() -> None:
    particle = Particle.create(S_SHAPE, speed=0.4)
    for _ in range(3):
        particle.advance()
    frozen = particle.position
    for _ in range(5):
        particle.advance()
    assert particle.position == frozen
    assert particle.position == Point2D(100.0, 0.0)


def test_elapsed_scales_progress() -> None:
    particle = Particle.create(S_SHAPE, speed=0.5)
    particle.advance(elapsed=0.5)
    assert particle.progress == pytest.approx(0.25)


@pytest.mark.parametrize("elapsed", [-1.0, float("nan"), float("inf")])
def test_advance_rejects_bad_elapsed(elapsed: float) -> None:
    particle = Particle.create(S_SHAPE, speed=0.25)
    particle.advance()
    before = (particle.progress, particle.position)
    with pytest.raises(InvalidInputError):
        particle.advance(elapsed=elapsed)
    assert (particle.progress, particle.position) == before


@pytest.mark.parametrize("elapsed", [-1.0, float("nan"), float("inf")])
def test_advance_all_rejects_bad_elapsed(elapsed: float) -> None:
    particles = ParticleCollection()
    first = particles.add(S_SHAPE, speed=0.25)
    second = particles.add(S_SHAPE, speed=0.5)
    particles.advance_all()
    with pytest.raises(InvalidInputError):
        particles.advance_all(elapsed)
    assert (first.progress, second.progress) == (0.25, 0.5)


def test_zero_elapsed_keeps_position() -> None:
    particle = Particle.create(S_SHAPE, speed=0.25)
    particle.advance()
    before = particle.position
    particle.advance(elapsed=0.0)
    assert particle.progress == 0.25
    assert particle.position == before


def test_bezier_position_tracks_progress() -> None:
    particle = Particle.create(S_SHAPE, speed=0.13)
    while not particle.finished:
        particle.advance()
        assert particle.position == evaluate_bezier(S_SHAPE, particle.progress)


@pytest.mark.parametrize("speed", [0.0, -0.1, float("inf"), float("nan")])
def test_create_rejects_bad_speed(speed: float) -> None:
    with pytest.raises(InvalidInputError):
        Particle.create(S_SHAPE, speed=speed)


def test_create_checks_point_count_per_curve_kind() -> None:
    with pytest.raises(InvalidInputError):
        Particle.create(S_SHAPE[:3], speed=0.1, curve_kind=CurveKind.BEZIER)
    particle = Particle.create(S_SHAPE[:3], speed=0.1, curve_kind=CurveKind.CATMULL_ROM)
    assert particle.position == Point2D(0.0, 100.0)


def test_control_points_are_copied() -> None:
    points = [list(p) for p in S_SHAPE]
    particle = Particle.create(points, speed=0.5)
    points[3][0] = 999.0
    particle.advance()
    particle.advance()
    assert particle.position == Point2D(100.0, 0.0)


def test_collection_advances_every_particle() -> None:
    particles = ParticleCollection()
    fast = particles.add(S_SHAPE, speed=0.5)
    slow = particles.add(S_SHAPE, speed=0.1, curve_kind=CurveKind.CATMULL_ROM)
    assert len(particles) == 2
    assert list(particles) == [fast, slow]

    particles.advance_all()
    assert fast.progress == pytest.approx(0.5)
    assert slow.progress == pytest.approx(0.1)
    assert particles.positions() == [fast.position, slow.position]
    assert not particles.all_finished

    for _ in range(10):
        particles.advance_all()
    assert particles.all_finished


def test_completion_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    particle = Particle.create(S_SHAPE, speed=1.0)
    with caplog.at_level(logging.INFO, logger="curvesprites"):
        particle.advance()
    assert "reached the end" in caplog.text


def test_path_length_only_measured_for_debug_logging(monkeypatch, caplog: pytest.LogCaptureFixture) -> None:
    measured = []

    def fake_length(self, num_samples: int = 64) -> torch.Tensor:
        measured.append(num_samples)
        return torch.tensor(0.0)

    monkeypatch.setattr(CubicBezier, "length", fake_length)
    with caplog.at_level(logging.INFO, logger="curvesprites"):
        Particle.create(S_SHAPE, speed=0.1)
    assert measured == []
    with caplog.at_level(logging.DEBUG, logger="curvesprites"):
        Particle.create(S_SHAPE, speed=0.1)
    assert measured == [64]
    assert "path length" in caplog.text
