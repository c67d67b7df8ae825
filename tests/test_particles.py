import random

from astrorun.game.particles import JetpackBurst, Particle


def test_emit_adds_particles_at_origin():
    burst = JetpackBurst(random.Random(3))
    assert burst.emit(100.0, 200.0, count=10) == 10
    assert len(burst) == 10
    for p in burst.particles:
        assert (p.x, p.y) == (100.0, 200.0)
        assert 180.0 <= p.hue <= 220.0
        assert p.lifespan == 100.0


def test_emit_respects_capacity():
    burst = JetpackBurst(random.Random(3), max_particles=15)
    assert burst.emit(0, 0, 10) == 10
    assert burst.emit(0, 0, 10) == 5
    assert burst.emit(0, 0, 10) == 0
    assert len(burst) == 15


def test_particles_fade_out():
    burst = JetpackBurst(random.Random(3))
    burst.emit(0, 0, 5)

    for _ in range(39):
        burst.update()
    assert len(burst) == 5

    burst.update()
    assert len(burst) == 0


def test_particle_motion():
    p = Particle(x=0.0, y=0.0, vx=1.0, vy=-2.0, ay=0.5)
    p.update()
    assert (p.x, p.y) == (1.0, -1.5)
    assert p.lifespan == 97.5
    assert not p.is_dead


def test_clear():
    burst = JetpackBurst(random.Random(3))
    burst.emit(0, 0, 10)
    burst.clear()
    assert len(burst) == 0
