#!/usr/bin/env python3
"""Tests for the firework particle engine."""

import math

import pytest

import particle_engine
from particle_engine import BurstDistribution, EngineState, FireworkSettings, Particle


CENTRE = BurstDistribution(mean_x=800.0, mean_y=300.0, std_x=0.0, std_y=0.0)


@pytest.fixture
def settings():
    return FireworkSettings(particles_per_burst=20)


@pytest.fixture
def engine(settings):
    return particle_engine.init(seed=1234, settings=settings)


class TestBurst:
    """Tests for spawning particles."""

    def test_init_is_empty(self, engine):
        assert engine.particles == ()

    def test_burst_spawns_configured_batch_at_origin(self, engine, settings):
        state = particle_engine.burst(engine, CENTRE)

        assert len(state.particles) == settings.particles_per_burst
        assert all(p.x == 800.0 and p.y == 300.0 for p in state.particles)
        assert all(settings.min_life <= p.life <= settings.max_life for p in state.particles)
        assert all(p.color in settings.palette for p in state.particles)

    def test_burst_velocities_are_biased_upwards(self, engine):
        state = engine
        for _ in range(10):
            state = particle_engine.burst(state, CENTRE)

        mean_vy = sum(p.vy for p in state.particles) / len(state.particles)
        assert mean_vy < 0

    def test_burst_appends_and_consumes_generator(self, engine):
        first = particle_engine.burst(engine, CENTRE)
        second = particle_engine.burst(first, CENTRE)

        assert len(second.particles) == 2 * len(first.particles)
        assert second.particles[: len(first.particles)] == first.particles
        assert first.rng_state != engine.rng_state
        assert second.particles[-1] != first.particles[-1]

    def test_burst_does_not_mutate_input(self, engine):
        particle_engine.burst(engine, CENTRE)

        assert engine.particles == ()
        assert engine == particle_engine.init(seed=1234, settings=engine.settings)

    def test_origin_outside_viewport_spawns_nothing(self, engine):
        offscreen = BurstDistribution(mean_x=-500.0, mean_y=300.0, std_x=0.0, std_y=0.0)

        state = particle_engine.burst(engine, offscreen)

        assert state.particles == ()
        assert state.rng_state != engine.rng_state

    def test_same_seed_same_particles(self, settings):
        a = particle_engine.burst(particle_engine.init(7, settings), particle_engine.default_distribution(settings))
        b = particle_engine.burst(particle_engine.init(7, settings), particle_engine.default_distribution(settings))

        assert a == b


class TestTick:
    """Tests for the physics update."""

    def test_zero_dt_leaves_particles_unchanged(self, engine):
        state = particle_engine.burst(engine, CENTRE)
        ticked = state
        for _ in range(25):
            ticked = particle_engine.tick(ticked, 0.0)

        assert len(ticked.particles) == len(state.particles)
        assert [(p.x, p.y) for p in ticked.particles] == [(p.x, p.y) for p in state.particles]
        assert ticked.particles == state.particles

    def test_all_particles_expire_within_max_life(self, engine, settings):
        state = particle_engine.burst(engine, CENTRE)
        dt = 0.05
        steps = math.ceil(settings.max_life / dt) + 2

        for _ in range(steps):
            state = particle_engine.tick(state, dt)

        assert state.particles == ()

    def test_gravity_pulls_particles_down(self):
        settings = FireworkSettings(gravity=100.0, drag=0.0)
        particle = Particle(x=100.0, y=100.0, vx=10.0, vy=0.0, life=1.0, color="#fff", size=2.0)
        state = EngineState(particles=(particle,), rng_state=None, settings=settings)

        moved = particle_engine.tick(state, 0.5).particles[0]

        assert moved.vy == pytest.approx(50.0)
        assert moved.y == pytest.approx(125.0)
        assert moved.x == pytest.approx(105.0)
        assert moved.life == pytest.approx(0.5)

    def test_drag_slows_particles(self):
        settings = FireworkSettings(gravity=0.0, drag=1.0)
        particle = Particle(x=100.0, y=100.0, vx=100.0, vy=0.0, life=1.0, color="#fff", size=2.0)
        state = EngineState(particles=(particle,), rng_state=None, settings=settings)

        moved = particle_engine.tick(state, 0.1).particles[0]

        assert moved.vx == pytest.approx(100.0 * math.exp(-0.1))

    def test_particles_leaving_viewport_are_removed(self):
        settings = FireworkSettings(width=200.0, height=200.0)
        inside = Particle(x=100.0, y=100.0, vx=0.0, vy=0.0, life=1.0, color="#fff", size=2.0)
        falling = Particle(x=100.0, y=195.0, vx=0.0, vy=500.0, life=1.0, color="#fff", size=2.0)
        state = EngineState(particles=(inside, falling), rng_state=None, settings=settings)

        ticked = particle_engine.tick(state, 0.1)

        assert len(ticked.particles) == 1
        assert ticked.particles[0].y < 200.0

    def test_negative_dt_is_treated_as_zero(self, engine):
        state = particle_engine.burst(engine, CENTRE)

        assert particle_engine.tick(state, -1.0).particles == state.particles


def test_draw_normal_is_deterministic_and_advances(engine):
    value, after = particle_engine.draw_normal(engine, 1000.0, 250.0)
    again, _ = particle_engine.draw_normal(engine, 1000.0, 250.0)

    assert value == again
    assert after.rng_state != engine.rng_state


def test_clear_drops_particles_but_keeps_generator(engine):
    state = particle_engine.burst(engine, CENTRE)
    cleared = particle_engine.clear(state)

    assert cleared.particles == ()
    assert cleared.rng_state == state.rng_state
