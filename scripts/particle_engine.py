#!/usr/bin/env python3
"""
Firework particle engine.

All operations are pure: an ``EngineState`` carries the live particles and the
serialized state of its random generator, and every function returns a new
state instead of mutating the old one. Two engines seeded alike and fed the
same calls end up bit-identical.

Coordinates are CSS pixels with y growing downwards, so "up" is negative y.
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, replace
from typing import Any, Tuple


@dataclass(frozen=True)
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    life: float
    color: str
    size: float


@dataclass(frozen=True)
class BurstDistribution:
    """Independent normal distributions for the burst origin on each axis."""

    mean_x: float
    mean_y: float
    std_x: float
    std_y: float


@dataclass(frozen=True)
class FireworkSettings:
    """Physics and appearance tunables."""

    particles_per_burst: int = 48
    min_speed: float = 60.0
    max_speed: float = 220.0
    lift: float = 90.0
    gravity: float = 160.0
    drag: float = 0.8
    min_life: float = 0.8
    max_life: float = 2.4
    min_size: float = 1.5
    max_size: float = 3.5
    width: float = 1600.0
    height: float = 900.0
    palette: Tuple[str, ...] = (
        "#f97316",
        "#facc15",
        "#22d3ee",
        "#a78bfa",
        "#f472b6",
        "#4ade80",
    )

    def contains(self, x: float, y: float) -> bool:
        return 0.0 <= x <= self.width and 0.0 <= y <= self.height


DEFAULT_SETTINGS = FireworkSettings()


@dataclass(frozen=True)
class EngineState:
    particles: Tuple[Particle, ...]
    rng_state: Any
    settings: FireworkSettings = DEFAULT_SETTINGS


def _restore(state: EngineState) -> random.Random:
    rng = random.Random()
    rng.setstate(state.rng_state)
    return rng


def init(seed: int, settings: FireworkSettings = DEFAULT_SETTINGS) -> EngineState:
    """Create an empty engine with a freshly seeded generator."""
    return EngineState(
        particles=(),
        rng_state=random.Random(seed).getstate(),
        settings=settings,
    )


def default_distribution(settings: FireworkSettings = DEFAULT_SETTINGS) -> BurstDistribution:
    """Bursts centred horizontally in the upper third of the viewport."""
    return BurstDistribution(
        mean_x=settings.width / 2,
        mean_y=settings.height / 3,
        std_x=settings.width / 6,
        std_y=settings.height / 10,
    )


def draw_normal(state: EngineState, mean: float, std: float) -> Tuple[float, EngineState]:
    """Sample N(mean, std) from the engine's generator."""
    rng = _restore(state)
    value = rng.gauss(mean, std)
    return value, replace(state, rng_state=rng.getstate())


def _spawn(rng: random.Random, x: float, y: float, settings: FireworkSettings) -> Particle:
    angle = rng.uniform(0.0, 2.0 * math.pi)
    speed = rng.uniform(settings.min_speed, settings.max_speed)
    return Particle(
        x=x,
        y=y,
        vx=speed * math.cos(angle),
        vy=speed * math.sin(angle) - settings.lift,
        life=rng.uniform(settings.min_life, settings.max_life),
        color=rng.choice(settings.palette),
        size=rng.uniform(settings.min_size, settings.max_size),
    )


def burst(state: EngineState, distribution: BurstDistribution) -> EngineState:
    """
    Spawn one burst of particles at an origin sampled from ``distribution``.

    An origin outside the viewport spawns nothing; the samples are still
    drawn so the generator sequence does not depend on where bursts land.
    """
    settings = state.settings
    rng = _restore(state)
    x = rng.gauss(distribution.mean_x, distribution.std_x)
    y = rng.gauss(distribution.mean_y, distribution.std_y)

    if not settings.contains(x, y):
        return replace(state, rng_state=rng.getstate())

    spawned = tuple(
        _spawn(rng, x, y, settings) for _ in range(settings.particles_per_burst)
    )
    return replace(
        state,
        particles=state.particles + spawned,
        rng_state=rng.getstate(),
    )


def _advance(particle: Particle, dt: float, settings: FireworkSettings) -> Particle:
    damping = math.exp(-settings.drag * dt)
    vx = particle.vx * damping
    vy = (particle.vy + settings.gravity * dt) * damping
    return replace(
        particle,
        x=particle.x + vx * dt,
        y=particle.y + vy * dt,
        vx=vx,
        vy=vy,
        life=particle.life - dt,
    )


def tick(state: EngineState, dt: float) -> EngineState:
    """
    Advance every particle by ``dt`` seconds and drop the expired ones.

    Particles that leave the viewport are removed, never clamped. A negative
    ``dt`` (a host clock stepping backwards) is treated as no time passing.
    """
    dt = max(0.0, dt)
    settings = state.settings
    survivors = []
    for particle in state.particles:
        moved = _advance(particle, dt, settings)
        if moved.life > 0 and settings.contains(moved.x, moved.y):
            survivors.append(moved)
    return replace(state, particles=tuple(survivors))


def clear(state: EngineState) -> EngineState:
    return replace(state, particles=())
