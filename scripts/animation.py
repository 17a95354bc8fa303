#!/usr/bin/env python3
"""
Fireworks animation scheduling.

The animation is a reducer: ``update(state, event)`` returns the next state
plus the timer commands the host should arm. Route changes, resizes, timer
expiries and animation frames all flow through it, so a seeded session fed
the same events always produces the same particles.

While the page is eligible (home route, wide viewport) a timer fires every
second. Each firing schedules one burst after a normally distributed delay.
When the page stops being eligible the timer generation is bumped; timer and
burst events from an older generation still arrive but are ignored.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union
from urllib.parse import urlsplit

import particle_engine
from config import SITE, LayoutConstants, setup_logging
from particle_engine import EngineState, FireworkSettings

logger = setup_logging("animation")


@dataclass(frozen=True)
class SchedulerSettings:
    interval_ms: float = 1000.0
    delay_mean_ms: float = 1000.0
    delay_std_ms: float = 250.0


@dataclass(frozen=True)
class Location:
    """Current route: a path plus optional query string and fragment."""

    path: str = "/"
    query: str = ""
    fragment: str = ""

    @classmethod
    def parse(cls, url: str) -> "Location":
        parts = urlsplit(url)
        return cls(path=parts.path or "/", query=parts.query, fragment=parts.fragment)

    @property
    def normalized_path(self) -> str:
        return "/" + self.path.strip("/")

    @property
    def directory(self) -> str:
        """First path segment, empty for the root."""
        return self.path.strip("/").split("/", 1)[0]


def should_animate(
    location: Location,
    viewport_width: Optional[float],
    layout: LayoutConstants = SITE.layout,
    home_route: str = SITE.home_route,
) -> bool:
    """Fireworks run only on the home page and only on wide viewports."""
    if viewport_width is None:
        return False
    if location.normalized_path != Location(path=home_route).normalized_path:
        return False
    return viewport_width > layout.animation_threshold


# Events


@dataclass(frozen=True)
class RouteChanged:
    location: Location
    at_ms: float = 0.0


@dataclass(frozen=True)
class Resized:
    width: Optional[float]
    at_ms: float = 0.0


@dataclass(frozen=True)
class TimerFired:
    generation: int
    at_ms: float = 0.0


@dataclass(frozen=True)
class BurstDue:
    generation: int
    at_ms: float = 0.0


@dataclass(frozen=True)
class FrameTick:
    dt_ms: float
    at_ms: float = 0.0


Event = Union[RouteChanged, Resized, TimerFired, BurstDue, FrameTick]


# Commands


@dataclass(frozen=True)
class ArmTimer:
    at_ms: float
    generation: int


@dataclass(frozen=True)
class ScheduleBurst:
    at_ms: float
    generation: int


Command = Union[ArmTimer, ScheduleBurst]


@dataclass(frozen=True)
class AnimationState:
    engine: EngineState
    location: Location = field(default_factory=Location)
    viewport_width: Optional[float] = None
    active: bool = False
    generation: int = 0
    layout: LayoutConstants = SITE.layout
    scheduler: SchedulerSettings = SchedulerSettings()

    @property
    def particles(self) -> Tuple[particle_engine.Particle, ...]:
        return self.engine.particles


def initial_state(
    seed: int,
    location: Optional[Location] = None,
    viewport_width: Optional[float] = None,
    layout: LayoutConstants = SITE.layout,
    settings: FireworkSettings = particle_engine.DEFAULT_SETTINGS,
    scheduler: SchedulerSettings = SchedulerSettings(),
) -> Tuple[AnimationState, List[Command]]:
    """Build the session's starting state and the commands it needs armed."""
    state = AnimationState(
        engine=particle_engine.init(seed, settings),
        location=location or Location(),
        viewport_width=viewport_width,
        layout=layout,
        scheduler=scheduler,
    )
    return _reconcile(state, 0.0)


def _reconcile(state: AnimationState, at_ms: float) -> Tuple[AnimationState, List[Command]]:
    """Start or stop the timer when the animate predicate flips."""
    wanted = should_animate(state.location, state.viewport_width, state.layout)
    if wanted == state.active:
        return state, []

    generation = state.generation + 1
    if wanted:
        logger.debug(f"Fireworks enabled (generation {generation})")
        state = replace(state, active=True, generation=generation)
        return state, [ArmTimer(at_ms + state.scheduler.interval_ms, generation)]

    logger.debug(f"Fireworks disabled (generation {generation})")
    state = replace(
        state,
        active=False,
        generation=generation,
        engine=particle_engine.clear(state.engine),
    )
    return state, []


def _is_current(state: AnimationState, generation: int) -> bool:
    return state.active and generation == state.generation


def update(state: AnimationState, event: Event) -> Tuple[AnimationState, List[Command]]:
    """Apply one event and return the new state plus commands to arm."""
    if isinstance(event, RouteChanged):
        return _reconcile(replace(state, location=event.location), event.at_ms)

    if isinstance(event, Resized):
        return _reconcile(replace(state, viewport_width=event.width), event.at_ms)

    if isinstance(event, TimerFired):
        if not _is_current(state, event.generation):
            logger.debug(f"Ignoring stale timer (generation {event.generation})")
            return state, []
        delay, engine = particle_engine.draw_normal(
            state.engine,
            state.scheduler.delay_mean_ms,
            state.scheduler.delay_std_ms,
        )
        commands: List[Command] = [
            ScheduleBurst(event.at_ms + max(0.0, delay), state.generation),
            ArmTimer(event.at_ms + state.scheduler.interval_ms, state.generation),
        ]
        return replace(state, engine=engine), commands

    if isinstance(event, BurstDue):
        if not _is_current(state, event.generation):
            logger.debug(f"Suppressing burst from generation {event.generation}")
            return state, []
        distribution = particle_engine.default_distribution(state.engine.settings)
        return replace(state, engine=particle_engine.burst(state.engine, distribution)), []

    if isinstance(event, FrameTick):
        if not state.active:
            return state, []
        return replace(state, engine=particle_engine.tick(state.engine, event.dt_ms / 1000.0)), []

    raise TypeError(f"unknown animation event {event!r}")


class AnimationSession:
    """
    Host event loop on a virtual millisecond clock.

    Commands returned by ``update`` become timed events in a queue. Ties are
    delivered in the order they were scheduled.
    """

    def __init__(
        self,
        seed: int,
        url: str = "/",
        viewport_width: Optional[float] = None,
        layout: LayoutConstants = SITE.layout,
        settings: FireworkSettings = particle_engine.DEFAULT_SETTINGS,
        scheduler: SchedulerSettings = SchedulerSettings(),
    ):
        self.now_ms = 0.0
        self._queue: List[Tuple[float, int, Event]] = []
        self._sequence = itertools.count()
        self.state, commands = initial_state(
            seed,
            location=Location.parse(url),
            viewport_width=viewport_width,
            layout=layout,
            settings=settings,
            scheduler=scheduler,
        )
        self._schedule(commands)

    @property
    def pending(self) -> int:
        return len(self._queue)

    @property
    def active(self) -> bool:
        return self.state.active

    def _schedule(self, commands: List[Command]):
        for command in commands:
            if isinstance(command, ArmTimer):
                event: Event = TimerFired(command.generation, at_ms=command.at_ms)
            else:
                event = BurstDue(command.generation, at_ms=command.at_ms)
            heapq.heappush(self._queue, (command.at_ms, next(self._sequence), event))

    def dispatch(self, event: Event) -> AnimationState:
        self.state, commands = update(self.state, event)
        self._schedule(commands)
        return self.state

    def navigate(self, url: str) -> AnimationState:
        return self.dispatch(RouteChanged(Location.parse(url), at_ms=self.now_ms))

    def resize(self, width: Optional[float]) -> AnimationState:
        return self.dispatch(Resized(width, at_ms=self.now_ms))

    def advance_to(self, until_ms: float) -> AnimationState:
        """Deliver every queued timer event due at or before ``until_ms``."""
        while self._queue and self._queue[0][0] <= until_ms:
            due_ms, _, event = heapq.heappop(self._queue)
            self.now_ms = max(self.now_ms, due_ms)
            self.dispatch(event)
        self.now_ms = max(self.now_ms, until_ms)
        return self.state

    def run(self, until_ms: float, frame_ms: float = 16.0) -> AnimationState:
        """Interleave timer delivery with animation frames until ``until_ms``."""
        while self.now_ms < until_ms:
            frame_end = min(self.now_ms + frame_ms, until_ms)
            elapsed = frame_end - self.now_ms
            self.advance_to(frame_end)
            self.dispatch(FrameTick(elapsed, at_ms=self.now_ms))
        return self.state
