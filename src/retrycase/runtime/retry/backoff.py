"""Backoff strategies and jitter for the retry loop.

A strategy maps the current delay to the next one and never sleeps:
- ExponentialBackoff: Multiply by a factor, optionally capped
- LinearBackoff: Add a fixed increment, optionally capped
- ConstantBackoff: Always the same delay
- FunctionBackoff: Adapter for a plain ``float -> float`` function

Jitter is a separate step applied to the pause itself, drawing from one
process-wide random source that tests can replace with set_random().
"""

from __future__ import annotations

import random
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Callable, Protocol, runtime_checkable

from retrycase.foundation.config import get_settings

Delay = float | timedelta


def to_seconds(delay: Delay) -> float:
    """Normalize a float-seconds or timedelta delay to float seconds."""
    return delay.total_seconds() if isinstance(delay, timedelta) else float(delay)


@runtime_checkable
class Backoff(Protocol):
    """Protocol for delay progression between attempts."""

    def next_delay(self, current: float) -> float:
        """Delay to carry into the next round, given the one just used."""
        ...


@dataclass(frozen=True, slots=True)
class ExponentialBackoff:
    """Exponential growth: ``min(current * multiplier, max_delay)``.

    A zero current delay stays zero; seed with a positive delay to grow.
    """

    multiplier: float = 2.0
    max_delay: float | None = None

    def next_delay(self, current: float) -> float:
        d = current * self.multiplier
        return d if self.max_delay is None else min(d, self.max_delay)


@dataclass(frozen=True, slots=True)
class LinearBackoff:
    increment: float = 1.0
    max_delay: float | None = None

    def next_delay(self, current: float) -> float:
        d = current + self.increment
        return d if self.max_delay is None else min(d, self.max_delay)


@dataclass(frozen=True, slots=True)
class ConstantBackoff:
    """Fixed delay between retries, whatever the seed was."""

    delay: float = 1.0

    def next_delay(self, current: float) -> float:
        return self.delay


@dataclass(frozen=True, slots=True)
class FunctionBackoff:
    """Wraps a ``current -> next`` function as a Backoff."""

    fn: Callable[[float], float]

    def next_delay(self, current: float) -> float:
        return self.fn(current)


def as_backoff(strategy: Backoff | Callable[[float], float]) -> Backoff:
    """Accept either a Backoff or a bare function."""
    return strategy if isinstance(strategy, Backoff) else FunctionBackoff(strategy)


# ─────────────────────────────────────────────────────────────────────────────
# Random source
# ─────────────────────────────────────────────────────────────────────────────

_random: random.Random | None = None
_random_lock = threading.Lock()


def get_random() -> random.Random:
    """Process-wide random source, created on first use.

    Seeded from RETRYCASE_RETRY__SEED when configured, else from the clock.
    """
    global _random
    if _random is None:
        with _random_lock:
            if _random is None:
                seed = get_settings().retry.seed
                _random = random.Random(time.time_ns() if seed is None else seed)
    return _random


def set_random(rng: random.Random) -> None:
    global _random
    _random = rng


def reset_random() -> None:
    """Drop the shared source; the next get_random() creates a fresh one."""
    global _random
    _random = None


@dataclass(frozen=True, slots=True)
class Jitter:
    """Randomized stretch of a pause: ``delay + uniform(0, delay) * ratio``.

    The default ratio of 0.5 spreads pauses over ``[delay, 1.5 * delay)``, which
    keeps independent callers from retrying in lockstep.

    Attributes:
        ratio: Fraction of the sampled amount added to the delay
        rng: Random source (default: the shared one from get_random())
    """

    ratio: float = 0.5
    rng: random.Random | None = None

    def apply(self, delay: float) -> float:
        if delay <= 0:
            return 0.0
        return delay + (self.rng or get_random()).uniform(0, delay) * self.ratio


def default_backoff() -> ExponentialBackoff:
    """ExponentialBackoff from configured settings."""
    cfg = get_settings().retry
    return ExponentialBackoff(multiplier=cfg.multiplier, max_delay=cfg.max_delay)


def default_jitter(rng: random.Random | None = None) -> Jitter | None:
    """Jitter from configured settings, or None when disabled."""
    cfg = get_settings().retry
    return Jitter(ratio=cfg.jitter_ratio, rng=rng) if cfg.jitter else None
