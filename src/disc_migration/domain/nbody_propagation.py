# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
N-body propagation with RK4 and pluggable effects.

Pairwise Newtonian gravity plus any number of additional effects (such as
the Type I migration force), summed at every RK4 stage. Each stage hands
the effects a freshly built particle snapshot, so no effect ever sees a
partially advanced state.

No external dependencies — only stdlib + numpy + domain imports.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Callable, Protocol, Sequence, runtime_checkable

import numpy as np

from disc_migration.domain.orbital_mechanics import Particle


# --- Types ---

@runtime_checkable
class Effect(Protocol):
    """Structural typing port for additional accelerations."""

    def accelerations(self, sim: Any, particles: Sequence[Particle]) -> np.ndarray: ...


@dataclass
class Simulation:
    """System state: gravitational constant, time and particles."""
    G: float = 1.0
    t: float = 0.0
    particles: list[Particle] = field(default_factory=list)

    def add(self, particle: Particle) -> None:
        self.particles.append(particle)


@dataclass(frozen=True)
class NBodySnapshot:
    """System state at one recorded time."""
    time: float
    particles: tuple[Particle, ...]


@dataclass(frozen=True)
class NBodyPropagationResult:
    """Complete result of an N-body propagation run."""
    steps: tuple[NBodySnapshot, ...]
    duration: float
    effect_names: tuple[str, ...]


# --- Forces ---

def gravity_accelerations(g: float, particles: Sequence[Particle]) -> np.ndarray:
    """Pairwise Newtonian accelerations, shape (N, 3)."""
    n = len(particles)
    acc = np.zeros((n, 3))
    if n < 2:
        return acc
    pos = np.array([p.position for p in particles])
    masses = np.array([p.m for p in particles])
    for i in range(n - 1):
        d = pos[i + 1:] - pos[i]
        r2 = np.einsum("ij,ij->i", d, d)
        if np.any(r2 == 0.0):
            raise ValueError(f"particle {i} coincides with another particle")
        inv_r3 = g / (r2 * np.sqrt(r2))
        acc[i] += (masses[i + 1:] * inv_r3) @ d
        acc[i + 1:] -= (masses[i] * inv_r3)[:, None] * d
    return acc


# --- State packing ---

def _pack(particles: Sequence[Particle]) -> np.ndarray:
    return np.concatenate([np.concatenate([p.position, p.velocity]) for p in particles])


def _unpack(template: Sequence[Particle], state: np.ndarray) -> tuple[Particle, ...]:
    rows = state.reshape(len(template), 6)
    return tuple(
        replace(
            p,
            x=float(row[0]), y=float(row[1]), z=float(row[2]),
            vx=float(row[3]), vy=float(row[4]), vz=float(row[5]),
        )
        for p, row in zip(template, rows)
    )


# --- RK4 integrator ---

def rk4_step(
    t: float,
    state: np.ndarray,
    h: float,
    deriv_fn: Callable[[float, np.ndarray], np.ndarray],
) -> tuple[float, np.ndarray]:
    """Single 4th-order Runge-Kutta integration step.

    Args:
        t: Current time.
        state: Current state vector.
        h: Step size.
        deriv_fn: Derivative function f(t, state) -> d(state)/dt.

    Returns:
        (t_new, state_new)
    """
    k1 = deriv_fn(t, state)
    k2 = deriv_fn(t + 0.5 * h, state + 0.5 * h * k1)
    k3 = deriv_fn(t + 0.5 * h, state + 0.5 * h * k2)
    k4 = deriv_fn(t + h, state + h * k3)
    return (t + h, state + (h / 6.0) * (k1 + 2.0 * k2 + 2.0 * k3 + k4))


# --- Main propagation function ---

def propagate_nbody(
    sim: Simulation,
    effects: Sequence[Effect],
    duration: float,
    step: float,
    record_every: int = 1,
) -> NBodyPropagationResult:
    """Numerical integration of gravity plus summed effect accelerations.

    The simulation passed in is not modified; the final state is the last
    recorded snapshot.

    Args:
        sim: Initial system.
        effects: Additional accelerations, evaluated at every RK4 stage.
        duration: Total propagation time.
        step: Integration step.
        record_every: Record a snapshot every this many steps (the first
            and last steps are always recorded).
    """
    if step <= 0.0:
        raise ValueError(f"step must be positive, got {step}")
    if duration < 0.0:
        raise ValueError(f"duration must be non-negative, got {duration}")
    if record_every < 1:
        raise ValueError(f"record_every must be >= 1, got {record_every}")

    template = tuple(sim.particles)
    n = len(template)
    effect_names = tuple(type(e).__name__ for e in effects)

    def deriv_fn(t: float, sv: np.ndarray) -> np.ndarray:
        snapshot = _unpack(template, sv)
        acc = gravity_accelerations(sim.G, snapshot)
        for effect in effects:
            acc = acc + effect.accelerations(sim, snapshot)
        rows = sv.reshape(n, 6)
        return np.hstack([rows[:, 3:], acc]).ravel()

    state = _pack(template) if n else np.zeros(0)
    t = sim.t
    num_steps = int(round(duration / step))

    steps: list[NBodySnapshot] = [NBodySnapshot(time=t, particles=_unpack(template, state))]
    for i in range(1, num_steps + 1):
        t, state = rk4_step(t, state, step, deriv_fn)
        if i % record_every == 0 or i == num_steps:
            steps.append(NBodySnapshot(time=t, particles=_unpack(template, state)))

    return NBodyPropagationResult(
        steps=tuple(steps),
        duration=num_steps * step,
        effect_names=effect_names,
    )
