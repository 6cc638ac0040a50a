# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Reference-body selection for per-particle forces.

Reduces an N-body state to one two-body problem per particle, choosing the
reference body according to the coordinate frame:

- Jacobi: centre of mass of all particles interior to the particle
- Barycentric: centre of mass of the whole system
- Particle: centre of mass of the particles flagged as the reference group

The per-particle force is accumulated into a fresh (N, 3) buffer. With back
reactions enabled the reference group receives the mass-weighted opposite
acceleration, so the total momentum is unchanged.

No external dependencies — only stdlib + numpy.
"""
from typing import Any, Callable, Sequence

import numpy as np

from disc_migration.domain.orbital_mechanics import Particle
from disc_migration.domain.parameters import CoordinateFrame

PerParticleForce = Callable[[Any, Any, Particle, Particle], np.ndarray]


def center_of_mass(particles: Sequence[Particle]) -> Particle:
    """Pseudo particle at the centre of mass, carrying the total mass.

    Massless groups fall back to the arithmetic mean of the states.
    """
    if not particles:
        raise ValueError("centre of mass of an empty particle set")
    masses = np.array([p.m for p in particles])
    total = float(masses.sum())
    weights = masses / total if total > 0.0 else np.full(len(particles), 1.0 / len(particles))
    pos = weights @ np.array([p.position for p in particles])
    vel = weights @ np.array([p.velocity for p in particles])
    return Particle(
        m=total,
        x=float(pos[0]), y=float(pos[1]), z=float(pos[2]),
        vx=float(vel[0]), vy=float(vel[1]), vz=float(vel[2]),
    )


def com_of_pair(p1: Particle, p2: Particle) -> Particle:
    return center_of_mass((p1, p2))


def _accumulate(
    accelerations: np.ndarray,
    index: int,
    accel: np.ndarray,
    group: Sequence[int],
    mass: float,
    reference_mass: float,
    back_reactions_inclusive: bool,
) -> None:
    accelerations[index] += accel
    if back_reactions_inclusive and reference_mass > 0.0:
        mass_ratio = mass / reference_mass
        for j in group:
            accelerations[j] -= mass_ratio * accel


def apply_per_particle(
    sim: Any,
    force: Any,
    coordinates: CoordinateFrame,
    back_reactions_inclusive: bool,
    reference_name: str,
    force_fn: PerParticleForce,
    particles: Sequence[Particle],
) -> np.ndarray:
    """
    Evaluate force_fn for every eligible particle against its reference body.

    Args:
        sim: Simulation context passed through to force_fn.
        force: Force descriptor passed through to force_fn.
        coordinates: Frame that selects the reference body.
        back_reactions_inclusive: Apply the opposite reaction to the
            reference group.
        reference_name: Particle attribute marking the reference group in
            particle-relative coordinates.
        force_fn: f(sim, force, particle, reference) -> acceleration (3,).
        particles: Snapshot of the system; never modified.

    Returns:
        (N, 3) array of accumulated accelerations.
    """
    n = len(particles)
    accelerations = np.zeros((n, 3))
    if n == 0:
        return accelerations

    if coordinates is CoordinateFrame.JACOBI:
        com = particles[0]
        for i in range(1, n):
            p = particles[i]
            accel = np.asarray(force_fn(sim, force, p, com), dtype=float)
            _accumulate(accelerations, i, accel, range(i), p.m, com.m, back_reactions_inclusive)
            com = com_of_pair(com, p)

    elif coordinates is CoordinateFrame.BARYCENTRIC:
        com = center_of_mass(particles)
        for i, p in enumerate(particles):
            accel = np.asarray(force_fn(sim, force, p, com), dtype=float)
            _accumulate(accelerations, i, accel, range(n), p.m, com.m, back_reactions_inclusive)

    elif coordinates is CoordinateFrame.PARTICLE:
        group = [i for i, p in enumerate(particles) if getattr(p, reference_name, False)]
        if not group:
            raise ValueError(
                f"particle coordinates require at least one particle with {reference_name!r} set"
            )
        com = center_of_mass([particles[j] for j in group])
        members = set(group)
        for i, p in enumerate(particles):
            if i in members:
                continue
            accel = np.asarray(force_fn(sim, force, p, com), dtype=float)
            _accumulate(accelerations, i, accel, group, p.m, com.m, back_reactions_inclusive)

    else:
        raise ValueError(f"Unsupported coordinate frame: {coordinates!r}")

    return accelerations
