# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Migration scenario: an initial system together with its migration force.
"""
from dataclasses import dataclass, field

from disc_migration.domain.nbody_propagation import Simulation
from disc_migration.domain.orbital_mechanics import Particle, orbit_to_particle
from disc_migration.domain.reference_frames import center_of_mass
from disc_migration.domain.type_i_migration import TypeIMigration


@dataclass
class Scenario:
    """Simulation plus the Type I migration force acting on it."""
    simulation: Simulation
    force: TypeIMigration = field(default_factory=TypeIMigration)


def add_orbiting_particle(sim: Simulation, m: float, a: float, **elements) -> Particle:
    """
    Append a particle on the given orbit about the centre of mass of the
    particles already in sim (Jacobi-style set-up).

    Args:
        sim: Simulation to extend; must already hold at least one particle.
        m: Mass of the new particle.
        a: Semimajor axis.
        **elements: e, inc, omega_big, omega_small, f and extra Particle
            fields (tau_a, tau_e, tau_inc, primary, name).

    Returns:
        The added particle.
    """
    if not sim.particles:
        raise ValueError("an orbiting particle needs at least one particle to orbit")
    primary = center_of_mass(sim.particles)
    particle = orbit_to_particle(sim.G, primary, m, a, **elements)
    sim.add(particle)
    return particle
