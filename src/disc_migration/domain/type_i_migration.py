# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Type I migration force.

Applies physical forces that orbit-average to exponential evolution of the
semimajor axis, eccentricity and inclination (Papaloizou & Larwood 2000,
Kostov et al. 2016), with timescales either set per particle or derived
from a power-law disc model with an inner-edge planet trap.

Sign convention: a positive timescale is an exponential decay, a negative
one a growth. Eccentricity damping acts radially and so conserves angular
momentum, which drags the semimajor axis along with it; eccentricity and
inclination damping also induce pericentre and nodal precession.

Uses numpy for vector arithmetic.
"""
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Sequence

import numpy as np

from disc_migration.domain.disc_profile import (
    SingularDiscInputError,
    aspect_ratio,
    planet_trap_factor,
)
from disc_migration.domain.migration_timescales import (
    clamp_torque_eccentricity,
    eccentricity_damping_timescale,
    semi_major_axis_damping_timescale,
    wave_timescale,
)
from disc_migration.domain.orbital_mechanics import (
    DegenerateOrbitError,
    OsculatingOrbit,
    Particle,
    particle_to_orbit,
)
from disc_migration.domain.parameters import CoordinateFrame, DiscParameters
from disc_migration.domain.reference_frames import apply_per_particle

logger = logging.getLogger(__name__)

REFERENCE_NAME = "primary"


class NonFiniteAccelerationError(FloatingPointError):
    """A non-finite acceleration would enter the integrator."""


@dataclass
class MigrationDiagnostics:
    """Counters for conditions handled inside force evaluation."""
    evaluations: int = 0
    degenerate_orbits: int = 0
    eccentricity_clamps: int = 0
    singular_inputs: int = 0

    def reset(self) -> None:
        self.evaluations = 0
        self.degenerate_orbits = 0
        self.eccentricity_clamps = 0
        self.singular_inputs = 0


@dataclass(frozen=True)
class DampingRates:
    """Inverse timescales per channel; 0.0 disables the channel."""
    inv_tau_a: float = 0.0
    inv_tau_e: float = 0.0
    inv_tau_inc: float = 0.0


@dataclass
class TypeIMigration:
    """Force descriptor: disc model, coordinate frame selector, diagnostics."""
    disc: DiscParameters = field(default_factory=DiscParameters)
    coordinates: Any = None
    diagnostics: MigrationDiagnostics = field(default_factory=MigrationDiagnostics)

    def accelerations(self, sim: Any, particles: Sequence[Particle]) -> np.ndarray:
        return apply_type_i_migration(sim, self, particles)


def _override_rate(tau: float, diagnostics: MigrationDiagnostics | None) -> float:
    """1/tau for a per-particle override; inf and 0 both disable the channel."""
    if math.isinf(tau):
        return 0.0
    if tau == 0.0 or math.isnan(tau):
        if diagnostics is not None:
            diagnostics.singular_inputs += 1
        logger.debug("Ignoring singular damping timescale %r", tau)
        return 0.0
    return 1.0 / tau


def resolve_damping_rates(
    g: float,
    disc: DiscParameters,
    particle: Particle,
    ms: float,
    orbit: OsculatingOrbit,
    r: float,
    diagnostics: MigrationDiagnostics | None = None,
) -> DampingRates:
    """
    Inverse damping timescales for one particle.

    Per-particle overrides take precedence over the disc model; a channel
    with neither is disabled. Inclination damping has no disc-derived
    timescale and is driven by tau_inc alone. Disc profiles are evaluated at the current
    orbital radius r, the semimajor axis enters through the wave timescale.

    Args:
        g: Gravitational constant.
        disc: Disc parameters of the force.
        particle: Particle carrying optional tau_a/tau_e/tau_inc overrides.
        ms: Mass of the reference body.
        orbit: Current osculating orbit of the particle.
        r: Current distance to the reference body.
        diagnostics: Counters for clamps and singular inputs.

    Returns:
        DampingRates for the three channels.
    """
    trap = 1.0
    if disc.has_edge:
        trap = planet_trap_factor(r, disc.inner_disc_edge, disc.disc_edge_width)

    t_wave = None
    aspect = None
    needs_disc = (particle.tau_a is None and disc.has_edge) or particle.tau_e is None
    if disc.has_wave_model and needs_disc:
        try:
            aspect = aspect_ratio(
                r, disc.aspect_ratio_index, disc.aspect_ratio_0, disc.aspect_ratio_radius,
            )
            t_wave = wave_timescale(
                particle.m, ms, orbit.a, r,
                disc.surface_density, disc.surface_density_index, aspect, g,
            )
        except SingularDiscInputError as exc:
            t_wave = None
            if diagnostics is not None:
                diagnostics.singular_inputs += 1
            logger.debug("Disc model disabled for %s: %s", particle.name or "particle", exc)

    inv_tau_a = 0.0
    if particle.tau_a is not None:
        inv_tau_a = trap * _override_rate(particle.tau_a, diagnostics)
    elif t_wave is not None and disc.has_edge:
        e_used, clamped = clamp_torque_eccentricity(orbit.e, aspect)
        if clamped:
            if diagnostics is not None:
                diagnostics.eccentricity_clamps += 1
            logger.debug("Clamped e=%.6g to %.6g for P(e) at H/r=%.6g", orbit.e, e_used, aspect)
        t_a = semi_major_axis_damping_timescale(
            t_wave, e_used, disc.surface_density_index, aspect,
        )
        inv_tau_a = trap / t_a

    inv_tau_e = 0.0
    if particle.tau_e is not None:
        inv_tau_e = _override_rate(particle.tau_e, diagnostics)
    elif t_wave is not None:
        inv_tau_e = 1.0 / eccentricity_damping_timescale(t_wave, orbit.e, aspect)

    inv_tau_inc = 0.0
    if particle.tau_inc is not None:
        inv_tau_inc = _override_rate(particle.tau_inc, diagnostics)

    return DampingRates(inv_tau_a=inv_tau_a, inv_tau_e=inv_tau_e, inv_tau_inc=inv_tau_inc)


def type_i_migration_acceleration(
    sim: Any,
    force: TypeIMigration,
    particle: Particle,
    reference: Particle,
) -> np.ndarray:
    """
    Migration and damping acceleration of one particle about its reference.

    a = −½ Δv/τ_a − 2 (Δr·Δv)/r² · Δr/τ_e − 2 Δv_z/τ_inc ẑ

    The along-track term gives da/dt = −a/τ_a; the radial term damps e at
    constant angular momentum; the vertical term damps the inclination.
    A degenerate or unbound orbit yields zero force for this substep.
    """
    diagnostics = force.diagnostics
    diagnostics.evaluations += 1

    dr = particle.position - reference.position
    dv = particle.velocity - reference.velocity
    r2 = float(np.dot(dr, dr))

    try:
        orbit = particle_to_orbit(sim.G, particle, reference)
    except DegenerateOrbitError as exc:
        diagnostics.degenerate_orbits += 1
        logger.debug("No migration force on %s: %s", particle.name or "particle", exc)
        return np.zeros(3)

    rates = resolve_damping_rates(
        sim.G, force.disc, particle, reference.m, orbit, math.sqrt(r2), diagnostics,
    )

    accel = -0.5 * rates.inv_tau_a * dv
    if rates.inv_tau_e != 0.0 or rates.inv_tau_inc != 0.0:
        vdotr = float(np.dot(dr, dv))
        accel = accel - 2.0 * vdotr / r2 * rates.inv_tau_e * dr
        accel[2] -= 2.0 * dv[2] * rates.inv_tau_inc
    return accel


def apply_type_i_migration(
    sim: Any,
    force: TypeIMigration,
    particles: Sequence[Particle],
) -> np.ndarray:
    """
    Effect entry point: accelerations for all particles, shape (N, 3).

    Resolves the coordinate frame (Jacobi when unset or unknown) and hands
    the per-particle force to the frame reduction, with back reactions on
    the reference bodies.

    Raises:
        NonFiniteAccelerationError: a component of the result is NaN or inf.
    """
    coordinates = CoordinateFrame.resolve(force.coordinates)
    accelerations = apply_per_particle(
        sim,
        force,
        coordinates,
        True,
        REFERENCE_NAME,
        type_i_migration_acceleration,
        particles,
    )
    if not np.all(np.isfinite(accelerations)):
        bad = sorted({int(i) for i in np.argwhere(~np.isfinite(accelerations))[:, 0]})
        raise NonFiniteAccelerationError(
            f"Non-finite migration acceleration for particle indices {bad}"
        )
    return accelerations
