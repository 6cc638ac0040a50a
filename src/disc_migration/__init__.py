"""
Disc Migration

Type I migration and eccentricity/inclination damping forces for N-body
simulations. Timescales come from per-particle overrides or from a
power-law protoplanetary disc model with an inner-edge planet trap.
Includes the reference-frame reduction (Jacobi, barycentric, particle),
two-body orbit conversions, an RK4 N-body propagator, JSON scenario
loading and CSV element-history export.
"""

from disc_migration.domain.disc_profile import (
    SingularDiscInputError,
    aspect_ratio,
    surface_density,
    planet_trap_factor,
)
from disc_migration.domain.migration_timescales import (
    wave_timescale,
    eccentricity_damping_timescale,
    torque_reversal_factor,
    clamp_torque_eccentricity,
    semi_major_axis_damping_timescale,
)
from disc_migration.domain.orbital_mechanics import (
    DegenerateOrbitError,
    Particle,
    OsculatingOrbit,
    particle_to_orbit,
    orbit_to_particle,
)
from disc_migration.domain.parameters import (
    CoordinateFrame,
    DiscParameters,
)
from disc_migration.domain.reference_frames import (
    apply_per_particle,
    center_of_mass,
    com_of_pair,
)
from disc_migration.domain.type_i_migration import (
    DampingRates,
    MigrationDiagnostics,
    NonFiniteAccelerationError,
    TypeIMigration,
    apply_type_i_migration,
    resolve_damping_rates,
    type_i_migration_acceleration,
)
from disc_migration.domain.nbody_propagation import (
    Effect,
    Simulation,
    NBodySnapshot,
    NBodyPropagationResult,
    gravity_accelerations,
    propagate_nbody,
)
from disc_migration.domain.scenario import (
    Scenario,
    add_orbiting_particle,
)

__all__ = [
    "SingularDiscInputError",
    "aspect_ratio",
    "surface_density",
    "planet_trap_factor",
    "wave_timescale",
    "eccentricity_damping_timescale",
    "torque_reversal_factor",
    "clamp_torque_eccentricity",
    "semi_major_axis_damping_timescale",
    "DegenerateOrbitError",
    "Particle",
    "OsculatingOrbit",
    "particle_to_orbit",
    "orbit_to_particle",
    "CoordinateFrame",
    "DiscParameters",
    "apply_per_particle",
    "center_of_mass",
    "com_of_pair",
    "DampingRates",
    "MigrationDiagnostics",
    "NonFiniteAccelerationError",
    "TypeIMigration",
    "apply_type_i_migration",
    "resolve_damping_rates",
    "type_i_migration_acceleration",
    "Effect",
    "Simulation",
    "NBodySnapshot",
    "NBodyPropagationResult",
    "gravity_accelerations",
    "propagate_nbody",
    "Scenario",
    "add_orbiting_particle",
]
