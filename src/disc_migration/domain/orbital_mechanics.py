# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Orbital mechanics functions.

Particle state record and two-body conversions between Cartesian state and
osculating orbital elements, for an arbitrary gravitational parameter.
No external dependencies — only stdlib math + numpy.
"""
import math
from dataclasses import dataclass

import numpy as np


class DegenerateOrbitError(ValueError):
    """Two-body state has no bound, well-defined osculating orbit."""


@dataclass
class Particle:
    """Point mass with Cartesian state and optional damping overrides.

    tau_a, tau_e, tau_inc: exponential timescales (positive = decay),
    None when unset. primary marks membership of the reference group
    for particle-relative coordinates.
    """
    m: float = 0.0
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0
    tau_a: float | None = None
    tau_e: float | None = None
    tau_inc: float | None = None
    primary: bool = False
    name: str = ""

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z])

    @property
    def velocity(self) -> np.ndarray:
        return np.array([self.vx, self.vy, self.vz])


@dataclass(frozen=True)
class OsculatingOrbit:
    """Instantaneous two-body orbit: semimajor axis, eccentricity, inclination (rad)."""
    a: float
    e: float
    inc: float


def particle_to_orbit(g: float, particle: Particle, primary: Particle) -> OsculatingOrbit:
    """
    Osculating elements of particle relative to primary.

    Uses μ = G · (m + M). Only bound, non-radial orbits are accepted.

    Args:
        g: Gravitational constant.
        particle: Orbiting body.
        primary: Reference body (may be a centre-of-mass pseudo particle).

    Returns:
        OsculatingOrbit(a, e, inc).

    Raises:
        DegenerateOrbitError: massless pair, coincident bodies, zero angular
            momentum, unbound orbit or non-finite state.
    """
    mu = g * (particle.m + primary.m)
    if not mu > 0.0:
        raise DegenerateOrbitError(f"gravitational parameter must be positive, got {mu}")

    dr = particle.position - primary.position
    dv = particle.velocity - primary.velocity
    if not (np.all(np.isfinite(dr)) and np.all(np.isfinite(dv))):
        raise DegenerateOrbitError("non-finite relative state")

    r = float(np.linalg.norm(dr))
    if r == 0.0:
        raise DegenerateOrbitError("particle coincides with its primary")

    v2 = float(np.dot(dv, dv))
    h_vec = np.cross(dr, dv)
    h = float(np.linalg.norm(h_vec))
    if h == 0.0:
        raise DegenerateOrbitError("radial orbit has zero angular momentum")

    energy = 0.5 * v2 - mu / r
    if energy >= 0.0:
        raise DegenerateOrbitError(f"orbit is unbound (specific energy {energy:.6e})")
    a = -mu / (2.0 * energy)

    vdotr = float(np.dot(dr, dv))
    e_vec = ((v2 - mu / r) * dr - vdotr * dv) / mu
    e = float(np.linalg.norm(e_vec))
    inc = math.acos(max(-1.0, min(1.0, float(h_vec[2]) / h)))

    if not (math.isfinite(a) and math.isfinite(e)) or e >= 1.0:
        raise DegenerateOrbitError(f"invalid elements a={a}, e={e}")
    return OsculatingOrbit(a=a, e=e, inc=inc)


def orbit_to_particle(
    g: float,
    primary: Particle,
    m: float,
    a: float,
    e: float = 0.0,
    inc: float = 0.0,
    omega_big: float = 0.0,
    omega_small: float = 0.0,
    f: float = 0.0,
    **fields,
) -> Particle:
    """
    Build a particle on the orbit (a, e, inc, Ω, ω, f) about primary.

    Args:
        g: Gravitational constant.
        primary: Reference body; its state is added to the relative state.
        m: Mass of the new particle.
        a: Semimajor axis (> 0).
        e: Eccentricity (0 <= e < 1).
        inc: Inclination (radians).
        omega_big: Longitude of ascending node (radians).
        omega_small: Argument of pericentre (radians).
        f: True anomaly (radians).
        **fields: Extra Particle fields (tau_a, name, primary, ...).

    Returns:
        Particle in the primary's frame.
    """
    if a <= 0.0:
        raise ValueError(f"semimajor axis must be positive, got {a}")
    if not 0.0 <= e < 1.0:
        raise ValueError(f"eccentricity must be in [0, 1), got {e}")
    mu = g * (m + primary.m)
    if mu <= 0.0:
        raise ValueError(f"gravitational parameter must be positive, got {mu}")

    cos_f = math.cos(f)
    sin_f = math.sin(f)
    p = a * (1.0 - e ** 2)
    r = p / (1.0 + e * cos_f)

    p_factor = math.sqrt(mu / p)
    pos_pqw = np.array([r * cos_f, r * sin_f, 0.0])
    vel_pqw = np.array([-p_factor * sin_f, p_factor * (e + cos_f), 0.0])

    cO = math.cos(omega_big)
    sO = math.sin(omega_big)
    co = math.cos(omega_small)
    so = math.sin(omega_small)
    ci = math.cos(inc)
    si = math.sin(inc)

    rotation = np.array([
        [cO * co - sO * so * ci, -cO * so - sO * co * ci, sO * si],
        [sO * co + cO * so * ci, -sO * so + cO * co * ci, -cO * si],
        [so * si, co * si, ci],
    ])

    pos = rotation @ pos_pqw + primary.position
    vel = rotation @ vel_pqw + primary.velocity

    return Particle(
        m=m,
        x=float(pos[0]), y=float(pos[1]), z=float(pos[2]),
        vx=float(vel[0]), vy=float(vel[1]), vz=float(vel[2]),
        **fields,
    )
