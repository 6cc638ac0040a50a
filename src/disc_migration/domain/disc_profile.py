# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Protoplanetary disc profile functions.

Power-law aspect ratio and surface density, and the inner-edge planet
trap that attenuates (and eventually reverses) inward Type I migration.
No external dependencies — only stdlib math.
"""
import math

# Aspect ratio normalization H0 at radius r0 (simulation units).
ASPECT_RATIO_0: float = 0.02
ASPECT_RATIO_RADIUS: float = 3.0

# Trap factor plateaus inside and outside the transition zone.
_TRAP_OUTSIDE: float = 1.0
_TRAP_INSIDE: float = -10.0


class SingularDiscInputError(ValueError):
    """Input would make a disc quantity singular (zero/negative radius etc.)."""


def aspect_ratio(
    r: float,
    beta: float = 0.0,
    h0: float = ASPECT_RATIO_0,
    r0: float = ASPECT_RATIO_RADIUS,
) -> float:
    """
    Disc aspect ratio H/r at radius r.

    H/r = h0 · (r / r0)^β, so β = 0 returns h0 exactly.

    Args:
        r: Orbital radius.
        beta: Flaring index β.
        h0: Aspect ratio at r0.
        r0: Normalization radius.

    Returns:
        Dimensionless aspect ratio.
    """
    if r < 0.0:
        raise SingularDiscInputError(f"radius must be non-negative, got {r}")
    if r == 0.0 and beta < 0.0:
        raise SingularDiscInputError(f"aspect ratio diverges at r=0 for beta={beta}")
    return h0 * (r / r0) ** beta


def surface_density(r: float, sigma0: float, alpha: float) -> float:
    """
    Disc surface density Σ(r) = Σ0 · r^(−α).

    Args:
        r: Orbital radius (must be > 0).
        sigma0: Surface density normalization Σ0.
        alpha: Power-law index α.

    Returns:
        Surface density in simulation units.
    """
    if r <= 0.0:
        raise SingularDiscInputError(f"surface density is singular at r={r}")
    return sigma0 * r ** (-alpha)


def planet_trap_factor(r: float, edge: float, width: float) -> float:
    """
    Migration-rate multiplier near the inner disc edge.

    Outside r_edge·(1+h) migration is unchanged (1). Inside r_edge·(1−h)
    the torque reverses to a strong outward push (−10). Between the two,
    a cosine whose argument runs from 0 at the outer boundary to π at the
    inner one, so both boundaries are continuous.

    Args:
        r: Orbital radius.
        edge: Inner disc edge radius r_edge.
        width: Transition half-width h as a fraction of r_edge.

    Returns:
        Rate multiplier applied to 1/tau_a.
    """
    outer = edge * (1.0 + width)
    inner = edge * (1.0 - width)
    if r >= outer:
        return _TRAP_OUTSIDE
    if r <= inner:
        return _TRAP_INSIDE
    phase = (outer - r) * math.pi / (2.0 * width * edge)
    return 5.5 * math.cos(phase) - 4.5
