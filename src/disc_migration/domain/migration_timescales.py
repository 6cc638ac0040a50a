# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Type I migration timescales.

Wave timescale from linear disc-planet theory (Tanaka & Ward 2004) and the
eccentricity and semimajor-axis damping timescales built on it
(Cresswell & Nelson 2008, Pichierri et al. 2018). All functions are pure;
the gravitational constant is passed explicitly.

No external dependencies — only stdlib math + domain imports.
"""
import math

from disc_migration.domain.disc_profile import (
    SingularDiscInputError,
    surface_density,
)

# P(e) denominator vanishes at e = 2.02 h; stay this fraction below it.
_PE_SINGULAR_RATIO: float = 2.02
_PE_CLAMP_FRACTION: float = 0.99


def _require_aspect(aspect: float) -> None:
    if not aspect > 0.0:
        raise SingularDiscInputError(f"aspect ratio must be positive, got {aspect}")


def wave_timescale(
    mp: float,
    ms: float,
    a: float,
    r: float,
    sigma0: float,
    alpha: float,
    aspect: float,
    g: float,
) -> float:
    """
    Characteristic disc-planet interaction timescale.

    t_wave = ms² / (mp · Σ(r) · a²) · (H/r)⁴ · sqrt(a / (G·ms))

    Args:
        mp: Mass of the perturbed body.
        ms: Central (reference) mass.
        a: Semimajor axis.
        r: Current orbital radius, where Σ is evaluated.
        sigma0: Surface density normalization Σ0.
        alpha: Surface density index α.
        aspect: Aspect ratio H/r.
        g: Gravitational constant.

    Returns:
        Wave timescale in simulation time units.
    """
    if mp <= 0.0 or ms <= 0.0:
        raise SingularDiscInputError(f"masses must be positive, got mp={mp}, ms={ms}")
    if a <= 0.0:
        raise SingularDiscInputError(f"semimajor axis must be positive, got {a}")
    if g <= 0.0:
        raise SingularDiscInputError(f"gravitational constant must be positive, got {g}")
    _require_aspect(aspect)
    sigma = surface_density(r, sigma0, alpha)
    if sigma <= 0.0:
        raise SingularDiscInputError(f"surface density must be positive, got {sigma}")
    return ms * ms / (mp * sigma * a * a) * aspect ** 4 * math.sqrt(a / (g * ms))


def eccentricity_damping_timescale(t_wave: float, e: float, aspect: float) -> float:
    """t_e = t_wave / 0.780 · (1 − 0.14 (e/h)² + 0.06 (e/h)³)."""
    _require_aspect(aspect)
    x = e / aspect
    return t_wave / 0.780 * (1.0 - 0.14 * x ** 2 + 0.06 * x ** 3)


def torque_reversal_factor(e: float, aspect: float) -> float:
    """
    Eccentricity correction P(e) to the migration torque.

    P(e) = (1 + (e/2.25h)^1.2 + (e/2.84h)^6) / (1 − (e/2.02h)^4)

    The denominator reaches zero at e = 2.02 h; inputs at or beyond it
    raise SingularDiscInputError (see clamp_torque_eccentricity).
    """
    _require_aspect(aspect)
    denominator = 1.0 - (e / (_PE_SINGULAR_RATIO * aspect)) ** 4
    if denominator <= 0.0:
        raise SingularDiscInputError(
            f"P(e) is singular for e={e} at aspect ratio {aspect}"
        )
    numerator = 1.0 + (e / (2.25 * aspect)) ** 1.2 + (e / (2.84 * aspect)) ** 6
    return numerator / denominator


def clamp_torque_eccentricity(e: float, aspect: float) -> tuple[float, bool]:
    """
    Limit e to just below the P(e) singularity.

    Returns:
        (eccentricity to use, whether it was clamped)
    """
    _require_aspect(aspect)
    limit = _PE_CLAMP_FRACTION * _PE_SINGULAR_RATIO * aspect
    if e >= limit:
        return limit, True
    return e, False


def semi_major_axis_damping_timescale(
    t_wave: float,
    e: float,
    alpha: float,
    aspect: float,
) -> float:
    """t_a = 2 t_wave / (2.7 + 1.1 α) · (H/r)² · P(e)."""
    denominator = 2.7 + 1.1 * alpha
    if denominator <= 0.0:
        raise SingularDiscInputError(f"t_a is singular for surface density index {alpha}")
    pe = torque_reversal_factor(e, aspect)
    return 2.0 * t_wave / denominator * aspect ** 2 * pe
