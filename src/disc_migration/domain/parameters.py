# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Typed configuration records for the Type I migration force.

Disc parameters are optional individually; a missing one disables the
disc-derived timescales that depend on it. Values are validated once,
when the record is built, not on every force evaluation.
"""
import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping

from disc_migration.domain.disc_profile import ASPECT_RATIO_0, ASPECT_RATIO_RADIUS

logger = logging.getLogger(__name__)

# Keys of the flat key/value parameter store used in scenario files.
DISC_PARAMETER_KEYS: dict[str, str] = {
    "inner_disc_edge": "inner_disc_edge",
    "disc_edge_width": "disc_edge_width",
    "beta": "aspect_ratio_index",
    "alpha": "surface_density_index",
    "initial_disc_surface_density": "surface_density",
    "aspect_ratio_0": "aspect_ratio_0",
    "aspect_ratio_radius": "aspect_ratio_radius",
}


class CoordinateFrame(Enum):
    JACOBI = "jacobi"
    BARYCENTRIC = "barycentric"
    PARTICLE = "particle"

    @classmethod
    def resolve(cls, value: Any) -> "CoordinateFrame":
        """Interpret a frame selector; None or unknown values give JACOBI.

        Accepts an enum member, its string value (any case) or the integer
        index 0/1/2 in declaration order.
        """
        if value is None:
            return cls.JACOBI
        if isinstance(value, cls):
            return value
        if isinstance(value, int) and not isinstance(value, bool):
            members = list(cls)
            if 0 <= value < len(members):
                return members[value]
        elif isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        logger.warning("Unknown coordinate frame %r, falling back to Jacobi", value)
        return cls.JACOBI


def _check_finite(name: str, value: float | None) -> None:
    if value is not None and not math.isfinite(value):
        raise ValueError(f"{name} must be finite, got {value}")


@dataclass(frozen=True)
class DiscParameters:
    """Disc model parameters attached to the force.

    inner_disc_edge: inner edge radius r_edge
    disc_edge_width: transition half-width h (fraction of r_edge)
    aspect_ratio_index: flaring index β of H/r
    surface_density_index: power-law index α of Σ
    surface_density: normalization Σ0
    """
    inner_disc_edge: float | None = None
    disc_edge_width: float | None = None
    aspect_ratio_index: float = 0.0
    surface_density_index: float | None = None
    surface_density: float | None = None
    aspect_ratio_0: float = ASPECT_RATIO_0
    aspect_ratio_radius: float = ASPECT_RATIO_RADIUS

    def __post_init__(self) -> None:
        for name in (
            "inner_disc_edge", "disc_edge_width", "aspect_ratio_index",
            "surface_density_index", "surface_density",
            "aspect_ratio_0", "aspect_ratio_radius",
        ):
            _check_finite(name, getattr(self, name))
        if self.inner_disc_edge is not None and self.inner_disc_edge <= 0.0:
            raise ValueError(f"inner_disc_edge must be positive, got {self.inner_disc_edge}")
        if self.disc_edge_width is not None and not 0.0 < self.disc_edge_width < 1.0:
            raise ValueError(f"disc_edge_width must be in (0, 1), got {self.disc_edge_width}")
        if self.surface_density_index is not None and self.surface_density_index < 0.0:
            raise ValueError(
                f"surface_density_index must be non-negative, got {self.surface_density_index}"
            )
        if self.surface_density is not None and self.surface_density <= 0.0:
            raise ValueError(f"surface_density must be positive, got {self.surface_density}")
        if self.aspect_ratio_0 <= 0.0:
            raise ValueError(f"aspect_ratio_0 must be positive, got {self.aspect_ratio_0}")
        if self.aspect_ratio_radius <= 0.0:
            raise ValueError(f"aspect_ratio_radius must be positive, got {self.aspect_ratio_radius}")

    @property
    def has_wave_model(self) -> bool:
        """Surface density profile fully specified."""
        return self.surface_density is not None and self.surface_density_index is not None

    @property
    def has_edge(self) -> bool:
        return self.inner_disc_edge is not None and self.disc_edge_width is not None

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> "DiscParameters":
        """Build from flat parameter-store keys.

        Unknown keys are logged and ignored; values must be numeric.
        """
        kwargs: dict[str, float] = {}
        for key, value in params.items():
            field_name = DISC_PARAMETER_KEYS.get(key)
            if field_name is None:
                logger.warning("Ignoring unknown disc parameter %r", key)
                continue
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ValueError(f"Disc parameter {key!r} must be a number, got {value!r}")
            kwargs[field_name] = float(value)
        return cls(**kwargs)
