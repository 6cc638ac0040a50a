# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for disc profile functions (aspect ratio, surface density, planet trap)."""

import ast
import math

import pytest

from disc_migration.domain.disc_profile import (
    ASPECT_RATIO_0,
    ASPECT_RATIO_RADIUS,
    SingularDiscInputError,
    aspect_ratio,
    surface_density,
    planet_trap_factor,
)


class TestAspectRatio:

    def test_flat_disc_returns_normalization(self):
        assert aspect_ratio(0.37) == ASPECT_RATIO_0
        assert aspect_ratio(12.0, beta=0.0) == 0.02

    def test_flaring_equals_normalization_at_reference_radius(self):
        assert aspect_ratio(ASPECT_RATIO_RADIUS, beta=0.25) == pytest.approx(ASPECT_RATIO_0)

    def test_power_law(self):
        h = aspect_ratio(2.0, beta=0.5, h0=0.05, r0=1.0)
        assert h == pytest.approx(0.05 * math.sqrt(2.0))

    def test_flaring_increases_outward(self):
        assert aspect_ratio(2.0, beta=0.25) > aspect_ratio(1.0, beta=0.25)

    def test_negative_radius_rejected(self):
        with pytest.raises(SingularDiscInputError):
            aspect_ratio(-1.0)

    def test_zero_radius_with_negative_index_rejected(self):
        with pytest.raises(SingularDiscInputError):
            aspect_ratio(0.0, beta=-0.5)

    def test_singular_error_is_value_error(self):
        assert issubclass(SingularDiscInputError, ValueError)


class TestSurfaceDensity:

    def test_power_law(self):
        assert surface_density(2.0, 1e-3, 1.0) == pytest.approx(5e-4)
        assert surface_density(4.0, 1e-3, 0.5) == pytest.approx(5e-4)

    def test_unit_radius_gives_normalization(self):
        assert surface_density(1.0, 2.5e-4, 1.5) == 2.5e-4

    @pytest.mark.parametrize("r", [0.0, -0.1])
    def test_non_positive_radius_rejected(self, r):
        with pytest.raises(SingularDiscInputError):
            surface_density(r, 1e-3, 1.0)


class TestPlanetTrapFactor:
    EDGE = 0.1
    WIDTH = 0.02

    def test_far_outside_is_unity(self):
        assert planet_trap_factor(1.0, self.EDGE, self.WIDTH) == 1.0

    def test_far_inside_is_reversed(self):
        assert planet_trap_factor(0.01, self.EDGE, self.WIDTH) == -10.0

    def test_outer_boundary_is_unity(self):
        outer = self.EDGE * (1.0 + self.WIDTH)
        assert planet_trap_factor(outer, self.EDGE, self.WIDTH) == 1.0

    def test_continuous_at_outer_boundary(self):
        outer = self.EDGE * (1.0 + self.WIDTH)
        just_inside = planet_trap_factor(outer * (1.0 - 1e-9), self.EDGE, self.WIDTH)
        assert just_inside == pytest.approx(1.0, abs=1e-6)

    def test_continuous_at_inner_boundary(self):
        inner = self.EDGE * (1.0 - self.WIDTH)
        just_outside = planet_trap_factor(inner * (1.0 + 1e-9), self.EDGE, self.WIDTH)
        assert just_outside == pytest.approx(-10.0, abs=1e-6)

    def test_edge_centre_value(self):
        # Cosine argument is pi/2 at the edge itself.
        assert planet_trap_factor(self.EDGE, self.EDGE, self.WIDTH) == pytest.approx(-4.5)

    def test_monotonic_across_transition_zone(self):
        inner = self.EDGE * (1.0 - self.WIDTH)
        outer = self.EDGE * (1.0 + self.WIDTH)
        radii = [inner + (outer - inner) * k / 50 for k in range(51)]
        values = [planet_trap_factor(r, self.EDGE, self.WIDTH) for r in radii]
        assert all(b >= a for a, b in zip(values, values[1:]))
        assert all(-10.0 <= v <= 1.0 for v in values)


class TestDomainPurity:
    def test_no_external_imports(self):
        source_path = "src/disc_migration/domain/disc_profile.py"
        with open(source_path) as f:
            tree = ast.parse(f.read())
        allowed = {"math"}
        for node in ast.walk(tree):
            if isinstance(node, ast.Import):
                for alias in node.names:
                    assert alias.name.split(".")[0] in allowed, \
                        f"Forbidden import: {alias.name}"
            elif isinstance(node, ast.ImportFrom):
                if node.module:
                    top = node.module.split(".")[0]
                    assert top in allowed or top == "disc_migration", \
                        f"Forbidden import from: {node.module}"
