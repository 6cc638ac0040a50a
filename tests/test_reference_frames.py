# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""Tests for per-particle force reduction in Jacobi, barycentric and particle frames."""

import numpy as np
import pytest

from disc_migration.domain.orbital_mechanics import Particle
from disc_migration.domain.parameters import CoordinateFrame
from disc_migration.domain.reference_frames import (
    apply_per_particle,
    center_of_mass,
    com_of_pair,
)


def _offset_force(sim, force, particle, reference):
    """Acceleration equal to the offset from the reference body."""
    return particle.position - reference.position


def _system():
    return [
        Particle(m=1.0, name="star", primary=True),
        Particle(m=0.1, x=1.0, vy=1.0, name="inner"),
        Particle(m=0.2, x=-3.0, vy=-0.5, name="outer"),
    ]


def _total_momentum_change(particles, acc):
    masses = np.array([p.m for p in particles])
    return masses @ acc


class TestCenterOfMass:

    def test_mass_weighted(self):
        com = center_of_mass([Particle(m=3.0, x=0.0), Particle(m=1.0, x=4.0, vy=2.0)])
        assert com.m == 4.0
        assert com.x == pytest.approx(1.0)
        assert com.vy == pytest.approx(0.5)

    def test_pair_matches_group(self):
        a, b = Particle(m=1.0, y=1.0), Particle(m=2.0, y=-2.0)
        assert com_of_pair(a, b) == center_of_mass([a, b])

    def test_massless_group_uses_mean(self):
        com = center_of_mass([Particle(x=1.0), Particle(x=3.0)])
        assert com.m == 0.0
        assert com.x == pytest.approx(2.0)

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            center_of_mass([])


class TestJacobi:

    def test_reference_is_interior_com(self):
        ps = _system()
        acc = apply_per_particle(None, None, CoordinateFrame.JACOBI, False, "primary", _offset_force, ps)
        inner_com = com_of_pair(ps[0], ps[1])
        assert np.allclose(acc[1], ps[1].position - ps[0].position)
        assert np.allclose(acc[2], ps[2].position - inner_com.position)
        assert np.array_equal(acc[0], np.zeros(3))

    def test_back_reaction_conserves_momentum(self):
        ps = _system()
        acc = apply_per_particle(None, None, CoordinateFrame.JACOBI, True, "primary", _offset_force, ps)
        assert np.allclose(_total_momentum_change(ps, acc), 0.0, atol=1e-14)
        assert not np.array_equal(acc[0], np.zeros(3))


class TestBarycentric:

    def test_every_particle_forced_about_barycentre(self):
        ps = _system()
        acc = apply_per_particle(None, None, CoordinateFrame.BARYCENTRIC, False, "primary", _offset_force, ps)
        com = center_of_mass(ps)
        for i, p in enumerate(ps):
            assert np.allclose(acc[i], p.position - com.position)

    def test_back_reaction_conserves_momentum(self):
        ps = _system()
        acc = apply_per_particle(None, None, CoordinateFrame.BARYCENTRIC, True, "primary", _offset_force, ps)
        assert np.allclose(_total_momentum_change(ps, acc), 0.0, atol=1e-14)


class TestParticleFrame:

    def test_reference_group_not_forced_without_back_reaction(self):
        ps = _system()
        acc = apply_per_particle(None, None, CoordinateFrame.PARTICLE, False, "primary", _offset_force, ps)
        assert np.array_equal(acc[0], np.zeros(3))
        assert np.allclose(acc[2], ps[2].position - ps[0].position)

    def test_back_reaction_conserves_momentum(self):
        ps = _system()
        acc = apply_per_particle(None, None, CoordinateFrame.PARTICLE, True, "primary", _offset_force, ps)
        assert np.allclose(_total_momentum_change(ps, acc), 0.0, atol=1e-14)

    def test_missing_reference_group_rejected(self):
        ps = _system()
        ps[0].primary = False
        with pytest.raises(ValueError, match="primary"):
            apply_per_particle(None, None, CoordinateFrame.PARTICLE, True, "primary", _offset_force, ps)


class TestSnapshotIsolation:

    def test_particles_not_modified(self):
        ps = _system()
        before = [(p.x, p.y, p.z, p.vx, p.vy, p.vz) for p in ps]
        for frame in CoordinateFrame:
            apply_per_particle(None, None, frame, True, "primary", _offset_force, ps)
        assert [(p.x, p.y, p.z, p.vx, p.vy, p.vz) for p in ps] == before

    def test_empty_system(self):
        acc = apply_per_particle(None, None, CoordinateFrame.JACOBI, True, "primary", _offset_force, [])
        assert acc.shape == (0, 3)
