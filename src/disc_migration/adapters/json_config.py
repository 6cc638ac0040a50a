# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
JSON scenario reader.

Reads a migration scenario (gravitational constant, coordinate frame, disc
parameters, particles) from JSON and validates it into typed records.
"""
import json
import logging
import math
from typing import Any

from disc_migration.ports import ScenarioReader
from disc_migration.domain.nbody_propagation import Simulation
from disc_migration.domain.orbital_mechanics import Particle
from disc_migration.domain.parameters import CoordinateFrame, DiscParameters
from disc_migration.domain.scenario import Scenario, add_orbiting_particle
from disc_migration.domain.type_i_migration import TypeIMigration

logger = logging.getLogger(__name__)

_TOP_LEVEL_KEYS = {"G", "coordinates", "disc", "particles"}
_CARTESIAN_KEYS = ("x", "y", "z", "vx", "vy", "vz")
_ELEMENT_KEYS = {
    "e": "e",
    "inc": "inc",
    "Omega": "omega_big",
    "omega": "omega_small",
    "f": "f",
}
_DAMPING_KEYS = ("tau_a", "tau_e", "tau_inc")
_PARTICLE_KEYS = (
    {"m", "a", "name", "primary"}
    | set(_CARTESIAN_KEYS) | set(_ELEMENT_KEYS) | set(_DAMPING_KEYS)
)


def _number(value: Any, what: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{what} must be a number, got {value!r}")
    return float(value)


def _damping_timescale(value: Any, what: str) -> float:
    tau = _number(value, what)
    if math.isnan(tau) or tau == 0.0:
        raise ValueError(f"{what} must be non-zero, got {value!r}")
    return tau


def _particle_from_entry(sim: Simulation, entry: dict[str, Any], index: int) -> Particle:
    if not isinstance(entry, dict):
        raise ValueError(f"Particle {index} must be an object, got {entry!r}")
    label = f"particle {entry.get('name', index)!r}"

    for key in entry:
        if key not in _PARTICLE_KEYS:
            logger.warning("Ignoring unknown key %r on %s", key, label)

    if "m" not in entry:
        raise ValueError(f"{label} has no mass 'm'")
    fields: dict[str, Any] = {
        "name": str(entry.get("name", "")),
        "primary": bool(entry.get("primary", False)),
    }
    for key in _DAMPING_KEYS:
        if entry.get(key) is not None:
            fields[key] = _damping_timescale(entry[key], f"{label} {key}")
    m = _number(entry["m"], f"{label} m")
    if m < 0.0:
        raise ValueError(f"{label} mass must be non-negative, got {m}")

    has_cartesian = any(key in entry for key in _CARTESIAN_KEYS)
    if "a" in entry:
        if has_cartesian:
            raise ValueError(f"{label} mixes orbital elements and Cartesian state")
        elements = {
            name: _number(entry[key], f"{label} {key}")
            for key, name in _ELEMENT_KEYS.items() if key in entry
        }
        return add_orbiting_particle(
            sim, m, _number(entry["a"], f"{label} a"), **elements, **fields,
        )

    if any(key in entry for key in _ELEMENT_KEYS):
        raise ValueError(f"{label} gives orbital elements without semimajor axis 'a'")
    state = {key: _number(entry.get(key, 0.0), f"{label} {key}") for key in _CARTESIAN_KEYS}
    particle = Particle(m=m, **state, **fields)
    sim.add(particle)
    return particle


class JsonScenarioReader(ScenarioReader):
    """Reads migration scenarios from JSON files."""

    def read_scenario(self, path: str) -> Scenario:
        with open(path, encoding='utf-8') as f:
            data = json.load(f)
        return self.parse_scenario(data)

    def parse_scenario(self, data: dict[str, Any]) -> Scenario:
        if not isinstance(data, dict):
            raise ValueError("Scenario must be a JSON object")
        for key in data:
            if key not in _TOP_LEVEL_KEYS:
                logger.warning("Ignoring unknown scenario key %r", key)

        g = _number(data.get("G", 1.0), "G")
        if g <= 0.0:
            raise ValueError(f"G must be positive, got {g}")

        disc_data = data.get("disc", {})
        if not isinstance(disc_data, dict):
            raise ValueError(f"'disc' must be an object, got {disc_data!r}")
        disc = DiscParameters.from_mapping(disc_data)

        coordinates = CoordinateFrame.resolve(data.get("coordinates"))

        entries = data.get("particles", [])
        if not isinstance(entries, list) or not entries:
            raise ValueError("Scenario needs a non-empty 'particles' list")
        sim = Simulation(G=g)
        for index, entry in enumerate(entries):
            _particle_from_entry(sim, entry, index)

        if coordinates is CoordinateFrame.PARTICLE and not any(p.primary for p in sim.particles):
            raise ValueError("Particle coordinates need at least one particle with 'primary' set")

        logger.info(
            "Loaded scenario: %d particles, %s coordinates", len(sim.particles), coordinates.value,
        )
        return Scenario(
            simulation=sim,
            force=TypeIMigration(disc=disc, coordinates=coordinates),
        )
