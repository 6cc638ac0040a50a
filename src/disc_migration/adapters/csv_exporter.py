# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
CSV element-history exporter.

Writes Jacobi osculating elements of every orbiting particle at every
recorded step. External dependencies (csv, file I/O) are confined to this
adapter.
"""
import csv
import logging

from disc_migration.ports import ElementHistoryExporter
from disc_migration.domain.nbody_propagation import NBodyPropagationResult
from disc_migration.domain.orbital_mechanics import DegenerateOrbitError, particle_to_orbit
from disc_migration.domain.reference_frames import com_of_pair

logger = logging.getLogger(__name__)

_HEADER = ['time', 'particle', 'name', 'a', 'e', 'inc']


class CsvElementHistoryExporter(ElementHistoryExporter):
    """Exports osculating-element histories to CSV."""

    def export(self, result: NBodyPropagationResult, path: str, g: float) -> int:
        rows = 0
        warned: set[int] = set()
        with open(path, 'w', newline='', encoding='utf-8') as f:
            writer = csv.writer(f)
            writer.writerow(_HEADER)

            for snapshot in result.steps:
                if not snapshot.particles:
                    continue
                com = snapshot.particles[0]
                for index, particle in enumerate(snapshot.particles[1:], start=1):
                    try:
                        orbit = particle_to_orbit(g, particle, com)
                        elements = [f'{orbit.a:.12g}', f'{orbit.e:.12g}', f'{orbit.inc:.12g}']
                    except DegenerateOrbitError as exc:
                        if index not in warned:
                            logger.warning(
                                "Particle %d has no bound orbit at t=%g (%s); "
                                "leaving elements empty", index, snapshot.time, exc,
                            )
                            warned.add(index)
                        elements = ['', '', '']
                    writer.writerow([f'{snapshot.time:.12g}', index, particle.name, *elements])
                    rows += 1
                    com = com_of_pair(com, particle)
        return rows
