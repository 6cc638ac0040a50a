# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Port interfaces for scenario and result file I/O.

Adapters implement these to handle different file formats.
"""
from typing import Protocol, runtime_checkable

from disc_migration.domain.nbody_propagation import NBodyPropagationResult
from disc_migration.domain.scenario import Scenario


@runtime_checkable
class ScenarioReader(Protocol):
    """Port for reading a migration scenario."""

    def read_scenario(self, path: str) -> Scenario:
        """Read and validate a scenario file."""
        ...


@runtime_checkable
class ElementHistoryExporter(Protocol):
    """Port for writing osculating-element histories."""

    def export(self, result: NBodyPropagationResult, path: str, g: float) -> int:
        """Write one row per recorded particle state; return the row count."""
        ...
