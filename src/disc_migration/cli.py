# Copyright (c) 2026 Jeroen Visser. All rights reserved.
# Licensed under the MIT License — see LICENSE.
"""
Command-line interface for Type I migration runs.

Usage:
    # Propagate a scenario and write the osculating-element history
    disc-migration -i scenario.json -o history.csv --duration 1000 --step 0.01

    # Record every 100th step, with debug logging
    disc-migration -i scenario.json -o history.csv --duration 1000 --step 0.01 \
        --record-every 100 -v
"""
import argparse
import json
import logging
import sys

from disc_migration.adapters.json_config import JsonScenarioReader
from disc_migration.adapters.csv_exporter import CsvElementHistoryExporter
from disc_migration.domain.nbody_propagation import propagate_nbody
from disc_migration.domain.type_i_migration import NonFiniteAccelerationError


def run_scenario(
    input_path: str,
    output_path: str,
    duration: float,
    step: float,
    record_every: int = 1,
) -> int:
    """
    Load, propagate and export one scenario.

    Returns:
        Number of element rows written.
    """
    scenario = JsonScenarioReader().read_scenario(input_path)
    sim = scenario.simulation
    print(f"Propagating {len(sim.particles)} particles for {duration:g} (step {step:g})...")

    result = propagate_nbody(sim, [scenario.force], duration, step, record_every)
    rows = CsvElementHistoryExporter().export(result, output_path, sim.G)

    diag = scenario.force.diagnostics
    print(f"Wrote {rows} element rows to {output_path}")
    print(
        f"  {diag.evaluations} force evaluations, "
        f"{diag.degenerate_orbits} degenerate orbits, "
        f"{diag.eccentricity_clamps} eccentricity clamps, "
        f"{diag.singular_inputs} singular inputs"
    )
    return rows


def main():
    parser = argparse.ArgumentParser(
        description="Propagate an N-body system under Type I disc migration"
    )
    parser.add_argument(
        '--input', '-i', required=True,
        help="Path to scenario JSON (G, coordinates, disc, particles)"
    )
    parser.add_argument(
        '--output', '-o', required=True,
        help="Path to write the osculating-element history CSV"
    )
    parser.add_argument(
        '--duration', type=float, required=True,
        help="Total integration time (simulation units)"
    )
    parser.add_argument(
        '--step', type=float, required=True,
        help="RK4 step size (simulation units)"
    )
    parser.add_argument(
        '--record-every', type=int, default=1,
        help="Record every N-th step (default: 1)"
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true', default=False,
        help="Enable debug logging"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run_scenario(args.input, args.output, args.duration, args.step, args.record_every)
    except FileNotFoundError as e:
        print(f"Error: Scenario file not found: {e.filename}", file=sys.stderr)
        sys.exit(1)
    except json.JSONDecodeError as e:
        print(f"Error: Invalid scenario file: {e}", file=sys.stderr)
        sys.exit(1)
    except NonFiniteAccelerationError as e:
        print(f"Error: Integration aborted: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
