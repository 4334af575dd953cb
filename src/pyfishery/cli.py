"""
Run a PyFishery simulation from the command line.

Usage:
    pyfishery --effort 10 --catchability 0.01 --steps 200

Or from a parameter file, saving the time series and a summary plot:
    pyfishery --params fishery.csv --output run.csv --plot run
"""

import argparse
import logging
import sys
from typing import List, Optional

from pyfishery.config import DEFAULTS, DISPLAY
from pyfishery.core.analysis import (
    export_fishery_to_dataframe,
    reference_points,
    summarize_fishery_output,
)
from pyfishery.core.errors import SimulationError, ValidationError
from pyfishery.core.params import (
    EffortBased,
    QuotaBased,
    check_fishery_params,
    create_fishery_params,
    read_fishery_params,
)
from pyfishery.core.simulation import fishery_run
from pyfishery.logger import configure_file_logging, get_logger, set_console_level

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_SIMULATION_ERROR = 1
EXIT_VALIDATION_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pyfishery",
        description="Simulate a single fished stock with logistic growth",
    )
    parser.add_argument("--params", help="Read parameters from a CSV file")
    parser.add_argument("--growth-rate", type=float, default=DEFAULTS.intrinsic_growth_rate,
                        help="Intrinsic growth rate r")
    parser.add_argument("--capacity", type=float, default=DEFAULTS.carrying_capacity,
                        help="Carrying capacity K")
    parser.add_argument("--initial-stock", type=float, default=DEFAULTS.initial_stock,
                        help="Initial stock")
    parser.add_argument("--mortality", type=float, default=DEFAULTS.natural_mortality_rate,
                        help="Natural mortality rate per step")
    parser.add_argument("--catchability", type=float, default=DEFAULTS.catchability_coefficient,
                        help="Catchability coefficient q")

    policy = parser.add_mutually_exclusive_group()
    policy.add_argument("--effort", type=float, help="Fish at constant effort")
    policy.add_argument("--quota", type=float, help="Fish to a constant quota per step")

    parser.add_argument("--noise", type=float, default=DEFAULTS.recruitment_noise_stddev,
                        help="Recruitment noise standard deviation")
    parser.add_argument("--seed", type=int, default=DEFAULTS.random_seed, help="Random seed")
    parser.add_argument("--steps", type=int, default=DEFAULTS.max_steps,
                        help="Maximum number of steps")
    parser.add_argument("--output", help="Write step records to this CSV file")
    parser.add_argument("--plot", help="Save a summary plot (file name without extension)")
    parser.add_argument("--show-records", action="store_true",
                        help="Print the first step records as a table")
    parser.add_argument("--log-dir", help="Also write a debug log file to this directory")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def _params_from_args(args: argparse.Namespace):
    if args.params:
        return read_fishery_params(args.params)

    if args.quota is not None:
        fishing_policy = QuotaBased(quota=args.quota)
    else:
        effort = args.effort if args.effort is not None else DEFAULTS.effort
        fishing_policy = EffortBased(effort=effort)

    return create_fishery_params(
        intrinsic_growth_rate=args.growth_rate,
        carrying_capacity=args.capacity,
        initial_stock=args.initial_stock,
        fishing_policy=fishing_policy,
        max_steps=args.steps,
        natural_mortality_rate=args.mortality,
        catchability_coefficient=args.catchability,
        recruitment_noise_stddev=args.noise,
        random_seed=args.seed,
    )


def _print_summary(output) -> None:
    summary = summarize_fishery_output(output)
    refs = reference_points(output.params)
    places = DISPLAY.decimal_places

    print(f"\n{'='*50}")
    print("  PyFishery run summary")
    print(f"{'='*50}")
    print(f"  Steps executed : {summary.steps}")
    print(f"  Final stock    : {summary.stock_end:.{places}f}")
    print(f"  Total catch    : {summary.total_catch:.{places}f}")
    print(f"  Mean catch     : {summary.mean_catch:.{places}f} (MSY {refs.msy:.{places}f})")
    print(f"  Stock change   : {summary.stock_change * 100:.1f}%")
    if summary.collapsed:
        print(f"  Collapsed at step {summary.collapse_step}")
    print()


def _print_records(output) -> None:
    table = export_fishery_to_dataframe(output).rename(columns=DISPLAY.column_labels)
    print(table.head(DISPLAY.table_max_rows).round(DISPLAY.decimal_places).to_string())
    if len(table) > DISPLAY.table_max_rows:
        print(f"... ({len(table) - DISPLAY.table_max_rows} more steps)")
    print()


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        set_console_level(logging.DEBUG)
    if args.log_dir:
        configure_file_logging(args.log_dir)

    try:
        params = _params_from_args(args)
    except ValidationError as err:
        print(err, file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    check_fishery_params(params, warn=True)

    try:
        output = fishery_run(params)
    except SimulationError as err:
        logger.error("Simulation failed: %s", err)
        print(f"Simulation failed: {err}", file=sys.stderr)
        return EXIT_SIMULATION_ERROR

    _print_summary(output)

    if args.show_records:
        _print_records(output)

    if args.output:
        export_fishery_to_dataframe(output).to_csv(args.output)
        logger.info("Wrote %d step records to %s", output.steps_executed, args.output)

    if args.plot:
        # Imported here so plain runs do not pay for matplotlib
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        from pyfishery.core.plotting import plot_fishery_summary, save_plots

        fig = plot_fishery_summary(output)
        save_plots(fig, args.plot)
        plt.close(fig)
        logger.info("Saved summary plot to %s.png", args.plot)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
