"""Best Save command line entry point.

    best-save plan --prices prices.yaml [--last-value off --last-count 12]
    best-save check --sequence sequence.yaml --max-minutes-off 30

``plan`` prints the computed schedule as JSON on stdout. ``check`` prints
``valid`` or ``invalid`` and exits with 0 or 1. Configuration errors and
unreadable input exit with 2. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from best_save import __version__
from best_save.config.schema import AppConfig
from best_save.logging.context import bind_context, run_context
from best_save.logging.structured import setup_logging
from best_save.optimisation.optimiser import optimise
from best_save.optimisation.plan import build_plan
from best_save.optimisation.sequence import is_valid_for
from best_save.optimisation.trailing import trailing_from_config
from best_save.settings import load_settings

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INVALID = 1
EXIT_ERROR = 2

_CONSTRAINT_FLAGS = (
    "max_minutes_off",
    "min_minutes_off",
    "recovery_percentage",
    "recovery_max_minutes",
    "min_saving",
)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default="config.yaml")
    common.add_argument("--defaults", default="config.defaults.yaml")
    common.add_argument("--log-level", default=None, help="Overrides logging.level")

    constraints = common.add_argument_group("constraint overrides")
    constraints.add_argument("--max-minutes-off", type=int)
    constraints.add_argument("--min-minutes-off", type=int)
    constraints.add_argument("--recovery-percentage", type=float)
    constraints.add_argument("--recovery-max-minutes", type=int)
    constraints.add_argument("--min-saving", type=float)

    trailing = common.add_argument_group("previous period")
    trailing.add_argument("--last-value", choices=["on", "off"])
    trailing.add_argument("--last-count", type=int)

    parser = argparse.ArgumentParser(prog="best-save", description="Price-driven off-period planner.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command", required=True)
    plan = sub.add_parser(
        "plan", parents=[common], help="Compute an on/off schedule for a price series"
    )
    plan.add_argument("--prices", required=True, type=Path, help="YAML/JSON list of prices")
    check = sub.add_parser(
        "check", parents=[common], help="Check an on/off sequence against the constraints"
    )
    check.add_argument("--sequence", required=True, type=Path, help="YAML/JSON list of on/off values")
    return parser.parse_args(argv)


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    constraints = {
        name: getattr(args, name) for name in _CONSTRAINT_FLAGS if getattr(args, name) is not None
    }
    if constraints:
        overrides["constraints"] = constraints
    trailing: dict[str, Any] = {}
    if args.last_value is not None:
        trailing["last_value"] = args.last_value == "on"
    if args.last_count is not None:
        trailing["last_count"] = args.last_count
    if trailing:
        overrides["trailing"] = trailing
    if args.log_level:
        overrides["logging"] = {"level": args.log_level}
    return overrides


def _load_list(path: Path) -> list[Any]:
    """Read a YAML or JSON list, optionally wrapped as {"values": [...]}."""
    with open(path) as f:
        data = yaml.safe_load(f)
    if isinstance(data, dict):
        data = data.get("values", data.get("prices"))
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a list of values")
    return data


def load_prices(path: Path) -> list[float]:
    prices = []
    for i, item in enumerate(_load_list(path)):
        if isinstance(item, dict):
            item = item.get("value", item.get("price"))
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise ValueError(f"{path}: price #{i} is not a number: {item!r}")
        prices.append(float(item))
    return prices


def load_sequence(path: Path) -> list[bool]:
    sequence = []
    for i, item in enumerate(_load_list(path)):
        if isinstance(item, bool):
            sequence.append(item)
        elif item in (0, 1):
            sequence.append(bool(item))
        else:
            raise ValueError(f"{path}: slot #{i} is not an on/off value: {item!r}")
    return sequence


def run_plan(config: AppConfig, prices_path: Path) -> int:
    prices = load_prices(prices_path)
    bind_context(slots=len(prices))
    trailing = trailing_from_config(config.trailing)
    on_off = optimise(prices, config.constraints, trailing)
    plan = build_plan(prices, on_off)
    logger.info(
        "Plan ready: %d/%d slots off, estimated saving %.4f",
        plan.off_slots,
        plan.total_slots,
        plan.total_saving,
    )
    json.dump(plan.to_dict(), sys.stdout, indent=2)
    sys.stdout.write("\n")
    return EXIT_OK


def run_check(config: AppConfig, sequence_path: Path) -> int:
    sequence = load_sequence(sequence_path)
    bind_context(slots=len(sequence))
    trailing = trailing_from_config(config.trailing)
    valid = is_valid_for([*trailing, *sequence], config.constraints.rules())
    logger.info("Sequence is %s", "valid" if valid else "invalid")
    print("valid" if valid else "invalid")
    return EXIT_OK if valid else EXIT_INVALID


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(level=args.log_level or "INFO", fmt="console")

    with run_context(command=args.command):
        try:
            config = load_settings(
                defaults_path=Path(args.defaults),
                user_path=Path(args.config),
                overrides=_overrides(args),
            )
        except (ValidationError, yaml.YAMLError) as e:
            logger.error("Invalid configuration: %s", e)
            return EXIT_ERROR

        setup_logging(config.logging.level, config.logging.format, config.logging.file)

        try:
            if args.command == "plan":
                return run_plan(config, args.prices)
            return run_check(config, args.sequence)
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error("Cannot read input: %s", e)
            return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
