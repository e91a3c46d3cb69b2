"""CLI / headless entry point for the portfolio projection.

Usage
-----
Run with a JSON configuration file:
    python -m fpd --config portfolio.json --output projection.csv

Dump an example configuration file:
    python -m fpd --example

Override individual fields on the command line:
    python -m fpd --config portfolio.json --set years=20 --set growth_rate=6.5

The JSON file is either a bare object of ``Configuration`` fields or an
object with those fields under a ``"config"`` key.  See --example for all
supported keys and their default values.

Values outside the supported domain are clamped before projecting (years to
0-100, rates to -100..100%, dollar amounts to at least 0) with a warning on
stderr, so the projection that runs may differ from the one requested.
"""

from __future__ import annotations

import argparse
import json
import sys
import warnings
from pathlib import Path

from fpd.core.config import Configuration, default_config_dict

_CLAMP_NOTE = (
    "Before projecting, inputs are clamped: negative balances, contributions, expenses and "
    "down payment become 0, years is kept within 0-100, and growth_rate and inflation_rate "
    "within -100..100 (percent). Each adjustment is reported on stderr as a warning."
)


def _build_example() -> dict:
    """Return a complete example configuration file."""
    return {
        "_comment": (
            "Family portfolio projection file. Balances and contributions are in dollars; "
            "growth_rate and inflation_rate are percents."
        ),
        "config": default_config_dict(),
    }


def _coerce(raw: str) -> bool | int | float | str:
    # int -> float -> bool -> str
    try:
        return int(raw)
    except ValueError:
        pass
    try:
        return float(raw)
    except ValueError:
        pass
    if raw.lower() in ("true", "false"):
        return raw.lower() == "true"
    return raw


def _apply_overrides(d: dict, overrides: list[str]) -> dict:
    """Apply --set key=value overrides to the config dict."""
    known = set(Configuration.field_names())
    for kv in overrides or []:
        if "=" not in kv:
            print(f"Warning: ignoring malformed --set argument (expected key=value): {kv!r}", file=sys.stderr)
            continue
        key, _, raw = kv.partition("=")
        key = key.strip()
        if key not in known:
            print(f"Warning: ignoring unknown config key in --set: {key!r}", file=sys.stderr)
            continue
        d[key] = _coerce(raw.strip())
    return d


def _load_config_file(path: Path) -> dict:
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    if not isinstance(data, dict):
        raise ValueError("config file must contain a JSON object")
    cfg = data.get("config", data)
    if not isinstance(cfg, dict):
        raise ValueError("'config' must be a JSON object")
    return cfg


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="python -m fpd",
        description="Family Portfolio Dashboard — headless/CLI projection.",
        epilog=_CLAMP_NOTE,
    )
    parser.add_argument(
        "--config", "-c",
        metavar="FILE",
        help="Path to a JSON configuration file. Use --example to generate a template.",
    )
    parser.add_argument(
        "--output", "-o",
        metavar="FILE",
        default="-",
        help="Output file path. Use '-' (default) to print to stdout.",
    )
    parser.add_argument(
        "--set", "-s",
        dest="overrides",
        metavar="key=value",
        action="append",
        help="Override a configuration field. Repeat for multiple overrides. Out-of-range values are clamped (see below).",
    )
    parser.add_argument(
        "--example",
        action="store_true",
        help="Print an example JSON configuration file and exit.",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output a summary as JSON instead of the CSV time-series.",
    )

    args = parser.parse_args(argv)

    if args.example:
        print(json.dumps(_build_example(), indent=2))
        return 0

    cfg_dict = default_config_dict()
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: config file not found: {config_path}", file=sys.stderr)
            return 1
        try:
            user_cfg = _load_config_file(config_path)
        except (OSError, ValueError) as exc:
            print(f"Error: could not read config file {config_path}: {exc}", file=sys.stderr)
            return 1
        unknown = sorted(k for k in user_cfg if k not in cfg_dict and not str(k).startswith("_"))
        for key in unknown:
            print(f"Warning: ignoring unknown config key: {key!r}", file=sys.stderr)
        cfg_dict.update(user_cfg)

    _apply_overrides(cfg_dict, args.overrides)

    try:
        config = Configuration.from_dict(cfg_dict)
    except ValueError as exc:
        print(f"Config error: {exc}", file=sys.stderr)
        return 1

    # Deferred so --example works without heavy deps installed.
    try:
        from fpd.core.engine import projection_frame, run_projection
        from fpd.core.summary import summarize
        from fpd.core.validation import get_validation_warnings, sanitize_config
    except ImportError as exc:
        print(f"Error importing engine: {exc}", file=sys.stderr)
        print("Ensure all dependencies are installed: pip install -e .", file=sys.stderr)
        return 1

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        config = sanitize_config(config)
    for w in caught:
        print(f"Warning: {w.message}", file=sys.stderr)
    for msg in get_validation_warnings(config):
        print(f"Warning: {msg}", file=sys.stderr)

    print(
        f"Running projection: {config.base_year}–{config.base_year + config.years}, "
        f"growth={config.growth_rate:g}%, inflation={config.inflation_rate:g}%, "
        f"down payment=${config.down_payment:,.0f} in {config.down_payment_year}",
        file=sys.stderr,
    )

    result = run_projection(config)
    summary = summarize(config, result.rows)

    if args.json:
        payload = {
            "horizon_years": config.years,
            "summary": summary.to_dict(),
            "down_payment": result.withdrawal.to_dict() if result.withdrawal else None,
            "final_row": result.rows[-1].to_dict(),
        }
        output = json.dumps(payload, indent=2)
        if args.output == "-":
            print(output)
        else:
            Path(args.output).write_text(output + "\n")
        return 0

    # Default: CSV output
    csv_str = projection_frame(result.rows).to_csv(index=False)
    if args.output == "-":
        print(csv_str, end="")
    else:
        out_path = Path(args.output)
        out_path.write_text(csv_str)
        print(f"Results written to {out_path}", file=sys.stderr)

    return 0


if __name__ == "__main__":
    sys.exit(main())
