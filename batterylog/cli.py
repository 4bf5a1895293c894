import argparse
import json

from batterylog.config import resolve_block_size, resolve_log_dir
from batterylog.helper.logging import configure_logging
from batterylog.reader import read_battery_stats
from batterylog.report import render_text

EX_OK = 0
EX_NOT_FOUND = 1


def _print_json(payload) -> None:
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def build_parser() -> argparse.ArgumentParser:
    default_log_dir = resolve_log_dir()
    p = argparse.ArgumentParser(
        prog="batterylog",
        description="Read battery first use date, health and charge cycles from device logs",
    )
    p.add_argument(
        "--log-dir",
        default=default_log_dir,
        help=f"Device log directory (default: {default_log_dir})",
    )
    p.add_argument("--format", choices=["text", "json"], default="text")
    p.add_argument(
        "--block-size",
        type=int,
        default=None,
        help="Bytes read per backward step in the history file "
        "(default: BATTERYLOG_BLOCK_SIZE or 8192)",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (-vv for debug)",
    )
    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    if args.block_size is None:
        try:
            args.block_size = resolve_block_size()
        except ValueError as exc:
            parser.error(str(exc))
    elif args.block_size <= 0:
        parser.error("--block-size must be positive")

    result = read_battery_stats(args.log_dir, block_size=args.block_size)

    if args.format == "json":
        _print_json(result.to_dict())
    elif result.success:
        for line in render_text(result.stats):
            print(line)
        print(f"Source: {result.source}")
    else:
        print(
            "No battery information found in "
            f"{args.log_dir}. Run a dumpstate first."
        )

    return EX_OK if result.success else EX_NOT_FOUND


if __name__ == "__main__":
    raise SystemExit(main())
