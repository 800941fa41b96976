# src/validator_explorer/cli.py
# SPDX-License-Identifier: MIT

"""
validator-explorer command line
===============================

  validator-explorer table    [--query "versions=3.1.8&sfdp=participant"] [--output FILE]
  validator-explorer versions [--query ...]
  validator-explorer options
  validator-explorer convert  [KEY ...]            (keys from stdin when none given)

Common options: --snapshot PATH, --offline (skip registry fetches),
--timeout SECONDS. Environment variables are documented in config.py.

The table view goes to stdout as CSV; "# " summary lines go to stderr.
"""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Optional, Tuple

from . import __version__
from .aggregate import (
    asn_options,
    client_options,
    data_center_options,
    participation_states,
    stake_summary,
    version_groups,
)
from .asn import asn_display
from .config import Settings, load_settings
from .convert import convert_keys, split_keys
from .enrich import merge
from .export import export_csv
from .filters import FilterState, apply_filters
from .query import decode, encode, parse_query_string, to_query_string
from .records import ValidatorRecord, load_snapshot
from .sorting import SortState, sort_records
from .sources import EnrichmentTables, fetch_enrichment

logger = logging.getLogger(__name__)

COMMANDS = ("table", "versions", "options", "convert")


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--snapshot", help="validator snapshot JSON (env SNAPSHOT_PATH)")
    common.add_argument("--offline", action="store_true", help="do not fetch registries")
    common.add_argument("--timeout", type=float, help="per-registry timeout in seconds (env TIMEOUT_S)")
    common.add_argument("-v", "--verbose", action="count", default=0)

    p = argparse.ArgumentParser(prog="validator-explorer", description="Validator table explorer")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command", required=True)

    t = sub.add_parser("table", parents=[common], help="filtered, sorted table as CSV")
    t.add_argument("--query", default="", help="URL query string with the filter/sort state")
    t.add_argument("--output", help="write CSV to this file instead of stdout")

    v = sub.add_parser("versions", parents=[common], help="stake by minor group and version")
    v.add_argument("--query", default="", help="URL query string with the filter state")

    sub.add_parser("options", parents=[common], help="filter choices with their share of total stake")

    c = sub.add_parser("convert", parents=[common], help="convert identity <-> vote keys")
    c.add_argument("keys", nargs="*")
    return p


def _settings_from(args: argparse.Namespace) -> Settings:
    s = load_settings()
    if args.snapshot:
        s = replace(s, snapshot_path=args.snapshot)
    if args.timeout and args.timeout > 0:
        s = replace(s, timeout_s=args.timeout)
    return s


def _configure_logging(settings: Settings, verbose: int) -> None:
    level = logging.DEBUG if verbose > 1 else logging.INFO if verbose else settings.log_level
    logging.basicConfig(level=level, stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")


def load_records(settings: Settings, offline: bool = False) -> List[ValidatorRecord]:
    snapshot = load_snapshot(settings.snapshot_path)
    if offline:
        tables = EnrichmentTables({}, {}, {})
    else:
        tables = fetch_enrichment(settings)
    return merge(snapshot, tables.names, tables.participation, tables.infra)


def _view(records: List[ValidatorRecord], query: str) -> Tuple[List[ValidatorRecord], FilterState, SortState]:
    filters, sort = decode(parse_query_string(query))
    return sort_records(apply_filters(records, filters), sort), filters, sort


# ---------------------------
# Commands
# ---------------------------
def cmd_table(args: argparse.Namespace, records: List[ValidatorRecord]) -> int:
    rows, filters, sort = _view(records, args.query)
    summary = stake_summary(rows, records)
    print(f"# validators {len(rows)}/{len(records)}", file=sys.stderr)
    print(f"# matching stake {summary.matching_percentage}%  participant stake {summary.participant_percentage}%",
          file=sys.stderr)
    print(f"# query ?{to_query_string(encode(filters, sort))}", file=sys.stderr)

    content, note = export_csv(rows, records)
    if content is None:
        print(f"# {note.message}", file=sys.stderr)
        return 1
    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        print(f"# {note.message} → {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(content)
    return 0


def cmd_versions(args: argparse.Namespace, records: List[ValidatorRecord]) -> int:
    rows, _, _ = _view(records, args.query)
    for g in version_groups(rows, records):
        print(f"{g.group:<10} {g.stake_percentage:>7}%")
        for v in g.versions:
            print(f"  {v.key:<20} {v.stake_percentage:>7}%")
    return 0


def cmd_options(args: argparse.Namespace, records: List[ValidatorRecord]) -> int:
    print("participation")
    for state in participation_states(records):
        print(f"  {state}")
    print("clients")
    for s in client_options(records):
        print(f"  {s.key:<24} {s.stake_percentage:>7}%")
    print("asns")
    for s in asn_options(records):
        label = asn_display(int(s.key)) if s.key.isdigit() else s.key
        print(f"  {label:<24} {s.stake_percentage:>7}%")
    print("datacenters")
    for s in data_center_options(records):
        print(f"  {s.key:<24} {s.stake_percentage:>7}%")
    return 0


def cmd_convert(args: argparse.Namespace, records: List[ValidatorRecord]) -> int:
    keys = args.keys or split_keys(sys.stdin.read())
    report = convert_keys(keys, records)
    if not report.ok:
        print(f"ERROR: {report.error}", file=sys.stderr)
        return 1
    print(f"# converting to {report.direction} keys", file=sys.stderr)
    for r in report.results:
        if r.is_error:
            print(f"# {r.original_key}: {r.error_message}", file=sys.stderr)
    print(report.as_text())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv or argv[0] not in COMMANDS and argv[0] not in ("-h", "--help", "--version"):
        argv = ["table"] + argv
    args = build_parser().parse_args(argv)

    settings = _settings_from(args)
    _configure_logging(settings, args.verbose)
    # convert only needs the keys, not names or SFDP data
    records = load_records(settings, offline=args.offline or args.command == "convert")

    if args.command == "versions":
        return cmd_versions(args, records)
    if args.command == "options":
        return cmd_options(args, records)
    if args.command == "convert":
        return cmd_convert(args, records)
    return cmd_table(args, records)


# ---------------------------
# Entrypoint
# ---------------------------
def run() -> None:
    try:
        code = main()
    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        sys.exit(2)
    sys.exit(code)


if __name__ == "__main__":
    run()
