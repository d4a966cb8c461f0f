"""
powermap - Command Line Entry Point

Maintenance tool for the SASS power component mapping: verify that a
specification builds, look up mnemonics, and print the merged table.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from powermap.classification import (
    CANONICAL_GROUPS,
    ClassificationTable,
    Generation,
    PowerComponent,
)
from powermap.config import LOG_LEVEL
from powermap.errors import DuplicateEntry, MalformedMapping
from powermap.records import groups_from_records, records_from_table


def _load_groups(records_path: Optional[str]):
    """Canonical groups, or groups read from a JSON list of rows."""
    if records_path is None:
        return CANONICAL_GROUPS

    with open(Path(records_path)) as f:
        rows = json.load(f)
    if not isinstance(rows, list):
        raise ValueError(f"{records_path}: expected a JSON list of rows")
    return groups_from_records(rows)


def cmd_check(args: argparse.Namespace, console: Console) -> int:
    """Build the table and report per-component counts."""
    try:
        groups = _load_groups(args.records)
    except (OSError, ValueError, ValidationError) as e:
        console.print(f"❌ Could not load specification: {e}", markup=False, highlight=False)
        return 1

    try:
        table = ClassificationTable(groups).build()
    except (MalformedMapping, DuplicateEntry) as e:
        console.print(f"❌ Specification rejected: {e}", markup=False, highlight=False)
        return 1

    summary = Table(title=f"{len(table)} opcodes from {len(table.groups)} generation groups")
    summary.add_column("Component", style="cyan")
    summary.add_column("Opcodes", justify="right")
    summary.add_column("Datapath")
    for component, count in table.summary().items():
        summary.add_row(component.name, str(count), component.description)

    console.print(summary)
    console.print("✅ Specification OK")
    return 0


def cmd_classify(args: argparse.Namespace, console: Console) -> int:
    """Print the component of each mnemonic given on the command line."""
    table = ClassificationTable(strict=False).build()
    for mnemonic in args.mnemonics:
        component = table.classify(mnemonic)
        console.print(f"{mnemonic:<20} {component.name}", markup=False, highlight=False)
    return 0


def cmd_dump(args: argparse.Namespace, console: Console) -> int:
    """Print the merged table, optionally filtered."""
    table = ClassificationTable().build()
    records = records_from_table(table)

    if args.component:
        component = PowerComponent(args.component)
        records = [r for r in records if r.component is component]
    if args.generation:
        generation = Generation(args.generation)
        records = [r for r in records if r.generation is generation]

    if args.json:
        print(json.dumps([r.model_dump(mode='json') for r in records], indent=2))
        return 0

    out = Table(title=f"{len(records)} opcodes")
    out.add_column("Opcode", style="cyan")
    out.add_column("Component")
    out.add_column("Generation")
    for r in records:
        out.add_row(r.opcode.value, r.component.name, r.generation.name)
    console.print(out)
    return 0


def main(argv=None):
    """CLI entry point"""
    parser = argparse.ArgumentParser(
        description='SASS opcode to power component mapping',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Verify the built-in mapping
  powermap check

  # Verify a mapping supplied as JSON rows
  powermap check --records rows.json

  # Look up mnemonics (modifiers are ignored)
  powermap classify FFMA IMAD.WIDE HMMA.16816.F32

  # All tensor core opcodes as JSON
  powermap dump --component tensor --json
        """
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    check = subparsers.add_parser('check', help='Build the mapping and report counts')
    check.add_argument(
        '--records', '-r',
        type=str,
        default=None,
        help='JSON file with a list of {opcode, component, generation} rows'
    )
    check.set_defaults(func=cmd_check)

    classify = subparsers.add_parser('classify', help='Look up the component of mnemonics')
    classify.add_argument('mnemonics', nargs='+', help='SASS mnemonics')
    classify.set_defaults(func=cmd_classify)

    dump = subparsers.add_parser('dump', help='Print the merged mapping')
    dump.add_argument(
        '--component', '-c',
        choices=[c.value for c in PowerComponent],
        default=None,
        help='Only opcodes charged to this component'
    )
    dump.add_argument(
        '--generation', '-g',
        choices=[g.value for g in Generation],
        default=None,
        help='Only opcodes introduced by this generation'
    )
    dump.add_argument('--json', action='store_true', help='Print rows as JSON')
    dump.set_defaults(func=cmd_dump)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    return args.func(args, Console())


if __name__ == '__main__':
    sys.exit(main())
