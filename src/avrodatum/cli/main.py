"""Main CLI entry point for avrodatum."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from .. import __version__
from ..cli.analyze import analyze_file, load_schema
from ..codec import RecordSchema, decode, encode_datum, extract_fields
from ..exceptions import AvrodatumError


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the avrodatum CLI.

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    parser = argparse.ArgumentParser(
        description="avrodatum: Avro Datum Codec",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  avrodatum --analyze rec.avsc                              Show schema field layout
  avrodatum --schema rec.avsc --encode '{"id": 1, "label": "a"}'
  avrodatum --schema rec.avsc --decode 020261
  avrodatum --schema rec.avsc --decode 020261 --fields id
        """,
    )

    parser.add_argument(
        "--analyze",
        metavar="FILE",
        type=str,
        help="Analyze a record schema and show its field layout",
    )
    parser.add_argument(
        "--schema",
        metavar="FILE",
        type=str,
        help="Record schema used by --encode and --decode",
    )

    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--encode",
        metavar="JSON",
        type=str,
        help="Encode a JSON object and print the datum as hex",
    )
    action.add_argument(
        "--decode",
        metavar="HEX",
        type=str,
        help="Decode a hex datum and print it as JSON",
    )

    parser.add_argument(
        "--fields",
        metavar="NAMES",
        type=str,
        help="Comma-separated fields to print (--decode only)",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Reject a trailing padding byte (--decode only)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"avrodatum {__version__}",
    )

    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    # Handle --analyze
    if args.analyze:
        file_path = Path(args.analyze)
        if not file_path.exists():
            print(f"Error: File not found: {file_path}", file=sys.stderr)
            return 1

        try:
            analyze_file(file_path)
            return 0
        except AvrodatumError as e:
            print(f"Error analyzing schema: {e}", file=sys.stderr)
            return 1

    if args.encode is not None or args.decode is not None:
        if not args.schema:
            print("Error: --schema is required for --encode and --decode", file=sys.stderr)
            return 1
        if args.encode is not None and (args.fields or args.strict):
            print("Error: --fields and --strict apply to --decode only", file=sys.stderr)
            return 1

        schema_path = Path(args.schema)
        if not schema_path.exists():
            print(f"Error: File not found: {schema_path}", file=sys.stderr)
            return 1

        try:
            schema = load_schema(schema_path)
            if args.encode is not None:
                return _run_encode(schema, args.encode)
            return _run_decode(schema, args.decode, args.fields, args.strict)
        except AvrodatumError as e:
            print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
            return 1

    # If no command specified, show help
    parser.print_help()
    return 0


def _run_encode(schema: RecordSchema, payload: str) -> int:
    try:
        values = json.loads(payload)
    except json.JSONDecodeError as e:
        print(f"Error: invalid JSON: {e}", file=sys.stderr)
        return 1
    if not isinstance(values, dict):
        print("Error: --encode expects a JSON object", file=sys.stderr)
        return 1

    print(encode_datum(schema, values).hex())
    return 0


def _run_decode(schema: RecordSchema, hex_data: str, fields: str | None, strict: bool) -> int:
    try:
        data = bytes.fromhex(hex_data)
    except ValueError as e:
        print(f"Error: invalid hex: {e}", file=sys.stderr)
        return 1

    if fields:
        names = [name.strip() for name in fields.split(",") if name.strip()]
        result = extract_fields(schema, data, names, tolerate_padding=not strict)
    else:
        result = decode(schema, data, tolerate_padding=not strict).to_dict()

    print(json.dumps(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
