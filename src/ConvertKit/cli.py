# ============================================================================
# ConvertKit - Command Line Interface
#
# Purpose: CLI entry point for one-off conversions
# Inputs: Command-line arguments, stdin
# Outputs: Converted text or bytes on stdout
# Dependencies: argparse, config, numeric, encoding, serialization
# Usage: python -m ConvertKit.cli parse int64 9876543210
#        python -m ConvertKit.cli transcode --from json --to xml data.json
#
# Changelog:
#   2026-03-10: Initial CLI with parse / encode / decode / transcode commands
#   2026-03-11: --config and --log-level global flags; config drives JSON
#               indentation and XML pretty printing for transcode
#   2026-03-16: Logging is reconfigured on every run so --log-level always applies
# ============================================================================

import argparse
import sys
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from ConvertKit import __version__
from ConvertKit.config import Config
from ConvertKit.encoding import from_base64, from_hex, to_base64, to_hex
from ConvertKit.errors import ConvertKitError
from ConvertKit.logging_utils import get_logger, setup_logging
from ConvertKit.numeric import (
    from_bool,
    from_float64,
    from_int,
    from_int64,
    from_uint64,
    to_bool,
    to_float64,
    to_int,
    to_int64,
    to_uint64,
)
from ConvertKit.serialization import from_json, from_xml, to_json, to_xml

logger = get_logger(__name__)

# kind -> (parse, format)
PARSERS: Dict[str, Tuple[Callable[[str], Any], Callable[[Any], str]]] = {
    "int": (to_int, from_int),
    "int64": (to_int64, from_int64),
    "uint64": (to_uint64, from_uint64),
    "float64": (to_float64, from_float64),
    "bool": (to_bool, from_bool),
}

ENCODERS: Dict[str, Callable[[bytes], str]] = {"base64": to_base64, "hex": to_hex}
DECODERS: Dict[str, Callable[[str], bytes]] = {"base64": from_base64, "hex": from_hex}


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="convertkit",
        description="Convert between text, numbers, byte encodings, JSON and XML",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file (default: configs/default.yaml if present)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Override the configured log level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse a numeric or boolean literal and print its canonical form",
    )
    parse_parser.add_argument("kind", choices=sorted(PARSERS), help="Literal type")
    parse_parser.add_argument("text", type=str, help="Literal to parse")

    encode_parser = subparsers.add_parser(
        "encode",
        help="Encode text (UTF-8) or stdin bytes as Base64 or hex",
    )
    encode_parser.add_argument("format", choices=sorted(ENCODERS), help="Target encoding")
    encode_parser.add_argument("text", nargs="?", default=None, help="Text to encode (default: read stdin)")

    decode_parser = subparsers.add_parser(
        "decode",
        help="Decode Base64 or hex text to raw bytes on stdout",
    )
    decode_parser.add_argument("format", choices=sorted(DECODERS), help="Source encoding")
    decode_parser.add_argument("text", nargs="?", default=None, help="Encoded text (default: read stdin)")

    transcode_parser = subparsers.add_parser(
        "transcode",
        help="Convert a JSON or XML document to the other (or same) format",
    )
    transcode_parser.add_argument("--from", dest="source", choices=["json", "xml"], required=True)
    transcode_parser.add_argument("--to", dest="target", choices=["json", "xml"], required=True)
    transcode_parser.add_argument(
        "--root",
        type=str,
        default=None,
        help="Root element name for XML output (default: xml.root_tag from config)",
    )
    transcode_parser.add_argument("file", nargs="?", default=None, help="Input file (default: read stdin)")

    return parser


def load_config(args: argparse.Namespace) -> Config:
    """Load config from --config or the default location, then apply --log-level."""
    config = Config.from_yaml(args.config) if args.config else Config.from_default()
    if args.log_level:
        config.logging.level = args.log_level
    setup_logging(config.logging.level, config.logging.format, force=True)
    return config


def _read_stdin_text() -> str:
    return sys.stdin.read().strip()


def parse_command(args: argparse.Namespace) -> int:
    """Execute the 'parse' command."""
    parse, fmt = PARSERS[args.kind]
    print(fmt(parse(args.text)))
    return 0


def encode_command(args: argparse.Namespace) -> int:
    """Execute the 'encode' command."""
    data = args.text.encode("utf-8") if args.text is not None else sys.stdin.buffer.read()
    logger.debug(f"Encoding {len(data)} bytes as {args.format}")
    print(ENCODERS[args.format](data))
    return 0


def decode_command(args: argparse.Namespace) -> int:
    """Execute the 'decode' command."""
    text = args.text if args.text is not None else _read_stdin_text()
    data = DECODERS[args.format](text)
    logger.debug(f"Decoded {len(data)} bytes from {args.format}")
    sys.stdout.buffer.write(data)
    sys.stdout.buffer.flush()
    return 0


def transcode_command(args: argparse.Namespace, config: Config) -> int:
    """
    Execute the 'transcode' command.

    The document is decoded into an untyped value (dicts, lists, scalars),
    so XML input yields string leaves.

    Args:
        args: Parsed command-line arguments
        config: Loaded configuration

    Returns:
        Exit code
    """
    text = Path(args.file).read_text(encoding="utf-8") if args.file else sys.stdin.read()

    value: Any
    if args.source == "json":
        value = from_json(text, Any)
    else:
        value = from_xml(text, Any)

    if args.target == "json":
        output = to_json(value, indent=config.json_output.indent)
    else:
        root_tag = args.root or config.xml.root_tag
        # Scalars and lists still need a named root element
        if not isinstance(value, dict):
            value = {"value": value}
        output = to_xml(
            value,
            tag=root_tag,
            pretty_print=config.xml.pretty_print,
            declaration=config.xml.declaration,
        )

    logger.info(f"Transcoded {args.source} -> {args.target} ({len(text)} -> {len(output)} chars)")
    sys.stdout.write(output if output.endswith("\n") else output + "\n")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code (0 success, 1 conversion/config error, 2 unexpected error)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        config = load_config(args)
        if args.command == "parse":
            return parse_command(args)
        if args.command == "encode":
            return encode_command(args)
        if args.command == "decode":
            return decode_command(args)
        if args.command == "transcode":
            return transcode_command(args, config)
    except ConvertKitError as e:
        logger.error(f"Conversion error: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logger.exception("Unexpected error during conversion")
        print(f"Unexpected error: {e}", file=sys.stderr)
        return 2

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
