#!/usr/bin/env python3
"""
cat+ RDF CLI - Command-line interface for the cat+ RDF converter.

Usage:
    catplus-rdf --help
    catplus-rdf data/ --prefix https://data.example.org/ --format jsonld
    python -m catplus_rdf.main /abs/path/synth.json --materialize
"""

import argparse
import logging
import sys
from pathlib import Path

import pyfiglet
from dotenv import load_dotenv

from catplus_rdf import __version__
from catplus_rdf.config.settings import Settings, get_settings, load_config
from catplus_rdf.errors import ConversionError
from catplus_rdf.pipeline import ConversionResult, Converter
from catplus_rdf.utils.logging import setup_colored_logging

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False, debug: bool = False, log_file: str | None = None) -> None:
    """Configure logging based on verbosity level."""
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    setup_colored_logging(level=level, log_file=log_file)


def print_banner() -> None:
    """Print the application banner."""
    banner = pyfiglet.figlet_format("cat+ RDF", font="isometric1", width=100)
    print("".center(100, "*"))
    print(banner)
    print(" Lab records to linked data ".center(100, "*"))


def print_config_summary(settings: Settings, args: argparse.Namespace) -> None:
    """Print configuration summary."""
    print("\n📋 Configuration:")
    print("─" * 40)
    print(f"  Input: {args.input_path}")
    print(f"  Output folder: {settings.output.output_dir or '(next to input)'}")
    print(f"  Output format: {settings.output.format}")
    print(f"  Content prefix: {settings.content.prefix or '(none)'}")
    if settings.output.materialize:
        print(f"  Materialize: yes ({settings.namespaces.resource})")
    else:
        print("  Materialize: no")
    print(f"  Validation: {'on' if settings.validation.enabled else 'off'}")
    print("─" * 40)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="catplus-rdf",
        description="cat+ RDF - Convert cat+ laboratory JSON files to RDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert every synth/hci/bravo file of a folder to Turtle
  catplus-rdf data/ --prefix https://data.example.org/catplus/

  # Convert one file to JSON-LD in another folder
  catplus-rdf /data/synth_batch.json --format jsonld --output-folder ./out

  # Replace blank nodes with IRIs and validate the result
  catplus-rdf /data/hci_campaign.json --materialize --validate
        """,
    )

    parser.add_argument(
        "input_path",
        type=str,
        help="Input JSON file, or folder of input files",
    )

    # Output options
    parser.add_argument(
        "--output-folder",
        "-o",
        type=str,
        default=None,
        help="Folder for the generated files (default: folder of the input)",
    )

    parser.add_argument(
        "--format",
        "-f",
        type=str,
        choices=["turtle", "jsonld"],
        default=None,
        help="Output format (default: from config)",
    )

    parser.add_argument(
        "--prefix",
        "-p",
        type=str,
        default=None,
        help="IRI prefix for the content URL of relative input paths",
    )

    parser.add_argument(
        "--materialize",
        "-m",
        action="store_true",
        help="Replace blank nodes with IRIs in the resource namespace",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate graphs before writing them",
    )

    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="YAML configuration file (default: bundled config.yaml)",
    )

    # Logging
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Also write the log to this file",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output (very verbose)",
    )

    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress all output except errors",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser


def apply_cli_overrides(settings: Settings, args: argparse.Namespace) -> None:
    """Apply CLI arguments to settings."""
    if args.output_folder:
        settings.output.output_dir = Path(args.output_folder)

    if args.format:
        settings.output.format = args.format

    if args.prefix is not None:
        settings.content.prefix = args.prefix

    if args.materialize:
        settings.output.materialize = True

    if args.validate:
        settings.validation.enabled = True


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()

    parser = create_parser()
    args = parser.parse_args(argv)

    if args.quiet:
        setup_logging()
        logging.disable(logging.CRITICAL)
    else:
        setup_logging(verbose=args.verbose, debug=args.debug, log_file=args.log_file)
        print_banner()

    try:
        settings = load_config(args.config) if args.config else get_settings()
        apply_cli_overrides(settings, args)
    except Exception as e:
        print(f"❌ Configuration error: {e}", file=sys.stderr)
        return 1

    if not args.quiet:
        print_config_summary(settings, args)

    try:
        result: ConversionResult = Converter(settings=settings).run(args.input_path)

        if not args.quiet:
            result.print_summary()

        if not result.success:
            return 1
        if result.validation_errors and settings.validation.fail_on_error:
            return 2

        return 0

    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130

    except ConversionError as e:
        logger.error("Conversion failed: %s", e)
        print(f"\n❌ Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
