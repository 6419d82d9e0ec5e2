"""Main CLI entry point for the update-feed command-line tool.

Inspects local update feeds and GitHub release payloads: resolves the entry
for a product code and prints the resulting model, or converts a release
payload into an equivalent ``updates.xml`` document. No network access.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from update_feed_parser import UpdateFeedParser
from update_feed_parser.api import FeedParseResult
from update_feed_parser.feed.models import ChannelStatus
from update_feed_parser.feed.release import (
    build_release_document,
    convert_markdown_to_html,
    decode_release_payload,
    extract_release_fields,
)
from update_feed_parser.shared import (
    ConfigError,
    DiagnosticSeverity,
    FeedConfig,
    UpdateFeedError,
    configure_logging,
)
from update_feed_parser.shared.config import VALID_OS_SUFFIXES

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def load_config(args: argparse.Namespace) -> FeedConfig:
    """Build the feed configuration from a config file and CLI overrides.

    Also applies the configured logging level unless a verbosity flag was
    given on the command line.
    """
    config = FeedConfig()
    if args.config:
        config = FeedConfig.from_file(args.config)

    overrides = {}
    if args.lenient:
        overrides["lenient_channel_status"] = True
    if args.os_suffix:
        overrides["os_suffix"] = args.os_suffix
    if overrides:
        config = config.override(**overrides)

    if not (args.verbose or args.quiet):
        configure_logging(config.logging_level)
    return config


def create_argument_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="update-feed",
        description="Resolve product update metadata from update feeds",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  update-feed inspect updates.xml --product IU
  update-feed inspect updates.xml --product IU --format text --lenient
  update-feed release latest.json --product IC --product-name "My IDE" \\
      --repository https://github.com/acme/ide --emit-xml
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--product", "-p",
        required=True,
        help="Product code to resolve"
    )
    common.add_argument(
        "--format", "-f",
        choices=["json", "text"],
        default="json",
        help="Output format (default: json)"
    )
    common.add_argument(
        "--config", "-c",
        type=Path,
        help="Configuration file path (JSON)"
    )
    common.add_argument(
        "--lenient",
        action="store_true",
        help="Treat unknown channel statuses as release instead of failing"
    )
    common.add_argument(
        "--os-suffix",
        choices=list(VALID_OS_SUFFIXES),
        help="Platform tag used for patch exclusions (default: detected)"
    )

    # Inspect command
    inspect_parser = subparsers.add_parser(
        "inspect", parents=[common], help="Resolve a product from an updates.xml feed"
    )
    inspect_parser.add_argument(
        "feed",
        type=Path,
        help="Feed document (updates.xml)"
    )

    # Release command
    release_parser = subparsers.add_parser(
        "release", parents=[common], help="Resolve a product from a GitHub release JSON file"
    )
    release_parser.add_argument(
        "payload",
        type=Path,
        help="Release JSON as returned by the GitHub releases API"
    )
    release_parser.add_argument(
        "--product-name",
        required=True,
        help="Display name of the product"
    )
    release_parser.add_argument(
        "--repository",
        required=True,
        help="Repository URL, e.g. https://github.com/owner/name"
    )
    release_parser.add_argument(
        "--channel",
        choices=[status.code for status in ChannelStatus],
        help="Active update channel type (default: from configuration)"
    )
    release_parser.add_argument(
        "--emit-xml",
        action="store_true",
        help="Print the equivalent updates.xml document instead of the model"
    )

    # Global options
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose output"
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Quiet output"
    )

    return parser


def format_result(result: FeedParseResult, format_type: str) -> str:
    """Format a resolution result for output."""
    if format_type == "json":
        return json.dumps(result.to_dict(), indent=2)

    product = result.product
    if product is None:
        return "No feed entry for this product."

    lines = [f"{product.name} ({product.product_code})"]
    if product.disable_machine_id:
        lines.append("  machine ID disabled")
    lines.append("-" * 60)

    for channel in product.channels:
        lines.append(
            f"Channel {channel.id}: {channel.status.display_name}, "
            f"licensing {channel.licensing.name}, {channel.eval_days} evaluation days"
        )
        for build in channel.builds:
            released = build.release_date.isoformat() if build.release_date else "unknown date"
            lines.append(f"   {build.number} {build.version} ({released})")
            available = sum(1 for patch in build.patches if patch.is_available)
            if build.patches:
                lines.append(f"      Patches: {available}/{len(build.patches)} available")
            if build.download_url:
                lines.append(f"      Download: {build.download_url}")
        lines.append("")

    warnings = result.get_diagnostics_by_severity(DiagnosticSeverity.WARNING)
    for warning in warnings:
        lines.append(f"Warning: {warning.message}")

    return "\n".join(lines).rstrip()


def cmd_inspect(args: argparse.Namespace) -> int:
    """Handle inspect command."""
    config = load_config(args)
    parser = UpdateFeedParser(config=config)

    if not args.feed.is_file():
        print(f"Feed file not found: {args.feed}", file=sys.stderr)
        return EXIT_ERROR

    result = parser.parse(args.feed, args.product)
    print(format_result(result, args.format))
    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


def cmd_release(args: argparse.Namespace) -> int:
    """Handle release command."""
    config = load_config(args)
    payload = args.payload.read_text(encoding="utf-8")

    if args.emit_xml:
        version, description = extract_release_fields(decode_release_payload(payload))
        document = build_release_document(
            version=version,
            message_html=convert_markdown_to_html(description, config.markdown_extensions),
            product_code=args.product,
            product_name=args.product_name,
            channel_type=args.channel or config.default_channel_type,
            repository_url=args.repository,
            config=config,
        )
        print(document.to_xml())
        return EXIT_FOUND

    parser = UpdateFeedParser(config=config)
    result = parser.parse_release(
        payload, args.product, args.product_name, args.repository, args.channel
    )
    print(format_result(result, args.format))
    return EXIT_FOUND if result.found else EXIT_NOT_FOUND


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_ERROR

    # Verbosity flags win over the configured logging level
    if args.verbose:
        configure_logging("DEBUG")
    elif args.quiet:
        configure_logging("ERROR")

    # Route to appropriate command handler
    try:
        if args.command == "inspect":
            return cmd_inspect(args)
        if args.command == "release":
            return cmd_release(args)
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return EXIT_ERROR

    except (UpdateFeedError, ConfigError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERROR
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return EXIT_ERROR
    except KeyboardInterrupt:
        print("\nOperation interrupted by user", file=sys.stderr)
        return 130  # Standard exit code for SIGINT


if __name__ == "__main__":
    sys.exit(main())
