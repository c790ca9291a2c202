#!/usr/bin/env python3
"""
PagePicker CLI — pick pages from a PDF from the terminal.

Usage:
    python -m pagepicker.cli <command> [options]

Commands:
    extract     Save selected pages as a new PDF
    info        Show PDF metadata and page count
    ranges      Normalize a page range string
    serve       Run the HTTP split service
    pick        Open the interactive page picker

Examples:
    # Extract pages 1, 3 and 5 to 7
    pagepicker-cli extract input.pdf -o out.pdf --pages 1,3,5-7

    # Let a running split service do the work
    pagepicker-cli extract input.pdf -o out.pdf --pages 2-4 --server http://localhost:5000

    # Normalize a range string
    pagepicker-cli ranges "5,1,3,2,7"          # → 1-3,5,7

    # Run the split service
    pagepicker-cli serve --port 5000
"""

import argparse
import logging
import sys
from pathlib import Path

from pagepicker.selection import decode, encode
from pagepicker.utils.i18n import _

# ---------------------------------------------------------------------------
# Page range parser (shared)
# ---------------------------------------------------------------------------


def _parse_page_list(text: str) -> list[int]:
    """Parse a page range string into a sorted list of page numbers.

    Unparseable tokens are skipped and page numbers below 1 dropped.

    Args:
        text: Page specification string, e.g. "1,3,5-7".

    Returns:
        Sorted list of 1-indexed page numbers.
    """
    return sorted(p for p in decode(text) if p >= 1)


# ---------------------------------------------------------------------------
# Argument parser construction
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with subcommands."""
    p = argparse.ArgumentParser(
        prog="pagepicker-cli",
        description="PagePicker — pick pages from a PDF.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("-v", "--verbose", action="store_true", help=_("Verbose logging (DEBUG)"))

    sub = p.add_subparsers(dest="command", help=_("Available commands"))

    # --- extract ---
    extract_p = sub.add_parser("extract", help=_("Save selected pages as a new PDF"))
    extract_p.add_argument("input", type=Path, help=_("Input PDF file"))
    extract_p.add_argument("-o", "--output", type=Path, required=True, help=_("Output PDF file"))
    extract_p.add_argument(
        "--pages",
        type=str,
        required=True,
        help=_("Pages to extract (e.g. '3-5' or '1,3,5-7')"),
    )
    extract_p.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help=_("Fail if any page is beyond the end of the document"),
    )
    extract_p.add_argument(
        "--server",
        type=str,
        default=None,
        metavar="URL",
        help=_("Send the request to a running split service instead of working locally"),
    )

    # --- info ---
    info_p = sub.add_parser("info", help=_("Show PDF metadata and page count"))
    info_p.add_argument("input", type=Path, help=_("Input PDF file"))

    # --- ranges ---
    ranges_p = sub.add_parser("ranges", help=_("Normalize a page range string"))
    ranges_p.add_argument("text", type=str, help=_("Range string, e.g. '1,2,3,7'"))
    ranges_p.add_argument(
        "--list",
        action="store_true",
        help=_("Print every page number instead of the compact form"),
    )

    # --- serve ---
    serve_p = sub.add_parser("serve", help=_("Run the HTTP split service"))
    serve_p.add_argument("--host", type=str, default=None, help=_("Bind address"))
    serve_p.add_argument("--port", type=int, default=None, help=_("Port (default: $PORT or 5000)"))

    # --- pick ---
    pick_p = sub.add_parser("pick", help=_("Open the interactive page picker"))
    pick_p.add_argument("input", type=Path, nargs="?", default=None, help=_("PDF file to open"))

    return p


# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def _cmd_extract(args, logger) -> int:
    """Handle the 'extract' command."""
    from pagepicker.utils.config_manager import get_config_manager

    pages = _parse_page_list(args.pages)
    if not pages:
        print(_("Error: please select pages to split."), file=sys.stderr)
        return 1

    cm = get_config_manager()
    strict = args.strict if args.strict is not None else bool(cm.get("extraction.strict_pages"))
    server = args.server or cm.get("server.url")

    if server:
        return _extract_remote(args, pages, server, logger)

    from pagepicker.services.pdf_operations import extract_pages_to_file

    result = extract_pages_to_file(args.input, args.output, pages, strict=strict)
    if result.success:
        print(f"Extracted: {result.message} → {args.output}")
        return 0
    else:
        print(f"Error: {result.message}", file=sys.stderr)
        return 1


def _extract_remote(args, pages: list[int], server: str, logger) -> int:
    """Run 'extract' through a split service."""
    from pagepicker.services.split_client import SplitClient
    from pagepicker.utils.exceptions import PagePickerError

    try:
        pdf_bytes = SplitClient(server).split(
            args.input.read_bytes(), pages, filename=args.input.name
        )
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_bytes(pdf_bytes)
    except (PagePickerError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.info("Saved %d bytes from %s", len(pdf_bytes), server)
    print(f"Extracted: {encode(pages)} → {args.output}")
    return 0


def _cmd_info(args, _logger) -> int:
    """Handle the 'info' command."""
    import pikepdf

    from pagepicker.services.pdf_operations import get_pdf_info

    try:
        info = get_pdf_info(str(args.input))
    except (pikepdf.PdfError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"File:       {info.path}")
    print(f"Pages:      {info.page_count}")
    print(f"Size:       {info.file_size_mb:.2f} MB ({info.file_size_bytes:,} bytes)")
    print(f"Version:    PDF {info.pdf_version}")
    print(f"Encrypted:  {'Yes' if info.encrypted else 'No'}")
    if info.title:
        print(f"Title:      {info.title}")
    if info.author:
        print(f"Author:     {info.author}")
    if info.creator:
        print(f"Creator:    {info.creator}")
    return 0


def _cmd_ranges(args, _logger) -> int:
    """Handle the 'ranges' command."""
    pages = decode(args.text)
    if args.list:
        print(",".join(str(p) for p in sorted(pages)))
    else:
        print(encode(pages))
    return 0


def _cmd_serve(args, _logger) -> int:
    """Handle the 'serve' command."""
    from pagepicker.server import run_server

    run_server(host=args.host, port=args.port)
    return 0


def _cmd_pick(args, logger) -> int:
    """Handle the 'pick' command — launch the GUI picker."""
    try:
        from pagepicker.ui.application import PagePickerApp
    except (ImportError, ValueError) as e:
        print(f"Error: GTK4/libadwaita required for the page picker: {e}", file=sys.stderr)
        return 1

    app = PagePickerApp(initial_file=str(args.input.resolve()) if args.input else None)
    return app.run([])


# ---------------------------------------------------------------------------
# Main entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger().setLevel(level)
    logger = logging.getLogger("pagepicker.cli")

    if getattr(args, "input", None) and not args.input.exists():
        print(f"Error: {args.input} not found", file=sys.stderr)
        return 1

    handlers = {
        "extract": _cmd_extract,
        "info": _cmd_info,
        "ranges": _cmd_ranges,
        "serve": _cmd_serve,
        "pick": _cmd_pick,
    }

    handler = handlers.get(args.command)
    if handler:
        return handler(args, logger)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
