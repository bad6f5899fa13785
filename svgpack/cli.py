"""
Svgpack CLI.

Commands:
    list       Show the embedded images in an SVG
    count      Print the number of embedded images
    extract    Save embedded images individually or as a ZIP archive
    web        Start the web API

Sources:
    A file path, an http(s) URL, or '-' to read SVG text from stdin.

Examples:
    svgpack list drawing.svg
    svgpack count https://example.com/poster.svg --retries 2
    svgpack extract drawing.svg -o images/
    svgpack extract drawing.svg --zip --name drawing-images.zip
    cat drawing.svg | svgpack extract - --zip
"""

from __future__ import annotations

import argparse
import logging
import sys


def _configure(args: argparse.Namespace):
    """Set up logging and the global runtime config from common options."""
    from svgpack.runtime import get_runtime_config, set_global_config

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    config = get_runtime_config(
        fetch_timeout_ms=getattr(args, "timeout", None),
        fetch_retries=getattr(args, "retries", None),
        verbose=args.verbose,
    )
    set_global_config(config)
    return config


def _read_source(args: argparse.Namespace) -> str:
    from svgpack import messages
    from svgpack.ingest import detect_source

    source = detect_source(args.source)
    is_url = args.source.startswith(("http://", "https://"))
    if args.verbose:
        print(messages.FETCHING_URL if is_url else messages.READING_FILE, file=sys.stderr)

    svg_text = source.read()
    if args.verbose:
        if is_url:
            print(messages.FETCH_SUCCESS, file=sys.stderr)
        print(messages.PARSING_SVG, file=sys.stderr)
    return svg_text


def _fail(error: BaseException) -> int:
    from svgpack.errors import translate

    print(f"Error: {translate(error)}", file=sys.stderr)
    return 1


def cmd_list(args: argparse.Namespace) -> int:
    """Handle list command."""
    from svgpack import messages
    from svgpack.extract import inspect_images
    from svgpack.package import filename_for

    _configure(args)
    try:
        report = inspect_images(_read_source(args))
    except Exception as e:
        return _fail(e)

    if not report.images:
        print(messages.NO_IMAGES_FOUND)
    for image in report.images:
        print(f"[{image.index + 1}] {filename_for(image, image.index)}  {image.format}  ~{image.size:,} bytes")

    if args.verbose and report.skipped:
        print(file=sys.stderr)
        print(f"Skipped {len(report.skipped)} image element(s):", file=sys.stderr)
        for skipped in report.skipped:
            print(f"  <image> #{skipped.position + 1}: {skipped.reason}", file=sys.stderr)

    return 0


def cmd_count(args: argparse.Namespace) -> int:
    """Handle count command."""
    from svgpack.extract import count_images

    _configure(args)
    try:
        svg_text = _read_source(args)
    except Exception as e:
        return _fail(e)

    print(count_images(svg_text))
    return 0


def cmd_extract(args: argparse.Namespace) -> int:
    """Handle extract command."""
    from pathlib import Path

    from svgpack import messages
    from svgpack.download import download_single_image, save_blob
    from svgpack.extract import extract_images
    from svgpack.package import generate_archive

    config = _configure(args)

    try:
        images = extract_images(_read_source(args))
    except Exception as e:
        return _fail(e)

    if not images:
        print(messages.NO_IMAGES_FOUND, file=sys.stderr)
        return 1

    print(messages.images_extracted(len(images)))
    output_dir = Path(args.output)

    if not args.zip:
        saved = 0
        for image in images:
            try:
                path = download_single_image(image, output_dir)
            except (ValueError, OSError) as e:
                print(f"[warn] Could not save image {image.index + 1}: {e}", file=sys.stderr)
                continue
            saved += 1
            if args.verbose:
                print(f"Saved: {path}")
        return 0 if saved else 1

    name = args.name or config.archive_name
    archive_path = output_dir / name

    # Check if output file exists and prompt for overwrite
    if archive_path.exists() and not args.yes:
        response = input(f"'{archive_path}' exists. Overwrite? [y/N] ").strip().lower()
        if response not in ("y", "yes"):
            print("Aborted.")
            return 1

    def on_progress(percent: int) -> None:
        if args.verbose:
            print(f"\r{messages.GENERATING_ZIP} {percent}%", end="", file=sys.stderr)

    try:
        blob = generate_archive(images, on_progress, compression_level=config.compression_level)
        path = save_blob(blob, name, output_dir)
    except Exception as e:
        return _fail(e)

    if args.verbose:
        print(file=sys.stderr)
        print(messages.ZIP_READY, file=sys.stderr)
    print(f"Created: {path} ({blob.size:,} bytes)")
    return 0


def cmd_web(args: argparse.Namespace) -> int:
    """Handle web command - start the web server."""
    from svgpack.web import run_server

    _configure(args)
    try:
        run_server(host=args.host, port=args.port)
        return 0
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _add_common_options(parser: argparse.ArgumentParser, *, with_source: bool = True) -> None:
    if with_source:
        parser.add_argument(
            "source",
            help="SVG file path, http(s) URL, or '-' for stdin",
        )
        parser.add_argument(
            "--timeout",
            type=int,
            default=None,
            help="URL fetch timeout in milliseconds (default: 30000)",
        )
        parser.add_argument(
            "--retries",
            type=int,
            default=None,
            help="URL fetch retries with exponential back-off (default: 0)",
        )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print progress and debug information",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="svgpack",
        description="Extract base64-embedded images from SVG files.",
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # list
    list_parser = subparsers.add_parser(
        "list",
        help="Show the embedded images in an SVG",
    )
    _add_common_options(list_parser)

    # count
    count_parser = subparsers.add_parser(
        "count",
        help="Print the number of embedded images",
    )
    _add_common_options(count_parser)

    # extract
    extract_parser = subparsers.add_parser(
        "extract",
        help="Save embedded images individually or as a ZIP archive",
    )
    _add_common_options(extract_parser)
    extract_parser.add_argument(
        "-o",
        "--output",
        default=".",
        help="Output directory (default: current directory)",
    )
    extract_parser.add_argument(
        "-z",
        "--zip",
        action="store_true",
        help="Bundle all images into one ZIP archive",
    )
    extract_parser.add_argument(
        "--name",
        default=None,
        help="Archive filename (default: images.zip)",
    )
    extract_parser.add_argument(
        "-y",
        "--yes",
        action="store_true",
        help="Overwrite an existing archive without prompting",
    )

    # web
    web_parser = subparsers.add_parser(
        "web",
        help="Start the web API",
    )
    _add_common_options(web_parser, with_source=False)
    web_parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    web_parser.add_argument(
        "-p",
        "--port",
        type=int,
        default=8000,
        help="Port to bind to (default: 8000)",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if args.command == "list":
        return cmd_list(args)
    elif args.command == "count":
        return cmd_count(args)
    elif args.command == "extract":
        return cmd_extract(args)
    elif args.command == "web":
        return cmd_web(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
