"""
Command-line interface for the stylesheet rebaser.

Walks the import graph of an entry stylesheet, rebases the ``url()`` values
of every file it reaches and writes the results to an output directory.
"""

import argparse
from pathlib import Path

from style_rebaser.config import DEFAULT_LOAD_PATHS, DEFAULT_OUTPUT
from style_rebaser.core.importers import create_importers
from style_rebaser.core.resolver import AmbiguousImportError
from style_rebaser.core.storage import output_path_for, save_file, save_source_map
from style_rebaser.core.walker import StylesheetWalker
from style_rebaser.utils.log import setup_logging, log

try:
    import colorlog  # noqa: F401
    _COLORLOG_AVAILABLE = True
except ImportError:
    _COLORLOG_AVAILABLE = False

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_MISSING = 2


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="style-rebaser",
        description="Resolve the imports of a stylesheet and rebase every "
                    "relative url() to the entry directory.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m style_rebaser src/styles.scss\n"
            "  python -m style_rebaser src/styles.scss --load-path node_modules\n"
            "  python -m style_rebaser src/styles.scss --output dist --source-maps\n"
            "\n"
            "Load paths can also be provided via the STYLE_REBASER_LOAD_PATHS env var."
        ),
    )
    parser.add_argument(
        "entry",
        help="Entry stylesheet (.scss, .sass or .css)",
    )
    parser.add_argument(
        "--entry-dir",
        help="Directory url() values are rebased to "
             "(default: the entry stylesheet's directory)",
    )
    parser.add_argument(
        "--load-path", dest="load_paths", action="append", default=None,
        metavar="DIR",
        help="Search directory for non-relative imports; repeat to add more, "
             "searched in the given order",
    )
    parser.add_argument(
        "--output", default=DEFAULT_OUTPUT,
        help=f"Output directory (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--source-maps", action="store_true",
        help="Write an intermediate source map next to every rewritten file",
    )
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Resolve and rebase without writing any file",
    )
    parser.add_argument(
        "--allow-missing", action="store_true",
        help="Exit successfully even when some imports cannot be resolved",
    )
    parser.add_argument(
        "--debug", action="store_true",
        help="Enable verbose debug logging",
    )
    parser.add_argument(
        "--log-file",
        help="Write detailed logs to this file (always at DEBUG level)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file)

    if not _COLORLOG_AVAILABLE:
        log.debug("Tip: install colorlog for colored output   (pip install colorlog)")

    entry = Path(args.entry).resolve()
    entry_dir = Path(args.entry_dir).resolve() if args.entry_dir else entry.parent
    load_paths = args.load_paths if args.load_paths is not None else DEFAULT_LOAD_PATHS
    source_maps: dict[str, dict] | None = {} if args.source_maps else None

    log.info("Entry stylesheet : %s", entry)
    log.info("Entry directory  : %s", entry_dir)
    for load_path in load_paths:
        log.info("Load path        : %s", load_path)

    importers = create_importers(entry_dir, load_paths=load_paths, source_maps=source_maps)
    walker = StylesheetWalker(importers, progress=not args.debug)

    try:
        result = walker.walk(str(entry))
    except AmbiguousImportError as exc:
        log.error("[AMBIGUOUS] %s", exc)
        return EXIT_ERROR
    except (OSError, UnicodeDecodeError) as exc:
        log.error("Cannot read stylesheet: %s", exc)
        return EXIT_ERROR

    if not args.dry_run:
        output_dir = Path(args.output)
        for url, loaded in result.loaded.items():
            target = output_path_for(url, str(entry_dir), output_dir)
            save_file(target, loaded.contents)
            if source_maps is not None and url in source_maps:
                save_source_map(target, source_maps[url])
        log.info("Files saved in: %s", output_dir.resolve())

    rewritten = len(source_maps) if source_maps is not None else None
    log.info(
        "Done. stylesheets=%d  missing=%d%s",
        len(result.loaded),
        len(result.missing),
        f"  rewritten={rewritten}" if rewritten is not None else "",
    )

    if result.missing and not args.allow_missing:
        for containing_url, specifier in result.missing:
            log.error("[MISSING] Could not resolve %r from %s", specifier, containing_url)
        return EXIT_MISSING
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
