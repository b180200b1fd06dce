"""Generate HTML documentation pages from documentation comments.

Each input file (or every file with a configured extension under an input
directory) is parsed and rendered to ``<stem>.html`` in the output directory,
or printed to stdout when no output directory is given.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any

from docblocks.compute_config_hash import compute_config_hash
from docblocks.document_cache import JsonDocumentCache
from docblocks.lint import compute_coverage
from docblocks.load_config import load_config
from docblocks.loader import document_for_file, summarize_file
from docblocks.models import ErrorKind
from docblocks.page_renderer import PageRenderer


def collect_sources(inputs: list[Path], config: dict[str, Any]) -> list[Path]:
    """Expand directories into the files with a configured extension."""
    extensions = {e.lower() for e in (config.get("languages") or {})}
    files: list[Path] = []
    for p in inputs:
        if p.is_dir():
            files.extend(
                sorted(f for f in p.rglob("*") if f.suffix.lower() in extensions)
            )
        else:
            files.append(p)
    return files


def run_docs(args: argparse.Namespace) -> int:
    """Execute the documentation run."""
    config = load_config(args.config)
    files = collect_sources(args.sources, config)
    if not files:
        msg = f"No source files found under: {', '.join(map(str, args.sources))}"
        raise SystemExit(msg)

    if args.summary_only:
        for f in files:
            summary = summarize_file(f, config)
            print(f"{f.name}: {summary['summary']} [{summary['since']}]")
        return 0

    cache = None
    if args.cache:
        cache = JsonDocumentCache(str(args.cache), compute_config_hash(config))
        cache.load()

    renderer = PageRenderer(config)
    out_root = args.out_dir.resolve() if args.out_dir else None
    if out_root:
        out_root.mkdir(parents=True, exist_ok=True)

    written = 0
    missing_docs = 0
    for f in files:
        document = document_for_file(f, config, cache=cache, lookup=args.lookup)
        missing_docs += sum(
            1 for e in document.errors if e.kind is ErrorKind.MISSING_DOCUMENTATION
        )
        html = renderer.render(
            document, clickable=args.clickable, show_errors=not args.no_errors
        )
        if out_root is None:
            print(html)
            continue

        out_file = out_root / f"{f.stem}.html"
        out_file.write_text(html, encoding="utf-8")
        written += 1
        coverage = compute_coverage(document)
        print(
            f"  {f.name}: {len(document.declarations)} declarations, "
            f"{coverage:.0%} documented, {len(document.errors)} problems"
        )

    if cache is not None:
        cache.save()

    if out_root:
        print(f"Generated {written} HTML pages into: {out_root}")

    if args.strict and missing_docs:
        print(f"{missing_docs} documentation problems (strict mode)", file=sys.stderr)
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the documentation generator."""
    ap = argparse.ArgumentParser(
        description="Extract documentation comments and render them as HTML.",
    )
    ap.add_argument(
        "sources",
        type=Path,
        nargs="+",
        help="Source files or directories to document",
    )
    ap.add_argument(
        "--out-dir",
        type=Path,
        help="Directory for the generated pages (default: print to stdout)",
    )
    ap.add_argument("--config", help="Path to configuration file")
    ap.add_argument(
        "--clickable",
        action="store_true",
        help="Link declaration names to their own page instead of inlining them",
    )
    ap.add_argument(
        "--lookup",
        default="",
        help="Render only the declaration with this name",
    )
    ap.add_argument(
        "--summary-only",
        action="store_true",
        help="Print the file-level summary of each source and exit",
    )
    ap.add_argument(
        "--no-errors",
        action="store_true",
        help="Leave the list of documentation problems out of the pages",
    )
    ap.add_argument(
        "--cache",
        type=Path,
        help="JSON file used to cache parsed documents between runs",
    )
    ap.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 1 when documentation is missing",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return run_docs(args)


if __name__ == "__main__":
    raise SystemExit(main())
