"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path

_CHART_FIELDS = ("top_capital", "top_secondary_activity", "top_reference_codes", "capital_trend", "regions")


def _add_input_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Read normalized records from JSON (output of 'load') instead of fetching",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: built-in spreadsheet + CNPJ_EXPLORER_* env)",
    )


def _add_filter_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--cnae", action="append", default=[], help="Activity code (repeatable)")
    parser.add_argument("--uf", action="append", default=[], help="UF code (repeatable)")
    parser.add_argument(
        "--natureza",
        action="append",
        default=[],
        help="Legal nature option, e.g. '206-2 - Sociedade Empresária Limitada' (repeatable)",
    )
    parser.add_argument(
        "--favorites-only",
        action="store_true",
        help="Restrict to favorites stored in --db",
    )
    parser.add_argument("--db", type=Path, default=None, help="Favorites database")


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(
        prog="cnpj-explorer",
        description="Browse, filter and summarize business-registry spreadsheets",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # load
    load_parser = subparsers.add_parser("load", help="Fetch and normalize all sources")
    load_parser.add_argument("--config", type=Path, default=None, help="Path to config YAML")
    load_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write normalized JSON to file (default: stdout)",
    )

    # columns
    columns_parser = subparsers.add_parser("columns", help="Show inferred column types")
    _add_input_args(columns_parser)

    # summary
    summary_parser = subparsers.add_parser("summary", help="Filter and aggregate records")
    _add_input_args(summary_parser)
    _add_filter_args(summary_parser)
    summary_parser.add_argument("--top", type=int, default=10, help="Entries per top-N chart")
    summary_parser.add_argument("--output", type=Path, default=None, help="Write summary JSON")
    summary_parser.add_argument(
        "--include-records",
        action="store_true",
        help="Include the filtered records in the output",
    )

    # favorites
    fav_parser = subparsers.add_parser("favorites", help="List or toggle favorite companies")
    fav_parser.add_argument("action", choices=["list", "toggle"])
    fav_parser.add_argument("--db", type=Path, default=None, help="Favorites database")
    fav_parser.add_argument("--config", type=Path, default=None, help="Path to config YAML")
    fav_parser.add_argument("--id", dest="record_id", type=str, help="Record id (CNPJ) to toggle")

    # report
    report_parser = subparsers.add_parser("report", help="Export a report of (filtered) records")
    _add_input_args(report_parser)
    _add_filter_args(report_parser)
    report_parser.add_argument("--format", choices=["markdown", "json"], default="markdown")
    report_parser.add_argument("--output", type=Path, default=None, help="Write report to file")

    # compare
    compare_parser = subparsers.add_parser("compare", help="Compare companies side by side")
    _add_input_args(compare_parser)
    compare_parser.add_argument(
        "--id",
        dest="record_ids",
        action="append",
        required=True,
        help="Record id (CNPJ) to compare (repeatable)",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "load":
        _run_load(args)
    elif args.command == "columns":
        _run_columns(args)
    elif args.command == "summary":
        _run_summary(args)
    elif args.command == "favorites":
        _run_favorites(args)
    elif args.command == "report":
        _run_report(args)
    elif args.command == "compare":
        _run_compare(args)
    else:
        parser.print_help()


def _write(output: str, path: Path | None, message: str) -> None:
    if path:
        path.write_text(output, encoding="utf-8")
        print(message, file=sys.stderr)
    else:
        print(output)


def _load_records(args: argparse.Namespace) -> list:
    """Records from --input JSON, or fetched from the configured sources."""
    from cnpj_explorer.config import DashboardConfig
    from cnpj_explorer.models.record import NormalizedRecord
    from cnpj_explorer.pipeline import load_dataset
    from cnpj_explorer.sources import LoadError

    if getattr(args, "input", None):
        data = json.loads(args.input.read_text(encoding="utf-8"))
        return [NormalizedRecord.model_validate(r) for r in data]
    try:
        return load_dataset(DashboardConfig.load(args.config)).records
    except LoadError as e:
        raise SystemExit(str(e))


def _favorites_store(args: argparse.Namespace):
    from cnpj_explorer.config import DashboardConfig
    from cnpj_explorer.store import FavoritesStore

    db_path = args.db or DashboardConfig.load(getattr(args, "config", None)).db_path
    store = FavoritesStore(db_path)
    store.load()
    return store


def _selection(args: argparse.Namespace) -> tuple:
    """FilterSelection from --cnae/--uf/--natureza and the favorite ids when requested."""
    from cnpj_explorer.filtering import FilterSelection

    selection = FilterSelection(
        activity_codes=args.cnae,
        regions=args.uf,
        legal_natures=args.natureza,
    )
    favorite_ids = _favorites_store(args).ids() if args.favorites_only else None
    return selection, favorite_ids


def _run_load(args: argparse.Namespace) -> None:
    """Run load command."""
    from cnpj_explorer.config import DashboardConfig
    from cnpj_explorer.pipeline import load_dataset
    from cnpj_explorer.sources import LoadError

    try:
        result = load_dataset(DashboardConfig.load(args.config))
    except LoadError as e:
        raise SystemExit(str(e))

    for failure in result.failures:
        print(f"Skipped {failure.source_id}: {failure.reason}", file=sys.stderr)

    output = json.dumps(
        [r.model_dump(mode="json") for r in result.records],
        indent=2,
        ensure_ascii=False,
        default=str,
    )
    _write(output, args.output, f"Wrote {len(result.records)} records to {args.output}")


def _run_columns(args: argparse.Namespace) -> None:
    """Run columns command."""
    from cnpj_explorer.normalizing import analyze_columns

    columns = analyze_columns(_load_records(args))
    print(json.dumps([c.model_dump() for c in columns], indent=2, ensure_ascii=False))


def _run_summary(args: argparse.Namespace) -> None:
    """Run summary command."""
    from cnpj_explorer.pipeline import build_summary

    records = _load_records(args)
    selection, favorite_ids = _selection(args)
    summary = build_summary(records, selection, top_n=args.top, favorite_ids=favorite_ids)

    exclude: dict = {name: {"__all__": {"source_record"}} for name in _CHART_FIELDS}
    if not args.include_records:
        exclude["records"] = True
    data = summary.model_dump(mode="json", exclude=exclude)
    data["record_count"] = len(summary.records)
    output = json.dumps(data, indent=2, ensure_ascii=False, default=str)
    _write(output, args.output, f"Summary of {len(summary.records)} records (wrote to {args.output})")


def _run_favorites(args: argparse.Namespace) -> None:
    """Run favorites command."""
    store = _favorites_store(args)
    if args.action == "list":
        for record_id in store.ids():
            print(record_id)
    elif args.action == "toggle":
        if not args.record_id:
            raise SystemExit("favorites toggle requires --id")
        now_favorite = store.toggle(args.record_id)
        state = "added to" if now_favorite else "removed from"
        print(f"{args.record_id} {state} favorites ({len(store.snapshot())} total)")


def _run_report(args: argparse.Namespace) -> None:
    """Run report command."""
    from cnpj_explorer.pipeline import build_summary
    from cnpj_explorer.report import build_report, render_markdown

    records = _load_records(args)
    selection, favorite_ids = _selection(args)
    subset = build_summary(records, selection, favorite_ids=favorite_ids).records
    if not subset:
        print("No records match the selected filters.", file=sys.stderr)
        raise SystemExit(1)

    report = build_report(subset)
    if args.format == "json":
        output = json.dumps(report.model_dump(mode="json"), indent=2, ensure_ascii=False)
    else:
        output = render_markdown(report)
    _write(output, args.output, f"Report of {len(subset)} records (wrote to {args.output})")


def _run_compare(args: argparse.Namespace) -> None:
    """Run compare command."""
    from cnpj_explorer.report import compare_records

    by_id = {r.record_id: r for r in _load_records(args)}
    missing = [i for i in args.record_ids if i not in by_id]
    if missing:
        raise SystemExit(f"Unknown record id(s): {', '.join(missing)}")
    rows = compare_records([by_id[i] for i in args.record_ids])
    width = max(len(row.label) for row in rows)
    for row in rows:
        print(f"{row.label:<{width}}  " + " | ".join(row.values))


if __name__ == "__main__":
    main()
