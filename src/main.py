# src/main.py — v2
"""CLI entry point: one sub-command per pipeline step.

Usage:
    autodocumentator detect [--full]
    autodocumentator update-metadata [--include-failed]
    autodocumentator sync-metadata
    autodocumentator split [--batches N]
    autodocumentator merge
    autodocumentator identify-failures
    autodocumentator plan-retry
    autodocumentator extract-cases
    autodocumentator leases {models,providers} [--cleanup]

Each command prints a short summary followed by a ``key=value`` counter
line on stdout for the workflow to capture. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from autodocumentator.config.settings import ConfigurationError, Settings, load_settings
from autodocumentator.logging.context import clear_context, generate_run_id, set_run_context
from autodocumentator.logging.logger import setup_logging
from autodocumentator.storage import layout
from autodocumentator.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    try:
        overrides = {}
        if args.project_root is not None:
            overrides["project_root"] = args.project_root
        settings = load_settings(**overrides)
    except (ConfigurationError, ValidationError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 1

    _setup_logging(settings, args.verbose)
    set_run_context(generate_run_id(), step=args.command)

    try:
        return args.func(args, settings)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1
    finally:
        clear_context()


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return number


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="autodocumentator",
        description=f"autodocumentator v{__version__}: incremental AI test documentation",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--project-root", type=Path, default=None,
        help="Project root (default: PROJECT_ROOT or the current directory)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- detect ---
    p_detect = subparsers.add_parser(
        "detect", help="Select new and changed test files for processing",
    )
    p_detect.add_argument(
        "--full", action="store_true",
        help="Schedule every test file (same as FORCE_FULL_DOC_RUN=true)",
    )
    p_detect.set_defaults(func=_cmd_detect)

    # --- update-metadata ---
    p_update = subparsers.add_parser(
        "update-metadata", help="Record fingerprints of processed files",
    )
    p_update.add_argument(
        "--include-failed", action="store_true",
        help="Also record files listed as failed (default: leave them for retry)",
    )
    p_update.set_defaults(func=_cmd_update_metadata)

    # --- sync-metadata ---
    p_sync = subparsers.add_parser(
        "sync-metadata", help="Seed metadata from the existing documentation",
    )
    p_sync.set_defaults(func=_cmd_sync_metadata)

    # --- split ---
    p_split = subparsers.add_parser(
        "split", help="Split the work list into per-batch input files",
    )
    p_split.add_argument(
        "--batches", type=_positive_int, default=None,
        help="Number of batches (default: BATCH_COUNT)",
    )
    p_split.set_defaults(func=_cmd_split)

    # --- merge ---
    p_merge = subparsers.add_parser(
        "merge", help="Merge batch results into the consolidated documentation",
    )
    p_merge.set_defaults(func=_cmd_merge)

    # --- identify-failures ---
    p_failures = subparsers.add_parser(
        "identify-failures", help="List scheduled files that were not documented",
    )
    p_failures.set_defaults(func=_cmd_identify_failures)

    # --- plan-retry ---
    p_retry = subparsers.add_parser(
        "plan-retry", help="Assign failed files to working batches",
    )
    p_retry.set_defaults(func=_cmd_plan_retry)

    # --- extract-cases ---
    p_cases = subparsers.add_parser(
        "extract-cases", help="Extract individual test declarations",
    )
    p_cases.set_defaults(func=_cmd_extract_cases)

    # --- leases ---
    p_leases = subparsers.add_parser(
        "leases", help="Show model or provider leases",
    )
    p_leases.add_argument("table", choices=["models", "providers"])
    p_leases.add_argument(
        "--cleanup", action="store_true",
        help="Delete expired leases first",
    )
    p_leases.set_defaults(func=_cmd_leases)

    return parser


def _metadata_store(settings: Settings):
    from autodocumentator.cache.metadata_store import MetadataStore
    from autodocumentator.cache.state_factory import create_state_store

    path = layout.metadata_path(settings.docs_root)
    return MetadataStore(create_state_store(path, settings))


def _cmd_detect(args: argparse.Namespace, settings: Settings) -> int:
    """Run change detection and write the work list."""
    from autodocumentator.batch.change_detector import ChangeDetector
    from autodocumentator.batch.scanner import TestFileScanner

    docs_root = settings.docs_root
    layout.ensure_docs_directories(docs_root)

    scanner = TestFileScanner.from_settings(settings)
    detector = ChangeDetector(scanner.discover, _metadata_store(settings), settings.project_root)
    report = detector.detect_and_write(
        layout.work_list_path(docs_root),
        force_full=args.full or settings.force_full_doc_run,
    )

    print(f"\nChange detection ({report.mode}):")
    print(f"  Total files:  {report.total}")
    print(f"  New:          {len(report.new)}")
    print(f"  Changed:      {len(report.changed)}")
    print(f"  Unchanged:    {len(report.unchanged)}")
    print(f"  Skipped:      {len(report.skipped)}")
    print(f"tests-to-process={len(report.work_list)}")
    return 0


def _cmd_update_metadata(args: argparse.Namespace, settings: Settings) -> int:
    """Record fingerprints for the files processed this run."""
    from autodocumentator.batch.metadata_sync import MetadataUpdater
    from autodocumentator.batch.work_list import read_work_list

    docs_root = settings.docs_root
    processed = read_work_list(layout.work_list_path(docs_root))
    if processed is None:
        logger.info("No work list found, nothing to update")
        print("metadata-updated=0")
        return 0

    exclude: list[str] = []
    if not args.include_failed:
        exclude = read_work_list(layout.failed_tests_path(docs_root)) or []

    updater = MetadataUpdater(_metadata_store(settings), settings.project_root)
    result = updater.update(processed, exclude=exclude)

    print("\nMetadata update:")
    print(f"  Updated:      {len(result.updated)}")
    print(f"  Failed:       {len(result.failed)}")
    print(f"  Excluded:     {len(result.excluded)}")
    print(f"  In metadata:  {result.total_records}")
    print(f"metadata-updated={len(result.updated)}")
    return 0


def _cmd_sync_metadata(args: argparse.Namespace, settings: Settings) -> int:
    """Seed metadata for files the existing documentation already covers."""
    from autodocumentator.batch.metadata_sync import MetadataUpdater
    from autodocumentator.batch.scanner import TestFileScanner

    existing_doc = layout.existing_doc_path(settings.docs_root)
    if not existing_doc.exists():
        logger.info("No existing documentation at %s, nothing to sync", existing_doc)
        print("metadata-synced=0")
        return 0

    scanner = TestFileScanner.from_settings(settings)
    updater = MetadataUpdater(_metadata_store(settings), settings.project_root)
    result = updater.sync_from_docs(
        existing_doc.read_text(encoding="utf-8"), scanner.discover(),
    )

    print("\nMetadata sync:")
    print(f"  In docs:          {result.documented}")
    print(f"  Added:            {len(result.added)}")
    print(f"  Already tracked:  {len(result.already_tracked)}")
    print(f"  Unresolved:       {len(result.unresolved)}")
    print(f"  In metadata:      {result.total_records}")
    print(f"metadata-synced={len(result.added)}")
    return 0


def _cmd_split(args: argparse.Namespace, settings: Settings) -> int:
    """Shard the work list into batch input files."""
    from autodocumentator.batch.splitter import split_work_list, write_batch_inputs
    from autodocumentator.batch.work_list import read_work_list

    docs_root = settings.docs_root
    paths = read_work_list(layout.work_list_path(docs_root)) or []
    batch_count = args.batches or settings.batch_count

    written = write_batch_inputs(split_work_list(paths, batch_count), docs_root)

    print(f"\nSplit {len(paths)} file(s) into {len(written)} batch(es)")
    print(f"batch-count={len(written)}")
    return 0


def _cmd_merge(args: argparse.Namespace, settings: Settings) -> int:
    """Merge batch results into the consolidated documentation."""
    from autodocumentator.docs.merger import DocumentationMerger

    docs_root = settings.docs_root
    merger = DocumentationMerger(generated_by=settings.generated_by)
    result = merger.merge_files(
        existing_doc=layout.existing_doc_path(docs_root),
        batches_dir=layout.batches_dir(docs_root),
        work_list=layout.work_list_path(docs_root),
        output_doc=layout.consolidated_doc_path(docs_root),
    )

    print("##MERGE_STATS_START##")
    print(f"TOTAL_ENTRIES:{result.total}")
    print(f"ADDED:{len(result.added)}")
    print(f"UPDATED:{len(result.updated)}")
    print(f"KEPT:{len(result.kept)}")
    print(f"RETIRED:{len(result.retired)}")
    print("##MERGE_STATS_END##")
    print(f"merged-entries={result.total}")
    return 0


def _cmd_identify_failures(args: argparse.Namespace, settings: Settings) -> int:
    """Reconcile the work list with batch results."""
    from autodocumentator.batch.scanner import TestFileScanner
    from autodocumentator.failures.identifier import FailureIdentifier

    docs_root = settings.docs_root
    identifier = FailureIdentifier(TestFileScanner.from_settings(settings).discover)
    report = identifier.identify(
        layout.batches_dir(docs_root), layout.work_list_path(docs_root),
    )
    identifier.write(
        report, layout.failed_tests_path(docs_root), layout.batch_stats_path(docs_root),
    )

    print(f"\nFailure analysis ({report.mode}):")
    print(f"  Scheduled:    {len(report.scheduled)}")
    print(f"  Documented:   {report.documented_count}")
    print(f"  Failed:       {len(report.failures)}")
    for path in report.failures:
        print(f"    {path}")
    print(f"failed-count={len(report.failures)}")
    print(f"working-batches={','.join(report.working_batches)}")
    return 0


def _cmd_plan_retry(args: argparse.Namespace, settings: Settings) -> int:
    """Write retry lists for the working batches."""
    from autodocumentator.batch.work_list import read_work_list
    from autodocumentator.failures.identifier import load_working_batches
    from autodocumentator.failures.retry_planner import plan_retries, write_retry_plan

    docs_root = settings.docs_root
    failures = read_work_list(layout.failed_tests_path(docs_root))
    working = load_working_batches(layout.batch_stats_path(docs_root))
    if failures is None or working is None:
        logger.error("Failure list or batch stats missing; run identify-failures first")
        return 1

    plan = plan_retries(failures, working)
    write_retry_plan(plan, docs_root)

    if plan.is_empty:
        print("\nNothing to retry")
    else:
        print(f"\nRetrying {plan.total} file(s) on {len(plan.assignments)} batch(es)")
    print(f"retry-batches={len(plan.assignments)}")
    return 0


def _cmd_extract_cases(args: argparse.Namespace, settings: Settings) -> int:
    """Extract individual test declarations from every test file."""
    from autodocumentator.batch.scanner import TestFileScanner
    from autodocumentator.extraction.test_cases import extract_from_files, write_test_cases

    scanner = TestFileScanner.from_settings(settings)
    paths = scanner.discover()
    cases = extract_from_files(paths, scanner.resolve)
    write_test_cases(layout.test_cases_path(settings.docs_root), cases)

    print(f"\nExtracted {len(cases)} test case(s) from {len(paths)} file(s)")
    print(f"test-cases-count={len(cases)}")
    return 0


def _cmd_leases(args: argparse.Namespace, settings: Settings) -> int:
    """Show (and optionally clean up) one lease table."""
    from autodocumentator.coordination.model_balancer import ModelBalancer
    from autodocumentator.coordination.rate_limiter import RateLimiter

    table = (
        ModelBalancer.from_settings(settings)
        if args.table == "models"
        else RateLimiter.from_settings(settings)
    )
    if args.cleanup:
        removed = table.cleanup_expired()
        print(f"\nRemoved {len(removed)} expired lease(s)")

    active = table.active()
    print(f"\nActive {args.table} leases:")
    for name, lease in sorted(active.items()):
        print(f"  {name:30s} owner={lease.owner or '-'}")
    print(f"active-leases={len(active)}")
    return 0


def _setup_logging(settings: Settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=settings.log_file,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
