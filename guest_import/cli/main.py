from __future__ import annotations

import argparse
import logging
import sys
import uuid
from dataclasses import replace
from pathlib import Path

import psycopg2
from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..db.connection import db_cursor
from ..db.guest_insert import GuestInsertError, ImportBlockedError, insert_import_result
from ..excel.template import write_template
from ..logging.init import log_summary, set_debug, setup_logging
from ..logging.issue_log import IssueLogBuffer
from ..models.config_models import ImportConfig
from ..models.import_result import FileOutcome, FileStatus
from ..services.pipeline import check_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

    guest-import [--config PATH] [--sheet NAME] [--show N] FILE [FILE ...]
    guest-import --write-template PATH
    guest-import --commit --event-id UUID FILE [FILE ...]

Every file is read, validated and reported (labeled log lines + one
SUMMARY line). With --commit the items of all files are written in a single
transaction, and only when every file is importable.

Exit codes: 0 all files importable, 2 some file blocked or unreadable,
1 fatal (config, missing input, database).
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_BLOCKED = 2


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env; its values win over the process environment (DB settings)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="guest-import", description="Validate and import guest lists")
    p.add_argument("files", nargs="*", type=Path, help="Spreadsheets to check (.xlsx, .csv)")
    p.add_argument("--config", type=Path, default=None, help=f"YAML config (default: {DEFAULT_CONFIG_PATH} if present)")
    p.add_argument("--sheet", default=None, help="Sheet name (default: first sheet)")
    p.add_argument("--show", type=int, default=10, help="Max errors/warnings printed per file")
    p.add_argument("--write-template", type=Path, default=None, metavar="PATH", help="Write the blank template and exit")
    p.add_argument("--commit", action="store_true", help="Insert items into the database")
    p.add_argument("--event-id", default=None, help="Event UUID the guests belong to (with --commit)")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _load_cli_config(path: Path | None) -> ImportConfig:
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return ImportConfig()


def _report_outcome(logger: logging.Logger, outcome: FileOutcome, limit: int) -> None:
    name = outcome.file_name
    if outcome.result is None:
        logger.error(f"{name}: {outcome.error}")
        return
    result = outcome.result
    logger.info(
        f"{name}: status={outcome.status.value} guests={result.guest_count} "
        f"subguests={result.subguest_count} errors={len(result.errors)} warnings={len(result.warnings)}"
    )
    for issue in result.errors[:limit]:
        logger.error(f"{name} {issue}")
    if len(result.errors) > limit:
        logger.info(f"{name}: {len(result.errors) - limit} more errors (see issue log)")
    for issue in result.warnings[:limit]:
        logger.warning(f"{name} {issue}")
    if len(result.warnings) > limit:
        logger.info(f"{name}: {len(result.warnings) - limit} more warnings (see issue log)")


def _commit(logger: logging.Logger, cfg: ImportConfig, event_id: str, outcomes: list[FileOutcome]) -> int:
    try:
        with db_cursor(cfg.database) as cur:
            for outcome in outcomes:
                if outcome.result is None:
                    continue
                inserted = insert_import_result(
                    cur,
                    event_id,
                    outcome.result,
                    table=cfg.guests_table,
                    parent_match=cfg.parent_match,
                )
                logger.info(f"{outcome.file_name}: inserted guests={inserted.guests} subguests={inserted.subguests}")
    except (GuestInsertError, ImportBlockedError, psycopg2.Error) as e:
        logger.error(f"commit: {e} (nothing was written)")
        return EXIT_FATAL
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only read sys.argv when no list was given (cli_main([]) in tests)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.write_template is not None:
        path = write_template(args.write_template)
        logger.info(f"template written: {path}")
        if not args.files:
            return EXIT_SUCCESS_ALL

    try:
        cfg = _load_cli_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL
    if args.sheet:
        cfg = replace(cfg, sheet_name=args.sheet)

    if not args.files:
        logger.error("no input files given")
        return EXIT_FATAL
    missing = [p for p in args.files if not p.exists()]
    if missing:
        logger.error(f"file not found: {', '.join(str(p) for p in missing)}")
        return EXIT_FATAL

    if args.commit:
        if not args.event_id:
            logger.error("--commit requires --event-id")
            return EXIT_FATAL
        try:
            uuid.UUID(args.event_id)
        except ValueError:
            logger.error(f"invalid --event-id: {args.event_id}")
            return EXIT_FATAL

    issue_log = IssueLogBuffer()
    outcomes = check_files(args.files, cfg, issue_log=issue_log)
    for outcome in outcomes:
        _report_outcome(logger, outcome, max(0, args.show))

    log_path = issue_log.flush()
    if log_path is not None:
        logger.info(f"issue log: {log_path}")

    code = EXIT_SUCCESS_ALL
    if any(o.status is not FileStatus.VALID for o in outcomes):
        code = EXIT_BLOCKED

    if args.commit:
        if code != EXIT_SUCCESS_ALL:
            logger.error("commit skipped: not every file is importable")
        else:
            code = _commit(logger, cfg, args.event_id, outcomes)

    summary_line = render_summary_line(outcomes)
    # log_summary adds the "SUMMARY " label itself
    log_summary(summary_line.removeprefix("SUMMARY "))
    return code


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
