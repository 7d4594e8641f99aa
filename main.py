"""
CLI entrypoint for the taxon tree builder.

This script performs the following steps:
- loads .env (if present) and configs/tree.yaml
- creates a per-run output folder under outputs/
- reads path records and fetches synonyms concurrently
- builds the whole-view tree (grafted synonyms, grouped sibling order)
- optionally runs a synonym-aware search and steps to a selected match
- optionally rebuilds the focus view from the records containing the matches
- writes tree / search results / resolved config as JSON
"""

import argparse
import asyncio
import logging
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from application import load_and_render, render_focus_view, save_search_result, save_tree
from application.constants import (
    CONFIG_SNAPSHOT_FILENAME,
    FOCUS_TREE_FILENAME,
    FOCUS_VIEW,
    LOG_FILENAME,
    SEARCH_RESULTS_FILENAME,
    TREE_FILENAME,
    WHOLE_VIEW,
)
from domain.search import FocusEvent, SearchSession
from infrastructure.config import load_tree_config
from infrastructure.constants import TREE_CONFIG_FILE
from infrastructure.io import ensure_exists, write_json
from infrastructure.observability import configure_logging, make_run_tag, set_log_context, view_context

logger = logging.getLogger(__name__)


def _parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Build a taxon tree from root-to-leaf paths, with synonym-aware search")
    p.add_argument(
        "--config",
        type=str,
        default=str(TREE_CONFIG_FILE),
        help="Path to tree.yaml (default: configs/tree.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=".env",
        help="Path to .env file, loaded if it exists (default: .env)",
    )
    p.add_argument(
        "--query",
        type=str,
        default=None,
        help="Search the tree by taxon id (digits) or name substring.",
    )
    p.add_argument(
        "--select",
        type=int,
        default=None,
        help="Index of the search match to focus (clamped to the match list).",
    )
    p.add_argument(
        "--focus",
        action="store_true",
        help="Also rebuild the tree from only the records that contain the matches.",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    p.add_argument(
        "--file-level",
        type=str,
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="File log level",
    )
    return p.parse_args()


def _log_focus(event: FocusEvent) -> None:
    logger.info(
        "Focused match %d: %s (id=%d, %s) path=%s",
        event.index + 1,
        event.match.node.name,
        event.match.id,
        event.match.kind.value,
        event.path_ids,
    )


def main() -> None:
    args = _parse_args()

    env_file = Path(args.env)
    if env_file.exists():
        load_dotenv(env_file, override=True)

    config_path = Path(args.config)
    ensure_exists(config_path, "tree.yaml")

    cfg = load_tree_config(config_path)

    # ---- Per-run output folder ----
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_id = f"{ts}_root{cfg.root_id}_depth{cfg.group_depth}"

    run_dir = cfg.output_root / run_id
    run_dir.mkdir(parents=True, exist_ok=True)

    log_path = run_dir / LOG_FILENAME
    configure_logging(
        log_file=log_path,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )

    set_log_context(run_id_full=run_id, view=WHOLE_VIEW, root=cfg.root_name)

    logger.info("Starting run: run_id=%s (run_tag=%s)", run_id, make_run_tag(run_id))
    logger.info("Run output directory: %s", run_dir)

    write_json(run_dir / CONFIG_SNAPSHOT_FILENAME, cfg.model_dump(mode="json"))

    session = asyncio.run(load_and_render(cfg))
    logger.info("Synonym index: %s", session.synonyms.stats())
    save_tree(session.tree, run_dir / TREE_FILENAME)

    if args.query is None:
        logger.info("No query given; done. Detailed log: %s", log_path)
        return

    search_session = SearchSession(session.tree, session.synonyms, on_focus=_log_focus)
    result = search_session.run(args.query)
    logger.info(
        "Query %r: %d matches (%d primary, %d synonym)",
        result.query,
        len(result.matches),
        len(result.primary_match_ids),
        len(result.synonym_match_ids),
    )
    if args.select is not None:
        search_session.select(args.select)
    save_search_result(result, session.tree, run_dir / SEARCH_RESULTS_FILENAME)

    if args.focus:
        selected = search_session.current_match
        with view_context(FOCUS_VIEW):
            focus_tree = render_focus_view(
                session.records,
                result,
                root_id=cfg.root_id,
                root_name=cfg.root_name,
                synonyms=session.synonyms,
                all_known_records=session.known_records,
                selected_id=selected.id if selected is not None else None,
                group_depth=cfg.group_depth,
            )
            if focus_tree is not None:
                save_tree(focus_tree, run_dir / FOCUS_TREE_FILENAME)

    logger.info("Detailed log: %s", log_path)


if __name__ == "__main__":
    main()
