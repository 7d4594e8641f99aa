"""Session workflow: load inputs concurrently, then render the tree."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from application.render import render_tree
from domain.schemas import PathRecord
from domain.synonyms.index import SynonymIndex
from domain.taxonomy.loader import parse_path_records
from domain.tree.builder import TaxonTree
from infrastructure.config.models import TreeConfig
from infrastructure.io import read_records
from infrastructure.synonyms import SynonymLoader, SynonymSource

logger = logging.getLogger(__name__)


@dataclass
class TreeSession:
    """Everything loaded once per session, plus the current whole-view tree."""

    cfg: TreeConfig
    records: list[PathRecord]
    known_records: list[dict[str, Any]]
    synonyms: SynonymIndex
    tree: TaxonTree

    def rerender(self) -> TaxonTree:
        self.tree = render_tree(
            self.records,
            root_id=self.cfg.root_id,
            root_name=self.cfg.root_name,
            synonyms=self.synonyms,
            all_known_records=self.known_records,
            group_depth=self.cfg.group_depth,
        )
        return self.tree


async def _read_rows(path: Path) -> list[dict[str, Any]]:
    rows = await asyncio.to_thread(read_records, path)
    logger.info("Loaded %d rows from %s", len(rows), path)
    return rows


async def load_and_render(
    cfg: TreeConfig,
    *,
    synonyms: SynonymIndex | None = None,
    loader: SynonymLoader | None = None,
) -> TreeSession:
    """
    Read path records and fetch synonyms concurrently, then render the whole tree.

    A synonym load failure is logged and leaves the index not ready; the tree is
    still built, just without grafted synonyms.
    """
    index = synonyms if synonyms is not None else SynonymIndex()
    syn_loader = loader or SynonymLoader(SynonymSource(cfg.synonyms_source, timeout_s=cfg.synonyms_timeout_s))

    pool_path = cfg.synonyms_pool_file
    reads = [_read_rows(cfg.records_file)]
    if pool_path != cfg.records_file:
        reads.append(_read_rows(pool_path))

    results = await asyncio.gather(syn_loader.ensure_loaded(index), *reads)
    synonyms_ok, rows = results[0], results[1]
    known_rows = results[2] if len(results) > 2 else rows

    if not synonyms_ok:
        logger.warning("Synonyms unavailable; continuing without synonym grafting and expansion")

    records = parse_path_records(rows)
    tree = render_tree(
        records,
        root_id=cfg.root_id,
        root_name=cfg.root_name,
        synonyms=index,
        all_known_records=known_rows,
        group_depth=cfg.group_depth,
    )
    return TreeSession(cfg=cfg, records=records, known_records=known_rows, synonyms=index, tree=tree)
