"""
Fetching the synonym payload and loading it into a SynonymIndex.

The payload is a JSON array of valid taxa (``all_synonyms.json``), read from a
local file or fetched over HTTP with httpx. Loading is single-flight: concurrent
callers for the same index await the same task, and a failed attempt can be retried later.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from domain.synonyms.index import SynonymIndex
from domain.taxonomy.loader import parse_synonym_entries
from infrastructure.io import read_json

logger = logging.getLogger(__name__)


class SynonymSource:
    """A synonym resource addressed by a local path or an http(s) URL."""

    def __init__(
        self,
        location: str | Path,
        *,
        timeout_s: float = 30.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.location = str(location)
        self.timeout_s = timeout_s
        self._client = client

    @property
    def is_remote(self) -> bool:
        return self.location.startswith(("http://", "https://"))

    async def fetch(self) -> Any:
        """
        Return the decoded JSON payload.

        Raises:
            httpx.HTTPError: On transport errors or non-2xx responses
            OSError: If the local file cannot be read
            ValueError: If the content is not valid JSON
        """
        if not self.is_remote:
            return await asyncio.to_thread(read_json, Path(self.location))

        if self._client is not None:
            return await self._get(self._client)
        async with httpx.AsyncClient(timeout=self.timeout_s) as client:
            return await self._get(client)

    async def _get(self, client: httpx.AsyncClient) -> Any:
        resp = await client.get(self.location)
        resp.raise_for_status()
        return resp.json()


class SynonymLoader:
    """Single-flight loader filling a SynonymIndex from a SynonymSource."""

    def __init__(self, source: SynonymSource) -> None:
        self.source = source
        self._tasks: dict[SynonymIndex, asyncio.Task[bool]] = {}

    async def ensure_loaded(self, index: SynonymIndex) -> bool:
        """
        Load ``index`` once. Never raises for fetch or parse failures.

        Returns:
            True if the index is ready afterwards
        """
        if index.is_ready():
            return True

        # one in-flight task per index
        task = self._tasks.get(index)
        if task is None:
            task = self._tasks[index] = asyncio.ensure_future(self._load(index))

        ok = await asyncio.shield(task)
        if self._tasks.get(index) is task:
            del self._tasks[index]
        return ok

    async def _load(self, index: SynonymIndex) -> bool:
        logger.info("Loading synonyms from %s", self.source.location)
        try:
            payload = await self.source.fetch()
            entries = parse_synonym_entries(payload)
        except (httpx.HTTPError, OSError, json.JSONDecodeError, ValidationError, ValueError) as e:
            logger.error("Failed to load synonym data from %s: %s", self.source.location, e)
            return False

        ok = index.load(entries)
        if ok:
            logger.info("Synonym index ready: %s", index.stats())
        return ok


async def load_synonym_index(
    location: str | Path,
    *,
    timeout_s: float = 30.0,
    client: httpx.AsyncClient | None = None,
) -> SynonymIndex:
    """Convenience wrapper: fetch ``location`` into a new index (not ready on failure)."""
    index = SynonymIndex()
    await SynonymLoader(SynonymSource(location, timeout_s=timeout_s, client=client)).ensure_loaded(index)
    return index
