"""Dataset loader: fetch every source, parse, normalize, deliver in chunks.

Sources are fetched concurrently but merged in source-list order. Each load
takes a new generation number; starting another load makes the previous one
stale and its remaining chunks are dropped.
"""

import csv
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterator, Optional, Sequence

import httpx
from pydantic import BaseModel, Field

from cnpj_explorer.models.raw import RawRecord
from cnpj_explorer.models.record import NormalizedRecord
from cnpj_explorer.normalizing.row import normalize_row

from .base import BaseSource, SourceError
from .parsers import ParseWarning, looks_like_html, parse_csv

logger = logging.getLogger(__name__)


class SourceFailure(BaseModel):
    """A source that was skipped."""

    source_id: str
    reason: str
    status_code: Optional[int] = None


class LoadChunk(BaseModel):
    """A batch of normalized records from one source."""

    source_id: str
    generation: int
    records: list[NormalizedRecord] = Field(default_factory=list)


class LoadResult(BaseModel):
    """Outcome of a completed load."""

    records: list[NormalizedRecord] = Field(default_factory=list)
    failures: list[SourceFailure] = Field(default_factory=list)
    warnings: list[ParseWarning] = Field(default_factory=list)


class LoadError(RuntimeError):
    """No source produced any rows."""

    def __init__(self, message: str, failures: Optional[list[SourceFailure]] = None):
        super().__init__(message)
        self.failures = failures or []


class DatasetLoader:
    """
    Loads normalized records from a list of CSV sources.
    Per-source failures are logged and reported; only a load with zero rows
    overall raises LoadError.
    """

    DEFAULT_HEADERS = {
        "User-Agent": "cnpj-explorer/0.1 (business registry dashboard)",
        "Accept": "text/csv, text/plain, */*",
    }

    def __init__(
        self,
        sources: Sequence[BaseSource],
        client: Optional[httpx.Client] = None,
        *,
        max_workers: int = 4,
        chunk_size: int = 500,
        timeout: float = 60.0,
    ):
        self._sources = list(sources)
        self._client = client or httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers=self.DEFAULT_HEADERS,
        )
        self._max_workers = max(1, max_workers)
        self._chunk_size = max(1, chunk_size)
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        return self._generation

    def cancel(self) -> None:
        """Make any running load stale."""
        with self._lock:
            self._generation += 1

    def _begin(self) -> int:
        with self._lock:
            self._generation += 1
            return self._generation

    def _is_current(self, generation: int) -> bool:
        return self._generation == generation

    def _fetch_source(self, source: BaseSource) -> tuple[list[RawRecord], list[ParseWarning]]:
        """Fetch and parse one source (runs on a worker thread)."""
        text = source.fetch_text(self._client)
        if looks_like_html(text):
            raise SourceError("returned HTML instead of CSV (the sheet is probably not public)")
        return parse_csv(text, source.source_id)

    def iter_chunks(
        self,
        failures: Optional[list[SourceFailure]] = None,
        warnings: Optional[list[ParseWarning]] = None,
    ) -> Iterator[LoadChunk]:
        """
        Start a load and return an iterator of chunks.
        Skipped sources are appended to ``failures`` and parser warnings to
        ``warnings`` when those lists are given.
        """
        _, chunks = self._start(failures, warnings)
        return chunks

    def _start(
        self,
        failures: Optional[list[SourceFailure]],
        warnings: Optional[list[ParseWarning]],
    ) -> tuple[int, Iterator[LoadChunk]]:
        """Take a new generation and return it with the (not yet started) chunk stream."""
        generation = self._begin()
        stream = self._stream(
            generation,
            failures if failures is not None else [],
            warnings if warnings is not None else [],
        )
        return generation, stream

    def _normalize_batch(
        self,
        rows: Sequence[RawRecord],
        first_row: int,
        warnings: list[ParseWarning],
    ) -> list[NormalizedRecord]:
        """Normalize a slice of rows; a row that fails is dropped with a warning."""
        batch: list[NormalizedRecord] = []
        for number, raw in enumerate(rows, start=first_row):
            try:
                batch.append(normalize_row(raw))
            except (ValueError, ArithmeticError) as e:
                logger.warning("Row %d of %s dropped: %s", number, raw.source_id, e)
                warnings.append(
                    ParseWarning(source_id=raw.source_id, row=number, message=f"Row dropped: {e}")
                )
        return batch

    def _stream(
        self,
        generation: int,
        failures: list[SourceFailure],
        warnings: list[ParseWarning],
    ) -> Iterator[LoadChunk]:
        if not self._sources:
            return
        workers = min(self._max_workers, len(self._sources))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            futures: list[Future] = [executor.submit(self._fetch_source, s) for s in self._sources]
            for source, future in zip(self._sources, futures):
                if not self._is_current(generation):
                    logger.info("Load %d superseded; dropping remaining sources", generation)
                    for f in futures:
                        f.cancel()
                    return
                try:
                    rows, parse_warnings = future.result()
                except SourceError as e:
                    logger.warning("Source %s skipped: %s", source.source_id, e)
                    failures.append(
                        SourceFailure(source_id=source.source_id, reason=str(e), status_code=e.status_code)
                    )
                    continue
                except (httpx.HTTPError, csv.Error, OSError, UnicodeDecodeError) as e:
                    logger.warning("Source %s skipped: %s", source.source_id, e)
                    failures.append(SourceFailure(source_id=source.source_id, reason=str(e)))
                    continue

                for w in parse_warnings:
                    logger.warning("CSV warning in %s row %d: %s", w.source_id, w.row, w.message)
                warnings.extend(parse_warnings)

                if not rows:
                    logger.warning("Source %s returned no rows", source.source_id)
                    failures.append(SourceFailure(source_id=source.source_id, reason="no rows"))
                    continue

                for start in range(0, len(rows), self._chunk_size):
                    batch = self._normalize_batch(
                        rows[start : start + self._chunk_size], start + 1, warnings
                    )
                    if not self._is_current(generation):
                        logger.info("Load %d superseded; dropping remaining sources", generation)
                        for f in futures:
                            f.cancel()
                        return
                    if batch:
                        yield LoadChunk(source_id=source.source_id, generation=generation, records=batch)

    def load(self) -> Optional[LoadResult]:
        """
        Load everything. Returns None when a newer load started meanwhile.
        Raises LoadError when no source produced rows.
        """
        failures: list[SourceFailure] = []
        warnings: list[ParseWarning] = []
        records: list[NormalizedRecord] = []
        generation, stream = self._start(failures, warnings)
        for chunk in stream:
            records.extend(chunk.records)

        if not self._is_current(generation):
            return None

        if not records:
            failed = ", ".join(f.source_id for f in failures) or "none configured"
            message = (
                "No data found. Check that the spreadsheet is public and reachable "
                f"(failed sources: {failed})."
            )
            logger.error(message)
            raise LoadError(message, failures)

        logger.info(
            "Loaded %d records from %d source(s); %d skipped",
            len(records),
            len(self._sources) - len(failures),
            len(failures),
        )
        return LoadResult(records=records, failures=failures, warnings=warnings)

    def close(self) -> None:
        self._client.close()
