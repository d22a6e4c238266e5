"""Import service: loads a TCPD results CSV into the normalised schema.

Parent rows (states, parties, constituencies, elections, candidates) are
looked up or created once per distinct key and cached for the rest of the
run; result rows are bulk inserted one chunk at a time. A row missing any
required parent key is skipped and counted.
"""

import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger
from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.lib.importer import ResultRecord, parse_results_csv
from lok_sabha_api.models.candidate import Candidate
from lok_sabha_api.models.constituency import Constituency
from lok_sabha_api.models.election import Election
from lok_sabha_api.models.party import Party
from lok_sabha_api.models.result import Result
from lok_sabha_api.models.state import State

RESULT_COLUMNS = (
    "position",
    "votes",
    "candidate_type",
    "valid_votes",
    "electors",
    "n_cand",
    "turnout_percentage",
    "vote_share_percentage",
    "deposit_lost",
    "margin",
    "margin_percentage",
    "enop",
    "last_poll",
    "contested",
    "last_party",
    "last_constituency_name",
    "same_constituency",
    "same_party",
    "no_terms",
    "turncoat",
    "incumbent",
    "recontest",
)

CANDIDATE_PROFILE_COLUMNS = (
    "sex",
    "myneta_education",
    "tcpd_prof_main",
    "tcpd_prof_main_desc",
    "tcpd_prof_second",
    "tcpd_prof_second_desc",
    "pid",
)


@dataclass
class ImportSummary:
    """Counters reported at the end of an import run."""

    total_records: int = 0
    inserted: int = 0
    skipped: int = 0


class _ParentCache:
    """Get-or-create helper for the dimension tables, memoised per run."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.states: dict[str, int] = {}
        self.parties: dict[str, int] = {}
        self.constituencies: dict[tuple[int, str, int | None], int] = {}
        self.elections: dict[tuple[int, int | None, int | None, int | None], int] = {}
        self.candidates: dict[str, int] = {}

    async def _get_or_create(self, model: type, lookup: dict[str, Any], extra: dict[str, Any]) -> int:
        stmt = select(model.id).filter_by(**lookup).limit(1)
        existing = (await self.session.execute(stmt)).scalar_one_or_none()
        if existing is not None:
            return existing
        row = model(**lookup, **extra)
        self.session.add(row)
        await self.session.flush()
        return row.id

    async def state_id(self, name: str) -> int:
        if name not in self.states:
            self.states[name] = await self._get_or_create(State, {"name": name}, {})
        return self.states[name]

    async def party_id(self, record: ResultRecord) -> int:
        name = record["party"]
        if name not in self.parties:
            extra = {"party_type_tcpd": record.get("party_type_tcpd"), "party_id": record.get("party_id")}
            self.parties[name] = await self._get_or_create(Party, {"name": name}, extra)
        return self.parties[name]

    async def constituency_id(self, state_id: int, record: ResultRecord) -> int:
        key = (state_id, record["constituency_name"], record.get("constituency_no"))
        if key not in self.constituencies:
            lookup = {"state_id": state_id, "name": key[1], "constituency_no": key[2]}
            extra = {
                "constituency_type": record.get("constituency_type"),
                "sub_region": record.get("sub_region"),
                "assembly_no": record.get("assembly_no"),
            }
            self.constituencies[key] = await self._get_or_create(Constituency, lookup, extra)
        return self.constituencies[key]

    async def election_id(self, record: ResultRecord) -> int:
        key = (record["year"], record.get("month"), record.get("poll_no"), record.get("delimid"))
        if key not in self.elections:
            lookup = dict(zip(("year", "month", "poll_no", "delimid"), key, strict=True))
            extra = {"election_type": record.get("election_type")}
            self.elections[key] = await self._get_or_create(Election, lookup, extra)
        return self.elections[key]

    async def candidate_id(self, record: ResultRecord) -> int:
        name = record["candidate"]
        if name not in self.candidates:
            extra = {column: record.get(column) for column in CANDIDATE_PROFILE_COLUMNS}
            self.candidates[name] = await self._get_or_create(Candidate, {"name": name}, extra)
        return self.candidates[name]


_PARENT_KEYS = ("state_name", "party", "constituency_name", "candidate", "year")


def _has_parents(record: ResultRecord) -> bool:
    return all(record.get(key) not in (None, "") for key in _PARENT_KEYS)


async def _build_result_rows(cache: _ParentCache, records: list[ResultRecord]) -> tuple[list[dict[str, Any]], int]:
    rows: list[dict[str, Any]] = []
    skipped = 0
    for record in records:
        if not _has_parents(record):
            skipped += 1
            continue
        state_id = await cache.state_id(record["state_name"])
        row = {
            "election_id": await cache.election_id(record),
            "constituency_id": await cache.constituency_id(state_id, record),
            "candidate_id": await cache.candidate_id(record),
            "party_id": await cache.party_id(record),
        }
        row.update({column: record.get(column) for column in RESULT_COLUMNS})
        for flag in ("same_constituency", "same_party", "turncoat", "incumbent", "recontest"):
            row[flag] = bool(row[flag])
        rows.append(row)
    return rows, skipped


async def import_results(session: AsyncSession, file_path: Path, batch_size: int = 5000) -> ImportSummary:
    """Import a results CSV file.

    Each chunk is committed on its own, so an interrupted run keeps the
    chunks already written.

    Args:
        session: Database session.
        file_path: Path to the CSV file.
        batch_size: Rows per parsed chunk.

    Returns:
        ImportSummary with total, inserted and skipped counts.
    """
    summary = ImportSummary()
    cache = _ParentCache(session)
    import_start = time.monotonic()

    for chunk_number, records in enumerate(parse_results_csv(file_path, batch_size), start=1):
        chunk_start = time.monotonic()
        rows, skipped = await _build_result_rows(cache, records)
        if rows:
            await session.execute(insert(Result), rows)
        await session.commit()

        summary.total_records += len(records)
        summary.inserted += len(rows)
        summary.skipped += skipped
        chunk_elapsed = time.monotonic() - chunk_start
        logger.info(
            f"Chunk {chunk_number}: {len(rows)} inserted, {skipped} skipped "
            f"({chunk_elapsed:.1f}s) | running total: {summary.total_records} records"
        )

    elapsed = time.monotonic() - import_start
    logger.info(
        f"Import of {file_path} finished in {elapsed:.1f}s: "
        f"{summary.inserted} inserted, {summary.skipped} skipped of {summary.total_records}"
    )
    return summary
