"""Test data builder for result rows and their parent dimension rows."""

from sqlalchemy.ext.asyncio import AsyncSession

from lok_sabha_api.models import Candidate, Constituency, Election, Party, Result, State


class ResultSeeder:
    """Builds result rows and their parents, reusing parents by natural key."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self._states: dict[str, State] = {}
        self._parties: dict[str, Party] = {}
        self._constituencies: dict[tuple[str, str, int | None], Constituency] = {}
        self._elections: dict[tuple[int, int | None], Election] = {}
        self._candidates: dict[str, Candidate] = {}

    async def _add(self, row):  # noqa: ANN001, ANN202
        self.session.add(row)
        await self.session.flush()
        return row

    async def state(self, name: str) -> State:
        if name not in self._states:
            self._states[name] = await self._add(State(name=name))
        return self._states[name]

    async def party(self, name: str, party_type: str | None = None) -> Party:
        if name not in self._parties:
            self._parties[name] = await self._add(Party(name=name, party_type_tcpd=party_type))
        return self._parties[name]

    async def constituency(self, state: str, name: str, number: int | None = None) -> Constituency:
        key = (state, name, number)
        if key not in self._constituencies:
            parent = await self.state(state)
            self._constituencies[key] = await self._add(
                Constituency(state_id=parent.id, name=name, constituency_no=number)
            )
        return self._constituencies[key]

    async def election(self, year: int, poll_no: int | None = None) -> Election:
        key = (year, poll_no)
        if key not in self._elections:
            self._elections[key] = await self._add(Election(year=year, poll_no=poll_no))
        return self._elections[key]

    async def candidate(self, name: str, sex: str | None = "M", education: str | None = None) -> Candidate:
        if name not in self._candidates:
            self._candidates[name] = await self._add(Candidate(name=name, sex=sex, myneta_education=education))
        return self._candidates[name]

    async def result(
        self,
        *,
        year: int,
        state: str,
        constituency: str,
        candidate: str,
        party: str,
        number: int | None = None,
        sex: str | None = "M",
        education: str | None = None,
        party_type: str | None = None,
        poll_no: int | None = None,
        **fields: object,
    ) -> Result:
        """Add one result row, creating any parent it needs."""
        election = await self.election(year, poll_no)
        seat = await self.constituency(state, constituency, number)
        person = await self.candidate(candidate, sex, education)
        owner = await self.party(party, party_type)
        return await self._add(
            Result(
                election_id=election.id,
                constituency_id=seat.id,
                candidate_id=person.id,
                party_id=owner.id,
                **fields,
            )
        )

    async def contest(
        self,
        *,
        year: int,
        state: str,
        constituency: str,
        winner: tuple[str, str, float],
        runner_up: tuple[str, str, float] | None = None,
        number: int | None = None,
        turnout: float | None = None,
        margin_percentage: float | None = None,
    ) -> None:
        """Add a winner and optional runner-up, each given as (candidate, party, votes)."""
        name, party, votes = winner
        await self.result(
            year=year,
            state=state,
            constituency=constituency,
            number=number,
            candidate=name,
            party=party,
            position=1,
            votes=votes,
            turnout_percentage=turnout,
            margin_percentage=margin_percentage,
        )
        if runner_up is not None:
            name, party, votes = runner_up
            await self.result(
                year=year,
                state=state,
                constituency=constituency,
                number=number,
                candidate=name,
                party=party,
                position=2,
                votes=votes,
                turnout_percentage=turnout,
            )

    async def commit(self) -> None:
        await self.session.commit()
