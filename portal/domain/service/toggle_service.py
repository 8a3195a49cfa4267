"""Toggle domain service.

One reconciler for every per-member relationship: poll votes, problem
upvotes, event RSVPs, saved jobs and volunteer sign-ups. Each call looks
at the member's current row, issues exactly one write that flips or
replaces it, then re-reads both the membership and the subject's
aggregate counters from the data store.
"""

from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, Sequence

import logfire

from portal.domain.error import (
    AlreadyRegisteredError,
    AlreadyVotedError,
    ConflictError,
    NotFoundError,
    ToggleInProgressError,
    UnauthenticatedError,
    ValidationError,
)
from portal.domain.model import MembershipState, Poll, ToggleResult
from portal.domain.repository import DataStore, Row
from portal.domain.value import RsvpType, ToggleKind, UserId

from .auth_provider import AuthProvider
from .base import Service
from .toggle_spec import TOGGLE_SPECS, ToggleMode, ToggleSpec


class PendingToggles:
    """Toggles currently being written, keyed by (kind, subject, user).

    Shared across requests so a double-submitted toggle is refused
    instead of racing its twin.

    A key is released when ``toggle`` returns, before the request's
    session commits. A twin arriving in that window does not see the
    uncommitted row and is stopped by the table's unique constraint
    instead, surfacing as the kind's conflict error. This guard only
    narrows the window; the constraint is what guarantees one row.
    """

    def __init__(self) -> None:
        self._keys: set[tuple[ToggleKind, str, UserId]] = set()

    @contextmanager
    def claim(
        self, kind: ToggleKind, subject_id: str, user_id: UserId
    ) -> Iterator[None]:
        """Hold the key for the duration of the block.

        Raises:
            ToggleInProgressError: If the key is already held
        """
        key = (kind, subject_id, user_id)
        if key in self._keys:
            raise ToggleInProgressError(kind.value, subject_id)
        self._keys.add(key)
        try:
            yield
        finally:
            self._keys.discard(key)

    def __contains__(self, key: object) -> bool:
        return key in self._keys


class ToggleService(Service):
    """Domain service reconciling member toggles with the data store."""

    def __init__(
        self,
        store: DataStore,
        auth_provider: AuthProvider,
        pending: PendingToggles | None = None,
    ) -> None:
        """Initialize toggle service.

        Args:
            store: Data store holding membership and aggregate tables
            auth_provider: Source of the current member's identity
            pending: In-flight registry shared across requests
        """
        self.store = store
        self.auth_provider = auth_provider
        self.pending = pending if pending is not None else PendingToggles()

    async def toggle(
        self, kind: ToggleKind, subject_id: Any, value: Any = None
    ) -> ToggleResult:
        """Apply a member's toggle request.

        Args:
            kind: Relationship kind
            subject_id: Poll, problem, event, job or kitchen ID
            value: Option index for poll votes, RSVP answer for RSVPs;
                for present/absent kinds None flips, True joins, False leaves

        Returns:
            New membership state and the re-read aggregate

        Raises:
            UnauthenticatedError: If nobody is signed in (no store call made)
            ValidationError: If the value or subject ID is malformed
            NotFoundError: If the subject does not exist
            AlreadyVotedError: On a second poll vote
            AlreadyRegisteredError: On a duplicate volunteer sign-up
            ConflictError: On any other duplicate write
            ToggleInProgressError: If the same toggle is still being written
            StoreError: If the data store fails
        """
        spec = TOGGLE_SPECS[kind]

        with logfire.span("toggle", kind=kind.value, subject_id=str(subject_id)):
            user_id = await self.auth_provider.current_user()
            if user_id is None:
                logfire.info("Toggle without signed-in user", kind=kind.value)
                raise UnauthenticatedError(f"change {spec.subject_label} {kind.value}")

            subject = spec.parse_subject(subject_id)
            value = self._check_value(spec, value)

            with self.pending.claim(kind, str(subject), user_id):
                match = {spec.subject_column: subject, "user_id": user_id}
                existing = await self.store.select_one(spec.table, match)

                if spec.mode is ToggleMode.SINGLE_CHOICE:
                    written = await self._cast(spec, subject, user_id, value, existing)
                elif spec.mode is ToggleMode.REPLACE:
                    written = await self._replace(
                        spec, subject, user_id, value, existing
                    )
                else:
                    written = await self._flip(spec, subject, user_id, value, existing)

                state = await self._refresh_membership(spec, subject, user_id)
                aggregate = await self._refresh_aggregate(spec, subject)

            logfire.info(
                "Toggle applied",
                kind=kind.value,
                subject_id=str(subject),
                user_id=str(user_id),
                present=state.present,
                written=written,
            )
            return ToggleResult(state=state, aggregate=aggregate, written=written)

    async def memberships(
        self, kind: ToggleKind, subject_ids: Sequence[Any]
    ) -> dict[str, MembershipState]:
        """Current member's state for each subject, in one query.

        Used to render toggle buttons. Anonymous visitors get every subject
        as absent without touching the store.

        Args:
            kind: Relationship kind
            subject_ids: Subjects to look up

        Returns:
            Mapping of subject ID (as string) to membership state
        """
        spec = TOGGLE_SPECS[kind]
        subjects = [spec.parse_subject(s) for s in subject_ids]
        states = {
            str(s): MembershipState(kind=kind, subject_id=str(s)) for s in subjects
        }
        if not subjects:
            return states

        user_id = await self.auth_provider.current_user()
        if user_id is None:
            return states

        rows = await self.store.select(
            spec.table, {spec.subject_column: subjects, "user_id": user_id}
        )
        for row in rows:
            state = self._state_from_row(spec, row)
            states[state.subject_id] = state
        return states

    def _check_value(self, spec: ToggleSpec, value: Any) -> Any:
        """Validate the requested value for the kind's mode."""
        if spec.mode is ToggleMode.SINGLE_CHOICE:
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValidationError("A poll vote needs a non-negative option index")
            return value

        if spec.mode is ToggleMode.REPLACE:
            try:
                return RsvpType(value)
            except ValueError:
                raise ValidationError(
                    f"RSVP must be one of: {', '.join(t.value for t in RsvpType)}"
                )

        if value is not None and not isinstance(value, bool):
            raise ValidationError(f"{spec.kind.value} takes no value")
        return value

    async def _require_subject(self, spec: ToggleSpec, subject: Any) -> Row | None:
        """Load the subject's aggregate row, failing if it does not exist."""
        if spec.aggregate_table is None:
            return None
        row = await self.store.select_one(spec.aggregate_table, {"id": subject})
        if row is None:
            logfire.warn(
                "Toggle on non-existent subject",
                kind=spec.kind.value,
                subject_id=str(subject),
            )
            raise NotFoundError(spec.subject_label.capitalize(), str(subject))
        return row

    async def _cast(
        self,
        spec: ToggleSpec,
        subject: Any,
        user_id: UserId,
        option_index: int,
        existing: Row | None,
    ) -> bool:
        """Record a single-choice vote; votes are never changed."""
        if existing is not None:
            logfire.warn(
                "Duplicate poll vote attempt",
                poll_id=str(subject),
                user_id=str(user_id),
            )
            raise AlreadyVotedError(str(subject))

        row = await self._require_subject(spec, subject)
        poll = Poll.model_validate(row)
        if not poll.has_option(option_index):
            raise ValidationError(
                f"Option {option_index} does not exist on poll {subject}"
            )
        if not poll.accepts_votes(datetime.now(timezone.utc)):
            raise ValidationError("This poll is closed")

        options = poll.options.model_dump()
        if row["options"] != options:
            # Vote counting works on the structured list only
            logfire.info("Normalizing legacy poll options", poll_id=str(subject))
            await self.store.update(
                spec.aggregate_table, {"id": subject}, {"options": options}
            )

        try:
            await self.store.insert(
                spec.table,
                {
                    spec.subject_column: subject,
                    "user_id": user_id,
                    spec.value_column: option_index,
                },
            )
        except ConflictError:
            # Another session voted between our read and write
            raise AlreadyVotedError(str(subject))
        return True

    async def _replace(
        self,
        spec: ToggleSpec,
        subject: Any,
        user_id: UserId,
        value: RsvpType,
        existing: Row | None,
    ) -> bool:
        """Insert, remove or replace a multi-valued relationship."""
        match = {spec.subject_column: subject, "user_id": user_id}

        if existing is None:
            await self._require_subject(spec, subject)
            await self.store.insert(
                spec.table, {**match, spec.value_column: value.value}
            )
        elif existing.get(spec.value_column) == value.value:
            await self.store.delete(spec.table, match)
        else:
            await self.store.update(spec.table, match, {spec.value_column: value.value})
        return True

    async def _flip(
        self,
        spec: ToggleSpec,
        subject: Any,
        user_id: UserId,
        want: bool | None,
        existing: Row | None,
    ) -> bool:
        """Insert or delete a present/absent relationship."""
        if want is None:
            want = existing is None
        match = {spec.subject_column: subject, "user_id": user_id}

        if want and existing is not None:
            raise self._duplicate(spec, subject)

        if want:
            await self._require_subject(spec, subject)
            try:
                await self.store.insert(spec.table, {**spec.insert_defaults, **match})
            except ConflictError:
                raise self._duplicate(spec, subject)
            return True

        if existing is None:
            return False

        await self.store.delete(spec.table, match)
        return True

    def _duplicate(self, spec: ToggleSpec, subject: Any) -> Exception:
        """Error for a relationship that already exists."""
        if spec.registration:
            return AlreadyRegisteredError(spec.subject_label, str(subject))
        return ConflictError(spec.table, f"{spec.kind.value} already recorded")

    async def _refresh_membership(
        self, spec: ToggleSpec, subject: Any, user_id: UserId
    ) -> MembershipState:
        """Re-read the member's row after a write."""
        row = await self.store.select_one(
            spec.table, {spec.subject_column: subject, "user_id": user_id}
        )
        if row is None:
            return MembershipState(kind=spec.kind, subject_id=str(subject))
        return self._state_from_row(spec, row)

    async def _refresh_aggregate(self, spec: ToggleSpec, subject: Any) -> Any:
        """Re-read the subject's server-maintained counters."""
        if spec.aggregate_table is None or spec.aggregate_model is None:
            return None
        row = await self.store.select_one(spec.aggregate_table, {"id": subject})
        return spec.aggregate_model.model_validate(row) if row else None

    def _state_from_row(self, spec: ToggleSpec, row: Row) -> MembershipState:
        """Build membership state from a stored row."""
        value: Any = None
        if spec.mode is ToggleMode.SINGLE_CHOICE:
            value = int(row[spec.value_column])
        elif spec.mode is ToggleMode.REPLACE:
            value = RsvpType(row[spec.value_column])
        return MembershipState(
            kind=spec.kind,
            subject_id=str(row[spec.subject_column]),
            present=True,
            value=value,
        )
