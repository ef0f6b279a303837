"""Bind the lookup state to the visitor's Django session."""
from __future__ import annotations

from typing import Any, MutableMapping

from skycast.core.abstractions import ApplicationState


class SessionStateStore:
    """Load and save :class:`ApplicationState` and the query text in a session."""

    STATE_KEY = "skycast.state"
    QUERY_KEY = "skycast.query"
    STARTED_KEY = "skycast.started"

    def __init__(self, session: MutableMapping[str, Any]) -> None:
        self._session = session

    def load(self) -> ApplicationState:
        return ApplicationState.from_dict(self._session.get(self.STATE_KEY))

    def save(self, state: ApplicationState) -> None:
        self._session[self.STATE_KEY] = state.as_dict()

    @property
    def query(self) -> str:
        return self._session.get(self.QUERY_KEY, "")

    @query.setter
    def query(self, value: str) -> None:
        self._session[self.QUERY_KEY] = value

    @property
    def started(self) -> bool:
        return bool(self._session.get(self.STARTED_KEY, False))

    def mark_started(self) -> None:
        self._session[self.STARTED_KEY] = True
