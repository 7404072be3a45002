"""
Persistent storage for meeting slots.

Slots live in the `slots` table of a Supabase project:

    slots(id, date, presenter_name, topic)

The table is reached through Supabase's PostgREST HTTP API:
- GET    /rest/v1/slots?select=*&order=date.asc   list all rows
- POST   /rest/v1/slots                           insert one row
- PATCH  /rest/v1/slots?id=eq.<id>                update one row

Every failure (network, HTTP status, unexpected payload) is raised as
StorageError. Deciding whether that is fatal is left to the caller.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional, Protocol

import requests

from brainslots.config import Settings
from brainslots.model import PersistedId, Slot

logger = logging.getLogger(__name__)

DEFAULT_TABLE = "slots"


class StorageError(Exception):
    """
    Raised when the slot table cannot be read or written.
    """


class SlotStore(Protocol):
    def fetch_all(self) -> List[Slot]: ...

    def insert(self, day: date, presenter_name: str, topic: str) -> List[Slot]: ...

    def update(self, slot_id: PersistedId, presenter_name: str, topic: str) -> List[Slot]: ...


def _blank_to_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def slot_from_row(row: Dict[str, Any]) -> Slot:
    """
    Convert one JSON row into a Slot.

    Raises StorageError for rows without id or with an invalid date.
    """
    if not isinstance(row, dict):
        raise StorageError(f"Unexpected row: {row!r}")

    raw_id = _blank_to_none(row.get("id"))
    if raw_id is None:
        raise StorageError(f"Row without id: {row!r}")

    try:
        day = date.fromisoformat(str(row.get("date", ""))[:10])
    except ValueError as exc:
        raise StorageError(f"Invalid date in row {raw_id}: {row.get('date')!r}") from exc

    return Slot(
        id=PersistedId(raw_id),
        date=day,
        presenter_name=_blank_to_none(row.get("presenter_name")),
        topic=_blank_to_none(row.get("topic")),
    )


def _error_message(resp: requests.Response) -> str:
    """
    PostgREST errors carry a JSON body like {"message": ..., "code": ...}.
    """
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return f"HTTP {resp.status_code}: {resp.text.strip() or resp.reason}"


class SupabaseSlotStore:
    """
    Slot table access over the Supabase REST API.
    """

    def __init__(
        self,
        url: str,
        key: str,
        table: str = DEFAULT_TABLE,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.endpoint = f"{url.rstrip('/')}/rest/v1/{table}"
        self.timeout = timeout
        self.session = session if session is not None else requests.Session()
        self.session.headers.update(
            {
                "apikey": key,
                "Authorization": f"Bearer {key}",
                "Content-Type": "application/json",
            }
        )

    def _request(self, method: str, **kwargs: Any) -> List[Dict[str, Any]]:
        try:
            resp = self.session.request(method, self.endpoint, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise StorageError(str(exc) or exc.__class__.__name__) from exc

        if not resp.ok:
            raise StorageError(_error_message(resp))

        try:
            data = resp.json()
        except ValueError as exc:
            raise StorageError("Response is not valid JSON") from exc

        if not isinstance(data, list):
            raise StorageError(f"Expected a list of rows, got {type(data).__name__}")
        return data

    def fetch_all(self) -> List[Slot]:
        rows = self._request("GET", params={"select": "*", "order": "date.asc"})
        return [slot_from_row(r) for r in rows]

    def insert(self, day: date, presenter_name: str, topic: str) -> List[Slot]:
        payload = {"date": day.isoformat(), "presenter_name": presenter_name, "topic": topic}
        rows = self._request(
            "POST",
            json=payload,
            headers={"Prefer": "return=representation"},
        )
        return [slot_from_row(r) for r in rows]

    def update(self, slot_id: PersistedId, presenter_name: str, topic: str) -> List[Slot]:
        payload = {"presenter_name": presenter_name, "topic": topic}
        rows = self._request(
            "PATCH",
            params={"id": f"eq.{slot_id.value}"},
            json=payload,
            headers={"Prefer": "return=representation"},
        )
        return [slot_from_row(r) for r in rows]


def build_store(settings: Settings) -> SupabaseSlotStore:
    logger.info("Using slot table at %s", settings.supabase_url or "(no SUPABASE_URL set)")
    return SupabaseSlotStore(settings.supabase_url, settings.supabase_key)
