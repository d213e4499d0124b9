"""Message ledger -- the keyed store of message records shared with the display side.

Engine-owned records are keyed by target; a second record for the same target
updates the existing one in place (same object, same position). Foreign
records are stored next to them and never touched by the engine.

A validation pass is bracketed by :meth:`MessageLedger.begin_pass` and
:meth:`MessageLedger.end_pass`: engine-owned records that were not upserted
during the pass are dropped at the end, so the ledger always mirrors the last
pass while surviving records keep their identity.
"""

from __future__ import annotations

import itertools
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

import pandas as pd

from form_validator.models.messages import MessageRecord
from form_validator.models.state import Origin

Subscriber = Callable[["MessageLedger"], None]
_Key = Tuple[Origin, str]

FRAME_COLUMNS = ["target", "text", "severity", "origin", "context_label", "data_path", "control_id"]


class MessageLedger:
    def __init__(self) -> None:
        self._records: Dict[_Key, MessageRecord] = {}
        self._anon = itertools.count(1)
        self._touched: Set[_Key] = set()
        self._subscribers: List[Subscriber] = []
        self.revision = 0

    # -------------------------
    # Read side
    # -------------------------
    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[MessageRecord]:
        return iter(list(self._records.values()))

    def records(self, origin: Optional[Origin] = None) -> List[MessageRecord]:
        if origin is None:
            return list(self._records.values())
        origin = Origin(origin)
        return [r for r in self._records.values() if r.origin == origin]

    def get(self, target: str, origin: Origin = Origin.ENGINE) -> Optional[MessageRecord]:
        if not target:
            return None
        return self._records.get((Origin(origin), target))

    def for_control(self, control_id: str) -> List[MessageRecord]:
        return [r for r in self._records.values() if r.control_id == control_id]

    def to_frame(self) -> pd.DataFrame:
        """Records as a DataFrame (one row per record, insertion order)."""
        rows = [r.to_dict() for r in self._records.values()]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)

    # -------------------------
    # Write side
    # -------------------------
    def _key(self, record: MessageRecord) -> _Key:
        if record.origin == Origin.ENGINE and record.target:
            return (Origin.ENGINE, record.target)
        return (Origin(record.origin), f"#{next(self._anon)}")

    def add(self, record: MessageRecord) -> MessageRecord:
        """Add a record of any origin; engine-owned records are upserted."""
        if record.origin == Origin.ENGINE:
            return self.upsert(record)
        self._records[self._key(record)] = record
        return record

    def upsert(self, record: MessageRecord) -> MessageRecord:
        """Insert an engine-owned record, or update the one with the same target.

        Returns the record now stored in the ledger.
        """
        if record.origin != Origin.ENGINE:
            raise ValueError("upsert() manages engine-owned records only; use add() for foreign records.")

        key = self._key(record)
        existing = self._records.get(key)
        if existing is None:
            self._records[key] = record
            stored = record
        else:
            existing.text = record.text
            existing.severity = record.severity
            existing.context_label = record.context_label
            existing.data_path = record.data_path
            existing.control_id = record.control_id
            stored = existing
        self._touched.add(key)
        return stored

    def remove(self, target: str, origin: Origin = Origin.ENGINE) -> bool:
        return self._records.pop((Origin(origin), target), None) is not None

    def remove_all_owned_by(self, origin: Origin = Origin.ENGINE) -> int:
        """Drop every record of ``origin``; returns how many were removed."""
        origin = Origin(origin)
        keys = [k for k, r in self._records.items() if r.origin == origin]
        for k in keys:
            del self._records[k]
        return len(keys)

    def begin_pass(self) -> None:
        self._touched = set()

    def end_pass(self) -> int:
        """Drop engine-owned records not upserted since :meth:`begin_pass`."""
        stale = [
            k for k, r in self._records.items()
            if r.origin == Origin.ENGINE and k not in self._touched
        ]
        for k in stale:
            del self._records[k]
        self._touched = set()
        return len(stale)

    # -------------------------
    # Change notification
    # -------------------------
    def subscribe(self, callback: Subscriber) -> None:
        if callback not in self._subscribers:
            self._subscribers.append(callback)

    def unsubscribe(self, callback: Subscriber) -> None:
        if callback in self._subscribers:
            self._subscribers.remove(callback)

    def refresh(self) -> None:
        """Bump the revision and notify subscribers (end of every validation pass)."""
        self.revision += 1
        for callback in list(self._subscribers):
            callback(self)
