"""Tests for MessageLedger: keyed upsert, foreign records, pass sweep, notification."""

from __future__ import annotations

import pytest

from form_validator.engine.ledger import FRAME_COLUMNS, MessageLedger
from form_validator.models.messages import MessageRecord
from form_validator.models.state import MessageType, Origin


def _engine(target: str, text: str = "Please fill this mandatory field!", **kw) -> MessageRecord:
    return MessageRecord(target=target, text=text, **kw)


def _foreign(target: str = "", text: str = "Server unavailable") -> MessageRecord:
    return MessageRecord(target=target, text=text, origin=Origin.FOREIGN)


# ---------------------------------------------------------------------------
# Upsert
# ---------------------------------------------------------------------------


def test_upsert_inserts_then_updates_in_place() -> None:
    ledger = MessageLedger()
    first = ledger.upsert(_engine("name/value", control_id="name"))
    second = ledger.upsert(_engine("name/value", text="Enter your name", control_id="name"))
    assert second is first
    assert len(ledger) == 1
    assert first.text == "Enter your name"


def test_upsert_keeps_position() -> None:
    ledger = MessageLedger()
    ledger.upsert(_engine("a/value"))
    ledger.upsert(_engine("b/value"))
    ledger.upsert(_engine("a/value", text="changed"))
    assert [r.target for r in ledger] == ["a/value", "b/value"]
    assert ledger.get("a/value").text == "changed"


def test_upsert_rejects_foreign_records() -> None:
    ledger = MessageLedger()
    with pytest.raises(ValueError):
        ledger.upsert(_foreign())


def test_empty_target_records_never_collide() -> None:
    ledger = MessageLedger()
    ledger.upsert(_engine(""))
    ledger.upsert(_engine(""))
    assert len(ledger) == 2
    assert ledger.get("") is None


# ---------------------------------------------------------------------------
# Foreign records and ownership
# ---------------------------------------------------------------------------


def test_foreign_records_sit_alongside_engine_records() -> None:
    ledger = MessageLedger()
    foreign = ledger.add(_foreign("name/value", text="Name already taken"))
    ledger.add(_engine("name/value"))
    assert len(ledger) == 2
    assert ledger.records(Origin.FOREIGN) == [foreign]
    assert ledger.get("name/value", Origin.ENGINE).text == "Please fill this mandatory field!"


def test_remove_all_owned_by_leaves_foreign_records() -> None:
    ledger = MessageLedger()
    ledger.add(_foreign())
    ledger.upsert(_engine("a/value"))
    ledger.upsert(_engine("b/value"))
    assert ledger.remove_all_owned_by(Origin.ENGINE) == 2
    assert [r.origin for r in ledger] == [Origin.FOREIGN]


def test_remove_single_target() -> None:
    ledger = MessageLedger()
    ledger.upsert(_engine("a/value"))
    assert ledger.remove("a/value") is True
    assert ledger.remove("a/value") is False


def test_for_control() -> None:
    ledger = MessageLedger()
    ledger.upsert(_engine("a/value", control_id="a"))
    ledger.upsert(_engine("a/value_state", text="Wrong input", control_id="a"))
    ledger.upsert(_engine("b/value", control_id="b"))
    assert [r.target for r in ledger.for_control("a")] == ["a/value", "a/value_state"]


# ---------------------------------------------------------------------------
# Pass sweep
# ---------------------------------------------------------------------------


def test_end_pass_drops_untouched_engine_records_only() -> None:
    ledger = MessageLedger()
    ledger.add(_foreign())
    ledger.begin_pass()
    kept = ledger.upsert(_engine("a/value"))
    ledger.upsert(_engine("b/value"))
    ledger.end_pass()

    ledger.begin_pass()
    ledger.upsert(_engine("a/value", text="still empty"))
    assert ledger.end_pass() == 1

    assert [r.target for r in ledger.records(Origin.ENGINE)] == ["a/value"]
    assert ledger.get("a/value") is kept
    assert len(ledger.records(Origin.FOREIGN)) == 1


def test_empty_pass_clears_engine_records() -> None:
    ledger = MessageLedger()
    ledger.upsert(_engine("a/value"))
    ledger.begin_pass()
    ledger.end_pass()
    assert len(ledger) == 0


# ---------------------------------------------------------------------------
# Notification and export
# ---------------------------------------------------------------------------


def test_refresh_notifies_subscribers() -> None:
    ledger = MessageLedger()
    calls = []
    cb = calls.append
    ledger.subscribe(cb)
    ledger.subscribe(cb)  # second subscribe is a no-op
    ledger.refresh()
    assert calls == [ledger]
    assert ledger.revision == 1

    ledger.unsubscribe(cb)
    ledger.refresh()
    assert calls == [ledger]
    assert ledger.revision == 2


def test_to_frame_columns_and_values() -> None:
    ledger = MessageLedger()
    ledger.upsert(_engine("age/value", text="Enter a number", control_id="age", data_path="/person/age"))
    ledger.add(_foreign())
    df = ledger.to_frame()
    assert list(df.columns) == FRAME_COLUMNS
    assert len(df) == 2
    assert df.loc[0, "severity"] == MessageType.ERROR.value
    assert df.loc[0, "data_path"] == "/person/age"
    assert df.loc[1, "origin"] == Origin.FOREIGN.value


def test_to_frame_empty() -> None:
    df = MessageLedger().to_frame()
    assert list(df.columns) == FRAME_COLUMNS
    assert df.empty
