from __future__ import annotations

import html
from typing import Iterable, List, Optional

import ipywidgets as w

from form_validator.engine.ledger import MessageLedger
from form_validator.gui.widget_nodes import STATE_COLORS
from form_validator.models.messages import MessageRecord
from form_validator.models.state import MessageType, ValueState

_MONO = "font-family:ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, Liberation Mono, Courier New, monospace;"


def severity_color(severity: MessageType) -> str:
    return STATE_COLORS.get(ValueState(MessageType(severity).value), "#222222")  # near-black


def _box(inner: str, height_px: int) -> str:
    return (
        f"<div style='border:1px solid #ddd; padding:8px; max-height:{height_px}px; "
        f"overflow-y:auto; background:#fff;'>{inner}</div>"
    )


def render_records(records: Iterable[MessageRecord], *, max_entries: int = 200, empty_text: str = "No messages.") -> str:
    rows: List[str] = []
    records = list(records)
    for r in records[:max_entries]:
        label = f"<b>{html.escape(r.context_label)}</b>: " if r.context_label else ""
        path = f" <span style='color:#666;'>[{html.escape(r.data_path)}]</span>" if r.data_path else ""
        rows.append(
            f"<div style='color:{severity_color(r.severity)}; white-space:pre-wrap;'>"
            f"{label}{html.escape(r.text)}{path}</div>"
        )
    if len(records) > max_entries:
        rows.append(f"<div style='color:#666;'>... {len(records) - max_entries} more</div>")
    return "".join(rows) if rows else f"<div style='color:#666;'>{html.escape(empty_text)}</div>"


def render_notes(lines: Iterable[str]) -> str:
    """Diagnostics lines: ``ERROR:`` in red, ``CHECK:`` warnings in orange, anything else near-black."""
    rows = []
    for line in lines:
        s = (line or "").lstrip()
        if s.startswith("ERROR:"):
            color = STATE_COLORS[ValueState.ERROR]
        elif s.startswith(("CHECK:", "WARNING:")):
            color = STATE_COLORS[ValueState.WARNING]
        else:
            color = "#222222"
        rows.append(f"<div style='color:{color}; white-space:pre-wrap; {_MONO}'>{html.escape(line)}</div>")
    return "".join(rows)


class HtmlMessageView:
    """
    Ledger view based on a single HTML widget.

    Subscribes to a :class:`MessageLedger` and re-renders after every
    validation pass:
      - severity colouring: errors in red, warnings in orange
      - field label and data path next to each message
      - bounded rendering (shows "... N more" beyond max_entries)
    """

    def __init__(
        self,
        ledger: MessageLedger,
        *,
        title: Optional[str] = None,
        height_px: int = 160,
        max_entries: int = 200,
    ) -> None:
        self.ledger = ledger
        self._height_px = int(height_px)
        self._max_entries = int(max_entries)
        self.widget = w.HTML()
        if title:
            self.panel = w.VBox([w.HTML(f"<b>{html.escape(str(title))}</b>"), self.widget])
        else:
            self.panel = self.widget
        ledger.subscribe(self._on_refresh)
        self.render()

    def close(self) -> None:
        self.ledger.unsubscribe(self._on_refresh)

    def render(self) -> None:
        inner = render_records(self.ledger.records(), max_entries=self._max_entries)
        self.widget.value = _box(inner, self._height_px)

    def _on_refresh(self, _ledger: MessageLedger) -> None:
        self.render()
