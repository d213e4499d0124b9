"""
Form panel -- a widget form wired to a FormValidator.

Layout:
  [ form ]
  [ Validate ] [ Reset ]  status
  messages (HtmlMessageView on the validator's ledger)
  diagnostics (session warnings, CHECK: lines)

Design goals:
- The engine stays UI-agnostic; this module only wraps the tree and renders results.
- Reset only clears value states; the message list is refreshed by the next Validate.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import ipywidgets as w

from form_validator.engine.validator import FormValidator
from form_validator.gui.message_view import HtmlMessageView, render_notes
from form_validator.gui.widget_nodes import STATE_COLORS, WidgetForm
from form_validator.models.profile import ValidatorProfile
from form_validator.models.state import ValueState


@dataclass
class _PanelState:
    busy: bool = False
    passes: int = 0
    last_result: Optional[bool] = None


def _status_html(text: str, color: str = "#222222") -> str:
    return f"<span style='color:{color};'>{text}</span>"


def build_form_panel(
    form: WidgetForm,
    *,
    validator: Optional[FormValidator] = None,
    title: Optional[str] = None,
) -> w.Widget:
    """
    Build the validation panel around ``form.root``.

    validator:
      Engine to use; defaults to one with :meth:`ValidatorProfile.for_widgets`.
      Pass your own to share its ledger with other views.
    """
    if validator is None:
        validator = FormValidator(ValidatorProfile.for_widgets())

    st = _PanelState()

    btn_validate = w.Button(description="Validate", button_style="primary", layout=w.Layout(width="120px"))
    btn_reset = w.Button(description="Reset", layout=w.Layout(width="120px"))
    status = w.HTML(_status_html("Not validated yet.", "#666666"))
    messages = HtmlMessageView(validator.ledger, title="Messages")
    diagnostics = w.HTML()

    def _on_validate(_):
        if st.busy:
            return
        st.busy = True
        try:
            ok = validator.validate(form.node())
            st.passes += 1
            st.last_result = ok
            session = validator.session
            n_failed = len(session.failed_ids) if session is not None else 0
            if ok:
                status.value = _status_html("Form is valid.", STATE_COLORS[ValueState.SUCCESS])
            else:
                status.value = _status_html(
                    f"{n_failed} field(s) need attention.", STATE_COLORS[ValueState.ERROR]
                )
            diagnostics.value = render_notes(session.warnings if session is not None else [])
        finally:
            st.busy = False

    def _on_reset(_):
        validator.clear_value_state(form.node())
        st.last_result = None
        status.value = _status_html("Form reset.", "#666666")
        diagnostics.value = ""

    btn_validate.on_click(_on_validate)
    btn_reset.on_click(_on_reset)

    children = []
    if title:
        children.append(w.HTML(f"<b>{title}</b>"))
    children += [form.root, w.HBox([btn_validate, btn_reset, status]), messages.panel, diagnostics]
    return w.VBox(children)
