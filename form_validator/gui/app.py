from __future__ import annotations

from typing import Any, Optional

import ipywidgets as w

from form_validator.engine.validator import FormValidator
from form_validator.errors import ConstraintError, ParseError
from form_validator.gui.form_panel import build_form_panel
from form_validator.gui.widget_nodes import WidgetForm
from form_validator.models.profile import ValidatorProfile


# Keep a single active GUI instance per kernel to avoid duplicated callbacks / stacked widgets.
_ACTIVE_GUI: Optional[w.Widget] = None


class _WholeNumber:
    """Sample bound type for the demo: a whole number within [minimum, maximum]."""

    def __init__(self, minimum: int, maximum: int) -> None:
        self.minimum = minimum
        self.maximum = maximum

    def parse_value(self, value: Any, internal_type: Optional[str] = None) -> int:
        try:
            return int(str(value).strip())
        except ValueError:
            raise ParseError(f"'{value}' is not a whole number.") from None

    def validate_value(self, value: int) -> None:
        if not (self.minimum <= value <= self.maximum):
            raise ConstraintError(f"Enter a number between {self.minimum} and {self.maximum}.")


def _ledger_table_html(validator: FormValidator) -> str:
    df = validator.ledger.to_frame()
    if df.empty:
        return "<i>Ledger is empty.</i>"
    return df[["target", "severity", "context_label", "text", "data_path"]].to_html(index=False, border=0)


def build_demo_gui() -> w.Widget:
    """
    Demo registration form wired to a FormValidator (Jupyter / VSCode notebooks).

    Shows the validation panel next to a live table of the message ledger.

    Notes on "widget multiplication":
      - This function closes the previous GUI instance created from this module.
    """
    global _ACTIVE_GUI

    # Close previous instance created from this module (do NOT close all widgets).
    if _ACTIVE_GUI is not None:
        _ACTIVE_GUI.close()
        _ACTIVE_GUI = None

    name = w.Text(description="Name", placeholder="Your full name", layout=w.Layout(width="420px"))
    age = w.Text(description="Age", placeholder="e.g. 42", layout=w.Layout(width="220px"))
    country = w.Dropdown(
        description="Country",
        options=[("Switzerland", "CH"), ("France", "FR"), ("Italy", "IT")],
        value=None,
        layout=w.Layout(width="320px"),
    )
    interests = w.TagsInput(allowed_tags=["physics", "python", "music", "hiking"], allow_duplicates=False)
    newsletter = w.Checkbox(description="Newsletter", value=False)

    form_box = w.VBox([name, age, country, w.Label("Interests"), interests, newsletter])
    form = WidgetForm(form_box)
    form.field(name, required=True, path="name", context_path="/person")
    form.field(age, required=True, data_type=_WholeNumber(0, 150), path="age", context_path="/person")
    form.field(country, required=True, path="country", context_path="/person")
    form.field(interests, required=True, path="interests", context_path="/person")

    validator = FormValidator(ValidatorProfile.for_widgets())
    panel = build_form_panel(form, validator=validator, title="Registration")

    table = w.HTML(_ledger_table_html(validator))
    validator.ledger.subscribe(lambda _ledger: setattr(table, "value", _ledger_table_html(validator)))

    gui = w.HBox([panel, w.VBox([w.HTML("<b>Ledger</b>"), table], layout=w.Layout(padding="0 0 0 16px"))])

    _ACTIVE_GUI = gui
    return gui
