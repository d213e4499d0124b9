from __future__ import annotations

from typing import Any, Dict, Optional, Set

from form_validator.engine.classifier import classify, has_external_error
from form_validator.engine.ledger import MessageLedger
from form_validator.engine.probe import (
    binding_of,
    label_hint_of,
    node_id_of,
    read_property,
    set_value_state,
    state_key,
    value_state,
    value_state_text,
)
from form_validator.engine.strategies import (
    VALUE_STATE_PROPERTY,
    CheckOutcome,
    check_constraint,
    check_external_error,
    check_required,
)
from form_validator.engine.walk import flatten_children, walk
from form_validator.errors import StructuralMismatch
from form_validator.models.messages import MessageRecord, make_target
from form_validator.models.profile import ValidatorProfile
from form_validator.models.session import ValidationSession
from form_validator.models.state import MessageType, Origin, Strategy, ValueState
from form_validator.nodes.capabilities import Bindable


class FormValidator:
    """Recursive validator for a tree of form controls.

    Usage::

        validator = FormValidator()
        if not validator.validate(form):
            for record in validator.ledger:
                print(record.context_label, record.text)

    ``validate`` returns the verdict of one pass and refreshes the ledger.
    ``is_valid`` repeats that verdict, and is False before any pass (or after
    :meth:`clear_value_state`).

    Error states set by the validator are remembered by control id, so on the
    next pass they are not mistaken for errors set by application code. An
    application error that a failing check had to overwrite is remembered too
    and reported again on every pass until the check passes.
    """

    def __init__(self, profile: Optional[ValidatorProfile] = None, ledger: Optional[MessageLedger] = None) -> None:
        self.profile = profile or ValidatorProfile()
        self.ledger = ledger if ledger is not None else MessageLedger()
        self._session: Optional[ValidationSession] = None
        self._engine_states: Set[str] = set()
        self._external_texts: Dict[str, str] = {}

    @property
    def session(self) -> Optional[ValidationSession]:
        """The last validation session (None before any pass or after a reset)."""
        return self._session

    def is_valid(self) -> bool:
        return self._session is not None and self._session.is_valid

    # ------------------------------------------------------------------
    # validate
    # ------------------------------------------------------------------

    def validate(self, root: Any) -> bool:
        session = ValidationSession()
        self._session = session
        self.ledger.begin_pass()
        try:
            walk(
                root,
                lambda node, parent: self._validate_node(node, parent, session),
                self.profile.container_slots,
                on_skip=lambda node, reason: self._on_skip(session, node, reason),
                on_mismatch=lambda node, slot, exc: self._on_mismatch(session, exc),
            )
        except Exception as exc:
            session.fail(f"validation aborted: {exc!r}")
        finally:
            session.finish()
            self.ledger.end_pass()
            self.ledger.refresh()
        return self.is_valid()

    def _validate_node(self, node: Any, parent: Optional[Any], session: ValidationSession) -> bool:
        key = state_key(node)

        # An application error overwritten by a failing check last pass is put back first.
        remembered = self._external_texts.pop(key, None)
        if remembered is not None and key in self._engine_states:
            set_value_state(node, ValueState.ERROR, remembered)
            self._engine_states.discard(key)

        external = has_external_error(node, self._engine_states)
        external_text = value_state_text(node) if external else ""

        classification = classify(node, self.profile, engine_states=self._engine_states)
        strategy = classification.strategy
        if strategy is Strategy.NONE:
            session.recursed += 1
            return True

        if strategy is Strategy.EXTERNAL_ERROR:
            outcome = check_external_error(node, self.profile)
        elif strategy is Strategy.REQUIRED:
            outcome = check_required(node, self.profile)
            if outcome.valid and classification.constraint_property is not None:
                outcome = check_constraint(node, classification.constraint_property, self.profile)
        else:
            outcome = check_constraint(node, classification.constraint_property, self.profile)

        session.record(outcome.valid, key)
        if strategy is not Strategy.EXTERNAL_ERROR:
            if outcome.skipped:
                # nothing was checked: drop an error this validator left behind earlier
                if key in self._engine_states:
                    set_value_state(node, ValueState.NONE, "")
                    self._engine_states.discard(key)
            elif outcome.valid:
                self._engine_states.discard(key)
            else:
                self._engine_states.add(key)
        if not outcome.valid:
            self._emit(node, parent, outcome)

        # A custom error set by application code coexisting with a structural check.
        if external and strategy is not Strategy.EXTERNAL_ERROR:
            if outcome.valid:
                set_value_state(node, ValueState.ERROR, external_text)
            else:
                self._external_texts[key] = external_text
            session.record(False, key)
            self._emit(
                node,
                parent,
                CheckOutcome(
                    valid=False,
                    prop=VALUE_STATE_PROPERTY,
                    message=external_text or self.profile.external_error_message,
                ),
            )
        return False

    def _emit(self, node: Any, parent: Optional[Any], outcome: CheckOutcome) -> MessageRecord:
        control_id = node_id_of(node)
        bindable = isinstance(node, Bindable)
        binding = binding_of(node, outcome.prop) if outcome.prop else None
        state = value_state(node)
        severity = MessageType.from_value_state(state) if state not in (None, ValueState.NONE) else MessageType.ERROR

        record = MessageRecord(
            target=make_target(control_id if bindable else None, outcome.prop),
            text=outcome.message or self.profile.external_error_message,
            severity=severity,
            origin=Origin.ENGINE,
            context_label=self._context_label(node, parent),
            data_path=binding.full_path if binding is not None else None,
            control_id=control_id or None,
        )
        return self.ledger.upsert(record)

    def _context_label(self, node: Any, parent: Optional[Any]) -> Optional[str]:
        """Label hint of the node, else a sibling label pointing at it, else the preceding label."""
        hint = label_hint_of(node)
        if hint:
            return hint
        if parent is None:
            return None

        control_id = node_id_of(node)
        siblings = flatten_children(parent, self.profile.container_slots)
        for sibling in siblings:
            if not control_id or getattr(sibling, "kind", None) != "label":
                continue
            if getattr(sibling, "label_for", None) == control_id:
                return self._label_text(sibling)

        for i, sibling in enumerate(siblings):
            if sibling is node or (control_id and node_id_of(sibling) == control_id):
                if i > 0 and getattr(siblings[i - 1], "kind", None) == "label":
                    return self._label_text(siblings[i - 1])
                break
        return None

    @staticmethod
    def _label_text(label: Any) -> Optional[str]:
        try:
            text = read_property(label, "text")
        except Exception:
            return None
        return str(text) if text else None

    @staticmethod
    def _on_skip(session: ValidationSession, node: Any, reason: str) -> None:
        session.skipped += 1
        if reason == "unrecognized":
            session.warn(f"skipped unrecognized child {type(node).__name__}")

    @staticmethod
    def _on_mismatch(session: ValidationSession, exc: StructuralMismatch) -> None:
        session.warn(str(exc))

    # ------------------------------------------------------------------
    # clear_value_state
    # ------------------------------------------------------------------

    def clear_value_state(self, root: Any) -> None:
        """Reset the value state of every node under ``root`` to NONE.

        Invisible nodes are reset too. The ledger is not touched; the current
        session is discarded, so :meth:`is_valid` is False until the next pass.
        """

        def _clear(node: Any, parent: Optional[Any]) -> bool:
            if value_state(node) is not None:
                set_value_state(node, ValueState.NONE, "")
                key = state_key(node)
                self._engine_states.discard(key)
                self._external_texts.pop(key, None)
            return True

        walk(root, _clear, self.profile.container_slots, include_invisible=True)
        self._session = None
