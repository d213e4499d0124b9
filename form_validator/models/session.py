from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass
class ValidationSession:
    """State of one ``FormValidator.validate`` call.

    ``overall_valid`` starts True and can only go False during the session.
    ``has_run`` is set once the top-level traversal returned; the verdict is
    only meaningful after that.

    The counters and ``warnings`` are diagnostics in the ``CHECK:`` / ``ERROR:``
    convention of the GUI log. Only ``ERROR:`` lines (from :meth:`fail`) come
    with an invalid verdict.
    """

    overall_valid: bool = True
    has_run: bool = False

    checked: int = 0
    skipped: int = 0
    recursed: int = 0
    failed_ids: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def record(self, verdict: bool, control_id: str) -> None:
        self.checked += 1
        if not verdict:
            self.overall_valid = False
            if control_id not in self.failed_ids:
                self.failed_ids.append(control_id)

    def warn(self, message: str) -> None:
        self.warnings.append(f"CHECK: {message}")

    def fail(self, message: str) -> None:
        """Mark the session invalid for a reason outside any single check."""
        self.overall_valid = False
        self.warnings.append(f"ERROR: {message}")

    def finish(self) -> None:
        self.has_run = True

    @property
    def is_valid(self) -> bool:
        return self.has_run and self.overall_valid
