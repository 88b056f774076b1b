from __future__ import annotations

import re
from dataclasses import dataclass, field

"""Trace buffer used to rebuild hierarchical budget codes.

Budget reports leave the code cell blank on continuation rows; the code is
implied by the last fully specified ancestor. The trace remembers the most
recently seen segment at each of the seven hierarchy levels. Once all seven
are known, a new segment replaces the level its shape belongs to:

    3 digits -> level 4 / digit + letter -> level 5 / 6 digit akun -> level 6

One TraceBuffer per conversion run. Never share an instance between runs.
"""

__all__ = [
    "TRACE_CAPACITY",
    "TraceBuffer",
    "HierarchyState",
]

TRACE_CAPACITY = 7

_SIX_DIGITS = re.compile(r"^[0-9]{6}$")
_THREE_DIGITS = re.compile(r"^[0-9]{3}$")
_DIGIT_LETTER = re.compile(r"^[0-9][a-zA-Z]$")

# (pattern, slot): 満杯時の上書き先
_OVERWRITE_RULES: tuple[tuple[re.Pattern[str], int], ...] = (
    (_SIX_DIGITS, 6),
    (_THREE_DIGITS, 4),
    (_DIGIT_LETTER, 5),
)


class TraceBuffer:
    """Fixed-capacity list of the latest code segment per hierarchy level."""

    def __init__(self) -> None:
        self._slots: list[str] = []

    def __len__(self) -> int:
        return len(self._slots)

    def __contains__(self, segment: object) -> bool:
        return segment in self._slots

    @property
    def slots(self) -> tuple[str, ...]:
        return tuple(self._slots)

    @property
    def is_full(self) -> bool:
        return len(self._slots) >= TRACE_CAPACITY

    def observe(self, segment: str) -> None:
        """Record a segment seen in an explicit code cell.

        Segments already present anywhere are ignored. Until the buffer is full
        segments are appended; afterwards only segments with a recognised shape
        overwrite their level's slot, anything else is dropped.
        """
        if segment in self._slots:
            return
        if not self.is_full:
            self._slots.append(segment)
            return
        for pattern, slot in _OVERWRITE_RULES:
            if pattern.fullmatch(segment):
                self._slots[slot] = segment
                return

    def join(self) -> str:
        return ".".join(self._slots)


@dataclass
class HierarchyState:
    """Per-run state of the code builder: the trace plus the codes emitted so far."""
    trace: TraceBuffer = field(default_factory=TraceBuffer)
    codes: list[str] = field(default_factory=list)

    def emit_explicit(self, code: str) -> None:
        self.codes.append(code)
        for segment in code.split(".") if "." in code else [code]:
            self.trace.observe(segment)

    def emit_inherited(self) -> str:
        code = self.trace.join()
        self.codes.append(code)
        return code
