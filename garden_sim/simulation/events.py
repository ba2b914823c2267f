"""Notification log: history plus a modal display stack."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Optional


@dataclass
class Notification:
    """A message surfaced to the player."""

    id: int
    title: str
    message: str
    timestamp: int
    is_new: bool = True
    kind: str = ""
    on_dismiss: Optional[Callable[[], None]] = field(default=None, repr=False, compare=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "message": self.message,
            "timestamp": self.timestamp,
            "is_new": self.is_new,
            "kind": self.kind,
        }


class NotificationLog:
    """History (newest first) and a display stack (top = most recent)."""

    def __init__(self) -> None:
        self.history: list[Notification] = []
        self._stack: list[Notification] = []
        self._next_id: int = 1

    @property
    def stack(self) -> list[Notification]:
        """Display stack, most recent first."""
        return list(reversed(self._stack))

    @property
    def current(self) -> Optional[Notification]:
        return self._stack[-1] if self._stack else None

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.history if n.is_new)

    def emit(
        self,
        title: str,
        message: str,
        on_dismiss: Optional[Callable[[], None]] = None,
        timestamp: int = 0,
        kind: str = "",
    ) -> int:
        """Record a notification and show it. Returns its id.

        A title already waiting on the display stack is not pushed twice.
        """
        note = Notification(
            id=self._next_id,
            title=title,
            message=message,
            timestamp=timestamp,
            kind=kind,
            on_dismiss=on_dismiss,
        )
        self._next_id += 1
        self.history.insert(0, note)
        if not any(n.title == title for n in self._stack):
            self._stack.append(note)
        return note.id

    def dismiss(self) -> Optional[Notification]:
        """Pop the top of the display stack and run its callback."""
        if not self._stack:
            return None
        note = self._stack.pop()
        if note.on_dismiss is not None:
            note.on_dismiss()
        return note

    def open_history(self) -> list[Notification]:
        """Mark every entry read and return the history."""
        for note in self.history:
            note.is_new = False
        return list(self.history)

    def count(self, kind: str) -> int:
        """How many notifications of `kind` were ever emitted."""
        return sum(1 for n in self.history if n.kind == kind)
