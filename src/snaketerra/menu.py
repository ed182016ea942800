"""Cursor model behind the main menu and the difficulty picker."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class MenuItem:
    """A labelled choice; disabled choices are shown but never land under the cursor."""

    label: str
    action: str
    enabled: bool = True


class Menu:
    """Wrapping cursor over a row or column of choices."""

    def __init__(self, title: str, items: list[MenuItem], selected: str | None = None) -> None:
        if not any(item.enabled for item in items):
            raise ValueError(f"menu {title!r} has no enabled items")
        self.title = title
        self.items = items
        self.selected_index = 0
        if selected is None or not self.select(selected):
            self._settle(1)

    def _settle(self, step: int) -> None:
        while not self.items[self.selected_index].enabled:
            self.selected_index = (self.selected_index + step) % len(self.items)

    def move(self, delta: int) -> None:
        """Shift the cursor by delta, wrapping and stepping over disabled items."""
        step = 1 if delta >= 0 else -1
        for _ in range(abs(delta)):
            self.selected_index = (self.selected_index + step) % len(self.items)
            self._settle(step)

    def select(self, action: str) -> bool:
        """Put the cursor on the enabled item with this action; False if there is none."""
        for idx, item in enumerate(self.items):
            if item.action == action and item.enabled:
                self.selected_index = idx
                return True
        return False

    def current_action(self) -> str:
        return self.items[self.selected_index].action

    def labels(self) -> list[str]:
        return [item.label for item in self.items]
