"""Named modal dialogs that widgets can open without knowing their screens."""

from __future__ import annotations

from typing import Any, Callable

from textual.app import App
from textual.screen import ModalScreen


class Modal:
    """A modal dialog that can be opened repeatedly.

    Args:
        app: The application that hosts the screen stack.
        factory: Builds a fresh screen on every :meth:`open`.
        on_result: Called with the dismiss value of the screen.
    """

    def __init__(
        self,
        app: App,
        factory: Callable[[], ModalScreen],
        on_result: Callable[[Any], None] | None = None,
    ) -> None:
        self._app = app
        self._factory = factory
        self._on_result = on_result

    def open(self) -> None:
        """Push a new instance of the screen."""
        self._app.push_screen(self._factory(), callback=self._on_result)


class ModalRegistry:
    """Lookup of modals by name (e.g. ``"new_income"``)."""

    def __init__(self) -> None:
        self._modals: dict[str, Modal] = {}

    def register(self, name: str, modal: Modal) -> None:
        """Register *modal* under *name*, replacing any previous entry."""
        self._modals[name] = modal

    def get(self, name: str) -> Modal:
        """Return the modal registered under *name*.

        Raises:
            KeyError: If no modal has that name.
        """
        try:
            return self._modals[name]
        except KeyError:
            raise KeyError(f"Unknown modal: {name}") from None
