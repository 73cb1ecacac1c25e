"""Confirmation modal and the gate that guards destructive actions."""

from __future__ import annotations

from typing import Callable, Protocol

from textual.app import App, ComposeResult
from textual.containers import Horizontal, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Label, Static


class ConfirmationGate(Protocol):
    """Asks the user a yes/no question before a destructive action."""

    def ask(self, message: str, on_answer: Callable[[bool], None]) -> None:
        """Ask *message*; call *on_answer* with ``True`` only on explicit consent."""


class ConfirmModal(ModalScreen[bool]):
    """A modal dialog asking to confirm a deletion."""

    BINDINGS = [
        ("escape", "cancel", "Cancel"),
    ]

    def __init__(self, message: str, title: str = "Are you sure?") -> None:
        """Initialize the modal.

        Args:
            message: The question shown to the user.
            title: Dialog heading.
        """
        super().__init__()
        self.message = message
        self.title_text = title

    def compose(self) -> ComposeResult:
        """Create the modal layout."""
        with Vertical(id="confirm-dialog"):
            yield Label(self.title_text, id="confirm-title")
            yield Static(self.message, id="confirm-message")
            with Horizontal(id="confirm-buttons"):
                yield Button("Delete", variant="error", id="btn-confirm")
                yield Button("Cancel", variant="default", id="btn-confirm-cancel")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        event.stop()
        self.dismiss(event.button.id == "btn-confirm")

    def action_cancel(self) -> None:
        """Cancel the action."""
        self.dismiss(False)


class ModalConfirmationGate:
    """Confirmation gate backed by :class:`ConfirmModal`."""

    def __init__(self, app: App) -> None:
        self._app = app

    def ask(self, message: str, on_answer: Callable[[bool], None]) -> None:
        """Push a :class:`ConfirmModal` and forward its result."""

        def on_dismiss(confirmed: bool | None) -> None:
            on_answer(bool(confirmed))

        self._app.push_screen(ConfirmModal(message), callback=on_dismiss)
