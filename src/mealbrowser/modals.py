"""Modal screens: loading error and meal detail hand-off."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Static

from mealbrowser.models.meals import MealSummary

LOADING_ERROR_TITLE = "Loading error"
LOADING_ERROR_MESSAGE = (
    "There was a problem loading the data; please check your connection and try again."
)


class ErrorModal(ModalScreen[None]):
    """Fixed-message alert with a single OK acknowledgement."""

    BINDINGS = [
        ("enter", "close", "OK"),
        ("escape", "close", "OK"),
        ("o", "close", "OK"),
    ]

    CSS = """
    ErrorModal {
        align: center middle;
        background: $background 60%;
    }

    #error-dialog {
        width: 56;
        height: auto;
        border: round $error;
        background: $panel;
        padding: 1 2;
    }

    #error-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #error-help {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(
        self, title: str = LOADING_ERROR_TITLE, message: str = LOADING_ERROR_MESSAGE
    ) -> None:
        super().__init__()
        self.title_text = title
        self.message = message

    def compose(self) -> ComposeResult:
        with Container(id="error-dialog"):
            yield Static(self.title_text, id="error-title")
            yield Static(self.message, id="error-message")
            yield Static("OK: Enter / Esc", id="error-help")

    def action_close(self) -> None:
        self.dismiss()


class MealDetailModal(ModalScreen[None]):
    """Shows the selected meal and the lookup URL its detail view would load."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("enter", "close", "Close"),
        ("q", "close", "Close"),
    ]

    CSS = """
    MealDetailModal {
        align: center middle;
        background: $background 60%;
    }

    #detail-dialog {
        width: 72;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #detail-title {
        text-style: bold;
        margin-bottom: 1;
    }

    #detail-help {
        margin-top: 1;
        color: $text-muted;
    }
    """

    def __init__(self, meal: MealSummary, url: str) -> None:
        super().__init__()
        self.meal = meal
        self.url = url

    def compose(self) -> ComposeResult:
        with Container(id="detail-dialog"):
            yield Static(Text(self.meal.name), id="detail-title")
            yield Static(f"Meal #{self.meal.id}", id="detail-id")
            yield Static(Text(self.url), id="detail-url")
            yield Static("Esc / q to close", id="detail-help")

    def action_close(self) -> None:
        self.dismiss()
