"""Recipe browser screen (Textual) and the console entry point."""

from __future__ import annotations

import structlog
from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Header, LoadingIndicator, Static
from textual.worker import Worker, WorkerState

from mealbrowser.config import Settings
from mealbrowser.errors import FetchError
from mealbrowser.index import CategoryIndex
from mealbrowser.logging_config import close_log_file, configure_logging
from mealbrowser.modals import ErrorModal, MealDetailModal
from mealbrowser.pipeline import LoadPipeline
from mealbrowser.rendering import build_lines, render_lines, row_line_indices
from mealbrowser.state import AppState

log = structlog.get_logger()


class RecipeBrowserApp(App):
    """Sectioned, searchable list of TheMealDB meals grouped by category."""

    SUB_TITLE = "TheMealDB"

    CSS = """
    Screen {
        layout: vertical;
    }

    #browser-pane {
        height: 1fr;
        border: round $primary;
        padding: 0 1;
    }

    #search-bar {
        border: heavy $secondary;
        padding: 0 1;
        margin-bottom: 1;
        height: 3;
    }

    #loading {
        height: 3;
    }

    #meal-list {
        height: 1fr;
        padding: 0 1;
    }
    """

    input_state = reactive("normal")
    selected_index = reactive(0)
    load_status = reactive("Loading…")

    BINDINGS = [
        ("up", "cycle_rows(-1)", "Previous meal"),
        ("down", "cycle_rows(1)", "Next meal"),
        ("enter", "open_selected", "Open meal"),
        ("backspace", "backspace_query", "Delete query char"),
        Binding("escape", "cancel_search", "Cancel search", priority=True),
        Binding("ctrl+c", "cancel_search", "Cancel search", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, state: AppState | None = None) -> None:
        super().__init__()
        self.app_state = state or AppState.from_settings(Settings())
        self.index = self.app_state.index
        self.pipeline = LoadPipeline(
            self.app_state.catalog,
            self.index,
            on_loading=self._set_loading,
            on_error=self._show_load_error,
            on_ready=self._on_index_ready,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Vertical(id="browser-pane"):
            yield Static(id="search-bar")
            yield LoadingIndicator(id="loading")
            yield Static(id="meal-list")

    def on_mount(self) -> None:
        self.title = self.app_state.settings.ui.title
        self._refresh_all()
        self.run_worker(self.pipeline.run(), name="load", exclusive=True, exit_on_error=False)

    async def on_unmount(self) -> None:
        await self.app_state.aclose()

    # ------------------------------------------------------------------
    # Pipeline callbacks
    # ------------------------------------------------------------------

    def _set_loading(self, loading: bool) -> None:
        try:
            self.query_one("#loading", LoadingIndicator).display = loading
        except NoMatches:
            return
        if not loading and self.load_status == "Loading…":
            self.load_status = "Ready"
            self._refresh_search_bar()

    def _show_load_error(self, error: FetchError) -> None:
        log.info("load_error_shown", code=error.code.value)
        self._report_load_error()

    def _report_load_error(self) -> None:
        self.load_status = "Loading error"
        self._refresh_search_bar()
        self.push_screen(ErrorModal())

    def _on_index_ready(self, snapshot: CategoryIndex) -> None:
        self.load_status = f"{len(snapshot)} categories"
        self.selected_index = 0
        self._refresh_all()

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        # Unexpected pipeline errors surface as the loading error, not a crash.
        if event.worker.name != "load" or event.state != WorkerState.ERROR:
            return
        log.error("pipeline_crashed", error=repr(event.worker.error))
        self._report_load_error()

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def on_key(self, event: Key) -> None:
        # While a modal is active, let the modal own keyboard handling.
        if isinstance(self.screen, ModalScreen):
            return

        if not event.is_printable or not event.character:
            return

        if self.input_state == "normal":
            if event.character != "/":
                return
            self.input_state = "active"
            self._set_query("")
            event.stop()
            return

        self._set_query(self.index.query + event.character)
        event.stop()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        # Escape and Ctrl+C fall through to modals and defaults unless a search is active.
        if action == "cancel_search":
            return self.input_state == "active" and not isinstance(self.screen, ModalScreen)
        return True

    def action_cancel_search(self) -> None:
        self.input_state = "normal"
        self.index.clear_query()
        self.selected_index = 0
        self._refresh_all()

    def action_backspace_query(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return
        if self.input_state != "active" or not self.index.query:
            return
        self._set_query(self.index.query[:-1])

    def action_cycle_rows(self, delta: int) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        rows = row_line_indices(build_lines(self.index))
        if not rows:
            self.selected_index = 0
        else:
            self.selected_index = (self.selected_index + delta) % len(rows)
        self._refresh_list()

    def action_open_selected(self) -> None:
        if isinstance(self.screen, ModalScreen):
            return

        lines = build_lines(self.index)
        rows = row_line_indices(lines)
        if not rows:
            return
        line = lines[rows[min(self.selected_index, len(rows) - 1)]]
        if line.row is None:
            return
        meal = self.index.meal_at(line.section, line.row)
        url = self.app_state.lookup_url(self.index.resolve_meal_id(line.section, line.row))
        log.info("meal_selected", meal_id=meal.id, url=url)
        self.push_screen(MealDetailModal(meal, url))

    def _set_query(self, query: str) -> None:
        self.index.apply_query(query)
        self.selected_index = 0
        self._refresh_all()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _refresh_all(self) -> None:
        self._refresh_search_bar()
        self._refresh_list()

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 20
        return max(1, height)

    def _refresh_search_bar(self) -> None:
        try:
            bar = self.query_one("#search-bar", Static)
        except NoMatches:
            return
        if self.input_state == "normal":
            bar.update(Text(f"Press / to search categories. Ctrl+Q to quit.  {self.load_status}"))
            return

        text = Text()
        text.append("Search", style="bold #ffffff on #2f6db5")
        text.append(f": {self.index.query}")
        bar.update(text)

    def _refresh_list(self) -> None:
        try:
            list_widget = self.query_one("#meal-list", Static)
        except NoMatches:
            return

        lines = build_lines(self.index)
        if not lines:
            list_widget.update("No results" if self.index.is_searching else "")
            return

        rows = row_line_indices(lines)
        if self.selected_index >= len(rows):
            self.selected_index = 0
        selected_line = rows[self.selected_index] if rows else None

        list_widget.update(render_lines(lines, selected_line, self._visible_rows(list_widget)))


def main() -> None:
    """Run the recipe browser."""
    settings = Settings()
    configure_logging(settings.logging)
    try:
        RecipeBrowserApp(AppState.from_settings(settings)).run()
    finally:
        close_log_file()


if __name__ == "__main__":
    main()
