"""Textual-based UI for the Pomodoro timer and to-do list."""

from typing import Optional

from loguru import logger
from rich.text import Text
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import (
    Button,
    Footer,
    Input,
    Label,
    ListItem,
    ListView,
    ProgressBar,
    Static,
    TabbedContent,
    TabPane,
)

from .scheduler import Phase, PomodoroTimer, Status, format_time
from .settings import LIMITS
from .todo import TodoItem, TodoList


# Big digit representations (5 lines tall)
BIG_DIGITS = {
    "0": ["█████", "█   █", "█   █", "█   █", "█████"],
    "1": ["  █  ", " ██  ", "  █  ", "  █  ", " ███ "],
    "2": ["█████", "    █", "█████", "█    ", "█████"],
    "3": ["█████", "    █", " ████", "    █", "█████"],
    "4": ["█   █", "█   █", "█████", "    █", "    █"],
    "5": ["█████", "█    ", "█████", "    █", "█████"],
    "6": ["█████", "█    ", "█████", "█   █", "█████"],
    "7": ["█████", "    █", "   █ ", "  █  ", "  █  "],
    "8": ["█████", "█   █", "█████", "█   █", "█████"],
    "9": ["█████", "█   █", "█████", "    █", "█████"],
    ":": ["   ", " █ ", "   ", " █ ", "   "],
}
DIGIT_ROWS = 5

CELEBRATION_SECONDS = 2.0

PHASE_CLASSES = {
    Phase.WORK: "work",
    Phase.SHORT_BREAK: "short-break",
    Phase.LONG_BREAK: "long-break",
    Phase.COMPLETED: "completed",
}


def render_big_time(seconds: int) -> str:
    """Render time as big block digits."""
    time_str = format_time(seconds)
    lines = []
    for row in range(DIGIT_ROWS):
        lines.append(" ".join(BIG_DIGITS.get(char, ["     "] * DIGIT_ROWS)[row] for char in time_str))
    return "\n".join(lines)


class BigTimer(Static):
    """Big countdown with the phase caption under it."""

    def __init__(self, timer: PomodoroTimer, **kwargs) -> None:
        super().__init__(**kwargs)
        self.pomo_timer = timer

    def on_mount(self) -> None:
        self.update_display()

    def update_display(self) -> None:
        self.update(f"{render_big_time(self.pomo_timer.remaining_seconds)}\n\n{self.pomo_timer.phase_caption}")


class TaskLabel(Static):
    """Current task title."""

    def __init__(self, timer: PomodoroTimer, **kwargs) -> None:
        super().__init__(**kwargs)
        self.pomo_timer = timer

    def on_mount(self) -> None:
        self.update_display()

    def update_display(self) -> None:
        label = self.pomo_timer.task_label
        self.display = bool(label)
        text = Text("Current Task\n", style="dim")
        text.append(label, style="bold")
        self.update(text)


class PhaseLabel(Static):
    """Phase label with cycle counter."""

    def __init__(self, timer: PomodoroTimer, **kwargs) -> None:
        super().__init__(**kwargs)
        self.pomo_timer = timer

    def on_mount(self) -> None:
        self.update_display()

    def update_display(self) -> None:
        self.update(f"─── {self.pomo_timer.phase_label} {self.pomo_timer.cycle_display} ───")


class StatusBadge(Static):
    """Status indicator badge."""

    def __init__(self, timer: PomodoroTimer, **kwargs) -> None:
        super().__init__(**kwargs)
        self.pomo_timer = timer

    def on_mount(self) -> None:
        self.update_display()

    def update_display(self) -> None:
        self.remove_class("running", "paused", "done")
        if self.pomo_timer.phase == Phase.COMPLETED:
            self.update("✔ DONE")
            self.add_class("done")
        elif self.pomo_timer.status == Status.RUNNING:
            self.update("▶ RUNNING")
            self.add_class("running")
        else:
            self.update("⏸ PAUSED")
            self.add_class("paused")


class CompletedTasks(Static):
    """Finished task labels, newest first."""

    def __init__(self, timer: PomodoroTimer, **kwargs) -> None:
        super().__init__(**kwargs)
        self.pomo_timer = timer

    def on_mount(self) -> None:
        self.update_display()

    def update_display(self) -> None:
        labels = self.pomo_timer.recent_task_labels
        self.display = bool(labels)
        text = Text(f"Completed Tasks ({len(labels)})\n", style="bold")
        for label in labels:
            text.append("✔ ", style="green")
            text.append(label, style="strike")
            text.append("\n")
        self.update(text)


class SetupScreen(ModalScreen):
    """Dialog for the task title, durations and cycle target.

    Dismisses with keyword arguments for PomodoroTimer.configure, or None
    when cancelled.
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, timer: PomodoroTimer, new_task_flow: bool = False) -> None:
        super().__init__()
        self.pomo_timer = timer
        self.new_task_flow = new_task_flow

    def compose(self) -> ComposeResult:
        settings = self.pomo_timer.settings
        title = "Configure New Session" if self.new_task_flow else "Set Your Focus Session"
        with Vertical(id="setup-dialog"):
            yield Label(title, id="setup-title")
            if not self.new_task_flow:
                yield Input(
                    value=self.pomo_timer.task_label,
                    placeholder="What are you working on?",
                    id="setup-task",
                )
            for field_id, caption, field_name, value in (
                ("setup-work", "Focus minutes", "work_minutes", settings.work_minutes),
                ("setup-short", "Short break", "short_break_minutes", settings.short_break_minutes),
                ("setup-long", "Long break", "long_break_minutes", settings.long_break_minutes),
                ("setup-cycles", "Target cycles", "target_cycles", settings.target_cycles),
            ):
                _, low, high = LIMITS[field_name]
                with Horizontal(classes="setup-row"):
                    yield Label(f"{caption} ({low}-{high}):")
                    yield Input(value=str(value), id=field_id)
            yield Button(
                "Start New Session" if self.new_task_flow else "Start Focusing",
                id="setup-start",
                variant="primary",
                disabled=not self.new_task_flow and not self.pomo_timer.task_label,
            )

    @on(Input.Changed, "#setup-task")
    def task_changed(self, event: Input.Changed) -> None:
        self.query_one("#setup-start", Button).disabled = not event.value.strip()

    @on(Input.Submitted)
    def input_submitted(self) -> None:
        if not self.query_one("#setup-start", Button).disabled:
            self._submit()

    @on(Button.Pressed, "#setup-start")
    def start_pressed(self) -> None:
        self._submit()

    def _value(self, field_id: str) -> str:
        return self.query_one(f"#{field_id}", Input).value

    def _submit(self) -> None:
        result = {
            "work_mins": self._value("setup-work"),
            "short_mins": self._value("setup-short"),
            "long_mins": self._value("setup-long"),
            "target_cycles": self._value("setup-cycles"),
            "task_label": None,
        }
        if not self.new_task_flow:
            result["task_label"] = self._value("setup-task").strip()
        self.dismiss(result)

    def action_cancel(self) -> None:
        self.dismiss(None)


class TodoRow(ListItem):
    """One to-do item."""

    def __init__(self, item: TodoItem) -> None:
        super().__init__()
        self.item_id = item.id
        self.todo = item

    def compose(self) -> ComposeResult:
        if self.todo.is_completed:
            text = Text("✔ ", style="red")
            text.append(self.todo.title, style="strike dim")
        else:
            text = Text("○ ", style="red")
            text.append(self.todo.title)
        yield Label(text)


class TodoPane(Vertical):
    """Add, toggle and delete to-do items."""

    BINDINGS = [Binding("delete", "delete_item", "Delete")]

    def __init__(self, todos: TodoList, **kwargs) -> None:
        super().__init__(**kwargs)
        self.todos = todos

    def compose(self) -> ComposeResult:
        with Horizontal(id="todo-input-row"):
            yield Input(placeholder="Add a new task...", id="todo-input")
            yield Button("+", id="todo-add")
        yield ListView(id="todo-list")

    async def on_mount(self) -> None:
        await self.refresh_items()

    async def refresh_items(self, index: Optional[int] = None) -> None:
        """Rebuild the list, keeping the highlight near index."""
        list_view = self.query_one("#todo-list", ListView)
        await list_view.clear()
        await list_view.extend([TodoRow(item) for item in self.todos])
        if index is not None and len(self.todos):
            list_view.index = min(index, len(self.todos) - 1)

    async def _add_from_input(self) -> None:
        field = self.query_one("#todo-input", Input)
        if self.todos.add_item(field.value) is not None:
            field.value = ""
            await self.refresh_items(len(self.todos) - 1)

    @on(Input.Submitted, "#todo-input")
    async def todo_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        await self._add_from_input()

    @on(Button.Pressed, "#todo-add")
    async def add_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        await self._add_from_input()

    @on(ListView.Selected, "#todo-list")
    async def item_selected(self, event: ListView.Selected) -> None:
        list_view = self.query_one("#todo-list", ListView)
        if isinstance(event.item, TodoRow):
            self.todos.toggle_completion(event.item.item_id)
            await self.refresh_items(list_view.index)

    async def action_delete_item(self) -> None:
        """Delete the highlighted item."""
        list_view = self.query_one("#todo-list", ListView)
        index = list_view.index
        if index is None:
            return
        self.todos.delete_at([index])
        await self.refresh_items(index)


class PomotodoApp(App):
    """Pomodoro timer and to-do list application."""

    CSS_PATH = "pomotodo.tcss"

    BINDINGS = [
        Binding("space", "toggle", "Start/Pause"),
        Binding("r", "reset", "Reset"),
        Binding("n", "next", "Finish phase"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(self, timer: PomodoroTimer, todos: TodoList, show_setup: bool = True) -> None:
        super().__init__()
        self.pomo_timer = timer
        self.todos = todos
        self.show_setup = show_setup
        self._tick_timer: Timer | None = None

        timer.on_celebrate = self._celebrate
        timer.on_configure_requested = self._open_setup

    def compose(self) -> ComposeResult:
        with TabbedContent(initial="focus"):
            with TabPane("Focus", id="focus"):
                with Container(id="main"):
                    with Vertical(id="timer-container"):
                        yield TaskLabel(self.pomo_timer, id="task-label")
                        yield PhaseLabel(self.pomo_timer, id="phase-label")
                        yield ProgressBar(id="cycles", show_eta=False, show_percentage=False)
                        yield BigTimer(self.pomo_timer, id="big-timer")
                        yield StatusBadge(self.pomo_timer, id="status-badge")
                        yield ProgressBar(id="progress", show_eta=False, show_percentage=False)
                        yield Static(id="celebration")
                        yield CompletedTasks(self.pomo_timer, id="completed-tasks")
                        with Horizontal(id="completion-options"):
                            yield Input(placeholder="Next task to work on", id="next-task")
                            yield Button("Add Task", id="add-task", variant="primary", disabled=True)
                            yield Button("Clear History", id="clear-history")
            with TabPane("To-Do", id="todo"):
                yield TodoPane(self.todos, id="todo-pane")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#celebration", Static).display = False
        self._refresh_display()
        self._tick_timer = self.set_interval(1.0, self._tick)
        if self.show_setup:
            self._open_setup(False)

    def check_action(self, action: str, parameters: tuple) -> bool | None:
        if action in ("toggle", "reset", "next") and isinstance(self.screen, SetupScreen):
            return False
        return True

    def _tick(self) -> None:
        """Called every second."""
        if self.pomo_timer.tick() or self.pomo_timer.is_running:
            self._refresh_display()

    def _refresh_display(self) -> None:
        """Update all display elements."""
        for widget_id, widget_type in (
            ("#task-label", TaskLabel),
            ("#phase-label", PhaseLabel),
            ("#big-timer", BigTimer),
            ("#status-badge", StatusBadge),
            ("#completed-tasks", CompletedTasks),
        ):
            self.query_one(widget_id, widget_type).update_display()
        self._update_progress()
        self._update_phase_class()
        self.query_one("#completion-options").display = self.pomo_timer.phase == Phase.COMPLETED

    def _update_progress(self) -> None:
        """Update the phase and cycle progress bars."""
        self.query_one("#progress", ProgressBar).update(
            total=100, progress=self.pomo_timer.phase_progress * 100
        )
        self.query_one("#cycles", ProgressBar).update(
            total=100, progress=self.pomo_timer.cycle_progress * 100
        )

    def _update_phase_class(self) -> None:
        """Update CSS class based on current phase."""
        container = self.query_one("#timer-container")
        container.remove_class(*PHASE_CLASSES.values())
        container.add_class(PHASE_CLASSES[self.pomo_timer.phase])

    def _celebrate(self) -> None:
        banner = self.query_one("#celebration", Static)
        banner.update("🎉  All cycles done. Nice work!  🎉")
        banner.display = True
        self.set_timer(CELEBRATION_SECONDS, self._end_celebration)

    def _end_celebration(self) -> None:
        self.query_one("#celebration", Static).display = False

    def _open_setup(self, new_task_flow: bool) -> None:
        self.push_screen(SetupScreen(self.pomo_timer, new_task_flow), self._apply_setup)

    def _apply_setup(self, result: Optional[dict]) -> None:
        if result is None:
            logger.debug("[UI] setup cancelled")
        else:
            self.pomo_timer.configure(**result)
        self._refresh_display()

    @on(Input.Changed, "#next-task")
    def next_task_changed(self, event: Input.Changed) -> None:
        self.query_one("#add-task", Button).disabled = not event.value.strip()

    @on(Input.Submitted, "#next-task")
    def next_task_submitted(self, event: Input.Submitted) -> None:
        if event.value.strip():
            self._start_next_task()

    @on(Button.Pressed, "#add-task")
    def add_task_pressed(self) -> None:
        self._start_next_task()

    @on(Button.Pressed, "#clear-history")
    def clear_history_pressed(self) -> None:
        self.query_one("#next-task", Input).value = ""
        self.pomo_timer.clear_history()
        self._refresh_display()

    def _start_next_task(self) -> None:
        field = self.query_one("#next-task", Input)
        label = field.value.strip()
        field.value = ""
        self.pomo_timer.start_new_task(label)
        self._refresh_display()

    def action_toggle(self) -> None:
        """Toggle timer start/pause."""
        self.pomo_timer.toggle()
        self._refresh_display()

    def action_reset(self) -> None:
        """Reset current phase."""
        self.pomo_timer.reset()
        self._refresh_display()

    def action_next(self) -> None:
        """Finish the current phase now."""
        self.pomo_timer.complete_phase()
        self._refresh_display()


def run_ui(timer: PomodoroTimer, todos: TodoList, show_setup: bool = True) -> None:
    """Run the Pomodoro UI.

    Args:
        timer: The timer instance.
        todos: The to-do list shown in the second tab.
        show_setup: Open the setup dialog on start.
    """
    app = PomotodoApp(timer, todos, show_setup)
    app.run()
