"""Pure logic for Pomodoro timer state machine."""

from enum import Enum, auto
from typing import Callable, List, Optional

from loguru import logger

from .settings import TimerSettings


class Phase(Enum):
    """Timer phase types."""
    WORK = auto()
    SHORT_BREAK = auto()
    LONG_BREAK = auto()
    COMPLETED = auto()


class Status(Enum):
    """Timer running status."""
    RUNNING = auto()
    PAUSED = auto()


# Every this-many completed work phases earns a long break.
LONG_BREAK_EVERY = 4


def format_time(seconds: int) -> str:
    """Format seconds as M:SS."""
    return f"{seconds // 60}:{seconds % 60:02d}"


class PomodoroTimer:
    """Pomodoro timer state machine.

    Manages phase transitions, cycle counting and the task label history.
    Time only moves through tick(), which the presentation layer calls
    once per second.
    """

    def __init__(
        self,
        work_mins=25,
        short_mins=5,
        long_mins=30,
        target_cycles=4,
        task_label: str = "",
        on_phase_complete: Optional[Callable[[Phase, Phase], None]] = None,
        on_celebrate: Optional[Callable[[], None]] = None,
        on_configure_requested: Optional[Callable[[bool], None]] = None,
    ):
        """Initialize the timer.

        Args:
            work_mins: Duration of work phase in minutes.
            short_mins: Duration of short break in minutes.
            long_mins: Duration of long break in minutes.
            target_cycles: Work phases to finish before the session completes.
            task_label: What the user is working on.
            on_phase_complete: Callback(old_phase, new_phase) when phase ends.
            on_celebrate: Callback fired once when the target is reached.
            on_configure_requested: Callback(new_task_flow) asking the UI
                to show the setup dialog again.
        """
        self.settings = TimerSettings(
            work_minutes=work_mins,
            short_break_minutes=short_mins,
            long_break_minutes=long_mins,
            target_cycles=target_cycles,
        )
        self.on_phase_complete = on_phase_complete
        self.on_celebrate = on_celebrate
        self.on_configure_requested = on_configure_requested

        self._phase = Phase.WORK
        self._status = Status.PAUSED
        self._remaining = self.settings.work_secs
        self._completed_cycles = 0
        self._task_label = task_label or ""
        self._completed_tasks: List[str] = []

    @property
    def phase(self) -> Phase:
        """Current phase."""
        return self._phase

    @property
    def status(self) -> Status:
        """Current status (RUNNING or PAUSED)."""
        return self._status

    @property
    def is_running(self) -> bool:
        return self._status == Status.RUNNING

    @property
    def remaining_seconds(self) -> int:
        """Seconds remaining in current phase."""
        return self._remaining

    @property
    def completed_cycles(self) -> int:
        """Number of work phases completed in this session."""
        return self._completed_cycles

    @property
    def target_cycles(self) -> int:
        return self.settings.target_cycles

    @property
    def task_label(self) -> str:
        return self._task_label

    @property
    def completed_task_labels(self) -> List[str]:
        """Finished task labels in completion order."""
        return list(self._completed_tasks)

    @property
    def recent_task_labels(self) -> List[str]:
        """Finished task labels, newest first."""
        return list(reversed(self._completed_tasks))

    @property
    def work_secs(self) -> int:
        return self.settings.work_secs

    @property
    def short_secs(self) -> int:
        return self.settings.short_secs

    @property
    def long_secs(self) -> int:
        return self.settings.long_secs

    def duration_for(self, phase: Phase) -> int:
        """Get duration in seconds for a given phase."""
        if phase == Phase.WORK:
            return self.work_secs
        elif phase == Phase.SHORT_BREAK:
            return self.short_secs
        elif phase == Phase.LONG_BREAK:
            return self.long_secs
        return 0

    @property
    def total_duration(self) -> int:
        """Total duration of current phase in seconds."""
        return self.duration_for(self._phase)

    @property
    def phase_progress(self) -> float:
        """Progress through current phase (0.0 to 1.0)."""
        total = self.total_duration
        if total == 0:
            return 1.0
        return 1.0 - (self._remaining / total)

    @property
    def cycle_progress(self) -> float:
        """Share of the target cycles already completed."""
        return self._completed_cycles / self.target_cycles

    @property
    def phase_label(self) -> str:
        """Human-readable phase label."""
        labels = {
            Phase.WORK: "Pomodoro",
            Phase.SHORT_BREAK: "Short Break",
            Phase.LONG_BREAK: "Long Break",
            Phase.COMPLETED: "Completed",
        }
        return labels[self._phase]

    @property
    def phase_caption(self) -> str:
        """Short caption shown under the countdown."""
        if self._phase == Phase.WORK:
            return "FOCUS"
        if self._phase == Phase.COMPLETED:
            return "COMPLETED"
        return "BREAK"

    @property
    def status_label(self) -> str:
        """Human-readable status label."""
        return "RUNNING" if self._status == Status.RUNNING else "PAUSED"

    @property
    def cycle_display(self) -> str:
        """Display string for cycle counter (e.g., '2/4')."""
        return f"{self._completed_cycles}/{self.target_cycles}"

    def configure(
        self,
        work_mins=None,
        short_mins=None,
        long_mins=None,
        target_cycles=None,
        task_label: Optional[str] = None,
    ) -> bool:
        """Apply new durations, cycle target and task label.

        Raw values go through TimerSettings, so junk falls back to the
        defaults and numbers are clamped. A None task label keeps the
        current one. Ignored while running, after completion, or once a
        cycle of the session has been completed.

        Returns:
            True if the configuration was applied.
        """
        if self.is_running or self._phase == Phase.COMPLETED or self._completed_cycles > 0:
            logger.debug(
                f"[TIMER] configure ignored in {self._phase.name} ({self.status_label}, {self.cycle_display})"
            )
            return False

        settings = TimerSettings(
            work_minutes=work_mins,
            short_break_minutes=short_mins,
            long_break_minutes=long_mins,
            target_cycles=target_cycles,
        )
        self.settings = settings
        if task_label is not None:
            self._task_label = task_label
        self._remaining = self.total_duration
        logger.debug(
            f"[TIMER] configured work={settings.work_minutes} short={settings.short_break_minutes} "
            f"long={settings.long_break_minutes} cycles={settings.target_cycles} task={self._task_label!r}"
        )
        return True

    def start(self) -> None:
        """Start the timer."""
        if self._phase == Phase.COMPLETED:
            return
        self._status = Status.RUNNING

    def pause(self) -> None:
        """Pause the timer."""
        if self._phase == Phase.COMPLETED:
            return
        self._status = Status.PAUSED

    def toggle(self) -> None:
        """Toggle between running and paused."""
        if self._status == Status.RUNNING:
            self.pause()
        else:
            self.start()

    def reset(self) -> None:
        """Reset current phase to full duration."""
        if self._phase == Phase.COMPLETED:
            return
        self._remaining = self.total_duration

    def _determine_next_phase(self) -> Phase:
        """Determine the next phase based on current state."""
        if self._phase == Phase.WORK:
            if self._completed_cycles >= self.target_cycles:
                return Phase.COMPLETED
            if self._completed_cycles % LONG_BREAK_EVERY == 0:
                return Phase.LONG_BREAK
            return Phase.SHORT_BREAK
        # After any break, go to work
        return Phase.WORK

    def _finish_task(self) -> None:
        """Move the current task label into the history."""
        if not self._task_label:
            return
        # A label already anywhere in the history is not recorded again.
        if self._task_label not in self._completed_tasks:
            self._completed_tasks.append(self._task_label)
            logger.info(f"[TIMER] task finished: {self._task_label!r}")
        self._task_label = ""

    def complete_phase(self) -> None:
        """End the current phase and move to the next one.

        Completing a work phase counts a cycle. Reaching the target stops
        the timer in COMPLETED and fires the celebration callback; any
        other transition auto-starts the next phase.
        """
        if self._phase == Phase.COMPLETED:
            return

        old_phase = self._phase
        if old_phase == Phase.WORK:
            self._completed_cycles += 1
            if self._completed_cycles == self.target_cycles:
                self._finish_task()

        new_phase = self._determine_next_phase()
        self._phase = new_phase
        self._remaining = self.duration_for(new_phase)
        logger.debug(
            f"[TIMER] {old_phase.name} -> {new_phase.name} ({self.cycle_display})"
        )

        if new_phase == Phase.COMPLETED:
            self._status = Status.PAUSED
            logger.info(f"[TIMER] session completed after {self._completed_cycles} cycles")
            if self.on_celebrate:
                self.on_celebrate()
        else:
            self._status = Status.RUNNING

        if self.on_phase_complete:
            self.on_phase_complete(old_phase, new_phase)

    def tick(self) -> bool:
        """Advance the countdown by one second if running.

        At zero the tick completes the phase instead of decrementing.

        Returns:
            True if phase completed, False otherwise.
        """
        if self._status != Status.RUNNING:
            return False

        if self._remaining > 0:
            self._remaining -= 1
            return False

        self.complete_phase()
        return True

    def _restart_session(self) -> None:
        self._completed_cycles = 0
        self._phase = Phase.WORK
        self._remaining = self.total_duration
        self._status = Status.PAUSED

    def start_new_task(self, label: str) -> None:
        """Begin a fresh session for a new task, keeping the history.

        Asks the UI to re-open the setup dialog for durations and cycles.
        """
        self._task_label = label or ""
        self._restart_session()
        logger.info(f"[TIMER] new task: {self._task_label!r}")
        if self.on_configure_requested:
            self.on_configure_requested(True)

    def clear_history(self) -> None:
        """Forget the task history and return to the initial setup."""
        self._task_label = ""
        self._completed_tasks.clear()
        self._restart_session()
        logger.info("[TIMER] history cleared")
        if self.on_configure_requested:
            self.on_configure_requested(False)
