"""
Timed exam-taking session.

Drives one student's pass through an exam: question navigation, answer
selection, a once-per-second countdown and a single guarded submission.
The countdown is cooperative: nothing runs in the background, callers
either call tick() once per second or call sync() to catch up with the
clock. Submission goes through an injected ``submitter`` callable so the
session works equally against the in-process services or a remote API.
"""
from __future__ import annotations

import enum
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Mapping, Optional, Sequence, Union

from exams.domain import Exam, UNANSWERED

logger = logging.getLogger(__name__)

Submitter = Callable[[List[int], int], Any]


class SessionState(str, enum.Enum):
    LOADING = 'loading'
    IN_PROGRESS = 'in_progress'
    SUBMITTING = 'submitting'
    SUBMITTED = 'submitted'
    ABANDONED = 'abandoned'


class SessionError(Exception):
    """Operation not allowed in the session's current state."""


class SubmissionFailed(Exception):
    """The submitter raised; the session stays open for another attempt."""


@dataclass(frozen=True)
class SubmitConfirmation:
    unanswered: int
    total: int

    @property
    def complete(self) -> bool:
        return self.unanswered == 0

    def message(self) -> str:
        if self.complete:
            return "You have answered all questions."
        return f"You have {self.unanswered} unanswered questions."


def format_time(seconds: int) -> str:
    minutes, secs = divmod(max(0, int(seconds)), 60)
    return f"{minutes}:{secs:02d}"


class CountdownTimer:
    """Whole-second countdown owned by one session."""

    def __init__(self, seconds: int, on_tick: Callable[[], None], clock: Callable[[], float]):
        self.remaining = seconds
        self._on_tick = on_tick
        self._clock = clock
        self._last = clock()
        self.cancelled = False

    def tick(self):
        if self.cancelled or self.remaining <= 0:
            return
        self.remaining -= 1
        self._on_tick()

    def sync(self):
        """Deliver one tick for every whole second elapsed since the last delivery."""
        now = self._clock()
        elapsed = int(now - self._last)
        self._last += elapsed
        for _ in range(elapsed):
            if self.cancelled or self.remaining <= 0:
                break
            self.tick()

    def cancel(self):
        self.cancelled = True


class ExamSession:

    def __init__(self, submitter: Submitter, clock: Callable[[], float] = time.monotonic):
        self._submitter = submitter
        self._clock = clock
        self.state = SessionState.LOADING
        self.exam_id = None
        self.title = ''
        self.questions: Sequence[Any] = ()
        self.time_limit: Optional[int] = None
        self.current_index = 0
        self._answers: List[int] = []
        self._timer: Optional[CountdownTimer] = None
        self._started_at: Optional[float] = None
        self.result = None
        self.last_error: Optional[BaseException] = None
        self.timed_out = False

    # -- loading -----------------------------------------------------------

    def load(self, exam: Union[Exam, Mapping]):
        """Enter IN_PROGRESS with a served (normally redacted) exam."""
        self._require(SessionState.LOADING)
        if isinstance(exam, Exam):
            exam_id, title, questions, time_limit = exam.id, exam.title, exam.questions, exam.time_limit
        else:
            exam_id = exam.get('_id', exam.get('id'))
            title = exam.get('title', '')
            questions = exam.get('questions') or ()
            time_limit = exam.get('timeLimit')
        if not questions:
            raise SessionError("Exam has no questions.")

        self.exam_id = exam_id
        self.title = title
        self.questions = tuple(questions)
        self.time_limit = time_limit
        self._answers = [UNANSWERED] * len(self.questions)
        self.current_index = 0
        self._started_at = self._clock()
        self.state = SessionState.IN_PROGRESS
        if time_limit:
            self._timer = CountdownTimer(time_limit * 60, self._on_tick, self._clock)

    # -- read-only views ---------------------------------------------------

    @property
    def timed(self) -> bool:
        return self._timer is not None

    @property
    def time_remaining(self) -> Optional[int]:
        return self._timer.remaining if self._timer else None

    @property
    def selected_answers(self) -> List[int]:
        return list(self._answers)

    @property
    def unanswered_count(self) -> int:
        return sum(1 for a in self._answers if a == UNANSWERED)

    @property
    def current_question(self):
        return self.questions[self.current_index]

    @property
    def elapsed_seconds(self) -> int:
        if self._started_at is None:
            return 0
        return int(round(self._clock() - self._started_at))

    # -- clock -------------------------------------------------------------

    def tick(self):
        if self.state is SessionState.IN_PROGRESS and self._timer:
            self._timer.tick()

    def sync(self):
        if self.state is SessionState.IN_PROGRESS and self._timer:
            self._timer.sync()

    def _on_tick(self):
        if self._timer.remaining == 0:
            logger.warning(f"Time is up on exam {self.exam_id}; submitting")
            self.timed_out = True
            self._submit()

    # -- navigation --------------------------------------------------------

    def next(self):
        self._require(SessionState.IN_PROGRESS)
        if self.current_index < len(self.questions) - 1:
            self.current_index += 1

    def previous(self):
        self._require(SessionState.IN_PROGRESS)
        if self.current_index > 0:
            self.current_index -= 1

    def jump_to(self, index: int):
        self._require(SessionState.IN_PROGRESS)
        if 0 <= index < len(self.questions):
            self.current_index = index

    def select_answer(self, option_index: int):
        self._require(SessionState.IN_PROGRESS)
        options = _options_of(self.current_question)
        if not 0 <= option_index < len(options):
            raise SessionError(f"Option {option_index} does not exist.")
        self._answers[self.current_index] = option_index

    # -- submission --------------------------------------------------------

    def request_submit(self) -> SubmitConfirmation:
        """Confirmation data shown before submitting; never blocks submission."""
        self._require(SessionState.IN_PROGRESS)
        return SubmitConfirmation(unanswered=self.unanswered_count, total=len(self.questions))

    def confirm_submit(self):
        if self.state in (SessionState.SUBMITTING, SessionState.SUBMITTED):
            return self.result
        self._require(SessionState.IN_PROGRESS)
        return self._submit()

    def _submit(self):
        if self.state is not SessionState.IN_PROGRESS:
            return self.result
        self.state = SessionState.SUBMITTING
        answers = list(self._answers)
        try:
            self.result = self._submitter(answers, self.elapsed_seconds)
        except Exception as e:
            logger.warning(f"Submitting exam {self.exam_id} failed: {e}")
            self.last_error = e
            self.state = SessionState.IN_PROGRESS
            raise SubmissionFailed(str(e)) from e
        self.last_error = None
        if self._timer:
            self._timer.cancel()
        self.state = SessionState.SUBMITTED
        return self.result

    def abandon(self):
        """Leave without submitting. Nothing is persisted."""
        if self.state in (SessionState.LOADING, SessionState.IN_PROGRESS):
            if self._timer:
                self._timer.cancel()
            self.state = SessionState.ABANDONED

    def _require(self, state: SessionState):
        if self.state is not state:
            raise SessionError(f"Session is {self.state.value}, expected {state.value}.")


def _options_of(question) -> Sequence[str]:
    if isinstance(question, Mapping):
        return question.get('options') or ()
    return question.options
