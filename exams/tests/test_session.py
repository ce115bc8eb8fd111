"""
Tests for the timed exam-taking session.
"""
from django.test import SimpleTestCase

from exams.session import (
    ExamSession, SessionState, SessionError, SubmissionFailed, CountdownTimer, format_time,
)
from .factories import make_exam


class FakeClock:

    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingSubmitter:

    def __init__(self, fail_times=0):
        self.calls = []
        self.fail_times = fail_times

    def __call__(self, answers, elapsed):
        self.calls.append((answers, elapsed))
        if self.fail_times:
            self.fail_times -= 1
            raise ConnectionError('network down')
        return {'score': 1, 'maxScore': len(answers)}


class FormatTimeTests(SimpleTestCase):

    def test_format(self):
        self.assertEqual(format_time(1800), '30:00')
        self.assertEqual(format_time(65), '1:05')
        self.assertEqual(format_time(0), '0:00')
        self.assertEqual(format_time(-3), '0:00')


class ExamSessionTests(SimpleTestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.submitter = RecordingSubmitter()
        self.session = ExamSession(self.submitter, clock=self.clock)

    def test_load_starts_unanswered(self):
        self.session.load(make_exam(correct_answers=(None, None, None)))
        self.assertEqual(self.session.state, SessionState.IN_PROGRESS)
        self.assertEqual(self.session.selected_answers, [-1, -1, -1])
        self.assertEqual(self.session.unanswered_count, 3)
        self.assertFalse(self.session.timed)
        self.assertIsNone(self.session.time_remaining)

    def test_load_from_api_document(self):
        self.session.load({
            '_id': 7, 'title': 'Quiz', 'timeLimit': 2,
            'questions': [{'_id': 1, 'text': 'Q', 'options': ['a', 'b']}],
        })
        self.assertEqual(self.session.exam_id, 7)
        self.assertEqual(self.session.time_remaining, 120)
        self.session.select_answer(1)
        self.assertEqual(self.session.selected_answers, [1])

    def test_load_requires_questions(self):
        with self.assertRaises(SessionError):
            self.session.load(make_exam(correct_answers=()))

    def test_navigation_is_clamped(self):
        self.session.load(make_exam(correct_answers=(None, None, None)))
        self.session.previous()
        self.assertEqual(self.session.current_index, 0)
        self.session.next()
        self.session.next()
        self.session.next()
        self.assertEqual(self.session.current_index, 2)
        self.session.jump_to(7)
        self.assertEqual(self.session.current_index, 2)
        self.session.jump_to(1)
        self.assertEqual(self.session.current_index, 1)

    def test_select_answer_replaces_previous_choice(self):
        self.session.load(make_exam(correct_answers=(None, None)))
        self.session.select_answer(2)
        self.session.select_answer(3)
        self.assertEqual(self.session.selected_answers, [3, -1])
        self.assertEqual(self.session.unanswered_count, 1)

    def test_select_invalid_option(self):
        self.session.load(make_exam(correct_answers=(None,)))
        with self.assertRaises(SessionError):
            self.session.select_answer(4)

    def test_confirmation_counts_unanswered(self):
        self.session.load(make_exam(correct_answers=(None, None, None)))
        self.session.select_answer(0)
        confirmation = self.session.request_submit()
        self.assertEqual(confirmation.unanswered, 2)
        self.assertEqual(confirmation.message(), 'You have 2 unanswered questions.')
        self.session.next()
        self.session.select_answer(0)
        self.session.next()
        self.session.select_answer(0)
        self.assertEqual(self.session.request_submit().message(), 'You have answered all questions.')

    def test_submit_sends_answers_and_elapsed_time(self):
        self.session.load(make_exam(correct_answers=(None, None)))
        self.session.select_answer(1)
        self.clock.advance(42)
        result = self.session.confirm_submit()
        self.assertEqual(self.session.state, SessionState.SUBMITTED)
        self.assertEqual(self.submitter.calls, [([1, -1], 42)])
        self.assertEqual(result, {'score': 1, 'maxScore': 2})

    def test_double_submit_sends_once(self):
        self.session.load(make_exam(correct_answers=(None,)))
        self.session.confirm_submit()
        self.session.confirm_submit()
        self.assertEqual(len(self.submitter.calls), 1)

    def test_no_changes_after_submit(self):
        self.session.load(make_exam(correct_answers=(None,)))
        self.session.confirm_submit()
        with self.assertRaises(SessionError):
            self.session.select_answer(0)

    def test_failed_submit_keeps_answers_for_retry(self):
        submitter = RecordingSubmitter(fail_times=1)
        session = ExamSession(submitter, clock=self.clock)
        session.load(make_exam(correct_answers=(None,)))
        session.select_answer(2)
        with self.assertRaises(SubmissionFailed):
            session.confirm_submit()
        self.assertEqual(session.state, SessionState.IN_PROGRESS)
        self.assertIsInstance(session.last_error, ConnectionError)
        self.assertEqual(session.selected_answers, [2])

        session.confirm_submit()
        self.assertEqual(session.state, SessionState.SUBMITTED)
        self.assertIsNone(session.last_error)
        self.assertEqual(len(submitter.calls), 2)

    def test_abandon_submits_nothing(self):
        self.session.load(make_exam(correct_answers=(None,), time_limit=1))
        self.session.abandon()
        self.assertEqual(self.session.state, SessionState.ABANDONED)
        for _ in range(60):
            self.session.tick()
        self.assertEqual(self.submitter.calls, [])


class SessionTimerTests(SimpleTestCase):

    def setUp(self):
        self.clock = FakeClock()
        self.submitter = RecordingSubmitter()
        self.session = ExamSession(self.submitter, clock=self.clock)
        self.session.load(make_exam(correct_answers=(None, None), time_limit=1))

    def test_one_minute_exam_submits_on_sixtieth_tick(self):
        """The last tick reaches zero and submits exactly once."""
        for _ in range(59):
            self.session.tick()
        self.assertEqual(self.session.time_remaining, 1)
        self.assertEqual(self.session.state, SessionState.IN_PROGRESS)
        self.assertEqual(self.submitter.calls, [])

        self.session.tick()
        self.assertEqual(self.session.time_remaining, 0)
        self.assertEqual(self.session.state, SessionState.SUBMITTED)
        self.assertTrue(self.session.timed_out)
        self.assertEqual(len(self.submitter.calls), 1)

        self.session.tick()
        self.assertEqual(len(self.submitter.calls), 1)

    def test_timeout_submits_current_answers(self):
        self.session.select_answer(3)
        for _ in range(60):
            self.session.tick()
        self.assertEqual(self.submitter.calls[0][0], [3, -1])

    def test_sync_catches_up_with_clock(self):
        self.clock.advance(10.5)
        self.session.sync()
        self.assertEqual(self.session.time_remaining, 50)
        self.clock.advance(0.5)
        self.session.sync()
        self.assertEqual(self.session.time_remaining, 49)

    def test_sync_after_deadline_submits_once(self):
        self.clock.advance(600)
        self.session.sync()
        self.session.sync()
        self.assertEqual(self.session.state, SessionState.SUBMITTED)
        self.assertEqual(len(self.submitter.calls), 1)

    def test_manual_submit_stops_timer(self):
        self.session.confirm_submit()
        for _ in range(60):
            self.session.tick()
        self.assertEqual(len(self.submitter.calls), 1)
        self.assertFalse(self.session.timed_out)

    def test_failed_timeout_submit_can_be_retried(self):
        submitter = RecordingSubmitter(fail_times=1)
        session = ExamSession(submitter, clock=self.clock)
        session.load(make_exam(correct_answers=(None,), time_limit=1))
        for _ in range(59):
            session.tick()
        with self.assertRaises(SubmissionFailed):
            session.tick()
        self.assertEqual(session.state, SessionState.IN_PROGRESS)
        session.confirm_submit()
        self.assertEqual(session.state, SessionState.SUBMITTED)


class CountdownTimerTests(SimpleTestCase):

    def test_cancelled_timer_stops(self):
        ticks = []
        timer = CountdownTimer(3, lambda: ticks.append(1), FakeClock())
        timer.tick()
        timer.cancel()
        timer.tick()
        self.assertEqual(timer.remaining, 2)
        self.assertEqual(len(ticks), 1)
