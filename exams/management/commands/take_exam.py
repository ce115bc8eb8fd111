"""
Management command to take an exam from the terminal as a student.

The countdown advances between inputs: every prompt first catches the
session up with the clock, so an exam whose time ran out while waiting for
input is submitted before the next command is read.
"""
import sys

from django.contrib.auth.models import User
from django.core.management.base import BaseCommand, CommandError

from exams.authorization import principal_from_user
from exams.exceptions import Forbidden, NotFound
from exams.grading import grade_band
from exams.services import get_exam_service, get_result_service
from exams.session import ExamSession, SessionState, SessionError, SubmissionFailed, format_time

HELP_TEXT = "Commands: a <n> answer, n next, p previous, j <n> jump, s submit, q quit"


class Command(BaseCommand):
    help = 'Take an exam interactively as a student'
    stealth_options = ('stdin',)

    def add_arguments(self, parser):
        parser.add_argument('username')
        parser.add_argument('exam_id')

    def handle(self, *args, **options):
        self.stdin = options.get('stdin') or sys.stdin

        user = User.objects.filter(username=options['username']).first()
        if user is None:
            raise CommandError(f"No user named {options['username']}.")
        try:
            principal = principal_from_user(user)
            exam = get_exam_service().get_exam(principal, options['exam_id'])
        except (Forbidden, NotFound) as e:
            raise CommandError(str(e.detail))
        if not principal.is_student:
            raise CommandError("Only students can take exams.")

        results = get_result_service()
        session = ExamSession(
            submitter=lambda answers, elapsed: results.submit_exam(principal, exam.id, answers, elapsed)
        )
        session.load(exam)

        self.stdout.write(self.style.NOTICE(f"\n{exam.title}"))
        if exam.description:
            self.stdout.write(exam.description)
        self.stdout.write(HELP_TEXT)

        while session.state is SessionState.IN_PROGRESS:
            if not self._sync(session):
                continue
            if session.state is not SessionState.IN_PROGRESS:
                break
            self._show_question(session)
            line = self.stdin.readline()
            if not line:
                session.abandon()
                break
            if not self._sync(session) or session.state is not SessionState.IN_PROGRESS:
                continue
            self._dispatch(session, line.strip())

        if session.state is SessionState.SUBMITTED:
            self._show_result(session, exam)
        elif session.state is SessionState.ABANDONED:
            self.stdout.write(self.style.WARNING("Exam abandoned; nothing was submitted."))

    def _sync(self, session):
        try:
            session.sync()
        except SubmissionFailed as e:
            self.stdout.write(self.style.ERROR(f"Time is up but submitting failed: {e}. Use 's' to retry."))
            return False
        return True

    def _show_question(self, session):
        question = session.current_question
        position = f"Question {session.current_index + 1} of {len(session.questions)}"
        if session.timed:
            position += f"  |  Time remaining: {format_time(session.time_remaining)}"
        self.stdout.write(f"\n{position}\n{question.text}")
        selected = session.selected_answers[session.current_index]
        for index, option in enumerate(question.options):
            marker = '*' if index == selected else ' '
            self.stdout.write(f" {marker} {index + 1}. {option}")

    def _dispatch(self, session, line):
        command, _, argument = line.partition(' ')
        try:
            if command == 'a':
                session.select_answer(int(argument) - 1)
            elif command == 'n':
                session.next()
            elif command == 'p':
                session.previous()
            elif command == 'j':
                session.jump_to(int(argument) - 1)
            elif command == 's':
                self._submit(session)
            elif command == 'q':
                session.abandon()
            else:
                self.stdout.write(HELP_TEXT)
        except ValueError:
            self.stdout.write(self.style.ERROR("Expected a number."))
        except SessionError as e:
            self.stdout.write(self.style.ERROR(str(e)))

    def _submit(self, session):
        confirmation = session.request_submit()
        self.stdout.write(f"{confirmation.message()} Submit now? [y/N]")
        if self.stdin.readline().strip().lower() != 'y':
            return
        try:
            session.confirm_submit()
        except SubmissionFailed as e:
            self.stdout.write(self.style.ERROR(f"Submitting failed: {e}. You can try again."))

    def _show_result(self, session, exam):
        result = session.result
        if session.timed_out:
            self.stdout.write(self.style.WARNING("\nTime's up! Your exam was submitted."))
        self.stdout.write(self.style.SUCCESS(
            f"\nScore: {result.score}/{result.max_score} "
            f"({result.percentage:.1f}%, {grade_band(result.percentage)})"
        ))
        for index, question in enumerate(exam.questions):
            if question.explanation:
                self.stdout.write(f"Q{index + 1}: {question.explanation}")
