"""
Tests for the Django ORM storage adapters.
"""
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase

from exams import domain
from exams.exceptions import InternalFailure
from exams.models import ExamResult, UserProfile
from exams.repositories import OrmExamRepository, OrmResultRepository, OrmUserDirectory
from .factories import make_user


class OrmRepositoryTestCase(TestCase):

    def setUp(self):
        self.teacher, _ = make_user('teacher', UserProfile.Role.TEACHER)
        self.student, _ = make_user('student', UserProfile.Role.STUDENT, 'Ada', 'Lovelace')
        self.exams = OrmExamRepository()
        self.results = OrmResultRepository()

    def add_exam(self, title='Quiz'):
        return self.exams.add(
            domain.ExamBuilder(title=title, description='', time_limit=10)
            .add_question('2 + 2?', ['3', '4'], 1, 'Four')
            .add_question('Capital of France?', ['Paris', 'Rome', 'Oslo'], 0)
            .build(created_by=self.teacher.id)
        )

    def add_result(self, exam, score, student=None):
        student = student or self.student
        return self.results.add(domain.ExamResult(
            exam_id=exam.id, student_id=student.id, student_name='Ada Lovelace',
            score=score, max_score=2, answers=(1, -1),
        ))


class OrmExamRepositoryTests(OrmRepositoryTestCase):

    def test_add_assigns_ids_and_keeps_question_order(self):
        exam = self.add_exam()
        self.assertIsNotNone(exam.id)
        self.assertIsNotNone(exam.created_at)
        self.assertEqual([q.text for q in exam.questions], ['2 + 2?', 'Capital of France?'])
        self.assertTrue(all(q.id for q in exam.questions))
        self.assertEqual(exam.questions[1].options, ('Paris', 'Rome', 'Oslo'))
        self.assertIsNone(exam.questions[1].explanation)

    def test_get_returns_stored_exam(self):
        exam = self.add_exam()
        self.assertEqual(self.exams.get(exam.id), exam)
        self.assertEqual(self.exams.get(str(exam.id)), exam)

    def test_get_unknown_or_malformed_id(self):
        self.assertIsNone(self.exams.get(12345))
        self.assertIsNone(self.exams.get('abc'))
        self.assertIsNone(self.exams.get(None))

    def test_list_newest_first(self):
        first = self.add_exam('First')
        second = self.add_exam('Second')
        self.assertEqual([e.id for e in self.exams.list_all()], [second.id, first.id])

    def test_list_by_creator(self):
        exam = self.add_exam()
        self.assertEqual([e.id for e in self.exams.list_by_creator(self.teacher.id)], [exam.id])
        self.assertEqual(self.exams.list_by_creator(self.student.id), [])
        self.assertEqual(self.exams.list_by_creator('nobody'), [])


class OrmResultRepositoryTests(OrmRepositoryTestCase):

    def test_add_round_trip(self):
        exam = self.add_exam()
        result = self.add_result(exam, 1)
        self.assertIsNotNone(result.id)
        self.assertIsNotNone(result.completed_at)
        self.assertEqual(result.answers, (1, -1))
        self.assertEqual(result.exam_id, exam.id)

    def test_list_by_student_most_recent_first(self):
        exam = self.add_exam()
        first = self.add_result(exam, 1)
        second = self.add_result(exam, 2)
        self.assertEqual([r.id for r in self.results.list_by_student(self.student.id)],
                         [second.id, first.id])

    def test_list_by_exam_highest_score_first(self):
        exam = self.add_exam()
        self.add_result(exam, 1)
        self.add_result(exam, 2)
        self.add_result(exam, 0)
        self.assertEqual([r.score for r in self.results.list_by_exam(exam.id)], [2, 1, 0])

    def test_storage_failure_becomes_internal_failure(self):
        exam = self.add_exam()
        with mock.patch.object(ExamResult.objects, 'create', side_effect=DatabaseError('disk full')):
            with self.assertRaises(InternalFailure):
                self.add_result(exam, 1)


class OrmUserDirectoryTests(OrmRepositoryTestCase):

    def test_display_name(self):
        directory = OrmUserDirectory()
        self.assertEqual(directory.display_name(self.student.id), 'Ada Lovelace')
        self.assertEqual(directory.display_name(self.teacher.id), 'teacher')
        self.assertIsNone(directory.display_name(9999))
