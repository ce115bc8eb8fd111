"""
Tests for positional scoring and grade bands.
"""
import random

from django.test import SimpleTestCase

from exams.grading import score, score_exam, grade_band
from .factories import make_exam


class ScoringTests(SimpleTestCase):

    def test_single_correct_answer(self):
        result = score_exam(make_exam(correct_answers=(1,)), [1])
        self.assertEqual(result.score, 1)
        self.assertEqual(result.max_score, 1)
        self.assertEqual(result.percentage, 100.0)

    def test_unanswered_scores_zero(self):
        result = score_exam(make_exam(correct_answers=(1,)), [-1])
        self.assertEqual(result.score, 0)
        self.assertEqual(result.max_score, 1)

    def test_extra_answers_are_ignored(self):
        self.assertEqual(score(make_exam(correct_answers=(1, 0)), [1, 0, 2, 3]), 2)

    def test_missing_answers_count_as_wrong(self):
        exam = make_exam(correct_answers=(1, 0, 2))
        self.assertEqual(score(exam, [1]), 1)
        self.assertEqual(score(exam, []), 0)

    def test_answers_match_by_position(self):
        exam = make_exam(correct_answers=(0, 1))
        self.assertEqual(score(exam, [1, 0]), 0)

    def test_score_matches_positional_count(self):
        rng = random.Random(7)
        for _ in range(50):
            exam = make_exam(correct_answers=tuple(rng.randrange(4) for _ in range(rng.randint(1, 8))))
            answers = [rng.randrange(-1, 4) for _ in range(rng.randint(0, 10))]
            expected = sum(
                1 for i in range(min(len(answers), len(exam.questions)))
                if answers[i] == exam.questions[i].correct_answer
            )
            result = score(exam, answers)
            self.assertEqual(result, expected)
            self.assertTrue(0 <= result <= len(exam.questions))


class GradeBandTests(SimpleTestCase):

    def test_bands(self):
        self.assertEqual(grade_band(100), 'excellent')
        self.assertEqual(grade_band(90), 'excellent')
        self.assertEqual(grade_band(75), 'good')
        self.assertEqual(grade_band(60), 'pass')
        self.assertEqual(grade_band(59.9), 'fail')

    def test_empty_exam_percentage_is_zero(self):
        result = score_exam(make_exam(correct_answers=()), [])
        self.assertEqual(result.percentage, 0.0)
        self.assertEqual(result.grade, 'fail')
