from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone


class ExamResult(models.Model):
    """One student's completed attempt. Never updated after creation."""

    exam = models.ForeignKey(
        'Exam',
        on_delete=models.CASCADE,
        related_name='results',
        db_index=True
    )
    student = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='exam_results',
        db_index=True
    )
    student_name = models.CharField(max_length=300)
    score = models.PositiveIntegerField()
    max_score = models.PositiveIntegerField()
    time_taken = models.PositiveIntegerField(null=True, blank=True, help_text="Seconds")
    answers = models.JSONField(default=list)
    completed_at = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        ordering = ['-completed_at']
        indexes = [
            models.Index(fields=['student', 'completed_at'], name='result_student_completed_idx'),
            models.Index(fields=['exam', 'score'], name='result_exam_score_idx'),
        ]

    def __str__(self):
        return f"{self.student_name} - {self.exam.title} ({self.score}/{self.max_score})"
