from django.db import models
from django.contrib.auth.models import User
from django.core.validators import MinValueValidator


class Exam(models.Model):
    title = models.CharField(max_length=300)
    description = models.TextField(blank=True)
    created_by = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name='created_exams',
        db_index=True
    )
    time_limit = models.PositiveIntegerField(
        null=True,
        blank=True,
        validators=[MinValueValidator(1)],
        help_text="Time limit in minutes; empty means untimed"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['created_by', 'created_at'], name='exam_creator_created_idx'),
        ]

    def __str__(self):
        return self.title

    def get_question_count(self):
        return self.questions.count()
