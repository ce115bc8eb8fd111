from django.db import models


class Question(models.Model):
    exam = models.ForeignKey(
        'Exam',
        on_delete=models.CASCADE,
        related_name='questions',
        db_index=True
    )
    order = models.PositiveIntegerField(default=0)
    text = models.TextField()
    options = models.JSONField(default=list)
    correct_answer = models.PositiveIntegerField(help_text="Index into options")
    explanation = models.TextField(null=True, blank=True)

    class Meta:
        ordering = ['order', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['exam', 'order'],
                name='unique_exam_question_order'
            )
        ]

    def __str__(self):
        return f"Q{self.order + 1}: {self.text[:50]}"
