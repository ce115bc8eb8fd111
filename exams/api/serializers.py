"""
Request validation and response shapes for the exam API.

Responses are built from the domain dataclasses, not from model instances.
Field names follow the document layout clients consume (``_id``, camelCase).
"""
from rest_framework import serializers

from exams.domain import UNANSWERED
from exams.grading import grade_band
from exams.models import UserProfile


class PrincipalSerializer(serializers.Serializer):
    id = serializers.IntegerField(read_only=True)
    role = serializers.ChoiceField(choices=UserProfile.Role.choices, read_only=True)
    name = serializers.CharField(read_only=True)


class QuestionInputSerializer(serializers.Serializer):
    text = serializers.CharField()
    options = serializers.ListField(child=serializers.CharField(), min_length=2)
    correctAnswer = serializers.IntegerField(min_value=0)
    explanation = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, data):
        if data['correctAnswer'] >= len(data['options']):
            raise serializers.ValidationError(
                {"correctAnswer": "Must be the index of one of the options."}
            )
        return data


class ExamCreateSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=300)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    timeLimit = serializers.IntegerField(min_value=1, required=False, allow_null=True, default=None)
    questions = QuestionInputSerializer(many=True, allow_empty=False)

    def to_service_kwargs(self):
        data = self.validated_data
        return {
            'title': data['title'],
            'description': data['description'],
            'time_limit': data['timeLimit'],
            'questions': [
                {
                    'text': q['text'],
                    'options': q['options'],
                    'correct_answer': q['correctAnswer'],
                    'explanation': q.get('explanation'),
                }
                for q in data['questions']
            ],
        }


class QuestionSerializer(serializers.Serializer):
    _id = serializers.IntegerField(source='id', read_only=True)
    text = serializers.CharField(read_only=True)
    options = serializers.ListField(child=serializers.CharField(), read_only=True)
    correctAnswer = serializers.IntegerField(source='correct_answer', read_only=True, allow_null=True)
    explanation = serializers.CharField(read_only=True, allow_null=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        # Redacted questions carry no correct answer; leave the key out entirely.
        if instance.correct_answer is None:
            data.pop('correctAnswer', None)
        if instance.explanation is None:
            data.pop('explanation', None)
        return data


class ExamSummarySerializer(serializers.Serializer):
    _id = serializers.IntegerField(source='id', read_only=True)
    title = serializers.CharField(read_only=True)
    description = serializers.CharField(read_only=True)
    createdBy = serializers.IntegerField(source='created_by', read_only=True)
    timeLimit = serializers.IntegerField(source='time_limit', read_only=True, allow_null=True)


class ExamSerializer(ExamSummarySerializer):
    questions = QuestionSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)


class ResultSubmitSerializer(serializers.Serializer):
    examId = serializers.IntegerField()
    answers = serializers.ListField(
        child=serializers.IntegerField(min_value=UNANSWERED, allow_null=True),
        allow_empty=True
    )
    timeTaken = serializers.IntegerField(min_value=0, required=False, allow_null=True, default=None)


class ExamResultSerializer(serializers.Serializer):
    _id = serializers.IntegerField(source='id', read_only=True)
    examId = serializers.IntegerField(source='exam_id', read_only=True)
    studentId = serializers.IntegerField(source='student_id', read_only=True)
    studentName = serializers.CharField(source='student_name', read_only=True)
    score = serializers.IntegerField(read_only=True)
    maxScore = serializers.IntegerField(source='max_score', read_only=True)
    timeTaken = serializers.IntegerField(source='time_taken', read_only=True, allow_null=True)
    answers = serializers.ListField(child=serializers.IntegerField(), read_only=True)
    completedAt = serializers.DateTimeField(source='completed_at', read_only=True)
    percentage = serializers.SerializerMethodField()
    grade = serializers.SerializerMethodField()

    def get_percentage(self, obj) -> float:
        return round(obj.percentage, 1)

    def get_grade(self, obj) -> str:
        return grade_band(obj.percentage)


class ExamStatisticsSerializer(serializers.Serializer):
    examId = serializers.IntegerField(source='exam_id', read_only=True)
    attempts = serializers.IntegerField(read_only=True)
    averagePercentage = serializers.FloatField(source='average_percentage', read_only=True)
    highestPercentage = serializers.FloatField(source='highest_percentage', read_only=True)
    lowestPercentage = serializers.FloatField(source='lowest_percentage', read_only=True)
