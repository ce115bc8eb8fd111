"""
API Views for the Online Exam Platform.
Provides endpoints for exam authoring, exam taking and result review.
"""
from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from drf_spectacular.utils import (
    extend_schema, extend_schema_view, OpenApiParameter,
    OpenApiExample, OpenApiResponse
)

from exams.authorization import principal_from_user, ensure_can_create_exam, ensure_can_submit
from exams.permissions import HasExamRole
from exams.services import get_exam_service, get_result_service
from exams.throttling import SubmissionRateThrottle
from .serializers import (
    PrincipalSerializer, ExamCreateSerializer, ExamSerializer, ExamSummarySerializer,
    ResultSubmitSerializer, ExamResultSerializer, ExamStatisticsSerializer,
)

FORBIDDEN = OpenApiResponse(description="Role or ownership does not allow this")
NOT_FOUND = OpenApiResponse(description="Exam not found")


# =============================================================================
# AUTHENTICATION
# =============================================================================

@extend_schema(tags=['Authentication'])
class CurrentPrincipalView(APIView):
    """The authenticated caller as the exam services see it."""
    permission_classes = [IsAuthenticated, HasExamRole]

    @extend_schema(
        summary="Get current principal",
        responses={200: PrincipalSerializer}
    )
    def get(self, request):
        principal = principal_from_user(request.user)
        return Response(PrincipalSerializer(principal).data)


# =============================================================================
# EXAMS
# =============================================================================

@extend_schema_view(
    list=extend_schema(
        summary="List exams",
        description="""
Catalog of all exams, without questions.

**Query Parameters:**
- `available=true` - for students, leave out exams they already completed
""",
        parameters=[
            OpenApiParameter(name='available', type=bool, location='query',
                             description='Hide exams the calling student already completed')
        ],
        responses={200: ExamSummarySerializer(many=True)}
    ),
    retrieve=extend_schema(
        summary="Get exam",
        description="""
Full exam with questions.

**Note:** Students never receive `correctAnswer`; teachers receive every field.
""",
        responses={200: ExamSerializer, 404: NOT_FOUND}
    ),
    create=extend_schema(
        summary="Create exam",
        description="Create an exam with its questions. **Requires Teacher role.**",
        request=ExamCreateSerializer,
        responses={201: ExamSerializer, 400: OpenApiResponse(description="Invalid exam"), 403: FORBIDDEN},
        examples=[
            OpenApiExample(
                'Request Example',
                value={
                    "title": "Introduction to Mathematics",
                    "description": "Basic arithmetic and algebra concepts",
                    "timeLimit": 30,
                    "questions": [
                        {
                            "text": "What is 2 + 2?",
                            "options": ["3", "4", "5", "6"],
                            "correctAnswer": 1,
                            "explanation": "2 + 2 equals 4"
                        }
                    ]
                },
                request_only=True
            )
        ]
    )
)
@extend_schema(tags=['Exams'])
class ExamViewSet(viewsets.ViewSet):
    """
    ViewSet for exams.

    Exams are created once and never edited; what a caller sees of an exam
    depends on their role.
    """
    permission_classes = [IsAuthenticated, HasExamRole]

    def list(self, request):
        principal = principal_from_user(request.user)
        service = get_exam_service()
        if request.query_params.get('available', '').lower() in ('1', 'true', 'yes'):
            exams = service.list_available_exams(principal)
        else:
            exams = service.list_exams()
        return Response(ExamSummarySerializer(exams, many=True).data)

    def create(self, request):
        principal = principal_from_user(request.user)
        service = get_exam_service()
        # Role check first so students get 403 rather than field errors.
        ensure_can_create_exam(principal)

        serializer = ExamCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        exam = service.create_exam(principal, **serializer.to_service_kwargs())
        return Response(ExamSerializer(exam).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        principal = principal_from_user(request.user)
        exam = get_exam_service().get_exam(principal, pk)
        return Response(ExamSerializer(exam).data)

    @extend_schema(
        summary="List a teacher's exams",
        description="Exams created by the given teacher. **Teachers may only list their own.**",
        responses={200: ExamSerializer(many=True), 403: FORBIDDEN}
    )
    @action(detail=False, methods=['get'], url_path=r'teacher/(?P<teacher_id>[^/.]+)')
    def teacher(self, request, teacher_id=None):
        principal = principal_from_user(request.user)
        exams = get_exam_service().list_exams_by_teacher(principal, teacher_id)
        return Response(ExamSerializer(exams, many=True).data)


# =============================================================================
# RESULTS
# =============================================================================

@extend_schema(tags=['Results'])
class ResultViewSet(viewsets.ViewSet):
    """
    ViewSet for exam results.

    A result is created once per submission and scored on the server
    against the stored exam.
    """
    permission_classes = [IsAuthenticated, HasExamRole]

    def get_throttles(self):
        if self.action == 'create':
            return [SubmissionRateThrottle()]
        return super().get_throttles()

    @extend_schema(
        summary="Submit exam answers",
        description="""
Submit one answer per question, in the order the questions were served.

- Each answer is an option index; `-1` (or `null`) means unanswered
- The score is computed on the server; any client score is ignored
- Submitting the same exam again records another result

**Requires Student role.**
""",
        request=ResultSubmitSerializer,
        responses={201: ExamResultSerializer, 403: FORBIDDEN, 404: NOT_FOUND},
        examples=[
            OpenApiExample(
                'Request Example',
                value={"examId": 1, "answers": [1, -1], "timeTaken": 312},
                request_only=True
            )
        ]
    )
    def create(self, request):
        principal = principal_from_user(request.user)
        service = get_result_service()
        ensure_can_submit(principal)

        serializer = ResultSubmitSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        result = service.submit_exam(
            principal,
            exam_id=data['examId'],
            answers=data['answers'],
            time_taken=data['timeTaken'],
        )
        return Response(ExamResultSerializer(result).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="List a student's results",
        description="Most recent first. **Students see only their own; teachers see any student's.**",
        responses={200: ExamResultSerializer(many=True), 403: FORBIDDEN}
    )
    @action(detail=False, methods=['get'], url_path=r'student/(?P<student_id>[^/.]+)')
    def student(self, request, student_id=None):
        principal = principal_from_user(request.user)
        results = get_result_service().list_results_by_student(principal, student_id)
        return Response(ExamResultSerializer(results, many=True).data)

    @extend_schema(
        summary="List an exam's results",
        description="Highest score first. **Only the teacher who created the exam.**",
        responses={200: ExamResultSerializer(many=True), 403: FORBIDDEN, 404: NOT_FOUND}
    )
    @action(detail=False, methods=['get'], url_path=r'exam/(?P<exam_id>[^/.]+)')
    def exam(self, request, exam_id=None):
        principal = principal_from_user(request.user)
        results = get_result_service().list_results_by_exam(principal, exam_id)
        return Response(ExamResultSerializer(results, many=True).data)

    @extend_schema(
        summary="Get exam statistics",
        description="Attempt count and average/highest/lowest percentage. **Only the exam's creator.**",
        responses={200: ExamStatisticsSerializer, 403: FORBIDDEN, 404: NOT_FOUND}
    )
    @action(detail=False, methods=['get'], url_path=r'exam/(?P<exam_id>[^/.]+)/stats')
    def exam_stats(self, request, exam_id=None):
        principal = principal_from_user(request.user)
        stats = get_result_service().get_exam_statistics(principal, exam_id)
        return Response(ExamStatisticsSerializer(stats).data)
