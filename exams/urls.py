from django.urls import path, include
from rest_framework.authtoken.views import obtain_auth_token
from rest_framework.routers import DefaultRouter
from .api.views import CurrentPrincipalView, ExamViewSet, ResultViewSet

# Router for ViewSets
router = DefaultRouter()
router.register(r'exams', ExamViewSet, basename='exam')
router.register(r'results', ResultViewSet, basename='result')

urlpatterns = [
    # ============================================
    # AUTHENTICATION
    # ============================================
    path('auth/login/', obtain_auth_token, name='login'),
    path('auth/me/', CurrentPrincipalView.as_view(), name='current-principal'),

    # ============================================
    # CORE API ROUTES (ViewSets)
    # ============================================
    path('', include(router.urls)),
]
