from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.models import User
from .models import Exam, Question, ExamResult, UserProfile


class UserProfileInline(admin.StackedInline):
    model = UserProfile
    can_delete = False
    verbose_name_plural = 'Profile'


class UserAdmin(BaseUserAdmin):
    inlines = [UserProfileInline]
    list_display = ['username', 'email', 'first_name', 'last_name', 'get_role', 'is_staff']
    list_filter = ['is_staff', 'is_superuser', 'is_active', 'profile__role']

    def get_role(self, obj):
        return obj.profile.get_role_display() if hasattr(obj, 'profile') else '-'
    get_role.short_description = 'Role'


admin.site.unregister(User)
admin.site.register(User, UserAdmin)


class QuestionInline(admin.TabularInline):
    model = Question
    extra = 1
    fields = ['order', 'text', 'options', 'correct_answer', 'explanation']


@admin.register(Exam)
class ExamAdmin(admin.ModelAdmin):
    list_display = ['title', 'created_by', 'time_limit', 'question_count', 'created_at']
    list_filter = ['created_by']
    search_fields = ['title', 'description']
    inlines = [QuestionInline]
    readonly_fields = ['created_at']

    def question_count(self, obj):
        return obj.get_question_count()
    question_count.short_description = 'Questions'


@admin.register(ExamResult)
class ExamResultAdmin(admin.ModelAdmin):
    list_display = ['id', 'student_name', 'exam', 'score', 'max_score', 'time_taken', 'completed_at']
    list_filter = ['exam']
    search_fields = ['student_name', 'student__username', 'exam__title']
    ordering = ['-completed_at']
    readonly_fields = [
        'exam', 'student', 'student_name', 'score', 'max_score',
        'time_taken', 'answers', 'completed_at'
    ]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
