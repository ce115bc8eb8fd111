"""
Management command to set up demo data for the Online Exam Platform.
Creates a teacher, a student and two sample exams.
"""
from django.core.management.base import BaseCommand
from django.contrib.auth.models import User
from rest_framework.authtoken.models import Token

from exams.authorization import principal_from_user
from exams.models import Exam, UserProfile
from exams.services import get_exam_service

DEMO_EXAMS = [
    {
        'title': 'Introduction to Mathematics',
        'description': 'Basic arithmetic and algebra concepts',
        'time_limit': 30,
        'questions': [
            {
                'text': 'What is 2 + 2?',
                'options': ['3', '4', '5', '6'],
                'correct_answer': 1,
                'explanation': '2 + 2 equals 4',
            },
            {
                'text': 'Solve for x: 3x + 5 = 14',
                'options': ['x = 3', 'x = 2', 'x = 4', 'x = 5'],
                'correct_answer': 0,
                'explanation': '3x + 5 = 14, 3x = 9, x = 3',
            },
        ],
    },
    {
        'title': 'Basic Science Test',
        'description': 'Fundamentals of physics and chemistry',
        'time_limit': 45,
        'questions': [
            {
                'text': 'What is the chemical formula for water?',
                'options': ['CO2', 'H2O', 'O2', 'N2'],
                'correct_answer': 1,
                'explanation': 'Water is composed of two hydrogen atoms and one oxygen atom',
            },
        ],
    },
]


class Command(BaseCommand):
    help = 'Set up demo data for testing'

    def handle(self, *args, **options):
        self.stdout.write(self.style.NOTICE('\nSetting up Online Exam Platform demo data...\n'))

        teacher = self._user('teacher', 'teacher123', 'Teacher', 'Demo', UserProfile.Role.TEACHER)
        student = self._user('student', 'student123', 'Student', 'Demo', UserProfile.Role.STUDENT)

        teacher_token, _ = Token.objects.get_or_create(user=teacher)
        student_token, _ = Token.objects.get_or_create(user=student)

        service = get_exam_service()
        principal = principal_from_user(teacher)
        for data in DEMO_EXAMS:
            if Exam.objects.filter(title=data['title'], created_by=teacher).exists():
                self.stdout.write(f"  Exam '{data['title']}' already exists")
                continue
            exam = service.create_exam(principal, **data)
            self.stdout.write(self.style.SUCCESS(f"✓ Created exam {exam.id}: {exam.title}"))

        self.stdout.write(self.style.SUCCESS('\n' + '=' * 50))
        self.stdout.write(self.style.SUCCESS('Demo setup complete!'))
        self.stdout.write(self.style.SUCCESS('=' * 50))
        self.stdout.write(f'\nTeacher token: {teacher_token.key}')
        self.stdout.write(f'Student token: {student_token.key}')
        self.stdout.write('\nAPI docs: /api/docs/\n')

    def _user(self, username, password, first_name, last_name, role):
        user, created = User.objects.get_or_create(
            username=username,
            defaults={
                'email': f'{username}@example.com',
                'first_name': first_name,
                'last_name': last_name,
                'is_active': True,
            }
        )
        if created:
            user.set_password(password)
            user.save()
            user.profile.role = role
            user.profile.save()
            self.stdout.write(self.style.SUCCESS(f'✓ Created {role}: {username} / {password}'))
        else:
            self.stdout.write(f'  {role.capitalize()} user already exists')
        return user
