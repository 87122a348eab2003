from datetime import timedelta
import random

from django.core.management.base import BaseCommand
from django.db import transaction
from django.utils import timezone

from ...models import (
    Attachment, Comment, Member, Project, Task, Team,
    STATUS_CHOICES, PRIORITY_CHOICES,
)

TEAM_NAMES = ['Quality Assurance', 'Platform', 'Design', 'Growth']

PROJECT_NAMES = [
    ('Apollo', 'Customer portal rebuild'),
    ('Beacon', 'Mobile notifications service'),
    ('Cobalt', 'Billing migration'),
    ('Delta', 'Analytics dashboard'),
    ('Ember', 'Onboarding flow redesign'),
]

TASK_TITLES = [
    'Draft requirements', 'Set up CI pipeline', 'Design database schema',
    'Implement login screen', 'Write API docs', 'Load test endpoints',
    'Review pull requests', 'Fix flaky tests', 'Prepare release notes',
    'Plan sprint demo',
]

TAGS = ['backend', 'frontend', 'infra', 'docs', 'urgent', 'research']


class Command(BaseCommand):
    help = 'Create sample teams, users, projects and tasks'

    def add_arguments(self, parser):
        parser.add_argument(
            '--users',
            type=int,
            default=8,
            help='Number of users to create (default: 8)',
        )
        parser.add_argument(
            '--tasks',
            type=int,
            default=20,
            help='Number of tasks to create (default: 20)',
        )
        parser.add_argument(
            '--clear',
            action='store_true',
            help='Clear existing data before creating new data',
        )

    @transaction.atomic
    def handle(self, *args, **options):
        if options['clear']:
            self.stdout.write(self.style.WARNING('Clearing existing data...'))
            self.clear_data()

        self.stdout.write(self.style.SUCCESS('Creating sample data...'))

        teams = self.create_teams()
        self.stdout.write(self.style.SUCCESS(f'Created {len(teams)} teams'))

        members = self.create_members(options['users'], teams)
        self.stdout.write(self.style.SUCCESS(f'Created {len(members)} users'))

        for team in teams:
            team.product_owner = random.choice(members)
            team.project_manager = random.choice(members)
            team.save()

        projects = self.create_projects()
        self.stdout.write(self.style.SUCCESS(f'Created {len(projects)} projects'))

        tasks = self.create_tasks(options['tasks'], projects, members)
        self.stdout.write(self.style.SUCCESS(f'Created {len(tasks)} tasks'))

        self.stdout.write(self.style.SUCCESS('Sample data creation completed successfully!'))

    def clear_data(self):
        Attachment.objects.all().delete()
        Comment.objects.all().delete()
        Task.objects.all().delete()
        Project.objects.all().delete()
        Team.objects.update(product_owner=None, project_manager=None)
        Member.objects.all().delete()
        Team.objects.all().delete()

    def create_teams(self):
        return [Team.objects.create(team_name=name) for name in TEAM_NAMES]

    def create_members(self, count, teams):
        members = []
        for i in range(1, count + 1):
            member, _ = Member.objects.get_or_create(
                username=f'user{i}',
                defaults={
                    'email': f'user{i}@example.com',
                    'profile_picture_url': f'p{i}.jpeg',
                    'team': random.choice(teams),
                }
            )
            members.append(member)
        return members

    def create_projects(self):
        now = timezone.now()
        projects = []
        for index, (name, description) in enumerate(PROJECT_NAMES):
            start = now - timedelta(days=30 * (index + 1))
            # older projects are finished
            end = start + timedelta(days=60) if index >= 3 else None
            projects.append(Project.objects.create(
                name=name,
                description=description,
                start_date=start,
                end_date=end,
            ))
        return projects

    def create_tasks(self, count, projects, members):
        now = timezone.now()
        statuses = [value for value, _ in STATUS_CHOICES]
        priorities = [value for value, _ in PRIORITY_CHOICES]
        tasks = []
        for i in range(count):
            start = now - timedelta(days=random.randint(0, 20))
            task = Task.objects.create(
                title=random.choice(TASK_TITLES),
                description=f'Sample task #{i + 1}',
                status=random.choice(statuses),
                priority=random.choice(priorities),
                tags=','.join(random.sample(TAGS, k=random.randint(1, 3))),
                start_date=start,
                due_date=start + timedelta(days=random.randint(3, 14)),
                points=random.choice([1, 2, 3, 5, 8]),
                project=random.choice(projects),
                author=random.choice(members),
                assignee=random.choice(members + [None]),
            )
            if random.random() < 0.4:
                Comment.objects.create(task=task, user=random.choice(members), text='Looks good, moving on.')
            if random.random() < 0.2:
                Attachment.objects.create(
                    task=task,
                    uploaded_by=task.author,
                    file_url=f'attachments/task-{task.id}.png',
                    file_name=f'task-{task.id}.png',
                )
            tasks.append(task)
        return tasks
