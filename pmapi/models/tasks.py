from django.db import models

from .members import Member
from .projects import Project

STATUS_TO_DO = 'To Do'
STATUS_WORK_IN_PROGRESS = 'Work In Progress'
STATUS_UNDER_REVIEW = 'Under Review'
STATUS_COMPLETED = 'Completed'

STATUS_CHOICES = [
    (STATUS_TO_DO, 'To Do'),
    (STATUS_WORK_IN_PROGRESS, 'Work In Progress'),
    (STATUS_UNDER_REVIEW, 'Under Review'),
    (STATUS_COMPLETED, 'Completed'),
]

PRIORITY_URGENT = 'Urgent'
PRIORITY_HIGH = 'High'
PRIORITY_MEDIUM = 'Medium'
PRIORITY_LOW = 'Low'
PRIORITY_BACKLOG = 'Backlog'

PRIORITY_CHOICES = [
    (PRIORITY_URGENT, 'Urgent'),
    (PRIORITY_HIGH, 'High'),
    (PRIORITY_MEDIUM, 'Medium'),
    (PRIORITY_LOW, 'Low'),
    (PRIORITY_BACKLOG, 'Backlog'),
]

STATUS_VALUES = {value for value, _ in STATUS_CHOICES}
PRIORITY_VALUES = {value for value, _ in PRIORITY_CHOICES}


class Task(models.Model):
    id = models.AutoField(primary_key=True)
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    # choices are not enforced on save(); status updates are written as given
    status = models.CharField(max_length=50, choices=STATUS_CHOICES, default=STATUS_TO_DO)
    priority = models.CharField(max_length=20, choices=PRIORITY_CHOICES, default=PRIORITY_MEDIUM)
    tags = models.CharField(max_length=255, blank=True, null=True, help_text="Comma-separated tags")
    start_date = models.DateTimeField(null=True, blank=True)
    due_date = models.DateTimeField(null=True, blank=True)
    points = models.IntegerField(null=True, blank=True)
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='tasks')
    author = models.ForeignKey(Member, on_delete=models.CASCADE, related_name='authored_tasks')
    assignee = models.ForeignKey(Member, on_delete=models.SET_NULL, null=True, blank=True, related_name='assigned_tasks')

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"Task {self.title}"


class Comment(models.Model):
    id = models.AutoField(primary_key=True)
    text = models.TextField()
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='comments')
    user = models.ForeignKey(Member, on_delete=models.CASCADE, related_name='comments')

    def __str__(self):
        return f"Comment by {self.user.username} on task {self.task_id}"


class Attachment(models.Model):
    id = models.AutoField(primary_key=True)
    file_url = models.CharField(max_length=500)
    file_name = models.CharField(max_length=255, blank=True, null=True)
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='attachments')
    uploaded_by = models.ForeignKey(Member, on_delete=models.CASCADE, related_name='attachments')

    def __str__(self):
        return f"Attachment {self.file_name or self.file_url}"
