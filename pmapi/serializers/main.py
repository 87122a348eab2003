from rest_framework import serializers

from ..models import Attachment, Comment, Member, Project, Task, Team, STATUS_CHOICES, PRIORITY_CHOICES, STATUS_TO_DO, PRIORITY_MEDIUM
from .fields import FlexibleDateTimeField


class MemberSerializer(serializers.ModelSerializer):
    """Application user in the camelCase shape the client expects"""
    userId = serializers.IntegerField(source='user_id', read_only=True)
    profilePictureUrl = serializers.CharField(source='profile_picture_url', required=False, allow_null=True, allow_blank=True)
    cognitoId = serializers.CharField(source='cognito_id', required=False, allow_null=True)
    teamId = serializers.PrimaryKeyRelatedField(source='team', queryset=Team.objects.all(), required=False, allow_null=True)

    class Meta:
        model = Member
        fields = ['userId', 'username', 'email', 'profilePictureUrl', 'cognitoId', 'teamId']


class ProjectSerializer(serializers.ModelSerializer):
    description = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    startDate = FlexibleDateTimeField(source='start_date', required=False, allow_null=True)
    endDate = FlexibleDateTimeField(source='end_date', required=False, allow_null=True)

    class Meta:
        model = Project
        fields = ['id', 'name', 'description', 'startDate', 'endDate']
        read_only_fields = ['id']


class CommentSerializer(serializers.ModelSerializer):
    taskId = serializers.IntegerField(source='task_id', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)

    class Meta:
        model = Comment
        fields = ['id', 'text', 'taskId', 'userId']


class AttachmentSerializer(serializers.ModelSerializer):
    fileURL = serializers.CharField(source='file_url', read_only=True)
    fileName = serializers.CharField(source='file_name', read_only=True)
    taskId = serializers.IntegerField(source='task_id', read_only=True)
    uploadedById = serializers.IntegerField(source='uploaded_by_id', read_only=True)

    class Meta:
        model = Attachment
        fields = ['id', 'fileURL', 'fileName', 'taskId', 'uploadedById']


class TaskSerializer(serializers.ModelSerializer):
    """Read shape of a task with its people, comments and attachments embedded"""
    startDate = serializers.DateTimeField(source='start_date', read_only=True)
    dueDate = serializers.DateTimeField(source='due_date', read_only=True)
    projectId = serializers.IntegerField(source='project_id', read_only=True)
    authorUserId = serializers.IntegerField(source='author_id', read_only=True)
    assignedUserId = serializers.IntegerField(source='assignee_id', read_only=True, allow_null=True)
    author = MemberSerializer(read_only=True)
    assignee = MemberSerializer(read_only=True, allow_null=True)
    comments = CommentSerializer(many=True, read_only=True)
    attachments = AttachmentSerializer(many=True, read_only=True)

    class Meta:
        model = Task
        fields = [
            'id', 'title', 'description', 'status', 'priority', 'tags',
            'startDate', 'dueDate', 'points', 'projectId', 'authorUserId',
            'assignedUserId', 'author', 'assignee', 'comments', 'attachments'
        ]


class TaskCreateSerializer(serializers.ModelSerializer):
    """Write shape for new tasks; ids arrive as numbers or numeric strings"""
    description = serializers.CharField(required=False, allow_blank=True)
    status = serializers.ChoiceField(choices=STATUS_CHOICES, default=STATUS_TO_DO)
    priority = serializers.ChoiceField(choices=PRIORITY_CHOICES, default=PRIORITY_MEDIUM)
    tags = serializers.CharField(required=False, allow_blank=True)
    startDate = FlexibleDateTimeField(source='start_date', required=False)
    dueDate = FlexibleDateTimeField(source='due_date', required=False)
    points = serializers.IntegerField(required=False)
    projectId = serializers.PrimaryKeyRelatedField(source='project', queryset=Project.objects.all())
    authorUserId = serializers.PrimaryKeyRelatedField(source='author', queryset=Member.objects.all())
    assignedUserId = serializers.PrimaryKeyRelatedField(source='assignee', queryset=Member.objects.all(), required=False)

    class Meta:
        model = Task
        fields = [
            'title', 'description', 'status', 'priority', 'tags', 'startDate',
            'dueDate', 'points', 'projectId', 'authorUserId', 'assignedUserId'
        ]


class TeamSerializer(serializers.ModelSerializer):
    teamId = serializers.IntegerField(source='id', read_only=True)
    teamName = serializers.CharField(source='team_name')
    productOwnerUserId = serializers.IntegerField(source='product_owner_id', read_only=True, allow_null=True)
    projectManagerUserId = serializers.IntegerField(source='project_manager_id', read_only=True, allow_null=True)
    productOwnerUsername = serializers.SerializerMethodField()
    projectManagerUsername = serializers.SerializerMethodField()

    class Meta:
        model = Team
        fields = [
            'teamId', 'teamName', 'productOwnerUserId', 'projectManagerUserId',
            'productOwnerUsername', 'projectManagerUsername'
        ]

    def get_productOwnerUsername(self, obj):
        return obj.product_owner.username if obj.product_owner else None

    def get_projectManagerUsername(self, obj):
        return obj.project_manager.username if obj.project_manager else None
