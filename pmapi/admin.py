from django.contrib import admin

from .models import Attachment, Comment, Member, Project, Task, Team


class TaskInline(admin.TabularInline):
    model = Task
    extra = 0
    fields = ('title', 'status', 'priority', 'author', 'assignee', 'due_date')
    fk_name = 'project'


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0
    fields = ('user', 'text')


class AttachmentInline(admin.TabularInline):
    model = Attachment
    extra = 0
    fields = ('file_name', 'file_url', 'uploaded_by')


@admin.register(Team)
class TeamAdmin(admin.ModelAdmin):
    list_display = ('id', 'team_name', 'product_owner', 'project_manager')
    search_fields = ('team_name',)


@admin.register(Member)
class MemberAdmin(admin.ModelAdmin):
    list_display = ('user_id', 'username', 'email', 'team', 'cognito_id')
    list_filter = ('team',)
    search_fields = ('username', 'email', 'cognito_id')


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    inlines = (TaskInline,)
    list_display = ('id', 'name', 'start_date', 'end_date', 'get_status')
    search_fields = ('name', 'description')

    def get_status(self, obj):
        return obj.derived_status
    get_status.short_description = 'Status'


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    inlines = (CommentInline, AttachmentInline)
    list_display = ('id', 'title', 'project', 'status', 'priority', 'author', 'assignee', 'due_date')
    list_filter = ('status', 'priority', 'project')
    search_fields = ('title', 'description', 'tags')
    raw_id_fields = ('author', 'assignee')
