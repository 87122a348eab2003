from django.contrib import admin

from .models import Profile


@admin.register(Profile)
class ProfileAdmin(admin.ModelAdmin):
    list_display = ('user', 'subject_id', 'is_verified', 'created_at')
    search_fields = ('user__username', 'user__email', 'subject_id')
    readonly_fields = ('subject_id', 'created_at')
