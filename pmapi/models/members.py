from django.db import models


class Member(models.Model):
    """Application-side user record.

    Linked to the identity provider through ``cognito_id`` (the token's
    ``sub`` claim); the app never stores credentials here.
    """
    user_id = models.AutoField(primary_key=True)
    username = models.CharField(max_length=150, unique=True)
    email = models.EmailField(blank=True)
    profile_picture_url = models.CharField(max_length=255, blank=True, null=True)
    cognito_id = models.CharField(max_length=255, unique=True, blank=True, null=True)
    team = models.ForeignKey('Team', on_delete=models.SET_NULL, null=True, blank=True, related_name='members')

    class Meta:
        ordering = ['user_id']

    def __str__(self):
        return self.username
