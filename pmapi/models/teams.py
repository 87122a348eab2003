from django.db import models


class Team(models.Model):
    id = models.AutoField(primary_key=True)
    team_name = models.CharField(max_length=100)
    product_owner = models.ForeignKey('Member', on_delete=models.SET_NULL, null=True, blank=True, related_name='owned_teams')
    project_manager = models.ForeignKey('Member', on_delete=models.SET_NULL, null=True, blank=True, related_name='managed_teams')

    def __str__(self):
        return f"Team {self.team_name}"
