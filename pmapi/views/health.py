import logging

from django.db import DatabaseError, connection
from django.http import JsonResponse
from django.utils.decorators import method_decorator
from django.views import View
from django.views.decorators.csrf import csrf_exempt

from ..models import Member, Project, Task, Team

logger = logging.getLogger(__name__)

REQUIRED_TABLES = tuple(model._meta.db_table for model in (Team, Member, Project, Task))


def check_database():
    with connection.cursor() as cursor:
        cursor.execute("SELECT 1")
    return 'healthy'


def check_schema():
    tables = set(connection.introspection.table_names())
    missing = [table for table in REQUIRED_TABLES if table not in tables]
    if missing:
        logger.warning(f"Health check: tables not migrated: {', '.join(missing)}")
        return 'unmigrated'
    return 'healthy'


@method_decorator(csrf_exempt, name='dispatch')
class HealthCheckView(View):
    """Container probe. Open to anonymous callers; 503 when the database is unusable."""

    def get(self, request, *args, **kwargs):
        checks = {'database': 'unknown', 'schema': 'unknown'}
        try:
            checks['database'] = check_database()
            checks['schema'] = check_schema()
        except DatabaseError as e:
            logger.error(f"Database health check failed: {e}")
            checks['database'] = 'unhealthy'

        healthy = all(value == 'healthy' for value in checks.values())
        return JsonResponse(
            {'status': 'healthy' if healthy else 'unhealthy', 'checks': checks},
            status=200 if healthy else 503,
        )
