from .projects import ProjectAPIView
from .tasks import TaskAPIView, UserTasksAPIView, TaskStatusAPIView
from .users import UserAPIView, UserDetailAPIView
from .teams import TeamAPIView
from .search import SearchAPIView
from .health import HealthCheckView
