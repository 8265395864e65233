from src.app.services.activity_log_service import ActivityLogService
from src.app.services.auth_service import AuthService
from src.app.services.dashboard_service import DashboardService
from src.app.services.project_service import ProjectService
from src.app.services.report_service import ReportService
from src.app.services.task_service import TaskService
from src.app.services.user_service import UserService

__all__ = [
    "ActivityLogService",
    "AuthService",
    "DashboardService",
    "ProjectService",
    "ReportService",
    "TaskService",
    "UserService",
]
