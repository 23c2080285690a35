from gradebook.services.grade_report_service import GradeReportService
from gradebook.services.progress_report_service import ProgressReportService

__all__ = ["GradeReportService", "ProgressReportService"]
