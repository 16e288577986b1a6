"""
Services layer for business logic.

This package contains service modules that encapsulate business logic
separate from the API routes.
"""

from .chat_service import ChatService
from .consolidation_service import ConsolidationService
from .contact_service import ContactService
from .file_storage_service import FileStorageService
from .lawyer_service import LawyerService
from .scam_comment_service import ScamCommentService
from .scam_report_service import ScamReportService
from .scam_stats_service import ScamStatsService
from .scam_video_service import ScamVideoService
from .user_service import UserService

__all__ = [
    "ChatService",
    "ConsolidationService",
    "ContactService",
    "FileStorageService",
    "LawyerService",
    "ScamCommentService",
    "ScamReportService",
    "ScamStatsService",
    "ScamVideoService",
    "UserService",
]
