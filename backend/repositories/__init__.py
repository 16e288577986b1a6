"""
Repository pattern implementation for data access layer.
"""

from .base import BaseRepository
from .consolidated_scam_repository import (
    ConsolidatedScamRepository,
    ScamReportConsolidationRepository,
)
from .lawyer_repository import LawyerProfileRepository, LawyerRequestRepository
from .scam_comment_repository import ScamCommentRepository
from .scam_report_repository import ScamReportRepository
from .scam_stats_repository import ScamStatsRepository
from .scam_video_repository import ScamVideoRepository
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "ConsolidatedScamRepository",
    "LawyerProfileRepository",
    "LawyerRequestRepository",
    "ScamCommentRepository",
    "ScamReportConsolidationRepository",
    "ScamReportRepository",
    "ScamStatsRepository",
    "ScamVideoRepository",
    "UserRepository",
]
