"""Repository exports."""

from .profile_repository import ProfileRepository
from .swipe_repository import SwipeRepository
from .match_repository import MatchRepository, canonical_pair
from .contact_repository import ContactRepository
from .report_repository import ReportRepository
from .log_repository import LogRepository

__all__ = [
    "ProfileRepository",
    "SwipeRepository",
    "MatchRepository",
    "canonical_pair",
    "ContactRepository",
    "ReportRepository",
    "LogRepository",
]
