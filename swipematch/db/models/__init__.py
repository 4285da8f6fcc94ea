"""Database models for the swipematch service."""

from .profile import Profile
from .swipe import Swipe
from .match import Match
from .contact import Contact
from .report import Report
from .log import Log

__all__ = ["Profile", "Swipe", "Match", "Contact", "Report", "Log"]
