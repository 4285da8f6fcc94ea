"""Moderation module exports."""

from swipematch.moderation.models import ReportStatus, ReportView
from swipematch.moderation.interlock import ModerationInterlock

__all__ = ["ReportStatus", "ReportView", "ModerationInterlock"]
