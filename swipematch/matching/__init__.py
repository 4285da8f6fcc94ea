"""Matching engine module exports."""

from swipematch.matching.config import (
    MatchingConfig,
    FeedConfig,
    get_matching_config,
)

from swipematch.matching.models import (
    SwipeDirection,
    DecisionResult,
    CandidateProfile,
    MatchSummary,
)

from swipematch.matching.ledger import SwipeLedger
from swipematch.matching.reconciler import MatchReconciler
from swipematch.matching.candidates import CandidateSelector
from swipematch.matching.disclosure import DisclosureGate
from swipematch.matching.engine import MatchingEngine

from swipematch.matching.metrics import (
    MatchingMetrics,
    get_metrics,
    reset_metrics,
)

__all__ = [
    # Config
    "MatchingConfig",
    "FeedConfig",
    "get_matching_config",
    # Models
    "SwipeDirection",
    "DecisionResult",
    "CandidateProfile",
    "MatchSummary",
    # Components
    "SwipeLedger",
    "MatchReconciler",
    "CandidateSelector",
    "DisclosureGate",
    "MatchingEngine",
    # Metrics
    "MatchingMetrics",
    "get_metrics",
    "reset_metrics",
]
