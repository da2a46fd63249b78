"""
Interest profile analytics.

Modules: models, tier_classifier, transaction_scanner, profile_builder, pipeline.
"""

from interest_profiler.analytics.models import InterestProfile, ProfileReport, Tier
from interest_profiler.analytics.profile_builder import build_interest_profile, build_profile_report
from interest_profiler.analytics.tier_classifier import classify_tier

__all__ = [
    "InterestProfile",
    "ProfileReport",
    "Tier",
    "build_interest_profile",
    "build_profile_report",
    "classify_tier",
]
