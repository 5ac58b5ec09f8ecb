"""
Services Package
================

Public operations of the persistence layer. Every method opens its own
session, runs in one transaction and releases the connection on every
exit path.

Available services:
- UserService: sign-up, profile, deletion, legacy body-type onboarding
- OnboardingService: full onboarding save
- WardrobeService: wardrobe query, catalog search, variant swap
- ReferenceDataService: startup check of reference constants
"""

from capsulify.services.onboarding import OnboardingService, get_onboarding_service
from capsulify.services.reference_data import ReferenceDataService, verify_reference_data
from capsulify.services.users import UserService, get_user_service
from capsulify.services.wardrobe import WardrobeService, get_wardrobe_service

__all__ = [
    "OnboardingService",
    "get_onboarding_service",
    "ReferenceDataService",
    "verify_reference_data",
    "UserService",
    "get_user_service",
    "WardrobeService",
    "get_wardrobe_service",
]
