"""Pydantic payload models."""

from capsulify.schemas.onboarding import ClothingVariantFilter, OnboardingData

__all__ = [
    "ClothingVariantFilter",
    "OnboardingData",
]
