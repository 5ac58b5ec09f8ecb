"""Capsulify onboarding and wardrobe persistence."""

__version__ = "0.1.0"
