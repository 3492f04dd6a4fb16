"""Pricing errors."""

from __future__ import annotations


class PricingError(Exception):
    """Base class for failures while computing a price."""


class InvalidInterval(PricingError, ValueError):
    """Raised when the requested window has no positive duration."""
