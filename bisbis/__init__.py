"""BISBIS — request-validating data gateway for restaurants, dishes, ratings and orders."""

__version__ = "1.0.0"
