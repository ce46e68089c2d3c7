"""Geofence subscriptions and evaluation."""

from .evaluator import GeoFenceEvaluator

__all__ = ["GeoFenceEvaluator"]
