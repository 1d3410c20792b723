"""Interaction telemetry aggregation."""

from aegis.telemetry.tracker import InteractionTracker

__all__ = ["InteractionTracker"]
