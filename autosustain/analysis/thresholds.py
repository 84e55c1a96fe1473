"""Threshold evaluation: is a metric at or below a configured tier."""

from __future__ import annotations

from autosustain.models import Metric, ThresholdKind, ThresholdSet, ThresholdTier


def evaluate(metric: Metric, tier: ThresholdTier) -> bool:
    """True if the tier is triggered (value >= percent, or value >= current for absolute tiers)."""
    if tier.kind == ThresholdKind.PERCENT:
        return tier.value >= metric.percent
    return tier.value >= metric.current


def evaluate_set(metric: Metric, tiers: ThresholdSet) -> dict[str, bool]:
    """Evaluate every tier independently; no ordering or exclusivity is assumed."""
    return {name: evaluate(metric, tier) for name, tier in tiers.tiers.items()}


def is_triggered(metric: Metric, tiers: ThresholdSet, name: str) -> bool:
    tier = tiers.get(name)
    if tier is None:
        return False
    return evaluate(metric, tier)
