"""dBm to signal quality tier classification."""

from __future__ import annotations

import enum


class SignalTier(enum.Enum):
    """Signal quality tiers, each owning its inclusive lower bound in dBm."""

    MAXIMUM = ("Maximum", -30.0)
    EXCELLENT = ("Excellent", -50.0)
    GOOD = ("Good", -60.0)
    RELIABLE = ("Reliable", -67.0)
    WEAK = ("Weak", -70.0)
    UNRELIABLE = ("Unreliable", -80.0)
    BAD = ("Bad", float("-inf"))

    def __init__(self, label: str, threshold: float) -> None:
        self.label = label
        self.threshold = threshold

    def __lt__(self, other: "SignalTier") -> bool:
        if not isinstance(other, SignalTier):
            return NotImplemented
        return self.threshold < other.threshold

    def __le__(self, other: "SignalTier") -> bool:
        if not isinstance(other, SignalTier):
            return NotImplemented
        return self.threshold <= other.threshold

    def __gt__(self, other: "SignalTier") -> bool:
        if not isinstance(other, SignalTier):
            return NotImplemented
        return self.threshold > other.threshold

    def __ge__(self, other: "SignalTier") -> bool:
        if not isinstance(other, SignalTier):
            return NotImplemented
        return self.threshold >= other.threshold

    def __str__(self) -> str:
        return self.label


# Strongest first; classify() relies on this order.
_BY_STRENGTH = sorted(SignalTier, key=lambda tier: tier.threshold, reverse=True)


def classify(signal: float) -> SignalTier:
    """Map a signal strength in dBm to its quality tier.

    Total over floats: anything that clears no threshold (NaN included) is BAD.
    """
    for tier in _BY_STRENGTH:
        if signal >= tier.threshold:
            return tier
    return SignalTier.BAD


TIER_STYLES: dict[SignalTier, str] = {
    SignalTier.MAXIMUM: "bold green blink",
    SignalTier.EXCELLENT: "bold green blink",
    SignalTier.GOOD: "green blink",
    SignalTier.RELIABLE: "bold yellow blink",
    SignalTier.WEAK: "yellow",
    SignalTier.UNRELIABLE: "red",
    SignalTier.BAD: "bold red",
}
