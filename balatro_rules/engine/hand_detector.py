"""
Hand detection for the round engine.
Classifies a played selection of cards into a poker hand category.
"""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from .deck import Card


class HandType(Enum):
    """Poker hand categories, ordered by base strength."""
    HIGH_CARD = "high card"
    PAIR = "pair"
    TWO_PAIR = "two pair"
    THREE_OF_A_KIND = "three of a kind"
    STRAIGHT = "straight"
    FLUSH = "flush"
    FULL_HOUSE = "full house"
    FOUR_OF_A_KIND = "four of a kind"
    STRAIGHT_FLUSH = "straight flush"
    ROYAL_FLUSH = "royal flush"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# Base chips and mult for each hand type
HAND_BASE_VALUES = {
    HandType.HIGH_CARD: (5, 1),
    HandType.PAIR: (10, 2),
    HandType.TWO_PAIR: (20, 2),
    HandType.THREE_OF_A_KIND: (30, 3),
    HandType.STRAIGHT: (30, 4),
    HandType.FLUSH: (35, 4),
    HandType.FULL_HOUSE: (40, 4),
    HandType.FOUR_OF_A_KIND: (60, 7),
    HandType.STRAIGHT_FLUSH: (100, 8),
    HandType.ROYAL_FLUSH: (100, 8),
}

STRAIGHT_LENGTH = 5
FLUSH_LENGTH = 5
ACE_HIGH = 14
ACE_LOW = 1


@dataclass
class DetectedHand:
    """Result of hand detection."""
    hand_type: HandType
    cards: list[Card] = field(default_factory=list)

    @property
    def category(self) -> str:
        return self.hand_type.value

    @property
    def base_chips(self) -> int:
        return HAND_BASE_VALUES[self.hand_type][0]

    @property
    def base_mult(self) -> int:
        return HAND_BASE_VALUES[self.hand_type][1]


def is_straight(rank_values) -> bool:
    """
    True if five strictly consecutive values appear among rank_values.

    An Ace (14) may also play low as 1 for the A-2-3-4-5 run.
    """
    uniq = sorted(set(rank_values))
    candidates = [uniq]
    if ACE_HIGH in uniq and ACE_LOW not in uniq:
        candidates.append([ACE_LOW] + uniq)

    for values in candidates:
        for start in range(len(values) - STRAIGHT_LENGTH + 1):
            window = values[start:start + STRAIGHT_LENGTH]
            if all(window[k] == window[0] + k for k in range(1, STRAIGHT_LENGTH)):
                return True
    return False


class HandDetector:
    """Detects the poker hand formed by the played cards."""

    def detect(self, cards: list[Card]) -> DetectedHand:
        """Classify the played cards. Pure: the cards are not modified."""
        cards = list(cards)
        if not cards:
            return DetectedHand(HandType.HIGH_CARD, cards)

        rank_counts = Counter(c.rank for c in cards)
        counts = sorted(rank_counts.values(), reverse=True)

        by_suit: dict = {}
        for card in cards:
            by_suit.setdefault(card.suit, []).append(card.rank_value)

        is_flush = any(len(values) >= FLUSH_LENGTH for values in by_suit.values())
        straight = is_straight(c.rank_value for c in cards)

        is_straight_flush = False
        is_royal_flush = False
        for values in by_suit.values():
            if is_straight(values):
                is_straight_flush = True
                if ACE_HIGH in values and 10 in values:
                    is_royal_flush = True

        if is_royal_flush:
            return DetectedHand(HandType.ROYAL_FLUSH, cards)

        if is_straight_flush:
            return DetectedHand(HandType.STRAIGHT_FLUSH, cards)

        if counts[0] >= 4:
            return DetectedHand(HandType.FOUR_OF_A_KIND, cards)

        if len(counts) >= 2 and counts[0] == 3 and counts[1] == 2:
            return DetectedHand(HandType.FULL_HOUSE, cards)

        if is_flush:
            return DetectedHand(HandType.FLUSH, cards)

        if straight:
            return DetectedHand(HandType.STRAIGHT, cards)

        if counts[0] == 3:
            return DetectedHand(HandType.THREE_OF_A_KIND, cards)

        if len(counts) >= 2 and counts[0] == 2 and counts[1] == 2:
            return DetectedHand(HandType.TWO_PAIR, cards)

        if counts[0] == 2:
            return DetectedHand(HandType.PAIR, cards)

        return DetectedHand(HandType.HIGH_CARD, cards)


def detect_hand(cards: list[Card]) -> DetectedHand:
    """Convenience function to detect a hand."""
    return HandDetector().detect(cards)
