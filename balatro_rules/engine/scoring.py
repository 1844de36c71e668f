"""
Scoring engine for the round engine.
Calculates the score of a play from the hand, the cards and owned upgrades.
"""

from dataclasses import dataclass, field

from .deck import Card
from .hand_detector import DetectedHand, HandType
from .upgrades import Upgrade, UpgradeTarget


@dataclass
class ScoreBreakdown:
    """Detailed breakdown of how score was calculated."""
    hand_type: HandType
    base_chips: int
    base_mult: int
    card_chips: int
    card_mult: int
    global_chips: int = 0
    global_mult: int = 0
    suit_chips: int = 0
    suit_mult: int = 0
    rank_chips: int = 0
    rank_mult: int = 0
    hand_type_chips: int = 0
    hand_type_mult: int = 0
    details: list[str] = field(default_factory=list)

    @property
    def category(self) -> str:
        return self.hand_type.value

    @property
    def pre_multiply(self) -> int:
        return (self.base_chips + self.card_chips + self.global_chips
                + self.suit_chips + self.rank_chips + self.hand_type_chips)

    @property
    def combined_mult(self) -> int:
        return (self.base_mult + self.card_mult + self.global_mult
                + self.suit_mult + self.rank_mult + self.hand_type_mult)

    @property
    def gained(self) -> int:
        return self.pre_multiply * self.combined_mult


@dataclass
class ScoringContext:
    """Running chip and mult totals per contribution source."""
    hand: DetectedHand
    chips: dict = field(default_factory=dict)
    mult: dict = field(default_factory=dict)
    details: list[str] = field(default_factory=list)

    def add_chips(self, bucket: str, amount: int, source: str = ""):
        self.chips[bucket] = self.chips.get(bucket, 0) + amount
        if source and amount:
            self.details.append(f"{amount:+} Chips ({source})")

    def add_mult(self, bucket: str, amount: int, source: str = ""):
        self.mult[bucket] = self.mult.get(bucket, 0) + amount
        if source and amount:
            self.details.append(f"{amount:+} Mult ({source})")

    def add_upgrade(self, bucket: str, upgrade: Upgrade, source: str):
        self.add_chips(bucket, upgrade.add_chips, source)
        self.add_mult(bucket, upgrade.add_mult, source)


class ScoringEngine:
    """
    Calculates scores for a play.

    Score = (Base Chips + Card Chips + Upgrade Chips) × (Base Mult + Card Mult + Upgrade Mult)

    Upgrade contributions are recomputed from the given upgrades on every
    call; nothing is cached between plays.
    """

    def score_hand(self, hand: DetectedHand, upgrades=None) -> ScoreBreakdown:
        """
        Calculate the score for a played hand.

        Args:
            hand: The detected poker hand (its cards are the played selection)
            upgrades: Owned upgrades, in ownership order
        """
        ctx = ScoringContext(hand=hand)
        upgrades = list(upgrades or [])
        category = hand.category

        # 1. Base chips and mult from hand type
        ctx.add_chips("base", hand.base_chips, f"{category} base")
        ctx.add_mult("base", hand.base_mult, f"{category} base")

        # 2. Every played card adds its chips and mult bonus
        for card in hand.cards:
            self._score_card(card, ctx)

        # 3. Upgrades, by target category
        for upgrade in upgrades:
            target = upgrade.target
            if target == UpgradeTarget.GLOBAL:
                ctx.add_upgrade("global", upgrade, upgrade.name)
            elif target in (UpgradeTarget.SUIT, UpgradeTarget.RANK):
                bucket = "suit" if target == UpgradeTarget.SUIT else "rank"
                for card in hand.cards:
                    if upgrade.matches_card(card):
                        ctx.add_upgrade(bucket, upgrade, f"{upgrade.name}, {card}")
            elif upgrade.matches_hand(category):
                ctx.add_upgrade("hand_type", upgrade, upgrade.name)

        return ScoreBreakdown(
            hand_type=hand.hand_type,
            base_chips=hand.base_chips,
            base_mult=hand.base_mult,
            card_chips=ctx.chips.get("card", 0),
            card_mult=ctx.mult.get("card", 0),
            global_chips=ctx.chips.get("global", 0),
            global_mult=ctx.mult.get("global", 0),
            suit_chips=ctx.chips.get("suit", 0),
            suit_mult=ctx.mult.get("suit", 0),
            rank_chips=ctx.chips.get("rank", 0),
            rank_mult=ctx.mult.get("rank", 0),
            hand_type_chips=ctx.chips.get("hand_type", 0),
            hand_type_mult=ctx.mult.get("hand_type", 0),
            details=ctx.details,
        )

    def _score_card(self, card: Card, ctx: ScoringContext):
        ctx.add_chips("card", card.chip_value, f"{card}")
        ctx.add_mult("card", card.mult_bonus, f"{card}")


def calculate_score(hand: DetectedHand, upgrades=None) -> int:
    """Convenience function to calculate score."""
    return ScoringEngine().score_hand(hand, upgrades).gained


def score_breakdown(hand: DetectedHand, upgrades=None) -> ScoreBreakdown:
    """Get detailed score breakdown."""
    return ScoringEngine().score_hand(hand, upgrades)
