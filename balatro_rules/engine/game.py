"""
Round state machine for a session.
Drives plays, discards, blind thresholds, payouts and upgrade offers.
"""

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from .deck import Deck, Hand, Card
from .errors import InvalidSelection, NoDiscardsLeft, NoPlaysLeft, RoundOver
from .hand_detector import HandDetector, HandType
from .history import SessionHistory
from .scoring import ScoringEngine, ScoreBreakdown
from .upgrades import OwnedUpgrades, Upgrade, UpgradePool

logger = logging.getLogger(__name__)


class RoundPhase(Enum):
    IN_ROUND = auto()
    ROUND_WON = auto()
    ROUND_LOST = auto()


@dataclass
class GameConfig:
    """Configuration for a session."""
    hand_size: int = 9
    max_selection: int = 5
    plays_per_round: int = 4
    discards_per_round: int = 3
    base_blind: float = 300.0
    blind_growth: float = 1.15
    ante_interval: int = 4
    payout_base: int = 3
    payout_per_play: int = 3
    offer_size: int = 3
    starting_money: int = 0


@dataclass
class PlayResult:
    """Result of playing a selection."""
    won: bool
    hand_type: HandType
    base_chips: int
    base_mult: int
    gained: int
    breakdown: ScoreBreakdown
    lost: bool = False
    payout: int = 0
    choices: list[Upgrade] = field(default_factory=list)

    @property
    def category(self) -> str:
        return self.hand_type.value


def check_selection(indices, hand_size: int, max_cards: int = 5) -> Optional[str]:
    """Return why a selection of hand indexes is invalid, or None if it is valid."""
    if not indices:
        return "No indexes provided."
    if len(indices) > max_cards:
        return f"Cannot select more than {max_cards} cards."
    if len(set(indices)) != len(indices):
        return "Duplicate indexes are not allowed."
    for index in indices:
        if index < 0 or index >= hand_size:
            return f"Index {index} is out of range (0..{hand_size - 1})."
    return None


class Game:
    """
    Tracks the full state of a session and enforces the round rules.

    A rejected operation raises a GameRuleError and leaves the state unchanged.
    """

    def __init__(self, config: GameConfig = None, rng=None,
                 catalog: list[Upgrade] = None,
                 on_upgrade_choices: Callable[[list[Upgrade]], None] = None,
                 preset_name: str = "standard"):
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.on_upgrade_choices = on_upgrade_choices

        self.history = SessionHistory(preset_name=preset_name)
        self.hand_detector = HandDetector()
        self.scoring_engine = ScoringEngine()
        self.pool = UpgradePool(catalog, rng=self.rng)
        self.owned_upgrades = OwnedUpgrades()

        # Session state
        self.round_number = 0
        self.ante = 1
        self.blind_requirement = self.config.base_blind
        self.lifetime_total_chips = 0
        self.lifetime_total_mult = 1
        self.money = self.config.starting_money

        # Round state
        self.phase = RoundPhase.IN_ROUND
        self.plays_left = self.config.plays_per_round
        self.discards_left = self.config.discards_per_round
        self.round_chips = 0
        self.round_mult = 1
        self.deck = Deck(rng=self.rng)
        self.hand = Hand()
        self.last_played: list[Card] = []
        self.last_choices: list[Upgrade] = []

        self.start_new_round()

    @property
    def round_score(self) -> int:
        """Accumulated score of the current round."""
        return self.round_chips

    def start_new_round(self) -> None:
        """Advance to the next round with a fresh deck and a full hand."""
        self.round_number += 1
        if self.round_number % self.config.ante_interval == 0:
            self.ante += 1
            logger.info("Ante raised to %d at round %d", self.ante, self.round_number)

        self.plays_left = self.config.plays_per_round
        self.discards_left = self.config.discards_per_round
        self.round_chips = 0
        self.round_mult = 1
        self.last_played = []
        self.last_choices = []
        self.phase = RoundPhase.IN_ROUND

        self.deck = Deck.standard_52(self.rng)
        self.deck.shuffle()
        self.hand = Hand(self.deck.draw(self.config.hand_size))

        self.history.add_round_start(self.round_number, self.ante,
                                     self.blind_requirement, self.money)
        logger.info("Round %d started (ante %d, blind %.0f)",
                    self.round_number, self.ante, self.blind_requirement)

    def reset_to_round_one(self) -> None:
        """Reset the session's progress and start again from round one."""
        self.history.add_reset(self.round_number, self.ante)
        logger.info("Resetting session at round %d", self.round_number)

        self.round_number = 0
        self.ante = 1
        self.blind_requirement = self.config.base_blind
        self.lifetime_total_chips = 0
        self.lifetime_total_mult = 1
        self.money = self.config.starting_money
        self.round_chips = 0
        self.round_mult = 1

        self.start_new_round()

    def refill_hand(self) -> None:
        """Draw cards up to hand size."""
        missing = self.config.hand_size - self.hand.size()
        if missing > 0:
            self.hand.add(self.deck.draw(missing))

    def validate_selection(self, indices) -> tuple[bool, Optional[str]]:
        """Check a selection against the current hand. Never mutates state."""
        error = check_selection(list(indices or []), self.hand.size(), self.config.max_selection)
        return error is None, error

    def select_cards(self, indices) -> list[Card]:
        """Get the cards at the given indexes, raising InvalidSelection if invalid."""
        indices = list(indices or [])
        valid, error = self.validate_selection(indices)
        if not valid:
            raise InvalidSelection(error)
        return self.hand.select(indices)

    def _ensure_in_round(self) -> None:
        if self.phase != RoundPhase.IN_ROUND:
            raise RoundOver(self.phase.name)

    def play(self, indices) -> PlayResult:
        """
        Play the selected cards from hand.

        Scores the selection, then either ends the round (won or out of
        plays) or refills the hand.
        """
        if self.plays_left <= 0:
            raise NoPlaysLeft()
        self._ensure_in_round()
        selected = self.select_cards(indices)

        self.plays_left -= 1
        self.hand.remove(selected)
        self.last_played = selected

        detected = self.hand_detector.detect(selected)
        breakdown = self.scoring_engine.score_hand(detected, self.owned_upgrades)
        gained = breakdown.gained
        combined_mult = breakdown.combined_mult

        self.lifetime_total_chips += breakdown.pre_multiply
        self.lifetime_total_mult *= max(1, combined_mult)
        self.round_chips += gained
        self.round_mult *= max(1, combined_mult)

        self.history.add_play(self.round_number, self.ante, [str(c) for c in selected],
                              detected.category, breakdown.pre_multiply, combined_mult,
                              gained, self.round_chips)
        logger.debug("Played %s as %s: %d x %d = %d (round %d/%.0f)",
                     selected, detected.category, breakdown.pre_multiply, combined_mult,
                     gained, self.round_chips, self.blind_requirement)

        result = PlayResult(
            won=False,
            hand_type=detected.hand_type,
            base_chips=detected.base_chips,
            base_mult=detected.base_mult,
            gained=gained,
            breakdown=breakdown,
        )

        if self.round_chips >= self.blind_requirement:
            required = self.blind_requirement
            self.blind_requirement *= self.config.blind_growth
            self.phase = RoundPhase.ROUND_WON
            result.won = True
            result.payout = self._end_round(True, required)
            result.choices = self._offer_upgrades()
        elif self.plays_left == 0:
            self.phase = RoundPhase.ROUND_LOST
            result.lost = True
            result.payout = self._end_round(False, self.blind_requirement)
        else:
            self.refill_hand()

        return result

    def discard(self, indices) -> list[Card]:
        """Discard selected cards and draw new ones."""
        if self.discards_left <= 0:
            raise NoDiscardsLeft()
        self._ensure_in_round()
        selected = self.select_cards(indices)

        self.discards_left -= 1
        discarded = self.hand.remove(selected)
        self.refill_hand()

        self.history.add_discard(self.round_number, self.ante, [str(c) for c in discarded])
        logger.debug("Discarded %s, %d discards left", discarded, self.discards_left)
        return discarded

    def _end_round(self, success: bool, required: float) -> int:
        """Apply the end-of-round payout, return money earned."""
        payout = self.config.payout_base + self.config.payout_per_play * self.plays_left
        self.money += payout
        self.history.add_round_end(self.round_number, self.ante, success, self.round_chips,
                                   required, payout, self.plays_left)
        logger.info("Round %d %s with %d/%.0f, payout $%d",
                    self.round_number, "won" if success else "lost",
                    self.round_chips, required, payout)
        return payout

    def _offer_upgrades(self) -> list[Upgrade]:
        choices = self.get_choices(self.config.offer_size)
        self.last_choices = choices
        if self.on_upgrade_choices is not None:
            self.on_upgrade_choices(choices)
        return choices

    def get_choices(self, n: int = 3) -> list[Upgrade]:
        """Sample up to n distinct upgrades from the catalog."""
        return self.pool.sample(n)

    def purchase_upgrade(self, upgrade: Optional[Upgrade], free: bool = False) -> bool:
        """
        Buy an upgrade and add it to the owned collection.

        Returns False without changing anything when there is no upgrade or
        the money does not cover a non-free purchase.
        """
        if upgrade is None:
            return False
        if not free and self.money < upgrade.cost:
            logger.debug("Cannot afford %s ($%d < $%d)", upgrade.name, self.money, upgrade.cost)
            return False

        if not free:
            self.money -= upgrade.cost
        self.owned_upgrades.append(upgrade)
        self.history.add_upgrade_purchased(self.round_number, self.ante, upgrade.name,
                                           upgrade.cost, free=free)
        logger.info("Acquired upgrade %s%s", upgrade.name, " (free)" if free else "")
        return True
