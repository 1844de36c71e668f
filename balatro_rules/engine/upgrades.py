"""
Upgrades: the purchasable modifiers a player owns for the whole session.
Holds the catalog, the owned-upgrade collection and the offer pool.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .deck import Card, normalize_rank

logger = logging.getLogger(__name__)


class UpgradeTarget(Enum):
    GLOBAL = "global"
    SUIT = "suit"
    RANK = "rank"
    HAND_TYPE = "hand_type"


@dataclass(frozen=True)
class Upgrade:
    """A permanent modifier adding chips and/or mult to plays."""
    id: str
    name: str
    description: str
    cost: int
    add_chips: int = 0
    add_mult: int = 0
    target_suit: Optional[str] = None
    target_rank: Optional[str] = None
    target_hand_type: Optional[str] = None

    def __post_init__(self):
        targets = [t for t in (self.target_suit, self.target_rank, self.target_hand_type) if t]
        if len(targets) > 1:
            raise ValueError(f"Upgrade {self.id} may target at most one of suit, rank or hand type")

    @property
    def target(self) -> UpgradeTarget:
        if self.target_suit:
            return UpgradeTarget.SUIT
        if self.target_rank:
            return UpgradeTarget.RANK
        if self.target_hand_type:
            return UpgradeTarget.HAND_TYPE
        return UpgradeTarget.GLOBAL

    def matches_card(self, card: Card) -> bool:
        """Whether a played card triggers a suit or rank upgrade."""
        if self.target == UpgradeTarget.SUIT:
            return card.suit.value.lower() == self.target_suit.strip().lower()
        if self.target == UpgradeTarget.RANK:
            return card.rank.lower() == normalize_rank(self.target_rank).lower()
        return False

    def matches_hand(self, category: str) -> bool:
        """Exact, case-insensitive match on the hand category."""
        if self.target != UpgradeTarget.HAND_TYPE:
            return False
        return category.strip().lower() == self.target_hand_type.strip().lower()

    @property
    def effect_summary(self) -> str:
        parts = []
        if self.add_chips:
            parts.append(f"+{self.add_chips} Chips")
        if self.add_mult:
            parts.append(f"+{self.add_mult} Mult")
        return " ".join(parts) or "No effect"

    def __str__(self):
        return f"{self.name} (${self.cost})"


UPGRADE_CATALOG = [
    # Global
    Upgrade("joker", "Joker", "+4 Mult", 4, add_mult=4),
    Upgrade("bull", "Bull", "+30 Chips", 5, add_chips=30),
    Upgrade("stuntman", "Stuntman", "+60 Chips", 8, add_chips=60),
    Upgrade("abstract", "Abstract Joker", "+15 Chips and +2 Mult", 6, add_chips=15, add_mult=2),

    # Suit
    Upgrade("greedy", "Greedy Joker", "Played Diamonds give +3 Mult", 5,
            add_mult=3, target_suit="Diamonds"),
    Upgrade("lusty", "Lusty Joker", "Played Hearts give +3 Mult", 5,
            add_mult=3, target_suit="Hearts"),
    Upgrade("wrathful", "Wrathful Joker", "Played Spades give +3 Mult", 5,
            add_mult=3, target_suit="Spades"),
    Upgrade("gluttonous", "Gluttonous Joker", "Played Clubs give +3 Mult", 5,
            add_mult=3, target_suit="Clubs"),
    Upgrade("arrowhead", "Arrowhead", "Played Spades give +30 Chips", 7,
            add_chips=30, target_suit="Spades"),

    # Rank
    Upgrade("scholar", "Scholar", "Played Aces give +20 Chips and +4 Mult", 4,
            add_chips=20, add_mult=4, target_rank="A"),
    Upgrade("royal_guard", "Royal Guard", "Played Kings give +15 Chips", 4,
            add_chips=15, target_rank="K"),
    Upgrade("eight_ball", "Eight Ball", "Played 8s give +8 Chips and +1 Mult", 3,
            add_chips=8, add_mult=1, target_rank="8"),

    # Hand type
    Upgrade("jolly", "Jolly Joker", "+8 Mult if played hand is a Pair", 3,
            add_mult=8, target_hand_type="pair"),
    Upgrade("sly", "Sly Joker", "+50 Chips if played hand is a Pair", 3,
            add_chips=50, target_hand_type="pair"),
    Upgrade("mad", "Mad Joker", "+10 Mult if played hand is Two Pair", 4,
            add_mult=10, target_hand_type="two pair"),
    Upgrade("zany", "Zany Joker", "+12 Mult if played hand is Three of a Kind", 4,
            add_mult=12, target_hand_type="three of a kind"),
    Upgrade("crazy", "Crazy Joker", "+12 Mult if played hand is a Straight", 4,
            add_mult=12, target_hand_type="straight"),
    Upgrade("droll", "Droll Joker", "+10 Mult if played hand is a Flush", 4,
            add_mult=10, target_hand_type="flush"),
    Upgrade("the_family", "The Family", "+20 Mult if played hand is Four of a Kind", 8,
            add_mult=20, target_hand_type="four of a kind"),
]

_CATALOG_LOOKUP = {u.id: u for u in UPGRADE_CATALOG}


def get_upgrade(upgrade_id: str) -> Optional[Upgrade]:
    """Look up a catalog upgrade by id."""
    return _CATALOG_LOOKUP.get(upgrade_id)


class OwnedUpgrades:
    """
    Insertion-ordered, append-only collection of owned upgrades.

    Listeners are called synchronously with each appended upgrade.
    """

    def __init__(self, upgrades: list[Upgrade] = None):
        self._items: list[Upgrade] = list(upgrades or [])
        self._listeners: list[Callable[[Upgrade], None]] = []

    def subscribe(self, listener: Callable[[Upgrade], None]) -> None:
        self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[Upgrade], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def append(self, upgrade: Upgrade) -> None:
        self._items.append(upgrade)
        for listener in list(self._listeners):
            listener(upgrade)

    def by_target(self, target: UpgradeTarget) -> list[Upgrade]:
        return [u for u in self._items if u.target == target]

    def names(self) -> list[str]:
        return [u.name for u in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self):
        return iter(list(self._items))

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self) -> str:
        return f"OwnedUpgrades({self.names()})"


class UpgradePool:
    """Samples upgrade offers from a static catalog."""

    def __init__(self, catalog: list[Upgrade] = None, rng=None):
        self.catalog = list(UPGRADE_CATALOG if catalog is None else catalog)
        self.rng = rng or random.Random()

    def sample(self, n: int) -> list[Upgrade]:
        """Draw up to n distinct upgrades, uniformly without replacement."""
        count = min(n, len(self.catalog))
        if count <= 0:
            return []
        choices = list(self.rng.sample(self.catalog, count))
        logger.debug("Offering upgrades: %s", [u.name for u in choices])
        return choices
