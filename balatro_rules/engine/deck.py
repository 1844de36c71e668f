"""
Deck management for the round engine.
Handles card creation, shuffling, drawing and the player's held hand.
"""

import random
from dataclasses import dataclass, field
from enum import Enum


class Suit(Enum):
    SPADES = "Spades"
    HEARTS = "Hearts"
    CLUBS = "Clubs"
    DIAMONDS = "Diamonds"


# Generation order: high to low within each suit
RANKS = ["A", "K", "Q", "J", "10", "9", "8", "7", "6", "5", "4", "3", "2"]
RANK_VALUES = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8, "9": 9, "10": 10,
    "J": 10, "Q": 10, "K": 10, "A": 11
}
RANK_NUMBERS = {
    "2": 2, "3": 3, "4": 4, "5": 5, "6": 6, "7": 7, "8": 8, "9": 9, "10": 10,
    "J": 11, "Q": 12, "K": 13, "A": 14
}
RANK_ALIASES = {
    "jack": "J", "queen": "Q", "king": "K", "ace": "A",
    "j": "J", "q": "Q", "k": "K", "a": "A",
}

SUIT_SYMBOLS = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.CLUBS: "♣",
    Suit.DIAMONDS: "♦",
}


def normalize_rank(rank: str) -> str:
    """Map a rank name ("Ace", "jack", "10") to its short form."""
    key = rank.strip()
    return RANK_ALIASES.get(key.lower(), key)


@dataclass(eq=False)
class Card:
    rank: str
    suit: Suit
    mult_bonus: int = 0

    def __post_init__(self):
        if self.rank not in RANK_NUMBERS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def chip_value(self) -> int:
        """Chips this card adds when played (Ace = 11)."""
        return RANK_VALUES[self.rank]

    @property
    def rank_value(self) -> int:
        """Numeric rank for straights and grouping (Ace = 14)."""
        return RANK_NUMBERS[self.rank]

    @property
    def label(self) -> str:
        return f"{self.rank}{SUIT_SYMBOLS[self.suit]}"

    def __str__(self) -> str:
        base = f"{self.rank}{self.suit.value[0]}"
        if self.mult_bonus:
            return f"{base} [{self.mult_bonus:+} Mult]"
        return base

    def __repr__(self) -> str:
        return self.__str__()


@dataclass
class Deck:
    cards: list[Card] = field(default_factory=list)
    rng: random.Random = field(default_factory=random.Random, repr=False)

    @classmethod
    def standard_52(cls, rng=None) -> "Deck":
        """Create a standard 52-card deck in canonical order."""
        deck = cls(rng=rng or random.Random())
        deck.generate()
        return deck

    def generate(self) -> None:
        """Replace the contents with every rank/suit combination."""
        self.cards = [Card(rank=rank, suit=suit) for suit in Suit for rank in RANKS]

    def shuffle(self) -> None:
        """Fisher-Yates shuffle, last position first."""
        for i in range(len(self.cards) - 1, 0, -1):
            j = self.rng.randrange(i + 1)
            self.cards[i], self.cards[j] = self.cards[j], self.cards[i]

    def draw(self, n: int = 1) -> list[Card]:
        """Remove and return up to n cards from the top of the deck."""
        if n <= 0:
            return []
        drawn = self.cards[:n]
        del self.cards[:n]
        return drawn

    def size(self) -> int:
        return len(self.cards)

    def cards_remaining(self) -> int:
        """Cards left to draw."""
        return len(self.cards)

    def count_by_suit(self, suit: Suit) -> int:
        return sum(1 for c in self.cards if c.suit == suit)


class Hand:
    """Represents cards currently held in hand."""

    def __init__(self, cards: list[Card] = None):
        self.cards: list[Card] = cards or []

    def add(self, cards: list[Card]) -> None:
        self.cards.extend(cards)

    def remove(self, cards: list[Card]) -> list[Card]:
        """Remove and return specified cards from hand."""
        removed = []
        for card in cards:
            if card in self.cards:
                self.cards.remove(card)
                removed.append(card)
        return removed

    def select(self, indices: list[int]) -> list[Card]:
        """Get cards at specified indices, in the order given."""
        return [self.cards[i] for i in indices if 0 <= i < len(self.cards)]

    def size(self) -> int:
        return len(self.cards)

    def __len__(self) -> int:
        return len(self.cards)

    def __iter__(self):
        return iter(self.cards)

    def __getitem__(self, index: int) -> Card:
        return self.cards[index]

    def __str__(self) -> str:
        return ", ".join(str(c) for c in self.cards)

    def __repr__(self) -> str:
        return f"Hand({self.__str__()})"
