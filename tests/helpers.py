from balatro_rules.engine.deck import Card, Suit

SUIT_CODES = {"S": Suit.SPADES, "H": Suit.HEARTS, "C": Suit.CLUBS, "D": Suit.DIAMONDS}


class FixedRandom:
    """Deterministic stand-in for random.Random.

    Shuffles never swap, so a fresh deck keeps its canonical order, and
    samples take the first k entries.
    """

    def randrange(self, stop):
        return stop - 1

    def sample(self, population, k):
        return list(population)[:k]


def cards(labels: str) -> list[Card]:
    """Build cards from labels like "AS 10H 2c"."""
    return [Card(label[:-1].upper(), SUIT_CODES[label[-1].upper()]) for label in labels.split()]
