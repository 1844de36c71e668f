import random

import pytest

from balatro_rules.engine.deck import Card, Deck, Hand, Suit, normalize_rank

from .helpers import FixedRandom


def test_standard_deck_has_52_distinct_cards():
    deck = Deck.standard_52(random.Random(3))
    assert deck.size() == 52
    assert len({(c.rank, c.suit) for c in deck.cards}) == 52
    for suit in Suit:
        assert deck.count_by_suit(suit) == 13
    assert all(c.mult_bonus == 0 for c in deck.cards)


def test_card_values():
    assert Card("A", Suit.SPADES).chip_value == 11
    assert Card("A", Suit.SPADES).rank_value == 14
    assert Card("K", Suit.HEARTS).chip_value == 10
    assert Card("K", Suit.HEARTS).rank_value == 13
    assert Card("J", Suit.CLUBS).rank_value == 11
    assert Card("10", Suit.DIAMONDS).chip_value == 10
    assert Card("7", Suit.DIAMONDS).chip_value == 7
    assert Card("2", Suit.DIAMONDS).rank_value == 2


def test_cards_compare_by_identity():
    a = Card("Q", Suit.HEARTS)
    b = Card("Q", Suit.HEARTS)
    assert a != b
    hand = Hand([a, b])
    hand.remove([b])
    assert hand.cards == [a]


def test_card_validation_rejects_invalid_rank():
    with pytest.raises(ValueError, match="Invalid rank"):
        Card("1", Suit.SPADES)
    with pytest.raises(ValueError, match="Invalid suit"):
        Card("A", "Spades")


def test_generation_order_is_canonical():
    deck = Deck.standard_52(FixedRandom())
    assert [str(c) for c in deck.cards[:3]] == ["AS", "KS", "QS"]
    assert str(deck.cards[13]) == "AH"
    assert str(deck.cards[-1]) == "2D"


def test_shuffle_draws_from_zero_to_i_last_to_first():
    calls = []

    class Recorder(FixedRandom):
        def randrange(self, stop):
            calls.append(stop)
            return 0

    deck = Deck.standard_52(Recorder())
    first = deck.cards[0]
    deck.shuffle()
    assert calls == list(range(52, 1, -1))
    # The first swap moves the top card to the bottom; later swaps never reach it
    assert deck.cards[-1] is first


def test_shuffle_is_a_permutation():
    deck = Deck.standard_52(random.Random(11))
    before = set(map(id, deck.cards))
    deck.shuffle()
    assert set(map(id, deck.cards)) == before


def test_draw_takes_from_the_top():
    deck = Deck.standard_52(FixedRandom())
    top = deck.cards[:5]
    drawn = deck.draw(5)
    assert drawn == top
    assert deck.cards_remaining() == 47


def test_draw_more_than_remaining_returns_what_is_left():
    deck = Deck.standard_52(FixedRandom())
    deck.draw(50)
    assert len(deck.draw(9)) == 2
    assert deck.draw(3) == []
    assert deck.draw(0) == []


def test_hand_select_keeps_requested_order():
    hand = Hand(Deck.standard_52(FixedRandom()).draw(4))
    assert [str(c) for c in hand.select([2, 0])] == ["QS", "AS"]


def test_normalize_rank_accepts_long_names():
    assert normalize_rank("Ace") == "A"
    assert normalize_rank("jack") == "J"
    assert normalize_rank("10") == "10"


def test_card_str_shows_signed_mult_bonus():
    assert str(Card("K", Suit.HEARTS, mult_bonus=3)) == "KH [+3 Mult]"
    assert str(Card("K", Suit.HEARTS, mult_bonus=-2)) == "KH [-2 Mult]"
