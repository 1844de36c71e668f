from balatro_rules.engine.hand_detector import DetectedHand, HandType, detect_hand
from balatro_rules.engine.scoring import ScoringEngine, calculate_score, score_breakdown
from balatro_rules.engine.upgrades import Upgrade, get_upgrade

from .helpers import cards


def test_score_is_pre_multiply_times_combined_mult():
    # Chip values [10, 10, 5, 5, 5] scored as a pair
    hand = DetectedHand(HandType.PAIR, cards("KS KH 5C 5D 5S"))
    breakdown = score_breakdown(hand)
    assert breakdown.base_chips == 10
    assert breakdown.base_mult == 2
    assert breakdown.card_chips == 35
    assert breakdown.card_mult == 0
    assert breakdown.pre_multiply == 45
    assert breakdown.combined_mult == 2
    assert breakdown.gained == 90


def test_detected_pair_with_kickers():
    # (10 + 10 + 10 + 2 + 3 + 4) * 2
    assert calculate_score(detect_hand(cards("KS KH 2C 3D 4S"))) == 78


def test_card_mult_bonus_adds_to_mult():
    played = cards("AS 3D")
    played[0].mult_bonus = 2
    breakdown = score_breakdown(detect_hand(played))
    assert breakdown.card_mult == 2
    assert breakdown.combined_mult == 3
    assert breakdown.gained == (5 + 11 + 3) * 3


def test_global_upgrade_applies_once():
    joker = get_upgrade("joker")
    bull = get_upgrade("bull")
    breakdown = score_breakdown(detect_hand(cards("2S 2H 7C")), [joker, bull])
    assert breakdown.global_mult == 4
    assert breakdown.global_chips == 30
    assert breakdown.gained == (10 + 11 + 30) * (2 + 4)


def test_suit_upgrade_applies_per_matching_card_and_upgrade():
    greedy = get_upgrade("greedy")
    played = cards("2D 5D 9S KC QH")
    assert score_breakdown(detect_hand(played), [greedy]).suit_mult == 6
    assert score_breakdown(detect_hand(played), [greedy, greedy]).suit_mult == 12


def test_suit_match_is_case_insensitive():
    lower = Upgrade("lower", "Lower", "", 1, add_chips=5, target_suit="hearts")
    breakdown = score_breakdown(detect_hand(cards("2H 3H 9S")), [lower])
    assert breakdown.suit_chips == 10


def test_rank_upgrade_applies_per_matching_card():
    scholar = get_upgrade("scholar")
    breakdown = score_breakdown(detect_hand(cards("AS AD 4C")), [scholar])
    assert breakdown.rank_chips == 40
    assert breakdown.rank_mult == 8
    # Pair: (10 + 11 + 11 + 4 + 40) * (2 + 8)
    assert breakdown.gained == 760


def test_rank_target_accepts_long_name():
    aces = Upgrade("aces", "Aces", "", 1, add_mult=1, target_rank="ace")
    assert score_breakdown(detect_hand(cards("AS KD")), [aces]).rank_mult == 1


def test_hand_type_upgrade_requires_exact_category():
    droll = get_upgrade("droll")
    flush = score_breakdown(detect_hand(cards("AH JH 9H 6H 2H")), [droll])
    assert flush.hand_type_mult == 10

    straight_flush = score_breakdown(detect_hand(cards("5H 6H 7H 8H 9H")), [droll])
    assert straight_flush.hand_type_mult == 0


def test_hand_type_match_is_case_insensitive():
    pairs = Upgrade("pairs", "Pairs", "", 1, add_chips=7, target_hand_type="PAIR")
    assert score_breakdown(detect_hand(cards("9S 9C")), [pairs]).hand_type_chips == 7


def test_all_categories_combine():
    upgrades = [get_upgrade("joker"), get_upgrade("wrathful"), get_upgrade("royal_guard"),
                get_upgrade("jolly")]
    breakdown = ScoringEngine().score_hand(detect_hand(cards("KS KH 3S")), upgrades)
    assert breakdown.pre_multiply == 10 + 23 + 30
    assert breakdown.combined_mult == 2 + 4 + 6 + 8
    assert breakdown.gained == breakdown.pre_multiply * breakdown.combined_mult


def test_details_list_each_contribution():
    breakdown = score_breakdown(detect_hand(cards("2D 5D")), [get_upgrade("greedy")])
    assert "+5 Chips (high card base)" in breakdown.details
    assert sum(1 for line in breakdown.details if "Greedy Joker" in line) == 2


def test_negative_contribution_is_signed_once():
    played = cards("AS")
    played[0].mult_bonus = -5
    breakdown = score_breakdown(detect_hand(played))
    assert "-5 Mult (AS [-5 Mult])" in breakdown.details
    assert not any("+-" in line for line in breakdown.details)
