"""
Round engine components.
"""

from .deck import Card, Deck, Hand, Suit, RANKS, RANK_VALUES, RANK_NUMBERS
from .hand_detector import HandType, DetectedHand, HandDetector, HAND_BASE_VALUES, detect_hand, is_straight
from .scoring import ScoringEngine, ScoringContext, ScoreBreakdown, calculate_score, score_breakdown
from .upgrades import Upgrade, UpgradeTarget, OwnedUpgrades, UpgradePool, UPGRADE_CATALOG, get_upgrade
from .errors import GameRuleError, InvalidSelection, ResourceExhausted, NoPlaysLeft, NoDiscardsLeft, RoundOver
from .game import Game, GameConfig, PlayResult, RoundPhase, check_selection
from .history import SessionHistory, SessionEvent
