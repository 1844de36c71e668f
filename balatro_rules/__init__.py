"""
Poker-scoring round engine
"""

from .engine.deck import Card, Deck, Hand, Suit
from .engine.hand_detector import HandType, DetectedHand, HandDetector, detect_hand
from .engine.scoring import ScoringEngine, ScoreBreakdown, calculate_score, score_breakdown
from .engine.upgrades import Upgrade, UpgradeTarget, UPGRADE_CATALOG
from .engine.game import Game, GameConfig, PlayResult, RoundPhase

__version__ = "0.1.0"
