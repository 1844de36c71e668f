"""
Session history tracking.
Captures plays, discards and round results for display and summaries.
"""

from dataclasses import dataclass, asdict
from typing import Optional


@dataclass
class SessionEvent:
    """Single event in a session."""
    round_number: int
    ante: int
    event_type: str  # "round_start", "play", "discard", "round_end", "upgrade_purchased", "reset"
    data: dict
    timestamp: int = 0  # event sequence number


class SessionHistory:
    """Append-only log of what happened during a session."""

    def __init__(self, preset_name: str = "standard"):
        self.events: list[SessionEvent] = []
        self.metadata = {"preset": preset_name}
        self._event_counter = 0

    def add_event(self, round_number: int, ante: int, event_type: str, data: dict):
        """Add an event to the history."""
        self.events.append(SessionEvent(
            round_number=round_number,
            ante=ante,
            event_type=event_type,
            data=data,
            timestamp=self._event_counter
        ))
        self._event_counter += 1

    def add_round_start(self, round_number: int, ante: int, blind_requirement: float, money: int):
        self.add_event(round_number, ante, "round_start", {
            "blind_requirement": blind_requirement,
            "money": money,
        })

    def add_play(self, round_number: int, ante: int, cards: list[str], hand_type: str,
                 pre_multiply: int, combined_mult: int, gained: int, round_score: int):
        """Log a scored play."""
        self.add_event(round_number, ante, "play", {
            "cards": cards,
            "hand_type": hand_type,
            "chips": pre_multiply,
            "mult": combined_mult,
            "gained": gained,
            "round_score": round_score,
        })

    def add_discard(self, round_number: int, ante: int, cards: list[str]):
        self.add_event(round_number, ante, "discard", {"cards": cards})

    def add_round_end(self, round_number: int, ante: int, success: bool, score: int,
                      required: float, payout: int, plays_left: int):
        """Log a won or lost round."""
        margin = score - required
        margin_pct = (margin / required * 100) if required > 0 else 0
        self.add_event(round_number, ante, "round_end", {
            "success": success,
            "score": score,
            "required": round(required, 2),
            "margin_pct": round(margin_pct, 1),
            "payout": payout,
            "plays_left": plays_left,
        })

    def add_upgrade_purchased(self, round_number: int, ante: int, upgrade_name: str,
                              cost: int, free: bool = False):
        self.add_event(round_number, ante, "upgrade_purchased", {
            "upgrade": upgrade_name,
            "cost": 0 if free else cost,
            "free": free,
        })

    def add_reset(self, round_number: int, ante: int):
        self.add_event(round_number, ante, "reset", {})

    def plays(self) -> list[dict]:
        """One row per play, for tabular display."""
        return [{"round": e.round_number, "ante": e.ante, **e.data}
                for e in self.events if e.event_type == "play"]

    def best_play(self) -> Optional[dict]:
        rows = self.plays()
        if not rows:
            return None
        return max(rows, key=lambda row: row["gained"])

    def to_dict(self) -> dict:
        """Convert to dict for JSON serialization."""
        return {
            "metadata": self.metadata,
            "events": [asdict(e) for e in self.events],
            "summary": self._generate_summary()
        }

    def _generate_summary(self) -> dict:
        """Generate a quick summary of the session."""
        round_ends = [e for e in self.events if e.event_type == "round_end"]
        best = self.best_play()
        return {
            "rounds_played": len(round_ends),
            "rounds_won": sum(1 for e in round_ends if e.data.get("success")),
            "rounds_lost": sum(1 for e in round_ends if not e.data.get("success")),
            "plays": sum(1 for e in self.events if e.event_type == "play"),
            "discards": sum(1 for e in self.events if e.event_type == "discard"),
            "upgrades_purchased": [e.data["upgrade"] for e in self.events
                                   if e.event_type == "upgrade_purchased"],
            "best_play": best["gained"] if best else 0,
        }

    def __len__(self) -> int:
        return len(self.events)
