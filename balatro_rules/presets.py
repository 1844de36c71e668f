"""
Preset configurations for sessions.
Allows easy setup of different starting conditions.
"""

from dataclasses import dataclass, field
from typing import Optional

from .engine.game import Game, GameConfig
from .engine.upgrades import get_upgrade


@dataclass
class Preset:
    """A complete preset configuration for a session."""
    name: str
    description: str
    starting_upgrades: list[str] = field(default_factory=list)  # Upgrade ids, granted free
    config_overrides: dict = field(default_factory=dict)


# Built-in presets
PRESETS = {
    "standard": Preset(
        name="Standard",
        description="Default session with no modifiers",
    ),

    "high_roller": Preset(
        name="High Roller",
        description="Start with $10 to spend on upgrades",
        config_overrides={"starting_money": 10},
    ),

    "flush_build": Preset(
        name="Flush Build",
        description="Start with suit upgrades and a flush bonus",
        starting_upgrades=["droll", "greedy", "lusty"],
    ),

    "pair_spam": Preset(
        name="Pair Spam",
        description="Start with pair upgrades",
        starting_upgrades=["jolly", "sly"],
    ),

    "marathon": Preset(
        name="Marathon",
        description="Extra play and discard per round, steeper blinds",
        config_overrides={"plays_per_round": 5, "discards_per_round": 4, "blind_growth": 1.3},
    ),
}


def get_preset(name: str) -> Optional[Preset]:
    """Get a preset by name."""
    return PRESETS.get(name.lower().replace(" ", "_"))


def list_presets() -> list[str]:
    """List all available preset names."""
    return list(PRESETS.keys())


def build_config(preset: Preset) -> GameConfig:
    """Apply a preset's overrides to the default config."""
    config = GameConfig()
    for key, value in preset.config_overrides.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config


def create_game(preset="standard", rng=None, on_upgrade_choices=None) -> Game:
    """
    Start a session from a preset name or Preset object.

    Starting upgrades are granted free.
    """
    if isinstance(preset, str):
        p = get_preset(preset)
        if p is None:
            raise ValueError(f"Unknown preset: {preset}. Available: {list_presets()}")
        preset_name = preset
    else:
        p = preset
        preset_name = p.name

    game = Game(
        config=build_config(p),
        rng=rng,
        on_upgrade_choices=on_upgrade_choices,
        preset_name=preset_name,
    )
    for upgrade_id in p.starting_upgrades:
        upgrade = get_upgrade(upgrade_id)
        if upgrade is None:
            raise ValueError(f"Unknown upgrade in preset {preset_name}: {upgrade_id}")
        game.purchase_upgrade(upgrade, free=True)
    return game
