#!/usr/bin/env python3
"""
Console front end for a session.
Plays rounds from the terminal: select cards by index, play or discard.
"""

import logging
import random
import re

from .engine.errors import GameRuleError
from .engine.game import Game, PlayResult
from .presets import create_game, list_presets


def parse_indexes(text: str) -> list[int]:
    """
    Parse card indexes from input like "0,1 4".

    Tokens that are not integers are skipped and repeated indexes are kept
    once, in the order they first appear.
    """
    if not text or not text.strip():
        return []

    indexes = []
    for token in re.split(r"[,\s]+", text.strip()):
        try:
            index = int(token)
        except ValueError:
            continue
        if index not in indexes:
            indexes.append(index)
    return indexes


def print_status(game: Game):
    """Show round stats and the current hand."""
    print("=" * 60)
    print(f"Round {game.round_number}  |  Ante {game.ante}  |  ${game.money}")
    print(f"Score {game.round_score:,} / {game.blind_requirement:,.0f}")
    print(f"Plays {game.plays_left}  |  Discards {game.discards_left}")
    if len(game.owned_upgrades):
        print(f"Upgrades: {', '.join(game.owned_upgrades.names())}")
    print("-" * 60)
    print("  ".join(f"[{i}] {card.label}" for i, card in enumerate(game.hand)))


def print_play(result: PlayResult):
    b = result.breakdown
    print(f"\n{result.hand_type.display_name}: {b.pre_multiply} Chips x {b.combined_mult} Mult"
          f" = {result.gained:,}")
    for line in b.details:
        print(f"  {line}")


def offer_upgrades(game: Game, choices: list):
    """Let the player buy at most one of the offered upgrades."""
    if not choices:
        return
    print(f"\nRound won! Upgrades on offer (you have ${game.money}):")
    for i, upgrade in enumerate(choices, start=1):
        print(f"  {i}. {upgrade.name} (${upgrade.cost}) - {upgrade.description}")
    while True:
        answer = input("Buy which? (number, or Enter to skip) ").strip()
        if not answer:
            return
        if answer.isdigit() and 1 <= int(answer) <= len(choices):
            upgrade = choices[int(answer) - 1]
            if game.purchase_upgrade(upgrade):
                print(f"Bought {upgrade.name}.")
                return
            print("Not enough money to buy this upgrade.")
        else:
            print("Invalid choice.")


def run_session(game: Game):
    """Read commands until the player quits."""
    while True:
        print_status(game)
        command = input("(p)lay / (d)iscard <indexes>, (q)uit: ").strip()
        if not command:
            continue
        action, _, rest = command.partition(" ")
        action = action.lower()

        if action in ("q", "quit"):
            return

        indexes = parse_indexes(rest)
        try:
            if action in ("p", "play"):
                result = game.play(indexes)
                print_play(result)
                if result.won:
                    offer_upgrades(game, result.choices)
                    game.start_new_round()
                elif result.lost:
                    print(f"\nOut of plays. Round lost with {game.round_score:,}"
                          f" / {game.blind_requirement:,.0f}. Back to round one.")
                    game.reset_to_round_one()
            elif action in ("d", "discard"):
                discarded = game.discard(indexes)
                print(f"Discarded {', '.join(c.label for c in discarded)}")
            else:
                print(f"Unknown command: {action}")
        except GameRuleError as e:
            print(f"Invalid: {e}")


def main(argv=None):
    import argparse

    parser = argparse.ArgumentParser(description="Play the poker-scoring round game in a terminal")
    parser.add_argument("--preset", default="standard", choices=list_presets(),
                        help="Starting preset")
    parser.add_argument("--seed", type=int, help="Seed for shuffling and upgrade offers")
    parser.add_argument("--log-level", default="WARNING", help="Logging level")

    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    rng = random.Random(args.seed)
    game = create_game(args.preset, rng=rng)
    try:
        run_session(game)
    except (EOFError, KeyboardInterrupt):
        print()
    summary = game.history.to_dict()["summary"]
    print(f"Rounds won: {summary['rounds_won']}, best play: {summary['best_play']:,}")


if __name__ == "__main__":
    main()
