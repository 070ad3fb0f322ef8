#!/usr/bin/env python3
"""
Descent Combat - Command Line Interface

Runs seeded combats with the starter catalog and prints what happened.

Usage:
    python cli.py simulate --seed ABC123 --encounter jaw_worm
    python cli.py simulate --seed 42 --encounter two_louse --verbose
    python cli.py catalog --kind cards
    python cli.py rng --seed ABC123 --count 20
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from packages.combat import CombatManager, CombatConfig, Random, seed_to_long
from packages.combat.content.cards import Card, CardType, TargetType
from packages.combat.content.starter import (
    CARDS,
    ENCOUNTERS,
    ENEMIES,
    POTIONS,
    RELICS,
    create_starter_player,
    get_encounter,
    get_potion,
)
from packages.combat.state.entities import Enemy

logger = logging.getLogger("descent.cli")

# Card type preference for the greedy policy
_TYPE_PRIORITY = {
    CardType.POWER: 0,
    CardType.ATTACK: 1,
    CardType.SKILL: 2,
}


# =============================================================================
# GREEDY POLICY
# =============================================================================

def choose_target(manager: CombatManager) -> Optional[Enemy]:
    """Lowest-HP living enemy."""
    alive = manager.get_alive_enemies()
    if not alive:
        return None
    return min(alive, key=lambda e: (e.current_hp + e.block, manager.enemies.index(e)))


def choose_card(manager: CombatManager) -> Optional[Card]:
    """Most expensive playable card, powers before attacks before skills."""
    playable = manager.get_playable_cards()
    if not playable:
        return None
    incoming = sum(e.get_intent_damage() * max(1, e.current_intent.hits)
                   for e in manager.get_alive_enemies() if e.current_intent is not None)
    # Defend first when the intents would hurt
    if incoming > manager.player.block:
        skills = [c for c in playable if c.card_type == CardType.SKILL]
        if skills:
            return max(skills, key=lambda c: c.current_cost)
    return min(playable, key=lambda c: (_TYPE_PRIORITY.get(c.card_type, 3), -c.current_cost))


def play_turn(manager: CombatManager) -> List[str]:
    """Play cards greedily until nothing is playable. Returns ids played."""
    played = []
    while manager.is_player_turn:
        card = choose_card(manager)
        if card is None:
            break
        target = choose_target(manager) if card.target == TargetType.SINGLE_ENEMY else None
        if not manager.play_card(card, target):
            break
        played.append(card.id)
    return played


def simulate(seed: int, encounter: str, max_turns: int, potions: List[str],
             config: Optional[CombatConfig] = None) -> CombatManager:
    """Run one combat with the greedy policy."""
    player = create_starter_player()
    for potion_id in potions:
        player.add_potion(get_potion(potion_id))

    manager = CombatManager(
        player,
        get_encounter(encounter),
        rng=Random(seed),
        config=config,
        card_pool=list(CARDS.values()),
    )
    manager.start_combat()

    while not manager.combat_ended and manager.turn <= max_turns:
        played = play_turn(manager)
        logger.info(f"Turn {manager.turn}: played {played or 'nothing'}")
        if manager.combat_ended:
            break
        manager.end_player_turn()

    return manager


# =============================================================================
# OUTPUT FORMATTING
# =============================================================================

def format_seed_info(seed_string: str, numeric_seed: int) -> str:
    return f"Seed: {seed_string} (numeric: {numeric_seed})"


def format_log(manager: CombatManager) -> List[str]:
    """One line per logged event, skipping card draws."""
    lines = []
    for entry in manager.combat_log.entries:
        if entry.event_type == "card_drawn":
            continue
        details = ", ".join(f"{k}={v!r}" for k, v in entry.data.items() if k != "results")
        lines.append(f"  [T{entry.turn}] {entry.event_type}: {details}")
    return lines


# =============================================================================
# COMMANDS
# =============================================================================

def cmd_simulate(args) -> int:
    """Run a greedy combat and print the log and result."""
    seed_string = args.seed.upper()
    seed = seed_to_long(seed_string)
    print(format_seed_info(seed_string, seed))
    print(f"Encounter: {args.encounter}")
    print()

    manager = simulate(seed, args.encounter, args.max_turns, args.potion or [])
    result = manager.get_result()

    if args.log:
        print("Combat log:")
        for line in format_log(manager):
            print(line)
        print()

    if args.json:
        print(json.dumps(result.__dict__, indent=2))
    else:
        outcome = "VICTORY" if result.victory else ("DEFEAT" if manager.combat_ended else "UNFINISHED")
        print(f"Result: {outcome}")
        print(f"  Turns: {result.turns}")
        print(f"  HP: {result.hp_remaining} (lost {result.hp_lost})")
        print(f"  Cards played: {result.cards_played}")
        print(f"  Damage dealt/taken: {result.damage_dealt}/{result.damage_taken}")
        print(f"  Potions used: {result.potions_used}")

    return 0 if manager.combat_ended else 1


def cmd_catalog(args) -> int:
    """List starter catalog content."""
    tables = {
        "cards": CARDS,
        "relics": RELICS,
        "potions": POTIONS,
        "enemies": ENEMIES,
    }
    kinds = [args.kind] if args.kind else list(tables)
    for kind in kinds:
        print(f"{kind.upper()}:")
        for item_id, item in tables[kind].items():
            description = getattr(item, "description", "") or f"{item.max_hp} HP"
            print(f"  {item_id:20s} {item.name:20s} {description}")
        print()
    print(f"ENCOUNTERS: {', '.join(ENCOUNTERS)}")
    return 0


def cmd_rng(args) -> int:
    """Display the random_int(99) sequence for a seed."""
    seed_string = args.seed.upper()
    seed = seed_to_long(seed_string)
    print(format_seed_info(seed_string, seed))

    rng = Random(seed)
    values = [rng.random_int(99) for _ in range(args.count)]
    if args.json:
        print(json.dumps({"seed": seed_string, "numeric_seed": seed, "random_int_99": values}, indent=2))
    else:
        for i, value in enumerate(values):
            print(f"  {i}: {value}")
        print(f"\nRNG counter after {args.count} calls: {rng.counter}")
    return 0


# =============================================================================
# MAIN
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Descent Combat - CLI for running seeded combats",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s simulate --seed ABC123 --encounter jaw_worm --log
  %(prog)s simulate --seed 42 --encounter cultist --potion fire_potion
  %(prog)s catalog --kind relics
  %(prog)s rng --seed ABC123 --count 20
        """
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Simulate command
    sim_parser = subparsers.add_parser("simulate", help="Run a greedy combat")
    sim_parser.add_argument("--seed", "-s", required=True, help="Combat seed (e.g., ABC123 or 42)")
    sim_parser.add_argument("--encounter", "-e", default="jaw_worm", choices=sorted(ENCOUNTERS),
                            help="Encounter name")
    sim_parser.add_argument("--max-turns", type=int, default=30, help="Stop after this many turns")
    sim_parser.add_argument("--potion", "-p", action="append", choices=sorted(POTIONS),
                            help="Start with this potion (repeatable)")
    sim_parser.add_argument("--log", "-l", action="store_true", help="Print the combat log")
    sim_parser.add_argument("--json", "-j", action="store_true", help="Output result as JSON")

    # Catalog command
    catalog_parser = subparsers.add_parser("catalog", help="List starter content")
    catalog_parser.add_argument("--kind", "-k", choices=["cards", "relics", "potions", "enemies"],
                                help="Only list one kind")

    # RNG command
    rng_parser = subparsers.add_parser("rng", help="Show RNG sequence")
    rng_parser.add_argument("--seed", "-s", required=True, help="Seed")
    rng_parser.add_argument("--count", "-n", type=int, default=20, help="Number of values to show")
    rng_parser.add_argument("--json", "-j", action="store_true", help="Output in JSON format")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 1

    # Dispatch to command handler
    commands = {
        "simulate": cmd_simulate,
        "catalog": cmd_catalog,
        "rng": cmd_rng,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
