"""
Plain-record snapshots of a combat.

snapshot_combat() flattens a CombatManager into dicts, lists, ints and
strings so an external save system can serialize it however it likes.
Cards are stored as {"id", "upgraded"} records and rebuilt on restore
from a card lookup, so a snapshot never holds live objects.
"""

from typing import Any, Dict, List, Mapping, TYPE_CHECKING

from ..content.cards import Card
from .entities import STATUS_FIELDS, Combatant

if TYPE_CHECKING:
    from ..combat_manager import CombatManager


def card_record(card: Card) -> Dict[str, Any]:
    return {"id": card.id, "upgraded": card.upgraded}


def _combatant_record(combatant: Combatant) -> Dict[str, Any]:
    return {
        "hp": combatant.current_hp,
        "max_hp": combatant.max_hp,
        "block": combatant.block,
        "statuses": combatant.get_statuses(),
    }


def _load_combatant(combatant: Combatant, record: Dict[str, Any]) -> None:
    combatant.max_hp = record["max_hp"]
    combatant.current_hp = max(0, min(record["hp"], combatant.max_hp))
    combatant.block = record["block"]
    statuses = record.get("statuses", {})
    for name in STATUS_FIELDS:
        setattr(combatant, name, statuses.get(name, 0))


def snapshot_combat(manager: 'CombatManager') -> Dict[str, Any]:
    """Flatten a combat into a plain record."""
    player = manager.player
    piles = manager.piles

    player_record = _combatant_record(player)
    player_record.update(
        energy=player.energy,
        max_energy=player.max_energy,
        potions=[p.id if p is not None else None for p in player.potions],
    )

    enemies = []
    for enemy in manager.enemies:
        record = _combatant_record(enemy)
        record.update(
            id=enemy.id,
            move_index=enemy.move_index,
            move_history=list(enemy.move_history),
        )
        enemies.append(record)

    return {
        "phase": manager.phase.value,
        "victory": manager.victory,
        "player": player_record,
        "enemies": enemies,
        "piles": {
            "draw": [card_record(c) for c in piles.draw_pile],
            "hand": [card_record(c) for c in piles.hand],
            "discard": [card_record(c) for c in piles.discard_pile],
            "exhaust": [card_record(c) for c in piles.exhaust_pile],
            "shuffle_count": piles.shuffle_count,
        },
        "turns": manager.turns.get_state(),
        "relic_counters": manager.relic_manager.get_counters(player),
        "relic_manager": manager.relic_manager.get_state(),
        "rng": list(manager.rng.get_state()),
        "stats": {
            "initial_hp": manager.initial_hp,
            "damage_dealt": manager.damage_dealt,
            "damage_taken": manager.damage_taken,
            "potions_used": manager.potions_used,
            "cards_played_sequence": list(manager.cards_played_sequence),
        },
    }


def _build_cards(records: List[Dict[str, Any]], card_lookup: Mapping[str, Card]) -> List[Card]:
    cards = []
    for record in records:
        template = card_lookup.get(record["id"])
        if template is None:
            raise ValueError(f"Unknown card id in snapshot: {record['id']}")
        card = template.copy()
        card.upgraded = record.get("upgraded", False)
        cards.append(card)
    return cards


def restore_combat(
    manager: 'CombatManager',
    record: Dict[str, Any],
    card_lookup: Mapping[str, Card],
) -> None:
    """
    Load a snapshot into a manager built over the same player and enemies.

    Potions are not rebuilt: the player's slots are left as they are.

    Raises:
        ValueError: unknown card id, or the enemy roster does not match
    """
    from ..combat_manager import CombatPhase

    piles = record["piles"]
    draw = _build_cards(piles["draw"], card_lookup)
    hand = _build_cards(piles["hand"], card_lookup)
    discard = _build_cards(piles["discard"], card_lookup)
    exhaust = _build_cards(piles["exhaust"], card_lookup)

    enemy_records = record["enemies"]
    if len(enemy_records) != len(manager._enemy_sources):
        raise ValueError(
            f"Snapshot has {len(enemy_records)} enemies, combat has {len(manager._enemy_sources)}"
        )

    enemies = []
    for source, enemy_record in zip(manager._enemy_sources, enemy_records):
        enemy = manager._instantiate_enemy(source, None)
        if enemy.id != enemy_record["id"]:
            raise ValueError(f"Snapshot enemy {enemy_record['id']} does not match {enemy.id}")
        _load_combatant(enemy, enemy_record)
        index = enemy_record.get("move_index", -1)
        enemy.current_intent = enemy.moves[index] if 0 <= index < len(enemy.moves) else None
        enemy.move_history = list(enemy_record.get("move_history", []))
        enemies.append(enemy)
    manager.enemies = enemies

    player_record = record["player"]
    _load_combatant(manager.player, player_record)
    manager.player.energy = player_record["energy"]
    manager.player.max_energy = player_record["max_energy"]

    manager.piles.load(draw, hand, discard, exhaust, piles.get("shuffle_count", 0))
    manager.turns.load_state(record["turns"])
    manager.relic_manager.load_counters(manager.player, record.get("relic_counters", []))
    manager.relic_manager.load_state(record.get("relic_manager", {}))
    manager.rng.set_state(*record["rng"])

    manager.phase = CombatPhase(record["phase"])
    manager.victory = record.get("victory")

    stats = record.get("stats", {})
    manager.initial_hp = stats.get("initial_hp", manager.player.current_hp)
    manager.damage_dealt = stats.get("damage_dealt", 0)
    manager.damage_taken = stats.get("damage_taken", 0)
    manager.potions_used = stats.get("potions_used", 0)
    manager.cards_played_sequence = list(stats.get("cards_played_sequence", []))
