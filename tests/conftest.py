"""
Shared pytest fixtures for the combat engine test suite.

This module provides reusable fixtures for:
- RNG with known seeds
- Players, enemies and small decks
- A ready-to-run CombatManager factory
"""

import os
import sys

import pytest

# Ensure project root is in path
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from packages.combat import CombatManager, CombatConfig, RelicManager
from packages.combat.content.cards import Card, CardEffect, CardType, TargetType
from packages.combat.content.enemies import EnemyAction, EnemyMove, EnemyTemplate, Intent
from packages.combat.content.starter import CARDS, create_starter_player, get_card
from packages.combat.state.entities import Enemy, Player
from packages.combat.state.rng import Random


# =============================================================================
# RNG Fixtures
# =============================================================================


@pytest.fixture
def rng_seed_42():
    """RNG initialized with seed 42 for deterministic tests."""
    return Random(42)


@pytest.fixture
def rng_seed_12345():
    return Random(12345)


# =============================================================================
# Enemy Fixtures
# =============================================================================


def make_template(enemy_id="dummy", hp=40, damage=6, hits=1, extra_actions=None, moves=None):
    """Single-move attacking enemy template."""
    if moves is None:
        actions = [EnemyAction("DAMAGE", damage, times=hits)] + list(extra_actions or [])
        moves = [EnemyMove("attack", "Attack", Intent.ATTACK, actions)]
    return EnemyTemplate(id=enemy_id, name=enemy_id.title(), max_hp=hp, moves=moves)


def make_enemy(enemy_id="dummy", hp=40, damage=6, rng=None):
    """Runtime enemy with its intent already rolled."""
    template = make_template(enemy_id, hp, damage)
    enemy = Enemy(id=template.id, name=template.name, max_hp=hp,
                  moves=[m.copy() for m in template.moves])
    enemy.roll_move(rng or Random(0))
    return enemy


@pytest.fixture
def dummy_template():
    return make_template()


@pytest.fixture
def passive_template():
    """Enemy that never attacks."""
    return make_template(moves=[
        EnemyMove("wait", "Wait", Intent.BUFF, [EnemyAction("APPLY_STRENGTH_SELF", 0)]),
    ])


# =============================================================================
# Player Fixtures
# =============================================================================


def strikes(count=10):
    return [get_card("strike") for _ in range(count)]


@pytest.fixture
def starter_player():
    return create_starter_player()


@pytest.fixture
def strike_player():
    """80 HP player whose deck is ten Strikes and nothing else."""
    return Player(max_hp=80, deck=strikes())


# =============================================================================
# Combat Fixtures
# =============================================================================


@pytest.fixture
def make_combat():
    """
    Factory for started combats.

    Usage:
        manager = make_combat(deck=[...], enemies=[template], seed=1)
    """
    def _make(deck=None, enemies=None, seed=42, hp=80, relics=None, potions=None,
              config=None, relic_manager=None, start=True):
        player = Player(max_hp=hp, deck=deck if deck is not None else strikes())
        for relic in relics or []:
            player.add_relic(relic)
        for potion in potions or []:
            player.add_potion(potion)
        manager = CombatManager(
            player,
            enemies if enemies is not None else [make_template()],
            rng=Random(seed),
            relic_manager=relic_manager or RelicManager(),
            config=config or CombatConfig(),
            card_pool=list(CARDS.values()),
        )
        if start:
            manager.start_combat()
        return manager
    return _make


def simple_card(card_id="test_card", card_type=CardType.SKILL, cost=1,
                target=TargetType.SELF, effects=None, **flags):
    """Ad-hoc card for tests that need precise effects."""
    return Card(id=card_id, name=card_id, card_type=card_type, cost=cost,
                target=target, effects=effects or [], **flags)


# Helpers importable by test modules
__all__ = ["make_template", "make_enemy", "strikes", "simple_card"]
