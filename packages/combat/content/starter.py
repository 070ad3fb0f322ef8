"""
Starter catalog - a small, self-contained set of cards, relics, potions
and monsters for demos, the CLI and tests.

Everything here is a template: use get_card() / get_relic() /
get_potion() (or .copy()) to get an instance the engine can own.
"""

from typing import Dict, List

from ..state.entities import Player
from .cards import Card, CardEffect, CardRarity, CardType, TargetType
from .enemies import EnemyAction, EnemyMove, EnemyTemplate, Intent
from .potions import Potion, PotionEffect, PotionRarity
from .relics import Relic, RelicEffect, RelicRarity


# =============================================================================
# CARDS
# =============================================================================

STRIKE = Card(
    id="strike", name="Strike", card_type=CardType.ATTACK, cost=1,
    target=TargetType.SINGLE_ENEMY, rarity=CardRarity.STARTER,
    effects=[CardEffect("DAMAGE", 6)],
    upgraded_effects=[CardEffect("DAMAGE", 9)],
    description="Deal 6 damage.",
)

DEFEND = Card(
    id="defend", name="Defend", card_type=CardType.SKILL, cost=1,
    rarity=CardRarity.STARTER,
    effects=[CardEffect("BLOCK", 5)],
    upgraded_effects=[CardEffect("BLOCK", 8)],
    description="Gain 5 Block.",
)

BASH = Card(
    id="bash", name="Bash", card_type=CardType.ATTACK, cost=2,
    target=TargetType.SINGLE_ENEMY, rarity=CardRarity.STARTER,
    effects=[CardEffect("DAMAGE", 8), CardEffect("APPLY_VULNERABLE", 2)],
    upgraded_effects=[CardEffect("DAMAGE", 10), CardEffect("APPLY_VULNERABLE", 3)],
    description="Deal 8 damage. Apply 2 Vulnerable.",
)

CLEAVE = Card(
    id="cleave", name="Cleave", card_type=CardType.ATTACK, cost=1,
    target=TargetType.ALL_ENEMIES,
    effects=[CardEffect("DAMAGE", 8)],
    upgraded_effects=[CardEffect("DAMAGE", 11)],
    description="Deal 8 damage to ALL enemies.",
)

TWIN_STRIKE = Card(
    id="twin_strike", name="Twin Strike", card_type=CardType.ATTACK, cost=1,
    target=TargetType.SINGLE_ENEMY,
    effects=[CardEffect("DAMAGE", 5, times=2)],
    upgraded_effects=[CardEffect("DAMAGE", 7, times=2)],
    description="Deal 5 damage twice.",
)

POMMEL_STRIKE = Card(
    id="pommel_strike", name="Pommel Strike", card_type=CardType.ATTACK, cost=1,
    target=TargetType.SINGLE_ENEMY,
    effects=[CardEffect("DAMAGE", 9), CardEffect("DRAW", 1)],
    upgraded_effects=[CardEffect("DAMAGE", 10), CardEffect("DRAW", 2)],
    description="Deal 9 damage. Draw 1 card.",
)

IRON_WAVE = Card(
    id="iron_wave", name="Iron Wave", card_type=CardType.ATTACK, cost=1,
    target=TargetType.SINGLE_ENEMY,
    effects=[CardEffect("BLOCK", 5), CardEffect("DAMAGE", 5)],
    upgraded_effects=[CardEffect("BLOCK", 7), CardEffect("DAMAGE", 7)],
    description="Gain 5 Block. Deal 5 damage.",
)

BODY_SLAM = Card(
    id="body_slam", name="Body Slam", card_type=CardType.ATTACK, cost=1,
    target=TargetType.SINGLE_ENEMY, upgraded_cost=0,
    effects=[CardEffect("DAMAGE_EQUAL_BLOCK")],
    description="Deal damage equal to your Block.",
)

SWORD_BOOMERANG = Card(
    id="sword_boomerang", name="Sword Boomerang", card_type=CardType.ATTACK, cost=1,
    target=TargetType.RANDOM_ENEMY,
    effects=[CardEffect("DAMAGE", 3, times=3)],
    upgraded_effects=[CardEffect("DAMAGE", 3, times=4)],
    description="Deal 3 damage to a random enemy 3 times.",
)

OVERCHARGE = Card(
    id="overcharge", name="Overcharge", card_type=CardType.ATTACK, cost=0,
    target=TargetType.ALL_ENEMIES, is_x_cost=True, rarity=CardRarity.UNCOMMON,
    effects=[CardEffect("DAMAGE_ALL", 0, times=1)],
    description="Deal X damage to ALL enemies.",
)

SHRUG_IT_OFF = Card(
    id="shrug_it_off", name="Shrug It Off", card_type=CardType.SKILL, cost=1,
    effects=[CardEffect("BLOCK", 8), CardEffect("DRAW", 1)],
    upgraded_effects=[CardEffect("BLOCK", 11), CardEffect("DRAW", 1)],
    description="Gain 8 Block. Draw 1 card.",
)

ENTRENCH = Card(
    id="entrench", name="Entrench", card_type=CardType.SKILL, cost=2,
    upgraded_cost=1, rarity=CardRarity.UNCOMMON,
    effects=[CardEffect("DOUBLE_BLOCK")],
    description="Double your Block.",
)

DEADLY_POISON = Card(
    id="deadly_poison", name="Deadly Poison", card_type=CardType.SKILL, cost=1,
    target=TargetType.SINGLE_ENEMY,
    effects=[CardEffect("APPLY_POISON", 5)],
    upgraded_effects=[CardEffect("APPLY_POISON", 7)],
    description="Apply 5 Poison.",
)

INFLAME = Card(
    id="inflame", name="Inflame", card_type=CardType.POWER, cost=1,
    rarity=CardRarity.UNCOMMON,
    effects=[CardEffect("GAIN_STRENGTH", 2)],
    upgraded_effects=[CardEffect("GAIN_STRENGTH", 3)],
    description="Gain 2 Strength.",
)

OFFERING = Card(
    id="offering", name="Offering", card_type=CardType.SKILL, cost=0,
    rarity=CardRarity.RARE, exhaust=True,
    effects=[CardEffect("LOSE_HP", 6), CardEffect("GAIN_ENERGY", 2), CardEffect("DRAW", 3)],
    upgraded_effects=[CardEffect("LOSE_HP", 6), CardEffect("GAIN_ENERGY", 2), CardEffect("DRAW", 5)],
    description="Lose 6 HP. Gain 2 energy. Draw 3 cards. Exhaust.",
)

OPENING_GAMBIT = Card(
    id="opening_gambit", name="Opening Gambit", card_type=CardType.SKILL, cost=0,
    innate=True, exhaust=True,
    effects=[CardEffect("DRAW", 2)],
    description="Innate. Draw 2 cards. Exhaust.",
)

FLEETING_GUARD = Card(
    id="fleeting_guard", name="Fleeting Guard", card_type=CardType.SKILL, cost=0,
    ethereal=True,
    effects=[CardEffect("BLOCK", 4)],
    description="Ethereal. Gain 4 Block.",
)

STEADY_STANCE = Card(
    id="steady_stance", name="Steady Stance", card_type=CardType.SKILL, cost=1,
    retain=True,
    effects=[CardEffect("BLOCK", 7)],
    description="Retain. Gain 7 Block.",
)

DAZED = Card(
    id="dazed", name="Dazed", card_type=CardType.STATUS, cost=-1,
    rarity=CardRarity.SPECIAL, ethereal=True,
    description="Unplayable. Ethereal.",
)

WOUND = Card(
    id="wound", name="Wound", card_type=CardType.STATUS, cost=-1,
    rarity=CardRarity.SPECIAL,
    description="Unplayable.",
)

CARDS: Dict[str, Card] = {
    card.id: card for card in (
        STRIKE, DEFEND, BASH, CLEAVE, TWIN_STRIKE, POMMEL_STRIKE, IRON_WAVE,
        BODY_SLAM, SWORD_BOOMERANG, OVERCHARGE, SHRUG_IT_OFF, ENTRENCH,
        DEADLY_POISON, INFLAME, OFFERING, OPENING_GAMBIT, FLEETING_GUARD,
        STEADY_STANCE, DAZED, WOUND,
    )
}


# =============================================================================
# RELICS
# =============================================================================

def _relic(id: str, name: str, rarity: RelicRarity, description: str, *effects) -> Relic:
    return Relic(
        id=id, name=name, rarity=rarity, description=description,
        effects=[RelicEffect(*e) for e in effects],
    )


RELICS: Dict[str, Relic] = {
    relic.id: relic for relic in (
        _relic("burning_blood", "Burning Blood", RelicRarity.STARTER,
               "At the end of combat, heal 6 HP.",
               ("onCombatEnd", "HEAL", 6)),
        _relic("anchor", "Anchor", RelicRarity.COMMON,
               "Start each combat with 10 Block.",
               ("onCombatStart", "BLOCK", 10)),
        _relic("vajra", "Vajra", RelicRarity.COMMON,
               "At the start of each combat, gain 1 Strength.",
               ("onCombatStart", "GAIN_STRENGTH", 1)),
        _relic("bag_of_marbles", "Bag of Marbles", RelicRarity.COMMON,
               "At the start of each combat, apply 1 Vulnerable to ALL enemies.",
               ("onCombatStart", "APPLY_VULNERABLE", 1)),
        _relic("happy_flower", "Happy Flower", RelicRarity.COMMON,
               "Every 3 turns, gain 1 energy.",
               ("onTurnStart", "ENERGY_EVERY_N_TURNS", 3)),
        _relic("orichalcum", "Orichalcum", RelicRarity.COMMON,
               "If you end your turn without Block, gain 6 Block.",
               ("onTurnEnd", "PLATED_ARMOR", 6)),
        _relic("mercury_hourglass", "Mercury Hourglass", RelicRarity.UNCOMMON,
               "At the start of your turn, deal 3 damage to ALL enemies.",
               ("onTurnStart", "DAMAGE_ALL", 3)),
        _relic("kunai", "Kunai", RelicRarity.UNCOMMON,
               "Every 3 Attacks you play, gain 1 Dexterity.",
               ("onAttackPlayed", "DEXTERITY_EVERY_N", 3)),
        _relic("shuriken", "Shuriken", RelicRarity.UNCOMMON,
               "Every 3 Attacks you play, gain 1 Strength.",
               ("onAttackPlayed", "STRENGTH_EVERY_N", 3)),
        _relic("pen_nib", "Pen Nib", RelicRarity.COMMON,
               "Every 10th card you play, deal 5 damage to ALL enemies.",
               ("onCardPlayed", "DAMAGE_ALL_EVERY_N", 10)),
        _relic("ancient_tea_set", "Ancient Tea Set", RelicRarity.COMMON,
               "Whenever you rest, start the next combat with 2 extra energy.",
               ("onRest", "ENERGY_NEXT_COMBAT", 2)),
        _relic("strawberry", "Strawberry", RelicRarity.COMMON,
               "Upon pickup, raise your Max HP by 7.",
               ("onObtain", "MAX_HP", 7)),
        _relic("potion_belt", "Potion Belt", RelicRarity.COMMON,
               "Upon pickup, gain 2 potion slots.",
               ("onObtain", "POTION_SLOT", 2)),
        _relic("bronze_scales", "Bronze Scales", RelicRarity.COMMON,
               "Whenever you take damage, deal 3 damage back.",
               ("onPlayerDamaged", "THORNS", 3)),
        _relic("tungsten_rod", "Tungsten Rod", RelicRarity.RARE,
               "Whenever you would lose HP, lose 1 less.",
               ("passive", "REDUCE_HP_LOSS", 1)),
        _relic("torii", "Torii", RelicRarity.RARE,
               "Unblocked attack damage of 5 or less is reduced to 1.",
               ("passive", "REDUCE_SMALL_DAMAGE", 5)),
        _relic("red_skull", "Red Skull", RelicRarity.COMMON,
               "While your HP is at or below 50%, you have 3 additional Strength.",
               ("passive", "STRENGTH_AT_HP", 3)),
        _relic("paper_phrog", "Paper Phrog", RelicRarity.UNCOMMON,
               "Enemies with Vulnerable take 75% more damage rather than 50%.",
               ("passive", "VULNERABLE_BONUS", 75)),
        _relic("ice_cream", "Ice Cream", RelicRarity.RARE,
               "Energy is now conserved between turns.",
               ("passive", "RETAIN_ENERGY", 1)),
    )
}


# =============================================================================
# POTIONS
# =============================================================================

POTIONS: Dict[str, Potion] = {
    potion.id: potion for potion in (
        Potion("fire_potion", "Fire Potion", [PotionEffect("DAMAGE", 20)],
               target_type=TargetType.SINGLE_ENEMY, description="Deal 20 damage."),
        Potion("explosive_potion", "Explosive Potion", [PotionEffect("DAMAGE", 10)],
               target_type=TargetType.ALL_ENEMIES,
               description="Deal 10 damage to ALL enemies."),
        Potion("block_potion", "Block Potion", [PotionEffect("BLOCK", 12)],
               description="Gain 12 Block."),
        Potion("energy_potion", "Energy Potion", [PotionEffect("GAIN_ENERGY", 2)],
               description="Gain 2 energy."),
        Potion("strength_potion", "Strength Potion", [PotionEffect("GAIN_STRENGTH", 2)],
               description="Gain 2 Strength."),
        Potion("swift_potion", "Swift Potion", [PotionEffect("DRAW", 3)],
               description="Draw 3 cards."),
        Potion("weak_potion", "Weak Potion", [PotionEffect("APPLY_WEAK", 3)],
               target_type=TargetType.SINGLE_ENEMY, description="Apply 3 Weak."),
        Potion("fear_potion", "Fear Potion", [PotionEffect("APPLY_VULNERABLE", 3)],
               target_type=TargetType.SINGLE_ENEMY, description="Apply 3 Vulnerable."),
        Potion("poison_potion", "Poison Potion", [PotionEffect("APPLY_POISON", 6)],
               target_type=TargetType.SINGLE_ENEMY, description="Apply 6 Poison."),
        Potion("blood_potion", "Blood Potion", [PotionEffect("HEAL", percentage=0.2)],
               rarity=PotionRarity.UNCOMMON, description="Heal for 20% of your Max HP."),
        Potion("fairy_in_a_bottle", "Fairy in a Bottle",
               [PotionEffect("REVIVE", percentage=0.3)], rarity=PotionRarity.RARE,
               description="When you would die, heal to 30% of your Max HP instead."),
    )
}


# =============================================================================
# ENEMIES
# =============================================================================

JAW_WORM = EnemyTemplate(
    id="jaw_worm", name="Jaw Worm", max_hp=42, hp_range=(40, 44),
    moves=[
        EnemyMove("chomp", "Chomp", Intent.ATTACK,
                  [EnemyAction("DAMAGE", 11)], weight=25),
        EnemyMove("thrash", "Thrash", Intent.ATTACK_DEFEND,
                  [EnemyAction("DAMAGE", 7), EnemyAction("APPLY_BLOCK_SELF", 5)], weight=30),
        EnemyMove("bellow", "Bellow", Intent.DEFEND_BUFF,
                  [EnemyAction("APPLY_STRENGTH_SELF", 3), EnemyAction("APPLY_BLOCK_SELF", 6)],
                  weight=45),
    ],
)

CULTIST = EnemyTemplate(
    id="cultist", name="Cultist", max_hp=50, hp_range=(48, 54),
    moves=[
        EnemyMove("dark_strike", "Dark Strike", Intent.ATTACK,
                  [EnemyAction("DAMAGE", 6)]),
    ],
    ritual=3,
)

ACID_SLIME = EnemyTemplate(
    id="acid_slime", name="Acid Slime", max_hp=30, hp_range=(28, 32),
    moves=[
        EnemyMove("corrosive_spit", "Corrosive Spit", Intent.ATTACK_DEBUFF,
                  [EnemyAction("DAMAGE", 7), EnemyAction("ADD_STATUS_CARD", 1, card_id="dazed")],
                  weight=30),
        EnemyMove("tackle", "Tackle", Intent.ATTACK,
                  [EnemyAction("DAMAGE", 10)], weight=40),
        EnemyMove("lick", "Lick", Intent.DEBUFF,
                  [EnemyAction("APPLY_WEAK", 1)], weight=30),
    ],
)

LOUSE = EnemyTemplate(
    id="louse", name="Louse", max_hp=12, hp_range=(10, 15),
    moves=[
        EnemyMove("bite", "Bite", Intent.ATTACK, [EnemyAction("DAMAGE", 6)], weight=75),
        EnemyMove("spit_web", "Spit Web", Intent.DEBUFF,
                  [EnemyAction("APPLY_FRAIL", 2)], weight=25),
    ],
)

ENEMIES: Dict[str, EnemyTemplate] = {
    e.id: e for e in (JAW_WORM, CULTIST, ACID_SLIME, LOUSE)
}

# Named encounters for the CLI
ENCOUNTERS: Dict[str, List[str]] = {
    "jaw_worm": ["jaw_worm"],
    "cultist": ["cultist"],
    "slime": ["acid_slime"],
    "two_louse": ["louse", "louse"],
}


# =============================================================================
# HELPERS
# =============================================================================

def get_card(card_id: str, upgraded: bool = False) -> Card:
    """Fresh instance of a catalog card. Raises KeyError if unknown."""
    card = CARDS[card_id].copy()
    if upgraded:
        card.upgrade()
    return card


def get_relic(relic_id: str) -> Relic:
    return RELICS[relic_id].copy()


def get_potion(potion_id: str) -> Potion:
    return POTIONS[potion_id].copy()


def get_encounter(name: str) -> List[EnemyTemplate]:
    return [ENEMIES[enemy_id] for enemy_id in ENCOUNTERS[name]]


def get_starting_deck() -> List[Card]:
    """5 Strike, 4 Defend, 1 Bash."""
    return (
        [get_card("strike") for _ in range(5)]
        + [get_card("defend") for _ in range(4)]
        + [get_card("bash")]
    )


def create_starter_player(hp: int = 80) -> Player:
    """A fresh player with the starting deck and Burning Blood."""
    player = Player(max_hp=hp, deck=get_starting_deck())
    player.add_relic(RELICS["burning_blood"])
    return player
