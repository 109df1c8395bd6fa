"""Attack and defense ability kinds."""
from __future__ import annotations

from enum import Enum


class AttackKind(Enum):
    """Offensive abilities. Declaration order is the tie-break order."""

    FIRE = "fire"
    LIGHTNING = "lightning"
    WEAPON = "weapon"
    ACID = "acid"
    PSYCHO = "psycho"

    @property
    def icon(self) -> str:
        return _ATTACK_ICONS[self]

    @property
    def label(self) -> str:
        return _ATTACK_LABELS[self]


class DefenseKind(Enum):
    """Defensive abilities, parallel to AttackKind."""

    FIRE = "fire"
    LIGHTNING = "lightning"
    WEAPON = "weapon"
    ACID = "acid"
    PSYCHO = "psycho"

    @property
    def icon(self) -> str:
        return _DEFENSE_ICONS[self]

    @property
    def label(self) -> str:
        return _DEFENSE_LABELS[self]


_ATTACK_ICONS = {
    AttackKind.FIRE: "flame",
    AttackKind.LIGHTNING: "bolt",
    AttackKind.WEAPON: "hammer",
    AttackKind.ACID: "drop",
    AttackKind.PSYCHO: "brain.head.profile",
}

_DEFENSE_ICONS = {
    DefenseKind.FIRE: "flame",
    DefenseKind.LIGHTNING: "bolt",
    DefenseKind.WEAPON: "shield",
    DefenseKind.ACID: "drop",
    DefenseKind.PSYCHO: "brain.head.profile",
}

_ATTACK_LABELS = {
    AttackKind.FIRE: "Fire Attack",
    AttackKind.LIGHTNING: "Lightning Attack",
    AttackKind.WEAPON: "Weapon Attack",
    AttackKind.ACID: "Acid Attack",
    AttackKind.PSYCHO: "Psycho Attack",
}

_DEFENSE_LABELS = {
    DefenseKind.FIRE: "Fire Ward",
    DefenseKind.LIGHTNING: "Lightning Ward",
    DefenseKind.WEAPON: "Weapon Guard",
    DefenseKind.ACID: "Acid Ward",
    DefenseKind.PSYCHO: "Psycho Shield",
}

ATTACK_ORDER: tuple[AttackKind, ...] = tuple(AttackKind)
DEFENSE_ORDER: tuple[DefenseKind, ...] = tuple(DefenseKind)


def matching_defense(attack: AttackKind) -> DefenseKind:
    """Return the defense of the same element as the attack."""
    return DefenseKind(attack.value)


__all__ = [
    "ATTACK_ORDER",
    "AttackKind",
    "DEFENSE_ORDER",
    "DefenseKind",
    "matching_defense",
]
