"""Character statistics: primary attributes and combat ("special") stats."""

from __future__ import annotations

from dataclasses import dataclass


def multiplicative_addition(val1: float, val2: float) -> float:
    """Combine two percentage modifiers multiplicatively."""
    return (1 + val1) * (1 + val2) - 1


def multiplicative_subtraction(val1: float, val2: float) -> float:
    """Remove a percentage modifier previously combined multiplicatively."""
    return (1 + val1) / (1 + val2) - 1


@dataclass
class SpecialStats:
    """Combat stats. Percentage modifiers combine multiplicatively."""

    critical_strike: float = 0.0
    hit: float = 0.0
    attack_power: float = 0.0
    bonus_attack_power: float = 0.0
    haste: float = 0.0
    damage_mod_physical: float = 0.0
    stat_multiplier: float = 0.0
    bonus_damage: float = 0.0
    crit_multiplier: float = 0.0
    spell_crit: float = 0.0
    damage_mod_spell: float = 0.0
    expertise: float = 0.0
    sword_expertise: float = 0.0
    mace_expertise: float = 0.0
    axe_expertise: float = 0.0
    gear_armor_pen: int = 0
    ap_multiplier: float = 0.0
    attack_speed: float = 0.0

    @staticmethod
    def _check_rhs(rhs: SpecialStats) -> None:
        if rhs.haste != 0 and rhs.attack_speed != 0:
            raise ValueError("a stat change may carry haste or attack_speed, not both")

    def __add__(self, rhs: SpecialStats) -> SpecialStats:
        if not isinstance(rhs, SpecialStats):
            return NotImplemented
        self._check_rhs(rhs)
        return SpecialStats(
            critical_strike=self.critical_strike + rhs.critical_strike,
            hit=self.hit + rhs.hit,
            attack_power=(self.attack_power + rhs.attack_power * (1 + self.ap_multiplier))
            * (1 + rhs.ap_multiplier),
            bonus_attack_power=self.bonus_attack_power + rhs.bonus_attack_power,
            haste=(1 + self.haste + rhs.haste * (1 + self.attack_speed)) * (1 + rhs.attack_speed) - 1,
            damage_mod_physical=multiplicative_addition(self.damage_mod_physical, rhs.damage_mod_physical),
            stat_multiplier=multiplicative_addition(self.stat_multiplier, rhs.stat_multiplier),
            bonus_damage=self.bonus_damage + rhs.bonus_damage,
            crit_multiplier=multiplicative_addition(self.crit_multiplier, rhs.crit_multiplier),
            spell_crit=self.spell_crit + rhs.spell_crit,
            damage_mod_spell=multiplicative_addition(self.damage_mod_spell, rhs.damage_mod_spell),
            expertise=self.expertise + rhs.expertise,
            sword_expertise=self.sword_expertise + rhs.sword_expertise,
            mace_expertise=self.mace_expertise + rhs.mace_expertise,
            axe_expertise=self.axe_expertise + rhs.axe_expertise,
            gear_armor_pen=self.gear_armor_pen + rhs.gear_armor_pen,
            ap_multiplier=multiplicative_addition(self.ap_multiplier, rhs.ap_multiplier),
            attack_speed=multiplicative_addition(self.attack_speed, rhs.attack_speed),
        )

    def __sub__(self, rhs: SpecialStats) -> SpecialStats:
        if not isinstance(rhs, SpecialStats):
            return NotImplemented
        self._check_rhs(rhs)
        return SpecialStats(
            critical_strike=self.critical_strike - rhs.critical_strike,
            hit=self.hit - rhs.hit,
            attack_power=(self.attack_power - rhs.attack_power * (1 + self.ap_multiplier))
            / (1 + rhs.ap_multiplier),
            bonus_attack_power=self.bonus_attack_power - rhs.bonus_attack_power,
            haste=(1 + self.haste - rhs.haste * (1 + self.attack_speed)) / (1 + rhs.attack_speed) - 1,
            damage_mod_physical=multiplicative_subtraction(self.damage_mod_physical, rhs.damage_mod_physical),
            stat_multiplier=multiplicative_subtraction(self.stat_multiplier, rhs.stat_multiplier),
            bonus_damage=self.bonus_damage - rhs.bonus_damage,
            crit_multiplier=multiplicative_subtraction(self.crit_multiplier, rhs.crit_multiplier),
            spell_crit=self.spell_crit - rhs.spell_crit,
            damage_mod_spell=multiplicative_subtraction(self.damage_mod_spell, rhs.damage_mod_spell),
            expertise=self.expertise - rhs.expertise,
            sword_expertise=self.sword_expertise - rhs.sword_expertise,
            mace_expertise=self.mace_expertise - rhs.mace_expertise,
            axe_expertise=self.axe_expertise - rhs.axe_expertise,
            gear_armor_pen=self.gear_armor_pen - rhs.gear_armor_pen,
            ap_multiplier=multiplicative_subtraction(self.ap_multiplier, rhs.ap_multiplier),
            attack_speed=multiplicative_subtraction(self.attack_speed, rhs.attack_speed),
        )

    def __lt__(self, other: SpecialStats) -> bool:
        """True only if every compared stat is strictly smaller."""
        if not isinstance(other, SpecialStats):
            return NotImplemented
        return (
            self.hit < other.hit
            and self.critical_strike < other.critical_strike
            and self.attack_power < other.attack_power
            and self.bonus_damage < other.bonus_damage
            and self.damage_mod_physical < other.damage_mod_physical
            and self.expertise < other.expertise
            and self.sword_expertise < other.sword_expertise
            and self.mace_expertise < other.mace_expertise
            and self.axe_expertise < other.axe_expertise
            and self.gear_armor_pen < other.gear_armor_pen
        )


@dataclass
class Attributes:
    """Primary attributes: strength and agility."""

    strength: float = 0.0
    agility: float = 0.0

    def clear(self) -> None:
        self.strength = 0.0
        self.agility = 0.0

    def multiply(self, multipliers: SpecialStats) -> Attributes:
        """Scale by the stat multiplier of ``multipliers``."""
        factor = multipliers.stat_multiplier + 1
        return Attributes(self.strength * factor, self.agility * factor)

    def to_special_stats(self, multipliers: SpecialStats) -> SpecialStats:
        """Convert to crit (agility / 33) and attack power (2 per strength)."""
        factor = multipliers.stat_multiplier + 1
        return SpecialStats(
            critical_strike=self.agility * factor / 33,
            hit=0,
            attack_power=self.strength * factor * 2,
        )

    def __add__(self, rhs: Attributes) -> Attributes:
        if not isinstance(rhs, Attributes):
            return NotImplemented
        return Attributes(self.strength + rhs.strength, self.agility + rhs.agility)

    def __mul__(self, rhs: float) -> Attributes:
        if not isinstance(rhs, (int, float)):
            return NotImplemented
        return Attributes(self.strength * rhs, self.agility * rhs)