"""Combat formulas: armor mitigation, rage income, flurry and attack tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ragesim.items import HitResult, Socket, Weapon, WeaponSocket, WeaponType
from ragesim.stats import SpecialStats

RAGE_FACTOR = 3.75 / 274.7
"""Rage gained per point of damage dealt."""

SUNDER_ARMOR_REDUCTION = 520
CURSE_OF_RECKLESSNESS_REDUCTION = 800
FAERIE_FIRE_FERAL_REDUCTION = 610
FLURRY_CHARGES = 3

_EXECUTE_RAGE_COSTS = (15, 13, 10)


def armor_reduction_factor(target_armor: float) -> float:
    """Fraction of physical damage that gets through ``target_armor``."""
    return 10557.5 / (10557.5 + target_armor)


def rage_from_damage_taken(damage: float) -> float:
    """Rage gained when taking ``damage``."""
    return damage * 5.0 / 2.0 / 274.7


def rage_generation(rage_damage: float, is_crit: bool, socket: Socket, swing_speed: float,
                    endless_rage: bool) -> float:
    """Rage gained from a white swing that dealt ``rage_damage``."""
    hit_factor = 3.5 / 2 if socket is Socket.MAIN_HAND else 1.75 / 2
    if is_crit:
        hit_factor *= 2
    rage_gain = rage_damage * RAGE_FACTOR + hit_factor * swing_speed
    if endless_rage:
        rage_gain *= 1.25
    return rage_gain


def armor_reduction_from_spells(curse_of_recklessness: bool, faerie_fire_feral: bool) -> int:
    """Armor removed from the main target by debuff spells."""
    reduction = 0
    if curse_of_recklessness:
        reduction += CURSE_OF_RECKLESSNESS_REDUCTION
    if faerie_fire_feral:
        reduction += FAERIE_FIRE_FERAL_REDUCTION
    return reduction


def target_armor(initial_armor: int, spell_reduction: int, gear_armor_pen: int, sunder_stacks: int,
                 delayed_reduction: Optional[int]) -> int:
    """Remaining armor of the main target, never below zero.

    ``delayed_reduction`` is the improved expose armor reduction once it has been
    applied, or ``None`` before that; it replaces the sunder armor stacks.
    """
    armor = initial_armor - spell_reduction - gear_armor_pen - SUNDER_ARMOR_REDUCTION * sunder_stacks
    if delayed_reduction is not None:
        armor -= delayed_reduction - SUNDER_ARMOR_REDUCTION * sunder_stacks
    return max(int(armor), 0)


def execute_rage_cost(improved_execute: int, has_onslaught_2_set: bool) -> int:
    """Rage cost of execute for the given talent points and set bonus."""
    if not 0 <= improved_execute < len(_EXECUTE_RAGE_COSTS):
        raise ValueError(f"improved execute has no rank {improved_execute}")
    return _EXECUTE_RAGE_COSTS[improved_execute] - 3 * int(bool(has_onslaught_2_set))


def _flurry_stats(flurry_haste: float) -> SpecialStats:
    return SpecialStats(attack_speed=flurry_haste)


def gain_flurry(hit_result: HitResult, flurry_charges: int, special_stats: SpecialStats,
                flurry_haste: float) -> tuple[int, SpecialStats]:
    """Refresh flurry on a crit; return the new charges and stats."""
    if flurry_haste <= 0 or flurry_charges == FLURRY_CHARGES or hit_result is not HitResult.CRIT:
        return flurry_charges, special_stats
    if flurry_charges == 0:
        special_stats = special_stats + _flurry_stats(flurry_haste)
    return FLURRY_CHARGES, special_stats


def remove_flurry(flurry_charges: int, special_stats: SpecialStats,
                  flurry_haste: float) -> tuple[int, SpecialStats]:
    """Consume one flurry charge on a swing; return the new charges and stats."""
    if flurry_haste <= 0 or flurry_charges == 0:
        return flurry_charges, special_stats
    if flurry_charges == 1:
        special_stats = special_stats - _flurry_stats(flurry_haste)
    return flurry_charges - 1, special_stats


@dataclass(frozen=True)
class HitChances:
    """Attack table chances (in percent) and damage multipliers for one weapon."""

    miss: float
    yellow_miss: float
    dodge: float
    glance: float
    crit: float
    yellow_crit: float
    overpower_crit: float
    glance_multiplier: float
    white_crit_multiplier: float
    yellow_crit_multiplier: float


@dataclass(frozen=True)
class _TargetTable:
    miss: float
    hit_suppression: float
    dodge: float
    glance: float
    glance_dr: float
    crit_suppression: float


_DEFAULT_TARGET = _TargetTable(8.0, 1.0, 6.5, 24.0, 25.0, 4.8)
_TARGET_TABLES = {
    72: _TargetTable(6.0, 0.0, 6.0, 18.0, 15.0, 2.0),
    71: _TargetTable(5.5, 0.0, 5.5, 12.0, 5.0, 1.0),
    70: _TargetTable(5.0, 0.0, 5.0, 6.0, 5.0, 0.0),
}


def hit_chances(special_stats: SpecialStats, weapon: Weapon, talents, target_level: int) -> HitChances:
    """Build the attack table of ``weapon`` against a target of ``target_level``."""
    table = _TARGET_TABLES.get(target_level, _DEFAULT_TARGET)

    effective_hit = max(special_stats.hit - table.hit_suppression, 0.0)
    sw_miss = max(table.miss - effective_hit, 0.0)
    dw_miss = max(table.miss + 19.0 - effective_hit, 0.0)
    miss = sw_miss if weapon.weapon_socket is WeaponSocket.TWO_HAND else dw_miss

    expertise = special_stats.expertise
    if weapon.weapon_type is WeaponType.AXE:
        expertise += special_stats.axe_expertise
    elif weapon.weapon_type is WeaponType.MACE:
        expertise += special_stats.mace_expertise
    elif weapon.weapon_type is WeaponType.SWORD:
        expertise += special_stats.sword_expertise

    dodge = max(table.dodge - int(expertise) * 0.25 - talents.weapon_mastery, 0.0)

    crit = special_stats.critical_strike
    if weapon.weapon_type is WeaponType.AXE:
        crit += talents.poleaxe_specialization
    crit = max(crit - table.crit_suppression, 0.0)

    white_crit_multiplier = 2 * (1 + special_stats.crit_multiplier)
    yellow_crit_multiplier = 1 + (white_crit_multiplier - 1) * (1 + 0.1 * talents.impale)

    overpower_crit = crit + talents.improved_overpower * 25
    return HitChances(
        miss=miss,
        yellow_miss=sw_miss,
        dodge=dodge,
        glance=table.glance,
        crit=crit,
        yellow_crit=(100 - sw_miss - dodge) / 100 * crit,
        overpower_crit=(100 - sw_miss) / 100 * overpower_crit,
        glance_multiplier=(100 - table.glance_dr) / 100,
        white_crit_multiplier=white_crit_multiplier,
        yellow_crit_multiplier=yellow_crit_multiplier,
    )