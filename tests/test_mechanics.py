import pytest

from ragesim.character import Talents
from ragesim.items import HitResult, Socket, Weapon, WeaponSocket, WeaponType
from ragesim.mechanics import (
    HitChances,
    armor_reduction_factor,
    armor_reduction_from_spells,
    execute_rage_cost,
    gain_flurry,
    hit_chances,
    rage_from_damage_taken,
    rage_generation,
    remove_flurry,
    target_armor,
)
from ragesim.stats import Attributes, SpecialStats


def _weapon(socket=WeaponSocket.TWO_HAND, weapon_type=WeaponType.AXE):
    return Weapon("blade", Attributes(), SpecialStats(), 3.0, 100, 200, socket, weapon_type)


def test_no_armor_lets_all_damage_through():
    assert armor_reduction_factor(0) == 1.0


def test_more_armor_mitigates_more():
    assert armor_reduction_factor(3000) < armor_reduction_factor(1000) < 1.0


def test_rage_from_damage_taken_scale():
    assert rage_from_damage_taken(274.7) == pytest.approx(2.5)
    assert rage_from_damage_taken(0) == 0


def test_crit_doubles_swing_rage():
    normal = rage_generation(0, False, Socket.MAIN_HAND, 2.0, False)
    crit = rage_generation(0, True, Socket.MAIN_HAND, 2.0, False)
    assert crit == pytest.approx(2 * normal)


def test_off_hand_swing_rage_is_half():
    mh = rage_generation(0, False, Socket.MAIN_HAND, 2.6, False)
    oh = rage_generation(0, False, Socket.OFF_HAND, 2.6, False)
    assert oh == pytest.approx(mh / 2)


def test_endless_rage_bonus():
    base = rage_generation(500, False, Socket.MAIN_HAND, 3.0, False)
    boosted = rage_generation(500, False, Socket.MAIN_HAND, 3.0, True)
    assert boosted == pytest.approx(base * 1.25)


def test_rage_generation_grows_with_damage():
    low = rage_generation(100, False, Socket.MAIN_HAND, 3.0, False)
    high = rage_generation(1000, False, Socket.MAIN_HAND, 3.0, False)
    assert high > low


def test_armor_reduction_from_spells():
    assert armor_reduction_from_spells(False, False) == 0
    assert armor_reduction_from_spells(True, False) == 800
    assert armor_reduction_from_spells(False, True) == 610
    both = armor_reduction_from_spells(True, True)
    assert both == armor_reduction_from_spells(True, False) + armor_reduction_from_spells(False, True)


def test_target_armor_never_negative():
    assert target_armor(1000, 800, 500, 5, None) == 0


def test_sunder_stacks_reduce_armor():
    none = target_armor(7700, 0, 0, 0, None)
    one = target_armor(7700, 0, 0, 1, None)
    assert none == 7700
    assert none - one == 520


def test_delayed_reduction_replaces_sunders():
    with_sunders = target_armor(7700, 0, 0, 5, 3075)
    without = target_armor(7700, 0, 0, 0, 3075)
    assert with_sunders == without
    assert without == 7700 - 3075


def test_execute_rage_cost():
    assert execute_rage_cost(0, False) == 15
    assert execute_rage_cost(1, False) == 13
    assert execute_rage_cost(2, False) == 10
    for rank in range(3):
        assert execute_rage_cost(rank, True) == execute_rage_cost(rank, False) - 3


def test_execute_rage_cost_invalid_rank():
    with pytest.raises(ValueError):
        execute_rage_cost(3, False)


def test_flurry_gained_on_crit():
    stats = SpecialStats()
    charges, new_stats = gain_flurry(HitResult.CRIT, 0, stats, 0.25)
    assert charges == 3
    assert new_stats.attack_speed == pytest.approx(0.25)


def test_flurry_not_gained_on_hit():
    stats = SpecialStats()
    charges, new_stats = gain_flurry(HitResult.HIT, 0, stats, 0.25)
    assert charges == 0
    assert new_stats == stats


def test_flurry_refresh_does_not_stack():
    charges, stats = gain_flurry(HitResult.CRIT, 0, SpecialStats(), 0.25)
    charges, stats = remove_flurry(charges, stats, 0.25)
    charges, stats = gain_flurry(HitResult.CRIT, charges, stats, 0.25)
    assert charges == 3
    assert stats.attack_speed == pytest.approx(0.25)


def test_flurry_round_trip():
    original = SpecialStats(haste=0.1)
    charges, stats = gain_flurry(HitResult.CRIT, 0, original, 0.25)
    for expected in (2, 1, 0):
        charges, stats = remove_flurry(charges, stats, 0.25)
        assert charges == expected
    assert stats.attack_speed == pytest.approx(0.0)
    assert stats.haste == pytest.approx(original.haste)


def test_no_flurry_talent_does_nothing():
    charges, stats = gain_flurry(HitResult.CRIT, 0, SpecialStats(), 0.0)
    assert charges == 0
    assert remove_flurry(2, stats, 0.0)[0] == 2


def test_level_70_table():
    chances = hit_chances(SpecialStats(), _weapon(), Talents(), 70)
    assert isinstance(chances, HitChances)
    assert chances.miss == 5.0
    assert chances.dodge == 5.0
    assert chances.glance == 6.0
    assert chances.crit == 0.0
    assert chances.yellow_crit == 0.0


def test_dual_wield_miss_penalty():
    two_hand = hit_chances(SpecialStats(), _weapon(), Talents(), 73)
    one_hand = hit_chances(SpecialStats(), _weapon(WeaponSocket.ONE_HAND), Talents(), 73)
    assert one_hand.miss - two_hand.miss == pytest.approx(19.0)
    assert one_hand.yellow_miss == two_hand.yellow_miss


def test_hit_suppression_at_boss_level():
    base = hit_chances(SpecialStats(), _weapon(), Talents(), 73)
    one_hit = hit_chances(SpecialStats(hit=1.0), _weapon(), Talents(), 73)
    assert one_hit.miss == base.miss == 8.0


def test_miss_never_negative():
    chances = hit_chances(SpecialStats(hit=50.0), _weapon(), Talents(), 73)
    assert chances.miss == 0.0
    assert chances.yellow_miss == 0.0


def test_weapon_expertise_only_for_matching_type():
    stats = SpecialStats(axe_expertise=8)
    axe = hit_chances(stats, _weapon(weapon_type=WeaponType.AXE), Talents(), 70)
    mace = hit_chances(stats, _weapon(weapon_type=WeaponType.MACE), Talents(), 70)
    assert axe.dodge < mace.dodge
    assert mace.dodge == 5.0


def test_dodge_never_negative():
    chances = hit_chances(SpecialStats(expertise=100), _weapon(), Talents(weapon_mastery=2), 73)
    assert chances.dodge == 0.0


def test_poleaxe_specialization_adds_crit_for_axes():
    talents = Talents(poleaxe_specialization=5)
    axe = hit_chances(SpecialStats(critical_strike=20), _weapon(weapon_type=WeaponType.AXE), talents, 70)
    sword = hit_chances(SpecialStats(critical_strike=20), _weapon(weapon_type=WeaponType.SWORD), talents, 70)
    assert axe.crit - sword.crit == pytest.approx(5)


def test_impale_raises_yellow_crit_multiplier():
    plain = hit_chances(SpecialStats(), _weapon(), Talents(), 70)
    impaled = hit_chances(SpecialStats(), _weapon(), Talents(impale=2), 70)
    assert plain.white_crit_multiplier == 2.0
    assert plain.yellow_crit_multiplier == plain.white_crit_multiplier
    assert impaled.yellow_crit_multiplier > plain.yellow_crit_multiplier


def test_improved_overpower_boosts_overpower_crit():
    plain = hit_chances(SpecialStats(critical_strike=10), _weapon(), Talents(), 70)
    improved = hit_chances(SpecialStats(critical_strike=10), _weapon(), Talents(improved_overpower=2), 70)
    assert improved.overpower_crit > plain.overpower_crit
    assert plain.overpower_crit > plain.yellow_crit