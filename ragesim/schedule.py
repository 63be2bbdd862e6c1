"""Planning when use effects (cooldowns, trinkets) are activated during a fight.

A schedule is a list of ``(start_time_ms, use_effect)`` pairs.
"""

from __future__ import annotations

from ragesim.items import EffectSocket, UseEffect
from ragesim.stats import SpecialStats

Schedule = list[tuple[int, UseEffect]]

_MAX_USES = 10
_NEVER_REVERSED = ("unleashed_rage", "bloodlust")
_ALWAYS_FROM_START = ("extra_bloodlust", "battle_shout_preshout_bonus")


def is_time_available(schedule: Schedule, check_time: int, duration: int) -> int:
    """Return ``check_time`` if free, otherwise the end of the first conflicting entry."""
    for start, effect in schedule:
        end = start + effect.duration
        if start <= check_time < end:
            return end
        if start <= check_time + duration < end:
            return end
    return check_time


def get_next_available_time(schedule: Schedule, check_time: int, duration: int) -> int:
    """Earliest time from ``check_time`` on that conflicts with no scheduled entry."""
    while True:
        next_available = is_time_available(schedule, check_time, duration)
        if next_available == check_time:
            return next_available
        check_time = next_available


def estimate_power(use_effect: UseEffect, special_stats: SpecialStats, total_ap: float) -> float:
    """Rough attack-power equivalent of a use effect while it is active."""
    ap_boost = use_effect.to_special_stats(special_stats).attack_power
    haste_boost = total_ap * use_effect.combat_buff.special_stats_boost.haste
    armor_boost = total_ap * 0.07 if use_effect.name == "badge_of_the_swarmguard" else 0.0
    return ap_boost + haste_boost + armor_boost


def sort_use_effects_by_power(effects, special_stats: SpecialStats, total_ap: float) -> list[UseEffect]:
    """Return the effects ordered from most to least powerful."""
    return sorted(effects, key=lambda e: estimate_power(e, special_stats, total_ap), reverse=True)


def _shared_cooldown(cooldown: int, sim_time: int) -> int:
    # line a 2 minute cooldown up with a 3 minute one when only that fits the fight
    if 210000 <= sim_time <= 260000 and cooldown == 120000:
        return 180000
    return cooldown


def _unique_cooldown(effect: UseEffect, sim_time: int) -> int:
    cooldown = effect.cooldown
    if effect.name == "battle_shout":
        return cooldown
    if 210000 <= sim_time <= 260000 and cooldown == 120000:
        return 180000
    if sim_time >= 270000 and cooldown == 180000:
        return 240000
    return cooldown


def compute_schedule(use_effects, special_stats: SpecialStats, sim_time: int, total_ap: float,
                     reverse_cooldown: bool) -> Schedule:
    """Plan the activation times of ``use_effects`` over a fight of ``sim_time`` ms.

    Shared effects never overlap each other; unique effects are used on cooldown.
    Unless ``reverse_cooldown`` is set, uses are aligned to end with the fight.
    """
    schedule: Schedule = []
    shared = [e for e in use_effects if e.effect_socket is EffectSocket.SHARED]
    unique = [e for e in use_effects if e.effect_socket is not EffectSocket.SHARED]

    for effect in sort_use_effects_by_power(shared, special_stats, total_ap):
        test_time = 0
        for _ in range(_MAX_USES):
            cooldown = _shared_cooldown(effect.cooldown, sim_time)
            test_time = get_next_available_time(schedule, test_time, cooldown)
            if test_time >= sim_time:
                break
            schedule.append((test_time, effect))
            test_time += cooldown

    for effect in unique:
        test_time = 0
        for _ in range(_MAX_USES):
            cooldown = _unique_cooldown(effect, sim_time)
            if test_time >= sim_time:
                break
            schedule.append((test_time, effect))
            test_time += cooldown

    def place(start: int, effect: UseEffect) -> int:
        if reverse_cooldown:
            reflect = effect.name in _NEVER_REVERSED
        else:
            reflect = effect.name not in _ALWAYS_FROM_START
        return sim_time - start - effect.duration if reflect else start

    placed = [(place(start, effect), effect) for start, effect in schedule]
    placed.sort(key=lambda pair: pair[0])
    return placed


def use_effect_ap_equivalent(use_effect: UseEffect, special_stats: SpecialStats, total_ap: float,
                             sim_time: int) -> float:
    """Attack-power equivalent of a use effect averaged over the whole fight."""
    power = estimate_power(use_effect, special_stats, total_ap)
    return power * min(use_effect.duration / sim_time, 1.0)