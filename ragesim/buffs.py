"""Timed auras during a fight: stat buffs, periodic effects, hit auras and scheduled use effects.

The manager works against a few collaborators supplied by the simulator:

* a fight state with a mutable ``special_stats`` and ``add_damage(source, damage, time)``;
* a rage manager with a ``rage`` attribute and ``gain_rage``, ``spend_rage`` and ``swap_stance``;
* a time keeper with ``time``, ``global_ready()``, ``global_cd()`` and ``global_cast(ms)``.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Optional, Protocol

from ragesim.items import HitEffect, OverTimeEffect, UseEffect
from ragesim.stats import SpecialStats

log = logging.getLogger(__name__)

NEVER = 2**31 - 1
"""A time that is never reached; also used to disable hit effects."""

DEEP_WOUNDS = "deep_wounds"
"""Damage source reported for damaging periodic effects."""


class FightState(Protocol):
    special_stats: SpecialStats

    def add_damage(self, source, damage: float, time: int) -> None: ...


class RageManager(Protocol):
    rage: float

    def gain_rage(self, amount: float) -> None: ...

    def spend_rage(self, amount: float) -> None: ...

    def swap_stance(self) -> None: ...


class TimeKeeper(Protocol):
    time: int

    def global_ready(self) -> bool: ...

    def global_cd(self) -> int: ...

    def global_cast(self, duration: int) -> None: ...


def _since(last_gain: int) -> int:
    return last_gain if last_gain > 0 else 0


@dataclass
class CombatBuff:
    """A stacking stat buff shared by every hit effect with the same name."""

    name: str
    special_stats_boost: SpecialStats
    stacks: int = 1
    charges: int = 1
    next_fade: int = NEVER
    last_gain: int = 0
    uptime: int = 0


@dataclass
class OverTimeBuff:
    """A periodic effect that grants rage, deals damage or adds stats each tick."""

    INACTIVE = None

    name: str
    special_stats: SpecialStats
    rage_gain: float
    damage: float
    interval: int
    next_tick: Optional[int] = None
    next_fade: int = NEVER
    last_gain: int = 0
    uptime: int = 0


@dataclass
class HitAura:
    """A temporary aura that enables a pair of hit effects (main and off hand)."""

    INACTIVE = None

    name: str
    next_fade: Optional[int] = None
    hit_effect_mh: Optional[HitEffect] = None
    hit_effect_oh: Optional[HitEffect] = None


@dataclass
class BuffManager:
    """Tracks active buffs and applies their gains and fades as time advances."""

    combat_buffs: list[CombatBuff] = field(default_factory=list)
    over_time_buffs: list[OverTimeBuff] = field(default_factory=list)
    hit_auras: list[HitAura] = field(default_factory=list)
    need_to_recompute_mitigation: bool = False
    need_to_recompute_hit_tables: bool = False

    def __post_init__(self) -> None:
        self.hit_effects_mh: list[HitEffect] = []
        self.hit_effects_oh: list[HitEffect] = []
        self.use_effects_schedule: list[tuple[int, UseEffect]] = []
        self.rage_manager: Optional[RageManager] = None
        self.sim_state: Optional[FightState] = None
        self.min_combat_buff = NEVER
        self.min_over_time_buff = NEVER
        self.min_hit_aura = NEVER
        self.min_use_effect = NEVER
        self.use_effect_index = 0

    def initialize(self, hit_effects_mh, hit_effects_oh, use_effects_schedule, rage_manager) -> None:
        """Attach the weapons' hit effect lists, the use effect schedule and the rage manager."""
        self.hit_effects_mh = hit_effects_mh
        self.hit_effects_oh = hit_effects_oh
        self.use_effects_schedule = list(use_effects_schedule)
        self.rage_manager = rage_manager

    def reset(self, state) -> None:
        """Prepare for a new fight against ``state``; accumulated uptimes are kept."""
        self.sim_state = state

        for he in (*self.hit_effects_mh, *self.hit_effects_oh):
            he.time_counter = 0

        for buff in self.combat_buffs:
            buff.stacks = 0
            buff.next_fade = NEVER
        self.min_combat_buff = NEVER

        for buff in self.over_time_buffs:
            buff.next_tick = OverTimeBuff.INACTIVE
        self.min_over_time_buff = NEVER

        for aura in self.hit_auras:
            # the weapons' hit effects may have been reordered, so look them up again
            aura.hit_effect_mh = self._find_hit_effect(self.hit_effects_mh, aura.name)
            aura.hit_effect_oh = self._find_hit_effect(self.hit_effects_oh, aura.name)
            aura.next_fade = HitAura.INACTIVE
            aura.hit_effect_mh.time_counter = NEVER
            aura.hit_effect_oh.time_counter = NEVER
        self.min_hit_aura = NEVER

        self.use_effect_index = 0
        if self.use_effects_schedule:
            self.min_use_effect = self.use_effects_schedule[0][0] - 1
        else:
            self.min_use_effect = NEVER

        self.need_to_recompute_mitigation = True
        self.need_to_recompute_hit_tables = True

    @staticmethod
    def _find_hit_effect(hit_effects, name: str) -> HitEffect:
        for he in hit_effects:
            if he.name == name:
                return he
        raise LookupError(f"hit effect {name!r} of a hit aura is missing")

    def update_aura_uptimes(self, current_time: int) -> None:
        """Add the time of buffs still active at ``current_time`` to their uptime."""
        for buff in self.combat_buffs:
            if buff.stacks > 0:
                buff.uptime += current_time - _since(buff.last_gain)
        for buff in self.over_time_buffs:
            if buff.next_tick is not OverTimeBuff.INACTIVE:
                buff.uptime += current_time - _since(buff.last_gain)

    def aura_uptimes(self) -> dict[str, float]:
        """Accumulated uptime of every buff, in seconds, by name."""
        uptimes = {buff.name: buff.uptime * 0.001 for buff in self.combat_buffs}
        uptimes.update({buff.name: buff.uptime * 0.001 for buff in self.over_time_buffs})
        return uptimes

    def increment(self, time_keeper) -> None:
        """Process every fade, tick and scheduled use effect due at the keeper's time."""
        current_time = time_keeper.time
        self._increment_combat_buffs(current_time)
        self._increment_over_time_buffs(current_time)
        self._increment_hit_auras(current_time)
        self._increment_use_effects(current_time, time_keeper)

    def remove_charge(self, hit_effect: HitEffect, current_time: int) -> None:
        """Consume one charge of the hit effect's buff; the buff fades with its last charge."""
        if hit_effect.combat_buff_idx == -1:
            return
        buff = self.combat_buffs[hit_effect.combat_buff_idx]
        if buff.stacks == 0:
            return
        buff.charges -= 1
        if buff.charges > 0:
            return
        buff.next_fade = current_time
        self._fade_buff(buff)

    def add_combat_buff(self, hit_effect: HitEffect, current_time: int) -> None:
        """Gain (or refresh, or stack) the combat buff granted by ``hit_effect``."""
        if hit_effect.max_stacks < 1 or hit_effect.max_charges < 1:
            raise ValueError("a combat buff needs at least one stack and one charge")

        if hit_effect.combat_buff_idx == -1:
            for idx, buff in enumerate(self.combat_buffs):
                if buff.name == hit_effect.name:
                    hit_effect.combat_buff_idx = idx
                    self._add_combat_buff(hit_effect, current_time)
                    return

            buff = CombatBuff(
                name=hit_effect.name,
                special_stats_boost=hit_effect.to_special_stats(self.sim_state.special_stats),
                stacks=1,
                charges=hit_effect.max_charges,
                next_fade=current_time + hit_effect.duration,
                last_gain=current_time,
            )
            self.combat_buffs.append(buff)
            self._gain_stats(buff.special_stats_boost)
            self.min_combat_buff = min(self.min_combat_buff, buff.next_fade)
            hit_effect.combat_buff_idx = len(self.combat_buffs) - 1
            return

        self._add_combat_buff(hit_effect, current_time)

    def add_hit_aura(self, name: str, hit_effect: HitEffect, duration: int, current_time: int) -> None:
        """Enable ``hit_effect`` on both weapons for ``duration`` milliseconds."""
        for aura in self.hit_auras:
            if aura.name == name:
                aura.hit_effect_mh.time_counter = 0
                aura.hit_effect_oh.time_counter = 0
                aura.next_fade = current_time + duration
                self.min_hit_aura = min(self.min_hit_aura, aura.next_fade)
                return

        hit_effect.sanitize()
        mh_copy = copy.deepcopy(hit_effect)
        oh_copy = copy.deepcopy(hit_effect)
        self.hit_effects_mh.append(mh_copy)
        self.hit_effects_oh.append(oh_copy)
        aura = HitAura(name, current_time + duration, mh_copy, oh_copy)
        self.hit_auras.append(aura)
        self.min_hit_aura = min(self.min_hit_aura, aura.next_fade)

    def add_over_time_buff(self, over_time_effect: OverTimeEffect, current_time: int) -> None:
        """Start (or restart) the periodic buff described by ``over_time_effect``."""
        if over_time_effect.over_time_buff_idx == -1:
            for idx, buff in enumerate(self.over_time_buffs):
                if buff.name == over_time_effect.name:
                    over_time_effect.over_time_buff_idx = idx
                    self._add_over_time_buff(over_time_effect, current_time)
                    return

            buff = OverTimeBuff(
                name=over_time_effect.name,
                special_stats=over_time_effect.special_stats,
                rage_gain=over_time_effect.rage_gain,
                damage=over_time_effect.damage,
                interval=over_time_effect.interval,
                next_tick=current_time + over_time_effect.interval,
                next_fade=current_time + over_time_effect.duration,
                last_gain=current_time,
            )
            self.over_time_buffs.append(buff)
            self.min_over_time_buff = min(self.min_over_time_buff, buff.next_tick)
            over_time_effect.over_time_buff_idx = len(self.over_time_buffs) - 1
            return

        self._add_over_time_buff(over_time_effect, current_time)

    def _increment_combat_buffs(self, current_time: int) -> None:
        if current_time < self.min_combat_buff:
            return
        self.min_combat_buff = NEVER
        for buff in self.combat_buffs:
            if buff.stacks == 0:
                continue
            if buff.next_fade > current_time:
                self.min_combat_buff = min(self.min_combat_buff, buff.next_fade)
                continue
            self._fade_buff(buff)

    def _increment_over_time_buffs(self, current_time: int) -> None:
        if current_time < self.min_over_time_buff:
            return
        self.min_over_time_buff = NEVER
        for buff in self.over_time_buffs:
            if buff.next_tick is OverTimeBuff.INACTIVE:
                continue
            if buff.next_tick > current_time:
                self.min_over_time_buff = min(self.min_over_time_buff, buff.next_tick)
                continue

            if buff.rage_gain > 0:
                self.rage_manager.gain_rage(buff.rage_gain)
                log.debug("Over time effect: %s tick. Current rage: %d", buff.name, int(self.rage_manager.rage))
            elif buff.damage > 0:
                self.sim_state.add_damage(DEEP_WOUNDS, buff.damage, current_time)
                log.debug("Over time effect: %s tick. Damage: %d", buff.name, int(buff.damage))
            else:
                self.sim_state.special_stats += buff.special_stats

            if buff.next_fade == current_time:
                buff.next_tick = OverTimeBuff.INACTIVE
                buff.uptime += buff.next_fade - _since(buff.last_gain)
                log.debug("Over time effect: %s fades.", buff.name)
            else:
                buff.next_tick += buff.interval
                self.min_over_time_buff = min(self.min_over_time_buff, buff.next_tick)

    def _increment_hit_auras(self, current_time: int) -> None:
        if current_time < self.min_hit_aura:
            return
        self.min_hit_aura = NEVER
        for aura in self.hit_auras:
            if aura.next_fade is HitAura.INACTIVE:
                continue
            if aura.next_fade > current_time:
                self.min_hit_aura = min(self.min_hit_aura, aura.next_fade)
                continue

            aura.hit_effect_mh.time_counter = NEVER
            aura.hit_effect_oh.time_counter = NEVER

            idx = aura.hit_effect_mh.combat_buff_idx
            if idx >= 0:
                buff = self.combat_buffs[idx]
                buff.next_fade = aura.next_fade
                self._fade_buff(buff)

            aura.next_fade = HitAura.INACTIVE

    def _increment_use_effects(self, current_time: int, time_keeper) -> None:
        if current_time < self.min_use_effect:
            return

        use_effect = self.use_effects_schedule[self.use_effect_index][1]
        rage = self.rage_manager.rage

        if use_effect.triggers_gcd and not time_keeper.global_ready():
            self.min_use_effect = current_time + time_keeper.global_cd()
            return
        if use_effect.rage_boost > 0 and rage + use_effect.rage_boost > 100:
            self.min_use_effect = current_time + 500
            return
        if use_effect.rage_boost < 0 and rage + use_effect.rage_boost < 0:
            self.min_use_effect = current_time + 500
            return

        if use_effect.hit_effects:
            first = use_effect.hit_effects[0]
            self.add_hit_aura(use_effect.name, first, first.duration, current_time)
        elif use_effect.over_time_effects:
            self.add_over_time_buff(use_effect.over_time_effects[0], current_time)
        else:
            self.add_combat_buff(use_effect.combat_buff, current_time)

        if use_effect.rage_boost > 0:
            self.rage_manager.gain_rage(use_effect.rage_boost)
            log.debug("Current rage: %d", int(self.rage_manager.rage))
        elif use_effect.rage_boost < 0:
            self.rage_manager.spend_rage(-use_effect.rage_boost)
            log.debug("Current rage: %d", int(self.rage_manager.rage))

        if use_effect.triggers_gcd:
            time_keeper.global_cast(1500)

        self.use_effect_index += 1
        if self.use_effect_index < len(self.use_effects_schedule):
            start, upcoming = self.use_effects_schedule[self.use_effect_index]
            self.min_use_effect = start
            if upcoming.triggers_gcd or upcoming.rage_boost != 0:
                self.min_use_effect -= 1000
        else:
            self.min_use_effect = NEVER

    def _fade_buff(self, buff: CombatBuff) -> None:
        ssb = buff.special_stats_boost
        for _ in range(buff.stacks):
            self.sim_state.special_stats -= ssb
        buff.stacks = 0
        buff.charges = 0
        self.need_to_recompute_hit_tables |= ssb.critical_strike > 0 or ssb.hit > 0 or ssb.expertise > 0
        self.need_to_recompute_mitigation |= ssb.gear_armor_pen > 0

        if buff.name == "battle_stance":
            self.rage_manager.swap_stance()

        buff.uptime += buff.next_fade - _since(buff.last_gain)
        log.debug("%s fades.", buff.name)

    def _gain_stats(self, ssb: SpecialStats) -> None:
        self.sim_state.special_stats += ssb
        self.need_to_recompute_hit_tables |= ssb.hit > 0 or ssb.critical_strike > 0 or ssb.expertise > 0
        self.need_to_recompute_mitigation |= ssb.gear_armor_pen > 0

    def _add_combat_buff(self, hit_effect: HitEffect, current_time: int) -> None:
        buff = self.combat_buffs[hit_effect.combat_buff_idx]
        if buff.next_fade < current_time or buff.stacks < hit_effect.max_stacks:
            if buff.stacks == 0:
                buff.last_gain = current_time
            self._gain_stats(buff.special_stats_boost)
            buff.stacks += 1
        buff.next_fade = current_time + hit_effect.duration
        buff.charges = hit_effect.max_charges
        self.min_combat_buff = min(self.min_combat_buff, buff.next_fade)

    def _add_over_time_buff(self, over_time_effect: OverTimeEffect, current_time: int) -> None:
        buff = self.over_time_buffs[over_time_effect.over_time_buff_idx]
        if buff.next_tick is OverTimeBuff.INACTIVE:
            buff.last_gain = current_time
        buff.damage = over_time_effect.damage
        buff.next_tick = current_time + over_time_effect.interval
        buff.next_fade = current_time + over_time_effect.duration
        self.min_over_time_buff = min(self.min_over_time_buff, buff.next_tick)