"""Items, enchants, buffs and the effects they carry."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from ragesim.stats import Attributes, SpecialStats


def to_millis(seconds: float) -> int:
    """Convert seconds to whole milliseconds, rounding half to even."""
    return int(round(1000 * seconds))


class Socket(enum.Enum):
    NONE = enum.auto()
    HEAD = enum.auto()
    NECK = enum.auto()
    SHOULDER = enum.auto()
    BACK = enum.auto()
    CHEST = enum.auto()
    WRIST = enum.auto()
    HANDS = enum.auto()
    BELT = enum.auto()
    LEGS = enum.auto()
    BOOTS = enum.auto()
    RING = enum.auto()
    TRINKET = enum.auto()
    MAIN_HAND = enum.auto()
    OFF_HAND = enum.auto()
    RANGED = enum.auto()


class WeaponSocket(enum.Enum):
    MAIN_HAND = enum.auto()
    ONE_HAND = enum.auto()
    OFF_HAND = enum.auto()
    TWO_HAND = enum.auto()


class WeaponType(enum.Enum):
    SWORD = enum.auto()
    AXE = enum.auto()
    DAGGER = enum.auto()
    MACE = enum.auto()
    UNARMED = enum.auto()


class ItemSet(enum.Enum):
    NONE = enum.auto()
    RAGESTEEL = enum.auto()
    WASTEWALKER = enum.auto()
    DOOMPLATE = enum.auto()
    WARBRINGER = enum.auto()
    DESTROYER = enum.auto()
    ONSLAUGHT = enum.auto()
    THE_FISTS_OF_FURY = enum.auto()
    THE_TWIN_BLADES_OF_AZZINOTH = enum.auto()
    THE_TWIN_BLADES_OF_AZZINOTH_NON_DEMON = enum.auto()


class HitResult(enum.IntEnum):
    """Outcome of an attack; each value is a distinct bit for proc masks."""

    MISS = 1
    DODGE = 2
    GLANCING = 4
    CRIT = 8
    HIT = 16
    TBD = 32


class ProcType(enum.IntEnum):
    """Masks of hit results that can trigger a hit effect."""

    HITS = HitResult.GLANCING | HitResult.CRIT | HitResult.HIT
    CRITS = HitResult.CRIT
    NON_CRITS = HitResult.GLANCING | HitResult.HIT


@dataclass
class OverTimeEffect:
    """A periodic effect; interval and duration are in milliseconds."""

    name: str = ""
    special_stats: SpecialStats = field(default_factory=SpecialStats)
    rage_gain: float = 0.0
    damage: float = 0.0
    interval: int = 0
    duration: int = 0
    over_time_buff_idx: int = -1

    @classmethod
    def from_seconds(cls, name, special_stats, rage_gain, damage, interval, duration):
        """Build from whole-second interval and duration."""
        return cls(
            name=name,
            special_stats=special_stats,
            rage_gain=rage_gain,
            damage=damage,
            interval=1000 * int(interval),
            duration=1000 * int(duration),
        )


class HitEffectType(enum.Enum):
    NONE = enum.auto()
    EXTRA_HIT = enum.auto()
    WINDFURY_HIT = enum.auto()
    SWORD_SPEC = enum.auto()
    STAT_BOOST = enum.auto()
    DAMAGE_PHYSICAL = enum.auto()
    DAMAGE_MAGIC = enum.auto()
    REDUCE_ARMOR = enum.auto()  # deprecated; sanitize() turns it into STAT_BOOST
    RAGE_BOOST = enum.auto()
    ASHTONGUE_TALISMAN_OF_VALOR = enum.auto()


@dataclass
class HitEffect:
    """A proc triggered by hits; duration and cooldown are in milliseconds."""

    name: str = ""
    effect_type: HitEffectType = HitEffectType.NONE
    attribute_boost: Attributes = field(default_factory=Attributes)
    special_stats_boost: SpecialStats = field(default_factory=SpecialStats)
    damage: float = 0.0
    duration: int = 0
    cooldown: int = 0
    probability: float = 0.0
    proc_type: int = ProcType.HITS
    max_charges: int = 1
    armor_reduction: int = 0
    max_stacks: int = 1
    ppm: float = 0.0
    affects_both_weapons: bool = False
    time_counter: int = 0
    procs: int = 0
    combat_buff_idx: int = -1

    @classmethod
    def from_seconds(cls, name, effect_type, attribute_boost, special_stats_boost, damage,
                     duration, cooldown, probability, **kwargs):
        """Build with duration and cooldown given in seconds."""
        return cls(
            name=name,
            effect_type=effect_type,
            attribute_boost=attribute_boost,
            special_stats_boost=special_stats_boost,
            damage=damage,
            duration=to_millis(duration),
            cooldown=to_millis(cooldown),
            probability=probability,
            **kwargs,
        )

    def sanitize(self) -> None:
        """Replace deprecated or zero settings with their working equivalents."""
        if self.effect_type is HitEffectType.REDUCE_ARMOR:
            self.effect_type = HitEffectType.STAT_BOOST
            self.special_stats_boost.gear_armor_pen = self.armor_reduction
        if self.max_charges == 0:
            self.max_charges = 1
        if self.max_stacks == 0:
            self.max_stacks = 1
        if self.proc_type == 0:
            self.proc_type = ProcType.HITS

    def is_procced_by(self, hit_result: HitResult) -> bool:
        return (int(self.proc_type) & int(hit_result)) > 0

    def to_special_stats(self, multipliers: SpecialStats) -> SpecialStats:
        return self.special_stats_boost + self.attribute_boost.to_special_stats(multipliers)


class EffectSocket(enum.Enum):
    SHARED = enum.auto()
    UNIQUE = enum.auto()


@dataclass
class UseEffect:
    """An activated effect; duration and cooldown are in milliseconds."""

    name: str = ""
    effect_socket: EffectSocket = EffectSocket.SHARED
    rage_boost: float = 0.0
    duration: int = 0
    cooldown: int = 0
    triggers_gcd: bool = False
    hit_effects: list[HitEffect] = field(default_factory=list)
    over_time_effects: list[OverTimeEffect] = field(default_factory=list)
    combat_buff: HitEffect = field(default_factory=HitEffect)

    @classmethod
    def from_seconds(cls, name, effect_socket, attribute_boost, special_stats_boost, rage_boost,
                     duration, cooldown, triggers_gcd, hit_effects=None, over_time_effects=None):
        """Build with duration and cooldown in seconds; the stat boost becomes a combat buff."""
        return cls(
            name=name,
            effect_socket=effect_socket,
            rage_boost=rage_boost,
            duration=to_millis(duration),
            cooldown=to_millis(cooldown),
            triggers_gcd=triggers_gcd,
            hit_effects=list(hit_effects or []),
            over_time_effects=list(over_time_effects or []),
            combat_buff=HitEffect.from_seconds(
                name, HitEffectType.STAT_BOOST, attribute_boost, special_stats_boost, 0, duration, 0, 0
            ),
        )

    def to_special_stats(self, multipliers: SpecialStats) -> SpecialStats:
        return self.combat_buff.to_special_stats(multipliers)


class EnchantType(enum.Enum):
    NONE = enum.auto()
    STRENGTH = enum.auto()
    STRENGTH7 = enum.auto()
    STRENGTH9 = enum.auto()
    STRENGTH12 = enum.auto()
    STRENGTH15 = enum.auto()
    STRENGTH20 = enum.auto()
    AGILITY = enum.auto()
    AGILITY12 = enum.auto()
    GREATER_AGILITY = enum.auto()
    HASTE = enum.auto()
    CRUSADER = enum.auto()
    MINOR_STATS = enum.auto()
    MAJOR_STATS = enum.auto()
    RING_STATS = enum.auto()
    RING_DAMAGE = enum.auto()
    ATTACK_POWER = enum.auto()
    NAXXRAMAS = enum.auto()
    DAMAGE = enum.auto()
    FEROCITY = enum.auto()
    GREATER_VENGEANCE = enum.auto()
    GREATER_BLADE = enum.auto()
    EXCEPTIONAL_STATS = enum.auto()
    COBRAHIDE = enum.auto()
    NETHERCOBRA = enum.auto()
    MONGOOSE = enum.auto()
    HIT = enum.auto()
    CATS_SWIFTNESS = enum.auto()
    EXECUTIONER = enum.auto()


@dataclass
class Enchant:
    enchant_type: EnchantType = EnchantType.NONE
    attributes: Attributes = field(default_factory=Attributes)
    special_stats: SpecialStats = field(default_factory=SpecialStats)


@dataclass
class SetBonus:
    item_set: ItemSet
    pieces: int
    name: str
    attributes: Attributes = field(default_factory=Attributes)
    special_stats: SpecialStats = field(default_factory=SpecialStats)
    hit_effect: HitEffect = field(default_factory=HitEffect)


@dataclass
class Buff:
    name: str
    attributes: Attributes
    special_stats: SpecialStats
    bonus_damage: float = 0.0
    hit_effects: list[HitEffect] = field(default_factory=list)
    use_effects: list[UseEffect] = field(default_factory=list)


@dataclass
class WeaponBuff:
    name: str = ""
    attributes: Attributes = field(default_factory=Attributes)
    special_stats: SpecialStats = field(default_factory=SpecialStats)
    bonus_damage: float = 0.0
    hit_effect: HitEffect = field(default_factory=HitEffect)


@dataclass
class Gem:
    name: str
    attributes: Attributes
    special_stats: SpecialStats
    hit_effect: HitEffect = field(default_factory=HitEffect)


@dataclass
class Armor:
    name: str
    attributes: Attributes
    special_stats: SpecialStats
    socket: Socket
    set_name: ItemSet = ItemSet.NONE
    hit_effects: list[HitEffect] = field(default_factory=list)
    use_effects: list[UseEffect] = field(default_factory=list)
    enchant: Enchant = field(default_factory=Enchant)

    @classmethod
    def empty(cls, socket: Socket) -> Armor:
        return cls("", Attributes(), SpecialStats(), socket)


@dataclass
class Weapon:
    name: str
    attributes: Attributes
    special_stats: SpecialStats
    swing_speed: float
    min_damage: float
    max_damage: float
    weapon_socket: WeaponSocket
    weapon_type: WeaponType
    hit_effects: list[HitEffect] = field(default_factory=list)
    set_name: ItemSet = ItemSet.NONE
    use_effects: list[UseEffect] = field(default_factory=list)
    socket: Socket = Socket.NONE
    enchant: Enchant = field(default_factory=Enchant)
    buff: WeaponBuff = field(default_factory=WeaponBuff)

    @classmethod
    def empty(cls, weapon_socket: WeaponSocket) -> Weapon:
        return cls("", Attributes(), SpecialStats(), 1000, 0, 0, weapon_socket, WeaponType.UNARMED)