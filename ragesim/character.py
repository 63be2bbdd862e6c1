"""A character: race, talents, equipment and the buffs it carries."""

from __future__ import annotations

import copy
import enum
import warnings
from dataclasses import dataclass, field

from ragesim.items import (
    Armor,
    Buff,
    Enchant,
    EnchantType,
    Gem,
    ItemSet,
    SetBonus,
    Socket,
    UseEffect,
    Weapon,
    WeaponBuff,
    WeaponSocket,
    WeaponType,
)
from ragesim.stats import Attributes, SpecialStats


class Race(enum.Enum):
    HUMAN = enum.auto()
    DWARF = enum.auto()
    NIGHT_ELF = enum.auto()
    GNOME = enum.auto()
    DRAENEI = enum.auto()
    ORC = enum.auto()
    TAUREN = enum.auto()
    TROLL = enum.auto()
    UNDEAD = enum.auto()


@dataclass
class Talents:
    """Talent point allocation; every talent defaults to zero points."""

    improved_heroic_strike: int = 0
    improved_overpower: int = 0
    anger_management: int = 0
    deep_wounds: int = 0
    two_handed_weapon_specialization: int = 0
    impale: int = 0
    poleaxe_specialization: int = 0
    death_wish: int = 0
    mace_specialization: int = 0
    sword_specialization: int = 0
    improved_disciplines: int = 0
    mortal_strike: int = 0
    improved_mortal_strike: int = 0
    endless_rage: int = 0
    booming_voice: int = 0
    cruelty: int = 0
    unbridled_wrath: int = 0
    improved_cleave: int = 0
    commanding_presence: int = 0
    dual_wield_specialization: int = 0
    improved_execute: int = 0
    improved_slam: int = 0
    sweeping_strikes: int = 0
    weapon_mastery: int = 0
    flurry: int = 0
    precision: int = 0
    bloodthirst: int = 0
    improved_whirlwind: int = 0
    improved_berserker_stance: int = 0
    rampage: int = 0
    tactical_mastery: int = 0
    defiance: int = 0
    one_handed_weapon_specialization: int = 0


@dataclass
class Character:
    """A character with its gear, buffs and talents."""

    race: Race
    level: int
    talents: Talents = field(default_factory=Talents)
    base_attributes: Attributes = field(default_factory=Attributes)
    base_special_stats: SpecialStats = field(default_factory=SpecialStats)
    total_attributes: Attributes = field(default_factory=Attributes)
    total_special_stats: SpecialStats = field(default_factory=SpecialStats)
    armor: list[Armor] = field(default_factory=list)
    weapons: list[Weapon] = field(default_factory=list)
    gems: list[Gem] = field(default_factory=list)
    set_bonuses: list[SetBonus] = field(default_factory=list)
    buffs: list[Buff] = field(default_factory=list)
    use_effects: list[UseEffect] = field(default_factory=list)

    def equip_armor(self, piece: Armor) -> None:
        self.armor.append(piece)

    def equip_weapon(self, *args) -> None:
        """Equip one weapon, two weapons, or a sequence of one or two weapons.

        The weapons are copied; the character's copies get their hand socket set.
        """
        if len(args) == 1 and isinstance(args[0], (list, tuple)):
            weapons = list(args[0])
            if len(weapons) not in (1, 2):
                raise ValueError(f"cannot equip a weapon sequence of size {len(weapons)}")
            self.equip_weapon(*weapons)
            return
        if len(args) == 1:
            weapon = copy.deepcopy(args[0])
            if weapon.weapon_socket is not WeaponSocket.TWO_HAND:
                warnings.warn("wielding a single weapon that is not two-handed", stacklevel=2)
            weapon.socket = Socket.MAIN_HAND
            self.weapons = [weapon]
            return
        if len(args) == 2:
            main_hand, off_hand = (copy.deepcopy(w) for w in args)
            if WeaponSocket.TWO_HAND in (main_hand.weapon_socket, off_hand.weapon_socket):
                raise ValueError("cannot dual wield with a two-hand weapon")
            main_hand.socket = Socket.MAIN_HAND
            off_hand.socket = Socket.OFF_HAND
            self.weapons = [main_hand, off_hand]
            return
        raise ValueError(f"cannot equip {len(args)} weapons")

    def add_enchant(self, socket: Socket, enchant_type: EnchantType) -> None:
        """Enchant the first weapon, else the first armor piece, in ``socket``."""
        for item in (*self.weapons, *self.armor):
            if item.socket == socket:
                item.enchant = Enchant(enchant_type)
                return

    def add_gem(self, gem: Gem) -> None:
        self.gems.append(gem)

    def has_buff(self, buff: Buff) -> bool:
        return any(b.name == buff.name for b in self.buffs)

    def add_buff(self, buff: Buff) -> None:
        self.buffs.append(buff)

    def add_weapon_buff(self, socket: Socket, buff: WeaponBuff) -> None:
        for weapon in self.weapons:
            if weapon.socket == socket:
                weapon.buff = buff
                return

    def is_dual_wield(self) -> bool:
        return len(self.weapons) == 2

    def has_weapon_of_type(self, weapon_type: WeaponType) -> bool:
        return any(w.weapon_type == weapon_type for w in self.weapons)

    def has_item(self, item_name: str) -> bool:
        return any(item.name == item_name for item in (*self.armor, *self.weapons))

    def get_item_from_socket(self, socket: Socket, first_slot: bool = True) -> Armor:
        """Return the first armor piece in ``socket``, or the second if ``first_slot`` is false."""
        take = first_slot
        for piece in self.armor:
            if piece.socket == socket:
                if take:
                    return piece
                take = True
        raise LookupError(f"no item found in socket {socket.name}")

    def get_weapon_from_socket(self, socket: Socket) -> Weapon:
        for weapon in self.weapons:
            if weapon.socket == socket:
                return weapon
        raise LookupError(f"no weapon found in socket {socket.name}")

    def has_set_bonus(self, item_set: ItemSet, pieces: int) -> bool:
        return any(sb.item_set == item_set and sb.pieces == pieces for sb in self.set_bonuses)