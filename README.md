# ragesim

Building blocks for simulating the damage output of a melee warrior. The package has no runtime dependencies.

## Modules

- **`ragesim.stats`** holds `SpecialStats` and `Attributes`, along with `multiplicative_addition` and `multiplicative_subtraction`.
  - Adding or subtracting `SpecialStats` compounds attack power with `ap_multiplier` and haste with `attack_speed`.
  - Percentage modifiers such as `damage_mod_physical` and `crit_multiplier` combine multiplicatively.
  - A `SpecialStats` that carries both `haste` and `attack_speed` raises `ValueError` when it is added or subtracted.
  - `Attributes.to_special_stats` turns agility into crit (agility / 33) and strength into attack power (2 per point). Both are scaled by `stat_multiplier`.
- **`ragesim.items`** describes gear and effects.
  - The enums are `Socket`, `WeaponSocket`, `WeaponType`, `ItemSet`, `HitResult`, `ProcType`, `HitEffectType`, `EffectSocket` and `EnchantType`.
  - The effects are `HitEffect` (on-hit procs), `UseEffect` (activated effects) and `OverTimeEffect` (periodic effects).
  - The gear types are `Weapon`, `Armor`, `Gem`, `Enchant`, `SetBonus`, `Buff` and `WeaponBuff`.
  - Times are stored in milliseconds. `to_millis` and the `from_seconds` constructors convert from seconds.
- **`ragesim.character`** holds `Character`, `Race` and `Talents`.
  - `Character.equip_weapon` takes one weapon, two weapons, or a list of one or two. It equips copies of them. It warns when a single weapon is not two-handed, and raises `ValueError` for a two-hander in a dual-wield pair.
  - `get_item_from_socket` and `get_weapon_from_socket` raise `LookupError` when the slot is empty.
- **`ragesim.schedule`** plans when use effects are activated. A schedule is a list of `(start_ms, UseEffect)` pairs, sorted by start time.
  - `compute_schedule` keeps shared effects from overlapping, ordering them by `estimate_power`. Unique effects are used on cooldown.
  - Unless `reverse_cooldown` is set, uses are aligned to end with the fight.
  - The other functions are `is_time_available`, `get_next_available_time`, `sort_use_effects_by_power` and `use_effect_ap_equivalent`.
- **`ragesim.buffs`** holds `BuffManager`, which tracks stacking `CombatBuff`s, periodic `OverTimeBuff`s and temporary `HitAura`s.
  - It applies their fades and ticks, and fires scheduled use effects through `increment`.
  - It accumulates uptimes, which `aura_uptimes` reports in seconds.
  - It works against objects you supply:
    - a fight state with `special_stats` and `add_damage(source, damage, time)`;
    - a rage manager with `rage`, `gain_rage`, `spend_rage` and `swap_stance`;
    - a time keeper with `time`, `global_ready()`, `global_cd()` and `global_cast(ms)`.
- **`ragesim.mechanics`** holds the combat formulas.
  - Armor: `armor_reduction_factor`, `armor_reduction_from_spells` and `target_armor`.
  - Rage: `rage_generation`, `rage_from_damage_taken` and `execute_rage_cost`.
  - Flurry: `gain_flurry` and `remove_flurry`.
  - Attack tables: `hit_chances`, which returns the `HitChances` for one weapon against a target level.
- **`ragesim.reporting`** summarises finished runs.
  - It builds DPS histograms with `histogram_bins` and `prune_histogram`.
  - It builds damage time lapses with `empty_time_lapse`, `add_to_time_lapse` and `normalize_time_lapse`.
  - It formats text lines with `aura_uptime_lines` and `proc_statistic_lines`.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from ragesim.stats import SpecialStats, Attributes
from ragesim.mechanics import armor_reduction_factor

gear = SpecialStats(critical_strike=20.0, hit=9.0, attack_power=1800.0)
strength = Attributes(strength=300.0, agility=150.0)
total = gear + strength.to_special_stats(gear)

print(total.attack_power)
print(armor_reduction_factor(3000))
```

## What the package does not do

The package provides the parts of a simulator, not a complete one. It has no command-line tool. It does not include the fight loop that swings weapons, rolls attack outcomes, chooses abilities or collects DPS samples over many runs. There are no ready-made simulator options either: no ability rage costs, built-in use effects or built-in periodic effects. Fight state, rage and timing are left to the caller. `BuffManager` expects them as the collaborator objects described above.