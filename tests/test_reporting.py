from collections import namedtuple

import pytest

from ragesim.reporting import (
    HISTOGRAM_BINS,
    add_to_time_lapse,
    aura_uptime_lines,
    empty_time_lapse,
    histogram_bins,
    normalize_time_lapse,
    proc_statistic_lines,
    prune_histogram,
)

Damage = namedtuple("Damage", "damage_source time_stamp damage")


def test_histogram_bins_default_count():
    hist_x, hist_y = histogram_bins(5)
    assert len(hist_x) == HISTOGRAM_BINS
    assert hist_y == [0] * HISTOGRAM_BINS
    assert hist_x[0] == 0
    assert all(b - a == 5 for a, b in zip(hist_x, hist_x[1:]))


def test_histogram_bins_negative_count():
    with pytest.raises(ValueError):
        histogram_bins(5, -1)


def test_prune_histogram_trims_both_ends():
    hist_x, hist_y = histogram_bins(10, 8)
    hist_y[2] = 3
    hist_y[5] = 1
    x, y = prune_histogram(hist_x, hist_y)
    assert x == hist_x[2:6]
    assert y == [3, 0, 0, 1]


def test_prune_histogram_keeps_full_histogram():
    x, y = prune_histogram([0, 1, 2], [4, 5, 6])
    assert (x, y) == ([0, 1, 2], [4, 5, 6])


def test_prune_histogram_empty():
    hist_x, hist_y = histogram_bins(10, 4)
    assert prune_histogram(hist_x, hist_y) == ([], [])


def test_prune_histogram_length_mismatch():
    with pytest.raises(ValueError):
        prune_histogram([0, 1], [1])


def test_empty_time_lapse_shape():
    lapse = empty_time_lapse(1000, 100, 3)
    assert len(lapse) == 3
    assert all(len(row) == 1000 // 100 + 1 for row in lapse)
    assert all(v == 0.0 for row in lapse for v in row)
    lapse[0][0] = 1.0
    assert lapse[1][0] == 0.0


def test_empty_time_lapse_bad_resolution():
    with pytest.raises(ValueError):
        empty_time_lapse(1000, 0, 2)


def test_add_and_normalize_time_lapse():
    lapse = empty_time_lapse(1000, 100, 2)
    result = add_to_time_lapse(
        lapse,
        [Damage(0, 50, 10.0), Damage(0, 99, 6.0), Damage(1, 1000, 4.0)],
        100,
    )
    assert result is lapse
    assert lapse[0][0] == 16.0
    assert lapse[1][-1] == 4.0
    assert sum(map(sum, lapse)) == 20.0
    normalize_time_lapse(lapse, 2)
    assert lapse[0][0] == 8.0
    assert lapse[1][-1] == 2.0


def test_add_to_time_lapse_out_of_range():
    lapse = empty_time_lapse(1000, 100, 2)
    with pytest.raises(IndexError):
        add_to_time_lapse(lapse, [Damage(0, 2000, 1.0)], 100)
    with pytest.raises(IndexError):
        add_to_time_lapse(lapse, [Damage(5, 0, 1.0)], 100)


def test_normalize_time_lapse_zero_batches():
    with pytest.raises(ValueError):
        normalize_time_lapse([[1.0]], 0)


def test_aura_uptime_lines_format():
    lines = aura_uptime_lines({"death_wish": 30.0}, 1, 60.0)
    assert lines == ["death_wish 50.000000"]


def test_aura_uptime_lines_extras_only_when_nonzero():
    lines = aura_uptime_lines({}, 1, 60.0, flurry_uptime=0.25, rampage_uptime=0.5)
    names = [line.rsplit(" ", 1)[0] for line in lines]
    assert names == ["Flurry", "Rampage"]
    assert float(lines[0].rsplit(" ", 1)[1]) == pytest.approx(100 * 0.25)


def test_aura_uptime_lines_heroic_strike_bug_label():
    lines = aura_uptime_lines({}, 2, 10.0, oh_queued_uptime=0.1)
    assert lines[0].startswith("'Heroic_strike_bug' ")


def test_aura_uptime_lines_invalid_time():
    with pytest.raises(ValueError):
        aura_uptime_lines({"x": 1.0}, 0, 60.0)


def test_proc_statistic_lines():
    lines = proc_statistic_lines({"crusader": 30, "windfury_totem": 0}, 10)
    assert lines[0] == "crusader 3.000000"
    assert float(lines[1].split(" ")[1]) == 0.0


def test_proc_statistic_lines_zero_batches():
    with pytest.raises(ValueError):
        proc_statistic_lines({"crusader": 1}, 0)