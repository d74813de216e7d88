"""Scoreboard analyzer test suite."""
from apachestatus.core.scoreboard import SCOREBOARD_STATES, tally_scoreboard
from apachestatus.core.types import StateTallies


def test_counts_each_state():
    tallies = tally_scoreboard("_SRWKDCLGI.")
    assert tallies.model_dump() == {field: 1 for _, field, _ in SCOREBOARD_STATES}


def test_open_slots_count_dots():
    tallies = tally_scoreboard("..WW.._SS")
    assert tallies.open_slots == 4
    assert tallies.sending == 2
    assert tallies.starting == 2
    assert tallies.waiting == 1


def test_lowercase_letters_not_counted():
    tallies = tally_scoreboard("wwkks")
    assert tallies == StateTallies()


def test_unmapped_characters_ignored():
    scoreboard = "W\n x?W.\r"
    tallies = tally_scoreboard(scoreboard)
    assert tallies.sending == 2
    assert tallies.open_slots == 1
    assert tallies.total == 3
    assert tallies.total <= len(scoreboard)


def test_invariant_under_permutation_of_noise():
    assert tally_scoreboard("W?x.W") == tally_scoreboard("xW.?W")


def test_empty_scoreboard_is_all_zero():
    tallies = tally_scoreboard("")
    assert tallies.total == 0
    assert tallies.open_slots == 0


def test_perfdata_labels_in_report_order():
    symbols = "".join(symbol for symbol, _, _ in SCOREBOARD_STATES)
    assert symbols == "_SRWKDCLGI."
    assert SCOREBOARD_STATES[4][2] == "Keepalive (read)"
