import re

import pytest

from mgbench.triad import main, triad


def test_no_repetitions_keeps_initial_value():
    first, elapsed = triad(16, 0)
    assert first == 1.0
    assert elapsed >= 0.0


def test_small_run():
    first, _ = triad(4, 3)
    assert first == 19.0


def test_more_reps_grow_result():
    assert triad(8, 5)[0] > triad(8, 4)[0]


def test_invalid_arguments():
    with pytest.raises(ValueError):
        triad(0, 1)
    with pytest.raises(ValueError):
        triad(4, -1)


def test_main_output(capsys):
    assert main(["--size", "8", "--reps", "2"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "a[0] = 13.000000"
    assert re.fullmatch(r"Elapsed time: \d+\.\d{3} seconds", lines[1])