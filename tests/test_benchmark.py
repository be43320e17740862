import numpy as np
import pytest

from mgbench.benchmark import (
    BenchmarkConfig,
    Multigrid,
    main,
    power,
    read_input,
    zran3,
)
from mgbench.params import Timer, verify_value

A = 5.0**13

CLASS_S = BenchmarkConfig(lt=5, nx=32, ny=32, nz=32, nit=4)


def test_power_of_zero_is_one():
    assert power(A, 0) == 1.0


@pytest.mark.parametrize("n", [1, 2, 3, 7, 16, 1024])
def test_power_is_modular_exponent(n):
    assert power(A, n) == float(pow(5**13, n, 2**46))


def test_power_rejects_negative_exponent():
    with pytest.raises(ValueError):
        power(A, -1)


def test_zran3_places_ten_charges_of_each_sign():
    z = zran3(10, 10, 10, 8, 8)
    interior = z[1:-1, 1:-1, 1:-1]
    assert z.shape == (10, 10, 10)
    assert int(np.sum(interior == 1.0)) == 10
    assert int(np.sum(interior == -1.0)) == 10
    assert int(np.count_nonzero(interior)) == 20


def test_zran3_ghost_faces_are_periodic():
    z = zran3(10, 10, 10, 8, 8)
    assert np.array_equal(z[0], z[-2])
    assert np.array_equal(z[-1], z[1])
    assert np.array_equal(z[1:-1, 1:-1, 0], z[1:-1, 1:-1, -2])


def test_zran3_is_deterministic():
    first = zran3(12, 10, 10, 10, 8)
    second = zran3(12, 10, 10, 10, 8)
    assert first.shape == (12, 10, 10)
    assert np.array_equal(first, second)
    interior = first[1:-1, 1:-1, 1:-1]
    assert int(np.sum(interior == 1.0)) == 10
    assert int(np.sum(interior == -1.0)) == 10


def test_zran3_rejects_grid_without_interior():
    with pytest.raises(ValueError):
        zran3(2, 10, 10, 0, 8)


def test_read_input_parses_fields(tmp_path):
    path = tmp_path / "mg.input"
    path.write_text(
        " 5 = top level\n 32 32 32 = nx ny nz\n 4 = nit\n 0 1 0 0 0 0 0 0\n"
    )
    config = read_input(path)
    assert (config.lt, config.nx, config.ny, config.nz, config.nit) == (5, 32, 32, 32, 4)
    assert config.debug_vec == (0, 1, 0, 0, 0, 0, 0, 0)
    assert config.class_name == "S"


def test_read_input_pads_missing_debug_flags(tmp_path):
    path = tmp_path / "mg.input"
    path.write_text("3\n8 8 8\n2\n")
    config = read_input(path)
    assert config.debug_vec == (0,) * 8
    assert config.class_name == "U"


def test_read_input_rejects_malformed_file(tmp_path):
    path = tmp_path / "mg.input"
    path.write_text("3\nnot numbers\n2\n")
    with pytest.raises(ValueError):
        read_input(path)


def test_config_rejects_single_level():
    with pytest.raises(ValueError):
        BenchmarkConfig(lt=1, nx=8, ny=8, nz=8, nit=1)


def test_config_rejects_grid_too_small_for_levels():
    with pytest.raises(ValueError):
        BenchmarkConfig(lt=5, nx=8, ny=8, nz=8, nit=1)


def test_default_config_is_class_b():
    assert BenchmarkConfig().class_name == "B"


def test_setup_lays_out_levels():
    mg = Multigrid(CLASS_S)
    assert mg.setup() == (34, 34, 34)
    assert mg.u[5].shape == (34, 34, 34)
    assert mg.r[1].shape == (4, 4, 4)
    assert mg.sizes[3] == (8, 8, 8)


def test_setup_debug_output(capsys):
    config = BenchmarkConfig(lt=3, nx=8, ny=8, nz=8, nit=1, debug_vec=(0, 1, 0, 0, 0, 0, 0, 0))
    Multigrid(config).setup()
    out = capsys.readouterr().out
    assert " in setup, " in out
    assert " k  lt  nx  ny  nz  n1  n2  n3 is1 is2 is3 ie1 ie2 ie3" in out


def test_v_cycle_reduces_residual():
    mg = Multigrid(BenchmarkConfig(lt=4, nx=16, ny=16, nz=16, nit=1))
    n1, n2, n3 = mg.setup()
    mg.v = zran3(n1, n2, n3, 16, 16)
    before, _ = mg.residual_norm()
    mg.v_cycle()
    after, _ = mg.residual_norm()
    assert after < before


def test_class_s_run_verifies(capsys):
    mg = Multigrid(CLASS_S)
    rnm2 = mg.run()
    out = capsys.readouterr().out
    assert mg.verified is True
    assert abs(rnm2 - verify_value("S")) / verify_value("S") <= 1.0e-8
    assert " VERIFICATION SUCCESSFUL" in out
    assert "  iter   1" in out and "  iter   4" in out


def test_unknown_class_is_not_verified(capsys):
    mg = Multigrid(BenchmarkConfig(lt=3, nx=8, ny=8, nz=8, nit=2))
    mg.run()
    out = capsys.readouterr().out
    assert mg.verified is False
    assert mg.error is None
    assert " NO VERIFICATION PERFORMED" in out


def test_timers_count_iterations(capsys):
    config = BenchmarkConfig(lt=3, nx=8, ny=8, nz=8, nit=3, timeron=True)
    mg = Multigrid(config)
    mg.run()
    capsys.readouterr()
    assert mg.timers.count(Timer.BENCH) == 1
    assert mg.timers.count(Timer.MG3P) == 3
    assert mg.timers.count(Timer.RESID2) == 4
    assert mg.timers.read(Timer.BENCH) >= mg.timers.read(Timer.MG3P)


def test_main_with_input_file_and_timer_flag(tmp_path, monkeypatch, capsys):
    (tmp_path / "mg.input").write_text(" 5\n 32 32 32\n 4\n 0 0 0 0 0 0 0 0\n")
    (tmp_path / "timer.flag").write_text("")
    monkeypatch.chdir(tmp_path)
    assert main([]) == 0
    out = capsys.readouterr().out
    assert " Reading from input file mg.input" in out
    assert " VERIFICATION SUCCESSFUL" in out
    assert " Verification    =               SUCCESSFUL" in out
    assert "  SECTION   Time (secs)" in out
    assert "mg-resid" in out