"""
Tests for the tree decoder transistor cost model.
"""

import pytest

import decoder_cost
from decoder_cost import CostParams, calc_f, d_en, d_tau, format_csv, format_human, sweep


def test_single_level_cost():
    p = CostParams()
    assert d_en(0, p) == 4
    assert d_en(1, p) == 14
    assert d_en(2, p) == 40
    assert d_en(3, p) == 104


def test_fanout_choice():
    p = CostParams(f_max=8)
    assert calc_f(0, p) == 2
    assert calc_f(3, p) == 4
    assert calc_f(4, p) == 4
    assert calc_f(5, p) == 8
    assert calc_f(12, p) == 8
    assert calc_f(12, CostParams(f_max=2)) == 2


def test_tree_cost_base_case():
    p = CostParams(f_max=8, b=4)
    assert d_tau(2, p) == d_en(2, p)
    assert d_tau(1, p) == d_en(1, p)


def test_tree_cost_recursive():
    p = CostParams(f_max=8, b=4)
    # 顶层 2 位译码 + 4 个 1 位子树
    assert d_tau(3, p) == 40 + 4 * 14
    assert d_tau(4, p) == 40 + 4 * 40


def test_large_base_decoder_is_single_level():
    p = CostParams(f_max=8, b=128)
    for k in range(0, 8):
        assert d_tau(k, p) == d_en(k, p)


def test_tree_cheaper_than_flat_for_wide_decoders():
    p = CostParams(f_max=8, b=4)
    assert d_tau(10, p) < d_en(10, p)


@pytest.mark.parametrize("kwargs", [{"f_max": 1}, {"b": 1}, {"f_max": 0, "b": 4}])
def test_params_validation(kwargs):
    with pytest.raises(ValueError):
        CostParams(**kwargs)


def test_sweep_shape():
    rows = sweep()
    assert len(rows) == len(decoder_cost.DEFAULT_F_MAX) * len(decoder_cost.DEFAULT_B)
    assert all(len(r.costs) == len(decoder_cost.DEFAULT_K) for r in rows)
    assert (rows[0].f_max, rows[0].b) == (2, 4)


def test_format_csv():
    rows = sweep([2, 3], [8], [4])
    assert format_csv(rows, [2, 3]) == "f_max, b, 2, 3\n8, 4, 40, 96\n"


def test_format_human():
    rows = sweep([3], [8], [4])
    assert format_human(rows, [3]) == "Cost(k = 3, f_max = 8, b = 4) = 96\n"


def test_main_csv_to_file(tmp_path):
    out = tmp_path / "cost.csv"
    assert decoder_cost.main(["--k-min", "2", "--k-max", "3", "--f-max", "8", "--b", "4", "--out", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "f_max, b, 2, 3\n8, 4, 40, 96\n"


def test_main_human_stdout(capsys):
    decoder_cost.main(["--k-min", "3", "--k-max", "3", "--f-max", "8", "--b", "4", "--human"])
    assert capsys.readouterr().out == "Cost(k = 3, f_max = 8, b = 4) = 96\n"


def test_main_rejects_bad_range():
    with pytest.raises(SystemExit):
        decoder_cost.main(["--k-min", "5", "--k-max", "2"])
