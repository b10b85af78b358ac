import os

import pytest

import decgen_allinone
import gen_decoder


def test_generate_all_decoder_only(tmp_path):
    written = decgen_allinone.generate_all(16, str(tmp_path))
    assert [os.path.basename(p) for p in written] == ["decoder_16_sld.vhd"]
    text = (tmp_path / "decoder_16_sld.vhd").read_text(encoding="utf-8")
    assert text == gen_decoder.gen_decoder_module(16)


def test_generate_all_with_cost(tmp_path):
    decgen_allinone.generate_all(8, str(tmp_path / "out"), with_cost=True)
    csv = (tmp_path / "out" / decgen_allinone.COST_CSV).read_text(encoding="utf-8")
    assert csv.startswith("f_max, b, 2, 3,")


def test_generate_all_bad_n(tmp_path):
    with pytest.raises(ValueError):
        decgen_allinone.generate_all(24, str(tmp_path))
    assert list(tmp_path.iterdir()) == []
