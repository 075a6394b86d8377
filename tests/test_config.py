"""Tests for config.BenchmarkConfig and load_config."""

import pytest

from config import BenchmarkConfig, _known, _read_toml, load_config
from errors import InvalidInputError


# ---------------------------------------------------------------------------
# BenchmarkConfig
# ---------------------------------------------------------------------------


def test_defaults():
    cfg = BenchmarkConfig()
    assert cfg.samples == 1_000_000
    assert cfg.seed == 42
    assert cfg.bins == 50
    assert cfg.height == 20


@pytest.mark.parametrize(
    "kwargs",
    [
        {"samples": 0},
        {"bins": 0},
        {"height": -1},
        {"seed": -1},
        {"seed": 1 << 64},
        {"samples": "100"},
        {"bins": 2.5},
        {"height": True},
    ],
)
def test_invalid_values_raise(kwargs):
    with pytest.raises(InvalidInputError):
        BenchmarkConfig(**kwargs)


def test_frozen():
    cfg = BenchmarkConfig()
    with pytest.raises(AttributeError):
        cfg.samples = 5


# ---------------------------------------------------------------------------
# _read_toml / _known
# ---------------------------------------------------------------------------


def test_read_toml_success(tmp_path):
    toml_file = tmp_path / "test.toml"
    toml_file.write_text("[tool.normbench]\nsamples = 5\n", encoding="utf-8")
    assert _read_toml(toml_file) == {"tool": {"normbench": {"samples": 5}}}


def test_read_toml_missing_file(tmp_path):
    assert _read_toml(tmp_path / "nonexistent.toml") == {}


def test_read_toml_invalid_toml(tmp_path):
    bad_file = tmp_path / "bad.toml"
    bad_file.write_text("samples = = 3\n", encoding="utf-8")
    assert _read_toml(bad_file) == {}


def test_known_drops_unknown_keys():
    assert _known({"samples": 7, "bogus": "x"}) == {"samples": 7}


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


def test_load_config_defaults_when_no_files(tmp_path):
    assert load_config(project_root=tmp_path) == BenchmarkConfig()


def test_load_config_reads_pyproject_toml(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.normbench]\nsamples = 1000\nbins = 20\n", encoding="utf-8"
    )
    cfg = load_config(project_root=tmp_path)
    assert cfg.samples == 1000
    assert cfg.bins == 20
    assert cfg.seed == 42


def test_load_config_pyproject_without_section(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.pytest]\naddopts = '-q'\n", encoding="utf-8"
    )
    assert load_config(project_root=tmp_path) == BenchmarkConfig()


def test_load_config_local_overrides_pyproject(tmp_path):
    (tmp_path / "pyproject.toml").write_text(
        "[tool.normbench]\nsamples = 1000\nseed = 1\n", encoding="utf-8"
    )
    (tmp_path / ".normbench.toml").write_text("seed = 7\n", encoding="utf-8")
    cfg = load_config(project_root=tmp_path)
    assert cfg.samples == 1000
    assert cfg.seed == 7


def test_load_config_uses_cwd_when_no_root(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".normbench.toml").write_text("height = 10\n", encoding="utf-8")
    assert load_config().height == 10


def test_load_config_validates_values(tmp_path):
    (tmp_path / ".normbench.toml").write_text("samples = 0\n", encoding="utf-8")
    with pytest.raises(InvalidInputError):
        load_config(project_root=tmp_path)
