"""
Tests for the command line entry point and run configuration.
"""

import logging
import sys
from pathlib import Path

import pytest
from omegaconf.errors import OmegaConfBaseException

# Add project root to path
project_root = str(Path(__file__).parent.parent)
sys.path.insert(0, project_root)

from cubing.cli import main
from cubing.config import CubingConfig, load_config, to_transform_options
from cubing.transforms.pipeline import Mode

EXAMPLE_ICNF = "p cnf 3 2\n1 2 0\n-1 3 0\na 1 0\na -1 2 0\n"

MANY_CUBES_ICNF = "c many cubes\np cnf 5 1\n1 2 3 4 5 0\n" + "".join(
    f"a {v} 0\n" for v in range(1, 6)
) + "".join(f"a -{v} 0\n" for v in range(1, 6))


@pytest.fixture
def example_file(tmp_path):
    path = tmp_path / "example.icnf"
    path.write_text(EXAMPLE_ICNF)
    return path


@pytest.fixture
def many_cubes_file(tmp_path):
    path = tmp_path / "many.icnf"
    path.write_text(MANY_CUBES_ICNF)
    return path


def test_as_cnf(example_file, capsys):
    """Test the reference CNF export from the command line."""
    assert main([str(example_file), "--as-cnf", "1"]) == 0

    captured = capsys.readouterr()
    assert captured.out == "p cnf 3 3\n1 2 0\n-1 3 0\n1 0\n"


def test_default_shuffle(many_cubes_file, capsys):
    assert main([str(many_cubes_file), "--seed", "11"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert lines[:3] == ["c many cubes", "p cnf 5 1", "1 2 3 4 5 0"]
    assert sorted(lines[3:]) == sorted(MANY_CUBES_ICNF.splitlines()[3:])


def test_seed_reproducible(many_cubes_file, capsys):
    """Same seed, byte-identical output."""
    main([str(many_cubes_file), "--seed", "4242"])
    first = capsys.readouterr().out
    main([str(many_cubes_file), "--seed", "4242"])
    second = capsys.readouterr().out

    assert first == second


def test_sample(many_cubes_file, capsys):
    assert main([str(many_cubes_file), "--seed", "1", "--sample", "4"]) == 0

    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3 + 4
    assert all(line.startswith("a ") for line in lines[3:])


def test_sample_zero(example_file, capsys):
    assert main([str(example_file), "--sample", "0"]) == 0
    assert capsys.readouterr().out == "p cnf 3 2\n1 2 0\n-1 3 0\n"


def test_as_cnf_random(example_file, capsys):
    assert main([str(example_file), "--seed", "3", "--as-cnf-random"]) == 0

    out = capsys.readouterr().out
    assert out in (
        "p cnf 3 3\n1 2 0\n-1 3 0\n1 0\n",
        "p cnf 3 4\n1 2 0\n-1 3 0\n-1 0\n2 0\n",
    )


def test_output_file(example_file, tmp_path, capsys):
    out_path = tmp_path / "result" / "cube.cnf"
    assert main([str(example_file), "--as-cnf", "2", "--output", str(out_path)]) == 0

    assert capsys.readouterr().out == ""
    assert out_path.read_text() == "p cnf 3 4\n1 2 0\n-1 3 0\n-1 0\n2 0\n"


def test_missing_file(tmp_path, capsys):
    missing = tmp_path / "nope.icnf"
    assert main([str(missing)]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Cannot open input file" in captured.err


@pytest.mark.parametrize("index", ["0", "3"])
def test_index_out_of_range(example_file, capsys, index):
    """Out-of-range indices fail without writing a header."""
    assert main([str(example_file), "--as-cnf", index]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""
    assert f"Cube index out of range: {index}" in captured.err


def test_no_cubes(tmp_path, capsys):
    path = tmp_path / "plain.cnf"
    path.write_text("p cnf 2 1\n1 2 0\n")

    assert main([str(path), "--as-cnf-random"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "No cubes found in file" in captured.err


def test_malformed_literal(tmp_path, capsys):
    path = tmp_path / "bad.icnf"
    path.write_text("p cnf 2 1\n1 2 0\na 1 z 0\n")

    assert main([str(path), "--as-cnf", "1"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "Invalid literal 'z'" in captured.err


@pytest.mark.parametrize("argv", [
    ["--sample", "1", "--as-cnf", "1"],
    ["--as-cnf", "1", "--as-cnf-random"],
    ["--sample", "-1"],
    ["--seed", "-5"],
    ["--seed", "abc"],
    ["--bogus"],
])
def test_usage_errors(example_file, argv, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(example_file)] + argv)

    assert excinfo.value.code == 2
    assert capsys.readouterr().out == ""


def test_config_file(many_cubes_file, tmp_path, capsys):
    """Options can come from a YAML file."""
    config_path = tmp_path / "run.yaml"
    config_path.write_text("seed: 8\nsample: 2\n")

    assert main([str(many_cubes_file), "--config", str(config_path)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 3 + 2


def test_config_file_overridden(many_cubes_file, tmp_path, capsys):
    """An explicit selector replaces the one from the file."""
    config_path = tmp_path / "run.yaml"
    config_path.write_text("seed: 8\nsample: 2\n")

    assert main([str(many_cubes_file), "--config", str(config_path), "--as-cnf", "6"]) == 0
    assert capsys.readouterr().out == "p cnf 5 2\n1 2 3 4 5 0\n-1 0\n"


def test_bad_config_file(example_file, tmp_path):
    config_path = tmp_path / "run.yaml"
    config_path.write_text("unknown_key: 1\n")

    with pytest.raises(SystemExit) as excinfo:
        main([str(example_file), "--config", str(config_path)])
    assert excinfo.value.code == 2


def test_load_config_defaults():
    config = load_config()

    assert config == CubingConfig()
    assert to_transform_options(config).mode is Mode.SHUFFLE


def test_load_config_overrides_ignore_none():
    config = load_config(overrides={'seed': 5, 'sample': None, 'as_cnf': 2})

    assert config.seed == 5
    assert config.sample is None
    assert config.as_cnf == 2
    assert to_transform_options(config).mode is Mode.AS_CNF


def test_load_config_validation(tmp_path):
    with pytest.raises(ValueError):
        load_config(overrides={'seed': -1})
    with pytest.raises(ValueError):
        load_config(overrides={'sample': -3})

    config_path = tmp_path / "typed.yaml"
    config_path.write_text("sample: many\n")
    with pytest.raises(OmegaConfBaseException):
        load_config(config_path)


def test_shipped_config():
    config = load_config(Path(project_root) / "conf" / "config.yaml")
    assert config == CubingConfig()


LATIN1_ICNF = b"c caf\xe9\np cnf 1 1\n1 0\na 1 0\n"


def test_non_utf8_comment_to_file(tmp_path):
    """A comment that is not UTF-8 is passed through byte for byte."""
    path = tmp_path / "latin1.icnf"
    path.write_bytes(LATIN1_ICNF)
    out_path = tmp_path / "out.icnf"

    assert main([str(path), "--sample", "1", "--output", str(out_path)]) == 0
    assert out_path.read_bytes() == LATIN1_ICNF


def test_non_utf8_comment_to_stdout(tmp_path, capsysbinary):
    path = tmp_path / "latin1.icnf"
    path.write_bytes(LATIN1_ICNF)

    assert main([str(path), "--seed", "1"]) == 0
    assert capsysbinary.readouterr().out == LATIN1_ICNF


def test_non_utf8_comment_as_cnf(tmp_path, capsysbinary):
    path = tmp_path / "latin1.icnf"
    path.write_bytes(LATIN1_ICNF)

    assert main([str(path), "--as-cnf", "1"]) == 0
    assert capsysbinary.readouterr().out == b"p cnf 1 2\n1 0\n1 0\n"


def test_config_bad_log_level(example_file, tmp_path, capsys):
    """An unknown log level in the YAML file is a usage error."""
    config_path = tmp_path / "run.yaml"
    config_path.write_text("log_level: verbose\n")

    with pytest.raises(SystemExit) as excinfo:
        main([str(example_file), "--config", str(config_path)])
    assert excinfo.value.code == 2
    assert "Unknown log level 'verbose'" in capsys.readouterr().err


def test_load_config_log_level():
    assert load_config(overrides={'log_level': 'info'}).log_level == 'INFO'
    with pytest.raises(ValueError):
        load_config(overrides={'log_level': 'loud'})


def test_logs_seed_state_and_source(example_file, caplog):
    caplog.set_level(logging.INFO)

    assert main([str(example_file), "--sample", "1"]) == 0
    assert "No seed given" in caplog.text
    assert f"Loaded 2 cubes from {example_file}" in caplog.text

    caplog.clear()
    assert main([str(example_file), "--sample", "1", "--seed", "3"]) == 0
    assert "No seed given" not in caplog.text
