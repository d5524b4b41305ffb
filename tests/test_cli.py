import os

import pytest

import optimize_lineup
import score_lineup


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_optimize_from_command_line(workdir, capsys):
    assert optimize_lineup.main(['--treats', '1', '2', '3']) == 0
    out = capsys.readouterr().out
    assert "Best happiness: 1" in out
    assert "[2, 1, 3]" in out


def test_optimize_from_config_defaults(workdir, capsys):
    assert optimize_lineup.main([]) == 0
    assert "Best happiness: 3" in capsys.readouterr().out


def test_optimize_from_config_file(workdir, capsys):
    (workdir / "custom.yaml").write_text("problem:\n  treats: [1, 2, 2, 3, 3, 3, 4]\n")
    assert optimize_lineup.main(['--config', 'custom.yaml']) == 0
    assert "Best happiness: 2" in capsys.readouterr().out


def test_optimize_from_treats_file(workdir, capsys):
    (workdir / "treats.txt").write_text("1 1 2, 3 4\n")
    assert optimize_lineup.main(['--treats-file', 'treats.txt']) == 0
    assert "Best happiness: 2" in capsys.readouterr().out


def test_read_treats_file_rejects_garbage(workdir):
    (workdir / "treats.txt").write_text("1 two 3")
    with pytest.raises(ValueError):
        optimize_lineup.read_treats_file("treats.txt")


def test_optimize_exhaustive_without_guess_and_save(workdir, capsys):
    code = optimize_lineup.main(['--treats', '1', '1', '2', '3', '4', '4',
                                 '--search-mode', 'exhaustive', '--save'])
    assert code == 0
    assert "Best happiness: 2" in capsys.readouterr().out
    assert len(os.listdir(workdir / "output" / "results")) == 1


def test_optimize_no_guess_verbose(workdir, capsys):
    assert optimize_lineup.main(['--treats', '1', '1', '2', '3', '4', '--no-guess', '--verbose']) == 0
    out = capsys.readouterr().out
    assert "Best happiness: 2" in out
    assert "Nodes processed" in out


def test_optimize_rejects_invalid_treats(workdir, capsys):
    assert optimize_lineup.main(['--treats', '0', '1']) == 1
    assert "Error:" in capsys.readouterr().out


def test_optimize_missing_config(workdir, capsys):
    assert optimize_lineup.main(['--config', 'absent.yaml']) == 1
    assert "not found" in capsys.readouterr().out


def test_optimize_with_validation(workdir, capsys):
    assert optimize_lineup.main(['--treats', '1', '2', '2', '3', '--validate', '--quick']) == 0
    assert "Validation passed" in capsys.readouterr().out


def test_score_lineup(capsys):
    assert score_lineup.main(['--treats', '3', '2', '2', '3', '1', '3', '4', '--details', '--show']) == 0
    out = capsys.readouterr().out
    assert "Happiness: 2" in out
    assert "unhappy" in out


def test_score_lineup_rejects_invalid_treats(capsys):
    assert score_lineup.main(['--treats', '-1']) == 1


def test_optimize_rejects_mistyped_config(workdir, capsys):
    (workdir / "bad.yaml").write_text("validation:\n  n_random_tests: many\n")
    assert optimize_lineup.main(['--config', 'bad.yaml', '--treats', '1', '2']) == 1
    assert "Error:" in capsys.readouterr().out
