import pytest

from config import (
    DEFAULT_CONFIG,
    Config,
    config_from_dict,
    create_default_config,
    default_config,
    load_config,
    validate_treats,
)


def _write(path, text):
    path.write_text(text)
    return str(path)


def test_default_config():
    config = default_config()
    assert isinstance(config, Config)
    assert config.problem.treats == [1, 1, 1, 1, 1, 2, 2, 3]
    assert config.search.use_initial_guess
    assert config.search.progress_interval == 10000
    assert config.validation.max_exhaustive_items == 8


def test_load_config_with_partial_sections(tmp_path):
    path = _write(tmp_path / "config.yaml", "problem:\n  treats: [3, 1, 2]\nsearch:\n  show_progress_bar: true\n")
    config = load_config(path)

    assert config.problem.treats == [3, 1, 2]
    assert config.search.show_progress_bar
    assert config.search.skip_single_size
    assert config.output.results_folder == "output/results"
    assert config._config_path == path


def test_load_config_without_problem_section(tmp_path):
    path = _write(tmp_path / "config.yaml", "visualization:\n  verbose_output: true\n")
    config = load_config(path)
    assert config.problem.treats == []
    assert config.visualization.verbose_output


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "absent.yaml"))


def test_empty_config_file(tmp_path):
    path = _write(tmp_path / "config.yaml", "")
    with pytest.raises(ValueError, match="empty"):
        load_config(path)


def test_invalid_yaml(tmp_path):
    path = _write(tmp_path / "config.yaml", "problem: [1, 2\n")
    with pytest.raises(ValueError, match="YAML"):
        load_config(path)


def test_unknown_section():
    with pytest.raises(ValueError, match="Unknown configuration sections"):
        config_from_dict({'puppies': {}})


def test_unknown_setting():
    with pytest.raises(ValueError, match="search"):
        config_from_dict({'search': {'time_limit': 10}})


@pytest.mark.parametrize("treats", [[0, 1], [-1], [1.5], ["2"], [True]])
def test_invalid_treats(treats):
    with pytest.raises(ValueError, match="problem.treats"):
        config_from_dict({'problem': {'treats': treats}})


def test_validate_treats_rejects_non_list():
    with pytest.raises(ValueError):
        validate_treats("1 2 3")


def test_invalid_progress_interval():
    with pytest.raises(ValueError, match="progress_interval"):
        config_from_dict({'search': {'progress_interval': 0}})


def test_invalid_exhaustive_limit():
    with pytest.raises(ValueError, match="max_exhaustive_items"):
        config_from_dict({'validation': {'max_exhaustive_items': 11}})


@pytest.mark.parametrize("section, key, value", [
    ('validation', 'max_exhaustive_items', 'eight'),
    ('validation', 'n_random_tests', 'many'),
    ('validation', 'random_seed', 4.2),
    ('validation', 'n_random_tests', True),
    ('search', 'progress_interval', '100'),
])
def test_non_integer_settings(section, key, value):
    with pytest.raises(ValueError, match=key):
        config_from_dict({section: {key: value}})


@pytest.mark.parametrize("section, key", [
    ('search', 'use_initial_guess'),
    ('search', 'skip_single_size'),
    ('search', 'show_progress_bar'),
    ('output', 'save_results'),
    ('visualization', 'print_lineup'),
    ('visualization', 'verbose_output'),
])
def test_non_boolean_flags(section, key):
    with pytest.raises(ValueError, match=key):
        config_from_dict({section: {key: 'yes please'}})


def test_non_integer_setting_in_file(tmp_path):
    path = _write(tmp_path / "config.yaml", "validation:\n  max_exhaustive_items: eight\n")
    with pytest.raises(ValueError, match="max_exhaustive_items"):
        load_config(path)


def test_create_default_config(tmp_path):
    path = str(tmp_path / "default.yaml")
    create_default_config(path)

    config = load_config(path)
    assert config.problem.treats == DEFAULT_CONFIG['problem']['treats']
    assert config.validation.random_seed == 42
