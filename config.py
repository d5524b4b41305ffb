#!/usr/bin/env python3
"""
Configuration Management for Treat Lineup Optimization

This module provides structured configuration loading, validation,
and management for the lineup optimizer. It handles the treats to
hand out, search settings, output paths, and validation parameters.

Features:
- YAML-based configuration with comprehensive validation
- Optional sections fall back to defaults
- Treats may come from the config or from the command line
- Clear error messages for configuration issues

"""

import yaml
import os
from typing import List, Optional
from dataclasses import dataclass, field


@dataclass
class ProblemConfig:
    """The treats to hand out."""
    treats: List[int] = field(default_factory=list)


@dataclass
class SearchConfig:
    """Branch-and-bound search settings."""
    use_initial_guess: bool = True
    skip_single_size: bool = True
    show_progress_bar: bool = False
    progress_interval: int = 10000


@dataclass
class OutputConfig:
    """Result file settings."""
    results_folder: str = "output/results"
    save_results: bool = False


@dataclass
class VisualizationConfig:
    """Visualization and display settings."""
    print_lineup: bool = True
    verbose_output: bool = False


@dataclass
class ValidationConfig:
    """Settings for the validation suite."""
    max_exhaustive_items: int = 8
    n_random_tests: int = 25
    random_seed: int = 42


@dataclass
class Config:
    """Complete configuration container."""
    problem: ProblemConfig = field(default_factory=ProblemConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    visualization: VisualizationConfig = field(default_factory=VisualizationConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    # Internal tracking
    _config_path: Optional[str] = None


DEFAULT_CONFIG = {
    'problem': {
        'treats': [1, 1, 1, 1, 1, 2, 2, 3]
    },
    'search': {
        'use_initial_guess': True,
        'skip_single_size': True,
        'show_progress_bar': False,
        'progress_interval': 10000
    },
    'output': {
        'results_folder': 'output/results',
        'save_results': False
    },
    'visualization': {
        'print_lineup': True,
        'verbose_output': False
    },
    'validation': {
        'max_exhaustive_items': 8,
        'n_random_tests': 25,
        'random_seed': 42
    }
}

SECTIONS = {
    'problem': ProblemConfig,
    'search': SearchConfig,
    'output': OutputConfig,
    'visualization': VisualizationConfig,
    'validation': ValidationConfig,
}


def config_from_dict(raw_config: dict, config_path: Optional[str] = None) -> Config:
    """
    Build and validate a Config from a parsed YAML mapping.

    Args:
        raw_config: Mapping of section name to section settings
        config_path: Source file, kept for summaries

    Returns:
        Validated Config object

    Raises:
        ValueError: If a section is malformed or validation fails
    """
    if not isinstance(raw_config, dict):
        raise ValueError("Configuration must be a mapping of sections")

    unknown_sections = [name for name in raw_config if name not in SECTIONS]
    if unknown_sections:
        raise ValueError(f"Unknown configuration sections: {unknown_sections}")

    sections = {}
    for name, section_class in SECTIONS.items():
        section_config = raw_config.get(name) or {}
        if not isinstance(section_config, dict):
            raise ValueError(f"Error parsing {name} configuration: expected a mapping")
        try:
            sections[name] = section_class(**section_config)
        except TypeError as e:
            raise ValueError(f"Error parsing {name} configuration: {e}")

    config = Config(**sections, _config_path=config_path)
    validate_config(config)

    return config


def load_config(config_path: str = "config.yaml") -> Config:
    """
    Load and validate configuration from YAML file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        Validated Config object with all settings

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If configuration is invalid
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r') as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML configuration: {e}")

    if not raw_config:
        raise ValueError("Configuration file is empty")

    return config_from_dict(raw_config, config_path)


def default_config() -> Config:
    """Configuration with every setting at its default value."""
    return config_from_dict(DEFAULT_CONFIG)


def validate_treats(treats: List[int], name: str = "treats") -> None:
    """
    Check that treats is a list of positive integers.

    Raises:
        ValueError: If any entry is not a positive integer
    """
    if not isinstance(treats, list):
        raise ValueError(f"{name} must be a list of positive integers, got {treats!r}")

    # bool is an int subclass; reject it explicitly
    invalid = [t for t in treats if isinstance(t, bool) or not isinstance(t, int) or t < 1]
    if invalid:
        raise ValueError(f"{name} must hold positive integers (invalid: {invalid})")


def validate_config(config: Config) -> None:
    """
    Perform comprehensive validation of configuration.

    Args:
        config: Configuration object to validate

    Raises:
        ValueError: If any validation check fails
    """
    validate_treats(config.problem.treats, "problem.treats")

    flags = [
        ('search.use_initial_guess', config.search.use_initial_guess),
        ('search.skip_single_size', config.search.skip_single_size),
        ('search.show_progress_bar', config.search.show_progress_bar),
        ('output.save_results', config.output.save_results),
        ('visualization.print_lineup', config.visualization.print_lineup),
        ('visualization.verbose_output', config.visualization.verbose_output),
    ]
    for name, value in flags:
        if not isinstance(value, bool):
            raise ValueError(f"{name} must be true or false (got {value!r})")

    integers = [
        ('search.progress_interval', config.search.progress_interval),
        ('validation.max_exhaustive_items', config.validation.max_exhaustive_items),
        ('validation.n_random_tests', config.validation.n_random_tests),
        ('validation.random_seed', config.validation.random_seed),
    ]
    for name, value in integers:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{name} must be an integer (got {value!r})")

    if config.search.progress_interval <= 0:
        raise ValueError("search.progress_interval must be a positive integer")

    if not isinstance(config.output.results_folder, str) or not config.output.results_folder:
        raise ValueError("output.results_folder cannot be empty")

    if not 1 <= config.validation.max_exhaustive_items <= 10:
        raise ValueError(
            f"validation.max_exhaustive_items must be between 1 and 10 "
            f"(got {config.validation.max_exhaustive_items})"
        )

    if config.validation.n_random_tests < 0:
        raise ValueError("validation.n_random_tests cannot be negative")


def print_config_summary(config: Config) -> None:
    """Print human-readable configuration summary."""
    print(f"\nConfiguration Summary:")
    print(f"  Config file: {config._config_path or '(defaults)'}")
    if config.problem.treats:
        print(f"  Treats ({len(config.problem.treats)}): {config.problem.treats}")
    print(f"  Search: initial_guess={config.search.use_initial_guess}, "
          f"single_size_shortcut={config.search.skip_single_size}, "
          f"progress_bar={config.search.show_progress_bar}")
    print(f"  Output: folder={config.output.results_folder}, save={config.output.save_results}")
    print(f"  Visualization: lineup={config.visualization.print_lineup}, "
          f"verbose={config.visualization.verbose_output}")


def create_default_config(output_path: str = "config.yaml") -> None:
    """
    Create a default configuration file with common settings.

    Args:
        output_path: Path where to save the default config
    """
    with open(output_path, 'w') as f:
        yaml.dump(DEFAULT_CONFIG, f, default_flow_style=False, indent=2, sort_keys=False)

    print(f"Default configuration saved to: {output_path}")


if __name__ == "__main__":
    print("Configuration Management for Treat Lineup Optimization")

    try:
        if not os.path.exists("config.yaml"):
            print("Creating default configuration...")
            create_default_config()

        print("Loading configuration...")
        config = load_config()

        print_config_summary(config)

        print(f"\nConfiguration validation successful!")

    except (ValueError, FileNotFoundError) as e:
        print(f"Configuration error: {e}")
        print(f"\nTo create a default configuration, delete config.yaml and run this script again.")
