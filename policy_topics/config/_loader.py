"""
Cached YAML defaults for the settings classes.

Every settings section reads its defaults from a file under configs/
(configs/config.yaml for core sections, configs/features/*.yaml for the
analytics stages). Environment variables still take precedence; the YAML
only supplies default_factory values.

Set POLICY_TOPICS_CONFIG_DIR to read the YAML files from another
directory, e.g. a per-study copy of configs/.

Usage:
    from policy_topics.config._loader import load_yaml_section

    core = load_yaml_section("config.yaml")
    lda = load_yaml_section("features/topic_modeling.yaml", "topic_modeling")
    k = lda.get("model", {}).get("num_topics", 2)
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

CONFIG_DIR_ENV = "POLICY_TOPICS_CONFIG_DIR"


def _get_configs_dir() -> Path:
    """configs/ at the project root unless POLICY_TOPICS_CONFIG_DIR is set."""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path(__file__).parent.parent.parent / "configs"


@lru_cache(maxsize=16)
def _load(config_path: Path, section: str | None) -> dict[str, Any]:
    if not config_path.exists():
        return {}

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return (data.get(section) or {}) if section else data


def load_yaml_section(config_file: str, section: str | None = None) -> dict[str, Any]:
    """
    Load one YAML file (or one top-level section of it) from the configs dir.

    Args:
        config_file: Path relative to the configs directory
            (e.g. "config.yaml" or "features/sentiment.yaml")
        section: Optional top-level key to extract (e.g. "sentiment")

    Returns:
        Configuration dictionary; empty when the file or section is missing
        or the section is null

    Note:
        Results are cached per resolved path. Use clear_config_cache() after
        editing a file or changing POLICY_TOPICS_CONFIG_DIR.
    """
    return _load(_get_configs_dir() / config_file, section)


def clear_config_cache() -> None:
    """Forget cached YAML so the next settings object re-reads the files."""
    _load.cache_clear()
