"""Config loader: reads YAML, applies environment overrides."""

from __future__ import annotations

import os
from pathlib import Path

import yaml

from oracle_core.config.schema import AppConfig

# (section, key) -> env var names, first match wins
_ENV_OVERRIDES: dict[tuple[str, str], tuple[str, ...]] = {
    ("server", "port"): ("ORACLE_PORT", "PORT"),
    ("rate_limit", "quota"): ("ORACLE_RATE_LIMIT", "RATE_LIMIT"),
    ("attestation", "contract_address"): ("ORACLE_CONTRACT_ADDRESS", "CONTRACT_ADDRESS"),
    ("providers", "etherscan_api_key"): ("ORACLE_ETHERSCAN_API_KEY",),
    ("logging", "level"): ("ORACLE_LOG_LEVEL",),
    ("logging", "format"): ("ORACLE_LOG_FORMAT",),
}


def _env_value(names: tuple[str, ...]) -> str | None:
    for name in names:
        value = os.environ.get(name)
        if value:
            return value
    return None


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load config from a YAML file, then apply env var overrides.

    If *path* is None or the file doesn't exist, returns defaults.

    Environment variable overrides:
        ORACLE_PORT / PORT                          -> server.port
        ORACLE_RATE_LIMIT / RATE_LIMIT              -> rate_limit.quota
        ORACLE_CONTRACT_ADDRESS / CONTRACT_ADDRESS  -> attestation.contract_address
        ORACLE_ETHERSCAN_API_KEY                    -> providers.etherscan_api_key
        ORACLE_LOG_LEVEL                            -> logging.level
        ORACLE_LOG_FORMAT                           -> logging.format
    """
    data: dict = {}
    if path is not None:
        p = Path(path)
        if p.exists():
            with open(p) as f:
                data = yaml.safe_load(f) or {}

    for (section, key), names in _ENV_OVERRIDES.items():
        value = _env_value(names)
        if value is not None:
            data.setdefault(section, {})[key] = value

    return AppConfig.model_validate(data)
