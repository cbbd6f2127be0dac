import os
import re
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from webdriver_client.config.config import ClientConfig

CONFIG_FILENAME = "webdriver.yaml"
CONFIG_ENV_VAR = "WEBDRIVER_CONFIG"
ENV_VAR_PATTERN = re.compile(r"\$\{(\w+)}")

# Environment variables that take precedence over the file, mapped to config keys.
ENV_OVERRIDES = {
    "SELENIUM_HOST": "host",
    "SELENIUM_PORT": "port",
    "SELENIUM_BROWSER": "browser",
}


def find_config_path() -> str:
    """Find the most appropriate webdriver.yaml path.

    Order of precedence:
    1. WEBDRIVER_CONFIG environment variable (must point at an existing file)
    2. ./webdriver.yaml in the current working directory
    3. webdriver.yaml in any parent of the current working directory

    Raises FileNotFoundError if no config file is found.
    """
    from_env = os.getenv(CONFIG_ENV_VAR)
    if from_env:
        if Path(from_env).is_file():
            return from_env
        raise FileNotFoundError(f"{CONFIG_ENV_VAR} is set but file not found: {from_env}")

    cwd = Path.cwd()
    for directory in (cwd, *cwd.parents):
        found = directory / CONFIG_FILENAME
        if found.is_file():
            return str(found)

    raise FileNotFoundError(
        f"{CONFIG_FILENAME} not found. Set {CONFIG_ENV_VAR}, or place {CONFIG_FILENAME} in the current working "
        "directory or a parent directory."
    )


def load(config_path: Optional[str] = None) -> ClientConfig:
    file = _find_config(config_path)
    data = _read_config(file)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Parsed config file {file} does not contain a mapping")

    return _map_to_domain(_apply_env_overrides(data))


def load_or_default(config_path: Optional[str] = None) -> ClientConfig:
    """Like `load`, but fall back to defaults (plus env overrides) when no file exists."""
    try:
        return load(config_path)
    except FileNotFoundError:
        if config_path:
            raise
        return _map_to_domain(_apply_env_overrides({}))


def _read_config(file: Path) -> Any:
    content = file.read_text()

    def substitute(match: re.Match) -> str:
        return os.getenv(match.group(1), match.group(0))

    content = ENV_VAR_PATTERN.sub(substitute, content)

    return yaml.safe_load(content)


def _find_config(config_path: str | None) -> Path:
    load_dotenv()

    if config_path:
        path = Path(config_path)
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return path
    return Path(find_config_path())


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    load_dotenv()
    merged = dict(data)
    for env_var, key in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            merged[key] = value
    return merged


def _map_to_domain(data: dict[str, Any]) -> ClientConfig:
    capabilities = data.get('capabilities') or {}
    if not isinstance(capabilities, dict):
        raise ValueError(f"capabilities must be a mapping, got: {type(capabilities).__name__}")

    timeout = data.get('timeout')

    return ClientConfig(
        host=str(data.get('host', 'localhost')),
        port=int(data.get('port', 4444)),
        browser=str(data.get('browser', 'firefox')),
        capabilities=dict(capabilities),
        timeout=float(timeout) if timeout is not None else None,
        server_wait=float(data.get('server_wait', 60)),
        verbose=bool(data.get('verbose', False)),
        log_level=str(data.get('log_level', 'INFO')),
        start_url=data.get('start_url'),
    )
