from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from platformdirs import user_config_dir

from helm_cleaner.errors import ConfigError

_APP_NAME = "helm-cleaner"

DEFAULT_HELM_BIN = "helm"
DEFAULT_OWNER_SELECTOR = "owner=helm"
DEFAULT_NAME_LABEL = "name"


def default_config_path(env: Mapping[str, str] | None = None) -> Path:
    env = os.environ if env is None else env
    override = env.get("HELM_CLEANER_CONFIG")
    if override:
        return Path(override).expanduser()
    return Path(user_config_dir(_APP_NAME)) / "config.json"


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        obj = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e
    if not isinstance(obj, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return obj


def _env_flag(value: str | None) -> bool | None:
    if value is None:
        return None
    return value.strip().lower() in ("1", "true", "yes", "on")


def _file_flag(value: Any) -> bool:
    # JSON may carry the flag as a bool, a number or a string like "false".
    if isinstance(value, str):
        return bool(_env_flag(value))
    return bool(value)


@dataclass(frozen=True)
class Settings:
    """
    Everything the commands need besides their own arguments.
    Built once in cli.main and passed down explicitly.
    """

    helm_bin: str = DEFAULT_HELM_BIN
    kubeconfig: str | None = None
    context: str | None = None
    owner_selector: str = DEFAULT_OWNER_SELECTOR
    name_label: str = DEFAULT_NAME_LABEL
    verbose: bool = False

    @staticmethod
    def load(
        *,
        kubeconfig: str | None = None,
        context: str | None = None,
        verbose: bool = False,
        env: Mapping[str, str] | None = None,
        config_path: Path | None = None,
    ) -> "Settings":
        """
        Precedence: CLI flag > environment variable > config file > default.
        A missing config file is fine; a broken one raises ConfigError.
        """
        env = os.environ if env is None else env
        file_cfg = _read_config_file(config_path or default_config_path(env))

        def pick(flag, env_key: str, file_key: str, default):
            if flag:
                return flag
            if env.get(env_key):
                return env[env_key]
            if file_cfg.get(file_key) is not None:
                return file_cfg[file_key]
            return default

        env_verbose = _env_flag(env.get("HELM_CLEANER_VERBOSE"))
        if verbose:
            resolved_verbose = True
        elif env_verbose is not None:
            resolved_verbose = env_verbose
        else:
            resolved_verbose = _file_flag(file_cfg.get("verbose"))

        return Settings(
            helm_bin=str(pick(None, "HELM_CLEANER_HELM_BIN", "helmBin", DEFAULT_HELM_BIN)),
            kubeconfig=pick(kubeconfig, "HELM_CLEANER_KUBECONFIG", "kubeconfig", None),
            context=pick(context, "HELM_CLEANER_CONTEXT", "context", None),
            owner_selector=str(
                pick(None, "HELM_CLEANER_OWNER_SELECTOR", "ownerSelector", DEFAULT_OWNER_SELECTOR)
            ),
            name_label=str(pick(None, "HELM_CLEANER_NAME_LABEL", "nameLabel", DEFAULT_NAME_LABEL)),
            verbose=resolved_verbose,
        )
