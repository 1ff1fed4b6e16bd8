from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Mapping

import yaml

from vagrant_dispatch.exceptions import ConfigError

logger = logging.getLogger(__name__)

ENV_PREFIX = "VAGRANT_DISPATCH_"
ENV_CONFIG_FILE = ENV_PREFIX + "CONFIG"
DEFAULT_CONFIG_FILE = os.path.join("~", ".config", "vagrant-dispatch", "config.yaml")
DEFAULT_STATE_DIR = os.path.join("~", ".cache", "vagrant-dispatch", "viewers")

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class DispatchConfig:
    """
    Settings passed explicitly into the locator and the dispatcher.

    Instances are immutable; use ``dataclasses.replace`` to derive a variant.
    """

    vagrant_bin: str = "vagrant"
    up_options: str = ""
    fallback_project_dir: str | None = None
    marker_file: str = "Vagrantfile"
    machines_dir: str = os.path.join(".vagrant", "machines")
    viewer_name: str = "vagrant"
    isolated_viewers: bool = True
    state_dir: str = DEFAULT_STATE_DIR


_FIELDS = {f.name: f for f in dataclasses.fields(DispatchConfig)}


def _to_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    val = str(raw).strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    raise ConfigError(f"Invalid boolean for {name}: {raw!r}")


def _coerce(name: str, raw: Any) -> Any:
    if name == "isolated_viewers":
        return _to_bool(name, raw)
    if raw is None:
        return None if name == "fallback_project_dir" else ""
    if not isinstance(raw, (str, int, float)):
        raise ConfigError(f"Invalid value for {name}: {raw!r}")
    val = str(raw)
    if name in ("fallback_project_dir", "state_dir") and val.strip():
        val = os.path.expanduser(val)
    return val


def read_config_file(path: str | None, environ: Mapping[str, str]) -> dict[str, Any]:
    """
    Load the YAML config file.

    An explicit path (argument or environment) must exist; the default
    location is optional.
    """
    explicit = path or environ.get(ENV_CONFIG_FILE)
    target = os.path.expanduser(explicit or DEFAULT_CONFIG_FILE)

    if not os.path.exists(target):
        if explicit:
            raise ConfigError(f"config file not found: {target!r}")
        logger.debug("No config file at %s", target)
        return {}

    try:
        with open(target, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"cannot read config file {target!r}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {target!r} must contain a mapping")

    unknown = sorted(set(data) - set(_FIELDS), key=str)
    if unknown:
        raise ConfigError(
            f"unknown keys in {target!r}: " + ", ".join(str(k) for k in unknown)
        )
    logger.debug("Loaded config file %s", target)
    return data


def _read_opt(
    name: str,
    cli: Mapping[str, Any],
    from_file: Mapping[str, Any],
    environ: Mapping[str, str],
) -> Any:
    from_cli = cli.get(name)
    if from_cli is not None:
        return from_cli
    if name in from_file:
        return from_file[name]
    from_env = environ.get(ENV_PREFIX + name.upper())
    if from_env is not None:
        return from_env
    return _FIELDS[name].default


def load_config(
    cli: Mapping[str, Any] | None = None,
    config_file: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> DispatchConfig:
    """Resolve settings: CLI option > config file > environment > default."""
    cli = cli or {}
    environ = os.environ if environ is None else environ
    from_file = read_config_file(config_file, environ)

    values = {
        name: _coerce(name, _read_opt(name, cli, from_file, environ))
        for name in _FIELDS
    }
    if not values["vagrant_bin"].strip():
        raise ConfigError("vagrant_bin must not be empty")
    if not values["viewer_name"].strip():
        raise ConfigError("viewer_name must not be empty")
    return DispatchConfig(**values)
