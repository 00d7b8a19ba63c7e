"""YAML config loading with env var expansion.

String values may reference the environment as ``${VAR}`` or
``${VAR:-default}``. A reference to an unset variable with no default is
an error, so a missing ``DISK_CAPACITY`` never turns into an empty size.
"""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import ReclaimConfig

_ENV_REF = re.compile(r"\$\{(\w+)(?::-([^}]*))?\}")


def load_config(cli_path: str | None = None) -> ReclaimConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./reclaim.yaml"),
        Path.home() / ".reclaim" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                raw = _expand_env_vars(raw)
                return ReclaimConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except KeyError as e:
                raise ValueError(
                    f"Invalid config in {path}: environment variable {e.args[0]} is not set"
                ) from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return ReclaimConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} and ${VAR:-default} references in strings.

    Raises KeyError for an unset variable that has no default.
    """
    if isinstance(obj, str):
        return _ENV_REF.sub(_lookup, obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    return obj


def _lookup(m: re.Match) -> str:
    name, default = m.group(1), m.group(2)
    value = os.environ.get(name)
    if value is None:
        if default is None:
            raise KeyError(name)
        return default
    return value


# Default YAML template for `reclaim config init`
DEFAULT_CONFIG_TEMPLATE = """\
# reclaim.yaml

# Disk being cleaned up (bytes). Values may read the environment
# as ${VAR} or ${VAR:-default}.
disk:
  capacity: ${RECLAIM_DISK_CAPACITY:-70000000}
  required_free: 30000000     # must not exceed capacity

# Transcript parsing
parser:
  max_depth: null             # deepest allowed nesting; null = unlimited

# Reports
report:
  small_dir_limit: 100000     # `reclaim sizes` totals directories up to this size

# Logging
log_level: "info"             # debug | info | warn | error
log_format: "text"            # text | json
"""
