# state_service/common/typed_config/reader.py
#
# TypedConfigReader - typed config reader, plus YAML file loading.

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

import yaml

from state_service.common.errors import ConfigParseError
from state_service.common.typed_config.models import ServiceConfig

SECTION = "state_service"


class TypedConfigReader:
    """Typed config reader.

    Calls from_dict() every time, so the latest values are always returned.
    The section dict is copied before parsing (guards against concurrent edits).

    Usage:
        reader = TypedConfigReader(config_dict)
        service_config = reader.get_service()  # ServiceConfig
    """

    def __init__(self, config_dict: dict[str, Any]) -> None:
        """Keep a reference to the config dict (no copy).

        Args:
            config_dict: Application config dict
        """
        self._config = config_dict

    def get_service(self) -> ServiceConfig:
        """Get the state service config.

        Returns:
            ServiceConfig instance (frozen)
        """
        raw = self._config.get(SECTION)
        snapshot = dict(raw) if isinstance(raw, dict) else {}
        return ServiceConfig.from_dict(snapshot)


def _load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML with line number preservation for syntax errors."""
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        line = None
        column = None
        if hasattr(e, "problem_mark") and e.problem_mark is not None:
            line = e.problem_mark.line + 1  # 0-indexed -> 1-indexed
            column = e.problem_mark.column + 1
        raise ConfigParseError(
            f"{path}: YAML syntax error: {e}",
            line=line,
            column=column,
            user_message="Config file has a YAML syntax error",
            context={"path": str(path)},
        ) from e

    if data is None:
        raise ConfigParseError(
            f"{path}: YAML file is empty",
            user_message="Config file is empty",
            context={"path": str(path)},
        )
    if not isinstance(data, dict):
        raise ConfigParseError(
            f"{path}: top level must be a mapping, got {type(data).__name__}",
            user_message="Config file must contain a mapping at the top level",
            context={"path": str(path)},
        )
    return cast(dict[str, Any], data)


def load_config(path: str | Path) -> ServiceConfig:
    """Load ServiceConfig from the ``state_service`` section of a YAML file.

    A missing file yields the defaults.

    Raises:
        ConfigParseError: If the file is empty, is not a mapping, or has a
            syntax error (line/column attached when available).
    """
    path = Path(path)
    if not path.exists():
        return ServiceConfig()
    return TypedConfigReader(_load_yaml(path)).get_service()
