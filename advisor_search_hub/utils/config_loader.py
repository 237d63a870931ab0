"""Rule document loading utilities.

Filter rules live in a JSON document rather than in code so they can be
changed without a release. The bundled document is used unless a path is
configured.
"""

import json
import logging
from functools import cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..models.rules import RuleSet
from .errors import InvalidConfigurationError, MissingConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_RULES_RESOURCE = "rules/default_rules.json"


class ConfigLoader:
    """Helpers for turning rule documents into validated rule sets."""

    @staticmethod
    def read_json(
        path: Path, config_key: str = "rules_file", label: str = "Rule file"
    ) -> dict[str, Any]:
        """Read a JSON object from disk.

        Args:
            path: File to read
            config_key: Setting or argument the file came from, for errors
            label: How the file is named in error messages
        """
        if not path.exists():
            raise MissingConfigurationError(
                config_key, message=f"{label} '{path}' does not exist"
            )
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidConfigurationError(
                config_key, path, message=f"{label} '{path}' is not valid JSON: {e}"
            ) from e

        if not isinstance(data, dict):
            raise InvalidConfigurationError(
                config_key, path, message=f"{label} '{path}' must hold a JSON object"
            )
        return data

    @staticmethod
    def build_rule_set(data: dict[str, Any], source: str = "<memory>") -> RuleSet:
        """Validate a rule document."""
        try:
            return RuleSet.model_validate(data)
        except ValidationError as e:
            raise InvalidConfigurationError(
                "rules_file",
                source,
                message=f"Invalid rule document {source}: {e.error_count()} error(s)",
                details={"errors": e.errors(include_url=False)},
                original_error=e,
            ) from e


@cache
def load_default_rules() -> RuleSet:
    """Load the rule document bundled with the package."""
    resource = resources.files("advisor_search_hub").joinpath(DEFAULT_RULES_RESOURCE)
    data = json.loads(resource.read_text(encoding="utf-8"))
    return ConfigLoader.build_rule_set(data, source=DEFAULT_RULES_RESOURCE)


def load_rule_set(path: Path | str | None = None) -> RuleSet:
    """Load a rule set from ``path``, or the bundled rules when ``path`` is None."""
    if path is None:
        return load_default_rules()

    path = Path(path)
    rule_set = ConfigLoader.build_rule_set(ConfigLoader.read_json(path), str(path))
    logger.info(f"Loaded {len(rule_set.rules)} filter rules from {path}")
    return rule_set
