"""
Configuration for the query router.

The router itself takes its rule set as a constructor argument; nothing
here is global. This module covers how that rule set gets built at
process start:

    # Built-in customer-support defaults
    rules = load_rule_set()

    # Rules from a JSON file
    rules = load_rule_set(RouterConfig(rules_path="config/rules.json"))

    # Whatever the environment says (QUERY_ROUTER_RULES, QUERY_ROUTER_LOG_LEVEL)
    rules = load_rule_set(RouterConfig.from_env())

Rules files are JSON, either {"rules": [...]} or a bare list:

    {
      "rules": [
        {"name": "aggregation", "kind": "keyword", "keywords": ["average", "total"],
         "target": "structured", "weight": 1.0},
        {"name": "similar-to", "kind": "keyword", "keywords": ["similar to"],
         "target": "retrieval"}
      ]
    }
"""

import json
import os
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, Field, ValidationError, field_validator

from query_router.errors import ConfigurationError
from query_router.models.rule import RuleSet
from query_router.query.default_rules import default_rules

# Load .env from the project root once at import time, so
# RouterConfig.from_env() sees values defined there.
_env_path = Path(__file__).resolve().parent.parent.parent / ".env"
load_dotenv(_env_path)

RULES_PATH_ENV = "QUERY_ROUTER_RULES"
LOG_LEVEL_ENV = "QUERY_ROUTER_LOG_LEVEL"

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class RouterConfig(BaseModel):
    """
    Process-level router configuration.

    rules_path is optional: without it the built-in customer-support
    rules are used. log_level only matters to entry points that set up
    a log sink (the CLI); the library never configures logging itself.
    """

    rules_path: Optional[str] = Field(
        default=None,
        description="Path to a JSON rules file. None = built-in default rules",
    )
    log_level: str = Field(
        default="WARNING",
        description="Log level for entry points that configure a sink",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, level: str) -> str:
        level = level.upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}, got '{level}'")
        return level

    @classmethod
    def from_env(cls) -> "RouterConfig":
        """Build a config from QUERY_ROUTER_* environment variables."""
        values = {}
        if os.getenv(RULES_PATH_ENV):
            values["rules_path"] = os.environ[RULES_PATH_ENV]
        if os.getenv(LOG_LEVEL_ENV):
            values["log_level"] = os.environ[LOG_LEVEL_ENV]
        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid router configuration: {e}") from e


def load_rules(path: Union[str, Path]) -> RuleSet:
    """
    Load and validate a rule set from a JSON file.

    Args:
        path: JSON file holding {"rules": [...]} or a bare list of rules.

    Returns:
        A validated, immutable RuleSet.

    Raises:
        ConfigurationError: File missing/unreadable, invalid JSON, or
            rules that fail validation (empty set, duplicate names, bad regex...).
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigurationError(f"Cannot read rules file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Rules file {path} is not valid JSON: {e}") from e

    if isinstance(raw, list):
        raw = {"rules": raw}
    if not isinstance(raw, dict) or "rules" not in raw:
        raise ConfigurationError(f"Rules file {path} must contain a 'rules' list")

    try:
        rule_set = RuleSet.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid rules in {path}: {e}") from e

    logger.info(f"Loaded {len(rule_set)} routing rules from {path}")
    return rule_set


def load_rule_set(config: Optional[RouterConfig] = None) -> RuleSet:
    """
    Build the process-wide rule set.

    Args:
        config: Router config. Defaults to RouterConfig() (built-in rules).

    Returns:
        Rules from config.rules_path if set, otherwise the built-in defaults.
    """
    config = config or RouterConfig()
    if config.rules_path:
        return load_rules(config.rules_path)

    rule_set = default_rules()
    logger.info(f"Using {len(rule_set)} built-in routing rules")
    return rule_set
