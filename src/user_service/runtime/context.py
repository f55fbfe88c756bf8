from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, replace
from pathlib import Path

from loguru import logger
from pydantic import BaseModel

from src.user_service.runtime.config.config_data import ConfigData
from src.user_service.runtime.config.config_template import (
    load_templated_yaml,
    parse_templated_config,
)
from src.user_service.runtime.config.settings import EnvironmentVariables

PROJECT_ROOT = Path(__file__).resolve().parents[3]

# Used when no config.yaml ships with the code (installed wheel, Lambda zip)
ENVIRONMENT_CONFIG_TEMPLATE = """
config:
  app:
    environment: ${APP_ENVIRONMENT:-development}
  store:
    region: ${AWS_REGION:-us-east-1}
    table_name: ${TABLE_NAME:-users}
    endpoint_url: ${DYNAMODB_ENDPOINT_URL:-}
    conditional_writes: ${STORE_CONDITIONAL_WRITES:-false}
  logging:
    level: ${LOG_LEVEL:-INFO}
    format: ${LOG_FORMAT:-plain}
    file: ${LOG_FILE:-}
"""


@dataclass
class AppContext:
    """Application context containing configuration and other app-wide state."""

    config: ConfigData


def resolve_config_path() -> Path:
    """Locate config.yaml: APP_CONFIG_FILE if set, else the project root."""
    configured = EnvironmentVariables().app_config_file
    return Path(configured) if configured else PROJECT_ROOT / "config.yaml"


def load_default_config() -> ConfigData:
    config_path = resolve_config_path()
    if not config_path.exists():
        logger.warning(
            f"No configuration file at {config_path}; reading settings from the environment"
        )
        return parse_templated_config(ENVIRONMENT_CONFIG_TEMPLATE)
    return load_templated_yaml(config_path)


# Read once per process
_default_context = AppContext(config=load_default_config())


_app_context: ContextVar[AppContext] = ContextVar(
    "app_context", default=_default_context
)


def get_context() -> AppContext:
    """Get the current application context.

    Returns:
        AppContext: The current application context containing configuration.
    """
    return _app_context.get()


def set_context(context: AppContext) -> Token[AppContext]:
    """Set the current application context.

    Args:
        context: AppContext instance to set as current.
    """
    return _app_context.set(context)


def _recursive_model_dump_exclude_unset(model: BaseModel) -> dict:
    """Dump only explicitly set fields, descending into nested models.

    A nested model contributes only the fields that were set on it, so a
    partial override such as ``ConfigData(store=StoreConfig(table_name="x"))``
    leaves the other store fields alone.
    """
    result = {}
    for field_name in model.model_fields_set:
        field_value = getattr(model, field_name)
        if isinstance(field_value, BaseModel):
            result[field_name] = _recursive_model_dump_exclude_unset(field_value)
        else:
            result[field_name] = field_value
    return result


def _recursive_dict_merge(base_dict: dict, override_dict: dict) -> dict:
    """Recursively merge two dictionaries from deepest levels up."""
    result = base_dict.copy()

    for key, value in override_dict.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _recursive_dict_merge(result[key], value)
        else:
            result[key] = value

    return result


def _merge_configs(base_config: ConfigData, override_config: ConfigData) -> ConfigData:
    """Merge the explicitly set parts of ``override_config`` into ``base_config``."""
    base_dict = base_config.model_dump()
    override_dict = _recursive_model_dump_exclude_unset(override_config)
    merged_dict = _recursive_dict_merge(base_dict, override_dict)
    return ConfigData.model_validate(merged_dict)


@contextmanager
def with_context(config_override: ConfigData | None = None):
    """Temporarily override the application configuration.

    Only explicitly set fields of ``config_override`` replace the current
    values; everything else is inherited.

    Example:
        override = ConfigData(store=StoreConfig(conditional_writes=True))
        with with_context(override):
            assert get_config().store.conditional_writes
    """
    if config_override is None:
        yield
        return

    if not isinstance(config_override, ConfigData):
        raise ValueError(
            f"config_override must be ConfigData, or None, got {type(config_override)}"
        )

    merged_config = _merge_configs(get_context().config, config_override)
    token = set_context(replace(get_context(), config=merged_config))
    try:
        yield
    finally:
        _app_context.reset(token)


def set_config(config: ConfigData) -> None:
    """Replace the entire current configuration."""
    set_context(replace(get_context(), config=config))


def get_config() -> ConfigData:
    """Convenience function to get the current configuration."""
    return get_context().config
