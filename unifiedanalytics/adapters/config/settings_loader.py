import os
import yaml
from unifiedanalytics.core.domain.settings import AnalyticsSettings

# Env var -> settings field. Env vars take precedence over the file.
ENV_OVERRIDES = {
    "UA_CURRENT_WINDOW": "current_window",
    "UA_FORECAST_WINDOW": "forecast_window",
    "UA_INCLUDE_PREDICTIONS": "include_predictions",
    "UA_TIME_RANGE": "time_range",
    "UA_FILTER_POLICY": "filter_policy",
    "UA_CACHE_SIZE": "cache_size",
    "UA_LOG_LEVEL": "log_level",
}


def load_settings(path: str | None = None) -> AnalyticsSettings:
    """
    Load analytics settings from a YAML file.
    Falls back to environment variables if file doesn't exist or is not provided.

    Args:
        path: Path to the settings file. Defaults to UA_CONFIG_FILE env var or "analytics.yaml".
    """
    if path is None:
        path = os.getenv("UA_CONFIG_FILE", "analytics.yaml")

    config_data = {}

    if os.path.exists(path):
        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except Exception as e:
            raise RuntimeError(f"Failed to load configuration from {path}: {e}")

        if not isinstance(config_data, dict):
            raise RuntimeError(f"Failed to load configuration from {path}: expected a mapping")

    # Env vars > File > Defaults
    for env_name, field_name in ENV_OVERRIDES.items():
        if os.getenv(env_name):
            config_data[field_name] = os.getenv(env_name)

    return AnalyticsSettings(**config_data)
