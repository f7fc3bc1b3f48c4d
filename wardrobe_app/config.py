"""Configuration helpers for the wardrobe recommendation engine."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

from logic.contextual_filtering import FilterConfig
from logic.outfit_builder import ComposerConfig
from logic.wear_analytics import AnalyticsConfig
from logic.weekly_planner import PlannerConfig

DEFAULT_DB_PATH = "data/wardrobe.db"


@dataclass
class EngineConfig:
    """Configuration values for the engine and its collaborators.

    Numeric thresholds are plain fields so that tests and callers can tune them
    without code edits; the ``*_config`` helpers hand each component its own
    frozen settings object.
    """

    wardrobe_db_path: str = DEFAULT_DB_PATH
    weather_api_key: Optional[str] = None
    default_city: Optional[str] = None
    default_country: Optional[str] = None
    rarely_worn_days: int = 30
    frequently_worn_threshold: int = 4
    min_pool_size: int = 3
    planner_min_outfits: int = 7
    top_n: int = 5
    random_seed: Optional[int] = None
    environment: str | None = None

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that secrets can be
        injected by the runtime environment.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("WARDROBE_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        def get_int(key: str, default: Optional[int]) -> Optional[int]:
            raw = get_value(key)
            if raw is None or str(raw).strip() == "":
                return default
            try:
                return int(raw)
            except ValueError as exc:
                raise ValueError(f"Config value '{key}' must be an integer, got {raw!r}") from exc

        defaults = cls()
        return cls(
            wardrobe_db_path=str(get_value("wardrobe_db_path", DEFAULT_DB_PATH) or DEFAULT_DB_PATH),
            weather_api_key=get_value("openweather_api_key"),
            default_city=get_value("default_city"),
            default_country=get_value("default_country"),
            rarely_worn_days=get_int("rarely_worn_days", defaults.rarely_worn_days),
            frequently_worn_threshold=get_int("frequently_worn_threshold", defaults.frequently_worn_threshold),
            min_pool_size=get_int("min_pool_size", defaults.min_pool_size),
            planner_min_outfits=get_int("planner_min_outfits", defaults.planner_min_outfits),
            top_n=get_int("top_n", defaults.top_n),
            random_seed=get_int("random_seed", None),
            environment=env_name,
        )

    def filter_config(self) -> FilterConfig:
        return FilterConfig(min_pool_size=self.min_pool_size)

    def composer_config(self) -> ComposerConfig:
        return ComposerConfig()

    def analytics_config(self) -> AnalyticsConfig:
        return AnalyticsConfig(
            rarely_worn_days=self.rarely_worn_days,
            frequently_worn_threshold=self.frequently_worn_threshold,
            most_worn_limit=self.top_n,
            suggestion_limit=self.top_n,
        )

    def planner_config(self) -> PlannerConfig:
        return PlannerConfig(min_outfits=self.planner_min_outfits)

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config
