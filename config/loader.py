"""YAML configuration loader for the model catalog and session defaults."""

import logging
import os
import yaml
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Any, Tuple

from selector import CatalogError, ModelProfile, PriorityWeights, DEFAULT_PRESETS

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "PROMPT_ROUTER_CONFIG"
DEFAULT_CONFIG_PATH = Path(__file__).parent / "router.yaml"


@dataclass(frozen=True)
class RouterDefaults:
    """Initial session values."""
    prompt: str = "Write a friendly product description for a wireless charger."
    input_tokens: int = 40
    max_tokens: int = 120
    rules_name: str = "Default Rule Set"
    weights: PriorityWeights = field(default_factory=PriorityWeights)
    history_capacity: int = 50
    latency_jitter: float = 0.15
    max_output_tokens: int = 2000


class ConfigLoader:
    def __init__(self, config_path: Optional[str] = None):
        if config_path:
            self.config_path = Path(config_path)
        elif os.getenv(CONFIG_ENV_VAR):
            self.config_path = Path(os.environ[CONFIG_ENV_VAR])
        else:
            self.config_path = DEFAULT_CONFIG_PATH

        self._config: Dict[str, Any] = {}
        self._catalog: Tuple[ModelProfile, ...] = ()
        self._defaults = RouterDefaults()
        self._presets: Dict[str, PriorityWeights] = dict(DEFAULT_PRESETS)

    def load(self) -> "ConfigLoader":
        if not self.config_path.exists():
            raise FileNotFoundError(f"No router config at {self.config_path}")

        with open(self.config_path, 'r') as f:
            self._config = yaml.safe_load(f) or {}

        self._parse_catalog()
        self._parse_defaults()
        self._parse_presets()

        return self

    def _parse_catalog(self) -> None:
        models = []
        seen = set()
        for entry in self._config.get('models') or []:
            try:
                model = ModelProfile.from_dict(entry)
            except (TypeError, ValueError) as e:
                raise CatalogError(f"Invalid model entry in {self.config_path}: {e}") from e
            if model.id in seen:
                raise CatalogError(f"Duplicate model id '{model.id}' in {self.config_path}")
            seen.add(model.id)
            models.append(model)

        if not models:
            raise CatalogError(f"No models defined in {self.config_path}")

        self._catalog = tuple(models)
        logger.info("[config] Loaded %d models from %s", len(models), self.config_path)

    def _parse_defaults(self) -> None:
        data = self._config.get('defaults') or {}
        base = RouterDefaults()

        weights = base.weights
        if 'priority' in data:
            weights = PriorityWeights.from_dict(data['priority'])

        self._defaults = RouterDefaults(
            prompt=str(data.get('prompt', base.prompt)),
            input_tokens=int(data.get('input_tokens', base.input_tokens)),
            max_tokens=int(data.get('max_tokens', base.max_tokens)),
            rules_name=str(data.get('rules_name', base.rules_name)),
            weights=weights,
            history_capacity=int(data.get('history_capacity', base.history_capacity)),
            latency_jitter=float(data.get('latency_jitter', base.latency_jitter)),
            max_output_tokens=int(data.get('max_output_tokens', base.max_output_tokens)),
        )

        if self._defaults.history_capacity < 1:
            raise ValueError("history_capacity must be at least 1")

    def _parse_presets(self) -> None:
        for name, priority in (self._config.get('presets') or {}).items():
            self._presets[name] = PriorityWeights.from_dict(priority)

    def get_catalog(self) -> Tuple[ModelProfile, ...]:
        if not self._catalog:
            raise CatalogError("Catalog not loaded; call load() first")
        return self._catalog

    def get_defaults(self) -> RouterDefaults:
        return self._defaults

    def get_presets(self) -> Dict[str, PriorityWeights]:
        return dict(self._presets)


def load_config(config_path: Optional[str] = None) -> ConfigLoader:
    return ConfigLoader(config_path).load()
