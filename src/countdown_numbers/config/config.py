import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS = Path(__file__).with_name('settings.yaml')


@dataclass
class GameRules:
    large_numbers: List[int] = field(default_factory=lambda: [25, 50, 75, 100])
    small_numbers: List[int] = field(default_factory=lambda: list(range(1, 11)))
    num_large: int = 2
    num_small: int = 4
    target_min: int = 100
    target_max: int = 999
    default_target: int = 784
    default_numbers: List[int] = field(default_factory=lambda: [100, 50, 9, 5, 2, 4])


class Config:
    def __init__(self, require_token: bool = True):
        self.discord_token = os.getenv('DISCORD_TOKEN')
        self.command_prefix = os.getenv('COMMAND_PREFIX', '!')
        self.solve_timeout = float(os.getenv('SOLVE_TIMEOUT', 60))
        self.max_solutions_shown = int(os.getenv('MAX_SOLUTIONS_SHOWN', 25))
        self.settings_path = Path(os.getenv('COUNTDOWN_SETTINGS', DEFAULT_SETTINGS))
        self.rules = self._load_rules()

        if require_token and not self.discord_token:
            raise ValueError("Missing required environment variables")

    def _load_rules(self) -> GameRules:
        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("YAML parsing error in %s: %s", self.settings_path, e)
            raise
        except OSError as e:
            raise ValueError(f"Failed to load settings: {e}") from e

        if not data:
            logger.warning("Empty settings file %s, using default rules", self.settings_path)
            return GameRules()

        if not isinstance(data, dict):
            raise ValueError(f"Invalid settings in {self.settings_path}: expected a mapping")
        rules_data = data.get('rules') or {}
        if not isinstance(rules_data, dict):
            raise ValueError("Invalid rules: expected a mapping")

        try:
            rules = GameRules(**rules_data)
        except TypeError as e:
            raise ValueError(f"Invalid rules: {e}") from e

        if rules.num_large > len(rules.large_numbers):
            raise ValueError("num_large is larger than the pool of large numbers")
        if rules.target_min > rules.target_max:
            raise ValueError("target_min is larger than target_max")
        return rules
