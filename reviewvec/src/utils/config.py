"""
Configuration management for ReviewVec.

This module provides centralized configuration handling for dataset paths,
vocabulary size, training hyperparameters and logging.
"""

import os
import copy
from pathlib import Path
from typing import Dict, Any, Optional
import json
import logging
from dotenv import load_dotenv

# Setup logging
logger = logging.getLogger(__name__)

# Load environment variables from .env file
load_dotenv()


def default_config_path() -> str:
    return os.getenv("REVIEWVEC_CONFIG", str(Path.home() / ".reviewvec" / "config.json"))


class Config:
    """Configuration manager for ReviewVec."""

    # Default configuration
    _defaults = {
        "vocabulary_size": 10000,
        "models_dir": "./trained_models",
        "data": {
            "imdb_path": "./data/imdb.npz",
            "word_index_path": "./data/imdb_word_index.json",
            "num_validation": 10000,
            "seed": 113
        },
        "training": {
            "epochs": 20,
            "batch_size": 512,
            "learning_rate": 0.001,
            "hidden_units": 16,
            "optimizer": "rmsprop"
        },
        "logging": {
            "level": "INFO",
            "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        }
    }

    # Instance of the configuration
    _instance = None

    # The actual configuration
    _config = {}

    def __new__(cls):
        """Implement singleton pattern."""
        if cls._instance is None:
            cls._instance = super(Config, cls).__new__(cls)
            cls._instance._load_config()
        return cls._instance

    def _load_config(self):
        """Load configuration from environment and files."""
        # Start with defaults; nested sections must not alias _defaults
        self._config = copy.deepcopy(self._defaults)

        self._load_from_env()

        config_path = default_config_path()
        if os.path.exists(config_path):
            self._load_from_file(config_path)

        self._setup_logging()

    def reload(self) -> None:
        """Re-read defaults, environment and config file."""
        self._load_config()

    def _load_from_env(self):
        """Load configuration from environment variables."""
        if os.getenv("REVIEWVEC_VOCAB_SIZE"):
            self._config["vocabulary_size"] = int(os.getenv("REVIEWVEC_VOCAB_SIZE"))
        if os.getenv("REVIEWVEC_IMDB_PATH"):
            self._config["data"]["imdb_path"] = os.getenv("REVIEWVEC_IMDB_PATH")
        if os.getenv("REVIEWVEC_WORD_INDEX_PATH"):
            self._config["data"]["word_index_path"] = os.getenv("REVIEWVEC_WORD_INDEX_PATH")
        if os.getenv("REVIEWVEC_MODELS_DIR"):
            self._config["models_dir"] = os.getenv("REVIEWVEC_MODELS_DIR")
        if os.getenv("REVIEWVEC_LOG_LEVEL"):
            self._config["logging"]["level"] = os.getenv("REVIEWVEC_LOG_LEVEL").upper()

    def _load_from_file(self, config_path):
        """Load configuration from a JSON file."""
        try:
            with open(config_path, 'r') as f:
                file_config = json.load(f)
                self._deep_merge(self._config, file_config)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to load configuration from {config_path}: {e}")

    def _deep_merge(self, target, source):
        """Deep merge two dictionaries."""
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._deep_merge(target[key], value)
            else:
                target[key] = value

    def _setup_logging(self):
        """Setup logging based on configuration."""
        logging.basicConfig(
            level=getattr(logging, self._config["logging"]["level"], logging.INFO),
            format=self._config["logging"]["format"]
        )

    def get(self, key_path: str, default=None) -> Any:
        """
        Get a configuration value by its key path.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "training.epochs")
            default: Default value to return if the key is not found

        Returns:
            The configuration value or default if not found
        """
        value = self._config

        for key in key_path.split('.'):
            if isinstance(value, dict) and key in value:
                value = value[key]
            else:
                return default

        return value

    def set(self, key_path: str, value: Any) -> None:
        """
        Set a configuration value by its key path.

        Args:
            key_path: Dot-separated path to the configuration value (e.g., "training.epochs")
            value: The value to set
        """
        keys = key_path.split('.')
        config = self._config

        # Navigate to the parent of the target key
        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    def save_to_file(self, config_path: Optional[str] = None) -> bool:
        """
        Save the current configuration to a file.

        Args:
            config_path: Path to save the configuration to. If None, uses default path.

        Returns:
            True if saved successfully, False otherwise
        """
        if not config_path:
            config_path = default_config_path()

        try:
            directory = os.path.dirname(config_path)
            if directory:
                os.makedirs(directory, exist_ok=True)

            with open(config_path, 'w') as f:
                json.dump(self._config, f, indent=2)
            return True
        except OSError as e:
            logger.error(f"Failed to save configuration to {config_path}: {e}")
            return False

    @property
    def all(self) -> Dict:
        """Get a copy of the entire configuration."""
        return copy.deepcopy(self._config)


# Create a singleton instance for easy importing
config = Config()

# Export the singleton instance
__all__ = ['Config', 'config']
