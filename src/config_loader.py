"""
Configuration loader for leguy-mcp

Loads the norm-type table (tipo -> IMPO URL path segment) from a YAML file,
falling back to the hardcoded table when the file is missing or unreadable.
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# API configuration
IMPO_BASE_URL = os.environ.get("IMPO_BASE_URL", "https://www.impo.com.uy").rstrip("/")
USER_AGENT = "leguy-mcp/0.1.0 (MCP Server for Uruguay Legislation)"


class ConfigLoader:
    """
    Configuration loader for norm-type mappings.

    Loads the norm type table from a YAML configuration file.
    Falls back to hardcoded values when the file cannot be used.
    """

    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize ConfigLoader with optional custom config path.

        Args:
            config_path: Path to YAML config file. If None, uses environment variable
                        LEGUY_CONFIG_PATH or defaults to config/norm_types.yaml
        """
        default_config = Path(__file__).parent.parent / "config" / "norm_types.yaml"
        config_env = os.environ.get("LEGUY_CONFIG_PATH")
        if config_path:
            self.config_path = Path(config_path)
        elif config_env:
            self.config_path = Path(config_env)
        else:
            self.config_path = default_config
        self._norm_types: Optional[dict[str, str]] = None

        self._fallback_norm_types = {
            "ley": "leyes",
            "leyes": "leyes",
            "decreto": "decretos",
            "decretos": "decretos",
            "resolucion": "resoluciones",
            "resoluciones": "resoluciones",
            "constitucion": "constitucion",
            "ordenanza": "ordenanzas",
            "ordenanzas": "ordenanzas",
            "acordada": "acordadas",
            "acordadas": "acordadas",
        }

    def _load_config(self) -> dict[str, Any]:
        """Load configuration from YAML file."""
        try:
            if self.config_path.exists():
                with open(self.config_path, encoding='utf-8', newline='') as f:
                    config = yaml.safe_load(f)
                    if config is not None and not isinstance(config, dict):
                        logger.warning(f"Config file {self.config_path} is not a mapping, using fallback values")
                        return {}
                    logger.info(f"Loaded configuration from {self.config_path}")
                    return config or {}
            else:
                logger.warning(f"Config file not found at {self.config_path}, using fallback values")
                return {}
        except (OSError, ValueError, yaml.YAMLError) as e:
            logger.error(f"Failed to load config from {self.config_path}: {e}")
            logger.info("Using fallback norm type table")
            return {}

    @property
    def norm_types(self) -> dict[str, str]:
        """Get norm type -> URL path segment mapping (keys lower-cased)."""
        if self._norm_types is None:
            config = self._load_config()
            table = config.get('norm_types')
            if not isinstance(table, dict) or not table:
                if table is not None:
                    logger.warning(f"norm_types in {self.config_path} is not a mapping, using fallback values")
                table = self._fallback_norm_types
            self._norm_types = {
                str(key).lower().strip(): str(value).strip()
                for key, value in table.items()
            }
        return self._norm_types

    def reload_config(self) -> None:
        """Reload configuration from file."""
        self._norm_types = None
        logger.info("Configuration reloaded")


config_loader = ConfigLoader()
