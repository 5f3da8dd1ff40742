from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .models import ThemeConfig
from .plugin import ThemePlugin
from .validation import validate_theme_config

logger = logging.getLogger(__name__)

DEFAULT_THEME_ID = "classic"


class MissingThemeError(LookupError):
    """Raised when the registry has no default theme to fall back to."""


class ThemeRegistry:
    """Theme lookup by id.

    Plugins are validated and completed with default hooks when they are
    registered. Registering an id twice replaces the earlier plugin.
    """

    def __init__(self, plugins: Iterable[ThemePlugin] = (), default_id: str = DEFAULT_THEME_ID) -> None:
        self._plugins: Dict[str, ThemePlugin] = {}
        self.default_id = default_id
        for plugin in plugins:
            self.register(plugin)

    def register(self, plugin: ThemePlugin) -> ThemePlugin:
        """Validate and store a plugin.

        Returns:
            The stored plugin, with every hook populated.

        Raises:
            ThemeValidationError: If the configuration is invalid.
        """
        validate_theme_config(plugin.config)
        if plugin.id in self._plugins:
            logger.warning(f"Theme {plugin.id!r} registered twice; replacing earlier plugin")
        completed = plugin.with_defaults()
        self._plugins[plugin.id] = completed
        logger.debug(f"Registered theme {plugin.id!r}")
        return completed

    def get(self, theme_id: str) -> Optional[ThemePlugin]:
        return self._plugins.get(theme_id)

    def has(self, theme_id: str) -> bool:
        return theme_id in self._plugins

    def get_default(self) -> ThemePlugin:
        plugin = self._plugins.get(self.default_id)
        if plugin is None:
            raise MissingThemeError(f"Default theme {self.default_id!r} is not registered")
        return plugin

    def resolve(self, theme_id: Optional[str]) -> ThemePlugin:
        """Return the plugin for theme_id, falling back to the default theme."""
        plugin = self._plugins.get(theme_id) if theme_id else None
        if plugin is None:
            logger.warning(f"Unknown theme {theme_id!r}, using {self.default_id!r}")
            return self.get_default()
        return plugin

    def all_configs(self) -> List[ThemeConfig]:
        """Configurations of all registered themes, in registration order."""
        return [plugin.config for plugin in self._plugins.values()]

    @property
    def ids(self) -> List[str]:
        return list(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)


def build_default_registry() -> ThemeRegistry:
    """Registry pre-populated with the bundled themes."""
    from . import classic, deneme_sinavi, tyt_2024, yaprak_test, yazili_sinav, yks_2025

    return ThemeRegistry([
        classic.PLUGIN,
        yaprak_test.PLUGIN,
        deneme_sinavi.PLUGIN,
        yazili_sinav.PLUGIN,
        tyt_2024.PLUGIN,
        yks_2025.PLUGIN,
    ])
