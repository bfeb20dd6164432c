"""
plugins/plugin_system.py
Plugin system for the server.
Provides infrastructure for discovering, loading and configuring plugins.
"""
import copy
import importlib
import inspect
import os
from typing import Any, Dict, List, Optional

from host.core.mod_config import ModConfigError
from host.utils.logger import Logger
from plugins.event_system import EventSystem
from plugins.service_locator import get_service_locator

class PluginManager:
    def __init__(self, world=None, server=None, config_store=None, event_system: Optional[EventSystem] = None):
        self.world = world
        self.server = server
        self.config_store = config_store
        self.plugins: Dict[str, Any] = {}  # Plugin ID to instance mapping

        # Event system for loosely coupled communication
        self.event_system = event_system or EventSystem()
        # register services
        self.service_locator = get_service_locator()
        self.service_locator.register_service("event_system", self.event_system)
        self.service_locator.register_service("plugin_manager", self)

        if world:
            self.service_locator.register_service("world", world)
        if server:
            self.service_locator.register_service("server", server)
        if config_store:
            self.service_locator.register_service("config_store", config_store)

        self.plugin_path = os.path.dirname(os.path.abspath(__file__))

    def discover_plugins(self) -> List[str]:
        plugin_modules = []

        for dirname in sorted(os.listdir(self.plugin_path)):
            full_dir_path = os.path.join(self.plugin_path, dirname)
            init_file = os.path.join(full_dir_path, "__init__.py")

            # Plugins are packages directly under plugins/
            if os.path.isdir(full_dir_path) and os.path.exists(init_file) and dirname != "__pycache__":
                plugin_modules.append(dirname)

        Logger.debug("PluginManager", f"Discovered plugin modules: {plugin_modules}")
        return plugin_modules

    def load_plugin(self, plugin_name: str) -> bool:
        try:
            module = importlib.import_module(f"plugins.{plugin_name}")

            # Find the plugin class
            plugin_class = None
            for name, obj in inspect.getmembers(module):
                if (inspect.isclass(obj) and
                    hasattr(obj, "plugin_id") and
                    obj.__module__ == module.__name__):
                    plugin_class = obj
                    break

            if plugin_class is None:
                Logger.warning("PluginManager", f"No plugin class found in {plugin_name}")
                return False

            if plugin_class.plugin_id in self.plugins:
                Logger.debug("PluginManager", f"Plugin {plugin_class.plugin_id} is already loaded")
                return True

            # Inject only the dependencies the constructor asks for
            params = inspect.signature(plugin_class.__init__).parameters
            available = {
                "world": self.world,
                "event_system": self.event_system,
                "service_locator": self.service_locator,
                "server": self.server,
                "config_store": self.config_store,
            }
            kwargs = {key: value for key, value in available.items() if key in params}

            plugin = plugin_class(**kwargs)

            if hasattr(plugin, "initialize"):
                plugin.initialize()

            self.service_locator.register_service(f"plugin:{plugin.plugin_id}", plugin)
            self.plugins[plugin.plugin_id] = plugin

            Logger.info("PluginManager", f"Loaded plugin: {plugin.plugin_id}")

            self.event_system.publish("plugin_loaded", {
                "plugin_id": plugin.plugin_id,
                "plugin_name": getattr(plugin, "plugin_name", plugin.plugin_id)
            })

            return True

        except Exception as e:
            Logger.exception("PluginManager", f"Error loading plugin {plugin_name}", e)
            return False

    def load_all_plugins(self, plugin_names: Optional[List[str]] = None) -> None:
        for plugin_name in (plugin_names if plugin_names is not None else self.discover_plugins()):
            self.load_plugin(plugin_name)

    def unload_plugin(self, plugin_id: str) -> bool:
        if plugin_id not in self.plugins:
            return False

        plugin = self.plugins.pop(plugin_id)
        self._safe_call(plugin, "cleanup")

        self.service_locator.unregister_service(f"plugin:{plugin_id}")

        self.event_system.publish("plugin_unloaded", {
            "plugin_id": plugin_id
        })

        Logger.info("PluginManager", f"Unloaded plugin: {plugin_id}")
        return True

    def unload_all_plugins(self) -> None:
        for plugin_id in list(self.plugins.keys()):
            self.unload_plugin(plugin_id)

    def get_plugin(self, plugin_id: str) -> Optional[Any]:
        return self.plugins.get(plugin_id)

    def _safe_call(self, plugin, method_name, *args, **kwargs):
        """
        Safely call a plugin method with error handling.

        Args:
            plugin: The plugin instance.
            method_name: The name of the method to call.
            *args: Arguments to pass to the method.
            **kwargs: Keyword arguments to pass to the method.

        Returns:
            The result of the method call, or None if an error occurred.
        """
        method = getattr(plugin, method_name, None)
        if not callable(method):
            return None

        try:
            return method(*args, **kwargs)
        except Exception as e:
            Logger.exception("PluginManager", f"Error in plugin {plugin.plugin_id} {method_name}", e)
            return None


class PluginBase:
    plugin_id = "base_plugin"
    plugin_name = "Base Plugin"
    config_file: Optional[str] = None  # Defaults to "<plugin_id>.json"

    def __init__(self, world=None, event_system=None, config_store=None):
        self.world = world
        self.event_system = event_system
        self.config_store = config_store
        self.config = self.load_config()

    def get_config_file(self) -> str:
        return self.config_file or f"{self.plugin_id}.json"

    def get_default_config(self) -> Dict[str, Any]:
        """Defaults come from DEFAULT_CONFIG in the plugin package's config.py."""
        package = type(self).__module__
        try:
            config_module = importlib.import_module(f"{package}.config")
            return copy.deepcopy(getattr(config_module, "DEFAULT_CONFIG", {}))
        except ImportError:
            return {}

    def load_config(self) -> Dict[str, Any]:
        """
        Loads the plugin's settings from the mod config store, creating the file
        with defaults the first time. Stored values override the defaults.
        """
        config = self.get_default_config()
        if not self.config_store:
            return config

        filename = self.get_config_file()
        try:
            stored = self.config_store.load_mod_config(filename)
        except ModConfigError as e:
            Logger.error(self.plugin_name, f"{e}. Using defaults.")
            return config

        if stored is None:
            try:
                self.config_store.store_mod_config(config, filename)
                Logger.info(self.plugin_name, f"Created default config '{filename}'.")
            except OSError as e:
                Logger.error(self.plugin_name, f"Could not write default config '{filename}': {e}")
            return config

        config.update(stored)
        return config

    def initialize(self):
        pass

    def cleanup(self):
        pass
