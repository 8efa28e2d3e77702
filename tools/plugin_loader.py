"""Plugin loader — discover and load tool plugins from the plugins directory.

Each plugin is a Python file defining a module-level ``Plugin`` instance.
The loader imports every such file, materialises the plugin's tools for the
given context and registers them with the tool registry.
"""

import importlib.util
import logging
from pathlib import Path

from core.context import Context
from tools.plugin import Plugin
from tools.registry import ToolRegistry

logger = logging.getLogger(__name__)

PLUGINS_DIR = Path(__file__).parent.parent / "plugins"


def discover_plugins(plugins_dir: Path | None = None) -> list[Plugin]:
    """Discover Plugin instances in the plugins directory."""
    directory = plugins_dir or PLUGINS_DIR
    if not directory.exists():
        logger.info("No plugins directory found at %s", directory)
        return []

    plugins: list[Plugin] = []

    for py_file in sorted(directory.glob("*.py")):
        if py_file.name.startswith("_"):
            continue

        try:
            spec = importlib.util.spec_from_file_location(
                f"plugins.{py_file.stem}", py_file
            )
            if spec is None or spec.loader is None:
                continue

            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)

            for attr_name in dir(module):
                attr = getattr(module, attr_name)
                if isinstance(attr, Plugin) and attr not in plugins:
                    plugins.append(attr)
                    logger.info("Discovered plugin: %s from %s", attr.name, py_file.name)

        except Exception:
            logger.exception("Failed to load plugin from %s", py_file.name)

    return plugins


def load_plugins(
    registry: ToolRegistry,
    context: Context | None = None,
    plugins_dir: Path | None = None,
) -> int:
    """Load and register all plugins found in the plugins directory.

    Returns the number of plugins successfully loaded.
    """
    loaded = 0

    for plugin in discover_plugins(plugins_dir):
        try:
            registry.register_plugin(plugin, context)
            loaded += 1
        except Exception:
            logger.exception("Failed to register plugin: %s", plugin.name)

    if loaded:
        logger.info("Loaded %d plugin(s)", loaded)
    return loaded
