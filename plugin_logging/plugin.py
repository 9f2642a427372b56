# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Copilot-for-Consensus contributors

"""Plugin identification from the call site."""

import inspect

_PACKAGE = __name__.split(".")[0]


def plugin_from_module(module_name: str, namespace: str = "plugins") -> str | None:
    """Extract a plugin name from a dotted module name.

    ``plugins.TestPlugin.utility`` names the plugin ``TestPlugin``; the
    namespace segment may appear anywhere in the module path.

    Args:
        module_name: Dotted module name of the calling code
        namespace: Package segment under which plugins live

    Returns:
        Plugin name, or None if the module is not inside a plugin
    """
    parts = module_name.split(".")
    for index, part in enumerate(parts[:-1]):
        if part == namespace:
            return parts[index + 1]
    return None


def _is_internal(module_name: str) -> bool:
    return module_name == _PACKAGE or module_name.startswith(_PACKAGE + ".")


def infer_plugin_name(namespace: str = "plugins") -> str | None:
    """Identify the plugin that issued the current log call.

    Walks outward past this package's own frames and inspects the module of
    the first external caller.

    Args:
        namespace: Package segment under which plugins live

    Returns:
        Plugin name, or None if the caller is not part of a plugin
    """
    frame = inspect.currentframe()
    try:
        while frame is not None:
            module_name = frame.f_globals.get("__name__", "")
            if not _is_internal(module_name):
                return plugin_from_module(module_name, namespace)
            frame = frame.f_back
        return None
    finally:
        del frame
