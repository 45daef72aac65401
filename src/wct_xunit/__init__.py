# Lightweight package init: avoid eager imports that can fail at console start.
__all__ = ["XUnitPlugin", "PluginConfig"]

def __getattr__(name):
    if name == "XUnitPlugin":
        from .plugin import XUnitPlugin as _XUnitPlugin
        return _XUnitPlugin
    if name == "PluginConfig":
        from .config import PluginConfig as _PluginConfig
        return _PluginConfig
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
