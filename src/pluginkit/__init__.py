"""pluginkit: plugin location, version resolution and incremental tree install."""

__version__ = "0.1.0"
