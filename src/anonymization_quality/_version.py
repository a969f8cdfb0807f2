"""Version information for anonymization_quality."""

try:
    from anonymization_quality._version_info import __version__, __version_tuple__
except ImportError:
    __version__ = "unknown"
    __version_tuple__ = (0, 0, 0, "unknown", "unknown")
