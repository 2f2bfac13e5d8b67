"""Alternate input sources for flag values: mappings, JSON, YAML and TOML, and applying them to flags."""

__all__ = ["source", "fetch", "json_source", "file_sources", "apply"]