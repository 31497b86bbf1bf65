"""Core library for agentrules: indexes, resolution, configuration."""
