"""Shared utilities (YAML I/O, frontmatter, merging, path resolution)."""
