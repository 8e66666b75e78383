"""Core key resolution, import and scanning logic."""
