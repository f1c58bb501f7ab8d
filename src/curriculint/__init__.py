"""Curriculint: structural lint for curriculum and boss scenario graphs."""

__version__ = "0.1.0"
