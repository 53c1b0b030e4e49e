"""Synthetic rating seeder for development user databases."""

__version__ = "0.1.0"
