"""Brochure project scaffolding engine."""

__version__ = "1.0.0"
