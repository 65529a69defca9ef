"""Utility functions for satchel."""

from .reference import parse_repository_tag

__all__ = ["parse_repository_tag"]
