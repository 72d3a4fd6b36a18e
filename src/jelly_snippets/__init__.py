"""Jelly Snippets: abbreviation expansion for text editors."""

from jelly_snippets.constants import VERSION

__version__ = VERSION
