"""Utility functions for dojo application."""

import re


def split_list(text: str) -> list[str]:
    """Split a comma or whitespace separated list, dropping empty entries."""
    return [part for part in re.split(r'[,\s]+', text.strip()) if part]
