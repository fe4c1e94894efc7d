"""
Text helpers
"""

import re

_CAMEL_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_LOWER_UPPER = re.compile(r"([a-z\d])([A-Z])")


def to_snake_case(name: str) -> str:
    """
    Convert a CamelCase class name to snake_case

    Args:
        name: class name, e.g. "BlogPost" or "HTMLPage"

    Returns:
        snake_case name, e.g. "blog_post" or "html_page"
    """
    name = _CAMEL_BOUNDARY.sub(r"\1_\2", name)
    name = _LOWER_UPPER.sub(r"\1_\2", name)
    return name.replace("-", "_").lower()
