"""Utility modules for directive-sugar.

Provides:
- text: escaping and URL shortening
- logger: get_logger for logging
"""

from directive_sugar.utils.logger import get_logger
from directive_sugar.utils.text import (
    escape_attribute,
    escape_html,
    shorten_url,
    url_domain,
)

__all__ = [
    "escape_attribute",
    "escape_html",
    "get_logger",
    "shorten_url",
    "url_domain",
]
