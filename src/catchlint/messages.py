"""Message template interpolation."""

import re

# `{{ name }}` placeholders, whitespace allowed inside the braces
PLACEHOLDER = re.compile(r"\{\{\s*([^{}]+?)\s*\}\}")


def format_message(template: str, data: dict[str, str] | None = None) -> str:
    """Fill ``{{key}}`` placeholders from ``data``; unknown keys are left intact."""
    if not data:
        return template

    def replace(match: re.Match[str]) -> str:
        key = match.group(1)
        if key in data:
            return str(data[key])
        return match.group(0)

    return PLACEHOLDER.sub(replace, template)
