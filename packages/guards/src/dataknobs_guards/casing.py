"""Key case conversion helpers."""

import re

_SNAKE_SEGMENT = re.compile(r"_([a-zA-Z1-9])")


def snake_to_camel(text: str) -> str:
    """Convert a snake_case name to camelCase.

    Every underscore followed by a letter or a digit from 1 to 9 is dropped
    and the character after it upper-cased. An underscore before ``0`` or at
    the end is kept.

    Example:
        ```python
        snake_to_camel("created_at")   # "createdAt"
        snake_to_camel("line_2_text")  # "line2Text"
        ```
    """
    return _SNAKE_SEGMENT.sub(lambda match: match.group(1).upper(), text)
