from __future__ import annotations

import re

_WORD_BOUNDARY_RE = re.compile(r"([A-Z])")


def escape_docstring(text: str) -> str:
    """Escape text so it can be embedded in a triple-quoted docstring."""
    return text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


def parameter_description(name: str) -> str:
    """Describe a parameter that has no description of its own.

    Example:
        >>> parameter_description("userId")
        'The user id parameter'
    """
    words = _WORD_BOUNDARY_RE.sub(r" \1", name).lower().strip()
    return f"The {words} parameter"


def docstring_lines(
    summary: str,
    args: list[tuple[str, str]],
    returns: str,
    indent: str = "        ",
) -> list[str]:
    """Render a Google-style docstring as indented source lines."""
    summary_lines = escape_docstring(summary.strip()).splitlines() or [""]
    lines = [f'{indent}"""{summary_lines[0]}']
    lines.extend(f"{indent}{line}".rstrip() for line in summary_lines[1:])
    if args:
        lines.append("")
        lines.append(f"{indent}Args:")
        for name, description in args:
            lines.append(f"{indent}    {name}: {_one_line(description)}")
    lines.append("")
    lines.append(f"{indent}Returns:")
    lines.append(f"{indent}    {_one_line(returns)}")
    lines.append(f'{indent}"""')
    return lines


def _one_line(text: str) -> str:
    return escape_docstring(" ".join(text.split()))
