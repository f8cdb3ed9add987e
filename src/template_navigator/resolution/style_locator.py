"""
Locate class declarations in a style sheet.

Matching is textual: the first line containing ``.<class_name>`` wins, so a
longer class name that starts with the target, or a comment mentioning it,
can match first.
"""

from typing import List, Optional

from ..indexing.models import StyleDeclaration


def find_declaration(style_text: str, class_name: str) -> Optional[StyleDeclaration]:
    """
    Find the declaration block for a class.

    Args:
        style_text: Style sheet contents
        class_name: Class name without the leading dot

    Returns:
        Line index of the selector and the brace-balanced block text, or
        None when the class is not mentioned
    """
    if not class_name:
        return None

    lines = style_text.splitlines()
    needle = f".{class_name}"
    for index, line in enumerate(lines):
        if needle in line:
            return StyleDeclaration(line_index=index, block=_collect_block(lines, index))
    return None


def find_declaration_line(style_text: str, class_name: str) -> Optional[int]:
    """Line index of the declaration, for navigation."""
    declaration = find_declaration(style_text, class_name)
    return declaration.line_index if declaration else None


def _collect_block(lines: List[str], start: int) -> str:
    block: List[str] = []
    balance = 0
    opened = False

    for line in lines[start:]:
        block.append(line.rstrip())
        opens = line.count("{")
        balance += opens - line.count("}")
        opened = opened or opens > 0
        # Selector lists (".a,\n.b {") keep going until the body opens
        if opened and balance <= 0:
            break

    return "\n".join(block)
