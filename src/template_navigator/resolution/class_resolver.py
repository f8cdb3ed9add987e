"""
Style class references in template markup.

Three binding forms are recognised on a single line, tried in order:

1. ``class="a b c"``        - the whitespace token under the cursor
2. ``[class.foo]="expr"``   - ``foo``, wherever the cursor is on the line
3. ``[ngClass]="'a b'"`` / ``[ngClass]="['a', 'b']"`` - the quoted token
   under the cursor

Anything else resolves to nothing; there is deliberately no fallback to the
word under the cursor.
"""

import re
from typing import Iterator, List, Optional

from ..indexing.models import ClassReference

STATIC_CLASS_ATTR = re.compile(r"(?<![\w\-.\[])class\s*=\s*([\"'])(.*?)\1")
CLASS_BINDING = re.compile(r"\[class\.([\w-]+)\]")
NG_CLASS_BINDING = re.compile(r"\[ngClass\]\s*=\s*(?:\"([^\"]*)\"|'([^']*)')")

_TOKEN = re.compile(r"\S+")
_CLASS_NAME = re.compile(r"^-?[_a-zA-Z][\w-]*$")
_QUOTES = "'\"`"


def find_class_reference(line: str, cursor_offset: int) -> Optional[ClassReference]:
    """Return the class referenced at ``cursor_offset`` together with its span."""
    for reference in _static_class_references(line):
        if reference.contains(cursor_offset):
            return reference

    binding = CLASS_BINDING.search(line)
    if binding:
        return ClassReference(binding.group(1), binding.start(1), binding.end(1))

    for reference in _ng_class_references(line):
        if reference.contains(cursor_offset):
            return reference

    return None


def resolve_class_name(line: str, cursor_offset: int) -> Optional[str]:
    """Return the style class name referenced at ``cursor_offset``, or None."""
    reference = find_class_reference(line, cursor_offset)
    return reference.class_name if reference else None


def class_references(line: str) -> List[ClassReference]:
    """Every class reference on a line, in binding-form order."""
    references = list(_static_class_references(line))
    references.extend(
        ClassReference(m.group(1), m.start(1), m.end(1)) for m in CLASS_BINDING.finditer(line)
    )
    references.extend(_ng_class_references(line))
    return references


def _static_class_references(line: str) -> Iterator[ClassReference]:
    for match in STATIC_CLASS_ATTR.finditer(line):
        value_start = match.start(2)
        for token in _TOKEN.finditer(match.group(2)):
            yield ClassReference(token.group(0), value_start + token.start(), value_start + token.end())


def _ng_class_references(line: str) -> Iterator[ClassReference]:
    for match in NG_CLASS_BINDING.finditer(line):
        group = 1 if match.group(1) is not None else 2
        value = match.group(group)
        value_start = match.start(group)
        for token in _ng_class_tokens(value):
            # Span is the first occurrence inside the bound value
            start = line.find(token, value_start)
            if start == -1:
                continue
            yield ClassReference(token, start, start + len(token))


def _ng_class_tokens(value: str) -> List[str]:
    stripped = value.strip()
    if not stripped:
        return []

    if stripped[0] == "[" and stripped.endswith("]"):
        # ['a', "b"] - only quoted list items are class names
        items = [item.strip() for item in stripped[1:-1].split(",")]
        candidates = [token for item in items if item and item[0] in _QUOTES
                      for token in item.strip(_QUOTES).split()]
    elif stripped[0] in _QUOTES:
        # 'a b' - a class string
        candidates = stripped.strip(_QUOTES).split()
    else:
        # Object literals and other expressions are not resolved
        return []

    return [token for token in candidates if _CLASS_NAME.match(token)]
