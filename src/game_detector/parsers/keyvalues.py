"""
Parser for Valve's KeyValues text format (.vdf / .acf files).

A document is a sequence of key/value pairs. Keys are double-quoted strings,
values are either double-quoted strings or blocks of pairs enclosed in braces:

    "AppState"
    {
        "appid"     "620"
        "name"      "Portal 2"
        // comments run to the end of the line
    }

Blocks are parsed iteratively with an explicit stack of open blocks, so deeply
nested input cannot exhaust the interpreter's call stack.
"""

import re
from pathlib import Path
from typing import Iterator, Optional, Union

from game_detector.errors import ParseError

_STRING_SPECIAL = re.compile(r'["\\]')
_WHITESPACE = re.compile(r"\s+")

_ESCAPABLE = ('"', "\\")


class KeyValues:
    """
    Ordered multi-map of keys to strings or nested KeyValues.

    Keys may repeat. Lookups are last-wins and ignore case, matching
    how Steam itself reads these files; iteration yields every pair in
    source order with the original spelling of each key.
    """

    __slots__ = ("_pairs",)

    def __init__(self, pairs: Optional[list[tuple[str, "Value"]]] = None):
        self._pairs: list[tuple[str, Value]] = list(pairs or [])

    def append(self, key: str, value: "Value") -> None:
        """Add a pair at the end, keeping any earlier pair with the same key."""
        self._pairs.append((key, value))

    def get(self, key: str, default: Optional["Value"] = None) -> Optional["Value"]:
        """Get the last value stored for a key."""
        folded = key.casefold()
        for pair_key, value in reversed(self._pairs):
            if pair_key.casefold() == folded:
                return value
        return default

    def get_all(self, key: str) -> list["Value"]:
        """Get every value stored for a key, in source order."""
        folded = key.casefold()
        return [value for pair_key, value in self._pairs if pair_key.casefold() == folded]

    def get_str(self, key: str) -> Optional[str]:
        """Get the last value for a key if it is a string."""
        value = self.get(key)
        return value if isinstance(value, str) else None

    def get_block(self, key: str) -> Optional["KeyValues"]:
        """Get the last value for a key if it is a block."""
        value = self.get(key)
        return value if isinstance(value, KeyValues) else None

    def items(self) -> list[tuple[str, "Value"]]:
        return list(self._pairs)

    def keys(self) -> list[str]:
        return [key for key, _ in self._pairs]

    def to_dict(self) -> dict:
        """Convert to nested dicts; repeated keys keep the last value."""
        result: dict = {}
        for key, value in self._pairs:
            result[key] = value.to_dict() if isinstance(value, KeyValues) else value
        return result

    def __getitem__(self, key: str) -> "Value":
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __iter__(self) -> Iterator[tuple[str, "Value"]]:
        return iter(self._pairs)

    def __len__(self) -> int:
        return len(self._pairs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, KeyValues):
            return NotImplemented

        # Compared with a stack so deeply nested trees do not recurse
        stack = [(self, other)]
        while stack:
            left, right = stack.pop()
            if len(left._pairs) != len(right._pairs):
                return False
            for (left_key, left_value), (right_key, right_value) in zip(left._pairs, right._pairs):
                if left_key != right_key:
                    return False
                if isinstance(left_value, KeyValues) and isinstance(right_value, KeyValues):
                    stack.append((left_value, right_value))
                elif left_value != right_value:
                    return False
        return True

    def __repr__(self) -> str:
        return f"KeyValues({self._pairs!r})"


Value = Union[str, KeyValues]


class _Source:
    """Input text plus position bookkeeping for error messages."""

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)

    def error(self, message: str, offset: int, depth: int) -> ParseError:
        line = self.text.count("\n", 0, offset) + 1
        column = offset - (self.text.rfind("\n", 0, offset) + 1) + 1
        return ParseError(message, offset=offset, line=line, column=column, depth=depth)

    def skip_ignored(self, pos: int) -> int:
        """Skip whitespace and // comments."""
        text = self.text
        while pos < self.length:
            match = _WHITESPACE.match(text, pos)
            if match:
                pos = match.end()
                continue
            if text.startswith("//", pos):
                newline = text.find("\n", pos)
                pos = self.length if newline == -1 else newline + 1
                continue
            break
        return pos

    def read_string(self, start: int, depth: int) -> tuple[str, int]:
        """
        Read a quoted string starting at the opening quote.

        Returns:
            The unescaped string and the position after the closing quote
        """
        text = self.text
        pos = start + 1
        chunks: list[str] = []

        while True:
            match = _STRING_SPECIAL.search(text, pos)
            if match is None:
                raise self.error("unterminated string", start, depth)

            index = match.start()
            chunks.append(text[pos:index])

            if text[index] == '"':
                return "".join(chunks), index + 1

            if index + 1 >= self.length:
                raise self.error("unterminated string", start, depth)

            escaped = text[index + 1]
            if escaped in _ESCAPABLE:
                chunks.append(escaped)
            else:
                # Unknown escapes are kept as written
                chunks.append(text[index : index + 2])
            pos = index + 2


def loads(text: str) -> KeyValues:
    """
    Parse a KeyValues document.

    Args:
        text: Document contents

    Returns:
        The root KeyValues of the document

    Raises:
        ParseError: On the first syntax error; no partial tree is returned.
            Its offset counts characters of text (not bytes), after a
            leading BOM is dropped
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    source = _Source(text)
    root = KeyValues()
    stack = [root]
    pos = 0

    while True:
        pos = source.skip_ignored(pos)
        depth = len(stack) - 1

        if pos >= source.length:
            if depth > 0:
                raise source.error(
                    f"unexpected end of input: {depth} unclosed block(s)", pos, depth
                )
            return root

        char = source.text[pos]

        if char == "}":
            if depth == 0:
                raise source.error("unmatched '}'", pos, depth)
            stack.pop()
            pos += 1
            continue

        if char != '"':
            raise source.error(f"unexpected character {char!r}, expected a key", pos, depth)

        key_offset = pos
        key, pos = source.read_string(pos, depth)
        pos = source.skip_ignored(pos)

        if pos >= source.length:
            raise source.error(f"missing value for key {key!r}", key_offset, depth)

        char = source.text[pos]

        if char == '"':
            value, pos = source.read_string(pos, depth)
            stack[-1].append(key, value)
        elif char == "{":
            block = KeyValues()
            stack[-1].append(key, block)
            stack.append(block)
            pos += 1
        else:
            raise source.error(
                f"unexpected character {char!r}, expected a value for key {key!r}",
                pos,
                depth,
            )


def load(path: Path) -> KeyValues:
    """
    Read and parse a KeyValues file.

    Raises:
        OSError: If the file cannot be read
        ParseError: If the contents are not valid KeyValues
    """
    return loads(Path(path).read_text(encoding="utf-8", errors="replace"))


def _quote(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def dumps(tree: KeyValues) -> str:
    """
    Serialize a tree back to KeyValues text.

    The output is tab indented like Steam's own files and parses back to an
    equal tree.
    """
    lines: list[str] = []
    # (block, pair index, indent level)
    stack: list[tuple[KeyValues, int, int]] = [(tree, 0, 0)]

    while stack:
        block, index, level = stack.pop()
        pairs = block.items()
        indent = "\t" * level

        if index >= len(pairs):
            if level > 0:
                lines.append("\t" * (level - 1) + "}")
            continue

        key, value = pairs[index]
        stack.append((block, index + 1, level))

        if isinstance(value, KeyValues):
            lines.append(f"{indent}{_quote(key)}")
            lines.append(f"{indent}{{")
            stack.append((value, 0, level + 1))
        else:
            lines.append(f"{indent}{_quote(key)}\t\t{_quote(value)}")

    return "\n".join(lines) + "\n" if lines else ""
