"""
Lexical helpers for C# source text.

No grammar is involved: sources are masked (comments and literal contents
blanked, offsets preserved) and declarations are located with regular
expressions. Block bodies are recovered with a bounded brace-balancing scan.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

logger = logging.getLogger(__name__)

NAMESPACE_PATTERN = re.compile(r"\bnamespace\s+([A-Za-z_][A-Za-z0-9_.]*)\s*[{;]")
USING_PATTERN = re.compile(r"^\s*using\s+(?:static\s+)?([A-Za-z_][A-Za-z0-9_.]*)\s*;", re.MULTILINE)
BRANCH_PATTERN = re.compile(r"\b(?:if|else|while|for|foreach|switch|case|catch)\b")

# Type expression: dotted identifier, optional generic arguments, optional
# array ranks and nullable marker.
TYPE_PATTERN = r"[A-Za-z_][\w.]*(?:\s*<[\w\s,.<>\[\]?]*>)?(?:\s*\[[\s,]*\])*\??"
IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_]\w*(?:\.[A-Za-z_]\w*)*")

# Words that can precede a name in member position but never form a type.
NON_TYPE_KEYWORDS = frozenset(
    {
        "abstract", "as", "await", "base", "break", "case", "catch", "class",
        "const", "continue", "default", "delegate", "do", "else", "enum",
        "event", "explicit", "extern", "finally", "for", "foreach", "get",
        "goto", "if", "implicit", "in", "interface", "internal", "is", "lock",
        "namespace", "new", "operator", "out", "override", "params",
        "partial", "private", "protected", "public", "readonly", "record",
        "ref", "return", "sealed", "set", "sizeof", "static", "struct",
        "switch", "this", "throw", "try", "typeof", "unsafe", "using",
        "virtual", "volatile", "when", "where", "while", "yield",
    }
)


def _blank(chars: List[str], start: int, end: int) -> None:
    for k in range(start, end):
        if chars[k] != "\n":
            chars[k] = " "


def _line_span(source: str, start: int, end: int) -> range:
    first = source.count("\n", 0, start) + 1
    last = first + source.count("\n", start, end)
    return range(first, last + 1)


def mask_source(source: str) -> Tuple[str, int]:
    """Blank comments and string/char literal contents.

    Quote characters and newlines are kept so that every offset and line
    number in the masked text matches the original.

    Args:
        source: Raw C# source text

    Returns:
        Tuple of (masked text, number of lines containing a comment)
    """
    chars = list(source)
    comment_lines = set()
    n = len(source)
    i = 0
    while i < n:
        ch = source[i]
        nxt = source[i + 1] if i + 1 < n else ""

        if ch == "/" and nxt == "/":
            end = source.find("\n", i)
            end = n if end == -1 else end
            _blank(chars, i, end)
            comment_lines.update(_line_span(source, i, end))
            i = end
            continue

        if ch == "/" and nxt == "*":
            close = source.find("*/", i + 2)
            end = n if close == -1 else close + 2
            _blank(chars, i, end)
            comment_lines.update(_line_span(source, i, end))
            i = end
            continue

        if ch == '"':
            prefix = source[max(0, i - 2):i]
            verbatim = "@" in prefix
            j = i + 1
            while j < n:
                if verbatim:
                    if source[j] == '"':
                        if j + 1 < n and source[j + 1] == '"':
                            j += 2
                            continue
                        break
                else:
                    if source[j] == "\\":
                        j += 2
                        continue
                    if source[j] in ('"', "\n"):
                        break
                j += 1
            end = min(j, n)
            _blank(chars, i + 1, end)
            i = end + 1
            continue

        if ch == "'":
            j = i + 1
            while j < n and j - i <= 8:
                if source[j] == "\\":
                    j += 2
                    continue
                if source[j] in ("'", "\n"):
                    break
                j += 1
            end = min(j, n)
            _blank(chars, i + 1, end)
            i = end + 1
            continue

        i += 1

    return "".join(chars), len(comment_lines)


@dataclass(frozen=True)
class Block:
    """Location of a brace-delimited block.

    Attributes:
        start: Index of the opening brace
        end: Index one past the closing brace, or where the scan stopped
        closed: False when the scan hit end of input or the depth bound
    """

    start: int
    end: int
    closed: bool

    def body(self, text: str) -> str:
        """Text between the braces."""
        return text[self.start + 1 : self.end - 1 if self.closed else self.end]

    def line_count(self, text: str) -> int:
        return text.count("\n", self.start, self.end) + 1


def extract_block(text: str, open_index: int, max_depth: int = 64) -> Block:
    """Find the block that opens at ``open_index`` by balancing braces.

    The scan gives up once nesting exceeds ``max_depth`` and returns what it
    covered so far; callers treat such a block as best-effort.

    Args:
        text: Masked source text
        open_index: Index of the opening brace
        max_depth: Maximum nesting depth to follow

    Returns:
        Block describing the span
    """
    depth = 0
    for i in range(open_index, len(text)):
        ch = text[i]
        if ch == "{":
            depth += 1
            if depth > max_depth:
                logger.debug(f"Brace depth above {max_depth} at offset {i}, truncating block")
                return Block(open_index, i, closed=False)
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return Block(open_index, i + 1, closed=True)
    return Block(open_index, len(text), closed=False)


def member_view(body: str) -> str:
    """Blank everything nested inside braces of ``body``.

    Member declarations sit at depth zero of a type body; blanking deeper
    text keeps statements and locals out of member pattern passes while
    preserving offsets. The braces themselves stay so declarations still end
    in ``{``.
    """
    chars = list(body)
    depth = 0
    for i, ch in enumerate(body):
        if ch == "{":
            if depth > 0:
                chars[i] = " "
            depth += 1
        elif ch == "}":
            depth = max(depth - 1, 0)
            if depth > 0:
                chars[i] = " "
        elif depth > 0 and ch != "\n":
            chars[i] = " "
    return "".join(chars)


def split_top_level(text: str, separator: str = ",") -> List[str]:
    """Split on ``separator`` outside angle brackets, parentheses and brackets."""
    parts = []
    depth = 0
    current = []
    for ch in text:
        if ch in "<([":
            depth += 1
        elif ch in ">)]":
            depth = max(depth - 1, 0)
        if ch == separator and depth == 0:
            parts.append("".join(current))
            current = []
        else:
            current.append(ch)
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def strip_generics(type_name: str) -> str:
    """``Singleton<GameManager>`` -> ``Singleton``."""
    return type_name.split("<", 1)[0].strip()


def type_identifiers(type_text: str) -> List[str]:
    """All simple type names mentioned in a type expression, in order."""
    names = []
    for match in IDENTIFIER_PATTERN.findall(type_text):
        name = match.rsplit(".", 1)[-1]
        if name not in names:
            names.append(name)
    return names


def branch_count(masked: str) -> int:
    """Count branching keywords and short-circuit operators."""
    return len(BRANCH_PATTERN.findall(masked)) + masked.count("&&") + masked.count("||")


def find_namespace(masked: str) -> str:
    """Return the first namespace declared in the file, or an empty string."""
    match = NAMESPACE_PATTERN.search(masked)
    return match.group(1) if match else ""


def find_usings(masked: str) -> List[str]:
    usings = []
    for name in USING_PATTERN.findall(masked):
        if name not in usings:
            usings.append(name)
    return usings


@dataclass
class SourceUnit:
    """One source file prepared for pattern passes."""

    path: str
    text: str
    masked: str
    namespace: str
    comment_lines: int

    @classmethod
    def from_text(cls, path: str, text: str) -> "SourceUnit":
        masked, comment_lines = mask_source(text)
        return cls(
            path=path,
            text=text,
            masked=masked,
            namespace=find_namespace(masked),
            comment_lines=comment_lines,
        )

    @property
    def line_count(self) -> int:
        return len(self.text.splitlines())

    def line_of(self, index: int) -> int:
        return self.masked.count("\n", 0, index) + 1


@dataclass
class TypeScope:
    """The body of one type declaration.

    ``body`` and ``members`` share offsets: ``members`` is ``body`` with
    nested blocks blanked. ``offset`` maps body offsets back to the file.
    """

    unit: SourceUnit
    name: str
    offset: int
    body: str
    members: str
    max_depth: int = 64

    @classmethod
    def from_block(
        cls, unit: SourceUnit, name: str, block: Block, max_depth: int = 64
    ) -> "TypeScope":
        body = block.body(unit.masked)
        return cls(
            unit=unit,
            name=name,
            offset=block.start + 1,
            body=body,
            members=member_view(body),
            max_depth=max_depth,
        )

    def line_of(self, index: int) -> int:
        return self.unit.line_of(self.offset + index)
