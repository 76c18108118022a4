"""
Front-matter handling for Marp-style presentation directives.

A deck carries three directives in a leading ``---`` delimited block::

    ---
    marp: true
    theme: default
    paginate: true
    ---
"""
import logging
import re
from typing import Dict

from markdown_it import MarkdownIt
from mdit_py_plugins.front_matter import front_matter_plugin

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"

# Leading metadata block, closing delimiter included
_FRONT_MATTER_RE = re.compile(r"\A---[ \t]*\n(.*?\n)?---[ \t]*(?:\n|\Z)", re.DOTALL)
_MARP_KEY_RE = re.compile(r"^marp[ \t]*:", re.MULTILINE)
_PAGINATE_RE = re.compile(r"^paginate[ \t]*:", re.MULTILINE)
_THEME_KEY_RE = re.compile(r"^theme[ \t]*:", re.MULTILINE)
# Needs the trailing newline, see normalize()
_THEME_LINE_RE = re.compile(r"^theme[ \t]*:.*\n", re.MULTILINE)

_md = MarkdownIt("commonmark").use(front_matter_plugin)


def normalize_newlines(markdown: str) -> str:
    """Convert CRLF line endings to LF."""
    return markdown.replace("\r\n", "\n")


def has_front_matter(markdown: str) -> bool:
    """Check whether *markdown* opens with a metadata block delimiter."""
    return markdown.startswith(FRONT_MATTER_DELIMITER + "\n")


def _split_front_matter(markdown: str):
    """Return ``(block, rest)``; ``block`` includes both delimiters.

    An unclosed block swallows the whole document.
    """
    match = _FRONT_MATTER_RE.match(markdown)
    if match:
        return match.group(0), markdown[match.end():]
    return markdown, ""


def normalize(markdown: str, theme: str = "default") -> str:
    """
    Ensure *markdown* carries the marp, theme and paginate directives.

    Args:
        markdown: Raw markdown document
        theme: Theme identifier to write into the metadata block

    Returns:
        New markdown string with LF line endings. Unrelated metadata keys
        are preserved.
    """
    markdown = normalize_newlines(markdown)
    if not has_front_matter(markdown):
        return (
            f"---\nmarp: true\ntheme: {theme}\npaginate: true\n---\n\n"
            f"{markdown}"
        )

    block, rest = _split_front_matter(markdown)
    header = FRONT_MATTER_DELIMITER + "\n"
    inserted = []

    if _MARP_KEY_RE.search(block) is None:
        inserted.append("marp: true\n")

    if _THEME_KEY_RE.search(block) is None:
        inserted.append(f"theme: {theme}\n")
    else:
        block, replaced = _THEME_LINE_RE.subn(f"theme: {theme}\n", block, count=1)
        if not replaced:
            # theme line is the last line of an unclosed block
            logger.debug("Theme line has no trailing newline; left unchanged")

    if _PAGINATE_RE.search(block) is None:
        inserted.append("paginate: true\n")

    if inserted:
        block = header + "".join(inserted) + block[len(header):]

    return block + rest


def strip_front_matter(markdown: str) -> str:
    """Return *markdown* without its leading metadata block."""
    if not has_front_matter(markdown):
        return markdown
    match = _FRONT_MATTER_RE.match(markdown)
    if match is None:
        return ""
    return markdown[match.end():]


def read_directives(markdown: str) -> Dict[str, str]:
    """
    Read ``key: value`` directives from the leading metadata block.

    Values are returned as stripped strings; lines without a colon and
    comment lines are ignored.
    """
    tokens = _md.parse(markdown)
    if not tokens or tokens[0].type != "front_matter":
        return {}

    directives = {}
    for line in tokens[0].content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or ":" not in line:
            continue
        key, value = line.split(":", 1)
        directives[key.strip()] = value.strip().strip("'\"")
    return directives


def is_enabled(value: str) -> bool:
    """Interpret a boolean directive value."""
    return str(value).strip().lower() in ("true", "yes", "on", "1")
