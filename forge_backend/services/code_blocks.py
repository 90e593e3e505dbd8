"""Fenced code block extraction and file naming"""

from __future__ import annotations

import re
from collections import Counter

from ..models.chat import MessageMetadata

CODE_BLOCK_PATTERN = re.compile(r"```(\w*)[^\n]*\n(.*?)```", re.DOTALL)

# language tag -> (base name, extension)
LANGUAGE_FILES = {
    "html": ("index", "html"),
    "css": ("styles", "css"),
    "javascript": ("script", "js"),
    "js": ("script", "js"),
    "typescript": ("app", "ts"),
    "ts": ("app", "ts"),
    "python": ("main", "py"),
    "py": ("main", "py"),
    "json": ("package", "json"),
}

TECHNOLOGY_NAMES = {
    "html": "HTML",
    "css": "CSS",
    "javascript": "JavaScript",
    "js": "JavaScript",
    "typescript": "TypeScript",
    "ts": "TypeScript",
    "python": "Python",
    "py": "Python",
    "json": "JSON",
}


def extract_code_blocks(content: str) -> list[tuple[str, str]]:
    """Return (language, code) for each non-empty fenced block, in order"""
    blocks = []
    for lang, code in CODE_BLOCK_PATTERN.findall(content):
        code = code.rstrip("\n")
        if code.strip():
            blocks.append((lang.lower() or "text", code))
    return blocks


def strip_code_blocks(content: str) -> str:
    return CODE_BLOCK_PATTERN.sub("", content).strip()


def _sniff(content: str) -> tuple[str, str]:
    if "<!DOCTYPE html>" in content or "<html" in content:
        return "index", "html"
    if "body {" in content or "@media" in content:
        return "styles", "css"
    if "function" in content or "const " in content or "let " in content:
        return "script", "js"
    return "file", "txt"


class FileNamer:
    """Assign file names to unnamed code blocks

    The first file with a given base name keeps it; later ones get a numeric
    suffix starting at 2 (``index.html``, ``index2.html``, ...).
    """

    def __init__(self, taken: set[str] | None = None):
        self._seen: Counter[str] = Counter()
        self._taken = set(taken or ())

    def name_for(self, content: str, language: str) -> str:
        base, ext = LANGUAGE_FILES.get(language.lower()) or _sniff(content)
        key = f"{base}.{ext}"
        while True:
            self._seen[key] += 1
            count = self._seen[key]
            name = key if count == 1 else f"{base}{count}.{ext}"
            if name not in self._taken:
                self._taken.add(name)
                return name


def generate_file_names(blocks: list[tuple[str, str]]) -> list[str]:
    """Names for a list of (language, code) blocks"""
    namer = FileNamer()
    return [namer.name_for(code, lang) for lang, code in blocks]


def count_lines(content: str) -> int:
    return len(content.split("\n"))


def build_metadata(files: list[tuple[str, str, str]]) -> MessageMetadata:
    """Chat metadata for generated (name, language, content) triples"""
    technologies: list[str] = []
    for _, language, _ in files:
        tech = TECHNOLOGY_NAMES.get(language.lower())
        if tech and tech not in technologies:
            technologies.append(tech)
    return MessageMetadata(
        files_generated=tuple(name for name, _, _ in files),
        technologies=tuple(technologies),
        estimated_lines=sum(count_lines(content) for _, _, content in files),
    )
