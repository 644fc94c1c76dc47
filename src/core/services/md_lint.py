"""
Markdown lint — project rules the stock markdownlint set doesn't cover.

One rule today:

  no-link-attributes
      Kramdown-style link attributes (``[text](url){:target="_blank"}``)
      render as literal text on the current documentation platform.
      Matches inline links, reference links (``][ref]{:...}``, ``][]{:...}``)
      and shorthand references (``]{:...}``).

Only inline content is checked: fenced and indented code blocks and the front
matter block are skipped.
"""

from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

RULE_NAMES = ["no-link-attributes"]
RULE_DESCRIPTION = 'Disallow link attributes like {:target="_blank"}'

LINK_ATTRIBUTE_RE = re.compile(r"\](?:\([^\)]+\)|\[[^\]]*\])?\s*\{:[^}]+\}")
_DETAIL = "Link attributes like '{:target=\"_blank\"}' are not allowed"

_FENCE_RE = re.compile(r"^ {0,3}(`{3,}|~{3,})")
_LIST_ITEM_RE = re.compile(r"^ {0,3}(?:[-*+]|\d{1,9}[.)])(?:\s|$)")


@dataclass
class LintIssue:
    """A single rule violation."""

    file: str
    line: int
    column: int
    context: str
    detail: str = _DETAIL
    rule: list[str] = field(default_factory=lambda: list(RULE_NAMES))

    @property
    def range(self) -> tuple[int, int]:
        return (self.column, len(self.context))

    def to_dict(self) -> dict:
        data = asdict(self)
        data["range"] = list(self.range)
        return data

    def format(self) -> str:
        return f"{self.file}:{self.line}:{self.column} {'/'.join(self.rule)} {self.detail} [Context: \"{self.context}\"]"


@dataclass
class LintReport:
    files_checked: int = 0
    issues: list[LintIssue] = field(default_factory=list)
    errors: list[dict] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.issues and not self.errors

    def to_dict(self) -> dict:
        return {
            "ok": self.ok,
            "files_checked": self.files_checked,
            "issue_count": len(self.issues),
            "issues": [i.to_dict() for i in self.issues],
            "errors": self.errors,
        }


def _is_indented(line: str) -> bool:
    return line.expandtabs(4).startswith("    ")


def _inline_lines(text: str):
    """Yield ``(line_number, line)`` for lines that hold inline content."""
    lines = text.splitlines()
    start = 0

    # Front matter
    if lines and lines[0].strip() == "---":
        for i in range(1, len(lines)):
            if lines[i].strip() in ("---", "..."):
                start = i + 1
                break

    fence: str | None = None
    indented_code = False
    paragraph = False   # an indented line right after paragraph text continues it
    in_list = False     # indented lines inside a list item are item content
    prev_blank = True

    for idx in range(start, len(lines)):
        line = lines[idx]
        m = _FENCE_RE.match(line)

        if fence is not None:
            if m and m.group(1)[0] == fence[0] and len(m.group(1)) >= len(fence):
                fence = None
            continue

        if not line.strip():
            paragraph = False
            prev_blank = True
            continue

        indented = _is_indented(line)
        if indented and (indented_code or (not paragraph and not in_list)):
            indented_code = True
            prev_blank = False
            continue
        indented_code = False

        if not indented:
            if _LIST_ITEM_RE.match(line):
                in_list = True
            elif prev_blank:
                in_list = False
        prev_blank = False

        if m:
            fence = m.group(1)
            paragraph = False
            continue

        paragraph = True
        yield idx + 1, line


def lint_text(text: str, path: str = "<string>") -> list[LintIssue]:
    """Run ``no-link-attributes`` over markdown text."""
    issues = []
    for line_number, line in _inline_lines(text):
        for match in LINK_ATTRIBUTE_RE.finditer(line):
            issues.append(LintIssue(
                file=path,
                line=line_number,
                column=match.start() + 1,
                context=match.group(0),
            ))
    return issues


def collect_markdown(paths: list[Path]) -> list[Path]:
    """Expand directories to their ``*.md`` files (sorted, de-duplicated)."""
    files: list[Path] = []
    for p in paths:
        if p.is_dir():
            files.extend(
                f for f in sorted(p.rglob("*.md"))
                if "node_modules" not in f.parts and not any(part.startswith(".") for part in f.relative_to(p).parts)
            )
        else:
            files.append(p)
    seen: set[Path] = set()
    unique = []
    for f in files:
        if f not in seen:
            seen.add(f)
            unique.append(f)
    return unique


def lint_paths(paths: list[Path], *, relative_to: Path | None = None) -> LintReport:
    """Lint every markdown file reachable from ``paths``."""
    report = LintReport()
    for md_file in collect_markdown(paths):
        label = str(md_file)
        if relative_to is not None:
            try:
                label = str(md_file.relative_to(relative_to))
            except ValueError:
                pass
        try:
            text = md_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            report.errors.append({"file": label, "error": str(e)})
            continue
        report.files_checked += 1
        report.issues.extend(lint_text(text, label))

    logger.info(
        "Linted %d markdown file(s): %d issue(s)", report.files_checked, len(report.issues),
    )
    return report
