"""Static app synthesis.

The brief is matched against an ordered table of keyword matchers; the first
hit picks the page template, with a generic page as fallback. Generation is a
pure function of its inputs: no network, no filesystem.
"""
import csv
import datetime
import html
import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional

from . import templates
from .data_uri import AttachmentFile

PLACEHOLDER_RE = re.compile(r"%([A-Z_]+)%")
PREVIEW_CHARS = 500
NUMBER_PREFIX_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")

class GenerationContext(NamedTuple):
    brief: str
    attachments: List[AttachmentFile]
    checks: List[Any]
    seed: str

class Matcher(NamedTuple):
    name: str
    predicate: Callable[[str], bool]
    render: Callable[[GenerationContext], str]

def _fill(template: str, **values: str) -> str:
    # single pass, so inserted user text is never re-scanned for placeholders
    values.setdefault("BOOTSTRAP_CSS", templates.BOOTSTRAP_CSS)
    return PLACEHOLDER_RE.sub(lambda m: values.get(m.group(1), m.group(0)), template)

def js_template_literal(text: str) -> str:
    """Escape text for embedding inside a JS `...` literal in an inline <script>."""
    return (
        text.replace("\\", "\\\\")
        .replace("`", "\\`")
        .replace("${", "\\${")
        .replace("</", "<\\/")
    )

def _last_with_suffix(attachments: List[AttachmentFile], suffix: str) -> str:
    content = ""
    for a in attachments:
        if a.name.lower().endswith(suffix):
            content = a.content
    return content

def _parse_number(cell: str) -> float:
    # leading numeric prefix, like the page script's parseFloat(x) || 0
    m = NUMBER_PREFIX_RE.match(cell.strip())
    return float(m.group(0)) if m else 0.0

def sales_total(csv_text: str) -> float:
    """Sum the first column whose header mentions 'sales'. Cells without a leading number count as 0."""
    lines = [line for line in csv_text.split("\n") if line.strip()]
    if not lines:
        return 0.0
    rows = list(csv.reader(lines))
    headers = [h.strip().lower() for h in rows[0]]
    idx = next((i for i, h in enumerate(headers) if "sales" in h), -1)
    if idx < 0:
        return 0.0
    total = 0.0
    for row in rows[1:]:
        if len(row) <= idx:
            continue
        total += _parse_number(row[idx])
    return total

# ---------- renderers ----------
def render_captcha(ctx: GenerationContext) -> str:
    return _fill(templates.CAPTCHA_PAGE)

def render_sales(ctx: GenerationContext) -> str:
    csv_text = _last_with_suffix(ctx.attachments, ".csv")
    return _fill(
        templates.SALES_PAGE,
        TOTAL=f"{sales_total(csv_text):.2f}",
        CSV_DATA=js_template_literal(csv_text),
    )

def render_markdown(ctx: GenerationContext) -> str:
    md = _last_with_suffix(ctx.attachments, ".md")
    return _fill(templates.MARKDOWN_PAGE, MARKDOWN=js_template_literal(md))

def render_github_user(ctx: GenerationContext) -> str:
    return _fill(templates.GITHUB_USER_PAGE, SEED=ctx.seed)

def render_generic(ctx: GenerationContext) -> str:
    cards = []
    for a in ctx.attachments:
        preview = a.content[:PREVIEW_CHARS] + ("..." if len(a.content) > PREVIEW_CHARS else "")
        cards.append(_fill(
            templates.ATTACHMENT_CARD,
            NAME=html.escape(a.name),
            MIME=html.escape(a.mime_type),
            PREVIEW=html.escape(preview),
        ))
    return _fill(templates.GENERIC_PAGE, BRIEF=html.escape(ctx.brief), ATTACHMENTS="".join(cards))

def _mentions(*words: str) -> Callable[[str], bool]:
    return lambda brief: any(w in brief for w in words)

# Evaluated in order against the lower-cased brief; first match wins.
MATCHERS: List[Matcher] = [
    Matcher("captcha", _mentions("captcha"), render_captcha),
    Matcher("sales", _mentions("sales", "csv"), render_sales),
    Matcher("markdown", _mentions("markdown"), render_markdown),
    Matcher("github", _mentions("github"), render_github_user),
]
FALLBACK = Matcher("generic", lambda brief: True, render_generic)

def select_matcher(brief: str, matchers: Optional[List[Matcher]] = None) -> Matcher:
    lowered = brief.lower()
    for m in (MATCHERS if matchers is None else matchers):
        if m.predicate(lowered):
            return m
    return FALLBACK

def generate_readme(brief: str) -> str:
    quoted = "\n".join("> " + line if line else ">" for line in brief.splitlines()) or ">"
    return _fill(templates.README, QUOTED_BRIEF=quoted)

def generate_license(author: str, year: Optional[int] = None) -> str:
    year = year or datetime.date.today().year
    return _fill(templates.MIT_LICENSE, YEAR=str(year), AUTHOR=author or "Student")

def generate_app(
    brief: str,
    attachments: List[AttachmentFile],
    checks: List[Any],
    seed: str = "",
    author: str = "",
) -> Dict[str, str]:
    ctx = GenerationContext(brief, list(attachments), list(checks), seed)
    page = select_matcher(brief).render(ctx)
    return {
        "index.html": page,
        "README.md": generate_readme(brief),
        "LICENSE": generate_license(author),
    }
