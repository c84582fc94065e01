"""
Blog post metadata, scraped from the raw text of post templates.

Post templates are never rendered here. Each one is expected to declare its
metadata as plain literal assignments near the top, e.g.

    {# var title = "Hello, world" #}
    {% set date = "2024-01-01" %}
    {% set content %}<p>First paragraph.</p>{% endset %}

Anything not written as a literal is simply not seen.
"""
import re
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from pathlib import Path
from typing import Optional

from bs4 import BeautifulSoup  # pip install beautifulsoup4

EXCERPT_LENGTH = 200
ELLIPSIS = "…"

# var title = "..." / {% set title = '...' %}, any of ' " ` as delimiter
TITLE_RE = re.compile(r"""(?:var|set)\s+title\s*=\s*(['`"])(.*?)\1""", re.S)
DATE_RE = re.compile(r"""(?:var|set)\s+date\s*=\s*(['`"])(.*?)\1""", re.S)

CONTENT_RES = [
    re.compile(r"var\s+content\s*=\s*`(.*?)`", re.S),
    re.compile(r"\{%-?\s*set\s+content\s*-?%\}(.*?)\{%-?\s*endset\s*-?%\}", re.S),
]

PARAGRAPH_RE = re.compile(r"<p>(.*?)</p>", re.I | re.S)

DATE_FORMATS = [
    "%B %d, %Y",     # June 1, 2023
    "%b %d, %Y",     # Jun 1, 2023
    "%d %B %Y",
    "%d %b %Y",
    "%Y/%m/%d",
    "%B %d %Y",      # January 5 2024
    "%b %d %Y",      # Jan 5 2024
    "%Y-%m",
    "%Y",
]


def strip_tags(fragment: str) -> str:
    """Plain text of an HTML fragment."""
    return BeautifulSoup(fragment, "html.parser").get_text()


def make_excerpt(content: str) -> Optional[str]:
    """
    First <p> of the content block with its inner tags removed, or failing
    that the whole tag-stripped content cut to EXCERPT_LENGTH characters.
    """
    if not content:
        return None

    m = PARAGRAPH_RE.search(content)
    if m and m.group(1):
        return strip_tags(m.group(1)).strip()

    plain = strip_tags(content).strip()
    if len(plain) > EXCERPT_LENGTH:
        return plain[:EXCERPT_LENGTH] + ELLIPSIS
    return plain


def _find_content(source: str) -> Optional[str]:
    for regex in CONTENT_RES:
        m = regex.search(source)
        if m:
            return m.group(1)
    return None


def extract_post_summary(slug: str, source: str) -> dict:
    """
    Build one post summary from template source text.

    Only keys that were found are set; "slug" is always there.
    """
    post = {"slug": slug}

    m = TITLE_RE.search(source)
    if m:
        post["title"] = m.group(2).strip()

    m = DATE_RE.search(source)
    if m:
        post["date"] = m.group(2).strip()

    excerpt = make_excerpt(_find_content(source))
    if excerpt is not None:
        post["excerpt"] = excerpt

    return post


def parse_post_date(value: str) -> Optional[datetime]:
    """Parse a post date into an aware datetime, or None if it is not a date."""
    if not value:
        return None

    dt = None
    try:
        dt = datetime.fromisoformat(value)
    except ValueError:
        for fmt in DATE_FORMATS:
            try:
                dt = datetime.strptime(value, fmt)
                break
            except ValueError:
                continue

    if dt is None:
        # RFC 2822, as in feeds: "Fri, 05 Jan 2024 10:00:00 GMT"
        try:
            dt = parsedate_to_datetime(value)
        except (TypeError, ValueError, IndexError):
            dt = None

    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def _sort_key(post: dict):
    date_str = post.get("date")
    if not date_str:
        return (2, 0.0)
    dt = parse_post_date(date_str)
    if dt is None:
        # has a date, just not one we can place
        return (1, 0.0)
    return (0, -dt.timestamp())


def sort_posts(posts: list) -> list:
    """
    Sort newest first. Dated posts come before undated ones; posts that
    compare equal keep their original order.
    """
    return sorted(posts, key=_sort_key)


def _read_post(path: Path, template_ext: str) -> dict:
    slug = path.name[: -len(template_ext)]
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return {"slug": slug}
    return extract_post_summary(slug, source)


def read_blog_posts(posts_dir: Path, template_ext: str = ".jinja") -> list:
    """
    Collect a summary for every post template directly inside posts_dir,
    newest first. Returns [] if the directory cannot be listed.
    """
    try:
        files = sorted(p for p in Path(posts_dir).iterdir() if p.name.endswith(template_ext))
    except OSError:
        return []

    if not files:
        return []

    with ThreadPoolExecutor(max_workers=min(8, len(files))) as pool:
        posts = list(pool.map(lambda p: _read_post(p, template_ext), files))

    return sort_posts(posts)
