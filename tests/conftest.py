from pathlib import Path

import pytest

from pagebake.config import load_config

HEAD = '<html><head><title>{{ title }}</title></head><body>\n'
FOOT = '</body></html>\n'

POST_LAYOUT = """{% include "blocks/head.jinja" %}
<article><h1>{{ title }}</h1>{{ content }}</article>
{% include "blocks/foot.jinja" %}
"""

BLOG_INDEX = """{% include "blocks/head.jinja" %}
<ul>
{% for post in posts %}<li data-slug="{{ post.slug }}">{{ post.title }}|{{ post.date }}|{{ post.excerpt }}</li>
{% endfor %}</ul>
<p>count={{ posts|length }}</p>
{% include "blocks/foot.jinja" %}
"""


def write(root: Path, rel: str, text: str) -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def post_source(title=None, date=None, content=None) -> str:
    lines = []
    if title is not None:
        lines.append('{%% set title = "%s" %%}' % title)
    if date is not None:
        lines.append('{%% set date = "%s" %%}' % date)
    if content is not None:
        lines.append("{%% set content %%}%s{%% endset %%}" % content)
    lines.append('{% include "blog-post.jinja" %}')
    return "\n".join(lines) + "\n"


@pytest.fixture
def cfg(monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    return load_config(None)


@pytest.fixture
def site(tmp_path) -> Path:
    """A small site tree under tmp_path/site; outputs go to tmp_path/dist."""
    root = tmp_path / "site"
    write(root, "blocks/head.jinja", HEAD)
    write(root, "blocks/foot.jinja", FOOT)
    write(root, "index.jinja", '{% include "blocks/head.jinja" %}<h1>Home</h1>{% include "blocks/foot.jinja" %}')
    write(root, "about.jinja", '{% set title = "About" %}{% include "blocks/head.jinja" %}<h1>About</h1>{% include "blocks/foot.jinja" %}')
    write(root, "blog.jinja", BLOG_INDEX)
    write(root, "blog-post.jinja", POST_LAYOUT)
    write(root, "blog/post-a.jinja", post_source("Post A", "2024-01-01", "<p>First <b>bold</b> para</p>"))
    write(root, "blog/post-b.jinja", post_source("Post B", "2023-06-01", "<p>Older</p>"))
    write(root, "blog/post-c.jinja", post_source("Post C"))
    write(root, "js/app.js", "console.log('hi');\n")
    return root
