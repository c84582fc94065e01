from pathlib import Path
from typing import Callable, Optional

import markdown       # pip install markdown
from jinja2 import Environment, FileSystemLoader, Template, select_autoescape
from markupsafe import Markup


def markdown_filter(text) -> Markup:
    """{{ body|markdown }}: render Markdown text to HTML."""
    return Markup(markdown.markdown(str(text or "")))


def make_environment(site_dir: Path) -> Environment:
    """
    Jinja environment rooted at the site directory, so includes such as
    "blocks/header.jinja" resolve from the root wherever they are used.
    """
    env = Environment(
        loader=FileSystemLoader(str(site_dir)),
        autoescape=select_autoescape(
            enabled_extensions=("html", "htm", "xml", "jinja", "j2"),
            default_for_string=True,
        ),
    )
    env.filters["markdown"] = markdown_filter
    return env


def strip_ext(name: str, template_ext: str) -> str:
    if template_ext and name.endswith(template_ext):
        return name[: -len(template_ext)]
    return name


def view_for_template(rel_path, template_ext: str) -> str:
    """'blog/post-a.jinja' (relative to the site dir) -> 'blog/post-a'."""
    return strip_ext(Path(rel_path).as_posix(), template_ext)


def view_for_request_path(path: str, index_view: str, template_ext: str) -> str:
    """
    Map a request path to a view identifier:

      /                 -> index
      /about/           -> about
      /blog/post-a.jinja -> blog/post-a
    """
    view = "/".join(part for part in path.split("/") if part)
    if not view:
        return index_view
    return strip_ext(view, template_ext)


def template_name(view: str, template_ext: str) -> str:
    return view + template_ext


def output_path_for_view(output_dir: Path, view: str, index_view: str) -> Path:
    """Pretty URLs: every view gets <view>/index.html, except the site root."""
    if view == index_view:
        return output_dir / "index.html"
    return output_dir.joinpath(*view.split("/")) / "index.html"


def locals_for_view(view: str, blog_view: str, posts_loader: Callable[[], list], **extra) -> dict:
    """
    Template locals for a view. Only the blog view gets "posts", and the
    loader is not called for anything else.
    """
    ctx = dict(extra)
    if view == blog_view:
        ctx["posts"] = posts_loader()
    return ctx


def load_view(env: Environment, view: str, template_ext: str) -> Template:
    """The template behind a view. Raises TemplateNotFound if there is none."""
    return env.get_template(template_name(view, template_ext))


def render_view(env: Environment, view: str, template_ext: str, ctx: Optional[dict] = None) -> str:
    return load_view(env, view, template_ext).render(**(ctx or {}))
