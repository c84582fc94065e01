#!/usr/bin/env python3
import os
import shutil
import sys
from pathlib import Path
from typing import Optional

from pagebake.config import get_config_path_from_args, load_config, project_root, resolve_dirs
from pagebake.posts import read_blog_posts
from pagebake.templates import (
    locals_for_view,
    make_environment,
    output_path_for_view,
    render_view,
    view_for_template,
)


# -----------------------
# Output directory + static assets
# -----------------------

def ensure_clean_output(output_dir: Path):
    """Every build is a full rebuild: drop the old output and start empty."""
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)


def copy_static_dirs(site_dir: Path, output_dir: Path, names: list):
    """Copy the asset folders verbatim. Missing folders are skipped."""
    for name in names:
        src = site_dir / name
        if not src.is_dir():
            continue
        dest = output_dir / name
        try:
            shutil.copytree(src, dest, dirs_exist_ok=True)
        except (OSError, shutil.Error) as e:
            print(f"WARNING: could not copy {src}: {e}", file=sys.stderr)
            continue
        print(f"Copied {name}/ to {dest}")


# -----------------------
# Templates
# -----------------------

def collect_templates(site_dir: Path, cfg: dict) -> list:
    """
    Every template under site_dir that is a page of its own.

    Partials directories are pruned wherever they appear, and the shared
    templates (only ever included) are left out.
    """
    template_ext = cfg["template_ext"]
    partials_dir = cfg["partials_dir"]
    shared = set(cfg["shared_templates"])

    found = []
    for dirpath, dirnames, filenames in os.walk(site_dir):
        dirnames[:] = sorted(d for d in dirnames if d != partials_dir)
        for name in sorted(filenames):
            if not name.endswith(template_ext):
                continue
            if name in shared:
                continue
            found.append(Path(dirpath) / name)
    return found


def render_to_output(env, site_dir: Path, output_dir: Path, template_path: Path, posts: list, cfg: dict) -> Path:
    """Render one template to its pretty-URL location and return that path."""
    view = view_for_template(template_path.relative_to(site_dir), cfg["template_ext"])

    ctx = locals_for_view(view, cfg["blog_view"], lambda: posts)
    html_page = render_view(env, view, cfg["template_ext"], ctx)

    # after rendering: a failed page leaves no directory behind
    out_path = output_path_for_view(output_dir, view, cfg["index_view"])
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html_page, encoding="utf-8")
    print(f"Wrote {out_path}")
    return out_path


# -----------------------
# Main
# -----------------------

def build_site(cfg: dict, root: Path) -> Path:
    """Render the whole site directory into the output directory."""
    site_dir, output_dir = resolve_dirs(cfg, root)

    # 1. Clean output
    ensure_clean_output(output_dir)

    # 2. Static assets
    copy_static_dirs(site_dir, output_dir, cfg["static_dirs"])

    # 3. Blog posts, for the blog index
    posts = read_blog_posts(site_dir / cfg["blog_dir"], cfg["template_ext"])

    # 4. Pages, one at a time
    env = make_environment(site_dir)
    for template_path in collect_templates(site_dir, cfg):
        try:
            render_to_output(env, site_dir, output_dir, template_path, posts, cfg)
        except Exception as e:
            print(f"Failed to render {template_path}: {e}", file=sys.stderr)

    print(f"Done. Output in {output_dir}")
    return output_dir


def main(argv: Optional[list] = None) -> int:
    config_path = get_config_path_from_args(argv)
    cfg = load_config(config_path)

    try:
        build_site(cfg, project_root(config_path))
    except Exception as e:
        print(f"Build failed: {e!r}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
