#!/usr/bin/env python3
"""
Development server: renders site templates on demand instead of ahead of time.

Files that exist under the site directory are served as they are; every
other path is mapped to a view and rendered for that request.
"""
import html
import os
import sys
import traceback
from pathlib import Path
from typing import Optional

from flask import Flask, request, send_from_directory
from jinja2 import TemplateNotFound
from werkzeug.security import safe_join

from pagebake.config import get_config_path_from_args, load_config, project_root, resolve_dirs
from pagebake.posts import read_blog_posts
from pagebake.templates import (
    load_view,
    locals_for_view,
    make_environment,
    view_for_request_path,
)


def create_app(cfg: dict, root: Path) -> Flask:
    site_dir, _ = resolve_dirs(cfg, root)
    env = make_environment(site_dir)
    template_ext = cfg["template_ext"]

    app = Flask(__name__, static_folder=None)
    app.config["SITE_DIR"] = site_dir

    @app.route("/", defaults={"path": ""})
    @app.route("/<path:path>")
    def render_page(path: str):
        if path:
            candidate = safe_join(str(site_dir), path)
            if candidate is not None and os.path.isfile(candidate):
                return send_from_directory(site_dir, path)

        view = view_for_request_path(request.path, cfg["index_view"], template_ext)
        ctx = locals_for_view(
            view,
            cfg["blog_view"],
            lambda: read_blog_posts(site_dir / cfg["blog_dir"], template_ext),
            query=request.args,
        )

        try:
            template = load_view(env, view, template_ext)
        except TemplateNotFound:
            return f"Template not found: {html.escape(view)}", 404
        except Exception:
            traceback.print_exc(file=sys.stderr)
            return "Template render error", 500

        try:
            return template.render(**ctx)
        except Exception:
            # a missing include lands here too, not as a 404
            traceback.print_exc(file=sys.stderr)
            return "Template render error", 500

    return app


def main(argv: Optional[list] = None) -> int:
    config_path = get_config_path_from_args(argv)
    cfg = load_config(config_path)
    root = project_root(config_path)
    site_dir, _ = resolve_dirs(cfg, root)

    app = create_app(cfg, root)
    print(f"Dev server listening on http://{cfg['host']}:{cfg['port']} (views: {site_dir})")
    app.run(host=cfg["host"], port=cfg["port"], threaded=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
