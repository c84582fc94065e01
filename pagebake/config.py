import os
import sys
from pathlib import Path
from typing import Optional

import yaml           # pip install pyyaml

DEFAULT_CONFIG_NAME = "config.yml"


def get_config_path_from_args(argv: Optional[list] = None) -> Optional[Path]:
    """
    Determine which config file to use.

    - If a path is passed as first argument, use that.
    - Otherwise use ./config.yml when it exists.
    - Otherwise None: run on defaults.
    """
    args = sys.argv[1:] if argv is None else argv
    if args:
        return Path(args[0]).resolve()
    candidate = Path.cwd() / DEFAULT_CONFIG_NAME
    if candidate.exists():
        return candidate.resolve()
    return None


def _as_list(value, default: list) -> list:
    # a single name or a list of names
    if value is None:
        return list(default)
    if isinstance(value, str):
        return [value]
    if isinstance(value, list):
        return [str(x) for x in value]
    return list(default)


def load_config(config_path: Optional[Path]) -> dict:
    """Load YAML config and apply defaults."""
    data = {}
    if config_path is not None:
        if not config_path.exists():
            print(f"Config file not found: {config_path}", file=sys.stderr)
            sys.exit(1)
        data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}

    template_ext = str(data.get("template_ext", ".jinja"))
    if not template_ext.startswith("."):
        template_ext = "." + template_ext

    cfg = {
        "site_dir": data.get("site_dir", "site"),
        "output_dir": data.get("output_dir", "dist"),
        "template_ext": template_ext,
        "index_view": data.get("index_view", "index"),
        "blog_view": data.get("blog_view", "blog"),
        "blog_dir": data.get("blog_dir", "blog"),
        # partials live here; pruned at any depth
        "partials_dir": data.get("partials_dir", "blocks"),
        # rendered only through {% include %}
        "shared_templates": _as_list(data.get("shared_templates"), ["blog-post" + template_ext]),
        "static_dirs": _as_list(data.get("static_dirs"), ["fonts", "icons", "js"]),
        "host": data.get("host", "localhost"),
        "port": int(os.environ.get("PORT") or data.get("port", 3000)),
    }
    return cfg


def project_root(config_path: Optional[Path]) -> Path:
    """Relative paths in the config resolve against the config file's directory."""
    if config_path is None:
        return Path.cwd()
    return config_path.parent


def resolve_dirs(cfg: dict, root: Path):
    """Return (site_dir, output_dir) as absolute paths."""
    site_dir = (root / cfg["site_dir"]).resolve()
    output_dir = (root / cfg["output_dir"]).resolve()
    return site_dir, output_dir
