import pytest

from pagebake.config import get_config_path_from_args, load_config, project_root, resolve_dirs

from conftest import write


def test_defaults(cfg):
    assert cfg["site_dir"] == "site"
    assert cfg["output_dir"] == "dist"
    assert cfg["template_ext"] == ".jinja"
    assert cfg["shared_templates"] == ["blog-post.jinja"]
    assert cfg["static_dirs"] == ["fonts", "icons", "js"]
    assert cfg["partials_dir"] == "blocks"
    assert cfg["port"] == 3000


def test_overrides_and_single_string_lists(tmp_path, monkeypatch):
    monkeypatch.delenv("PORT", raising=False)
    config = write(tmp_path, "config.yml", "template_ext: html\nstatic_dirs: assets\nport: 8080\n")

    cfg = load_config(config)

    assert cfg["template_ext"] == ".html"
    assert cfg["shared_templates"] == ["blog-post.html"]
    assert cfg["static_dirs"] == ["assets"]
    assert cfg["port"] == 8080


def test_port_from_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("PORT", "4000")
    assert load_config(None)["port"] == 4000


def test_empty_file_means_defaults(tmp_path, cfg):
    assert load_config(write(tmp_path, "config.yml", "")) == cfg


def test_missing_explicit_config_exits(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc:
        load_config(tmp_path / "nope.yml")
    assert exc.value.code == 1
    assert "Config file not found" in capsys.readouterr().err


def test_config_path_lookup(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert get_config_path_from_args([]) is None

    write(tmp_path, "config.yml", "")
    assert get_config_path_from_args([]) == (tmp_path / "config.yml").resolve()
    assert get_config_path_from_args(["other.yml"]) == (tmp_path / "other.yml").resolve()


def test_dirs_resolve_against_config_location(tmp_path, cfg):
    config = tmp_path / "project" / "config.yml"
    site_dir, output_dir = resolve_dirs(cfg, project_root(config))
    assert site_dir == (tmp_path / "project" / "site").resolve()
    assert output_dir == (tmp_path / "project" / "dist").resolve()
