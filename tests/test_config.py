from pathlib import Path

import pytest

from inkpost.config import ConfigError, SiteConfig, load_config


def test_defaults_follow_project_conventions(tmp_path):
    config = load_config(tmp_path)
    assert config == SiteConfig()
    assert config.output_dir == "public"
    assert config.posts_dir == "posts"
    assert config.template_dir == "template"
    assert config.static_dir == "static"
    assert config.stylesheet == "style.css"
    assert config.highlight_style == "gruvbox-dark"
    assert config.about_title == "About me"
    assert config.resolve(tmp_path, "posts_dir") == tmp_path / "posts"


def test_config_file_overrides_known_keys(tmp_path):
    (tmp_path / "inkpost.yaml").write_text(
        "output_dir: dist\nhighlight_style: monokai\nport: 4000\n", encoding="utf-8"
    )
    config = load_config(tmp_path)
    assert config.output_dir == "dist"
    assert config.highlight_style == "monokai"
    assert config.posts_dir == "posts"
    assert not hasattr(config, "port")


def test_empty_config_file_uses_defaults(tmp_path):
    (tmp_path / "inkpost.yaml").write_text("", encoding="utf-8")
    assert load_config(tmp_path) == SiteConfig()


@pytest.mark.parametrize(
    "text, message",
    [
        ("- a\n- b\n", "expected a mapping"),
        ("output_dir: [unclosed\n", "invalid YAML"),
        ("output_dir: 3\n", "'output_dir' must be a non-empty string"),
        ("stylesheet: ''\n", "'stylesheet' must be a non-empty string"),
    ],
)
def test_invalid_config_files(tmp_path, text, message):
    (tmp_path / "inkpost.yaml").write_text(text, encoding="utf-8")
    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)


def test_default_paths_pass_check(tmp_path):
    SiteConfig().check_paths(tmp_path)
    SiteConfig(output_dir="../site").check_paths(tmp_path / "blog")


@pytest.mark.parametrize(
    "output_dir, message",
    [
        ("posts", "overlaps 'posts_dir'"),
        ("template", "overlaps 'template_dir'"),
        ("static/out", "overlaps 'static_dir'"),
        ("posts/..", "must not contain the project root"),
        (".", "must not contain the project root"),
        ("..", "must not contain the project root"),
    ],
)
def test_output_dir_must_not_overlap_sources(tmp_path, output_dir, message):
    with pytest.raises(ConfigError, match=message):
        SiteConfig(output_dir=output_dir).check_paths(tmp_path)


def test_output_dir_containing_a_source_dir_is_rejected(tmp_path):
    config = SiteConfig(output_dir="site", posts_dir="site/posts")
    with pytest.raises(ConfigError, match="overlaps 'posts_dir'"):
        config.check_paths(tmp_path)


def test_from_mapping_ignores_unknown_keys():
    config = SiteConfig.from_mapping({"about_title": "Me", "unknown": 1})
    assert config == SiteConfig(about_title="Me")
    assert SiteConfig.from_mapping({}).resolve(Path("root"), "output_dir") == Path("root/public")
