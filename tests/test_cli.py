from pathlib import Path

from click.testing import CliRunner

from inkpost import __version__
from inkpost.cli import cli, render_post_source
from inkpost.frontmatter import parse_metadata, split_frontmatter


class FakePrompt:
    def __init__(self, answer):
        self.answer = answer

    def ask(self):
        return self.answer


def fake_text(answers):
    remaining = list(answers)

    def text(message, **kwargs):
        return FakePrompt(remaining.pop(0))

    return text


def test_cli_new_scaffolds_project(tmp_path):
    runner = CliRunner()
    target = tmp_path / "blog"
    result = runner.invoke(cli, ["new", str(target)])
    assert result.exit_code == 0
    for rel in (
        "posts/hello-world.md",
        "static/style.css",
        "template/header.html",
        "template/footer.html",
        "template/post.html",
        "template/index.html",
        "template/about.html",
    ):
        assert (target / rel).exists(), rel

    # fails on non-empty directory
    result = runner.invoke(cli, ["new", str(target)])
    assert result.exit_code != 0
    assert "non-empty directory" in result.output


def test_cli_build_scaffolded_project(monkeypatch, tmp_path):
    runner = CliRunner()
    project = tmp_path / "blog"
    runner.invoke(cli, ["new", str(project)])
    monkeypatch.chdir(project)

    result = runner.invoke(cli, ["build"], catch_exceptions=False)

    assert result.exit_code == 0
    assert "Built 1 posts into" in result.output
    public = project / "public"
    post_html = (public / "posts" / "hello-world.html").read_text(encoding="utf-8")
    assert "<title>Hello, world</title>" in post_html
    assert 'class="highlight"' in post_html
    index_html = (public / "index.html").read_text(encoding="utf-8")
    assert '<a href="posts/hello-world.html">Hello, world</a>' in index_html
    assert '<dt id="tag-meta">meta</dt>' in index_html
    about_html = (public / "about.html").read_text(encoding="utf-8")
    assert "<h1>About me</h1>" in about_html
    assert (public / "style.css").exists()


def test_cli_build_failure_reports_stage_and_file(monkeypatch, tmp_path):
    runner = CliRunner()
    project = tmp_path / "blog"
    runner.invoke(cli, ["new", str(project)])
    (project / "static" / "style.css").unlink()
    monkeypatch.chdir(project)

    result = runner.invoke(cli, ["build"])

    assert result.exit_code == 1
    assert "Build failed:" in result.output
    assert "Stage: copy assets" in result.output
    assert f"File: {Path('static') / 'style.css'}" in result.output
    assert "Error copying styles" in result.output


def test_cli_post_creates_parseable_post(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("inkpost.cli.questionary.text", fake_text(["A summary", "go, web"]))

    result = CliRunner().invoke(cli, ["post", "My First Post!"], catch_exceptions=False)

    assert result.exit_code == 0
    target = tmp_path / "posts" / "my-first-post.md"
    assert f"Created {Path('posts') / 'my-first-post.md'}" in result.output
    meta, body = split_frontmatter(target.read_bytes())
    metadata = parse_metadata(meta, "my-first-post")
    assert metadata.title == "My First Post!"
    assert metadata.description == "A summary"
    assert metadata.tags == ("go", "web")
    assert metadata.language == "en"
    assert body == "\n# My First Post!\n\n"


def test_cli_post_prompts_for_title_and_refuses_duplicates(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("inkpost.cli.questionary.text", fake_text(["Hello", "", ""]))
    runner = CliRunner()

    result = runner.invoke(cli, ["post"], catch_exceptions=False)
    assert result.exit_code == 0
    assert (tmp_path / "posts" / "hello.md").exists()

    monkeypatch.setattr("inkpost.cli.questionary.text", fake_text(["", ""]))
    result = runner.invoke(cli, ["post", "Hello"])
    assert result.exit_code != 0
    assert "already exists" in result.output


def test_cli_post_respects_configured_posts_dir(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "inkpost.yaml").write_text("posts_dir: content\n", encoding="utf-8")
    monkeypatch.setattr("inkpost.cli.questionary.text", fake_text(["", ""]))
    result = CliRunner().invoke(cli, ["post", "Elsewhere"], catch_exceptions=False)
    assert result.exit_code == 0
    assert (tmp_path / "content" / "elsewhere.md").exists()


def test_cli_post_aborts_when_prompt_cancelled(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("inkpost.cli.questionary.text", fake_text([None]))
    result = CliRunner().invoke(cli, ["post"])
    assert result.exit_code == 1
    assert not (tmp_path / "posts").exists()


def test_render_post_source_round_trips_date():
    from datetime import datetime, timezone

    text = render_post_source("T", date=datetime(2024, 1, 2, 3, 4, 5, 999, tzinfo=timezone.utc))
    meta, _ = split_frontmatter(text)
    metadata = parse_metadata(meta, "t")
    assert metadata.date == datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert metadata.tags == ()


def test_version_option():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_module_main_entrypoint():
    from inkpost.__main__ import main

    assert callable(main)


def test_main_invokes_cli(monkeypatch):
    import inkpost.cli as cli_mod

    called = {}

    def fake_cli():
        called["ran"] = True

    monkeypatch.setattr(cli_mod, "cli", fake_cli)
    cli_mod.main()
    assert called["ran"]
