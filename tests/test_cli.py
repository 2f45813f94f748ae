import json
from pathlib import Path

from click.testing import CliRunner

from folio import __version__
from folio.cli import cli


def create_project(root: Path) -> Path:
    posts = root / "posts"
    posts.mkdir(parents=True)
    (posts / "2024-08-27-first.md").write_text(
        "---\ntitle: First\n---\nHello <b>world</b>, this is a test.\n", encoding="utf-8"
    )
    (posts / "2024-08-20-second.md").write_text(
        "---\ntitle: Second\n---\nSecond body.\n", encoding="utf-8"
    )
    (posts / "undated.md").write_text("---\ntitle: Undated\n---\nx\n", encoding="utf-8")
    (posts / "_draft.md").write_text(
        "---\ntitle: Draft\ndate: 2024-09-01\n---\nWip.\n", encoding="utf-8"
    )
    return posts


def test_version():
    result = CliRunner().invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_list_text(monkeypatch, tmp_path):
    create_project(tmp_path)
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["list"], catch_exceptions=False)
    assert result.exit_code == 0
    lines = result.output.strip().splitlines()
    assert lines == [
        "August 27, 2024  First  /first/",
        "August 20, 2024  Second  /second/",
    ]


def test_list_json_with_overrides(tmp_path):
    posts = create_project(tmp_path)
    result = CliRunner().invoke(
        cli,
        ["list", str(posts), "--json", "--order", "date_asc", "--limit", "2", "--drafts"],
        catch_exceptions=False,
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [item["title"] for item in payload] == ["Second", "First"]
    assert payload[1]["date"] == "2024-08-27"
    assert payload[1]["excerpt"] == "Hello world, this is a test."


def test_list_reports_skipped_documents(tmp_path):
    posts = create_project(tmp_path)
    (posts / "bad.md").write_text("---\ndate: 2024-01-01\n---\n", encoding="utf-8")
    result = CliRunner().invoke(cli, ["list", str(posts)], catch_exceptions=False)
    assert result.exit_code == 0
    assert "Skipped:" in result.output
    assert "bad.md" in result.output


def test_missing_source_directory_exits_with_error(tmp_path):
    result = CliRunner().invoke(cli, ["list", str(tmp_path / "missing")])
    assert result.exit_code == 1
    assert "Load failed" in result.output


def test_invalid_config_is_reported(monkeypatch, tmp_path):
    create_project(tmp_path)
    (tmp_path / "folio.yaml").write_text("sort_order: sideways\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(cli, ["list"])
    assert result.exit_code != 0
    assert "Invalid configuration" in result.output


def test_render_writes_html_and_feed(monkeypatch, tmp_path):
    create_project(tmp_path)
    (tmp_path / "folio.yaml").write_text(
        "title: My Blog\nurl: https://example.com\nlimit: 1\n", encoding="utf-8"
    )
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(
        cli,
        ["render", "--output", "out/index.html", "--feed", "out/rss.xml"],
        catch_exceptions=False,
    )
    assert result.exit_code == 0
    html = (tmp_path / "out" / "index.html").read_text(encoding="utf-8")
    assert 'href="https://example.com/first/"' in html
    assert "Second" not in html
    feed = (tmp_path / "out" / "rss.xml").read_text(encoding="utf-8")
    assert "<title>My Blog</title>" in feed


def test_render_to_stdout_with_template(monkeypatch, tmp_path):
    posts = create_project(tmp_path)
    template = tmp_path / "t.html"
    template.write_text("{% for e in entries %}{{ e.title }}|{% endfor %}", encoding="utf-8")
    result = CliRunner().invoke(
        cli,
        ["render", str(posts), "--template", str(template), "--feed", str(tmp_path / "f.xml")],
        catch_exceptions=False,
    )
    assert result.exit_code == 0
    assert "First|Second|" in result.output
    assert "Feed skipped" in result.output
    assert not (tmp_path / "f.xml").exists()
