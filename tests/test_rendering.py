from datetime import date

from folio.documents import Document
from folio.listing import ListingOptions, build_listing
from folio.rendering import ListingRenderer


def sample_listing(**options):
    documents = [
        Document(
            id="2024-08-27-hello",
            title="Hello & Welcome",
            url="/hello/",
            content="<p>First <em>post</em> body.</p>",
            published_at=date(2024, 8, 27),
        ),
        Document(
            id="2024-08-20-older",
            title="Older",
            url="/older/",
            content="",
            published_at=date(2024, 8, 20),
        ),
    ]
    return build_listing(documents, ListingOptions(**options))


def test_default_template_renders_entries_in_order():
    html = ListingRenderer().render(sample_listing())
    assert html.index("Hello &amp; Welcome") < html.index("Older")
    assert '<a class="post-link" href="/hello/">' in html
    assert "August 27, 2024" in html
    assert "<p>First post body.</p>" in html
    # empty excerpts render no paragraph
    assert html.count("<p>") == 1


def test_root_url_applied_to_links():
    html = ListingRenderer(root_url="https://example.com/blog/").render(sample_listing())
    assert 'href="https://example.com/blog/hello/"' in html


def test_custom_template_file(tmp_path):
    template = tmp_path / "list.html"
    template.write_text(
        "<h1>{{ site.title }}</h1>{% for e in entries %}[{{ e.title }}]{% endfor %}",
        encoding="utf-8",
    )
    renderer = ListingRenderer(template, site={"title": "My <Blog>"})
    html = renderer.render(sample_listing(limit=1))
    assert html == "<h1>My &lt;Blog&gt;</h1>[Hello &amp; Welcome]"


def test_render_string_autoescapes():
    renderer = ListingRenderer()
    out = renderer.render_string(
        "{% for e in entries %}{{ e.title }};{% endfor %}", sample_listing()
    )
    assert out == "Hello &amp; Welcome;Older;"

