from pathlib import Path

import pytest

from bread.assets import AssetPipeline
from bread.build import (
    DEFAULT_CONFIG,
    BuildError,
    BuildResult,
    _format_error_message,
    build_site,
    load_config,
)

BASE_TEMPLATE = (
    "<title>{{ title }}</title>"
    '<meta name="keywords" content="{{ keywords }}">'
    "<time>{{ date }}</time>"
    "<footer>{{ tags }}</footer>"
    "<main>{{ content }}</main>\n"
)
POSTS_TEMPLATE = (
    "<h1>{{ post_count }} posts</h1>"
    '<select id="tag-filter">{{ tag_options }}</select>'
    '<div class="posts-container">{{ posts }}</div>\n'
)


def create_project(tmp_path: Path, posts_template: bool = True) -> Path:
    project = tmp_path
    (project / "templates").mkdir()
    (project / "content").mkdir()
    (project / "templates" / "base.html").write_text(BASE_TEMPLATE, encoding="utf-8")
    if posts_template:
        (project / "templates" / "posts.html").write_text(
            POSTS_TEMPLATE, encoding="utf-8"
        )
    return project


def write_doc(project: Path, rel: str, text: str) -> Path:
    path = project / "content" / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def read_output(project: Path, rel: str) -> str:
    return (project / "public" / rel).read_text(encoding="utf-8")


def test_single_post_without_frontmatter(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "hello.md", "# Hi")

    result = build_site(project)

    assert isinstance(result, BuildResult)
    assert result.pages == [project / "public" / "hello.html"]
    html = read_output(project, "hello.html")
    assert "<title>Untitled</title>" in html
    assert "<h1>Hi</h1>" in html
    assert 'content=""' in html
    assert "<time></time>" in html
    assert "<footer></footer>" in html

    posts = read_output(project, "posts.html")
    assert "<h1>1 posts</h1>" in posts
    assert 'href="/bread/hello.html"' in posts
    assert result.posts_page == project / "public" / "posts.html"


def test_index_documents_are_rendered_but_not_listed(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "index.md", "---\ntitle: Home\ndate: 2024-01-01\n---\nWelcome")
    write_doc(project, "a.md", "---\ntitle: A\ndate: 2024-03-01\n---\nA body")
    write_doc(project, "b.md", "---\ntitle: B\ndate: 2024-02-01\n---\nB body")

    result = build_site(project)

    assert len(result.pages) == 3
    assert "<title>Home</title>" in read_output(project, "index.html")
    posts = read_output(project, "posts.html")
    assert "<h1>2 posts</h1>" in posts
    assert "index.html" not in posts
    assert posts.index('href="/bread/a.html"') < posts.index('href="/bread/b.html"')
    assert [p.title for p in result.posts] == ["A", "B"]


def test_block_tags_in_page_and_posts(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "post.md", "---\ntitle: Tags\ntags:\n- rust\n- web dev\n---\nBody")

    result = build_site(project)

    assert result.posts[0].tags == ["rust", "web dev"]
    html = read_output(project, "post.html")
    assert '<span class="tag">#rust</span><span class="tag">#webdev</span>' in html
    assert 'content="rust, web dev"' in html

    posts = read_output(project, "posts.html")
    assert 'data-tag="webdev">#webdev</span>' in posts
    assert (
        '<option value="rust">#rust</option><option value="webdev">#webdev</option>'
        in posts
    )


def test_tag_normalization_and_raw_keywords(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "post.md", "---\ntags:\n-   hello world  \n---\nBody")

    build_site(project)

    html = read_output(project, "post.html")
    assert "#helloworld" in html
    assert 'content="hello world"' in html
    assert "#helloworld" in read_output(project, "posts.html")


def test_slug_override_in_subdirectory(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "notes/2024-01-my-post.md", "---\nslug: intro\n---\nBody")

    result = build_site(project)

    assert result.pages == [project / "public" / "notes" / "intro.html"]
    assert result.posts[0].url == "/notes/intro.html"
    assert not (project / "public" / "notes" / "2024-01-my-post.html").exists()


def test_nested_urls(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "a/b/post.md", "Body")

    result = build_site(project)

    assert (project / "public" / "a" / "b" / "post.html").exists()
    assert result.posts[0].url == "/a/b/post.html"
    assert 'href="/bread/a/b/post.html"' in read_output(project, "posts.html")


def test_missing_closing_marker_keeps_text(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "half.md", "---\nhalf")

    build_site(project)

    html = read_output(project, "half.html")
    assert "<title>Untitled</title>" in html
    assert "<hr" in html
    assert "half" in html


def test_empty_content_tree(tmp_path, capsys):
    project = create_project(tmp_path, posts_template=False)
    (project / "static").mkdir()
    (project / "static" / "style.css").write_text("body{}", encoding="utf-8")

    result = build_site(project)

    assert result.pages == []
    assert len(result.posts) == 0
    assert result.posts_page is None
    assert not (project / "public" / "posts.html").exists()
    assert read_output(project, "style.css") == "body{}"
    assert "No markdown files found" in capsys.readouterr().out


def test_missing_content_directory_is_empty(tmp_path):
    project = create_project(tmp_path)
    (project / "content").rmdir()
    assert build_site(project).pages == []


def test_only_index_documents_need_no_posts_template(tmp_path):
    project = create_project(tmp_path, posts_template=False)
    write_doc(project, "index.md", "Home")
    write_doc(project, "docs/index.md", "Docs")

    result = build_site(project)

    assert len(result.pages) == 2
    assert result.posts_page is None
    assert (project / "public" / "docs" / "index.html").exists()


def test_post_list_placeholder(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "index.md", "# Home\n\n{{ post_list }}\n")
    write_doc(project, "a.md", "---\ntitle: A\ntags: x y\n---\nA")

    build_site(project)

    html = read_output(project, "index.html")
    assert '<div class="post-list">' in html
    assert '<a href="/a.html">A</a>' in html
    assert '<span class="tag">#xy</span>' in html


def test_post_list_placeholder_without_posts(tmp_path):
    project = create_project(tmp_path, posts_template=False)
    write_doc(project, "index.md", "{{ post_list }}")

    build_site(project)

    assert "<p>No posts found.</p>" in read_output(project, "index.html")


def test_build_is_deterministic(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "a.md", "---\ntitle: A\ndate: 2024-01-01\ntags: x\n---\nA")
    write_doc(project, "b/c.md", "---\ntitle: C\ndate: 2024-01-01\n---\n| a |\n|---|\n| 1 |\n")
    write_doc(project, "index.md", "{{ post_list }}")

    def snapshot():
        out = project / "public"
        return {p: p.read_bytes() for p in sorted(out.rglob("*")) if p.is_file()}

    build_site(project)
    first = snapshot()
    build_site(project)
    assert snapshot() == first


def test_static_assets_are_mirrored(tmp_path):
    project = create_project(tmp_path)
    static = project / "static"
    (static / "css").mkdir(parents=True)
    (static / "css" / "site.css").write_text("new", encoding="utf-8")
    (static / "script.js").write_text("js", encoding="utf-8")
    (project / "public" / "css").mkdir(parents=True)
    (project / "public" / "css" / "site.css").write_text("old", encoding="utf-8")

    build_site(project)

    assert read_output(project, "css/site.css") == "new"
    assert read_output(project, "script.js") == "js"


def test_asset_pipeline_missing_static_dir(tmp_path, capsys):
    pipeline = AssetPipeline(tmp_path / "static", tmp_path / "out")
    assert pipeline.run() == []
    assert "No static directory found" in capsys.readouterr().out
    assert not (tmp_path / "out").exists()


def test_asset_pipeline_returns_copied_files(tmp_path):
    static = tmp_path / "static"
    (static / "img").mkdir(parents=True)
    (static / "img" / "logo.png").write_bytes(b"\x89PNG")
    copied = AssetPipeline(static, tmp_path / "out").run()
    assert copied == [tmp_path / "out" / "img" / "logo.png"]
    assert copied[0].read_bytes() == b"\x89PNG"


def test_missing_base_template_is_fatal(tmp_path):
    project = create_project(tmp_path)
    (project / "templates" / "base.html").unlink()
    write_doc(project, "a.md", "A")

    with pytest.raises(BuildError) as excinfo:
        build_site(project)

    assert excinfo.value.source_path == project / "templates" / "base.html"
    assert "Template not found: base.html" in excinfo.value.message
    assert not (project / "public" / "a.html").exists()


def test_base_template_syntax_error(tmp_path):
    project = create_project(tmp_path)
    (project / "templates" / "base.html").write_text("{% for %}", encoding="utf-8")

    with pytest.raises(BuildError) as excinfo:
        build_site(project)

    assert "Template syntax error on line 1" in excinfo.value.message


def test_missing_posts_template_is_fatal_when_posts_exist(tmp_path):
    project = create_project(tmp_path, posts_template=False)
    write_doc(project, "a.md", "A")

    with pytest.raises(BuildError) as excinfo:
        build_site(project)

    assert "posts.html" in excinfo.value.message
    # Pages rendered before the failure are kept.
    assert (project / "public" / "a.html").exists()


def test_undefined_template_variable_is_fatal(tmp_path):
    project = create_project(tmp_path)
    (project / "templates" / "base.html").write_text("{{ author }}", encoding="utf-8")
    source = write_doc(project, "a.md", "A")

    with pytest.raises(BuildError) as excinfo:
        build_site(project)

    assert excinfo.value.source_path == source
    assert excinfo.value.message.startswith("Undefined variable:")


def test_unreadable_document_is_fatal_in_render_pass(tmp_path):
    project = create_project(tmp_path)
    source = project / "content" / "bad.md"
    source.write_bytes(b"\xff\xfe broken")

    with pytest.raises(BuildError) as excinfo:
        build_site(project)

    assert excinfo.value.source_path == source
    assert "Failed to read" in excinfo.value.message


def test_write_failure_is_fatal(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "sub/a.md", "A")
    (project / "public").mkdir()
    (project / "public" / "sub").write_text("not a directory", encoding="utf-8")

    with pytest.raises(BuildError) as excinfo:
        build_site(project)

    assert "Failed to write" in excinfo.value.message


def test_explicit_directories(tmp_path):
    project = create_project(tmp_path)
    (project / "docs").mkdir()
    (project / "docs" / "x.md").write_text("X", encoding="utf-8")
    (project / "tpl").mkdir()
    (project / "tpl" / "base.html").write_text("[{{ content }}]", encoding="utf-8")
    (project / "tpl" / "posts.html").write_text("{{ posts }}", encoding="utf-8")

    result = build_site(
        project, content_dir="docs", output_dir="site", template_dir="tpl", base_path=""
    )

    assert result.output_dir == project / "site"
    assert (project / "site" / "x.html").read_text(encoding="utf-8") == "[<p>X</p>\n]"
    assert 'href="/x.html"' in (project / "site" / "posts.html").read_text(encoding="utf-8")


def test_custom_collaborators(tmp_path):
    project = create_project(tmp_path)
    write_doc(project, "a.md", "---\ntitle: A\n---\nbody")

    class UpperMarkdown:
        def convert(self, text):
            return text.upper()

    class RecordingEngine:
        def __init__(self):
            self.calls = []

        def load(self, name):
            self.calls.append(("load", name))

        def render(self, name, context):
            self.calls.append(("render", name))
            return f"{name}:{context.get('content', context.get('post_count'))}"

    engine = RecordingEngine()
    build_site(project, markdown=UpperMarkdown(), engine=engine)

    assert read_output(project, "a.html") == "base:BODY"
    assert read_output(project, "posts.html") == "posts:1"
    assert engine.calls[0] == ("load", "base")


def test_load_config_defaults(tmp_path):
    assert load_config(tmp_path) == DEFAULT_CONFIG


def test_load_config_merges_file(tmp_path):
    (tmp_path / "bread.yaml").write_text(
        "base_path: /blog\noutput_dir: dist\n", encoding="utf-8"
    )
    config = load_config(tmp_path)
    assert config["base_path"] == "/blog"
    assert config["output_dir"] == "dist"
    assert config["content_dir"] == "content"


def test_load_config_ignores_non_mapping(tmp_path):
    (tmp_path / "bread.yaml").write_text("- just\n- a list\n", encoding="utf-8")
    assert load_config(tmp_path) == DEFAULT_CONFIG


def test_load_config_invalid_yaml(tmp_path):
    (tmp_path / "bread.yaml").write_text("base_path: [unclosed\n", encoding="utf-8")
    with pytest.raises(BuildError) as excinfo:
        load_config(tmp_path)
    assert excinfo.value.source_path == tmp_path / "bread.yaml"


def test_config_file_drives_build(tmp_path):
    project = create_project(tmp_path)
    (project / "bread.yaml").write_text(
        "base_path: /blog\nstatic_dir: assets\n", encoding="utf-8"
    )
    (project / "assets").mkdir()
    (project / "assets" / "app.js").write_text("x", encoding="utf-8")
    write_doc(project, "a.md", "A")

    build_site(project)

    assert 'href="/blog/a.html"' in read_output(project, "posts.html")
    assert read_output(project, "app.js") == "x"


def test_build_error_str():
    err = BuildError(Path("content/a.md"), "boom")
    assert str(err) == f"{Path('content/a.md')}: boom"
    assert err.original_error is None


def test_format_error_message():
    assert _format_error_message(TypeError("bad")) == "Type error: bad"
    assert _format_error_message(AttributeError("x")) == "Attribute error: x"
    assert _format_error_message(ValueError("v")) == "ValueError: v"
