"""Tests for the mistune-backed markdown pipeline."""

from __future__ import annotations

import pytest

from kleinboy.domain.ast import Code, Frontmatter, Heading, Image, Parent, Text
from kleinboy.domain.extract import extract_images, extract_title, find_texts
from kleinboy.infrastructure.markdown import MarkdownPipeline, split_frontmatter

DOCUMENT = """\
# Title

Some *text* and `code`.

![alt text](img/a.png)

```py
print(1)
```
"""


@pytest.fixture
def pipeline() -> MarkdownPipeline:
    return MarkdownPipeline()


class TestSplitFrontmatter:
    def test_yaml_block(self) -> None:
        node, body = split_frontmatter("---\ntitle: A\n---\n# Hi\n")
        assert node == Frontmatter("yaml", "title: A")
        assert body == "# Hi\n"

    def test_toml_block(self) -> None:
        node, body = split_frontmatter('+++\ntitle = "A"\n+++\nbody\n')
        assert node == Frontmatter("toml", 'title = "A"')
        assert body == "body\n"

    def test_empty_block(self) -> None:
        node, body = split_frontmatter("---\n---\ntext\n")
        assert node == Frontmatter("yaml", "")
        assert body == "text\n"

    def test_crlf_line_endings(self) -> None:
        node, _body = split_frontmatter("---\r\ntitle: A\r\n---\r\n")
        assert node == Frontmatter("yaml", "title: A")

    def test_no_block(self) -> None:
        node, body = split_frontmatter("# Hi\n")
        assert node is None
        assert body == "# Hi\n"

    def test_block_not_at_start_is_ignored(self) -> None:
        node, _body = split_frontmatter("intro\n---\ntitle: A\n---\n")
        assert node is None


class TestParse:
    def test_root_structure(self, pipeline: MarkdownPipeline) -> None:
        root = pipeline.parse(DOCUMENT).root
        assert root.type == "root"
        heading = root.children[0]
        assert isinstance(heading, Heading)
        assert heading.depth == 1
        assert heading.children == [Text("Title")]

    def test_extracted_fields(self, pipeline: MarkdownPipeline) -> None:
        root = pipeline.parse(DOCUMENT).root
        assert extract_title(root) == "Title"
        assert extract_images(root) == ["img/a.png"]
        assert "code" in list(find_texts(root))

    def test_code_block(self, pipeline: MarkdownPipeline) -> None:
        root = pipeline.parse(DOCUMENT).root
        codes = [node for node in root.children if isinstance(node, Code)]
        assert codes == [Code("print(1)", lang="py")]

    def test_image_alt(self, pipeline: MarkdownPipeline) -> None:
        root = pipeline.parse("![a *b*](x.png)\n").root
        paragraph = root.children[0]
        assert isinstance(paragraph, Parent)
        image = paragraph.children[0]
        assert isinstance(image, Image)
        assert image.url == "x.png"
        assert image.alt == "a b"

    def test_frontmatter_becomes_first_child(self, pipeline: MarkdownPipeline) -> None:
        root = pipeline.parse("---\ntitle: A\n---\n# Heading\n").root
        assert root.children[0] == Frontmatter("yaml", "title: A")
        assert extract_title(root) == "Heading"

    def test_paragraph_and_emphasis_names(self, pipeline: MarkdownPipeline) -> None:
        root = pipeline.parse("Some *text*\n").root
        paragraph = root.children[0]
        assert isinstance(paragraph, Parent)
        assert paragraph.type == "paragraph"
        assert [child.type for child in paragraph.children] == ["text", "emphasis"]


class TestRenderHtml:
    def test_renders_parsed_tokens(self, pipeline: MarkdownPipeline) -> None:
        html = pipeline.render_html(pipeline.parse(DOCUMENT))
        assert "<h1>Title</h1>" in html
        assert 'src="img/a.png"' in html
        assert "<em>text</em>" in html

    def test_frontmatter_is_not_rendered(self, pipeline: MarkdownPipeline) -> None:
        html = pipeline.render_html(pipeline.parse("---\nsecret: 1\n---\nbody\n"))
        assert "secret" not in html
        assert "<p>body</p>" in html

    def test_table_plugin(self, pipeline: MarkdownPipeline) -> None:
        html = pipeline.render_html(pipeline.parse("| a | b |\n|---|---|\n| 1 | 2 |\n"))
        assert "<table>" in html
