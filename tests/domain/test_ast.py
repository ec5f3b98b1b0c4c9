"""Tests for the document tree variant and its JSON form."""

from kleinboy.domain.ast import (
    Code,
    Frontmatter,
    Heading,
    Html,
    Image,
    InlineCode,
    Leaf,
    Parent,
    Text,
    children_of,
    node_to_dict,
)


class TestNodeTypes:
    def test_type_names_follow_mdast(self) -> None:
        assert Text("a").type == "text"
        assert InlineCode("a").type == "inlineCode"
        assert Code("a").type == "code"
        assert Image("a.png").type == "image"
        assert Html("<br>").type == "html"
        assert Heading(1).type == "heading"
        assert Frontmatter("toml", "").type == "toml"
        assert Leaf("thematicBreak").type == "thematicBreak"

    def test_children_of_containers(self) -> None:
        text = Text("x")
        assert children_of(Parent("paragraph", [text])) == [text]
        assert children_of(Heading(2, [text])) == [text]

    def test_children_of_leaves_is_none(self) -> None:
        assert children_of(Text("x")) is None
        assert children_of(Code("x")) is None
        assert children_of(Frontmatter("yaml", "a: 1")) is None


class TestNodeToDict:
    def test_nested_tree(self) -> None:
        root = Parent(
            "root",
            [
                Frontmatter("yaml", "title: A"),
                Heading(1, [Text("Hello")]),
                Parent("paragraph", [InlineCode("x"), Leaf("break")]),
            ],
        )
        assert node_to_dict(root) == {
            "type": "root",
            "children": [
                {"type": "yaml", "value": "title: A"},
                {"type": "heading", "depth": 1, "children": [{"type": "text", "value": "Hello"}]},
                {
                    "type": "paragraph",
                    "children": [{"type": "inlineCode", "value": "x"}, {"type": "break"}],
                },
            ],
        }

    def test_code_without_lang_omits_key(self) -> None:
        assert node_to_dict(Code("print(1)")) == {"type": "code", "value": "print(1)"}
        assert node_to_dict(Code("x", lang="py"))["lang"] == "py"

    def test_image_keeps_empty_alt(self) -> None:
        assert node_to_dict(Image("a.png")) == {"type": "image", "url": "a.png", "alt": ""}

    def test_parent_attrs_are_merged(self) -> None:
        link = Parent("link", [Text("site")], attrs={"url": "https://example.com"})
        assert node_to_dict(link)["url"] == "https://example.com"
