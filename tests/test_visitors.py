import io

import pytest

from htmleditor.nodes import ElementNode, TextNode
from htmleditor.visitors import (
    COLOR_END,
    COLOR_RED,
    DirTreeVisitor,
    PrintTreeVisitor,
    SpellChecker,
    SpellCheckVisitor,
    build_dir_tree,
)


def _skeleton():
    html = ElementNode("html", "html")
    head = ElementNode("head", "head")
    head.add_child(ElementNode("title", "title"))
    html.add_child(head)
    html.add_child(ElementNode("body", "body"))
    return html


@pytest.fixture
def dic_file(tmp_path):
    path = tmp_path / "en_US.dic"
    path.write_text("5\nhello\nworld\ncomputer/S\nlanguage/SM\nbeautiful\n", encoding="utf-8")
    return path


def test_print_tree_with_ids():
    out = io.StringIO()
    _skeleton().accept(PrintTreeVisitor(show_id=True, out=out))
    assert out.getvalue() == (
        "html#html\n"
        "└── head#head\n"
        "    └── title#title\n"
        "└── body#body\n"
    )


def test_print_tree_without_ids_skips_deleted():
    html = _skeleton()
    html.children[0].remove()
    out = io.StringIO()
    html.accept(PrintTreeVisitor(out=out))
    assert out.getvalue() == "html\n└── body\n"


def test_print_tree_deeper_levels():
    html = ElementNode("html", "html")
    body = ElementNode("body", "body")
    html.add_child(body)
    div = ElementNode("div", "d")
    body.add_child(div)
    div.add_child(ElementNode("p", "a"))
    div.add_child(ElementNode("p", "b"))
    body.add_child(ElementNode("span", "s"))
    out = io.StringIO()
    html.accept(PrintTreeVisitor(show_id=True, out=out))
    assert out.getvalue().splitlines() == [
        "html#html",
        "└── body#body",
        "    ├── div#d",
        "    │   ├── p#a",
        "    │   └── p#b",
        "    └── span#s",
    ]


def test_print_tree_marks_text_with_error():
    p = ElementNode("p", "p1")
    p.text = "wrod"
    p.children[0].has_error = True
    out = io.StringIO()
    p.accept(PrintTreeVisitor(out=out))
    assert out.getvalue() == f"p\n└── [{COLOR_RED}x{COLOR_END}]wrod\n"


def test_simple_spell_check(dic_file):
    checker = SpellChecker.from_dic(dic_file)
    good = ["hello", "world", "computer", "language", "beautiful"]
    bad = ["helloo", "worlld", "cmputer", "languaage", "beutiful"]
    assert all(checker.check(word) for word in good)
    assert not any(checker.check(word) for word in bad)


def test_spell_check_visitor_flags_errors(dic_file):
    html = ElementNode("html", "html")
    p1 = ElementNode("p", "p1")
    p1.text = "Hello helloo World"
    p2 = ElementNode("p", "p2")
    p2.text = "beautiful computer"
    html.add_child(p1)
    html.add_child(p2)
    out = io.StringIO()
    visitor = SpellCheckVisitor(SpellChecker.from_dic(dic_file), out=out)
    html.accept(visitor)
    assert visitor.misspelled == [("p1", "helloo")]
    assert p1.children[0].has_error is True
    assert p2.children[0].has_error is False
    assert out.getvalue() == f"{COLOR_RED}Mis-spell on node[p1]: helloo{COLOR_END}\n"


def test_spell_check_clears_previous_error(dic_file):
    p = ElementNode("p", "p1")
    p.text = "hello"
    p.children[0].has_error = True
    p.accept(SpellCheckVisitor(SpellChecker.from_dic(dic_file), out=io.StringIO()))
    assert p.children[0].has_error is False


def test_spell_check_skips_children_of_deleted_element(dic_file):
    p = ElementNode("p", "p1")
    p.text = "wrongg"
    p.remove()
    visitor = SpellCheckVisitor(SpellChecker.from_dic(dic_file), out=io.StringIO())
    p.accept(visitor)
    assert visitor.misspelled == []


def test_build_dir_tree(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "x.txt").write_text("x")
    (tmp_path / "b.txt").write_text("b")
    root = build_dir_tree(tmp_path)
    assert root.tag == tmp_path.name
    assert [c.is_text for c in root.children] == [False, True]
    assert root.children[0].tag == "a"
    assert root.children[0].children[0].text == "x.txt"
    assert root.children[1].text == "b.txt"


def test_dir_tree_visitor_prints(tmp_path):
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "x.txt").write_text("x")
    (tmp_path / "b.txt").write_text("b")
    out = io.StringIO()
    root = DirTreeVisitor(out=out).print_tree(tmp_path)
    assert root.tag == tmp_path.name
    assert out.getvalue() == f"{tmp_path.name}\n└── a\n    └── x.txt\n└── b.txt\n"