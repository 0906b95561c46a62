import pytest

from htmleditor.parser import Html5Parser

FOO_HTML = (
    "<html>\n"
    "  <head>\n"
    "  </head>\n"
    "  <body>\n"
    '    <p id="p1">\n'
    "      Hello World\n"
    "    </p>\n"
    "  </body>\n"
    "</html>\n"
)


@pytest.fixture
def foo_file(tmp_path):
    path = tmp_path / "foo.html"
    path.write_text(FOO_HTML, encoding="utf-8")
    return path


def test_parse(foo_file):
    root = Html5Parser().parse(foo_file)
    assert root.tag == "html"
    children = root.children
    assert len(children) == 2
    assert children[0].tag == "head"


def test_parse_round_trip(foo_file):
    root = Html5Parser().parse(foo_file)
    assert root.to_html() == FOO_HTML


def test_parse_sets_ids_and_parents(foo_file):
    root = Html5Parser().parse(foo_file)
    body = root.children[1]
    p = body.children[0]
    assert p.id == "p1"
    assert p.parent is body
    assert p.text == "Hello World"


def test_parse_string_drops_comments_and_splits_text():
    root = Html5Parser().parse_string('<p id="a"> hi <!-- note --> there </p>')
    p = root.children[1].children[0]
    assert [child.text for child in p.children] == ["hi", "there"]
    assert all(child.is_text for child in p.children)


def test_parse_string_without_ids_uses_tag():
    root = Html5Parser().parse_string("<div><span>x</span></div>")
    div = root.children[1].children[0]
    assert div.id == "div"
    assert div.children[0].tag == "span"
    assert div.children[0].text == "x"


def test_parse_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Html5Parser().parse(tmp_path / "missing.html")