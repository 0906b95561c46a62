import io

import pytest

from htmleditor.commands import (
    AppendCommand,
    DeleteCommand,
    EditIdCommand,
    EditTextCommand,
    InsertCommand,
    PrintTreeCommand,
    SpellCheckCommand,
)
from htmleditor.document import DocumentError, HtmlDoc
from htmleditor.visitors import SpellChecker


@pytest.fixture
def doc():
    document = HtmlDoc()
    document.init()
    return document


def test_simple_command(doc):
    doc.execute(AppendCommand("p", "test", "html", "Hi, test command"))
    children = doc.root.children
    assert children[2].tag == "p"
    assert children[2].id == "test"
    assert children[2].text == "Hi, test command"


def test_complex_command(doc):
    doc.execute(AppendCommand("p", "test", "html", "Hi, test command"))
    doc.execute(InsertCommand("p", "test2", "test", ""))
    children = doc.root.children
    assert children[2].id == "test2"

    doc.undo()
    doc.undo()
    children = doc.root.children
    assert len(children) == 4
    assert children[2].deleted is True
    assert children[3].deleted is True
    assert doc.has_changes() is False

    doc.redo()
    doc.redo()
    children = doc.root.children
    assert children[2].deleted is False
    assert children[3].deleted is False

    doc.execute(EditIdCommand("test2", "test3"))
    doc.execute(DeleteCommand("test3"))
    assert children[2].deleted is True


def test_insert_without_text_has_no_children(doc):
    doc.execute(InsertCommand("div", "box", "body"))
    node = doc.find("box")
    assert node.children == []
    assert doc.root.children[1] is node


def test_insert_failure_is_not_recorded(doc):
    with pytest.raises(DocumentError, match="null destination"):
        doc.execute(InsertCommand("p", "x", "missing"))
    assert doc.has_changes() is False
    assert doc.find("x") is None


def test_append_duplicate_id_fails(doc):
    with pytest.raises(DocumentError, match="existing id"):
        doc.execute(AppendCommand("p", "body", "html"))
    assert len(doc.root.children) == 2


def test_edit_id_undo(doc):
    doc.execute(EditIdCommand("body", "main"))
    assert doc.find("main").tag == "body"
    doc.undo()
    assert doc.find("main") is None
    assert doc.find("body").tag == "body"


def test_edit_text_and_undo(doc):
    doc.execute(AppendCommand("p", "para", "body", "old words"))
    node = doc.find("para")
    node.has_error = True
    doc.execute(EditTextCommand("para", "new words"))
    assert node.text == "new words"
    assert node.has_error is False
    doc.undo()
    assert node.text == "old words"
    assert node.has_error is True


def test_edit_text_missing_node(doc):
    with pytest.raises(DocumentError, match="No node with id: ghost is found"):
        doc.execute(EditTextCommand("ghost", "x"))


def test_delete_and_undo(doc):
    doc.execute(DeleteCommand("head"))
    assert doc.find("head") is None
    assert "<head" not in doc.root.to_html()
    doc.undo()
    assert doc.find("head").tag == "head"
    assert '<title id="title">' in doc.root.to_html()


def test_delete_missing_node(doc):
    with pytest.raises(DocumentError, match="non-existing node"):
        doc.execute(DeleteCommand("ghost"))


def test_spell_check_marks_errors_and_is_not_recorded(doc):
    doc.execute(AppendCommand("p", "para", "body", "hello wrold"))
    doc.undo()
    doc.redo()
    out = io.StringIO()
    doc.execute(SpellCheckCommand(SpellChecker(["hello", "world"]), out))
    text_node = doc.find("para").children[0]
    assert text_node.has_error is True
    assert "Mis-spell on node[para]: wrold" in out.getvalue()
    assert "hello" not in out.getvalue()
    doc.undo()
    assert doc.find("para") is None


def test_print_tree_uses_show_id(doc):
    out = io.StringIO()
    doc.execute(PrintTreeCommand(out))
    assert out.getvalue().splitlines() == [
        "html#html",
        "└── head#head",
        "    └── title#title",
        "└── body#body",
    ]
    assert doc.has_changes() is False


def test_print_tree_without_ids(doc):
    doc.show_id = False
    out = io.StringIO()
    doc.execute(PrintTreeCommand(out))
    assert out.getvalue().splitlines()[0] == "html"
    assert "#" not in out.getvalue()