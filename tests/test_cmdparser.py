from htmleditor.cmdparser import CmdParser


def test_positional_args():
    parser = CmdParser()
    parser.parse("insert body id1 id2 text")
    assert len(parser.positional_args) == 5
    assert parser.arg(4) == "text"


def test_options():
    parser = CmdParser()
    parser.parse("print -showid false")
    assert parser.positional_args == ["print"]
    assert parser.option("-showid") == "false"
    assert parser.option("-missing") == ""


def test_option_without_value():
    parser = CmdParser().parse("print -v")
    assert parser.options == {"-v": ""}
    assert parser.positional_args == ["print"]


def test_reparse_clears_previous_state():
    parser = CmdParser()
    parser.parse("print -showid false")
    parser.parse("undo")
    assert parser.positional_args == ["undo"]
    assert parser.options == {}


def test_arg_out_of_range():
    parser = CmdParser().parse("undo")
    assert parser.arg(1) == ""
    assert parser.arg(-1) == ""


def test_join():
    parser = CmdParser().parse("insert body id1 id2 text")
    assert parser.join(1, 3) == "body id1"
    assert parser.join(4, 5) == "text"
    assert parser.join(2, 100) == "id1 id2 text"


def test_join_empty_cases():
    parser = CmdParser().parse("insert body id1 id2 text")
    assert parser.join(5, 9) == ""
    assert parser.join(0, 0) == ""
    assert parser.join(-1, 3) == ""
    assert parser.join(3, 2) == ""