"""The interactive editor: open files, session persistence and command dispatch."""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Callable, TextIO

from htmleditor.cmdparser import CmdParser
from htmleditor.commands import (
    AppendCommand,
    Command,
    DeleteCommand,
    EditIdCommand,
    EditTextCommand,
    InsertCommand,
    PrintTreeCommand,
    SpellCheckCommand,
)
from htmleditor.document import DocumentError, HtmlDoc
from htmleditor.parser import Html5Parser, HtmlParser
from htmleditor.tags import TagRegistry
from htmleditor.visitors import COLOR_END, COLOR_RED, DirTreeVisitor, SpellChecker

PROMPT = "[HtmlEditor]>>"
INVALID_FORMAT = "Invalid cmd format!"

_FAILURES = (DocumentError, OSError, ValueError, IndexError, TypeError)


class HtmlEditor:
    """Manages the list of open documents and turns user commands into edits.

    The active document, when there is one, always has a parsed tree. The
    session (open files, their ``showID`` setting and the active index) is
    kept in a JSON file at ``workplace_path``.
    """

    def __init__(
        self,
        workplace_path: str = "./data/config.json",
        *,
        parser: HtmlParser | None = None,
        data_dir: str = "./data",
        ask: Callable[[str], str] | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
        spell_checker: SpellChecker | None = None,
    ) -> None:
        self.workplace_path = workplace_path
        self.data_dir = data_dir
        self.docs: list[HtmlDoc] = []
        self.active_index = -1
        self.tags = TagRegistry()
        self._cmd_parser = CmdParser()
        self._parser = parser if parser is not None else Html5Parser()
        self._input = ask if ask is not None else input
        self._out = out
        self._err = err
        self._spell_checker = spell_checker
        self._actions: dict[str, Callable[[list[str]], None]] = {
            "insert": self._cmd_insert,
            "append": self._cmd_append,
            "edit-id": self._cmd_edit_id,
            "edit-text": self._cmd_edit_text,
            "delete": self._cmd_delete,
            "spell-check": self._cmd_spell_check,
            "print-tree": self._cmd_print_tree,
            "read": self._cmd_read,
            "init": self._cmd_init,
            "save": self._cmd_save,
            "load": self._cmd_load,
            "close": self._cmd_close,
            "edit-list": self._cmd_edit_list,
            "edit": self._cmd_edit,
            "showid": self._cmd_showid,
            "dir-tree": self._cmd_dir_tree,
            "undo": self._cmd_undo,
            "redo": self._cmd_redo,
        }

    # ------------------------------------------------------------------ output

    def _say(self, message: str = "") -> None:
        print(message, file=self._out or sys.stdout)

    def _warn(self, message: str) -> None:
        print(message, file=self._err or sys.stderr)

    def _report(self, exc: BaseException) -> None:
        self._say(f"{COLOR_RED}{exc}{COLOR_END}")

    def _ask_user(self, description: str, question: str) -> bool:
        while True:
            self._say(description)
            try:
                answer = self._input(f"{question}[yes/no]").strip()
            except EOFError:
                return False
            if answer == "yes":
                return True
            if answer == "no":
                return False

    # ------------------------------------------------------------------ lookup

    @property
    def active_file(self) -> HtmlDoc | None:
        if 0 <= self.active_index < len(self.docs):
            return self.docs[self.active_index]
        return None

    def _find_by_path(self, path: str) -> int:
        return next((i for i, doc in enumerate(self.docs) if doc.file_path == path), -1)

    def _find_by_name(self, filename: str) -> int:
        target = Path(filename).name
        return next(
            (i for i, doc in enumerate(self.docs) if Path(doc.file_path).name == target),
            -1,
        )

    # ------------------------------------------------------------------ files

    def _build(self, filename: str) -> None:
        if not self._ask_user("This act will create a new file.", "Are you sure you wish to proceed?"):
            return
        fpath = str(Path(self.data_dir) / Path(filename).name)
        self._say(f"Initializing a new file, with default save path: {fpath}")
        if Path(fpath).exists():
            self._say("Create file failed: file already exists")
            return
        doc = HtmlDoc(fpath)
        doc.init()
        try:
            doc.save()
        except _FAILURES as exc:
            self._say("Create file failed")
            self._report(exc)
            return
        self._say(f"Initialized a new file, with default save path: {fpath}")
        self.docs.append(doc)
        self.active_index = len(self.docs) - 1

    def load_file(self, path: str) -> None:
        """Open ``path``, creating it first when it does not exist."""
        if not Path(path).exists():
            self._build(Path(path).name)
        previous = self.active_index
        self.active_index = self._find_by_path(path)
        if self.active_index != -1:
            self.switch_file(Path(path).name)
            return
        doc = HtmlDoc(path)
        try:
            doc.load(self._parser)
        except _FAILURES as exc:
            self._say("Load new file failed")
            self._report(exc)
            self.active_index = previous
            return
        self.docs.append(doc)
        self.active_index = len(self.docs) - 1

    def switch_file(self, filename: str) -> None:
        """Make the open file named ``filename`` the active one."""
        index = self._find_by_name(filename)
        if index == -1:
            self._say("Switch file failed: no target found")
            return
        previous = self.active_index
        self.active_index = index
        doc = self.docs[index]
        if doc.needs_parse():
            try:
                doc.load(self._parser)
            except _FAILURES as exc:
                self.active_index = previous
                self._say(f"Parse file: {doc.file_path} failed")
                self._report(exc)

    def save_file(self, filename: str) -> None:
        """Save the open file whose name matches that of ``filename``."""
        index = self._find_by_name(Path(filename).name)
        if index == -1:
            self._say("No target found for saving")
            return
        try:
            self.docs[index].save()
        except _FAILURES as exc:
            self._say("Save file failed")
            self._report(exc)

    def save_current(self) -> None:
        doc = self.active_file
        if doc is None:
            return
        try:
            doc.save()
        except _FAILURES as exc:
            self._say("Save file failed")
            self._report(exc)

    def save_all(self) -> None:
        """Offer to save every open file with unsaved changes."""
        for doc in self.docs:
            if not doc.has_changes():
                continue
            filename = Path(doc.file_path).name
            if self._ask_user(f"{filename} has unsaved changes", "Do you want to save them?"):
                try:
                    doc.save()
                except _FAILURES as exc:
                    self._say(f"{COLOR_RED}saving {filename} failed{COLOR_END}")
                    self._report(exc)

    def close_current(self) -> None:
        if self.active_file is None:
            return
        del self.docs[self.active_index]
        self.active_index = 0 if self.docs else -1

    # ------------------------------------------------------------------ session

    def save_session(self) -> None:
        """Write the open files and the active index to the session file."""
        path = Path(self.workplace_path)
        settings = {
            "activeIndex": self.active_index,
            "openFiles": [{"filePath": doc.file_path, "showID": doc.show_id} for doc in self.docs],
        }
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(settings, indent=4), encoding="utf-8")
        except OSError as exc:
            self._warn(f"Session saved with error: {exc}")
            return
        self._say("Session saved normally.")

    def load_session(self) -> None:
        """Replace the open files with those recorded in the session file."""
        self.docs = []
        self.active_index = -1
        path = Path(self.workplace_path)
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError:
            self._warn(f"Failed to open config file{path}")
            self._say("Open editor with blank working place")
            return
        try:
            settings = json.loads(raw)
        except json.JSONDecodeError as exc:
            self._warn(f"JSON parsing error: {exc}")
            self._say("Open editor with blank working place")
            return
        if not isinstance(settings, dict):
            settings = {}

        open_files = settings.get("openFiles")
        if isinstance(open_files, list):
            for item in open_files:
                if (
                    isinstance(item, dict)
                    and isinstance(item.get("filePath"), str)
                    and isinstance(item.get("showID"), bool)
                ):
                    self.docs.append(HtmlDoc(item["filePath"], item["showID"]))

        active = settings.get("activeIndex")
        if isinstance(active, int) and not isinstance(active, bool):
            self.active_index = active
        if self.active_index < 0 or self.active_index > len(self.docs) - 1:
            self.active_index = 0
        if not self.docs:
            self.active_index = -1

        doc = self.active_file
        if doc is not None:
            doc.load(self._parser)

        self._say("Session loaded successfully")
        self.list_files()

    def list_files(self) -> list[str]:
        """Print the open files, marking the active one and unsaved ones."""
        self._say("OpenFiles:")
        if not self.docs:
            self._say("None")
            return []
        lines = []
        for i, doc in enumerate(self.docs):
            marker = "  >" if i == self.active_index else "   "
            suffix = "*" if doc.has_changes() else ""
            line = f"{marker}{Path(doc.file_path).name}{suffix}"
            self._say(line)
            lines.append(line)
        return lines

    # ------------------------------------------------------------------ commands

    def handle_command(self, cmd: str) -> None:
        """Parse one line of user input and carry it out."""
        self._cmd_parser.parse(cmd)
        args = list(self._cmd_parser.positional_args)
        act = self._cmd_parser.arg(0)
        if self.active_file is None:
            if act == "load":
                self._cmd_load(args)
            else:
                self._say("workplace is empty, must load a file first")
            return
        action = self._actions.get(act)
        if action is None:
            self._say("Invalid command")
            return
        action(args)

    def _run(self, command: Command, done: str | None = None) -> None:
        try:
            self.active_file.execute(command)
        except _FAILURES as exc:
            self._report(exc)
            return
        if done is not None:
            self._say(done)

    def _cmd_insert(self, args: list[str]) -> None:
        if len(args) < 4:
            self._say(INVALID_FORMAT)
            return
        if not self.tags.is_valid(args[1]):
            self._say("Invalid tag!")
            return
        text = self._cmd_parser.join(4, len(args))
        self._run(InsertCommand(args[1], args[2], args[3], text), "Node has been inserted")

    def _cmd_append(self, args: list[str]) -> None:
        if len(args) < 4:
            self._say(INVALID_FORMAT)
            return
        if not self.tags.is_valid(args[1]):
            self._say("Invalid tag!")
            return
        text = self._cmd_parser.join(4, len(args))
        self._run(AppendCommand(args[1], args[2], args[3], text), "Node has been appended")

    def _cmd_edit_id(self, args: list[str]) -> None:
        if len(args) != 3:
            self._say(INVALID_FORMAT)
            return
        self._run(EditIdCommand(args[1], args[2]), "Id has been changed")

    def _cmd_edit_text(self, args: list[str]) -> None:
        if len(args) < 2:
            self._say(INVALID_FORMAT)
            return
        text = self._cmd_parser.join(2, len(args))
        self._run(EditTextCommand(args[1], text), "Text has been changed")

    def _cmd_delete(self, args: list[str]) -> None:
        if len(args) != 2:
            self._say(INVALID_FORMAT)
            return
        self._run(DeleteCommand(args[1]), "Node has been deleted")

    def _cmd_spell_check(self, args: list[str]) -> None:
        if len(args) != 1:
            self._say(INVALID_FORMAT)
            return
        self._say("Performing spell check, any mis-spell(if found) will be listed below")
        self._run(SpellCheckCommand(self._spell_checker, self._out), "Spell check done")

    def _cmd_print_tree(self, args: list[str]) -> None:
        if len(args) != 1:
            self._say(INVALID_FORMAT)
            return
        self._run(PrintTreeCommand(self._out))

    def _cmd_read(self, args: list[str]) -> None:
        if len(args) != 2:
            self._say(INVALID_FORMAT)
            return
        if self._ask_user(
            "This command will overwrite the current content without saving your changes.",
            "Are you sure you wish to proceed?",
        ):
            doc = self.active_file
            try:
                doc.file_path = args[1]
                doc.load(self._parser)
            except _FAILURES as exc:
                self._report(exc)
                return
            self._say("File read")

    def _cmd_init(self, args: list[str]) -> None:
        if len(args) != 1:
            self._say(INVALID_FORMAT)
            return
        if self._ask_user(
            "This command will re-init the current content without saving your changes.",
            "Are you sure you wish to proceed?",
        ):
            self.active_file.init()
            self._say("File inited")

    def _cmd_save(self, args: list[str]) -> None:
        if len(args) > 2:
            self._say(INVALID_FORMAT)
            return
        path = self._cmd_parser.arg(1)
        doc = self.active_file
        if not path:
            self._say(f"Saving {doc.file_path}")
            self.save_current()
            self._say("File saved")
        elif not os.path.dirname(path):
            self._say(f"Saving {path}")
            self.save_file(path)
            self._say("File saved")
        elif self._ask_user(
            f"The current file is: {doc.file_path}\nThe command will save it as: {path}",
            "Are you sure you wish to proceed?",
        ):
            doc.file_path = path
            try:
                doc.save()
            except _FAILURES as exc:
                self._report(exc)
                return
            self._say("File saved")

    def _cmd_load(self, args: list[str]) -> None:
        if len(args) != 2:
            self._say(INVALID_FORMAT)
            return
        self.load_file(args[1])
        self._say("File loaded")
        self.list_files()

    def _cmd_close(self, args: list[str]) -> None:
        if len(args) != 1:
            self._say(INVALID_FORMAT)
            return
        if self.active_file.has_changes() and self._ask_user(
            "The current file has unsaved changes.", "Do you want to save them?"
        ):
            self.save_current()
        self.close_current()
        self._say("File closed")
        self.list_files()

    def _cmd_edit_list(self, args: list[str]) -> None:
        if len(args) != 1:
            self._say(INVALID_FORMAT)
            return
        self.list_files()

    def _cmd_edit(self, args: list[str]) -> None:
        if len(args) != 2:
            self._say(INVALID_FORMAT)
            return
        self.switch_file(args[1])
        self._say("File switched")
        self.list_files()

    def _cmd_showid(self, args: list[str]) -> None:
        if len(args) != 2:
            self._say(INVALID_FORMAT)
            return
        value = args[1]
        if value in ("true", "false"):
            self.active_file.show_id = value == "true"
            self._say(f"showid config switched to {value}")
        else:
            self._say(INVALID_FORMAT)

    def _cmd_dir_tree(self, args: list[str]) -> None:
        if len(args) != 1:
            self._say(INVALID_FORMAT)
            return
        DirTreeVisitor(self._out).print_tree(".")

    def _cmd_undo(self, args: list[str]) -> None:
        if len(args) != 1:
            self._say(INVALID_FORMAT)
            return
        try:
            self.active_file.undo()
        except _FAILURES as exc:
            self._say("Failed to undo")
            self._report(exc)
            return
        self._say("operation undone")

    def _cmd_redo(self, args: list[str]) -> None:
        if len(args) != 1:
            self._say("failed to undo")
            self._say(INVALID_FORMAT)
            return
        try:
            self.active_file.redo()
        except _FAILURES as exc:
            self._say("failed to redo")
            self._report(exc)
            return
        self._say("Operation redone")


def main(argv: list[str] | None = None) -> int:
    """Run the interactive editor until ``exit`` or end of input."""
    arg_parser = argparse.ArgumentParser(prog="htmleditor", description="Edit HTML files as trees.")
    arg_parser.add_argument("config", nargs="?", default="./data/config.json", help="session file")
    options = arg_parser.parse_args(argv)

    editor = HtmlEditor(options.config)
    editor.load_session()
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            break
        if line == "exit":
            editor.save_all()
            editor.save_session()
            break
        editor.handle_command(line)
    return 0