# htmleditor

An interactive, command-line editor for HTML documents. It keeps several files
open at once, edits each one as a tree of elements addressed by their `id`,
and supports undo and redo, spell checking and a tree-style view of the
document.

## Installation

```
pip install .
```

Test dependencies are available through the `test` extra:

```
pip install ".[test]"
```

## Starting the editor

```
htmleditor [CONFIG]
```

`CONFIG` is the session file and defaults to `./data/config.json`. On start the
editor restores the session recorded there: the open files, each file's
`showid` setting and which file is active. It then shows the prompt
`[HtmlEditor]>>`. Type `exit` to leave; the editor then asks, file by file,
whether to save unsaved changes, and writes the session back to the config
file. End of input also leaves the editor, but without saving anything.

While no file is open, only `load` is accepted.

## Commands

Editing the active file:

| Command | Effect |
| --- | --- |
| `insert <tag> <id> <location> [text]` | insert a new element just before the element `location` |
| `append <tag> <id> <parent> [text]` | append a new element as the last child of `parent` |
| `edit-id <old> <new>` | rename an element's id |
| `edit-text <id> [text]` | replace an element's text |
| `delete <id>` | remove an element and everything inside it |
| `undo` / `redo` | step back and forth through the edit history |
| `spell-check` | report misspelled words; flagged text shows `[x]` in `print-tree` |
| `print-tree` | print the document as a tree |
| `showid true\|false` | show or hide ids in `print-tree` |
| `init` | reset the file to an empty `html/head/title/body` skeleton (asks first) |
| `read <path>` | replace the file's content with that of another file (asks first) |

Working with files:

| Command | Effect |
| --- | --- |
| `load <path>` | open a file; if it does not exist, offer to create it under `./data/` |
| `edit <filename>` | switch to another open file, matched by file name |
| `edit-list` | list open files; `>` marks the active one, `*` marks unsaved changes |
| `save` | save the active file |
| `save <filename>` | save the open file with that name |
| `save <dir/filename>` | save the active file under a new path (asks first) |
| `close` | close the active file, offering to save any changes |
| `dir-tree` | print the working directory as a tree |

`insert` and `append` accept only these tags: `html`, `head`, `body`, `div`,
`span`, `p`, `a`, `img`, `ul`, `ol`, `li`, `table`, `tr`, `td`, `th`, `h1`,
`h2`, `h3`, `b`, `i`, `u`, `em`, `strong`, `br`, `hr` and `title`. The list is
held by `htmleditor.tags.TagRegistry`.

Ids must be unique within a document. An element written without an `id`
attribute is addressed by its tag name, so loading a file fails when two
elements share an id, or when two elements without ids share a tag.

## Using it from Python

```python
from htmleditor.document import HtmlDoc
from htmleditor.commands import AppendCommand, InsertCommand

doc = HtmlDoc("./data/page.html")
doc.init()
doc.execute(AppendCommand("p", "intro", "body", "Hello world"))
doc.execute(InsertCommand("h1", "heading", "intro", "Welcome"))
doc.undo()
doc.redo()
doc.save()
```

Other pieces:

- `htmleditor.nodes` — `ElementNode` and `TextNode`, with `to_html()`.
- `htmleditor.parser.Html5Parser` — reads a file (`parse`) or a string
  (`parse_string`) into a node tree.
- `htmleditor.visitors` — `PrintTreeVisitor`, `SpellCheckVisitor`,
  `SpellChecker`, `DirTreeVisitor` and `build_dir_tree`.
- `htmleditor.cmdparser.CmdParser` — splits a command line into positional
  arguments and `-option value` pairs.
- `htmleditor.editor.HtmlEditor` — the editor itself; `handle_command()` runs
  one line of input.

Saved documents are written with two-space indentation, for example:

```html
<html id="html">
  <head id="head">
    <title id="title">
    </title>
  </head>
  <body id="body">
  </body>
</html>
```

## Limitations

- Only the tag, the `id` attribute and the text of each element are kept.
  Other attributes, comments and whitespace-only text are dropped when a file
  is read, and are not written back.
- Spell checking needs a word list at `./data/en_US.dic` (one word per line,
  optionally preceded by a count line). Anything after a `/` on a line is
  ignored, so affix rules are not applied: only the listed words themselves
  are accepted.