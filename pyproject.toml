[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "htmleditor"
version = "0.1.0"
description = "Interactive command-line editor for HTML documents with undo, redo, spell checking and tree views"
requires-python = ">=3.10"
dependencies = [
    "html5lib",
]
keywords = ["html", "editor", "undo", "redo", "spell-check", "tree", "command-line"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: HTML",
    "Topic :: Text Editors",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
htmleditor = "htmleditor.editor:main"

[tool.hatch.build.targets.wheel]
packages = ["htmleditor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
