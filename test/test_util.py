""" Unit tests for command-line options, configuration, logging, and other support code. """

import io
import json
import os
import sys

import pytest

from plojo import PlojoOptions
from plojo.machine import StdinMachine
from plojo.resource.config import Configuration
from plojo.resource.io import PlojoResourceIO, ResourceIOError, StrokeLogWriter
from plojo.translation import Command, CommandKind, encode_translation, Format, FormatFlag, Text, TextMode
from plojo.util.cmdline import CmdlineOptions
from plojo.util.entrypoints import EntryPoint, EntryPointSelector
from plojo.util.exception import CompositeExceptionHandler, ExceptionLogger, RecoverableExceptionFilter
from plojo.util.json import CSONDecoder
from plojo.util.log import StreamLogger
from plojo.util.path import PrefixPathConverter

from . import CONVERTER


def _options() -> CmdlineOptions:
    opts = CmdlineOptions("Test app.")
    opts.add("log", "status.log", "Log file.")
    opts.add("dictionaries", ["a.json"], "Dictionary files.")
    opts.add("verbose", False, "Verbose output.")
    opts.add("stroke-log", "", "Stroke log.")
    return opts


def test_cmdline_defaults() -> None:
    opts = _options()
    assert opts.log == "status.log"
    assert opts.dictionaries == ["a.json"]
    assert opts.verbose is False
    assert opts.stroke_log == ""
    with pytest.raises(AttributeError):
        opts.nonexistent


def test_cmdline_parse() -> None:
    opts = _options()
    opts.parse(["plojo", "console", "--dictionaries", "x.json", "y.json", "--verbose",
                "--stroke-log=strokes.jsonl", "--unknown", "z"])
    assert opts.dictionaries == ["x.json", "y.json"]
    assert opts.verbose is True
    assert opts.stroke_log == "strokes.jsonl"
    assert opts.log == "status.log"
    assert opts.extras() == ["console", "--unknown", "z"]


@pytest.mark.parametrize("arg, expected", [("--verbose=no", False), ("--verbose=ON", True), ("--verbose", True)])
def test_cmdline_bool(arg, expected) -> None:
    opts = _options()
    opts.parse(["plojo", arg])
    assert opts.verbose is expected


def test_cmdline_errors() -> None:
    opts = _options()
    with pytest.raises(ValueError):
        opts.parse(["plojo", "--verbose=maybe"])
    with pytest.raises(ValueError):
        opts.parse(["plojo", "--log", "a", "b"])


@pytest.mark.parametrize("key", ["--help", "-h"])
def test_cmdline_help(capsys, key) -> None:
    opts = _options()
    with pytest.raises(SystemExit):
        opts.parse(["plojo", key])
    out = capsys.readouterr().out
    assert out.startswith("Test app.")
    assert "--stroke-log=<str>" in out
    assert "--dictionaries=<str> [<str> ...]" in out
    assert "Verbose output." in out


def test_plojo_options(tmp_path) -> None:
    """ Asset paths point inside the package. Other paths are used as given. """
    opts = PlojoOptions()
    opts.parse(["plojo", f"--config={tmp_path / 'sub' / 'plojo.cfg'}"])
    assert opts.keymap_path().endswith("key_layout.cson")
    assert opts.config_path() == str(tmp_path / "sub" / "plojo.cfg")
    assert (tmp_path / "sub").is_dir()
    assert opts.stroke_log_path() == ""


def test_prefix_paths(tmp_path) -> None:
    converter = PrefixPathConverter()
    converter.add("~/", str(tmp_path / "user"))
    converter.add("~~/", str(tmp_path / "other"))
    assert converter.expand("~~/a.txt") == str(tmp_path / "other" / "a.txt")
    assert converter.expand("~/a.txt") == str(tmp_path / "user" / "a.txt")
    assert converter.expand("plain/a.txt") == "plain/a.txt"
    path = converter.convert("~/deep/dir/a.txt", make_dirs=True)
    assert (tmp_path / "user" / "deep" / "dir").is_dir()
    assert path == str(tmp_path / "user" / "deep" / "dir" / "a.txt")


def test_config_round_trip(tmp_path) -> None:
    """ Defaults are written with comments, and values read back with their types. """
    filename = str(tmp_path / "test.cfg")
    cfg = Configuration(filename)
    cfg.add_option("translator_lookback", 10, "Lookback.")
    cfg.add_option("translator_undo_strokes", ["*"], "Undo strokes.")
    cfg.add_option("render_space_after", False, "Space after words.")
    cfg.add_option("render_name", "plain text", "")
    cfg.write()
    text = (tmp_path / "test.cfg").read_text(encoding="utf-8")
    assert "[translator]" in text
    assert "# Undo strokes." in text
    text = text.replace("lookback = 10", "lookback = 4").replace("space_after = False", "space_after = True")
    (tmp_path / "test.cfg").write_text(text + "\n[extra]\nignored = 1\n", encoding="utf-8")
    cfg2 = Configuration(filename)
    cfg2.add_option("translator_lookback", 10)
    cfg2.add_option("translator_undo_strokes", [])
    cfg2.add_option("render_space_after", False)
    cfg2.add_option("render_name", "")
    cfg2.read()
    assert cfg2["translator_lookback"] == 4
    assert cfg2["translator_undo_strokes"] == ["*"]
    assert cfg2["render_space_after"] is True
    assert cfg2["render_name"] == "plain text"


def test_cson() -> None:
    decoder = CSONDecoder()
    s = '# comment\n{\n  # another\n  "sep": "/",\n    "split": "-"\n}\n'
    assert decoder.decode(s) == {"sep": "/", "split": "-"}


def test_stream_logger() -> None:
    stream = io.StringIO()
    logger = StreamLogger(stream, time_fmt=None)
    logger.log("first")
    logger.log("first")
    logger.log("second")
    assert stream.getvalue().splitlines() == ["first", "*", "second"]


def test_stream_logger_closed_stream() -> None:
    """ One broken stream does not stop the others. """
    closed = io.StringIO()
    closed.close()
    stream = io.StringIO()
    logger = StreamLogger(closed, stream, time_fmt="[x] ")
    logger.log("message")
    assert stream.getvalue() == "[x] message\n"


def test_exception_handlers() -> None:
    messages = []
    handler = CompositeExceptionHandler()
    handler.add(ExceptionLogger(messages.append))
    handler.add(RecoverableExceptionFilter(OSError))
    try:
        raise FileNotFoundError("gone")
    except OSError as e:
        assert handler.handle(e)
    try:
        raise KeyError("key")
    except KeyError as e:
        assert not handler.handle(e)
    assert len(messages) == 2
    assert "FileNotFoundError: gone" in messages[0]


def test_entry_points(monkeypatch, capsys) -> None:
    entry_points = {"console": EntryPoint("json", "dumps", "Dump JSON."),
                    "convert": EntryPoint("json", "loads", "Load JSON."),
                    "replay": EntryPoint("os.path", "basename", "Base name.")}
    selector = EntryPointSelector(entry_points, default_mode="replay")
    assert selector.load("r")("/a/b.txt") == "b.txt"
    assert selector.load("")("/a/c.txt") == "c.txt"
    assert selector.load("con")() == -1
    assert "multiple matches" in capsys.readouterr().out
    assert selector.load("x")() == -1
    out = capsys.readouterr().out
    assert 'No matches for mode "x"' in out
    assert "  console - Dump JSON." in out
    # The mode argument is consumed from the command line. Options are left for the entry point.
    selector = EntryPointSelector({"only": EntryPoint("os", "getcwd")}, default_mode="only")
    monkeypatch.setattr(sys, "argv", ["plojo", "only", "--verbose"])
    assert selector.main() == os.getcwd()
    assert sys.argv == ["plojo only", "--verbose"]
    monkeypatch.setattr(sys, "argv", ["plojo", "--verbose"])
    assert selector.main() == os.getcwd()
    assert sys.argv == ["plojo", "--verbose"]


def test_machine() -> None:
    messages = []
    machine = StdinMachine(CONVERTER, messages.append)
    received = []
    count = machine.run(io.StringIO("KAT TKOG\n\nPER/TPEUBGS XYZ\n  -D  \n"), received.append)
    assert count == 5
    assert [s.rtfcre for s in received] == ["KAT", "TKOG", "PER", "TPEUBGS", "-D"]
    assert machine.rejected == 1
    assert "XYZ" in messages[0]


def test_encode_translation() -> None:
    translation = (Text("ed", TextMode.ATTACHED, False, True), Format(FormatFlag.CAPITALIZE_NEXT),
                   Command(CommandKind.KEYS, "Return"))
    assert encode_translation(translation) == [["Text", "ed", "attached", False, True, False],
                                               ["Format", "capitalize_next"],
                                               ["Command", "keys", "Return"]]
    with pytest.raises(TypeError):
        encode_translation(("text",))


def test_stroke_log(tmp_path) -> None:
    filename = str(tmp_path / "strokes.jsonl")
    writer = StrokeLogWriter(filename)
    writer(CONVERTER.stroke("KAT"), (Text("cat"),))
    writer(CONVERTER.stroke("TKPWHR"), None)
    entries = PlojoResourceIO().load_stroke_log(filename)
    assert entries == [("KAT", [["Text", "cat", "literal", False, False, False]]), ("TKPWHR", None)]
    with open(filename, "a", encoding="utf-8") as fp:
        fp.write(json.dumps({"translation": None}) + "\n")
    with pytest.raises(ResourceIOError):
        PlojoResourceIO().load_stroke_log(filename)
