""" Main feature tests for the Plojo steno engine.
    Builds every component from the main container with the built-in assets and checks a session end to end. """

import io

import pytest

from plojo import Plojo, PlojoOptions
from plojo.output import TextBufferSink
from plojo.resource.io import ResourceIOError


@pytest.fixture
def plojo(tmp_path) -> Plojo:
    """ Keep every user file for the session in a temporary directory. """
    opts = PlojoOptions()
    opts.parse(["plojo",
                f"--log={tmp_path / 'status.log'}",
                f"--config={tmp_path / 'config.cfg'}",
                f"--stroke-log={tmp_path / 'strokes.jsonl'}"])
    return Plojo(opts, parse_args=False)


def _strokes(plojo, engine, s:str) -> None:
    for k in s.split():
        engine.stroke(plojo.converter.stroke(k))


@pytest.mark.parametrize("strokes, expected", [
    ("PRE TPEUBGS",                   " prefix"),
    ("RE TEFT AFPS",                  " re test"),
    ("TEFT -D",                       " tested"),
    ("KAT -S TP-PL -T TKOG",          " cats. The dog"),
    ("KHER REU -S",                   " cherries"),
    ("HAP PEU -PBS",                  " happiness"),
    ("PHAR PHA SEU EUFT",             " pharmacist"),
    ("AR TEUS TEUBG HREU",            " artistically"),
    ("HRAOEU -G",                     " lying"),
    ("RAOEU -G PWAOEUT -PB",          " writing bitten"),
    ("STOP -D",                       " stopped"),
    ("A* PW* KR* KAT",                " abc cat"),
    ("1 2 3",                         " 123"),
    ("KAT KPA*L TKOG",                " cat DOG"),
    ("KAT *UPD",                      " CAT"),
    ("KW-GS KAT KR-GS TP-PL",         ' "cat".'),
    ("PREPB KAT PR*EPB",              " (cat)"),
    ("KAT TKOG TK-FPS",               " catdog"),
    ("STPHAS KWRA KW-BG TPHEU KWROBG", " NASA, New York"),
    ("KAT TKOG *",                    " cat"),
    ("TPHEU KWROBG *",                ""),
    ("SKP PHRO*FP",                   "and "),
])
def test_session(plojo, strokes, expected) -> None:
    sink = TextBufferSink()
    engine = plojo.build_engine(sink)
    _strokes(plojo, engine, strokes)
    assert sink.text == expected


def test_commands(plojo) -> None:
    sink = TextBufferSink()
    engine = plojo.build_engine(sink)
    _strokes(plojo, engine, "KAT SKWR*Z PWA*BG")
    assert sink.text == " cat"
    assert sink.command_args() == ["control(z)", "BackSpace"]


def test_config_created(plojo, tmp_path) -> None:
    """ A default config is written on first use and read back on the next. """
    assert plojo.config["translator_undo_strokes"] == ["*"]
    cfg_file = tmp_path / "config.cfg"
    assert cfg_file.exists()
    cfg_file.write_text(cfg_file.read_text(encoding="utf-8").replace("['*']", "['*', 'TK-LS']"), encoding="utf-8")
    opts = PlojoOptions()
    opts.parse(["plojo", f"--log={tmp_path / 'status.log'}", f"--config={cfg_file}"])
    other = Plojo(opts, parse_args=False)
    sink = TextBufferSink()
    engine = other.build_engine(sink)
    _strokes(other, engine, "KAT TKOG TK-LS")
    assert sink.text == " cat"


def test_stroke_log_replay(plojo, tmp_path) -> None:
    """ Every stroke is recorded with its translation and can be loaded again. """
    engine = plojo.build_engine(TextBufferSink())
    _strokes(plojo, engine, "KAT TKPWHR *")
    entries = plojo.resource_io.load_stroke_log(str(tmp_path / "strokes.jsonl"))
    assert [k for k, _ in entries] == ["KAT", "TKPWHR", "*"]
    assert entries[0][1] == [["Text", "cat", "literal", False, False, False]]
    assert entries[1][1] is None


def test_log_file(plojo, tmp_path, capsys) -> None:
    plojo.dictionary
    log_text = (tmp_path / "status.log").read_text(encoding="utf-8")
    assert "entries from 1 dictionaries" in log_text
    assert "entries from 1 dictionaries" in capsys.readouterr().out


def test_missing_dictionary(tmp_path) -> None:
    opts = PlojoOptions()
    opts.parse(["plojo", f"--log={tmp_path / 'status.log'}", f"--dictionaries={tmp_path / 'none.json'}"])
    with pytest.raises(ResourceIOError):
        Plojo(opts, parse_args=False).dictionary


def test_console(monkeypatch, tmp_path, capsys) -> None:
    """ The console entry point prints output operations for strokes from standard input. """
    from plojo import main_console
    monkeypatch.setattr("sys.argv", ["plojo", f"--log={tmp_path / 'status.log'}",
                                     f"--config={tmp_path / 'config.cfg'}"])
    monkeypatch.setattr("sys.stdin", io.StringIO("KAT\nXYZ -S\n"))
    assert main_console.main() == 0
    out = capsys.readouterr().out
    assert "type ' cat'" in out
    assert "type 's'" in out
    assert "2 strokes (1 rejected)" in out


def test_replay(monkeypatch, tmp_path, capsys) -> None:
    from plojo import main_replay
    log = tmp_path / "strokes.jsonl"
    log.write_text('{"stroke": "KAT", "translation": [["Text", "cat", "literal", false, false, false]]}\n'
                   '{"stroke": "-S", "translation": [["Text", "dogs", "literal", false, false, false]]}\n',
                   encoding="utf-8")
    monkeypatch.setattr("sys.argv", ["plojo", f"--log={tmp_path / 'status.log'}",
                                     f"--config={tmp_path / 'config.cfg'}", f"--input={log}"])
    assert main_replay.main() == 1
    out = capsys.readouterr().out
    assert "Stroke 2 (-S)" in out
    assert " cats" in out


def test_replay_bad_stroke(monkeypatch, tmp_path, capsys) -> None:
    """ A stroke in the log that cannot be parsed is reported and skipped. """
    from plojo import main_replay
    log = tmp_path / "strokes.jsonl"
    log.write_text('{"stroke": "XYZ", "translation": null}\n'
                   '{"stroke": "KAT", "translation": [["Text", "cat", "literal", false, false, false]]}\n',
                   encoding="utf-8")
    monkeypatch.setattr("sys.argv", ["plojo", f"--log={tmp_path / 'status.log'}",
                                     f"--config={tmp_path / 'config.cfg'}", f"--input={log}"])
    assert main_replay.main() == 1
    out = capsys.readouterr().out
    assert "Stroke 1 (XYZ) skipped" in out
    assert "Replayed 2 strokes with 1 differences." in out
    assert out.endswith(" cat\n")
