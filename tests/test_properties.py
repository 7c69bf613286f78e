"""Tests for the properties file codec."""

import pytest

from lanchat.core.properties import PropertyFileCodec, _unescape, dumps, load, loads, save

# --- Parsing ---


def test_loads_simple():
    assert loads("a=1\nb=2\n") == {"a": "1", "b": "2"}


def test_loads_skips_comments_and_blank_lines():
    text = "#header\n! another comment\n\n   \na=1\n"
    assert loads(text) == {"a": "1"}


def test_loads_separators():
    text = "equals=1\ncolon:2\nspace 3\nspaced  =  4\n"
    assert loads(text) == {"equals": "1", "colon": "2", "space": "3", "spaced": "4"}


def test_loads_key_without_value():
    assert loads("empty\nalso_empty=\n") == {"empty": "", "also_empty": ""}


def test_loads_keeps_trailing_whitespace_in_value():
    assert loads("nick=Bob  \n") == {"nick": "Bob  "}


def test_loads_windows_line_endings():
    assert loads("a=1\r\nb=2\r\n") == {"a": "1", "b": "2"}


def test_loads_line_continuation():
    text = "browser=firefox \\\n    --new-tab\nnext=1\n"
    assert loads(text) == {"browser": "firefox --new-tab", "next": "1"}


def test_loads_escaped_backslash_is_not_continuation():
    assert loads("path=C\\:\\\\\nnext=1\n") == {"path": "C:\\", "next": "1"}


def test_loads_escapes():
    text = "tab=a\\tb\nnewline=a\\nb\nequals\\=key=x\nspace\\ key=y\n"
    assert loads(text) == {
        "tab": "a\tb",
        "newline": "a\nb",
        "equals=key": "x",
        "space key": "y",
    }


def test_loads_unicode_escapes():
    assert loads("nick=J\\u00f8rn\n") == {"nick": "Jørn"}


def test_loads_surrogate_pair():
    assert loads("smiley=\\uD83D\\uDE00\n") == {"smiley": "\U0001f600"}


def test_loads_malformed_unicode_escape():
    with pytest.raises(ValueError):
        loads("nick=\\u00\n")


def test_loads_last_value_wins():
    assert loads("a=1\na=2\n") == {"a": "2"}


# --- Writing ---


def test_dumps_header_and_order():
    text = dumps({"b": "2", "a": "1"}, "My Header")
    assert text == "#My Header\nb=2\na=1\n"


def test_dumps_leaves_out_none():
    assert dumps({"a": None, "b": "x"}) == "b=x\n"


def test_dumps_escapes_special_characters():
    text = dumps({"key with:space": " leading = value"})
    assert text == "key\\ with\\:space=\\ leading \\= value\n"


def test_dumps_escapes_non_ascii():
    assert dumps({"nick": "Jørn"}) == "nick=J\\u00F8rn\n"


def test_dumps_escapes_outside_bmp_as_surrogates():
    assert dumps({"s": "\U0001f600"}) == "s=\\uD83D\\uDE00\n"


@pytest.mark.parametrize(
    "value",
    ["plain", " leading", "trailing ", "a=b:c#d!e", "back\\slash", "multi\nline", "Jørn ☺"],
)
def test_dumps_can_be_loaded(value):
    assert loads(dumps({"key": value}, "header")) == {"key": value}


# --- Files ---


def test_save_and_load_file(tmp_path):
    path = tmp_path / "test.ini"

    save(path, {"nick_name": "Testing", "sound": "true"}, "Test Settings")

    assert path.read_text(encoding="latin-1").splitlines()[0] == "#Test Settings"
    assert load(path) == {"nick_name": "Testing", "sound": "true"}


def test_save_replaces_existing_file(tmp_path):
    path = tmp_path / "test.ini"
    save(path, {"a": "1"}, "Header")
    save(path, {"b": "2"}, "Header")

    assert load(path) == {"b": "2"}
    assert [p.name for p in tmp_path.iterdir()] == ["test.ini"]


def test_save_to_missing_folder_fails(tmp_path):
    with pytest.raises(OSError):
        save(tmp_path / "missing" / "test.ini", {"a": "1"}, "Header")


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load(tmp_path / "missing.ini")


def test_codec_delegates(tmp_path):
    codec = PropertyFileCodec()
    path = tmp_path / "codec.ini"

    codec.save(path, {"x": "y"}, "Header")

    assert codec.load(path) == {"x": "y"}


def test_loads_drops_trailing_backslash_on_last_line():
    assert loads("key=value\\") == {"key": "value"}


def test_unescape_drops_lone_trailing_backslash():
    assert _unescape("value\\") == "value"
    assert _unescape("value\\\\") == "value\\"
