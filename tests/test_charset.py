import pytest

from encword.charset import decode_ascii, decode_charset, resolve_charset
from encword.errors import DecodeCharsetError


def test_resolve_charset_uses_web_label_table():
    assert resolve_charset(b"UTF-8") == "utf-8"
    assert resolve_charset(b"unicode-1-1-utf-8") == "utf-8"
    assert resolve_charset(b" utf-8*en ") == "utf-8"
    assert resolve_charset(b"x-sjis") == "shift_jis"
    assert resolve_charset(b"x-gbk") == "gbk"
    assert resolve_charset(b"x-mac-roman") == "macintosh"
    assert resolve_charset(b"x-euc-jp") == "euc-jp"
    assert resolve_charset(b"windows-874") == "windows-874"


@pytest.mark.parametrize("label", [b"latin1", b"ISO-8859-1", b"us-ascii", b"x-cp1252"])
def test_latin1_and_ascii_labels_mean_windows_1252(label):
    assert resolve_charset(label) == "windows-1252"


def test_codec_registry_backs_up_unlisted_labels():
    assert resolve_charset(b"utf-7") == "utf-7"


def test_resolve_charset_rejects_unknown_and_binary_codecs():
    assert resolve_charset(b"x-nonsense") is None
    assert resolve_charset(b"base64") is None
    assert resolve_charset(b"") is None
    assert resolve_charset(b"utf-\xff") is None


def test_decode_charset_with_known_label():
    assert decode_charset(b"iso-8859-1", b"Caf\xe9") == "Café"
    assert decode_charset(b"windows-1252", b"\x80") == "€"
    assert decode_charset(b"x-sjis", b"\x82\xa0\x82\xa2") == "あい"


def test_iso_8859_1_high_controls_decode_as_windows_1252():
    assert decode_charset(b"iso-8859-1", b"\x93hi\x94") == "“hi”"


def test_decode_charset_replaces_invalid_sequences():
    assert decode_charset(b"utf-8", b"ok\xff") == "ok�"


def test_codec_refusing_replace_raises_charset_error():
    with pytest.raises(DecodeCharsetError):
        decode_charset(b"idna", b"\xc3\xa9")


def test_unknown_label_falls_back_to_ascii():
    assert decode_charset(b"nonsense", b"Caf\xe9") == "Caf�"
    assert decode_ascii(b"\x80\x81a") == "��a"
