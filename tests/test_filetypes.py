import pytest

from filedive.orchestrator import filetypes


@pytest.mark.parametrize(
    "name,expected",
    [
        ("report.PDF", "pdf"),
        ("archive.tar.gz", "gz"),
        ("README", ""),
        ("notes.md", "md"),
    ],
)
def test_extension_of(name, expected):
    assert filetypes.extension_of(name) == expected


def test_allow_list_covers_documents_code_and_media():
    for name in ["a.docx", "a.cpp", "a.xlsx", "a.mov", "a.html"]:
        assert filetypes.is_allowed(name)
    for name in ["a.exe", "a.zip", "Makefile"]:
        assert not filetypes.is_allowed(name)


def test_is_media_type():
    assert filetypes.is_media_type("image/png")
    assert filetypes.is_media_type("audio/mpeg")
    assert filetypes.is_media_type("video/mp4")
    assert not filetypes.is_media_type("text/plain")
    assert not filetypes.is_media_type(None)
    assert not filetypes.is_media_type("")


def test_csv_separators_become_spaces():
    assert filetypes.normalize_content("data.csv", "a,b\nc,d") == "a b\nc d"


def test_spreadsheet_is_replaced_by_placeholder():
    assert filetypes.normalize_content("book.xlsx", "PK\x03\x04") == filetypes.SPREADSHEET_PLACEHOLDER


def test_plain_text_is_untouched():
    assert filetypes.normalize_content("notes.txt", "a,b") == "a,b"
