from pathlib import Path

import pytest

from md2nsx.utils.helpers import (
    AssetNotFoundError, b64encode_text, calculate_hash, detect_mime, find_file,
)


def test_calculate_hash_is_deterministic() -> None:
    assert calculate_hash(b'abc') == calculate_hash(b'abc')
    assert calculate_hash(b'abc') == '900150983cd24fb0d6963f7d28e17f72'


def test_calculate_hash_accepts_text() -> None:
    assert calculate_hash('My Notebook') == calculate_hash('My Notebook'.encode('utf-8'))
    assert calculate_hash(b'a') != calculate_hash(b'b')


def test_b64encode_text() -> None:
    assert b64encode_text('a') == 'YQ=='
    assert b64encode_text('???') == 'Pz8/'


def test_detect_mime_uses_content(png_bytes) -> None:
    assert detect_mime(png_bytes) == 'image/png'
    assert detect_mime(b'%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n') == 'application/pdf'
    assert detect_mime('plain words'.encode('utf-8')) == 'text/plain'


def test_detect_mime_unknown_binary() -> None:
    assert detect_mime(b'\x80\x81\x82\x83\x84\x85\x86\x87') == 'application/octet-stream'


def test_find_file_prefers_current_directory(workdir) -> None:
    (workdir / 'pic.png').write_bytes(b'x')
    docs = workdir / 'docs'
    docs.mkdir()
    (docs / 'pic.png').write_bytes(b'y')

    assert find_file(docs / 'a.md', 'pic.png') == Path('pic.png')


def test_find_file_walks_document_directory(workdir) -> None:
    docs = workdir / 'docs'
    (docs / 'assets').mkdir(parents=True)
    (docs / 'assets' / 'image1.png').write_bytes(b'x')

    assert find_file(docs / 'a.md', 'img/image1.png') == docs / 'assets' / 'image1.png'


def test_find_file_substring_match_is_loose(workdir) -> None:
    docs = workdir / 'docs'
    docs.mkdir()
    (docs / 'image1.png').write_bytes(b'x')

    assert find_file(docs / 'a.md', 'image') == docs / 'image1.png'


def test_find_file_first_match_in_lexical_order(workdir) -> None:
    docs = workdir / 'docs'
    (docs / 'b').mkdir(parents=True)
    (docs / 'b' / 'x_pic.png').write_bytes(b'x')
    (docs / 'c_pic.png').write_bytes(b'y')

    assert find_file(docs / 'a.md', 'pic.png') == docs / 'b' / 'x_pic.png'


def test_find_file_ignores_directory_names(workdir) -> None:
    docs = workdir / 'docs'
    (docs / 'pic.png.d').mkdir(parents=True)

    with pytest.raises(AssetNotFoundError):
        find_file(docs / 'a.md', 'pic.png')


def test_find_file_not_found(workdir) -> None:
    docs = workdir / 'docs'
    docs.mkdir()

    with pytest.raises(FileNotFoundError):
        find_file(docs / 'a.md', 'missing.png')
    with pytest.raises(AssetNotFoundError):
        find_file(docs / 'a.md', '')
