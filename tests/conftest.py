import io

import pytest
from PIL import Image

FIXED_TIME = 1700000000


def make_png(color: str = 'red', size=(2, 2)) -> bytes:
    buf = io.BytesIO()
    Image.new('RGB', size, color).save(buf, 'PNG')
    return buf.getvalue()


@pytest.fixture
def png_bytes() -> bytes:
    return make_png()


@pytest.fixture
def clock():
    return lambda: FIXED_TIME


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """在临时目录中运行, 避免相对当前目录的查找命中仓库文件"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def notes_dir(workdir, png_bytes):
    folder = workdir / 'notes'
    folder.mkdir()
    (folder / 'pic.png').write_bytes(png_bytes)
    (folder / 'a.md').write_text('# A\n\n![alt](pic.png)\n', encoding='utf-8')
    (folder / 'b.md').write_text(
        'See [spec](missing.pdf) and ![x](nope.png)\n', encoding='utf-8'
    )
    (folder / 'c.md').write_text('- [x] done\n- [ ] todo\n', encoding='utf-8')
    return folder
