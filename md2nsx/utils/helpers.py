"""辅助函数"""
import io
import base64
import hashlib
from pathlib import Path
from typing import Iterator, Union

import filetype
from PIL import Image

from ..config import Config
from .logger import get_logger

logger = get_logger()


class AssetNotFoundError(FileNotFoundError):
    """引用的附件在磁盘上找不到"""


def calculate_hash(data: Union[bytes, str], algorithm: str = Config.HASH_ALGORITHM) -> str:
    """计算数据哈希值"""
    if isinstance(data, str):
        data = data.encode('utf-8')
    hash_obj = hashlib.new(algorithm)
    hash_obj.update(data)
    return hash_obj.hexdigest()


def b64encode_text(text: str) -> str:
    """对字符串做标准 base64 编码"""
    return base64.b64encode(text.encode('utf-8')).decode('ascii')


def detect_mime(data: bytes) -> str:
    """根据文件内容(而非扩展名)检测MIME类型"""
    mime = filetype.guess_mime(data)
    if mime:
        return mime

    # filetype 不认识的图片格式交给 Pillow 识别
    try:
        with Image.open(io.BytesIO(data)) as img:
            mime = Image.MIME.get(img.format)
    except Exception:
        mime = None
    if mime:
        return mime

    try:
        data.decode('utf-8')
    except UnicodeDecodeError:
        return Config.DEFAULT_MIME
    return Config.TEXT_MIME


def find_file(source: Union[str, Path], link: str) -> Path:
    """
    查找Markdown中引用的文件

    先按当前工作目录解析; 找不到时在文档所在目录中递归查找,
    返回第一个文件名包含链接文件名的文件.
    """
    direct = Path(link)
    if direct.is_file():
        return direct

    name = Path(link).name
    if not name:
        raise AssetNotFoundError(f"文件未找到: {link}")

    for candidate in _walk_files(Path(source).parent):
        if name in candidate.name:
            return candidate

    raise AssetNotFoundError(f"文件未找到: {link}")


def _walk_files(root: Path) -> Iterator[Path]:
    """按文件名字典序深度优先遍历目录(不跟随符号链接目录)"""
    try:
        entries = sorted(root.iterdir(), key=lambda p: p.name)
    except OSError as e:
        logger.warning(f"无法读取目录 {root}: {e}")
        return

    for entry in entries:
        if entry.is_dir() and not entry.is_symlink():
            yield from _walk_files(entry)
        else:
            yield entry
