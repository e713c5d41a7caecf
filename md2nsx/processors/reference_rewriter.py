"""Markdown 附件引用改写"""
import re
import time
import base64
from pathlib import Path
from dataclasses import dataclass, field
from typing import Callable, Collection, Dict, List, NamedTuple, Union

from ..config import Config
from ..models import Attachment, ItemResult, ItemStatus, ProcessedImage
from ..utils.helpers import b64encode_text, calculate_hash, detect_mime, find_file
from ..utils.logger import get_logger

logger = get_logger()

# ![alt](link "title"), 不跨行
IMAGE_PATTERN = re.compile(r'!\[([^\]\n]*)\]\(([^)\n]*?)(?:[ \t]+"([^"\n]*)")?\)')
# [text](file.pdf), 不匹配图片语法中的 [...]
LINK_PATTERN = re.compile(
    r'(?<!!)\[([^\]\n]*)\]\(([^)\n]*?)\.(' + '|'.join(Config.LINK_EXTENSIONS) + r')\)'
)


class Reference(NamedTuple):
    """文档中找到的一处引用"""
    kind: str  # 'image' 或 'link'
    span: str
    label: str
    link: str


@dataclass
class RewriteResult:
    """改写结果: 新文本及本文档登记的附件"""
    text: str
    attachments: Dict[str, Attachment] = field(default_factory=dict)
    images: List[ProcessedImage] = field(default_factory=list)
    results: List[ItemResult] = field(default_factory=list)


def find_references(text: str) -> List[Reference]:
    """找出文本中的图片和附件链接, 图片在前"""
    refs = []
    for match in IMAGE_PATTERN.finditer(text):
        alt, link, title = match.groups()
        refs.append(Reference('image', match.group(0), title or alt, link))
    for match in LINK_PATTERN.finditer(text):
        label, stem, ext = match.groups()
        refs.append(Reference('link', match.group(0), label, f'{stem}.{ext}'))
    return refs


def rewrite_references(source: Union[str, Path],
                       text: str,
                       clock: Callable[[], float] = time.time,
                       taken: Collection[str] = ()) -> RewriteResult:
    """
    把文档中的图片/附件引用替换为 Note Station 内联标签

    Args:
        source: Markdown 文件路径, 用于查找附件
        text: Markdown 原文
        clock: 时间来源
        taken: 已被占用的附件键(批次中之前文档登记的)

    Returns:
        RewriteResult, 无法解析的引用保持原样
    """
    result = RewriteResult(text=text)

    for ref in find_references(text):
        try:
            _process_reference(source, ref, result, clock, taken)
        except OSError as e:
            logger.warning(f"处理{ref.kind}失败 {Path(source).name}: {ref.link}: {e}")
            result.results.append(ItemResult(ref.link, ItemStatus.SKIPPED, str(e)))

    return result


def _process_reference(source, ref: Reference, result: RewriteResult,
                       clock: Callable[[], float], taken: Collection[str]) -> None:
    """处理单个引用"""
    file_path = find_file(source, ref.link)
    data = file_path.read_bytes()

    md5_hash = calculate_hash(data)
    mime_type = detect_mime(data)
    is_image = ref.kind == 'image' or mime_type.startswith('image/')
    width, height = (Config.IMAGE_WIDTH, Config.IMAGE_HEIGHT) if is_image else (0, 0)

    file_name = file_path.name
    timestamp = int(clock())
    file_key = _file_key(file_name, timestamp)
    # 同一秒内重复引用同一文件时顺延时间戳, 保证键唯一
    while file_key in taken or file_key in result.attachments:
        timestamp += 1
        file_key = _file_key(file_name, timestamp)
    ref_token = b64encode_text(f"{timestamp}{file_name}")

    if is_image:
        tag = Config.IMAGE_TAG.format(width=width, ref=ref_token)
    else:
        text = ref.label or ('Attachment' if ref.kind == 'link' else 'File')
        tag = Config.LINK_TAG.format(ref=ref_token, text=text)
    result.text = result.text.replace(ref.span, tag)

    result.attachments[file_key] = Attachment(
        md5=md5_hash,
        name=file_name,
        size=len(data),
        width=width,
        height=height,
        type=mime_type,
        ctime=timestamp,
        ref=ref_token,
    )
    if is_image:
        result.images.append(ProcessedImage(
            md5=md5_hash,
            data_b64=base64.b64encode(data).decode('ascii'),
        ))

    result.results.append(ItemResult(ref.link, ItemStatus.OK, file_key))
    logger.info(f"  已处理{ref.kind}: {file_name} -> {file_key} (MIME: {mime_type})")


def _file_key(file_name: str, timestamp: int) -> str:
    return Config.FILE_PREFIX + b64encode_text(f"{file_name}{timestamp}")
