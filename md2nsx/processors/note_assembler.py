"""NSX 笔记组装"""
import re
import time
from typing import Callable, Dict, Iterable, Optional, Tuple

from ..config import Config
from ..models import Attachment, Note
from ..utils.helpers import b64encode_text
from .markdown_renderer import MarkdownRenderer

WHITESPACE_RE = re.compile(r'\s+')


def make_brief(text: str, length: int = Config.BRIEF_LENGTH) -> str:
    """由Markdown文本生成摘要"""
    plain = WHITESPACE_RE.sub(' ', text).strip()
    if len(plain) > length:
        plain = plain[:length] + Config.BRIEF_ELLIPSIS
    return plain


def note_member_name(title: str) -> str:
    """笔记在包中的成员名"""
    return Config.NOTE_PREFIX + b64encode_text(title)


def find_thumb(attachments: Dict[str, Attachment]) -> Optional[str]:
    """附件表中第一个图片附件的键"""
    for key, attachment in attachments.items():
        if attachment.is_image:
            return key
    return None


class NoteAssembler:
    """
    把改写后的Markdown组装为 Note

    attachments 是附件表本身(不拷贝), 组装出的 Note 直接引用它.
    """

    def __init__(self, attachments: Dict[str, Attachment],
                 renderer: Optional[MarkdownRenderer] = None,
                 clock: Callable[[], float] = time.time):
        self.attachments = attachments
        self.renderer = renderer or MarkdownRenderer()
        self.clock = clock

    def assemble(self, title: str, text: str, parent_id: str,
                 tags: Optional[Iterable[str]] = None) -> Tuple[Note, str]:
        """
        组装笔记

        Args:
            title: 笔记标题
            text: 改写附件引用后的Markdown
            parent_id: 所属笔记本ID
            tags: 标签

        Returns:
            (Note, 包成员名)
        """
        title = title or Config.UNTITLED
        if not text.strip():
            text = Config.EMPTY_NOTE

        current_time = int(self.clock())
        note = Note(
            parent_id=parent_id,
            title=title,
            mtime=current_time,
            ctime=current_time,
            brief=make_brief(text),
            content=self.renderer.render(text),
            attachment=self.attachments,
            thumb=find_thumb(self.attachments),
            tag=list(tags or []),
        )
        return note, note_member_name(title)
