"""Markdown 到 Note Station HTML 的渲染器"""
from typing import List, Optional

from markdown import Markdown

from ..config import Config
from ..utils.logger import get_logger
from .extensions import NoteStationExtension, NoteStationHtmlFormatter, replace_checkboxes

logger = get_logger()

__all__ = ['MarkdownRenderer', 'replace_checkboxes']


class MarkdownRenderer:
    """Markdown 渲染器"""

    def __init__(self, extensions: Optional[List[str]] = None,
                 code_style: str = Config.CODE_STYLE):
        self.md = Markdown(
            extensions=list(extensions or Config.MARKDOWN_EXTENSIONS) + [NoteStationExtension()],
            extension_configs={
                'codehilite': {
                    'linenums': True,
                    'noclasses': True,
                    'guess_lang': True,
                    'pygments_style': code_style,
                    'pygments_formatter': NoteStationHtmlFormatter,
                    'tabsize': Config.CODE_TAB_WIDTH,
                },
            },
            output_format='xhtml',
        )

    def render(self, text: str) -> str:
        """转换Markdown为HTML"""
        # 清除上一篇文档的脚注等状态
        self.md.reset()
        html = self.md.convert(text)
        logger.debug(f"Markdown 转换为 HTML: {len(text)} -> {len(html)} 字符")
        return html
