"""Markdown格式解析器"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import frontmatter

from ..config import Config
from ..utils.logger import get_logger

logger = get_logger()


@dataclass
class MarkdownSource:
    """读取后的Markdown文档"""
    path: Path
    title: str
    body: str
    tags: List[str] = field(default_factory=list)
    metadata: dict = field(default_factory=dict)


class MarkdownParser:
    """
    Markdown文件解析器

    默认标题取自文件名, 全文(包括 front matter)作为正文.
    front_matter 为 True 时读取 front matter 中的 title/tags, 并从正文中去掉.
    """

    def __init__(self, source: Union[str, Path], front_matter: Optional[bool] = None):
        self.source = Path(source)
        if not self.source.exists():
            raise FileNotFoundError(f"源文件不存在: {self.source}")
        self.front_matter = Config.READ_FRONT_MATTER if front_matter is None else front_matter

    def parse(self) -> MarkdownSource:
        """读取Markdown文件"""
        text = self._read_text()
        metadata, body = {}, text

        if self.front_matter and frontmatter.checks(text):
            try:
                post = frontmatter.loads(text)
                metadata, body = dict(post.metadata), post.content
            except Exception as e:
                logger.warning(f"front matter 解析失败 {self.source.name}: {e}")

        title = str(metadata.get('title') or self._title_from_name())
        return MarkdownSource(
            path=self.source,
            title=title or Config.UNTITLED,
            body=body,
            tags=self._parse_tags(metadata.get('tags', [])),
            metadata=metadata,
        )

    def _read_text(self) -> str:
        """以UTF-8读取文件, 非法字节以替换字符代替"""
        data = self.source.read_bytes()
        try:
            return data.decode('utf-8')
        except UnicodeDecodeError:
            logger.warning(f"文件 {self.source} 可能包含非UTF-8字符")
            return data.decode('utf-8', errors='replace')

    def _title_from_name(self) -> str:
        name = self.source.name
        return name[:-len('.md')] if name.endswith('.md') else self.source.stem

    def _parse_tags(self, tags) -> List[str]:
        """解析标签"""
        if isinstance(tags, str):
            return [t.strip() for t in tags.split(',') if t.strip()]
        if isinstance(tags, list):
            return [str(t) for t in tags if t]
        return []
