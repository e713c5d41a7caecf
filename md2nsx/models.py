"""数据模型"""
from enum import Enum
from dataclasses import dataclass, field, asdict
from typing import Dict, List, Optional


@dataclass
class Attachment:
    """NSX 附件(对应包中的一个二进制资源)"""
    md5: str
    name: str
    size: int
    width: int
    height: int
    type: str
    ctime: int
    ref: str

    @property
    def is_image(self) -> bool:
        return self.type.startswith('image/')


@dataclass
class ProcessedImage:
    """待打包的图片数据"""
    md5: str
    data_b64: str


@dataclass
class Note:
    """NSX 笔记"""
    parent_id: str
    title: str
    mtime: int
    ctime: int
    brief: str
    content: str
    attachment: Dict[str, Attachment] = field(default_factory=dict)
    thumb: Optional[str] = None
    tag: List[str] = field(default_factory=list)
    category: str = 'note'
    latitude: float = 0
    longitude: float = 0
    encrypt: bool = False

    def to_dict(self) -> dict:
        """按NSX字段顺序导出, thumb 为空时省略"""
        data = {
            'category': self.category,
            'parent_id': self.parent_id,
            'title': self.title,
        }
        if self.thumb:
            data['thumb'] = self.thumb
        data.update({
            'mtime': self.mtime,
            'ctime': self.ctime,
            'latitude': self.latitude,
            'longitude': self.longitude,
            'encrypt': self.encrypt,
            'attachment': {key: asdict(att) for key, att in self.attachment.items()},
            'brief': self.brief,
            'content': self.content,
            'tag': list(self.tag),
        })
        return data


@dataclass
class Notebook:
    """NSX 笔记本"""
    title: str
    category: str = 'notebook'
    parent_id: str = ''

    def to_dict(self) -> dict:
        return {
            'category': self.category,
            'parent_id': self.parent_id,
            'title': self.title,
        }


@dataclass
class NotebookConfig:
    """NSX 清单(config.json)"""
    note: List[str] = field(default_factory=list)
    notebook: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {'note': list(self.note), 'notebook': list(self.notebook)}


class ItemStatus(Enum):
    """单项处理结果, 致命错误以异常抛出"""
    OK = 'ok'
    SKIPPED = 'skipped'


@dataclass
class ItemResult:
    """单个文档/附件/包成员的处理结果"""
    name: str
    status: ItemStatus
    message: str = ''
    member: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is ItemStatus.OK


@dataclass
class RunSummary:
    """一次批量转换的汇总"""
    output: Optional[str] = None
    notebook_id: str = ''
    documents: List[ItemResult] = field(default_factory=list)
    references: List[ItemResult] = field(default_factory=list)
    manifest: Optional[NotebookConfig] = None

    def add_document(self, result: ItemResult) -> None:
        self.documents.append(result)

    @property
    def converted(self) -> int:
        return sum(1 for r in self.documents if r.ok)

    @property
    def skipped(self) -> int:
        return sum(1 for r in self.documents if r.status is ItemStatus.SKIPPED)

    @property
    def failed_references(self) -> List[ItemResult]:
        return [r for r in self.references if not r.ok]
