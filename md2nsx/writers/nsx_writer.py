"""NSX格式写入器"""
import json
import base64
import shutil
import zipfile
from pathlib import Path
from typing import Dict, Iterable, List, Union

from ..config import Config
from ..models import Note, Notebook, NotebookConfig, ProcessedImage
from ..utils.helpers import calculate_hash
from ..utils.logger import get_logger

logger = get_logger()


def dump_json(data: dict, indent: bool = False) -> bytes:
    """序列化为UTF-8 JSON"""
    if indent:
        text = json.dumps(data, ensure_ascii=False, indent=2)
    else:
        text = json.dumps(data, ensure_ascii=False, separators=(',', ':'))
    return text.encode('utf-8')


class NsxWriter:
    """
    NSX文件写入器

    笔记先序列化到临时目录, save() 时与图片, 笔记本描述和清单一起打包成zip.
    """

    def __init__(self, output: Union[str, Path], staging_dir: Union[str, Path] = Config.STAGING_DIR):
        self.output = Path(output)
        self._prepare_output()
        self.staging_dir = Path(staging_dir)
        # 包成员名 -> 临时文件
        self._staged: Dict[str, Path] = {}

    def _prepare_output(self) -> None:
        """创建输出文件所在目录"""
        self.output.parent.mkdir(parents=True, exist_ok=True)

    def prepare(self) -> None:
        """清空并创建临时目录"""
        self.cleanup()
        self.staging_dir.mkdir(parents=True, exist_ok=True)
        self._staged.clear()

    def cleanup(self) -> None:
        """删除临时目录"""
        if self.staging_dir.exists():
            shutil.rmtree(self.staging_dir)

    @property
    def staged_members(self) -> List[str]:
        return list(self._staged)

    def write(self, note: Note, member_name: str) -> None:
        """序列化笔记到临时目录, 成员名已存在时抛出 ValueError"""
        if member_name in self._staged:
            raise ValueError(f"笔记成员重名: {member_name} ({note.title})")
        # 成员名是base64, 可能含有'/', 临时文件用其哈希命名
        staged = self.staging_dir / f"{calculate_hash(member_name)}.json"
        staged.write_bytes(dump_json(note.to_dict(), indent=True))
        self._staged[member_name] = staged

    def save(self, notebook_name: str, notebook_id: str,
             images: Iterable[ProcessedImage] = ()) -> NotebookConfig:
        """
        打包NSX文件

        Args:
            notebook_name: 笔记本名称
            notebook_id: 笔记本成员名
            images: 待打包的图片

        Returns:
            写入包中的清单
        """
        manifest = NotebookConfig(notebook=[notebook_id])
        written = set()

        with zipfile.ZipFile(self.output, 'w', compression=zipfile.ZIP_DEFLATED) as zf:
            # 笔记
            for member_name, staged in self._staged.items():
                try:
                    zf.writestr(member_name, staged.read_bytes())
                except Exception as e:
                    logger.error(f"写入笔记失败 {member_name}: {e}")
                    continue
                manifest.note.append(member_name)
                written.add(member_name)

            # 图片
            for image in images:
                member_name = Config.FILE_PREFIX + image.md5
                if member_name in written:
                    continue
                try:
                    data = base64.b64decode(image.data_b64, validate=True)
                    zf.writestr(member_name, data)
                except Exception as e:
                    logger.error(f"写入图片失败 {member_name}: {e}")
                    continue
                written.add(member_name)
                logger.info(f"  已打包图片: {member_name}")

            # 笔记本和清单, 失败时整个打包失败
            zf.writestr(notebook_id, dump_json(Notebook(title=notebook_name).to_dict()))
            zf.writestr(Config.MANIFEST_NAME, dump_json(manifest.to_dict()))

        logger.info(f"已保存NSX文件: {self.output}")
        return manifest
