"""Markdown 目录到 NSX 的批量转换"""
import time
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

from .config import Config
from .models import Attachment, ItemResult, ItemStatus, ProcessedImage, RunSummary
from .parsers.markdown_parser import MarkdownParser
from .processors.markdown_renderer import MarkdownRenderer
from .processors.note_assembler import NoteAssembler
from .processors.reference_rewriter import rewrite_references
from .utils.helpers import calculate_hash
from .utils.logger import get_logger
from .writers.nsx_writer import NsxWriter

logger = get_logger()


def nsx_output_path(folder: Union[str, Path]) -> Path:
    """由源目录得到输出文件名: 去掉结尾的路径分隔符, 加 .nsx"""
    stripped = str(folder).rstrip('/\\') or str(folder)
    if Path(stripped).name in ('', '.', '..'):
        stripped = str(Path(stripped).resolve())
    return Path(stripped + Config.NSX_SUFFIX)


def notebook_id_for(notebook_name: str) -> str:
    """笔记本ID"""
    return Config.NOTEBOOK_PREFIX + calculate_hash(notebook_name)


class NsxConverter:
    """
    NSX 批量转换器

    附件表和图片列表属于转换器实例, 在一次批量转换的所有文档间共享.
    share_attachments 为 False 时每篇笔记只携带自己文档登记的附件.
    front_matter 为 True 时标题和标签取自 front matter.
    """

    def __init__(self,
                 share_attachments: bool = Config.SHARE_ATTACHMENTS,
                 front_matter: bool = Config.READ_FRONT_MATTER,
                 renderer: Optional[MarkdownRenderer] = None,
                 staging_dir: Union[str, Path] = Config.STAGING_DIR,
                 clock: Callable[[], float] = time.time):
        self.attachments: Dict[str, Attachment] = {}
        self.processed_images: List[ProcessedImage] = []
        self.share_attachments = share_attachments
        self.front_matter = front_matter
        self.renderer = renderer or MarkdownRenderer()
        self.staging_dir = Path(staging_dir)
        self.clock = clock

    def batch_convert(self, folder: Union[str, Path],
                      notebook_name: str = Config.DEFAULT_NOTEBOOK_NAME,
                      output: Optional[Union[str, Path]] = None) -> RunSummary:
        """
        转换目录中的所有Markdown文件并打包为NSX

        Args:
            folder: Markdown 目录(不递归)
            notebook_name: 笔记本名称
            output: 输出文件, 默认由目录名生成

        Returns:
            RunSummary
        """
        folder_path = Path(folder)
        if not folder_path.is_dir():
            raise FileNotFoundError(f"目录不存在: {folder_path}")

        md_files = sorted(p for p in folder_path.glob(Config.MARKDOWN_GLOB) if p.is_file())
        if not md_files:
            raise ValueError(f"未找到Markdown文件: {folder_path}")
        logger.info(f"找到 {len(md_files)} 个Markdown文件")

        output_path = Path(output) if output else nsx_output_path(folder)
        notebook_id = notebook_id_for(notebook_name)
        logger.info(f"笔记本ID: {notebook_id}")

        summary = RunSummary(output=str(output_path), notebook_id=notebook_id)
        writer = NsxWriter(output_path, self.staging_dir)
        writer.prepare()
        try:
            for md_file in md_files:
                summary.add_document(self.convert_file(md_file, notebook_id, writer, summary))

            logger.info(f"打包为 {output_path}")
            summary.manifest = writer.save(notebook_name, notebook_id, self.processed_images)
        finally:
            writer.cleanup()

        # 每个包成员只对应一个成功的文档
        packaged = set(summary.manifest.note)
        for result in summary.documents:
            if not result.ok:
                continue
            if result.member not in packaged:
                result.status = ItemStatus.SKIPPED
                result.message = '写入NSX失败'
            else:
                packaged.discard(result.member)

        logger.info(f"成功转换 {summary.converted}/{len(md_files)} 个文件到 {output_path}")
        return summary

    def convert_file(self, md_file: Path, notebook_id: str,
                     writer: NsxWriter, summary: RunSummary) -> ItemResult:
        """转换单个Markdown文件, 失败时跳过该文件"""
        logger.info(f"正在转换 {md_file.name}...")
        try:
            source = MarkdownParser(md_file, self.front_matter).parse()

            rewritten = rewrite_references(md_file, source.body,
                                           clock=self.clock, taken=self.attachments)
            summary.references.extend(rewritten.results)
            self.attachments.update(rewritten.attachments)
            self.processed_images.extend(rewritten.images)

            table = self.attachments if self.share_attachments else rewritten.attachments
            assembler = NoteAssembler(table, self.renderer, self.clock)
            note, member_name = assembler.assemble(
                source.title, rewritten.text, notebook_id, source.tags
            )
            writer.write(note, member_name)
        except Exception as e:
            logger.error(f"转换失败 {md_file.name}: {e}")
            return ItemResult(md_file.name, ItemStatus.SKIPPED, str(e))

        logger.info(f"  转换成功: {md_file.name} -> {member_name}")
        return ItemResult(md_file.name, ItemStatus.OK, member=member_name)
