"""Markdown 到 Synology Note Station (.nsx) 的转换工具"""
from pathlib import Path
from typing import Optional, Union

from .config import Config
from .converter import NsxConverter, notebook_id_for, nsx_output_path
from .models import RunSummary
from .utils.logger import setup_logger, get_logger

# 初始化日志
setup_logger()
logger = get_logger()


class Converter:
    """笔记格式转换器"""

    @classmethod
    def markdown_to_nsx(cls,
                        source: Union[str, Path],
                        notebook_name: str = Config.DEFAULT_NOTEBOOK_NAME,
                        target: Optional[Union[str, Path]] = None,
                        share_attachments: Optional[bool] = None,
                        front_matter: Optional[bool] = None) -> RunSummary:
        """
        将Markdown目录转换为NSX文件

        Args:
            source: Markdown文件目录
            notebook_name: 笔记本名称
            target: NSX输出文件路径, 默认为 <目录名>.nsx
            share_attachments: 附件表是否在所有笔记间共享, 默认取 Config.SHARE_ATTACHMENTS
            front_matter: 是否读取 front matter 中的标题和标签, 默认取 Config.READ_FRONT_MATTER
        """
        try:
            source_path = Path(source)

            # 验证
            if not source_path.exists():
                raise FileNotFoundError(f"目录不存在: {source_path}")

            if share_attachments is None:
                share_attachments = Config.SHARE_ATTACHMENTS
            if front_matter is None:
                front_matter = Config.READ_FRONT_MATTER

            logger.info(f"开始转换: {source_path} -> 笔记本 '{notebook_name}'")
            converter = NsxConverter(share_attachments=share_attachments, front_matter=front_matter)
            summary = converter.batch_convert(source, notebook_name, target)

            logger.info(f"转换完成: {summary.converted} 个笔记, 跳过 {summary.skipped} 个")
            return summary

        except Exception as e:
            logger.error(f"转换失败: {e}")
            raise


__all__ = ['Converter', 'Config', 'NsxConverter', 'RunSummary', 'notebook_id_for', 'nsx_output_path']
