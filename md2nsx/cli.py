"""命令行入口"""
import sys
import argparse
from typing import List, Optional

from . import Converter
from .config import Config
from .utils.logger import setup_logger, get_logger

logger = get_logger()

EXAMPLES = """示例:
  md2nsx ./markdown-files
  md2nsx -n "My Notes" ./markdown-files
  md2nsx --notebook "My Notes" -o notes.nsx ./markdown-files
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='md2nsx',
        description="将 Markdown 目录转换为 Synology Note Station 的 NSX 格式。",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument('markdown_folder', nargs='?', help='Markdown 文件目录')
    parser.add_argument('-n', '--notebook', default=Config.DEFAULT_NOTEBOOK_NAME,
                        help=f'笔记本名称 (默认: "{Config.DEFAULT_NOTEBOOK_NAME}")')
    parser.add_argument('-o', '--output', help='输出的 NSX 文件路径 (默认: <目录名>.nsx)')
    parser.add_argument('--isolate-attachments', action='store_true',
                        help='每篇笔记只携带自己引用的附件 (默认所有笔记共享附件表)')
    parser.add_argument('--front-matter', action='store_true',
                        help='读取 front matter 中的 title/tags (默认标题取文件名)')
    parser.add_argument('--log-level', default=Config.LOG_LEVEL,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], help='日志级别')
    parser.add_argument('--log-file', help='日志文件路径')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.markdown_folder:
        parser.print_help()
        return 1

    setup_logger(level=args.log_level, log_file=args.log_file)

    try:
        summary = Converter.markdown_to_nsx(
            args.markdown_folder,
            notebook_name=args.notebook,
            target=args.output,
            share_attachments=not args.isolate_attachments,
            front_matter=args.front_matter,
        )
    except Exception:
        # 错误已由 Converter 记录
        return 1

    print(f"已将 '{args.markdown_folder}' 中的 {summary.converted} 个 Markdown 文件转换为 {summary.output}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
