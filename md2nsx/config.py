"""配置文件"""


class Config:
    """全局配置"""
    # 日志配置
    LOG_LEVEL = 'INFO'
    LOG_FILE = None
    LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'

    # 转换流程配置
    STAGING_DIR = 'temp_nsx_output'
    NSX_SUFFIX = '.nsx'
    MARKDOWN_GLOB = '*.md'
    DEFAULT_NOTEBOOK_NAME = 'Imported Notebook'
    # 附件表在整个批次内共享(每篇笔记都携带全部附件)
    SHARE_ATTACHMENTS = True
    # 读取 front matter 中的 title/tags (默认关闭, 标题取文件名, 全文作为正文)
    READ_FRONT_MATTER = False

    # NSX 包成员命名
    NOTE_PREFIX = 'note_'
    FILE_PREFIX = 'file_'
    NOTEBOOK_PREFIX = 'nb_'
    MANIFEST_NAME = 'config.json'
    HASH_ALGORITHM = 'md5'

    # 占位内容
    UNTITLED = 'Untitled'
    EMPTY_NOTE = 'Empty note'
    BRIEF_LENGTH = 100
    BRIEF_ELLIPSIS = '...'

    # 附件配置
    IMAGE_WIDTH = 400
    IMAGE_HEIGHT = 300
    LINK_EXTENSIONS = ['pdf', 'doc', 'docx', 'txt', 'zip', 'rar', 'md', 'csv', 'xls', 'xlsx']
    DEFAULT_MIME = 'application/octet-stream'
    TEXT_MIME = 'text/plain'

    IMAGE_TAG = (
        '<img class="syno-notestation-image-object" '
        'src="webman/3rdparty/NoteStation/images/transparent.gif" '
        'border="0" width="{width}" ref="{ref}" adjust="true"/>'
    )
    LINK_TAG = '<a href="{ref}" target="_blank">{text}</a>'

    # Markdown配置
    MARKDOWN_EXTENSIONS = [
        'extra',
        'nl2br',
        'smarty',
        'codehilite',
    ]
    CODE_STYLE = 'friendly'
    CODE_TAB_WIDTH = 4

    INLINE_CODE_STYLE = (
        'color: #e83e8c; background-color: #f8f9fa; padding: 2px 4px; border-radius: 3px;'
    )
    BLOCKQUOTE_STYLE = (
        'margin: 1em 0; padding: 0.5em 1em; border-left: 4px solid #ccc; color: #666;'
    )
    CODE_BLOCK_STYLE = (
        'background-color: #f6f8fa !important;border: 1px solid #d1d5da;padding: 16px;'
        'margin: 10px 0;border-radius: 12px;'
        'box-shadow: 0 1px 3px rgba(0,0,0,0.12), 0 1px 2px rgba(0,0,0,0.24);'
        'display:inline-block; overflow-x: auto;max-width: 100%;min-width: 60%;'
    )
    CODE_PRE_STYLE = (
        'white-space: pre; font-family: Menlo, Monaco, Consolas, monospace; display: inline-block;'
    )

    # Note Station 复选框控件
    CHECKBOX_CHECKED = (
        '<input class="syno-notestation-editor-checkbox syno-notestation-editor-checkbox-checked '
        'note-station-checkbox-checked" src="webman/3rdparty/NoteStation/images/transparent.gif" '
        'type="image" data-mce-contenteditable="false" />'
    )
    CHECKBOX_UNCHECKED = (
        '<input class="syno-notestation-editor-checkbox note-station-checkbox" '
        'src="webman/3rdparty/NoteStation/images/transparent.gif" type="image" />'
    )
