"""Note Station 专用的 Python-Markdown 扩展"""
import re
import xml.etree.ElementTree as etree
from typing import Callable, Dict, Optional

from bs4 import BeautifulSoup
from markdown import util
from markdown.extensions import Extension
from markdown.inlinepatterns import InlineProcessor, SimpleTagInlineProcessor
from markdown.postprocessors import Postprocessor
from markdown.treeprocessors import Treeprocessor
from pygments.formatters import HtmlFormatter

from ..config import Config

STRIKE_RE = r'(~{2})(.+?)\1'
# 裸URL, 结尾的标点不算在链接内
LINKIFY_RE = r'(?<![\w/.@:-])((?:https?://|www\.)[^\s<>\x02\x03]*[^\s<>\x02\x03.,:;!?\'")\]])'
TASK_RE = re.compile(r'^\[([ xX])\]\s+')
INPUT_RE = re.compile(r'<input\b[^>]*>', re.IGNORECASE)


class NoteStationHtmlFormatter(HtmlFormatter):
    """代码块: 带样式的容器 + language 类的 pre + 自定义 code 包装"""

    def __init__(self, lang_str: str = '', **options):
        super().__init__(**options)
        self.lang_str = lang_str

    def wrap(self, source):
        yield 0, f'<pre class="{self.lang_str}"><code style="{Config.CODE_PRE_STYLE}">'
        yield from source
        yield 0, '</code></pre>'

    def _wrap_div(self, inner):
        yield 0, f'<div style="{Config.CODE_BLOCK_STYLE}">'
        yield from inner
        yield 0, '</div>'


class LinkifyInlineProcessor(InlineProcessor):
    """把裸URL转换为链接"""

    ANCESTOR_EXCLUDES = ('a',)

    def handleMatch(self, m, data):
        url = m.group(1)
        href = url if '://' in url else f'http://{url}'
        el = etree.Element('a')
        el.set('href', href)
        el.text = util.AtomicString(url)
        return el, m.start(0), m.end(0)


class TaskListTreeprocessor(Treeprocessor):
    """列表项开头的 [ ] / [x] 转换为复选框"""

    def run(self, root):
        for li in list(root.iter('li')):
            target = li
            if not (li.text or '').strip() and len(li) and li[0].tag == 'p':
                target = li[0]
            match = TASK_RE.match(target.text or '')
            if not match:
                continue
            box = etree.Element('input', {'type': 'checkbox', 'disabled': 'disabled'})
            if match.group(1) in 'xX':
                box.set('checked', 'checked')
            box.tail = target.text[match.end():]
            target.text = ''
            target.insert(0, box)


def style_code_span(elem: etree.Element) -> None:
    """行内代码: 固定样式, 换行折叠为空格"""
    elem.set('style', Config.INLINE_CODE_STYLE)
    if elem.text:
        elem.text = util.AtomicString(elem.text.replace('\n', ' '))


def style_blockquote(elem: etree.Element) -> None:
    """引用块: 左边框样式"""
    elem.set('style', Config.BLOCKQUOTE_STYLE)


NODE_RULES: Dict[str, Callable[[etree.Element], None]] = {
    'code': style_code_span,
    'blockquote': style_blockquote,
}


class StyleTreeprocessor(Treeprocessor):
    """按节点类型套用 Note Station 样式"""

    def run(self, root):
        self._walk(root, None)

    def _walk(self, elem: etree.Element, parent: Optional[etree.Element]) -> None:
        rule = NODE_RULES.get(elem.tag)
        # pre 内的 code 属于代码块
        if rule and not (elem.tag == 'code' and parent is not None and parent.tag == 'pre'):
            rule(elem)
        for child in elem:
            self._walk(child, elem)


def _checkbox_widget(match: re.Match) -> str:
    box = BeautifulSoup(match.group(0), 'html.parser').input
    if box is None or box.get('type', '').lower() != 'checkbox':
        return match.group(0)
    return Config.CHECKBOX_CHECKED if box.has_attr('checked') else Config.CHECKBOX_UNCHECKED


def replace_checkboxes(html: str) -> str:
    """把渲染出的复选框替换为 Note Station 的复选框控件, 其余HTML原样保留"""
    if 'checkbox' not in html:
        return html
    return INPUT_RE.sub(_checkbox_widget, html)


class CheckboxPostprocessor(Postprocessor):
    def run(self, text):
        return replace_checkboxes(text)


class NoteStationExtension(Extension):
    """删除线, 自动链接, 任务列表, 样式和复选框控件"""

    def extendMarkdown(self, md):
        md.inlinePatterns.register(SimpleTagInlineProcessor(STRIKE_RE, 'del'), 'strike', 65)
        md.inlinePatterns.register(LinkifyInlineProcessor(LINKIFY_RE, md), 'linkify', 85)
        md.treeprocessors.register(TaskListTreeprocessor(md), 'tasklist', 25)
        md.treeprocessors.register(StyleTreeprocessor(md), 'notestation_style', 5)
        md.postprocessors.register(CheckboxPostprocessor(md), 'checkbox', 5)


def makeExtension(**kwargs):
    return NoteStationExtension(**kwargs)
