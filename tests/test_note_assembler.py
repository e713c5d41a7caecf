import json

from md2nsx.config import Config
from md2nsx.models import Attachment, Note
from md2nsx.processors.note_assembler import NoteAssembler, find_thumb, make_brief, note_member_name

from .conftest import FIXED_TIME


def attachment(mime: str) -> Attachment:
    return Attachment(md5='0' * 32, name='f', size=1, width=0, height=0,
                      type=mime, ctime=FIXED_TIME, ref='cmVm')


def test_brief_collapses_whitespace() -> None:
    assert make_brief('  a\t\tb\n\n  c   \r\n') == 'a b c'


def test_brief_truncates_long_text() -> None:
    brief = make_brief('x' * 150)
    assert brief == 'x' * 100 + '...'
    assert len(brief) == 103


def test_brief_keeps_text_at_limit() -> None:
    assert make_brief('y' * 100) == 'y' * 100


def test_brief_truncates_after_collapsing() -> None:
    brief = make_brief('word\n\n' * 40)
    assert '  ' not in brief
    assert brief.startswith('word word')
    assert len(brief) == 103


def test_member_name_is_base64_of_title() -> None:
    assert note_member_name('a') == 'note_YQ=='


def test_find_thumb_picks_first_image() -> None:
    table = {'file_pdf': attachment('application/pdf'), 'file_png': attachment('image/png'),
             'file_jpg': attachment('image/jpeg')}
    assert find_thumb(table) == 'file_png'
    assert find_thumb({'file_pdf': attachment('application/pdf')}) is None


def test_assemble_note(clock) -> None:
    table = {'file_pdf': attachment('application/pdf'), 'file_png': attachment('image/png')}
    note, member = NoteAssembler(table, clock=clock).assemble('My Title', '# Hello\n\nworld', 'nb_1')

    assert member == note_member_name('My Title')
    assert note.title == 'My Title'
    assert note.parent_id == 'nb_1'
    assert note.mtime == note.ctime == FIXED_TIME
    assert note.attachment is table
    assert note.thumb == 'file_png'
    assert note.brief == '# Hello world'
    assert '<h1>Hello</h1>' in note.content
    assert note.tag == []
    assert (note.latitude, note.longitude, note.encrypt) == (0, 0, False)


def test_assemble_placeholders(clock) -> None:
    note, member = NoteAssembler({}, clock=clock).assemble('', ' \n\t ', 'nb_1')

    assert note.title == Config.UNTITLED
    assert member == note_member_name(Config.UNTITLED)
    assert note.brief == Config.EMPTY_NOTE
    assert f'<p>{Config.EMPTY_NOTE}</p>' in note.content
    assert note.thumb is None


def test_note_serialization_order() -> None:
    note = Note(parent_id='nb_1', title='t', mtime=1, ctime=1, brief='b', content='<p>c</p>',
                attachment={'file_png': attachment('image/png')}, tag=['x'])
    data = note.to_dict()

    assert list(data) == ['category', 'parent_id', 'title', 'mtime', 'ctime', 'latitude',
                          'longitude', 'encrypt', 'attachment', 'brief', 'content', 'tag']
    assert data['attachment']['file_png']['type'] == 'image/png'
    assert list(data['attachment']['file_png']) == ['md5', 'name', 'size', 'width', 'height',
                                                    'type', 'ctime', 'ref']
    note.thumb = 'file_png'
    assert list(note.to_dict())[3] == 'thumb'
    json.dumps(note.to_dict())
