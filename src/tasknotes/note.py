# SPDX-License-Identifier: GPL-3.0-or-later

import base64
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from tasknotes.constants import EMPTY_PREVIEW, TITLE_MAX_CHARS, UNTITLED_TITLE

DEFAULT_COLOR = 'default'

# Seconds between the Unix epoch and 2001-01-01T00:00:00Z, the reference
# date of numeric createdDate values.
REFERENCE_DATE_OFFSET = 978307200


def _first_non_blank_line(content):
    for line in content.split('\n'):
        stripped = line.strip()
        if stripped:
            return stripped
    return None


def derive_title(content) -> str:
    """Return the note title for ``content``.

    The title is the first non-blank line, stripped and cut to
    ``TITLE_MAX_CHARS`` characters, or a placeholder for blank content.
    """
    line = _first_non_blank_line(content or '')
    if line is None:
        return UNTITLED_TITLE
    return line[:TITLE_MAX_CHARS]


def _parse_date(value) -> datetime:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return datetime.fromtimestamp(value + REFERENCE_DATE_OFFSET)
    if isinstance(value, str):
        # fromisoformat only understands a trailing Z from Python 3.11 on
        if value.endswith('Z'):
            value = value[:-1] + '+00:00'
        return datetime.fromisoformat(value)
    raise TypeError(f'unsupported createdDate value: {value!r}')


@dataclass
class Note:
    id: str
    title: str
    content: str  # plain text, one task or list item per line
    created_date: datetime
    rich_text_data: Optional[bytes] = None  # serialized rich text blocks
    tags: list[str] = field(default_factory=list)
    is_pinned: bool = False
    color: str = DEFAULT_COLOR
    # createdDate exactly as it was read, written back unchanged
    stored_date: object = field(default=None, repr=False, compare=False)

    @classmethod
    def new(cls) -> 'Note':
        return cls(
            id=str(uuid.uuid4()),
            title=UNTITLED_TITLE,
            content='',
            created_date=datetime.now(),
        )

    @property
    def preview(self) -> str:
        """First non-blank line of the content, used in the sidebar."""
        return _first_non_blank_line(self.content) or EMPTY_PREVIEW

    @property
    def has_rich_text(self) -> bool:
        return self.rich_text_data is not None

    def update_content(self, content):
        self.content = content
        self.title = derive_title(content)

    def set_rich_content(self, text, data):
        """Store formatted blocks together with their plain-text projection."""
        self.update_content(text)
        self.rich_text_data = data

    def add_tag(self, name) -> bool:
        tag = name.strip().lower()
        if not tag or tag in self.tags:
            return False
        self.tags.append(tag)
        return True

    def remove_tag(self, name):
        self.tags = [t for t in self.tags if t != name]

    def _encoded_date(self):
        if self.stored_date is not None:
            return self.stored_date
        return self.created_date.isoformat()

    def to_dict(self) -> dict:
        data = {
            'id': self.id,
            'title': self.title,
            'content': self.content,
            'createdDate': self._encoded_date(),
            'tags': list(self.tags),
            'isPinned': self.is_pinned,
            'color': self.color,
        }
        if self.rich_text_data is not None:
            data['richTextData'] = base64.b64encode(self.rich_text_data).decode('ascii')
        return data

    @classmethod
    def from_dict(cls, data) -> 'Note':
        """Decode a stored note, filling defaults for fields added later."""
        rich = data.get('richTextData')
        return cls(
            id=str(data['id']),
            title=str(data['title']),
            content=str(data['content']),
            created_date=_parse_date(data['createdDate']),
            rich_text_data=base64.b64decode(rich) if rich is not None else None,
            tags=[str(t) for t in data.get('tags', [])],
            is_pinned=bool(data.get('isPinned', False)),
            color=str(data.get('color', DEFAULT_COLOR)),
            stored_date=data['createdDate'],
        )
