# SPDX-License-Identifier: GPL-3.0-or-later
"""
Rich text serialization between GtkTextBuffer and the note's rich text blob.

The blob is UTF-8 encoded JSON:
{
  "blocks": [
    {
      "type": "paragraph" | "bullet" | "task",
      "runs": [
        {"text": "☐ buy ", "tags": []},
        {"text": "milk", "tags": ["bold", "italic"]}
      ]
    }
  ]
}

One block per line of the plain text, so block N always corresponds to line N
of the note content.

Supported tags: bold, italic, underline, strikethrough
"""

import json
from typing import Optional

from tasknotes.constants import BULLET_PREFIX, CHECKED_MARKER, UNCHECKED_MARKER


TAG_NAMES = {'bold', 'italic', 'underline', 'strikethrough'}

_TAG_PROPS = {
    'bold': {'weight': 700},
    'italic': {'style': 2},  # Pango.Style.ITALIC
    'underline': {'underline': 1},  # Pango.Underline.SINGLE
    'strikethrough': {'strikethrough': True},
}


def _encode(blocks) -> bytes:
    return json.dumps({'blocks': blocks}, ensure_ascii=False).encode('utf-8')


def _decode(data):
    """Return the block list stored in ``data``, or None if it is not a blob."""
    try:
        blocks = json.loads(data.decode('utf-8'))['blocks']
    except (UnicodeDecodeError, json.JSONDecodeError, TypeError, KeyError):
        return None
    if not isinstance(blocks, list) or not all(isinstance(b, dict) for b in blocks):
        return None
    return blocks


def block_type(line_text) -> str:
    if line_text.startswith((UNCHECKED_MARKER, CHECKED_MARKER)):
        return 'task'
    if line_text.startswith(BULLET_PREFIX):
        return 'bullet'
    return 'paragraph'


def serialize_buffer(text_buffer) -> bytes:
    """Serialize a GtkTextBuffer to a rich text blob."""
    blocks = []
    start = text_buffer.get_start_iter()
    end = text_buffer.get_end_iter()

    if start.equal(end):
        return _encode([])

    full_text = text_buffer.get_text(start, end, True)
    lines = full_text.split('\n')

    line_start = text_buffer.get_start_iter()

    for line_idx, line_text in enumerate(lines):
        line_end = line_start.copy()
        line_end.forward_chars(len(line_text))

        runs = _extract_runs(text_buffer, line_start, line_end)
        blocks.append({'type': block_type(line_text), 'runs': runs})

        # Move past the newline
        if line_idx < len(lines) - 1:
            line_start = line_end.copy()
            line_start.forward_char()
        else:
            line_start = line_end

    return _encode(blocks)


def _extract_runs(text_buffer, start, end):
    """Extract formatted text runs from a range in the buffer."""
    runs = []
    if start.equal(end):
        return [{'text': '', 'tags': []}]

    it = start.copy()
    while it.compare(end) < 0:
        active_tags = _get_tag_names(it)

        # Find how far this tag combination extends
        run_end = it.copy()
        while run_end.compare(end) < 0:
            if not run_end.forward_to_tag_toggle(None):
                run_end = end.copy()
                break
            if run_end.compare(end) >= 0:
                run_end = end.copy()
                break
            if _get_tag_names(run_end) != active_tags:
                break

        text = text_buffer.get_text(it, run_end, True)
        if text:
            runs.append({'text': text, 'tags': sorted(active_tags)})

        it = run_end.copy()

    if not runs:
        runs = [{'text': '', 'tags': []}]

    return runs


def _get_tag_names(text_iter):
    names = set()
    for tag in text_iter.get_tags():
        name = tag.get_property('name')
        if name in TAG_NAMES:
            names.add(name)
    return names


def deserialize_to_buffer(text_buffer, data) -> bool:
    """Load a rich text blob into a GtkTextBuffer, applying formatting tags.

    Returns False, leaving the buffer empty, when ``data`` is not a blob.
    """
    text_buffer.set_text('')

    if not data:
        return False

    blocks = _decode(data)
    if blocks is None:
        return False

    ensure_tags(text_buffer)
    table = text_buffer.get_tag_table()

    for block_idx, block in enumerate(blocks):
        if block_idx > 0:
            text_buffer.insert(text_buffer.get_end_iter(), '\n')

        for run in block.get('runs', []):
            text = run.get('text', '')
            if not text:
                continue

            start_offset = text_buffer.get_end_iter().get_offset()
            text_buffer.insert(text_buffer.get_end_iter(), text)

            run_start = text_buffer.get_iter_at_offset(start_offset)
            run_end = text_buffer.get_end_iter()
            for tag_name in run.get('tags', []):
                if tag_name in TAG_NAMES:
                    tag = table.lookup(tag_name)
                    if tag:
                        text_buffer.apply_tag(tag, run_start, run_end)
    return True


def load_text(text_buffer, data, content) -> bool:
    """Fill ``text_buffer`` with a note's text.

    The formatted ``data`` is used only when it is a blob whose plain text
    matches ``content``; otherwise ``content`` is loaded unformatted.
    Returns whether the formatting was restored.
    """
    if get_plain_text(data) == content:
        return deserialize_to_buffer(text_buffer, data)
    text_buffer.set_text(content)
    return False


def ensure_tags(text_buffer):
    """Ensure all formatting tags exist in the buffer's tag table."""
    table = text_buffer.get_tag_table()
    for name, props in _TAG_PROPS.items():
        if table.lookup(name) is None:
            text_buffer.create_tag(name, **props)


def get_plain_text(data) -> Optional[str]:
    """Extract the plain text projection of a rich text blob.

    Returns None when ``data`` is not a blob.
    """
    if not data:
        return ''
    blocks = _decode(data)
    if blocks is None:
        return None
    lines = []
    for block in blocks:
        lines.append(''.join(run.get('text', '') for run in block.get('runs', [])))
    return '\n'.join(lines)


def replace_line_prefix(data, line_index, old_prefix, new_prefix) -> bytes:
    """Swap ``old_prefix`` for ``new_prefix`` at the start of one block.

    Used to keep the blob in step with a checkbox toggled on the plain text.
    The formatting of the replaced characters is taken from the first run.
    Returns ``data`` unchanged when the block does not start with
    ``old_prefix``.
    """
    blocks = _decode(data)
    if blocks is None or not 0 <= line_index < len(blocks):
        return data

    runs = blocks[line_index].get('runs') or []
    text = ''.join(run.get('text', '') for run in runs)
    if not text.startswith(old_prefix):
        return data

    remaining = len(old_prefix)
    for run in runs:
        cut = min(remaining, len(run.get('text', '')))
        run['text'] = run.get('text', '')[cut:]
        remaining -= cut
    runs[0]['text'] = new_prefix + runs[0]['text']

    blocks[line_index]['runs'] = [run for run in runs if run['text']] or [
        {'text': '', 'tags': []}
    ]
    blocks[line_index]['type'] = block_type(new_prefix + text[len(old_prefix):])
    return _encode(blocks)
