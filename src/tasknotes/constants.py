# SPDX-License-Identifier: GPL-3.0-or-later

APP_ID = 'io.github.tasknotes.TaskNotes'
APP_NAME = 'TaskNotes'

DATA_DIR_NAME = 'tasknotes'
NOTES_FILENAME = 'notes.json'

UNCHECKED_MARKER = '☐ '
CHECKED_MARKER = '☑ '
BULLET_PREFIX = '• '

TITLE_MAX_CHARS = 50
UNTITLED_TITLE = 'Untitled Note'
EMPTY_PREVIEW = 'Empty note'
