# SPDX-License-Identifier: GPL-3.0-or-later
"""
Sticky list formatting for the note editor.

While a bullet or task mode is active, every new line typed at the end of the
note gets the mode's prefix. The formatter only computes the follow-up
content; the editor applies it on the next main loop iteration so it does not
fight the text buffer update that triggered it.
"""

import enum
import logging
from typing import Optional

from tasknotes.constants import BULLET_PREFIX, UNCHECKED_MARKER

logger = logging.getLogger(__name__)


class FormattingMode(enum.Enum):
    NONE = ''
    BULLET = BULLET_PREFIX
    TASK = UNCHECKED_MARKER

    @property
    def prefix(self) -> str:
        return self.value


class AutoFormatter:

    def __init__(self):
        self.mode = FormattingMode.NONE

    @property
    def active(self) -> bool:
        return self.mode is not FormattingMode.NONE

    def reset(self):
        self.mode = FormattingMode.NONE

    def toggle(self, mode, content) -> str:
        """Enter or leave ``mode`` and return the resulting content.

        Entering a mode appends its prefix so the user can start typing the
        first item right away. Leaving it leaves the content alone.
        """
        if mode is FormattingMode.NONE or mode is self.mode:
            logger.debug('Leaving %s mode', self.mode.name)
            self.mode = FormattingMode.NONE
            return content
        logger.debug('Entering %s mode', mode.name)
        self.mode = mode
        return content + mode.prefix

    def content_changed(self, old, new) -> Optional[str]:
        """Return the follow-up content for an edit, or None.

        Only an edit that adds lines is rewritten. Submitting a blank line
        (content ending in two newlines) ends the mode.
        """
        if not self.active:
            return None

        prefix = self.mode.prefix
        old_lines = old.split('\n')
        new_lines = new.split('\n')

        if new.endswith('\n\n'):
            self.reset()
            return None

        if len(new_lines) <= len(old_lines):
            return None

        last = new_lines[-1]
        if last == '':
            return new + prefix
        if not last.startswith(prefix):
            new_lines[-1] = prefix + last
            return '\n'.join(new_lines)
        return None
