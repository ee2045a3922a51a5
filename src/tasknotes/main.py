# SPDX-License-Identifier: GPL-3.0-or-later

import sys

from tasknotes import __version__


def main():
    from tasknotes.application import TaskNotesApp

    app = TaskNotesApp(version=__version__)
    return app.run(sys.argv)


if __name__ == '__main__':
    sys.exit(main())
