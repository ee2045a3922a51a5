# SPDX-License-Identifier: GPL-3.0-or-later
"""Logging configuration for the application."""

import logging


def setup_logging(level='INFO'):
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s %(levelname)s %(name)s %(message)s',
    )
    logging.getLogger('tasknotes').setLevel(numeric_level)
