# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import logging
import os
from contextlib import contextmanager


root = logging.getLogger()
context_fmt = logging.Formatter('%(context)s%(message)s')


class ContextFilter(logging.Filter):

    def filter(self, record):
        if not hasattr(record, 'context'):
            record.context = f'[{record.levelname}] '
        return True


class _NullStream:
    def write(self, data):
        pass


def add_stream_handlers(streams):

    for stream in streams:
        if stream == os.devnull:
            stream = _NullStream()

        out = logging.StreamHandler(stream)
        out.addFilter(ContextFilter())
        out.setFormatter(context_fmt)
        yield out


@contextmanager
def parser_logging(*args, **kwargs):
    cleanup = open_logging(*args, **kwargs)
    try:
        yield
    finally:
        cleanup()


def open_logging(streams, level=logging.INFO):
    if not isinstance(streams, list):
        streams = [streams]

    old_level = root.level
    root.setLevel(level)

    handlers = list(add_stream_handlers(streams))
    for h in handlers:
        root.addHandler(h)

    def _cleanup():
        for h in handlers:
            root.removeHandler(h)
            h.close()
        root.setLevel(old_level)

    return _cleanup
