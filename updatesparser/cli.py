# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import inspect
import os.path
import traceback
import types
import typing

from updatesparser.exceptions import UpdatesParserError


def _module_name(tb):
    mod = inspect.getmodule(tb)
    spec = getattr(mod, '__spec__', None)
    if spec is None:
        return None
    return spec.name


def _last_frame_in_package(tb, package):
    frame = tb.tb_frame

    while tb.tb_next is not None:
        tb = tb.tb_next
        name = _module_name(tb)
        if name and (name == package or name.startswith(package + '.')):
            frame = tb.tb_frame

    return frame


class _SupportsStrWrite(typing.Protocol):
    def write(self, value: str): ...


def format_exception(exc: Exception,
                     output: _SupportsStrWrite,
                     verbose: bool,
                     base_module: types.ModuleType):
    """
    Format an exception `exc` for user consumption to `output`.

    If `verbose` is True print the full stacktrace. Otherwise errors raised by
    updatesparser itself, like a malformed updateinfo file, are reported by
    their message only, and any other exception with its message and the
    source location within `base_module`.
    Returns the exit code for the process.
    """
    tb = exc.__traceback__

    if verbose:
        traceback.print_exception(None, value=exc, tb=tb, file=output)
    elif isinstance(exc, UpdatesParserError):
        print(f'Whoops. There was an error: {exc}', file=output)
    else:
        frame = _last_frame_in_package(tb, base_module.__name__)
        filename = os.path.normpath(frame.f_code.co_filename)
        print(f'{filename}:{frame.f_lineno}: '
              f'{type(exc).__name__}: {exc}', file=output)

    return 1
