# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import dataclasses
import json
import logging
import sys
import typing

from updatesparser.exceptions import ConfigError
from updatesparser.parser import parse
from updatesparser.templates import UpdateTemplate, default_template, load_template_file


log = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class OutputConfig:
    """
    Destination and format of a changelog.

    `close` releases `output` once the changelog is written, it is only set
    for sinks opened on behalf of the caller. A changelog is rendered with
    `template` unless `json_out` is set.
    """
    output: typing.TextIO = dataclasses.field(default_factory=lambda: sys.stdout)
    close: typing.Optional[typing.Callable[[], None]] = None
    template: typing.Optional[UpdateTemplate] = None
    json_out: bool = False


def new_output_config(output_file=None, writer=None, template=None,
                      template_file=None, json_out=False):
    """
    Build an :py:class:`OutputConfig`.

    The changelog goes to `output_file`, which is created, or to the text
    stream `writer`, and defaults to standard output. `template` is an
    already loaded :py:class:`UpdateTemplate`, `template_file` a Mako file to
    load one from.
    """
    if template_file:
        template = load_template_file(template_file)

    if template is not None and json_out:
        log.warning('json output defined, ignoring provided template')
        template = None
    elif template is None and not json_out:
        template = default_template()

    options = {}
    if writer is not None:
        options['output'] = writer

    if output_file:
        try:
            f = open(output_file, 'w', encoding='utf-8')
        except OSError as e:
            raise ConfigError(f"failed creating output file '{output_file}': {e}") from e
        options['output'] = f
        options['close'] = f.close

    return OutputConfig(template=template, json_out=json_out, **options)


class TemplateWriter:
    """
    Render updates with the sections of `template` as they are accepted:
    ``join`` separates two consecutive updates, ``header`` and ``footer``
    are written exactly once.
    """

    def __init__(self, template, output):
        self.template = template
        self.output = output
        self.count = 0

    def header(self):
        self.template.write(self.output, 'header')

    def __call__(self, update):
        if self.count:
            self.template.write(self.output, 'join')
        self.template.write(self.output, 'body', update)
        self.count += 1

    def footer(self):
        self.template.write(self.output, 'footer')


def _render_template(source, filter_config, out):
    writer = TemplateWriter(out.template, out.output)
    writer.header()
    parse(source, filter_config, writer)
    writer.footer()
    log.debug('Rendered %d update(s)', writer.count)


def _render_json(source, filter_config, out):
    # The array can only be closed once the last update is known
    updates = []
    parse(source, filter_config, lambda u: updates.append(u.to_json()))

    json.dump(updates, out.output, indent=2, ensure_ascii=False)
    out.output.write('\n')
    log.debug('Rendered %d update(s) as json', len(updates))


def _release_after_error(close, what='output'):
    try:
        close()
    except Exception:
        log.debug('closing the %s failed as well', what, exc_info=True)


def parse_to_output(source, filter_config, out):
    """
    Write the updates of `source` selected by `filter_config` as described
    by `out`.

    The output is released through ``out.close`` on every path. A failure
    to release it is only raised when writing the changelog succeeded.
    """
    render = _render_json if out.json_out else _render_template

    if out.close is None:
        render(source, filter_config, out)
        return

    try:
        render(source, filter_config, out)
    except BaseException:
        _release_after_error(out.close)
        raise

    out.close()


def parse_file_to_output(updateinfo, filter_config, out):
    """
    Like :py:func:`parse_to_output`, reading the file `updateinfo`. The
    input file is closed with the same rules as the output.
    """
    try:
        f = open(updateinfo, 'rb')
    except OSError as e:
        if out.close is not None:
            _release_after_error(out.close)
        raise ConfigError(f"could not open updateinfo file '{updateinfo}': {e}") from e

    try:
        parse_to_output(f, filter_config, out)
    except BaseException:
        _release_after_error(f.close, 'updateinfo file')
        raise

    f.close()
