# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

"""
Changelog templates.

A changelog template is a Mako template made of four sections. The template
body is the ``body`` section, it renders one update passed as the page
argument ``update``. The ``header``, ``join`` and ``footer`` sections are top
level defs without arguments::

    <%page args="update"/>\\
    <%def name="header()">Updates:
    </%def>\\
    <%def name="join()"></%def>\\
    <%def name="footer()"></%def>\\
    * ${update.id}: ${update.title}
"""

import logging
import os

from mako import exceptions
from mako.template import Template

from updatesparser.exceptions import ConfigError
from updatesparser.makofiles import mako_template_text


log = logging.getLogger(__name__)

default_template_name = 'changelog.mako'

_def_sections = ('header', 'join', 'footer')


class UpdateTemplate:
    def __init__(self, template):
        missing = [s for s in _def_sections if not template.has_def(s)]
        if missing:
            raise ConfigError(f'template {template.uri} is missing the '
                              f'{", ".join(missing)} section(s)')
        self.template = template

    def render(self, section, update=None):
        try:
            if section == 'body':
                return self.template.render(update=update)
            return self.template.get_def(section).render()
        except Exception:
            log.error('rendering section "%s" failed:\n%s', section,
                      exceptions.text_error_template().render())
            raise

    def write(self, output, section, update=None):
        output.write(self.render(section, update))


def load_template_file(fname):
    try:
        template = Template(filename=os.fspath(fname))
    except (OSError, exceptions.MakoException) as e:
        raise ConfigError(f"failed loading template '{fname}': {e}") from e

    return UpdateTemplate(template)


def default_template():
    return UpdateTemplate(Template(text=mako_template_text(default_template_name),
                                   uri=default_template_name))
