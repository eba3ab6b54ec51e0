# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import importlib.resources


def mako_template_text(name):
    return importlib.resources.files(__name__).joinpath(name).read_text(encoding='utf-8')
