# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import pathlib
import site
import sys


_filepath = pathlib.Path(__file__)
is_devel = (not _filepath.is_relative_to(sys.prefix) and
            not _filepath.is_relative_to(site.getusersitepackages()))
updatesparser_version = '1.2'
if is_devel:
    updatesparser_version += '.dev0'
