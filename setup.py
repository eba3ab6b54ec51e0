#!/usr/bin/env python3
#
# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

from updatesparser.version import updatesparser_version

from setuptools import setup


setup(name='updateinfo-parser',
      version=updatesparser_version,
      description='Changelog generator for RPM updateinfo metadata',
      author='Linutronix GmbH',
      author_email='info@linutronix.de',
      packages=['updatesparser',
                'updatesparser.makofiles',
                'updatesparser.tests',
                ],
      package_data={'updatesparser.makofiles': ['*.mako'],
                    'updatesparser.tests': ['*.xml', '*.mako', '*.packages']},
      python_requires='>=3.9',
      entry_points={'console_scripts': ['updatesparser = updatesparser.main:main']},
      install_requires=['lxml',
                        'Mako',
                        ],
      extras_require={'test': ['pytest',
                               'flake8',
                               ]},
      )
