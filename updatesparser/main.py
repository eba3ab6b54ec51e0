# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import argparse
import logging
import os
import sys

import updatesparser
from updatesparser.cli import format_exception
from updatesparser.log import parser_logging
from updatesparser.output import new_output_config, parse_file_to_output
from updatesparser.parser import new_filter_config, security_type
from updatesparser.version import updatesparser_version


def _build_parser():
    aparser = argparse.ArgumentParser(
        prog='updatesparser',
        description='A simple CLI to parse updateinfo XML files')
    aparser.add_argument('--version', action='version',
                         version=f'%(prog)s v{updatesparser_version}')
    aparser.add_argument('--stacktrace-on-error', action='store_true',
                         dest='stacktrace_on_error',
                         help='Print the full stacktrace when failing')
    aparser.add_argument('--propagate-exception', action='store_true',
                         dest='propagate_exception', help=argparse.SUPPRESS)
    aparser.add_argument('-v', '--verbose', action='store_true', dest='verbose',
                         default=False, help='Log debug messages')

    aparser.add_argument('-b', '--beforeDate', dest='before_date',
                         help='Filter updates released before the given date. '
                              'Date as a unix timestamp unless --dateFormat is given')
    aparser.add_argument('-a', '--afterDate', dest='after_date',
                         help='Filter updates released after the given date. '
                              'Date as a unix timestamp unless --dateFormat is given')
    aparser.add_argument('-f', '--dateFormat', dest='date_format',
                         help='strptime format of --beforeDate and --afterDate, '
                              'e.g. "%%Y-%%m-%%d"')
    aparser.add_argument('-o', '--output', dest='output',
                         help="Output file. Defaults to 'stdout'")
    aparser.add_argument('-p', '--packages', dest='packages',
                         help='Package file list to filter updates modifying '
                              'any of the listed packages')
    aparser.add_argument('-s', '--security', action='store_true', dest='security',
                         default=False, help='Match only security updates')

    group = aparser.add_mutually_exclusive_group()
    group.add_argument('-t', '--template', dest='template',
                       help='Provides a custom update template file')
    group.add_argument('-j', '--json', action='store_true', dest='json',
                       default=False, help='Output in json format')

    aparser.add_argument('updateinfo', help='updateinfo XML file')

    return aparser


def run(args):
    filter_config = new_filter_config(
        before=args.before_date,
        after=args.after_date,
        date_format=args.date_format,
        packages_file=args.packages,
        update_type=security_type if args.security else None,
    )
    output_config = new_output_config(
        output_file=args.output,
        template_file=args.template,
        json_out=args.json,
    )
    parse_file_to_output(args.updateinfo, filter_config, output_config)


def main(argv=sys.argv):
    aparser = _build_parser()
    args = aparser.parse_args(argv[1:])

    if not os.path.exists(args.updateinfo):
        aparser.error(f"could not find updateinfo file '{args.updateinfo}'")

    level = logging.DEBUG if args.verbose else logging.INFO
    with parser_logging(streams=sys.stderr, level=level):
        try:
            run(args)
        except Exception as e:
            if args.propagate_exception:
                raise
            sys.exit(format_exception(e, output=sys.stderr,
                                      base_module=updatesparser,
                                      verbose=args.stacktrace_on_error))


def run_updatesparser(argv):
    return main(['updatesparser', '--propagate-exception', *[os.fspath(arg) for arg in argv]])
