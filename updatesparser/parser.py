# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import dataclasses
import datetime
import logging
import typing

from updatesparser.exceptions import ConfigError
from updatesparser.updateinfo import iter_updates, unix_time


log = logging.getLogger(__name__)

security_type = 'security'

_epoch = datetime.datetime.fromtimestamp(0, tz=datetime.timezone.utc)


def _hundred_years_ahead():
    return datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=36525)


def _as_utc(date):
    if date.tzinfo is None:
        return date.replace(tzinfo=datetime.timezone.utc)
    return date


@dataclasses.dataclass(frozen=True)
class FilterConfig:
    """
    Selection criteria for updates.

    Only updates issued strictly between `after_date` and `before_date` are
    selected. `update_type` restricts the selection to one update type and a
    non empty `pkg_white_list` to updates touching at least one of the listed
    packages.
    """
    before_date: datetime.datetime = dataclasses.field(default_factory=_hundred_years_ahead)
    after_date: datetime.datetime = _epoch
    date_format: typing.Optional[str] = None
    pkg_white_list: typing.FrozenSet[str] = frozenset()
    update_type: typing.Optional[str] = None

    def __post_init__(self):
        # Naive datetimes can not be compared with the issued dates
        object.__setattr__(self, 'before_date', _as_utc(self.before_date))
        object.__setattr__(self, 'after_date', _as_utc(self.after_date))
        object.__setattr__(self, 'pkg_white_list', frozenset(self.pkg_white_list))


def parse_time(date, date_format=None):
    """
    Parse a filter boundary. Without `date_format` the date is a Unix
    timestamp, otherwise it is parsed with :py:meth:`datetime.datetime.strptime`.
    Dates without timezone information are taken as UTC.
    """
    try:
        if not date_format:
            return unix_time(date)
        return _as_utc(datetime.datetime.strptime(date, date_format))
    except ValueError as e:
        raise ConfigError(f"failed parsing date '{date}': {e}") from e


def read_packages_file(pkg_file):
    packages = []

    if not pkg_file:
        return packages

    try:
        with open(pkg_file, encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                # "|" is the separator of the *.packages file produced by OBS,
                # the first field is the package name
                packages.append(line.split('|')[0])
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"failed reading packages file '{pkg_file}': {e}") from e

    return packages


def new_filter_config(before=None, after=None, date_format=None,
                      packages_file=None, update_type=None):
    """
    Build a :py:class:`FilterConfig` from command line style values.

    `before` and `after` are strings parsed according to `date_format`,
    `packages_file` names an OBS ``*.packages`` file. Unset or empty values
    leave the corresponding criterion at its default.
    """
    options = {}

    if date_format:
        options['date_format'] = date_format
    if before:
        options['before_date'] = parse_time(before, date_format)
    if after:
        options['after_date'] = parse_time(after, date_format)
    if packages_file:
        options['pkg_white_list'] = read_packages_file(packages_file)
    if update_type:
        options['update_type'] = update_type

    filter_config = FilterConfig(**options)
    log.debug('Selecting %s updates issued after %s and before %s, %d package(s) listed',
              filter_config.update_type or 'all', filter_config.after_date,
              filter_config.before_date, len(filter_config.pkg_white_list))
    return filter_config


def matches(update, filter_config):
    if filter_config.update_type and update.type != filter_config.update_type:
        return False

    issued = update.issued.date
    if issued is None:
        return False

    if not filter_config.after_date < issued < filter_config.before_date:
        return False

    if not filter_config.pkg_white_list:
        return True

    return any(pkg.name in filter_config.pkg_white_list for pkg in update.packages)


def parse(source, filter_config, handler):
    """
    Stream the updates of `source` and call `handler` with each update
    selected by `filter_config`.

    Decoding errors are raised as :py:class:`DecodeError`, exceptions raised by
    `handler` stop the parse and are passed on unchanged.
    """
    for update in iter_updates(source):
        if matches(update, filter_config):
            handler(update)
