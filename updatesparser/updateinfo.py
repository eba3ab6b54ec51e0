# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

"""
Record model of an updateinfo document.

The XML representation of an update is not a structural mirror of its JSON
representation: the issued date is a string encoded Unix timestamp stored in
an attribute and reference URLs are raw attribute strings. The conversion
functions below are applied at the decoding boundary, so the records only
ever hold domain values.
"""

import dataclasses
import datetime
import re
import typing
import urllib.parse

from lxml.etree import XMLSyntaxError

from updatesparser.exceptions import DecodeError
from updatesparser.treeutils import iterelements


_timestamp_re = re.compile(r'[+-]?[0-9]+')
_bad_escape_re = re.compile(r'%(?![0-9A-Fa-f]{2})')


def unix_time(value):
    """
    Convert a decimal Unix timestamp string to an aware UTC datetime.

    >>> unix_time('1700000000')
    datetime.datetime(2023, 11, 14, 22, 13, 20, tzinfo=datetime.timezone.utc)
    >>> unix_time('17e8')
    Traceback (most recent call last):
    ...
    ValueError: invalid Unix timestamp '17e8'
    """
    if not isinstance(value, str) or not _timestamp_re.fullmatch(value):
        raise ValueError(f'invalid Unix timestamp {value!r}')
    try:
        return datetime.datetime.fromtimestamp(int(value), tz=datetime.timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f'Unix timestamp {value!r} out of range') from e


def parse_date(value):
    try:
        return unix_time(value)
    except ValueError as e:
        raise DecodeError(str(e)) from e


def format_date(date):
    """
    >>> format_date(unix_time('1700000000'))
    '1700000000'
    """
    return str(int(date.timestamp()))


def _check_url(value, url):
    """
    urlsplit() accepts almost anything, reject what is not a URL.

    >>> _check_url('http://a b/', urllib.parse.urlsplit('http://a b/'))
    Traceback (most recent call last):
    ...
    ValueError: invalid character in host 'a b'
    """
    if any(ord(c) < 0x20 or ord(c) == 0x7f for c in value):
        raise ValueError('invalid control character in URL')
    if any(c.isspace() for c in url.netloc):
        raise ValueError(f'invalid character in host {url.netloc!r}')
    for part in (url.netloc, url.path, url.fragment):
        if _bad_escape_re.search(part):
            raise ValueError(f'invalid escape in {part!r}')
    if not url.scheme and ':' in url.path.split('/', 1)[0]:
        raise ValueError('first path segment in URL cannot contain colon')
    # raises ValueError unless the port is a number in range
    url.port


def parse_href(value):
    try:
        url = urllib.parse.urlsplit(value)
        _check_url(value, url)
    except ValueError as e:
        raise DecodeError(f'invalid URL {value!r}: {e}') from e
    return url


def format_href(url):
    """
    >>> format_href(parse_href('https://bugzilla.suse.com/show_bug.cgi?id=1216123'))
    'https://bugzilla.suse.com/show_bug.cgi?id=1216123'
    """
    return url.geturl()


def _sparse(fields):
    return {k: v for k, v in fields.items() if v}


@dataclasses.dataclass
class Package:
    name: str = ''
    version: str = ''
    release: str = ''
    arch: str = ''
    filename: str = ''

    @classmethod
    def from_xml(cls, node):
        return cls(name=node.attr('name'),
                   version=node.attr('version'),
                   release=node.attr('release'),
                   arch=node.attr('arch'),
                   filename=node.text('filename', default=''))

    def to_json(self):
        return _sparse({
            'name': self.name,
            'version': self.version,
            'release': self.release,
            'arch': self.arch,
        })

    @classmethod
    def from_json(cls, data):
        return cls(name=data.get('name', ''),
                   version=data.get('version', ''),
                   release=data.get('release', ''),
                   arch=data.get('arch', ''))


@dataclasses.dataclass
class Reference:
    url: typing.Optional[urllib.parse.SplitResult] = None
    id: str = ''
    title: str = ''
    type: str = ''

    @property
    def href(self):
        if self.url is None:
            return ''
        return format_href(self.url)

    @classmethod
    def from_xml(cls, node):
        url = None
        if node.has_attr('href'):
            url = parse_href(node.attr('href'))

        return cls(url=url,
                   id=node.attr('id'),
                   title=node.attr('title'),
                   type=node.attr('type'))

    def to_json(self):
        return _sparse({
            'href': self.href,
            'id': self.id,
            'title': self.title,
            'type': self.type,
        })

    @classmethod
    def from_json(cls, data):
        url = None
        if 'href' in data:
            url = parse_href(data['href'])

        return cls(url=url,
                   id=data.get('id', ''),
                   title=data.get('title', ''),
                   type=data.get('type', ''))


@dataclasses.dataclass
class Issued:
    date: typing.Optional[datetime.datetime] = None

    def __str__(self):
        if self.date is None:
            return ''
        return self.date.strftime('%Y-%m-%d %H:%M:%S %z %Z')

    @classmethod
    def from_xml(cls, node):
        if node is None or not node.has_attr('date'):
            return cls()
        return cls(date=parse_date(node.attr('date')))


@dataclasses.dataclass
class Update:
    """
    One patch or errata entry of an updateinfo document.

    `status`, `release` and the package file names are decoded but never
    rendered to JSON.
    """
    type: str = ''
    status: str = ''
    id: str = ''
    title: str = ''
    severity: str = ''
    release: str = ''
    issued: Issued = dataclasses.field(default_factory=Issued)
    references: typing.List[Reference] = dataclasses.field(default_factory=list)
    description: str = ''
    packages: typing.List[Package] = dataclasses.field(default_factory=list)

    @classmethod
    def from_xml(cls, node):
        return cls(
            type=node.attr('type'),
            status=node.attr('status'),
            id=node.text('id', default=''),
            title=node.text('title', default=''),
            severity=node.text('severity', default=''),
            release=node.text('release', default=''),
            issued=Issued.from_xml(node.node('issued')),
            references=[Reference.from_xml(ref)
                        for ref in node.all('references/reference')],
            description=node.text('description', default=''),
            packages=[Package.from_xml(pkg)
                      for pkg in node.all('pkglist/collection/package')],
        )

    def to_json(self):
        return _sparse({
            'type': self.type,
            'id': self.id,
            'title': self.title,
            'severity': self.severity,
            'date': format_date(self.issued.date) if self.issued.date else '',
            'references': [ref.to_json() for ref in self.references],
            'description': self.description,
            'packages': [pkg.to_json() for pkg in self.packages],
        })

    @classmethod
    def from_json(cls, data):
        issued = Issued()
        if 'date' in data:
            issued = Issued(date=parse_date(data['date']))

        return cls(
            type=data.get('type', ''),
            id=data.get('id', ''),
            title=data.get('title', ''),
            severity=data.get('severity', ''),
            issued=issued,
            references=[Reference.from_json(ref) for ref in data.get('references', [])],
            description=data.get('description', ''),
            packages=[Package.from_json(pkg) for pkg in data.get('packages', [])],
        )


@dataclasses.dataclass
class UpdateInfo:
    updates: typing.List[Update] = dataclasses.field(default_factory=list)

    @classmethod
    def load(cls, source):
        """Decode every update of `source` without filtering."""
        return cls(updates=list(iter_updates(source)))


update_tag = 'update'


def iter_updates(source):
    """
    Decode the top-level ``<update>`` elements of `source` one at a time.

    `source` is a file name or a binary file object. Each element is
    discarded from the document tree once decoded, so memory use is bounded
    by a single update.
    """
    elements = iterelements(source, update_tag)
    while True:
        try:
            node = next(elements)
        except StopIteration:
            return
        except XMLSyntaxError as e:
            raise DecodeError(f'decoding token: {e}') from e

        try:
            update = Update.from_xml(node)
        except DecodeError as e:
            raise DecodeError(f'decoding element "{update_tag}": {e}') from e
        finally:
            node.release()

        yield update
