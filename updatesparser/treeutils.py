# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import os

from lxml.etree import XMLSyntaxError, iterparse

# ElementTree helpers
#
# Paths and tags are matched on their local name, whatever namespace the
# document puts them in.


def any_ns(path):
    """
    >>> any_ns('references/reference')
    '{*}references/{*}reference'
    """
    return '/'.join('{*}' + step for step in path.split('/'))


class ebase:
    def __init__(self, et):
        self.et = et

    def text(self, path, **kwargs):
        el = self.et.find('./' + any_ns(path))
        if el is None:
            if 'default' in kwargs:
                return kwargs['default']

            raise KeyError(f'Cant find path {path}')

        return el.text or ''

    def attr(self, name, default=''):
        return self.et.attrib.get(name, default)

    def has_attr(self, name):
        return name in self.et.attrib

    def node(self, path):
        retval = self.et.find('./' + any_ns(path))
        if retval is not None:
            return elem(retval)
        return None

    def all(self, path):
        return map(elem, self.et.findall(any_ns(path)))


class elem(ebase):

    def release(self):
        """
        Drop the subtree of this element together with the already processed
        siblings before it, so a document read through :py:func:`iterelements`
        only keeps the element being decoded in memory.
        """
        self.et.clear(keep_tail=True)
        parent = self.et.getparent()
        if parent is None:
            return
        while self.et.getprevious() is not None:
            del parent[0]


class _BlankReader:
    """Binary reader noting whether anything but whitespace was read"""

    def __init__(self, f):
        self.f = f
        self.blank = True

    def read(self, size=-1):
        data = self.f.read(size)
        if self.blank and data.strip():
            self.blank = False
        return data


def _iterelements(f, tag):
    reader = _BlankReader(f)
    depth = 0
    events = iterparse(reader, events=('start', 'end'), tag=any_ns(tag),
                       huge_tree=True, remove_comments=True)
    try:
        for event, el in events:
            if event == 'start':
                depth += 1
                continue

            depth -= 1
            if depth == 0:
                yield elem(el)
    except XMLSyntaxError:
        # an empty document holds no elements
        if reader.blank:
            return
        raise


def iterelements(source, tag):
    """
    Yield every complete `tag` element of `source` which is not nested in
    another `tag` element, as soon as its end tag has been read.

    `source` is a file name or a binary file object. A source holding
    nothing but whitespace yields no element, other lxml errors raised while
    reading `source` are passed on to the caller.
    """
    if isinstance(source, (str, bytes, os.PathLike)):
        with open(source, 'rb') as f:
            yield from _iterelements(f, tag)
    else:
        yield from _iterelements(source, tag)
