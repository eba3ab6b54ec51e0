# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

import io
import pathlib


here = pathlib.Path(__file__).parent


def fixture_path(name):
    return here.joinpath(name)


def update_xml(uid, update_type='security', date='1700000000', packages=(), references=()):
    """ Build the XML of a single update, `date` None omits the issued element """
    issued = '' if date is None else f'<issued date="{date}"/>'
    refs = ''.join(
        f'<reference href="{href}" id="{rid}" title="{title}" type="{rtype}"/>'
        for href, rid, title, rtype in references
    )
    pkgs = ''.join(
        f'<package name="{name}" version="1.0" release="1.1" arch="x86_64"/>'
        for name in packages
    )
    return (
        f'<update status="stable" type="{update_type}">'
        f'<id>{uid}</id><title>Update {uid}</title><severity>low</severity>'
        f'{issued}<references>{refs}</references>'
        f'<description>Fixes for {uid}</description>'
        f'<pkglist><collection>{pkgs}</collection></pkglist>'
        '</update>'
    )


def updateinfo_source(*updates):
    return io.BytesIO(f'<updates>{"".join(updates)}</updates>'.encode('utf-8'))
