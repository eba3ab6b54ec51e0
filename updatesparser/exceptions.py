# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH


class UpdatesParserError(Exception):
    """Base class for the errors raised while producing a changelog."""


class DecodeError(UpdatesParserError):
    """Raised when the updateinfo document or one of its updates cannot be decoded."""


class ConfigError(UpdatesParserError):
    """Raised when the filter or output configuration cannot be built."""
