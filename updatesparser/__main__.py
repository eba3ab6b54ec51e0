# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

from updatesparser.main import main

main()
