# UPDATESPARSER - RPM updateinfo changelog generator
# SPDX-License-Identifier: GPL-3.0-or-later
# SPDX-FileCopyrightText: 2024 Linutronix GmbH

"""
Parse RPM ``updateinfo`` XML feeds, filter the contained update records and
render the survivors as a changelog.

Example usage:

.. code:: python

    filter_config = new_filter_config(update_type='security')
    output_config = new_output_config(json_out=True)

    parse_file_to_output('updateinfo.xml', filter_config, output_config)
"""
