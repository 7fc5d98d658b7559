"""
CSV export module for contact data.

This module provides functionality to export extracted autocomplete contacts
to CSV format for easy viewing and import into spreadsheet applications.

Dependencies:
    - csv: Standard library for CSV file handling
    - pathlib: Standard library for path handling
    - typing: Standard library for type hints
    - logging: Standard library for logging
"""
# pylint: disable=logging-fstring-interpolation

import csv
import logging
from pathlib import Path
from typing import List, Optional

from nk2_export.contact_parser import Contact

logger = logging.getLogger("nk2_export")

CSV_HEADERS = ['name', 'email', 'server_email', 'weight']
UNKNOWN_WEIGHT = '?'


def _format_weight(weight: Optional[int]) -> str:
    """
    Format a contact weight for CSV export.

    :param weight: Weight value or None
    :return: Decimal weight or '?' when absent
    """
    if weight is None:
        return UNKNOWN_WEIGHT
    return str(weight)


def _contact_to_csv_row(contact: Contact) -> List[str]:
    return [
        contact.name,
        contact.email,
        contact.server_email,
        _format_weight(contact.weight),
    ]


def export_contacts_to_csv(contacts: List[Contact], output_path: Path) -> None:
    """
    Export contacts to a CSV file.

    :param contacts: List of contacts
    :param output_path: Path where CSV file should be written
    :raises IOError: If file cannot be written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(output_path, 'w', newline='', encoding='utf-8') as csvfile:
            writer = csv.writer(
                csvfile,
                quoting=csv.QUOTE_MINIMAL,
                doublequote=True,
                lineterminator='\r\n'
            )

            writer.writerow(CSV_HEADERS)
            writer.writerows(_contact_to_csv_row(contact) for contact in contacts)

        logger.info(
            f"Successfully exported {len(contacts)} contacts to {output_path}"
        )

    except IOError as e:
        logger.error(f"Failed to write CSV file {output_path}: {e}")
        raise
