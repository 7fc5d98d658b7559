"""
Output format selection for extracted contacts.
"""

from enum import Enum
from pathlib import Path
from typing import List, Union

from nk2_export.contact_parser import Contact
from nk2_export.csv_exporter import export_contacts_to_csv
from nk2_export.vcard_writer import write_vcard_file


class OutputFormat(str, Enum):
    """Output file formats supported by the exporter."""

    VCARD = 'vcard'
    CSV = 'csv'


def write_contacts(
    output_format: Union[OutputFormat, str],
    contacts: List[Contact],
    output_path: Path
) -> int:
    """
    Write contacts in the requested output format.

    :param output_format: Target file format
    :param contacts: List of contacts
    :param output_path: Destination file
    :return: Number of contacts written
    :raises ValueError: If the output format is unknown
    """
    output_format = OutputFormat(output_format)
    if output_format == OutputFormat.VCARD:
        return write_vcard_file(contacts, output_path)
    export_contacts_to_csv(contacts, output_path)
    return len(contacts)
