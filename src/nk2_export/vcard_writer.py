"""
vCard writing module for exporting autocomplete contacts.
"""
# pylint: disable=logging-fstring-interpolation

import logging
import re
from pathlib import Path
from typing import List

import vobject

from nk2_export.contact_parser import Contact

logger = logging.getLogger("nk2_export")

_EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+$')


def _validate_contact(contact: Contact) -> None:
    """
    Check that a contact can be represented as a vCard.

    Args:
        contact: Contact to check

    Raises:
        ValueError: If the name is empty or the email is not an address
    """
    if not contact.name.strip():
        raise ValueError("formatted name is empty")
    if not _EMAIL_PATTERN.match(contact.email):
        raise ValueError(f"invalid email address {contact.email!r}")


def _contact_to_vcard(contact: Contact) -> vobject.base.Component:
    """
    Convert a contact to a vCard object.

    Args:
        contact: Contact to convert

    Returns:
        vobject vCard component with a formatted name and one email
    """
    _validate_contact(contact)

    vcard = vobject.vCard()

    given, _, family = contact.name.strip().rpartition(' ')
    if not given:
        given, family = family, ''
    vcard.add('n').value = vobject.vcard.Name(family=family, given=given)

    vcard.add('fn').value = contact.name

    email = vcard.add('email')
    email.value = contact.email
    email.type_param = 'INTERNET'

    return vcard


def write_vcard_file(contacts: List[Contact], output_path: Path) -> int:
    """
    Write contacts to a vCard file.

    Contacts that cannot be encoded as a vCard are skipped with a warning.

    Args:
        contacts: List of contacts
        output_path: Path where the vCard file should be written

    Returns:
        Number of vCards written
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    vcard_strings = []
    for contact in contacts:
        try:
            vcard_strings.append(_contact_to_vcard(contact).serialize())
        except (ValueError, vobject.base.VObjectError) as e:
            logger.warning(
                f"Failed to create vcard for contact {contact.name}: {e}"
            )

    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        f.write(''.join(vcard_strings))

    logger.info(
        f"Successfully wrote {len(vcard_strings)} contacts to {output_path}"
    )
    return len(vcard_strings)

