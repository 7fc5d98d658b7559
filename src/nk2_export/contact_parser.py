"""
Contact extraction from decoded NK2 rows.
"""
# pylint: disable=logging-fstring-interpolation

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from nk2_export.errors import MissingPropertyTagError, Nk2Error
from nk2_export.nk2_definitions import (
    PR_DISPLAY_NAME_W,
    PR_EMAIL_ADDRESS_W,
    PR_NICK_NAME_W,
    PR_NICK_NAME_WEIGHT,
    PR_SMTP_ADDRESS_W,
    Property,
    Row,
)

logger = logging.getLogger("nk2_export")

UNKNOWN_IDENTIFIER = "?"


@dataclass
class Contact:
    """
    A contact recovered from one autocomplete row.

    Attributes:
        name: Display name
        email: SMTP address, or the recipient address if none is stored
        server_email: Recipient address as stored (may be an Exchange DN)
        weight: Autocomplete ordering weight, if present
    """

    name: str
    email: str
    server_email: str
    weight: Optional[int] = None


@dataclass(frozen=True)
class RowFailure:
    """A row that could not be turned into a contact."""

    index: int
    identifier: str
    error: Exception


@dataclass
class ExtractionResult:
    contacts: List[Contact] = field(default_factory=list)
    failures: List[RowFailure] = field(default_factory=list)


def fix_name(name: str) -> str:
    """
    Strip one wrapping single quote from each end of a display name.

    Outlook stores some display names as 'Name'; each end is handled on its
    own, so a name with only a leading quote loses only that quote.

    :param name: Raw display name
    :return: Name without the wrapping quotes
    """
    if name.startswith("'"):
        name = name[1:]
    if name.endswith("'"):
        name = name[:-1]
    return name


def _require_property(row: Row, tag: int) -> Property:
    prop = row.find_property_by_tag(tag)
    if prop is None:
        raise MissingPropertyTagError(tag)
    return prop


def parse_contact(row: Row) -> Contact:
    """
    Build a contact from the properties of one row.

    :param row: Decoded autocomplete row
    :return: Contact built from the row
    :raises MissingPropertyTagError: If display name or email is missing
    """
    name_property = _require_property(row, PR_DISPLAY_NAME_W)
    recipient_property = _require_property(row, PR_EMAIL_ADDRESS_W)

    email_property = row.find_property_by_tag(PR_SMTP_ADDRESS_W)
    if email_property is None:
        email_property = recipient_property

    weight = None
    weight_property = row.find_property_by_tag(PR_NICK_NAME_WEIGHT)
    if weight_property is not None:
        weight = weight_property.decode_value_as_long()

    return Contact(
        name=fix_name(str(name_property.value)),
        email=str(email_property.value),
        server_email=str(recipient_property.value),
        weight=weight
    )


def _row_identifier(row: Row) -> str:
    id_property = row.find_property_by_tag(PR_NICK_NAME_W)
    if id_property is None:
        return UNKNOWN_IDENTIFIER
    return str(id_property.value)


def extract_contacts(rows: Sequence[Row]) -> ExtractionResult:
    """
    Build contacts from all rows, skipping rows that cannot be converted.

    :param rows: Decoded autocomplete rows
    :return: Extracted contacts together with the rows that were skipped
    """
    result = ExtractionResult()

    for idx, row in enumerate(rows):
        try:
            result.contacts.append(parse_contact(row))
        except Nk2Error as e:
            identifier = _row_identifier(row)
            logger.warning(f"Failed to parse contact {idx} ({identifier}): {e}")
            result.failures.append(RowFailure(idx, identifier, e))

    logger.info(
        f"Extracted {len(result.contacts)} contacts "
        f"({len(result.failures)} rows skipped)"
    )
    return result


def parse_contacts(rows: Sequence[Row]) -> List[Contact]:
    """
    Build contacts from all rows, dropping the rows that cannot be converted.

    :param rows: Decoded autocomplete rows
    :return: Extracted contacts in row order
    """
    return extract_contacts(rows).contacts
