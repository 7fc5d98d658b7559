"""
Property types, tags and data model of the NK2 autocomplete format.

An NK2 file is a list of rows; each row is one autocomplete entry made of
MAPI-style properties. A property is identified by a 32-bit tag whose low
16 bits are the property type code and whose high 16 bits are the property id.

Dependencies:
    - dataclasses: Standard library for immutable record types
    - enum: Standard library for the closed property type enumeration
    - struct: Standard library for reinterpreting the raw scalar slot
    - typing: Standard library for type hints
"""

import struct
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple, Union

from nk2_export.errors import InvalidPropertyTypeError

# This property must be first in each recipient row. Functionally serves as
# a key identifier for the recipient row.
PR_NICK_NAME_W = 0x6001001F
# The address book entry identifier for the recipient.
PR_ENTRYID = 0x0FFF0102
# The recipient's display name.
PR_DISPLAY_NAME_W = 0x3001001F
# The recipient's email address (SMTP address or Exchange DN).
PR_EMAIL_ADDRESS_W = 0x3003001F
# The recipient's address type (e.g. SMTP or EX).
PR_ADDRTYPE_W = 0x3002001F
# The recipient's SMTP address.
PR_SMTP_ADDRESS_W = 0x39FE001F
# The display string that shows up in the autocomplete list.
PR_DROPDOWN_DISPLAY_NAME_W = 0x6003001F
# Ordering weight of the entry in the autocomplete list.
PR_NICK_NAME_WEIGHT = 0x60040003

MV_FLAG = 0x1000
RAW_SCALAR_SIZE = 8


class PropertyType(IntEnum):
    """Property type codes found in the low 16 bits of a property tag."""

    PT_UNSPECIFIED = 0x0000
    PT_NULL = 0x0001
    PT_I2 = 0x0002
    PT_I4 = 0x0003
    PT_FLOAT = 0x0004
    PT_DOUBLE = 0x0005
    PT_CURRENCY = 0x0006
    PT_APPTIME = 0x0007
    PT_ERROR = 0x000A
    PT_BOOLEAN = 0x000B
    PT_OBJECT = 0x000D
    PT_I8 = 0x0014
    PT_STRING8 = 0x001E
    PT_UNICODE = 0x001F  # Same as PT_TSTRING
    PT_SYSTIME = 0x0040
    PT_CLSID = 0x0048
    PT_SVREID = 0x00FB
    PT_SRESTRICT = 0x00FD
    PT_ACTIONS = 0x00FE
    PT_BINARY = 0x0102
    PT_MV_BINARY = MV_FLAG | 0x0102
    PT_MV_STRING8 = MV_FLAG | 0x001E
    PT_MV_UNICODE = MV_FLAG | 0x001F

    @property
    def is_multi_value(self) -> bool:
        return bool(self.value & MV_FLAG)


_PROPERTY_TYPES = {member.value: member for member in PropertyType}


def parse_property_type(code: int) -> PropertyType:
    """
    Resolve a 16-bit type code to its PropertyType.

    :param code: Raw type code read from a property header
    :return: Matching PropertyType member
    :raises InvalidPropertyTypeError: If the code is not a known type
    """
    try:
        return _PROPERTY_TYPES[code]
    except KeyError:
        raise InvalidPropertyTypeError(code) from None


@dataclass(frozen=True)
class EmptyValue:
    """Value of a property whose data lives only in the raw scalar slot."""

    def __str__(self) -> str:
        return "empty"


@dataclass(frozen=True)
class TextValue:
    text: str

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class BytesValue:
    data: bytes

    def __str__(self) -> str:
        return str(list(self.data))


@dataclass(frozen=True)
class BytesListValue:
    items: Tuple[bytes, ...]

    def __str__(self) -> str:
        return f"BList: {[list(item) for item in self.items]}"


@dataclass(frozen=True)
class TextListValue:
    items: Tuple[str, ...]

    def __str__(self) -> str:
        return f"TList: {list(self.items)}"


PropertyValue = Union[
    EmptyValue, TextValue, BytesValue, BytesListValue, TextListValue
]


@dataclass(frozen=True)
class Property:
    """
    One decoded property of a row.

    raw_scalar always holds the 8 bytes that follow the property header,
    whatever the type; value holds the decoded variable-length payload.
    """

    property_type: PropertyType
    tag: int
    reserved: int
    raw_scalar: bytes
    value: PropertyValue = field(default_factory=EmptyValue)

    def __post_init__(self):
        if len(self.raw_scalar) != RAW_SCALAR_SIZE:
            raise ValueError(
                f"raw_scalar must be {RAW_SCALAR_SIZE} bytes, "
                f"got {len(self.raw_scalar)}"
            )

    @property
    def tag_id(self) -> int:
        """Property id stored in the high 16 bits of the tag."""
        return self.tag >> 16

    def decode_value_as_long(self) -> int:
        """Read the raw scalar slot as a little-endian signed 32-bit integer."""
        return struct.unpack_from('<i', self.raw_scalar)[0]


@dataclass(frozen=True)
class Row:
    """One autocomplete entry: its properties in file order."""

    properties: Tuple[Property, ...] = ()

    def find_property_by_tag(self, tag: int) -> Optional[Property]:
        """
        Return the first property carrying the given tag.

        :param tag: Full 32-bit property tag
        :return: Matching property or None
        """
        return next(
            (prop for prop in self.properties if prop.tag == tag), None
        )
