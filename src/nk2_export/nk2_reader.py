"""
Row and file framing for NK2 autocomplete files.

File layout (little-endian):
    [12 bytes header][u32 row count][row]*
    row:      [u32 property count][property]*
    property: [u16 type][u16 tag high][u32 reserved][8 bytes scalar][payload]

Dependencies:
    - logging: Standard library for logging
    - pathlib: Standard library for path handling
    - typing: Standard library for type hints
"""
# pylint: disable=logging-fstring-interpolation

import logging
from pathlib import Path
from typing import List, Optional, Union

from nk2_export.byte_reader import ByteReader
from nk2_export.data_parser import DEFAULT_LIMITS, DecoderLimits, parse_data
from nk2_export.errors import Nk2Error
from nk2_export.nk2_definitions import (
    RAW_SCALAR_SIZE,
    Property,
    Row,
    parse_property_type,
)

logger = logging.getLogger("nk2_export")

HEADER_SIZE = 12


def read_property(
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> Property:
    """
    Decode a single property header and its payload.

    :param reader: Byte cursor positioned at the property's type code
    :param limits: Length limits for variable-length payloads
    :return: Decoded property
    """
    type_code = reader.read_u16()
    property_type = parse_property_type(type_code)

    tag = (reader.read_u16() << 16) | type_code
    reserved = reader.read_u32()
    raw_scalar = reader.read_bytes(RAW_SCALAR_SIZE)

    multi_value = " (multi-value)" if property_type.is_multi_value else ""
    logger.debug(f"    Property Type: {property_type.name}{multi_value}")
    logger.debug(f"    Property Tag: 0x{tag:08x}")

    value = parse_data(property_type, reader, limits)
    logger.debug(f"    Value: {value}")

    return Property(
        property_type=property_type,
        tag=tag,
        reserved=reserved,
        raw_scalar=raw_scalar,
        value=value
    )


def read_row(
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> Row:
    """
    Decode one row: a property count followed by that many properties.

    :param reader: Byte cursor positioned at the property count
    :param limits: Length limits for variable-length payloads
    :return: Row holding the properties in file order
    """
    properties_count = reader.read_u32()

    properties = []
    for property_idx in range(properties_count):
        logger.debug(f"  Property: {property_idx}")
        properties.append(read_property(reader, limits))

    return Row(properties=tuple(properties))


def read_all_rows(
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> List[Row]:
    """
    Decode the row count and every row that follows it.

    :param reader: Byte cursor positioned right after the file header
    :param limits: Length limits for variable-length payloads
    :return: List of rows in file order
    """
    rows_count = reader.read_u32()

    rows = []
    for row_idx in range(rows_count):
        logger.debug(f"Row: {row_idx}")
        rows.append(read_row(reader, limits))

    return rows


def parse_nk2_bytes(
    data: bytes,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> Optional[List[Row]]:
    """
    Decode all rows from the raw contents of an NK2 file.

    Structural errors do not propagate: they are logged together with the
    offset reached and the result is None, which callers can tell apart from
    a valid file holding zero rows.

    :param data: Complete file contents
    :param limits: Length limits for variable-length payloads
    :return: List of rows, or None if the data is corrupt
    """
    reader = ByteReader(data)

    try:
        reader.skip(HEADER_SIZE)
        rows = read_all_rows(reader, limits)
    except Nk2Error as e:
        logger.error(f"Error while reading offset {reader.pos}: {e}")
        return None

    logger.info(
        f"Successfully read {len(rows)} rows from nk2 autocomplete file."
    )
    return rows


def read_file(
    file_path: Union[str, Path],
    limits: DecoderLimits = DEFAULT_LIMITS
) -> Optional[List[Row]]:
    """
    Read and decode an NK2 autocomplete file.

    :param file_path: Path to the .nk2 / .dat file
    :param limits: Length limits for variable-length payloads
    :return: List of rows, or None if the file is corrupt
    :raises FileNotFoundError: If the file doesn't exist
    :raises OSError: If the file cannot be read
    """
    data = Path(file_path).read_bytes()
    logger.debug(f"Read {len(data)} bytes from {file_path}")
    return parse_nk2_bytes(data, limits)
