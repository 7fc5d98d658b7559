"""
Length-prefixed primitive decoders for NK2 property payloads.

Every length or element count read from the file is checked against a
DecoderLimits policy before any payload byte is consumed, so corrupted or
hostile input cannot make the decoder allocate unbounded memory.
"""

import codecs
from dataclasses import dataclass
from typing import List

from nk2_export.byte_reader import ByteReader
from nk2_export.errors import TooMuchDataError
from nk2_export.nk2_definitions import (
    BytesListValue,
    BytesValue,
    EmptyValue,
    PropertyType,
    PropertyValue,
    TextListValue,
    TextValue,
)

MAX_STRING_LENGTH = 10_000
MAX_BYTE_ARRAY_LENGTH = 2_000_000
MAX_ARRAY_ELEMENTS = 500_000

CLSID_LENGTH = 16

ANSI_ENCODING = 'cp1252'
UNICODE_ENCODING = 'utf-16-le'
ANSI_FALLBACK_ERRORS = 'nk2-cp1252-fallback'


def _cp1252_fallback(error: UnicodeDecodeError):
    """
    Map bytes cp1252 leaves undefined (0x81, 0x8D, 0x8F, 0x90, 0x9D) to the
    code point of the same value, as the WHATWG Windows-1252 table does.

    :param error: Decode error raised by the cp1252 codec
    :return: Replacement text and the position to resume decoding from
    """
    undefined = error.object[error.start:error.end]
    return ''.join(chr(byte) for byte in undefined), error.end


codecs.register_error(ANSI_FALLBACK_ERRORS, _cp1252_fallback)


@dataclass(frozen=True)
class DecoderLimits:
    """
    Upper bounds applied to declared lengths while decoding.

    Attributes:
        max_string_length: Maximum byte count of a single string
        max_binary_length: Maximum byte count of a single binary blob
        max_array_elements: Maximum element count of a multi-value property
    """

    max_string_length: int = MAX_STRING_LENGTH
    max_binary_length: int = MAX_BYTE_ARRAY_LENGTH
    max_array_elements: int = MAX_ARRAY_ELEMENTS


DEFAULT_LIMITS = DecoderLimits()


def check_max_length(name: str, length: int, max_length: int) -> None:
    """
    Reject a declared length above its limit.

    :param name: Field name used in the error message
    :param length: Declared length or element count
    :param max_length: Largest accepted value
    :raises TooMuchDataError: If length exceeds max_length
    """
    if length > max_length:
        raise TooMuchDataError(name, length, max_length)


def parse_ansi_string(
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> str:
    """
    Decode a length-prefixed Windows-1252 string.

    :param reader: Byte cursor positioned at the length prefix
    :param limits: Length limits to enforce
    :return: Decoded text without its null terminator
    """
    bytes_count = reader.read_u32()
    check_max_length("ANSI String", bytes_count, limits.max_string_length)
    data = reader.read_bytes(bytes_count)

    if data.endswith(b'\x00'):
        data = data[:-1]

    return data.decode(ANSI_ENCODING, errors=ANSI_FALLBACK_ERRORS)


def parse_unicode_string(
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> str:
    """
    Decode a length-prefixed UTF-16LE string.

    :param reader: Byte cursor positioned at the length prefix
    :param limits: Length limits to enforce
    :return: Decoded text without its null terminator
    """
    bytes_count = reader.read_u32()
    check_max_length("Unicode String", bytes_count, limits.max_string_length)
    data = reader.read_bytes(bytes_count)

    if data.endswith(b'\x00\x00'):
        data = data[:-2]

    return data.decode(UNICODE_ENCODING, errors='replace')


def parse_binary(
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> bytes:
    """
    Read a length-prefixed binary blob.

    :param reader: Byte cursor positioned at the length prefix
    :param limits: Length limits to enforce
    :return: Raw bytes of the blob
    """
    bytes_count = reader.read_u32()
    check_max_length("Byte array", bytes_count, limits.max_binary_length)
    return reader.read_bytes(bytes_count)


def parse_binary_arrays(
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> List[bytes]:
    """
    Read a counted list of length-prefixed binary blobs.

    :param reader: Byte cursor positioned at the element count
    :param limits: Element count and blob length limits to enforce
    :return: List of raw blobs
    """
    arrays_count = reader.read_u32()
    check_max_length("Byte arrays", arrays_count, limits.max_array_elements)
    return [parse_binary(reader, limits) for _ in range(arrays_count)]


def parse_ansi_string_arrays(
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> List[str]:
    """
    Read a counted list of Windows-1252 strings.

    :param reader: Byte cursor positioned at the element count
    :param limits: Element count and string length limits to enforce
    :return: List of decoded strings
    """
    count = reader.read_u32()
    check_max_length("ANSI String arrays", count, limits.max_array_elements)
    return [parse_ansi_string(reader, limits) for _ in range(count)]


def parse_unicode_string_arrays(
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> List[str]:
    """
    Read a counted list of UTF-16LE strings.

    :param reader: Byte cursor positioned at the element count
    :param limits: Element count and string length limits to enforce
    :return: List of decoded strings
    """
    count = reader.read_u32()
    check_max_length("Unicode String arrays", count, limits.max_array_elements)
    return [parse_unicode_string(reader, limits) for _ in range(count)]


def parse_data(
    property_type: PropertyType,
    reader: ByteReader,
    limits: DecoderLimits = DEFAULT_LIMITS
) -> PropertyValue:
    """
    Decode the variable-length payload that follows a property's scalar slot.

    Types without a payload decode to EmptyValue; their value is only
    available from the raw scalar bytes.

    :param property_type: Resolved type of the property
    :param reader: Byte cursor positioned right after the 8 scalar bytes
    :param limits: Length limits to enforce
    :return: Decoded property value
    """
    if property_type == PropertyType.PT_STRING8:
        return TextValue(parse_ansi_string(reader, limits))
    if property_type == PropertyType.PT_UNICODE:
        return TextValue(parse_unicode_string(reader, limits))
    if property_type == PropertyType.PT_CLSID:
        return BytesValue(reader.read_bytes(CLSID_LENGTH))
    if property_type == PropertyType.PT_BINARY:
        return BytesValue(parse_binary(reader, limits))
    if property_type == PropertyType.PT_MV_BINARY:
        return BytesListValue(tuple(parse_binary_arrays(reader, limits)))
    if property_type == PropertyType.PT_MV_STRING8:
        return TextListValue(tuple(parse_ansi_string_arrays(reader, limits)))
    if property_type == PropertyType.PT_MV_UNICODE:
        return TextListValue(
            tuple(parse_unicode_string_arrays(reader, limits))
        )
    return EmptyValue()
