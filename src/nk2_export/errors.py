"""
Exception types raised while decoding NK2 autocomplete files.
"""


class Nk2Error(Exception):
    """Base class for all NK2 decoding errors."""


class InvalidPropertyTypeError(Nk2Error):
    """
    Raised when a property header carries a type code outside the known table.
    """

    def __init__(self, property_type: int):
        self.property_type = property_type
        super().__init__(f"Found not-known property type: 0x{property_type:02x}")


class MissingPropertyTagError(Nk2Error):
    """
    Raised when a row lacks a property tag that is required to build a contact.
    """

    def __init__(self, tag: int):
        self.tag = tag
        super().__init__(f"Missing property tag: 0x{tag:08x}")


class TooMuchDataError(Nk2Error):
    """
    Raised when a declared length or element count exceeds its decoding limit.
    """

    def __init__(self, field_name: str, received: int, limit: int):
        self.field_name = field_name
        self.received = received
        self.limit = limit
        super().__init__(
            f"Too much data to read in {field_name} "
            f"(received len: {received}, max len: {limit})"
        )


class BufferUnderflowError(Nk2Error):
    """
    Raised when fewer bytes remain in the buffer than a read requires.
    """

    def __init__(self, requested: int, position: int, remaining: int):
        self.requested = requested
        self.position = position
        self.remaining = remaining
        super().__init__(
            f"Unexpected end of data at offset {position}: "
            f"needed {requested} bytes, {remaining} available"
        )
