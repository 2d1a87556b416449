"""
HDLC byte-stuffing encoder/decoder.

Frames a single payload between two FEND bytes and escapes any payload byte
that collides with FEND or FESC.
FEND=0x7E, FESC=0x7D, TFEND=0x5E, TFESC=0x5D (IEEE defaults).

Wire format: [FEND][escaped payload][FEND]
    FEND in payload -> FESC TFEND
    FESC in payload -> FESC TFESC
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

# HDLC special characters (IEEE defaults)
FEND = 0x7E  # Frame end / sync byte
FESC = 0x7D  # Frame escape
TFEND = 0x5E  # Substituted for FEND after FESC
TFESC = 0x5D  # Substituted for FESC after FESC

# memoryview formats accepted by decode_in_place()
BYTE_FORMATS = ("B", "b", "c")


@dataclass(frozen=True)
class SpecialChars:
    """
    Special characters used to frame and escape a payload.

    Attributes:
        fend: Frame END. Marks the beginning and end of a frame.
        fesc: Frame ESCape. Marks the start of a substitution pair.
        tfend: Trade Frame END. Substituted for fend inside escaped data.
        tfesc: Trade Frame ESCape. Substituted for fesc inside escaped data.

    Note:
        Values are not checked on construction. Every encode/decode call
        runs check_special_chars() first.
    """

    fend: int = FEND
    fesc: int = FESC
    tfend: int = TFEND
    tfesc: int = TFESC

    @classmethod
    def default(cls) -> "SpecialChars":
        """Create the IEEE standard character set (0x7E, 0x7D, 0x5E, 0x5D)."""
        return cls(fend=FEND, fesc=FESC, tfend=TFEND, tfesc=TFESC)


class HdlcErrorKind(IntEnum):
    """Kinds of framing errors."""

    DUPLICATE_SPECIAL_CHAR = 0x01
    MISSING_FIRST_FEND = 0x02
    MISSING_FINAL_FEND = 0x03
    FEND_CHAR_IN_DATA = 0x04
    MISSING_TRADE_CHAR = 0x05


class HdlcError(Exception):
    """Base exception for HDLC framing errors."""

    kind: HdlcErrorKind


class DuplicateSpecialCharError(HdlcError):
    """Two or more special characters share a value."""

    kind = HdlcErrorKind.DUPLICATE_SPECIAL_CHAR

    def __init__(self, value: int):
        self.value = value
        super().__init__(f"Caught a duplicate special character. (0x{value:02X})")


class HdlcDecodeError(HdlcError):
    """
    Malformed frame.

    Attributes:
        position: Index of the offending byte in the input frame
            (len(frame) when the input ran out).
    """

    message = "Malformed frame."

    def __init__(self, position: int):
        self.position = position
        super().__init__(f"{self.message} (at byte {position})")


class MissingFirstFendError(HdlcDecodeError):
    """Frame does not start with FEND."""

    kind = HdlcErrorKind.MISSING_FIRST_FEND
    message = "Missing first FEND character."


class MissingFinalFendError(HdlcDecodeError):
    """Frame ended before the closing FEND."""

    kind = HdlcErrorKind.MISSING_FINAL_FEND
    message = "Missing final FEND character."


class FendCharInDataError(HdlcDecodeError):
    """FEND found before the last byte of the frame."""

    kind = HdlcErrorKind.FEND_CHAR_IN_DATA
    message = "Caught a random sync char in the data."


class MissingTradeCharError(HdlcDecodeError):
    """FESC not followed by TFEND or TFESC."""

    kind = HdlcErrorKind.MISSING_TRADE_CHAR
    message = "Caught a random swap char in the data."


class DecodeState(Enum):
    """Decoder state."""

    EXPECT_OPENING_FEND = "expect_opening_fend"
    NORMAL = "normal"
    AFTER_ESCAPE = "after_escape"


def check_special_chars(chars: SpecialChars) -> None:
    """
    Verify the four special characters are pairwise distinct.

    Args:
        chars: Special characters to check.

    Raises:
        DuplicateSpecialCharError: On the first repeated value
            (checked in fend, fesc, tfend, tfesc order).
    """
    seen = set()
    for value in (chars.fend, chars.fesc, chars.tfend, chars.tfesc):
        if value in seen:
            raise DuplicateSpecialCharError(value)
        seen.add(value)


def encode(payload: bytes, chars: Optional[SpecialChars] = None) -> bytes:
    """
    Encode payload using HDLC byte-stuffing.

    Args:
        payload: Raw data to encode (any byte values).
        chars: Special characters. If None, uses the IEEE defaults.

    Returns:
        Escaped payload wrapped in FEND delimiters.

    Raises:
        DuplicateSpecialCharError: If chars contains duplicate values.
    """
    if chars is None:
        chars = SpecialChars.default()
    check_special_chars(chars)

    fend, fesc = chars.fend, chars.fesc
    fend_pair = bytes([fesc, chars.tfend])
    fesc_pair = bytes([fesc, chars.tfesc])

    encoded = bytearray([fend])  # Start with FEND

    for byte in payload:
        if byte == fesc:
            encoded += fesc_pair
        elif byte == fend:
            encoded += fend_pair
        else:
            encoded.append(byte)

    encoded.append(fend)  # End with FEND
    return bytes(encoded)


def decode(frame: bytes, chars: Optional[SpecialChars] = None) -> bytes:
    """
    Decode a single HDLC frame.

    Args:
        frame: Complete wire frame, FEND to FEND.
        chars: Special characters. If None, uses the IEEE defaults.

    Returns:
        Decoded payload (without FEND delimiters).

    Raises:
        DuplicateSpecialCharError: If chars contains duplicate values.
        MissingFirstFendError: If the frame does not start with FEND.
        FendCharInDataError: If FEND appears before the last byte.
        MissingTradeCharError: If FESC is followed by anything but TFEND/TFESC.
        MissingFinalFendError: If the frame ends before the closing FEND.
    """
    if chars is None:
        chars = SpecialChars.default()
    check_special_chars(chars)

    last = len(frame) - 1
    decoded = bytearray()
    state = DecodeState.EXPECT_OPENING_FEND

    for index, byte in enumerate(frame):
        if state is DecodeState.EXPECT_OPENING_FEND:
            if byte != chars.fend:
                raise MissingFirstFendError(index)
            state = DecodeState.NORMAL
        elif state is DecodeState.AFTER_ESCAPE:
            if byte == chars.tfend:
                decoded.append(chars.fend)
            elif byte == chars.tfesc:
                decoded.append(chars.fesc)
            else:
                raise MissingTradeCharError(index)
            state = DecodeState.NORMAL
        elif byte == chars.fesc:
            state = DecodeState.AFTER_ESCAPE
        elif byte == chars.fend:
            if index != last:
                raise FendCharInDataError(index)
            return bytes(decoded)
        else:
            decoded.append(byte)

    if state is DecodeState.EXPECT_OPENING_FEND:
        # Empty input
        raise MissingFirstFendError(0)
    raise MissingFinalFendError(len(frame))


def decode_in_place(frame: bytearray, chars: Optional[SpecialChars] = None) -> memoryview:
    """
    Decode a single HDLC frame inside the caller's buffer.

    Decoded bytes are written back over the frame, always at a lower index
    than they were read from, so no second buffer is needed.

    Args:
        frame: Writable buffer (bytearray, writable memoryview, array('B'))
            holding a complete wire frame.
        chars: Special characters. If None, uses the IEEE defaults.

    Returns:
        View of frame[0:n] holding the decoded payload. Bytes of frame past
        n are left in an unspecified state, on success and on error.

    Raises:
        TypeError: If frame is read-only or not a buffer of single bytes.
        DuplicateSpecialCharError: If chars contains duplicate values.
        MissingFirstFendError: If the frame does not start with FEND.
        FendCharInDataError: If FEND appears before the last byte.
        MissingTradeCharError: If FESC is followed by anything but TFEND/TFESC.
        MissingFinalFendError: If the frame ends before the closing FEND.
    """
    if chars is None:
        chars = SpecialChars.default()
    check_special_chars(chars)

    view = memoryview(frame)
    try:
        if view.format not in BYTE_FORMATS:
            raise TypeError(
                f"decode_in_place() requires a byte buffer, not format '{view.format}'"
            )
        if view.readonly:
            raise TypeError("decode_in_place() requires a writable buffer")
        view = view.cast("B")

        length = len(view)
        if length == 0 or view[0] != chars.fend:
            raise MissingFirstFendError(0)

        # Bytes dropped so far: the opening FEND plus one per escape pair
        removed = 1
        read = 1
        while read < length:
            byte = view[read]
            if byte == chars.fend:
                if read != length - 1:
                    raise FendCharInDataError(read)
                return view[: read - removed]
            if byte == chars.fesc:
                read += 1
                if read == length:
                    break
                trade = view[read]
                if trade == chars.tfend:
                    byte = chars.fend
                elif trade == chars.tfesc:
                    byte = chars.fesc
                else:
                    raise MissingTradeCharError(read)
                removed += 1
            view[read - removed] = byte
            read += 1

        raise MissingFinalFendError(length)
    except BaseException:
        # Release the export so the caller can resize the buffer
        view.release()
        raise
