"""
HDLC Host - HDLC byte-stuffing framing

Encodes payloads into FEND-delimited, escaped HDLC frames and decodes them
back, with an in-place decoder that unescapes inside the caller's buffer.
Serial transport, stream splitting and TOML configuration sit around the codec.
"""

__version__ = "0.1.0"
__author__ = "HDLC Host Contributors"

from hdlc.framing import (
    DuplicateSpecialCharError,
    FendCharInDataError,
    HdlcDecodeError,
    HdlcError,
    HdlcErrorKind,
    MissingFinalFendError,
    MissingFirstFendError,
    MissingTradeCharError,
    SpecialChars,
    check_special_chars,
    decode,
    decode_in_place,
    encode,
)

__all__ = [
    "DuplicateSpecialCharError",
    "FendCharInDataError",
    "HdlcDecodeError",
    "HdlcError",
    "HdlcErrorKind",
    "MissingFinalFendError",
    "MissingFirstFendError",
    "MissingTradeCharError",
    "SpecialChars",
    "check_special_chars",
    "decode",
    "decode_in_place",
    "encode",
    "__version__",
]
