#!/usr/bin/env python3
"""
Offline HDLC frame encoder/decoder.

Encodes a hex payload into a wire frame, or decodes a hex wire frame back
into its payload.
"""

import argparse
import sys
from pathlib import Path

import tomli
from pydantic import ValidationError

from hdlc import framing
from hdlc.config import load_config


def parse_chars(text: str) -> framing.SpecialChars:
    """
    Parse 'FEND,FESC,TFEND,TFESC' (hex bytes) into SpecialChars.

    Raises:
        ValueError: If the text is not four hex bytes.
    """
    values = [int(part, 16) for part in text.split(",")]
    if len(values) != 4 or any(not 0 <= v <= 0xFF for v in values):
        raise ValueError(f"expected four hex bytes, got '{text}'")
    return framing.SpecialChars(*values)


def main() -> int:
    """Main entry point for hdlc-codec tool."""
    parser = argparse.ArgumentParser(description="Encode/decode HDLC frames")
    parser.add_argument("action", choices=["encode", "decode"], help="Operation")
    parser.add_argument("data", help="Payload (encode) or wire frame (decode) as hex string")
    parser.add_argument("--chars", help="Special characters as FEND,FESC,TFEND,TFESC hex")
    parser.add_argument("--config", type=Path, help="Config file (TOML)")
    parser.add_argument(
        "--in-place", action="store_true", help="Use the in-place decoder"
    )

    args = parser.parse_args()

    # Parse special characters
    try:
        if args.chars:
            chars = parse_chars(args.chars)
        else:
            chars = load_config(args.config).special_chars.to_special_chars()
    except (ValueError, tomli.TOMLDecodeError, ValidationError) as e:
        print(f"Error: Invalid special characters or config: {e}", file=sys.stderr)
        return 1

    # Parse data
    try:
        data = bytes.fromhex(args.data)
    except ValueError:
        print(f"Error: Invalid hex data '{args.data}'", file=sys.stderr)
        return 1

    try:
        if args.action == "encode":
            result = framing.encode(data, chars)
        elif args.in_place:
            result = bytes(framing.decode_in_place(bytearray(data), chars))
        else:
            result = framing.decode(data, chars)
    except framing.HdlcError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(result.hex())
    return 0


if __name__ == "__main__":
    sys.exit(main())
