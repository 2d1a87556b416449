#!/usr/bin/env python3
"""
Raw HDLC frame sender tool.

Sends one framed payload for testing and debugging.
"""

import argparse
import sys
from pathlib import Path

import tomli
from pydantic import ValidationError

from hdlc.config import load_config, setup_logging
from hdlc.session import FrameSession


def main() -> int:
    """Main entry point for hdlc-send tool."""
    parser = argparse.ArgumentParser(description="Send one HDLC frame")
    parser.add_argument("--config", type=Path, help="Config file (TOML)")
    parser.add_argument("--port", help="Serial port (overrides config)")
    parser.add_argument("--baud", type=int, help="Baud rate (overrides config)")
    parser.add_argument("--payload", default="", help="Payload as hex string")
    parser.add_argument(
        "--wait", type=float, default=0.0, help="Seconds to wait for a reply (0 = don't wait)"
    )

    args = parser.parse_args()

    try:
        config = load_config(args.config)
    except (tomli.TOMLDecodeError, ValidationError) as e:
        print(f"Error: Invalid config file: {e}", file=sys.stderr)
        return 1

    if args.port:
        config.serial.port = args.port
    if args.baud:
        config.serial.baud = args.baud
    setup_logging(config.logging)

    # Parse payload
    try:
        payload = bytes.fromhex(args.payload) if args.payload else b""
    except ValueError:
        print(f"Error: Invalid hex payload '{args.payload}'", file=sys.stderr)
        return 1

    # Send frame
    try:
        with FrameSession.from_config(config) as session:
            if args.wait > 0:
                # Drop anything left over so the reply is the next frame
                session.reset()

            session.send(payload)
            print(f"Sent {len(payload)} byte payload")

            if args.wait > 0:
                reply = session.receive(timeout_s=args.wait)
                if reply is not None:
                    print(f"Reply: {reply.hex()}")
                else:
                    print("No reply received")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
