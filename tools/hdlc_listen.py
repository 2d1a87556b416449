#!/usr/bin/env python3
"""
HDLC frame listener.

Prints every frame received on a serial port, then session statistics.
"""

import argparse
import sys
import time
from pathlib import Path

import tomli
from pydantic import ValidationError

from hdlc.config import load_config, setup_logging
from hdlc.framing import HdlcDecodeError
from hdlc.session import FrameSession


def main() -> int:
    """Main entry point for hdlc-listen tool."""
    parser = argparse.ArgumentParser(description="Print received HDLC frames")
    parser.add_argument("--config", type=Path, help="Config file (TOML)")
    parser.add_argument("--port", help="Serial port (overrides config)")
    parser.add_argument("--baud", type=int, help="Baud rate (overrides config)")
    parser.add_argument("--duration", type=float, default=10.0, help="Listen duration (s)")

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

    print(f"Listening on {config.serial.port} for {args.duration} seconds...")

    try:
        with FrameSession.from_config(config) as session:
            session.reset()
            start_time = time.time()

            while time.time() - start_time < args.duration:
                try:
                    payload = session.receive(timeout_s=0.1)
                    if payload is not None:
                        print(f"  {len(payload):4d} bytes: {payload.hex()}")

                except HdlcDecodeError as e:
                    print(f"  Rejected frame: {e}")

                except KeyboardInterrupt:
                    print("\nStopped by user")
                    break

            print()
            print(f"Stats: {session.stats}")

    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
