"""
Frame-level session API for HDLC Host.

Provides FrameSession for sending and receiving HDLC-framed payloads over a
serial link.
"""

import logging
import time
from collections import deque
from typing import Deque, Optional

from hdlc import framing
from hdlc.config import Config
from hdlc.serial_link import SerialLink
from hdlc.splitter import FrameSplitter

logger = logging.getLogger(__name__)


class FrameSession:
    """
    Session for exchanging HDLC frames with a device.

    Handles framing, stream splitting, statistics and logging.
    """

    def __init__(
        self,
        link: SerialLink,
        chars: Optional[framing.SpecialChars] = None,
        timeout_ms: int = 10,
        max_frame_len: int = 4096,
        frame_dump: bool = True,
    ):
        """
        Initialize session.

        Args:
            link: Serial link instance.
            chars: Special characters. If None, uses the IEEE defaults.
            timeout_ms: Default receive timeout in milliseconds.
            max_frame_len: Largest frame body accepted from the stream.
            frame_dump: Log every frame at DEBUG level.

        Raises:
            framing.DuplicateSpecialCharError: If chars contains duplicate values.
        """
        self.chars = chars if chars is not None else framing.SpecialChars.default()
        framing.check_special_chars(self.chars)

        self.link = link
        self.timeout_ms = timeout_ms
        self.frame_dump = frame_dump
        self.splitter = FrameSplitter(self.chars, max_frame_len)
        self._pending: Deque[bytearray] = deque()

        # Statistics
        self.stats = {
            "frames_tx": 0,
            "frames_rx": 0,
            "decode_errors": 0,
            "timeouts": 0,
        }
        for kind in framing.HdlcErrorKind:
            if kind is not framing.HdlcErrorKind.DUPLICATE_SPECIAL_CHAR:
                self.stats[kind.name.lower()] = 0

    def close(self) -> None:
        """Close session and serial link."""
        self.link.close()

    @classmethod
    def open(
        cls,
        port: str,
        baud: int = 115200,
        chars: Optional[framing.SpecialChars] = None,
        timeout_ms: int = 10,
        max_frame_len: int = 4096,
        frame_dump: bool = True,
    ) -> "FrameSession":
        """
        Open a new session.

        Args:
            port: Serial port device or pyserial URL.
            baud: Baud rate.
            chars: Special characters. If None, uses the IEEE defaults.
            timeout_ms: Default receive timeout in milliseconds.
            max_frame_len: Largest frame body accepted from the stream.
            frame_dump: Log every frame at DEBUG level.

        Returns:
            Opened FrameSession instance.
        """
        if chars is not None:
            # Reject bad characters before opening the port
            framing.check_special_chars(chars)

        link = SerialLink(port=port, baud=baud, timeout=timeout_ms / 1000.0)
        return cls(link, chars, timeout_ms, max_frame_len, frame_dump)

    @classmethod
    def from_config(cls, config: Config) -> "FrameSession":
        """Open a session from a loaded configuration."""
        return cls.open(
            config.serial.port,
            baud=config.serial.baud,
            chars=config.special_chars.to_special_chars(),
            timeout_ms=config.serial.timeout_ms,
            max_frame_len=config.serial.max_frame_len,
            frame_dump=config.logging.frame_dump,
        )

    def send(self, payload: bytes) -> None:
        """
        Send payload as one HDLC frame.

        Args:
            payload: Raw payload to frame and send.
        """
        wire = framing.encode(payload, self.chars)

        self.link.write(wire)
        self.stats["frames_tx"] += 1

        if self.frame_dump:
            logger.debug(f"TX: {payload.hex()} (wire: {wire.hex()})")

    def receive(self, timeout_s: Optional[float] = None) -> Optional[bytes]:
        """
        Receive the next payload.

        Args:
            timeout_s: Timeout in seconds. If None, uses the session timeout.

        Returns:
            Decoded payload, or None on timeout.

        Raises:
            framing.HdlcDecodeError: If the next frame is malformed. Frames
                queued behind it are kept for the next call.
        """
        if timeout_s is None:
            timeout_s = self.timeout_ms / 1000.0

        start_time = time.time()

        while True:
            if self._pending:
                return self._decode_next()

            # Read available data
            data = self.link.read_available()
            if len(data) > 0:
                self._pending.extend(self.splitter.feed(data))
                continue

            if time.time() - start_time >= timeout_s:
                break

            # Small sleep to avoid busy-waiting
            time.sleep(0.001)

        # Timeout
        self.stats["timeouts"] += 1
        return None

    def reset(self) -> None:
        """Discard stale input: unread serial bytes, partial and queued frames."""
        self.link.flush_input()
        self.splitter.reset()
        self._pending.clear()

    def _decode_next(self) -> bytes:
        """Decode the oldest queued frame."""
        wire = self._pending.popleft()
        try:
            payload = bytes(framing.decode_in_place(wire, self.chars))
        except framing.HdlcDecodeError as e:
            self.stats["decode_errors"] += 1
            self.stats[e.kind.name.lower()] += 1
            # Frame contents are clobbered by the in-place decode
            logger.warning(f"RX: {e} in {len(wire)}-byte frame")
            raise

        self.stats["frames_rx"] += 1
        if self.frame_dump:
            logger.debug(f"RX: {payload.hex()}")

        return payload

    def __enter__(self) -> "FrameSession":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
