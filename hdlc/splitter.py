"""
Stream splitter for HDLC-framed serial data.

Cuts a raw byte stream at FEND boundaries into complete wire frames that can
be handed to framing.decode() or framing.decode_in_place(). No unescaping or
validation happens here.
"""

from typing import List, Optional

from hdlc.framing import SpecialChars


class FrameSplitter:
    """
    Stateful splitter for incremental framing.

    Useful for processing serial data as it arrives.
    """

    def __init__(self, chars: Optional[SpecialChars] = None, max_frame_len: int = 4096) -> None:
        """
        Initialize splitter state.

        Args:
            chars: Special characters. If None, uses the IEEE defaults.
            max_frame_len: Largest frame body kept (bytes between FENDs).
        """
        self.chars = chars if chars is not None else SpecialChars.default()
        self.max_frame_len = max_frame_len
        self.current_frame = bytearray()
        self.in_frame = False
        self.opened = False
        self.discarding = False
        self.overflows = 0

    def feed(self, data: bytes) -> List[bytearray]:
        """
        Feed data to splitter and return complete frames.

        Args:
            data: Raw bytes from serial port.

        Returns:
            List of complete wire frames, each FEND + body + FEND.

        Note:
            A FEND right after an opening FEND closes an empty frame, so
            encode(b"") arrives as an empty payload. A FEND right after a
            closing FEND opens the next frame.
        """
        frames: List[bytearray] = []
        fend = self.chars.fend

        for byte in data:
            if byte == fend:
                if self.discarding:
                    # Closes an oversized frame
                    self.opened = False
                elif len(self.current_frame) > 0 or self.opened:
                    # Closes the current frame (empty when it follows an opening FEND)
                    frame = bytearray([fend])
                    frame += self.current_frame
                    frame.append(fend)
                    frames.append(frame)
                    self.opened = False
                else:
                    # Opens the next frame
                    self.opened = True
                self.current_frame = bytearray()
                self.in_frame = True
                self.discarding = False
            elif not self.in_frame or self.discarding:
                # Noise before the first FEND, or the tail of an oversized frame
                continue
            elif len(self.current_frame) >= self.max_frame_len:
                self.overflows += 1
                self.current_frame = bytearray()
                self.discarding = True
            else:
                self.current_frame.append(byte)

        return frames

    def reset(self) -> None:
        """Reset splitter state (discard incomplete frame)."""
        self.current_frame = bytearray()
        self.in_frame = False
        self.opened = False
        self.discarding = False
