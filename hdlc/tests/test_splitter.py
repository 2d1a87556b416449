"""
Unit tests for the HDLC stream splitter.
"""

from hdlc import framing
from hdlc.framing import FEND, FESC, TFEND, SpecialChars
from hdlc.splitter import FrameSplitter


class TestFrameSplitter:
    """Test stateful frame splitting."""

    def test_splitter_simple(self):
        """Test splitter with complete frame."""
        splitter = FrameSplitter()

        encoded = framing.encode(b"\x01\x02\x03\x04")
        frames = splitter.feed(encoded)

        assert len(frames) == 1
        assert frames[0] == encoded

    def test_splitter_keeps_escapes(self):
        """Test escape pairs are passed through untouched."""
        splitter = FrameSplitter()

        encoded = framing.encode(bytes([0x01, FEND, FESC]))
        frames = splitter.feed(encoded)

        assert frames == [bytearray(encoded)]
        assert bytes([FESC, TFEND]) in frames[0]

    def test_splitter_incremental(self):
        """Test splitter with one byte per feed."""
        splitter = FrameSplitter()

        data = b"\x01\x02\x03\x04"
        encoded = framing.encode(data)

        frames = []
        for byte in encoded:
            frames.extend(splitter.feed(bytes([byte])))

        assert len(frames) == 1
        assert framing.decode(frames[0]) == data

    def test_splitter_multiple_frames(self):
        """Test back-to-back frames in a single feed."""
        splitter = FrameSplitter()

        combined = framing.encode(b"\x01\x02") + framing.encode(b"\x03\x04")
        frames = splitter.feed(combined)

        assert [framing.decode(f) for f in frames] == [b"\x01\x02", b"\x03\x04"]

    def test_splitter_shared_flag(self):
        """Test frames separated by a single shared FEND."""
        splitter = FrameSplitter()

        stream = bytes([FEND, 0x01, FEND, 0x02, FEND])
        frames = splitter.feed(stream)

        assert frames == [bytearray([FEND, 0x01, FEND]), bytearray([FEND, 0x02, FEND])]

    def test_splitter_empty_frame(self):
        """Test an encoded empty payload comes out as an empty frame."""
        splitter = FrameSplitter()

        frames = splitter.feed(framing.encode(b""))

        assert frames == [bytearray([FEND, FEND])]
        assert framing.decode(frames[0]) == b""

    def test_splitter_empty_frame_between_frames(self):
        """Test an empty frame sent between two non-empty frames."""
        splitter = FrameSplitter()

        stream = framing.encode(b"\x01") + framing.encode(b"") + framing.encode(b"\x02")
        frames = splitter.feed(stream)

        assert [framing.decode(f) for f in frames] == [b"\x01", b"", b"\x02"]

    def test_splitter_empty_frame_split_across_feeds(self):
        """Test the two FENDs of an empty frame arriving separately."""
        splitter = FrameSplitter()

        assert splitter.feed(bytes([FEND])) == []
        assert splitter.feed(bytes([FEND])) == [bytearray([FEND, FEND])]

    def test_splitter_flag_after_close_opens(self):
        """Test a FEND right after a closing FEND opens, not closes."""
        splitter = FrameSplitter()

        frames = splitter.feed(bytes([FEND, 0x05, FEND, FEND, 0x06, FEND]))

        assert frames == [bytearray([FEND, 0x05, FEND]), bytearray([FEND, 0x06, FEND])]

    def test_splitter_drops_leading_noise(self):
        """Test bytes before the first FEND are discarded."""
        splitter = FrameSplitter()

        frames = splitter.feed(b"\x11\x22" + framing.encode(b"\x33"))

        assert len(frames) == 1
        assert framing.decode(frames[0]) == b"\x33"

    def test_splitter_split_frame(self):
        """Test splitter with frame split across feeds."""
        splitter = FrameSplitter()

        data = b"\x01\x02\x03\x04"
        encoded = framing.encode(data)

        # Split in middle
        mid = len(encoded) // 2
        frames1 = splitter.feed(encoded[:mid])
        frames2 = splitter.feed(encoded[mid:])

        # First part should not produce complete frame
        assert len(frames1) == 0

        # Second part completes the frame
        assert len(frames2) == 1
        assert framing.decode(frames2[0]) == data

    def test_splitter_reset(self):
        """Test splitter reset."""
        splitter = FrameSplitter()

        # Feed partial frame
        splitter.feed(bytes([FEND, 0x01, 0x02]))

        # Reset
        splitter.reset()

        # Feed complete frame
        data = b"\x03\x04"
        frames = splitter.feed(framing.encode(data))

        assert len(frames) == 1
        assert framing.decode(frames[0]) == data

    def test_splitter_overflow(self):
        """Test oversized frames are dropped and counted."""
        splitter = FrameSplitter(max_frame_len=4)

        stream = framing.encode(b"\x01" * 10) + framing.encode(b"\x02\x03")
        frames = splitter.feed(stream)

        assert splitter.overflows == 1
        assert len(frames) == 1
        assert framing.decode(frames[0]) == b"\x02\x03"

    def test_splitter_max_len_inclusive(self):
        """Test a body of exactly max_frame_len bytes is kept."""
        splitter = FrameSplitter(max_frame_len=4)

        frames = splitter.feed(framing.encode(b"\x01\x02\x03\x04"))

        assert splitter.overflows == 0
        assert len(frames) == 1

    def test_splitter_custom_chars(self):
        """Test splitting on a custom FEND."""
        chars = SpecialChars(0x71, 0x70, 0x51, 0x50)
        splitter = FrameSplitter(chars)

        data = bytes([0x7E, 0x71, 0x70])
        frames = splitter.feed(framing.encode(data, chars))

        assert len(frames) == 1
        assert framing.decode(frames[0], chars) == data

    def test_splitter_frames_decode_in_place(self):
        """Test returned frames are writable buffers for in-place decoding."""
        splitter = FrameSplitter()

        data = bytes([FESC, 0x42, FEND])
        frames = splitter.feed(framing.encode(data))

        assert bytes(framing.decode_in_place(frames[0])) == data
