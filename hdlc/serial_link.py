"""
Serial link for HDLC-framed traffic.

Provides a pyserial interface. The port may be a device path or any pyserial
URL (e.g. 'loop://' for a loopback link).
"""

import logging

import serial

logger = logging.getLogger(__name__)


class SerialLink:
    """
    Serial link carrying raw HDLC frames.

    Manages the serial port. Framing is done by the caller.
    """

    def __init__(self, port: str, baud: int = 115200, timeout: float = 0.01):
        """
        Initialize serial link.

        Args:
            port: Serial port device (e.g., '/dev/ttyUSB0') or pyserial URL.
            baud: Baud rate (default 115200).
            timeout: Read timeout in seconds (default 10ms).
        """
        self.port = port
        self.baud = baud
        self.timeout = timeout

        self.serial = serial.serial_for_url(
            port, baudrate=baud, timeout=timeout, bytesize=8, parity="N", stopbits=1
        )

        logger.info(f"Serial link opened: {port} @ {baud} baud")

    def close(self) -> None:
        """Close serial port."""
        if self.serial.is_open:
            self.serial.close()

        logger.info("Serial link closed")

    def write(self, data: bytes) -> int:
        """
        Write data to serial port.

        Args:
            data: Bytes to write.

        Returns:
            Number of bytes written.
        """
        n = self.serial.write(data)
        self.serial.flush()  # Wait for TX to complete
        return n

    def read(self, size: int = 1) -> bytes:
        """
        Read data from serial port.

        Args:
            size: Number of bytes to read.

        Returns:
            Bytes read (may be shorter than requested if timeout).
        """
        return self.serial.read(size)

    def read_available(self) -> bytes:
        """
        Read all available data from serial port.

        Returns:
            All bytes currently in receive buffer.
        """
        available = self.serial.in_waiting
        if available > 0:
            return self.serial.read(available)
        return b""

    def flush_input(self) -> None:
        """Flush input buffer."""
        self.serial.reset_input_buffer()

    def __enter__(self) -> "SerialLink":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()
