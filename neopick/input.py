"""Low-level terminal input decoding.

Reads raw bytes from the tty and translates them into normalized key tokens.
Handles ESC-sequence timing, arrow keys and multi-byte UTF-8 characters.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_CSI_LENGTH = 16

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x07": "CTRL_G",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
    b"\t": "TAB",
}

_CSI_FINAL_KEYS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


def _utf8_sequence_length(lead: int) -> int:
    """Return the encoded length announced by a UTF-8 lead byte."""
    if lead >= 0xF0:
        return 4
    if lead >= 0xE0:
        return 3
    if lead >= 0xC0:
        return 2
    return 1


class KeyReader:
    """Decode key tokens from one file descriptor.

    Bytes read ahead while disambiguating a lone ESC are kept and returned
    by the next call.
    """

    def __init__(self, fd: int) -> None:
        self.fd = fd
        self._pending: list[bytes] = []

    def _read_byte(self) -> bytes:
        if self._pending:
            return self._pending.pop(0)
        return os.read(self.fd, 1)

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        if self._pending:
            return self._pending.pop(0)
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def read_key(self) -> str:
        """Block for the next key; ``"EOF"`` once the descriptor is closed."""
        ch = self._read_byte()
        if not ch:
            return "EOF"

        control = _CONTROL_KEYS.get(ch)
        if control is not None:
            return control
        if ch == b"\x1b":
            return self._read_escape()
        return self._read_text(ch)

    def _read_text(self, lead: bytes) -> str:
        needed = _utf8_sequence_length(lead[0]) - 1
        data = lead
        while needed > 0:
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                break
            data += part
            needed -= 1
        return data.decode("utf-8", errors="replace")

    def _read_escape(self) -> str:
        seq = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return "ESC"
        if seq == b"O":
            # SS3 arrows sent in application cursor mode.
            final = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if final is None:
                return "ESC"
            return _CSI_FINAL_KEYS.get(final, "UNKNOWN")
        if seq != b"[":
            self._pending.append(seq)
            return "ESC"

        # CSI: parameter/intermediate bytes up to one final byte in 0x40-0x7e.
        for _ in range(MAX_CSI_LENGTH):
            part = self._read_ready_byte(ESC_SEQUENCE_TIMEOUT_MS)
            if part is None:
                return "ESC"
            if 0x40 <= part[0] <= 0x7E:
                return _CSI_FINAL_KEYS.get(part, "UNKNOWN")
        return "UNKNOWN"


__all__ = ["ESC_SEQUENCE_TIMEOUT_MS", "KeyReader"]
