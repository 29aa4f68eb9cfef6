"""Hex and ASCII dump of a block of memory."""

_STEP = 16


def _printable(byte):
    return chr(byte) if 0x20 <= byte < 0x7F else "."


def format_dump(data, base_address=0):
    """Return a hex dump of ``data``, 16 bytes per line.

    Each line shows the address, the bytes in hex and their printable
    characters; a short last line is padded with spaces.
    """
    data = bytes(data)
    lines = []
    for offset in range(0, len(data), _STEP):
        chunk = data[offset:offset + _STEP]
        hex_part = "".join(f"{byte:02X} " for byte in chunk).ljust(_STEP * 3)
        text_part = "".join(_printable(byte) for byte in chunk).ljust(_STEP)
        lines.append(f"[0x{base_address + offset:08x}]: {hex_part}| {text_part}\n")
    return "".join(lines)


def print_mem(data, base_address=0, file=None):
    """Write the dump of ``data`` to ``file`` (standard output by default)."""
    print(format_dump(data, base_address), end="", file=file)