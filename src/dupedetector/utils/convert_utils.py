"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

utils/convert_utils.py
"""
import math
import re

_SIZE_PATTERN = re.compile(r"(\d*\.?\d+)([kmg]i?)?b?", re.IGNORECASE)


class ConvertUtils:
    # Decimal units are powers of 1000, "i" units powers of 1024.
    UNITS = {
        "k": 1000, "ki": 1024,
        "m": 1000 ** 2, "mi": 1024 ** 2,
        "g": 1000 ** 3, "gi": 1024 ** 3,
    }

    @staticmethod
    def bytes_to_human(size_bytes: int) -> str:
        """
        Convert bytes to a short human-readable string (e.g., 4 B, 2 kB, 10 MB).
        Values are rounded half-up to a whole number of units.
        """
        if size_bytes < 0:
            return "0 B"

        for factor, unit in ((1e9, "GB"), (1e6, "MB"), (1e3, "kB")):
            if size_bytes >= factor:
                return f"{int(math.floor(size_bytes / factor + 0.5))} {unit}"
        return f"{size_bytes} B"

    @staticmethod
    def human_to_bytes(size_str: str) -> int:
        """
        Convert human-readable size string to bytes.
        Supports formats: '100', '1.5k', '2Mi', '1GB', '512kib', '.5m', etc.
        Fractions of a byte are rounded up so that files slightly smaller than
        the requested minimum are never included.
        Raises ValueError for invalid formats.
        """
        match = _SIZE_PATTERN.fullmatch(size_str.strip())
        if match is None:
            raise ValueError(
                f"Invalid size format: '{size_str}'. "
                f"Supported formats: 100, 1.5k, 2Mi, 1GB, 512kib, etc."
            )

        value = float(match.group(1))
        unit = match.group(2)
        if unit:
            value *= ConvertUtils.UNITS[unit.lower()]
        return int(math.ceil(value))

    @staticmethod
    def is_valid_size_format(size_str: str) -> bool:
        """
        Check if the input string has a valid size format.
        """
        try:
            ConvertUtils.human_to_bytes(size_str)
            return True
        except ValueError:
            return False
