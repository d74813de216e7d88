"""Scale factors that normalize mod_status byte figures to kilobytes.

mod_status prints ``kB``, ``MB`` and ``GB`` figures already scaled, and plain
``B`` figures in bytes. Scaled figures are multiplied up to kilobytes; plain
bytes are divided down by 1024.
"""

from typing import Optional

KILOBYTE_RATIOS: dict[str, float] = {
    "g": 1048576,
    "m": 1024,
    "k": 1,
    "": 0.0009765625,
}


def kilobyte_ratio(unit: Optional[str]) -> Optional[float]:
    """Return the multiplier converting a figure with ``unit`` to kilobytes.

    Args:
        unit: The letter preceding ``B`` (case-insensitive), or None/"" for bytes.

    Returns:
        The multiplier, or None when the suffix is not one of g/m/k.
    """
    return KILOBYTE_RATIOS.get((unit or "").lower())


def to_kilobytes(value: float, unit: Optional[str]) -> Optional[float]:
    ratio = kilobyte_ratio(unit)
    if ratio is None:
        return None
    return value * ratio
