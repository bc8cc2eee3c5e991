"""Tower key encoding.

A tower key packs the calorimeter id and the two bin indices of a tower
into one 32-bit integer:

    key = calo_id << 24 | index1 << 12 | index2

with index1 the eta bin and index2 the phi bin. Keys are stable across a
run and unique per tower, so they are used as the sparse storage key.
"""

from enum import IntEnum
from typing import Tuple

__all__ = ['CaloId', 'encode_tower_key', 'decode_tower_key', 'calo_id_from_name']

KEY_BITS = 32
CALO_ID_BITS = 8
TOWER_ID_BITS = KEY_BITS - CALO_ID_BITS
INDEX1_ID_BITS = TOWER_ID_BITS // 2

MAX_CALO_ID = (1 << CALO_ID_BITS) - 1
MAX_INDEX = (1 << INDEX1_ID_BITS) - 1


class CaloId(IntEnum):
    """Calorimeter identifiers."""
    NONE = 0
    CEMC = 1
    HCALIN = 2
    HCALOUT = 3


def calo_id_from_name(name: str) -> CaloId:
    """Map a detector name ("CEMC", "hcalin", ...) to its CaloId."""
    try:
        return CaloId[name.upper()]
    except KeyError:
        raise ValueError(f"Unknown calorimeter: {name}") from None


def encode_tower_key(calo_id: int, index1: int, index2: int) -> int:
    """Encode (calo_id, index1, index2) into a tower key.

    Raises
    ------
    ValueError
        If calo_id does not fit in 8 bits or an index does not fit in 12 bits.
    """
    if not 0 <= calo_id <= MAX_CALO_ID:
        raise ValueError(f"calo_id {calo_id} outside [0, {MAX_CALO_ID}]")
    if not 0 <= index1 <= MAX_INDEX:
        raise ValueError(f"index1 {index1} outside [0, {MAX_INDEX}]")
    if not 0 <= index2 <= MAX_INDEX:
        raise ValueError(f"index2 {index2} outside [0, {MAX_INDEX}]")
    return (int(calo_id) << TOWER_ID_BITS) | (index1 << INDEX1_ID_BITS) | index2


def decode_tower_key(key: int) -> Tuple[int, int, int]:
    """Decode a tower key into (calo_id, index1, index2)."""
    calo_id = (key >> TOWER_ID_BITS) & MAX_CALO_ID
    index1 = (key >> INDEX1_ID_BITS) & MAX_INDEX
    index2 = key & MAX_INDEX
    return calo_id, index1, index2
