"""Dead tower map of one calorimeter for the current run."""

import logging
from typing import Iterable, Tuple

from calofill.calo.tower_key import encode_tower_key

__all__ = ['DeadTowerMap']

logger = logging.getLogger(__name__)


class DeadTowerMap:
    """Set of tower keys flagged non-functional.

    Membership is fixed while events are processed. ``dead_towers()``
    enumerates keys in ascending order, which is the order in which dead
    towers are interpolated.
    """

    def __init__(self, calo_id: int, dead_towers: Iterable[int] = ()):
        self.calo_id = int(calo_id)
        self._dead = set(int(key) for key in dead_towers)

    def add_dead_tower(self, key: int) -> None:
        self._dead.add(int(key))

    def add_dead_tower_at(self, ieta: int, iphi: int) -> int:
        key = encode_tower_key(self.calo_id, int(ieta), int(iphi))
        self._dead.add(key)
        return key

    def dead_towers(self) -> Tuple[int, ...]:
        return tuple(sorted(self._dead))

    def is_dead_tower(self, key: int) -> bool:
        return key in self._dead

    def is_dead(self, ieta: int, iphi: int) -> bool:
        """Dead test by bin position."""
        return encode_tower_key(self.calo_id, ieta, iphi) in self._dead

    def size(self) -> int:
        return len(self._dead)

    def identify(self) -> None:
        logger.info("DeadTowerMap: calo_id=%d, %d dead towers", self.calo_id, self.size())

    def __repr__(self):
        return f"DeadTowerMap(calo_id={self.calo_id}, dead={self.size()})"
