"""Dispatch weights of the threshold-signature pallet."""

from __future__ import annotations

from dataclasses import dataclass

U64_MAX = (1 << 64) - 1

PASS_SCRIPT_BASE = 886_901_000
EXEC_SCRIPT_BASE = 10_000


def _saturating(value: int) -> int:
    return min(value, U64_MAX)


@dataclass(frozen=True)
class DbWeight:
    """Weight of one database read and one write."""

    read: int = 0
    write: int = 0

    def __post_init__(self) -> None:
        for value in (self.read, self.write):
            if not 0 <= value <= U64_MAX:
                raise ValueError(f"weight out of range: {value}")

    def reads(self, count: int) -> int:
        """Weight of ``count`` reads, saturating at the u64 limit."""
        if count < 0:
            raise ValueError("count must not be negative")
        return _saturating(self.read * count)

    def writes(self, count: int) -> int:
        """Weight of ``count`` writes, saturating at the u64 limit."""
        if count < 0:
            raise ValueError("count must not be negative")
        return _saturating(self.write * count)


RUNTIME_DB_WEIGHT = DbWeight(read=2_500_000, write=10_000_000)


def pass_script_weight(db_weight: DbWeight = DbWeight()) -> int:
    """Weight of ``pass_script``."""
    return _saturating(PASS_SCRIPT_BASE + db_weight.reads(1) + db_weight.writes(1))


def exec_script_weight(db_weight: DbWeight = DbWeight()) -> int:
    """Weight of ``exec_script``."""
    return _saturating(EXEC_SCRIPT_BASE + db_weight.reads(2) + db_weight.writes(2))