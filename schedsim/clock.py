from __future__ import annotations


class SimulationClock:
    """Integer simulated time owned by a single algorithm run."""

    def __init__(self, start: int = 0) -> None:
        self.now = start

    def tick(self) -> int:
        self.now += 1
        return self.now

    def advance_to(self, time: int) -> int:
        if time < self.now:
            raise ValueError(f"cannot move clock backwards ({self.now} -> {time})")
        self.now = time
        return self.now
