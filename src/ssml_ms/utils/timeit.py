"""
Timing Utilities.

    with timeit("validate") as t:
        report = validator.validate(document)
    print(f"Took {t.timing.seconds:.6f}s")

Uses time.perf_counter() for sub-millisecond precision.
"""
from __future__ import annotations

from dataclasses import dataclass
from time import perf_counter


@dataclass
class Timing:
    """
    Timing measurement result.

    Attributes:
        name: What was timed (e.g., "validate").
        seconds: Duration in seconds.
    """
    name: str
    seconds: float


class timeit:
    """
    Context manager for timing code blocks.

    The Timing result is available as .timing after the block exits,
    including when the block raised.
    """

    def __init__(self, name: str):
        self.name = name
        self._t0: float | None = None
        self.timing: Timing | None = None

    def __enter__(self) -> "timeit":
        self._t0 = perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        t1 = perf_counter()
        assert self._t0 is not None
        self.timing = Timing(name=self.name, seconds=(t1 - self._t0))

    @property
    def seconds(self) -> float:
        """Elapsed seconds, 0.0 before the block has exited."""
        return self.timing.seconds if self.timing else 0.0
