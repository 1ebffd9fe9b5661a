"""
Argument case generation for vector-shaped kernels (size n, increment incx).

Cases are split at the argument-contract boundary:
  - in_contract: n >= 0 and incx >= 1; run through the full check
  - out_of_contract: violates exactly one of the two; must be rejected with
    invalid_size before any buffer is touched
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import List, Sequence

from verify.random_init import DEFAULT_SEED


@dataclass
class TestCase:
    n: int
    incx: int
    seed: int = DEFAULT_SEED
    __test__ = False  # prevent pytest from treating this as a test container

    @property
    def invalid_size(self) -> bool:
        return self.n < 0 or self.incx < 1

    def label(self) -> str:
        return f"n{self.n}_inc{self.incx}".replace("-", "m")


SIZE_RANGE = [-1, 0, 1, 12, 20, 35]
LARGE_SIZE_RANGE = [192, 640, 1024, 2547, 3000]
INC_RANGE = [-10, 0, 1, 5, 10]


@dataclass
class GeneratedCases:
    in_contract: List[TestCase]
    out_of_contract: List[TestCase]


def generate_cases(
    *,
    sizes: Sequence[int] | None = None,
    incs: Sequence[int] | None = None,
    large: bool = False,
    seed: int = DEFAULT_SEED,
) -> List[TestCase]:
    """Deterministic cartesian product of sizes x increments, duplicates dropped."""
    size_list = list(sizes) if sizes is not None else list(LARGE_SIZE_RANGE if large else SIZE_RANGE)
    inc_list = list(incs) if incs is not None else list(INC_RANGE)
    out: List[TestCase] = []
    seen = set()
    for n, inc in itertools.product(size_list, inc_list):
        key = (int(n), int(inc))
        if key in seen:
            continue
        seen.add(key)
        out.append(TestCase(n=int(n), incx=int(inc), seed=int(seed)))
    return out


def generate_cases_split(
    *,
    sizes: Sequence[int] | None = None,
    incs: Sequence[int] | None = None,
    large: bool = False,
    seed: int = DEFAULT_SEED,
) -> GeneratedCases:
    in_contract: List[TestCase] = []
    out_of_contract: List[TestCase] = []
    for c in generate_cases(sizes=sizes, incs=incs, large=large, seed=seed):
        if not c.invalid_size:
            in_contract.append(c)
        elif (c.n < 0) != (c.incx < 1):
            # exactly one violation
            out_of_contract.append(c)
    return GeneratedCases(in_contract=in_contract, out_of_contract=out_of_contract)


__all__ = ["TestCase", "GeneratedCases", "SIZE_RANGE", "LARGE_SIZE_RANGE", "INC_RANGE", "generate_cases", "generate_cases_split"]
