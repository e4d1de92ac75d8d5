"""
Loader for TSPLIB-style city files (e.g. xql662.tsp):

    NAME : xql662
    TYPE : TSP
    ...
    NODE_COORD_SECTION
    1 0 0
    2 10 0
    EOF

Header lines before NODE_COORD_SECTION are ignored. Each coordinate line is
`<id> <x> <y>` (integers); the id is dropped and cities keep file order.
"""

from __future__ import annotations
import logging
from typing import Iterable

import numpy as np

logger = logging.getLogger(__name__)

SECTION_START = "NODE_COORD_SECTION"
SECTION_END = "EOF"


def parse_tsp_lines(lines: Iterable[str]) -> np.ndarray:
    cities = []
    reading = False
    for raw in lines:
        line = raw.strip()
        if line == SECTION_START:
            reading = True
            continue
        if not reading or not line:
            continue
        if line == SECTION_END:
            break
        parts = line.split()
        try:
            if len(parts) != 3:
                raise ValueError(f"expected 3 fields, got {len(parts)}")
            _, x, y = (int(p) for p in parts)
        except ValueError as exc:
            logger.warning("Invalid line format '%s' (%s), skipped", line, exc)
            continue
        cities.append((x, y))
    return np.array(cities, dtype=int).reshape(-1, 2)


def load_tsp_cities(path: str) -> np.ndarray:
    """Return an (n, 2) integer array of city coordinates read from `path`."""
    with open(path, "r", encoding="utf-8", errors="ignore") as f:
        coords = parse_tsp_lines(f)
    logger.info("Loaded %d cities from %s", len(coords), path)
    return coords


def check_enough_cities(coords, minimum: int = 2) -> None:
    if len(coords) < minimum:
        raise ValueError(
            f"Not enough cities to calculate a tour: got {len(coords)}, need at least {minimum}."
        )
