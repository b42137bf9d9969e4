"""
Force-directed 2D layouts (ForceAtlas family).

Two engines, both run against a wall-clock budget:

  - force_atlas2: networkx.forceatlas2_layout, called in short chunks so the
    deadline is honoured; node sizes are passed so overlapping nodes repel.
  - force_atlas:  the classic ForceAtlas, vectorised with numpy:
      * attraction along edges, strength 10
      * degree-weighted repulsion between all pairs,
        strength attraction * 10 * scaling_ratio
      * gravity towards the origin
      * displacement scaled by speed, carried over by inertia
      * size-adjusted distances (circles do not overlap)

Both stop at the deadline or after ``max_iterations`` steps, whichever comes
first; a zero budget returns the seeded initial positions.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from logging import getLogger
from typing import Any, Dict, Mapping, Optional, Tuple

import numpy as np
import networkx as nx

from ..presets import DiagramConfig, LayoutAlgorithm


logger = getLogger(__name__)

Positions = Dict[Any, Tuple[float, float]]

# ForceAtlas defaults
FA_ATTRACTION = 10.0
FA_REPULSION_FACTOR = 10.0
FA_DEFAULT_INERTIA = 0.1
FA_DEFAULT_SPEED = 1.0
FA_DEFAULT_GRAVITY = 30.0
FA_DEFAULT_SCALING = 2.0
FA_MAX_DISPLACEMENT = 10.0

# ForceAtlas2 defaults
FA2_DEFAULT_JITTER = 1.0
FA2_DEFAULT_SCALING = 2.0
FA2_DEFAULT_GRAVITY = 1.0
FA2_CHUNK = 25

MAX_ITERATIONS = 100_000


@dataclass
class LayoutResult:
    positions: Positions
    algorithm: LayoutAlgorithm
    iterations: int = 0
    elapsed: float = 0.0
    params: Dict[str, float] = field(default_factory=dict)


# ============================================================================ #
# Helpers
# ============================================================================ #

def _positive_or(value: Optional[float], default: float) -> float:
    """Parameters <= 0 (or unset) fall back to the algorithm default."""
    if value is None or value <= 0:
        return default
    return float(value)


def initial_positions(G: nx.Graph, seed: int = 42, spread: Optional[float] = None) -> Dict[Any, np.ndarray]:
    """Seeded uniform scatter in a square that grows with sqrt(n)."""
    nodes = list(G.nodes())
    if spread is None:
        spread = 50.0 * max(1.0, math.sqrt(len(nodes)))
    rng = np.random.default_rng(seed)
    xy = rng.uniform(-spread, spread, size=(len(nodes), 2))
    return {n: xy[i] for i, n in enumerate(nodes)}


def _to_positions(pos: Mapping[Any, np.ndarray]) -> Positions:
    return {n: (float(p[0]), float(p[1])) for n, p in pos.items()}


# ============================================================================ #
# ForceAtlas (numpy)
# ============================================================================ #

class ForceAtlas:
    """
    Numpy ForceAtlas over a fixed node ordering.

    ``step()`` advances one iteration and returns the mean displacement.
    """

    def __init__(
        self,
        G: nx.Graph,
        pos: Mapping[Any, np.ndarray],
        sizes: Optional[Mapping[Any, float]] = None,
        *,
        gravity: Optional[float] = None,
        scaling_ratio: Optional[float] = None,
        inertia: Optional[float] = None,
        speed: Optional[float] = None,
    ):
        self.nodes = list(G.nodes())
        idx = {n: i for i, n in enumerate(self.nodes)}

        self.xy = np.array([pos[n] for n in self.nodes], dtype=float).reshape(-1, 2)
        self.velocity = np.zeros_like(self.xy)
        self.radius = np.array(
            [float((sizes or {}).get(n, 0.0)) for n in self.nodes], dtype=float
        )
        self.mass = np.array([1.0 + d for _, d in G.degree(self.nodes)], dtype=float)

        edges = [(idx[u], idx[v]) for u, v in G.edges() if u != v]
        self.src = np.array([e[0] for e in edges], dtype=int)
        self.dst = np.array([e[1] for e in edges], dtype=int)

        self.gravity = _positive_or(gravity, FA_DEFAULT_GRAVITY)
        self.scaling_ratio = _positive_or(scaling_ratio, FA_DEFAULT_SCALING)
        self.inertia = _positive_or(inertia, FA_DEFAULT_INERTIA)
        self.speed = _positive_or(speed, FA_DEFAULT_SPEED)
        self.attraction = FA_ATTRACTION
        self.repulsion = FA_ATTRACTION * FA_REPULSION_FACTOR * self.scaling_ratio

    @property
    def params(self) -> Dict[str, float]:
        return {
            "gravity": self.gravity,
            "scaling_ratio": self.scaling_ratio,
            "inertia": self.inertia,
            "speed": self.speed,
            "attraction": self.attraction,
            "repulsion": self.repulsion,
        }

    def _forces(self) -> np.ndarray:
        xy, n = self.xy, len(self.nodes)
        force = np.zeros_like(xy)
        if n == 0:
            return force

        # Repulsion, all pairs, size adjusted
        delta = xy[:, None, :] - xy[None, :, :]
        dist = np.sqrt((delta ** 2).sum(axis=-1))
        np.fill_diagonal(dist, 1.0)
        dist = np.maximum(dist, 1e-9)
        gap = dist - self.radius[:, None] - self.radius[None, :]
        mm = self.mass[:, None] * self.mass[None, :]

        overlapping = gap <= 0
        gap = np.where(overlapping, 1.0, gap)
        magnitude = np.where(
            overlapping,
            100.0 * self.repulsion * mm,
            self.repulsion * mm / gap,
        )
        np.fill_diagonal(magnitude, 0.0)
        force += ((delta / dist[..., None]) * magnitude[..., None]).sum(axis=1)

        # Attraction along edges (both endpoints)
        if self.src.size:
            d = xy[self.dst] - xy[self.src]
            length = np.sqrt((d ** 2).sum(axis=1))
            gap_e = length - self.radius[self.src] - self.radius[self.dst]
            pull = np.where(gap_e > 0, self.attraction * gap_e, 0.0)
            unit = d / np.maximum(length, 1e-9)[:, None]
            f = unit * pull[:, None]
            np.add.at(force, self.src, f)
            np.add.at(force, self.dst, -f)

        # Gravity towards the origin, scaled by mass
        r = np.sqrt((xy ** 2).sum(axis=1))
        unit_r = xy / np.maximum(r, 1e-9)[:, None]
        force -= unit_r * (self.gravity * self.mass)[:, None]

        return force

    def step(self) -> float:
        force = self._forces()
        self.velocity = self.inertia * self.velocity + self.speed * force / self.mass[:, None] / 1000.0

        length = np.sqrt((self.velocity ** 2).sum(axis=1))
        limit = FA_MAX_DISPLACEMENT * self.speed
        scale = np.where(length > limit, limit / np.maximum(length, 1e-9), 1.0)
        self.velocity *= scale[:, None]

        self.xy += self.velocity
        return float(length.mean()) if length.size else 0.0

    def positions(self) -> Dict[Any, np.ndarray]:
        return {n: self.xy[i].copy() for i, n in enumerate(self.nodes)}


def run_force_atlas(
    G: nx.Graph,
    duration: float,
    *,
    pos: Optional[Mapping[Any, np.ndarray]] = None,
    sizes: Optional[Mapping[Any, float]] = None,
    gravity: Optional[float] = None,
    scaling_ratio: Optional[float] = None,
    inertia: Optional[float] = None,
    speed: Optional[float] = None,
    seed: int = 42,
    max_iterations: int = MAX_ITERATIONS,
) -> LayoutResult:
    start = time.monotonic()
    deadline = start + max(0.0, float(duration))
    pos = pos if pos is not None else initial_positions(G, seed)

    engine = ForceAtlas(
        G, pos, sizes,
        gravity=gravity, scaling_ratio=scaling_ratio, inertia=inertia, speed=speed,
    )

    iterations = 0
    while iterations < max_iterations and time.monotonic() < deadline:
        engine.step()
        iterations += 1

    return LayoutResult(
        positions=_to_positions(engine.positions()),
        algorithm=LayoutAlgorithm.FORCE_ATLAS,
        iterations=iterations,
        elapsed=time.monotonic() - start,
        params=engine.params,
    )


# ============================================================================ #
# ForceAtlas2 (networkx)
# ============================================================================ #

def run_force_atlas2(
    G: nx.Graph,
    duration: float,
    *,
    pos: Optional[Mapping[Any, np.ndarray]] = None,
    sizes: Optional[Mapping[Any, float]] = None,
    gravity: Optional[float] = None,
    scaling_ratio: Optional[float] = None,
    jitter_tolerance: Optional[float] = None,
    seed: int = 42,
    max_iterations: int = MAX_ITERATIONS,
    chunk: int = FA2_CHUNK,
) -> LayoutResult:
    start = time.monotonic()
    deadline = start + max(0.0, float(duration))
    if pos is None:
        pos = initial_positions(G, seed)
    else:
        pos = {n: np.asarray(p, dtype=float) for n, p in pos.items()}

    params = {
        "gravity": _positive_or(gravity, FA2_DEFAULT_GRAVITY),
        "scaling_ratio": _positive_or(scaling_ratio, FA2_DEFAULT_SCALING),
        "jitter_tolerance": _positive_or(jitter_tolerance, FA2_DEFAULT_JITTER),
    }

    node_size = {n: float(s) for n, s in sizes.items()} if sizes else None

    iterations = 0
    if G.number_of_nodes() > 1:
        while iterations < max_iterations and time.monotonic() < deadline:
            n_iter = min(chunk, max_iterations - iterations)
            pos = nx.forceatlas2_layout(
                G,
                pos=pos,
                max_iter=n_iter,
                jitter_tolerance=params["jitter_tolerance"],
                scaling_ratio=params["scaling_ratio"],
                gravity=params["gravity"],
                node_size=node_size,
                seed=seed,
            )
            iterations += n_iter

    return LayoutResult(
        positions=_to_positions(pos),
        algorithm=LayoutAlgorithm.FORCE_ATLAS2,
        iterations=iterations,
        elapsed=time.monotonic() - start,
        params=params,
    )


# ============================================================================ #
# Dispatcher
# ============================================================================ #

def run_layout(
    G: nx.Graph,
    config: DiagramConfig,
    sizes: Optional[Mapping[Any, float]] = None,
    *,
    max_iterations: int = MAX_ITERATIONS,
    emit=None,
) -> LayoutResult:
    """Lay out G with the algorithm and budget named in ``config``."""
    algo = LayoutAlgorithm.parse(config.layout_algorithm)

    if algo is LayoutAlgorithm.FORCE_ATLAS:
        result = run_force_atlas(
            G,
            config.layout_time,
            sizes=sizes,
            gravity=config.gravity,
            scaling_ratio=config.scaling_ratio,
            inertia=config.inertia,
            speed=config.speed,
            seed=config.layout_seed,
            max_iterations=max_iterations,
        )
    else:
        result = run_force_atlas2(
            G,
            config.layout_time,
            sizes=sizes,
            gravity=config.gravity,
            scaling_ratio=config.scaling_ratio,
            jitter_tolerance=config.jitter_tolerance,
            seed=config.layout_seed,
            max_iterations=max_iterations,
        )

    msg = (
        f"[layout] {algo.value}: {result.iterations} iterations "
        f"in {result.elapsed:.2f}s over {G.number_of_nodes()} nodes"
    )
    logger.info(msg)
    if emit:
        emit("log", {"message": msg})
    return result
