"""
Force layout physics.

The whole per-tick behaviour lives in ``step``, a pure function from one
``SimulationState`` to the next. Forces run in a fixed order each tick:

1. link      - pulls edge endpoints toward ``link_distance``
2. charge    - pairwise repulsion between every pair of nodes
3. center    - translates the centroid onto the viewport centre
4. collision - separates overlapping node footprints

Link and charge are scaled by alpha, the cooling parameter, which decays
geometrically toward ``alpha_target`` every tick.
"""

import math
import random
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..config import ALPHA_START, LayoutSettings
from ..core.types import Edge, Point

# Phyllotaxis placement for nodes without a known position
INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))


@dataclass
class Body:
    """
    Layout-only fields of one node.

    ``fx``/``fy`` are set while the node is pinned (dragged).
    """
    id: str
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    fx: Optional[float] = None
    fy: Optional[float] = None

    @property
    def pinned(self) -> bool:
        return self.fx is not None

    @property
    def position(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class Link:
    source: int
    target: int
    distance: float
    strength: float
    # Share of the correction applied to the target endpoint
    bias: float


@dataclass(frozen=True)
class SimulationState:
    bodies: Tuple[Body, ...]
    links: Tuple[Link, ...]
    center: Point
    settings: LayoutSettings = field(default_factory=LayoutSettings)
    alpha: float = ALPHA_START
    alpha_target: float = 0.0
    tick: int = 0

    @property
    def converged(self) -> bool:
        return self.alpha < self.settings.alpha_min

    @property
    def positions(self) -> Dict[str, Point]:
        return {body.id: body.position for body in self.bodies}

    def index_of(self, node_id: str) -> int:
        for i, body in enumerate(self.bodies):
            if body.id == node_id:
                return i
        raise KeyError(node_id)

    def with_pin(self, node_id: str, position: Optional[Point]) -> "SimulationState":
        """Pin a node at ``position`` (or release it when ``position`` is None)."""
        i = self.index_of(node_id)
        body = replace(self.bodies[i])
        if position is None:
            body.fx = body.fy = None
        else:
            body.x, body.y = position
            body.fx, body.fy = position
            body.vx = body.vy = 0.0
        return replace(self, bodies=self.bodies[:i] + (body,) + self.bodies[i + 1:])

    def with_alpha_target(self, target: float) -> "SimulationState":
        return replace(self, alpha_target=target)


def initial_position(index: int, center: Point) -> Point:
    radius = INITIAL_RADIUS * math.sqrt(0.5 + index)
    angle = index * INITIAL_ANGLE
    return (center[0] + radius * math.cos(angle), center[1] + radius * math.sin(angle))


def build_state(
    node_ids: Sequence[str],
    edges: Iterable[Edge],
    center: Point,
    settings: LayoutSettings,
    positions: Optional[Mapping[str, Point]] = None,
) -> SimulationState:
    """
    Seed a fresh simulation.

    Nodes listed in ``positions`` keep their coordinates; the rest are laid
    out on a spiral around ``center``. Every edge endpoint must be in
    ``node_ids``.
    """
    positions = positions or {}
    bodies = []
    for i, node_id in enumerate(node_ids):
        x, y = positions.get(node_id) or initial_position(i, center)
        bodies.append(Body(id=node_id, x=x, y=y))

    index = {node_id: i for i, node_id in enumerate(node_ids)}
    edges = list(edges)
    degree = [0] * len(bodies)
    for edge in edges:
        degree[index[edge.source_id]] += 1
        degree[index[edge.target_id]] += 1

    links = []
    for edge in edges:
        s, t = index[edge.source_id], index[edge.target_id]
        links.append(Link(
            source=s,
            target=t,
            distance=settings.link_distance,
            strength=edge.strength * settings.link_factor,
            bias=degree[s] / (degree[s] + degree[t]),
        ))

    return SimulationState(
        bodies=tuple(bodies), links=tuple(links), center=center, settings=settings
    )


def _jiggle(rng: random.Random) -> float:
    return (rng.random() - 0.5) * 1e-6


def apply_link(bodies: List[Body], links: Iterable[Link], alpha: float, rng: random.Random) -> None:
    for link in links:
        source, target = bodies[link.source], bodies[link.target]
        x = (target.x + target.vx - source.x - source.vx) or _jiggle(rng)
        y = (target.y + target.vy - source.y - source.vy) or _jiggle(rng)
        distance = math.sqrt(x * x + y * y)
        k = (distance - link.distance) / distance * alpha * link.strength
        x *= k
        y *= k
        target.vx -= x * link.bias
        target.vy -= y * link.bias
        source.vx += x * (1 - link.bias)
        source.vy += y * (1 - link.bias)


def apply_charge(bodies: List[Body], strength: float, alpha: float, rng: random.Random) -> None:
    for i, body in enumerate(bodies):
        for j, other in enumerate(bodies):
            if i == j:
                continue
            x = other.x - body.x
            y = other.y - body.y
            if x == 0:
                x = _jiggle(rng)
            if y == 0:
                y = _jiggle(rng)
            d2 = x * x + y * y
            # Softened below unit distance
            if d2 < 1:
                d2 = math.sqrt(d2)
            w = strength * alpha / d2
            body.vx += x * w
            body.vy += y * w


def apply_center(bodies: List[Body], center: Point, strength: float) -> None:
    if not bodies:
        return
    sx = sum(b.x for b in bodies) / len(bodies) - center[0]
    sy = sum(b.y for b in bodies) / len(bodies) - center[1]
    for body in bodies:
        body.x -= sx * strength
        body.y -= sy * strength


def apply_collision(bodies: List[Body], radius: float, rng: random.Random) -> None:
    if radius <= 0:
        return
    r = radius * 2
    for i, body in enumerate(bodies):
        xi = body.x + body.vx
        yi = body.y + body.vy
        for other in bodies[i + 1:]:
            x = xi - (other.x + other.vx)
            y = yi - (other.y + other.vy)
            d2 = x * x + y * y
            if d2 >= r * r:
                continue
            if x == 0:
                x = _jiggle(rng)
                d2 += x * x
            if y == 0:
                y = _jiggle(rng)
                d2 += y * y
            d = math.sqrt(d2)
            k = (r - d) / d
            x *= k
            y *= k
            # Equal radii: split the correction evenly
            body.vx += x * 0.5
            body.vy += y * 0.5
            other.vx -= x * 0.5
            other.vy -= y * 0.5


def integrate(bodies: List[Body], velocity_decay: float, dt: float) -> None:
    keep = 1 - velocity_decay
    for body in bodies:
        if body.fx is not None:
            body.x, body.vx = body.fx, 0.0
        else:
            body.vx *= keep
            body.x += body.vx * dt
        if body.fy is not None:
            body.y, body.vy = body.fy, 0.0
        else:
            body.vy *= keep
            body.y += body.vy * dt


def step(state: SimulationState, dt: float = 1.0) -> SimulationState:
    """
    Advance the simulation by one tick.

    Returns a new state; ``state`` and its bodies are left untouched.
    Randomness is only used to separate exactly coincident points and is
    seeded from ``settings.seed`` and the tick number, so runs are
    reproducible.
    """
    settings = state.settings
    alpha = state.alpha + (state.alpha_target - state.alpha) * settings.alpha_decay
    bodies = [replace(body) for body in state.bodies]
    rng = random.Random(settings.seed * 1_000_003 + state.tick)

    apply_link(bodies, state.links, alpha, rng)
    apply_charge(bodies, settings.charge_strength, alpha, rng)
    apply_center(bodies, state.center, settings.center_strength)
    apply_collision(bodies, settings.collision_radius, rng)
    integrate(bodies, settings.velocity_decay, dt)

    return replace(state, bodies=tuple(bodies), alpha=alpha, tick=state.tick + 1)
