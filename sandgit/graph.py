"""Commit graph projection: lanes, grid positions, edges and branch labels for drawing."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from .constants import (
    EDGE_OPACITY,
    EDGE_WIDTH,
    GRAPH_PAD_LEFT,
    GRAPH_PAD_TOP,
    GRAPH_SPACING_X,
    GRAPH_SPACING_Y,
    LANE_PALETTE,
    MERGE_EDGE_OPACITY,
    MERGE_EDGE_WIDTH,
)
from .repo import Repository
from .util import short_id


@dataclass(frozen=True)
class BranchLabel:
    name: str
    is_current: bool


@dataclass(frozen=True)
class GraphNode:
    """One commit placed on the grid."""

    id: str
    short_id: str
    message: str
    branch: str
    timestamp: int
    lane: int
    row: int
    x: int
    y: int
    color: str
    is_head: bool
    is_merge: bool
    labels: Tuple[BranchLabel, ...] = ()


@dataclass(frozen=True)
class GraphEdge:
    """Parent -> child connection, colored by the parent's lane."""

    parent_id: str
    child_id: str
    x1: int
    y1: int
    x2: int
    y2: int
    color: str
    is_merge: bool
    width: float
    opacity: float


@dataclass
class GraphLayout:
    nodes: List[GraphNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)

    @property
    def lane_count(self) -> int:
        return max((n.lane for n in self.nodes), default=-1) + 1


def lane_color(lane: int) -> str:
    return LANE_PALETTE[lane % len(LANE_PALETTE)]


def assign_lanes(repo: Repository) -> Dict[str, int]:
    """Branch name -> lane, in order of first appearance in the commit list."""
    lanes: Dict[str, int] = {}
    for c in repo.commits:
        if c.branch not in lanes:
            lanes[c.branch] = len(lanes)
    return lanes


def _edge(parent: GraphNode, child: GraphNode, is_merge: bool) -> GraphEdge:
    return GraphEdge(
        parent_id=parent.id,
        child_id=child.id,
        x1=parent.x,
        y1=parent.y,
        x2=child.x,
        y2=child.y,
        color=parent.color,
        is_merge=is_merge,
        width=MERGE_EDGE_WIDTH if is_merge else EDGE_WIDTH,
        opacity=MERGE_EDGE_OPACITY if is_merge else EDGE_OPACITY,
    )


def project_graph(repo: Repository) -> GraphLayout:
    """Lay out every commit on a lane/row grid and connect it to its parents.

    Rows follow creation order, not ancestry, so this is a simple indexed grid
    rather than a DAG layout. Labels come from the local branch table only.
    """
    if not repo.commits:
        return GraphLayout()
    lanes = assign_lanes(repo)
    labels_by_commit: Dict[str, List[BranchLabel]] = {}
    for name, target in repo.branches.items():
        if target:
            labels_by_commit.setdefault(target, []).append(BranchLabel(name, name == repo.current_branch))

    nodes: List[GraphNode] = []
    by_id: Dict[str, GraphNode] = {}
    for row, c in enumerate(repo.commits):
        lane = lanes[c.branch]
        node = GraphNode(
            id=c.id,
            short_id=short_id(c.id),
            message=c.message,
            branch=c.branch,
            timestamp=c.timestamp,
            lane=lane,
            row=row,
            x=GRAPH_PAD_LEFT + lane * GRAPH_SPACING_X,
            y=GRAPH_PAD_TOP + row * GRAPH_SPACING_Y,
            color=lane_color(lane),
            is_head=c.id == repo.head,
            is_merge=c.is_merge,
            labels=tuple(labels_by_commit.get(c.id, ())),
        )
        nodes.append(node)
        by_id[c.id] = node

    edges: List[GraphEdge] = []
    for c in repo.commits:
        child = by_id[c.id]
        if c.parent_id and c.parent_id in by_id:
            edges.append(_edge(by_id[c.parent_id], child, is_merge=False))
        if c.parent2_id and c.parent2_id in by_id:
            edges.append(_edge(by_id[c.parent2_id], child, is_merge=True))
    return GraphLayout(nodes=nodes, edges=edges)
