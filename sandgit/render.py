"""Plain-text rendering of the projected graph and of the first-parent log."""

from __future__ import annotations

import time
from typing import Dict, List, Tuple

from .graph import GraphLayout, GraphNode
from .history import commit_history
from .repo import Repository
from .util import short_id


def format_labels(node: GraphNode) -> str:
    """'(HEAD -> main, feature)' style decoration, or '' if the node has no labels."""
    parts: List[str] = []
    for label in node.labels:
        if label.is_current and node.is_head:
            parts.insert(0, f"HEAD -> {label.name}")
        else:
            parts.append(label.name)
    return f" ({', '.join(parts)})" if parts else ""


def _lane_spans(layout: GraphLayout) -> Dict[int, Tuple[int, int]]:
    spans: Dict[int, Tuple[int, int]] = {}
    for n in layout.nodes:
        first, last = spans.get(n.lane, (n.row, n.row))
        spans[n.lane] = (min(first, n.row), max(last, n.row))
    return spans


def render_graph(layout: GraphLayout) -> List[str]:
    """One line per commit, oldest first, one column per lane.

    '*' marks a commit, '@' the head commit, '|' a lane that continues past
    this row.
    """
    if not layout.nodes:
        return ["(no commits yet)"]
    spans = _lane_spans(layout)
    lines: List[str] = []
    for node in layout.nodes:
        cols: List[str] = []
        for lane in range(layout.lane_count):
            if lane == node.lane:
                cols.append("@" if node.is_head else "*")
            elif lane in spans and spans[lane][0] < node.row < spans[lane][1]:
                cols.append("|")
            else:
                cols.append(" ")
        lines.append(f"{' '.join(cols).rstrip()}  {node.short_id}{format_labels(node)} {node.message}")
    return lines


def render_log(repo: Repository, max_count: int = 10, oneline: bool = True) -> List[str]:
    """First-parent log from head, newest first."""
    if not repo.head:
        return ["No commits yet!"]
    lines: List[str] = []
    for commit in commit_history(repo, repo.head)[:max_count]:
        prefix = "*   " if commit.is_merge else "* "
        if oneline:
            lines.append(f"{prefix}{short_id(commit.id)} {commit.message}")
        else:
            when = time.strftime("%a %b %d %H:%M:%S %Y", time.localtime(commit.timestamp / 1000))
            lines.append(f"{prefix}commit {commit.id}")
            lines.append(f"Author: {commit.author}")
            lines.append(f"Date:   {when}")
            lines.append("")
            lines.append(f"    {commit.message}")
            lines.append("")
    return lines
