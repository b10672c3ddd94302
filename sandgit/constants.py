"""Constants for sandgit: program name, defaults, restricted actions, graph layout."""

from __future__ import annotations

# First token every command line must start with
PROGRAM_NAME = "git"

# Default branch name (git uses 'master', modern default is 'main')
DEFAULT_BRANCH = "main"
DEFAULT_REMOTE_BRANCH = "origin/main"

# Defaults for commands that omit their argument
DEFAULT_EDIT_FILE = "README.md"
DEFAULT_COMMIT_MESSAGE = "Update"
DEFAULT_AUTHOR = "User"

# File a simulated merge conflict lands in
CONFLICT_FILE = "README.md"

# Actions still allowed while a merge conflict is pending
CONFLICT_ALLOWED_ACTIONS = frozenset({"add", "commit", "status", "resolve"})

# Probability that a merge completes without a conflict
DEFAULT_MERGE_CLEAN_PROBABILITY = 0.4

# Length of the abbreviated commit id shown in output
SHORT_ID_LEN = 7

# Graph layout (pixels)
GRAPH_PAD_LEFT = 60
GRAPH_PAD_TOP = 40
GRAPH_SPACING_X = 45
GRAPH_SPACING_Y = 75

# Lane colors, cycled by lane index
LANE_PALETTE = (
    "#3498db",
    "#2ecc71",
    "#e74c3c",
    "#f1c40f",
    "#9b59b6",
    "#e67e22",
    "#1abc9c",
    "#d35400",
)

# Edge styling: first-parent edges solid, merge edges thinner and fainter
EDGE_WIDTH = 3.5
EDGE_OPACITY = 0.9
MERGE_EDGE_WIDTH = 2.0
MERGE_EDGE_OPACITY = 0.4

# Config
CONFIG_FILENAME = ".sandgit.ini"
