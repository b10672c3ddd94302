"""Merge conflict: get out of conflict mode and finish the merge."""

TASK = {
    "title": "Resolve a merge conflict",
    "description": "Both main and hotfix changed README.md. Merging hotfix stops on a conflict: resolve it and commit.",
    "difficulty": "Advanced",
    "initialCommands": [
        "git edit README.md",
        "git add README.md",
        'git commit -m "Initial commit"',
        "git checkout -b hotfix",
        "git edit README.md",
        "git add README.md",
        'git commit -m "Fix typo"',
        "git checkout main",
        "git edit README.md",
        "git add README.md",
        'git commit -m "Reword intro"',
    ],
    "solutionCommands": [
        "git merge hotfix",
        "git resolve",
        'git commit -m "Merge hotfix"',
    ],
    "goalDescription": "No conflict is pending and main has moved past 'Reword intro'.",
    "validationLogic": "not hasConflict and head != id of 'Reword intro'",
    "mergeOutcome": "conflict",
}
