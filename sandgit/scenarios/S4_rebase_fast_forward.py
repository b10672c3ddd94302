"""Rebase: bring a stale branch up to date with main."""

TASK = {
    "title": "Catch up with main",
    "description": "Branch docs was created before main got new commits. Bring docs up to the tip of main with rebase.",
    "difficulty": "Intermediate",
    "initialCommands": [
        "git edit README.md",
        "git add README.md",
        'git commit -m "Initial commit"',
        "git checkout -b docs",
        "git checkout main",
        "git edit src/main.py",
        "git add src/main.py",
        'git commit -m "Add entry point"',
    ],
    "solutionCommands": [
        "git checkout docs",
        "git rebase main",
    ],
    "goalDescription": "docs and main point at the same commit and docs is checked out.",
    "validationLogic": "currentBranch == 'docs' and branches['docs'] == branches['main']",
}
