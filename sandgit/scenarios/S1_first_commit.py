"""First commit: edit a file, stage it, commit it."""

TASK = {
    "title": "Your first commit",
    "description": "The repository is empty. Change README.md, stage it and record it as a commit.",
    "difficulty": "Beginner",
    "initialCommands": [],
    "solutionCommands": [
        "git edit README.md",
        "git add README.md",
        'git commit -m "Add README"',
    ],
    "goalDescription": "main points at exactly one commit and the working tree is clean.",
    "validationLogic": "len(commits) == 1 and branches['main'] == head and not stagedFiles and not modifiedFiles",
}
