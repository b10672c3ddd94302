"""Feature branch: branch off main, commit there, merge back."""

TASK = {
    "title": "Work on a feature branch",
    "description": "main already has a commit. Create a branch called feature, commit app.js on it, then merge it into main.",
    "difficulty": "Intermediate",
    "initialCommands": [
        "git edit README.md",
        "git add README.md",
        'git commit -m "Initial commit"',
    ],
    "solutionCommands": [
        "git checkout -b feature",
        "git edit app.js",
        "git add app.js",
        'git commit -m "Add app"',
        "git checkout main",
        "git merge feature",
    ],
    "goalDescription": "main contains a merge commit whose second parent is the tip of feature.",
    "validationLogic": "commit at branches['main'] has parent2Id == branches['feature']",
}
