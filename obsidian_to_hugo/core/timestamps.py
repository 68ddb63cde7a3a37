"""Last-modified lookups backed by git history."""

import subprocess
from datetime import datetime
from pathlib import Path
from typing import Optional


def git_last_modified(path: Path) -> Optional[datetime]:
    """Get the committer date of the last commit touching a file.

    Runs git from the file's directory, so the vault itself does not have
    to be the repository root.

    Args:
        path: File to look up

    Returns:
        Timezone-aware datetime, or None if git is unavailable, the file is
        not in a repository, or it has never been committed
    """
    path = Path(path)
    try:
        result = subprocess.run(
            ["git", "--no-pager", "log", "-1", "--format=%cI", "--", path.name],
            cwd=path.parent,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None

    output = result.stdout.strip()
    if not output:
        return None

    try:
        return datetime.fromisoformat(output)
    except ValueError:
        return None
