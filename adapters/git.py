"""
Git repository adapter for listing the files of a codebase.

The indexer works on a flat list of file entries. This adapter produces the
paths of that list from a local repository: tracked files plus untracked files
that are not ignored, so `.gitignore` rules are respected before any of the
indexer's own ignore rules run.
"""

from pathlib import Path
import subprocess


class SubprocessGitClient:
    """
    Git client backed by `git` subprocesses.

    Attributes:
        root: The root path of the Git repository this client operates on.
        cmd: The `git ls-files` command used to list files.
    """

    def __init__(self, root: Path):
        self.root = root
        self.cmd = ["git", "ls-files", "--cached", "--others", "--exclude-standard"]

    def is_repo(self) -> bool:
        """
        Check if the root path is inside a Git working tree.

        Returns:
            bool: True if `git rev-parse --is-inside-work-tree` succeeds.
        """
        try:
            subprocess.run(
                ["git", "rev-parse", "--is-inside-work-tree"],
                cwd=self.root,
                text=True,
                check=True,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
            return True
        except subprocess.CalledProcessError:
            return False

    def get_file_paths_list(self) -> list[Path]:
        """
        List the repository's files, relative to the root, in Git's order.

        Returns:
            list[Path]: One relative path per tracked or non-ignored untracked file.
            Blank lines in the output are skipped.
        """
        paths: list[Path] = []
        with self._create_subprocess(self.cmd) as process:
            if process.stdout:
                for line in process.stdout:
                    line = line.strip()
                    if line:
                        paths.append(Path(line))

            process.wait()

        return paths

    def _create_subprocess(self, cmd: list[str]) -> subprocess.Popen[str]:
        return subprocess.Popen(
            cmd,
            cwd=self.root,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            bufsize=1,
        )
