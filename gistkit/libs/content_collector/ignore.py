"""Ignore policies used to skip directory children during collection."""

import logging
import subprocess
from fnmatch import fnmatch
from pathlib import Path
from typing import Iterable, List, Optional

LOG = logging.getLogger(__name__)

# Names every IDE hides from automated scans by default
DEFAULT_IGNORED_PATTERNS = [
    '*.hprof', '*.pyc', '*.pyo', '*.rbc', '*.yarb', '*~',
    '.DS_Store', '.git', '.hg', '.svn', 'CVS', '__pycache__',
    '_svn', 'vssver.scc', 'vssver2.scc',
]


class FileTypeIgnorePolicy:
    """Ignore files and directories whose name matches a configured pattern."""

    def __init__(self, patterns: Optional[Iterable[str]] = None):
        self.patterns: List[str] = list(DEFAULT_IGNORED_PATTERNS if patterns is None else patterns)

    def is_ignored(self, path: Path) -> bool:
        name = Path(path).name
        for pattern in self.patterns:
            if fnmatch(name, pattern):
                LOG.debug(f"Ignoring {path} (matches pattern '{pattern}')")
                return True
        return False


class GitIgnorePolicy:
    """Ignore paths excluded by git's ignore rules.

    Asks ``git check-ignore`` from the path's parent directory, so paths
    outside a work tree are never ignored. When git isn't installed the
    policy disables itself after the first failed call.
    """

    def __init__(self, enabled: bool = True, git_executable: str = 'git'):
        self.enabled = enabled
        self.git_executable = git_executable

    def is_ignored(self, path: Path) -> bool:
        if not self.enabled:
            return False

        path = Path(path)
        cmd = [self.git_executable, '-C', str(path.parent), 'check-ignore', '-q', '--', path.name]
        try:
            result = subprocess.run(cmd, check=False, capture_output=True)
        except OSError as exc:
            LOG.debug("git check-ignore unavailable, disabling VCS ignore rules: %s", exc)
            self.enabled = False
            return False

        # 0: ignored, 1: not ignored, 128: not a work tree or other fatal error
        if result.returncode == 0:
            LOG.debug(f"Ignoring {path} (git ignore rules)")
            return True
        if result.returncode not in (0, 1):
            err = result.stderr.decode('utf-8', errors='replace').strip()
            LOG.debug("git check-ignore returned %s for %s: %s", result.returncode, path, err)
        return False
