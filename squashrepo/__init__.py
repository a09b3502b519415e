"""squashrepo: install Arch packages shipped in a remote squashfs image.

Core design goals:
- One run per selected link, no persistent state
- Cleanup owed by a stage always runs
- Per-package failures never abort the run
- External tools behind a single command runner seam
"""

__all__ = []
