from pathlib import Path
from typing import Dict, List

import pytest


def build_tree(root: Path, layout: Dict[str, str]) -> None:
    """Create files and directories below root.

    Keys ending in "/" are directories; any other key is a file holding its value.
    """
    for relative, content in layout.items():
        target = root / relative
        if relative.endswith("/"):
            target.mkdir(parents=True, exist_ok=True)
        else:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)


@pytest.fixture
def make_tree(tmp_path):
    def _make(layout: Dict[str, str]) -> Path:
        root = tmp_path / "project"
        root.mkdir()
        build_tree(root, layout)
        return root

    return _make


@pytest.fixture
def listing():
    """Walk a root and return the reported paths relative to it, in walk order."""

    def _listing(walker, root: Path) -> List[str]:
        return [result.path.relative_to(root).as_posix() for result in walker.walk(root)]

    return _listing
