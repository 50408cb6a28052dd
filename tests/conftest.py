"""
Pytest fixtures and configuration for Note Illustrator tests.
"""

import pytest
from pathlib import Path


@pytest.fixture
def biology_note() -> str:
    """A small study note with headings, a list and a code block."""
    return """# Cell Biology

Cells are the basic unit of life and every organism is built from them.

## Photosynthesis

Photosynthesis converts sunlight into chemical energy inside chloroplasts.

- Light reactions happen in the thylakoid
- The Calvin cycle fixes carbon

## Respiration

Respiration releases energy from glucose in the mitochondria.

```python
# not a heading
energy = glucose * 38
```
"""


@pytest.fixture
def pets_note() -> str:
    """Two sections about cats and dogs."""
    return "# Intro\nThis is about cats and dogs.\n\n# Details\nCats are independent. Dogs are loyal."


@pytest.fixture
def note_file(tmp_path: Path, biology_note: str) -> Path:
    """Write the biology note to disk."""
    path = tmp_path / "biology.md"
    path.write_text(biology_note, encoding="utf-8")
    return path
