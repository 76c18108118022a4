import sys
from pathlib import Path

import pytest

# Ensure project root is on sys.path so `import slide_deck` works
project_root = Path(__file__).resolve().parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


SAMPLE_DECK = """# Quarterly Review

---

## Agenda

- Results
- Risks
- Next steps

---

## Numbers

| Metric | Value |
|--------|-------|
| Revenue | 10 |
| Margin | 4 |

Figures are **preliminary**.
"""


@pytest.fixture
def sample_deck():
    return SAMPLE_DECK
