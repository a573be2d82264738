"""Shared pytest fixtures and test helpers for msgrules tests."""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from msgrules.services.telemetry import disable_telemetry

SAMPLE_DECK = """\
---
marp: true
theme: gaia
paginate: true
---

# The Rules of Testing

Messages between objects

---

<!-- header: Incoming messages -->

## Incoming query

Assert the result.

```python
def test_diameter():
    assert Wheel(26, 1.5).diameter() == 29
```

---

## Incoming command

Assert direct public side effects.

---

<!-- header: Outgoing messages -->
<!-- _class: lead -->

## Outgoing command

```yaml
expected:
---
call: changed
```

---

Thanks!
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def deck_file(tmp_path: Path) -> Path:
    """The sample deck written to ``slides.md`` in a temp directory."""
    path = tmp_path / "slides.md"
    path.write_text(SAMPLE_DECK, encoding="utf-8")
    return path


@pytest.fixture
def _isolated_project(
    deck_file: Path, monkeypatch: pytest.MonkeyPatch
) -> Generator[Path]:
    """Change CWD to a temp project holding ``slides.md``.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.delenv("MSGRULES_CONFIG", raising=False)
    monkeypatch.chdir(deck_file.parent)
    yield deck_file.parent


@pytest.fixture(autouse=True)
def _reset_telemetry() -> Generator[None]:
    """Telemetry is a context var; keep ``-v`` in one test from leaking."""
    yield
    disable_telemetry()
