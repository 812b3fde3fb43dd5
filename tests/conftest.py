from __future__ import annotations

from pathlib import Path

import pytest

from repeater.errors import RetryCancelled


class FakeClock:
    """Records requested waits instead of sleeping; optionally cancels after a number of waits."""

    def __init__(self, cancel_after: int | None = None) -> None:
        self.waits: list[float] = []
        self.cancel_after = cancel_after

    def sleep(self, seconds: float) -> None:
        if self.cancel_after is not None and len(self.waits) >= self.cancel_after:
            raise RetryCancelled("fake clock cancelled")
        self.waits.append(seconds)

    @property
    def elapsed(self) -> float:
        return sum(self.waits)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_clock() -> type[FakeClock]:
    return FakeClock


@pytest.fixture
def clear_repeater_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "REPEATER_INITIAL_DELAY",
        "REPEATER_MAX_DELAY",
        "REPEATER_LINEAR_GROWTH",
        "REPEATER_EXPONENTIAL_GROWTH",
        "REPEATER_MAX_RETRIES",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        if "property" in path.parts:
            item.add_marker(pytest.mark.property)
