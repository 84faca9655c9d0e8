"""Fixtures shared by the simulation and narration tests."""

from __future__ import annotations

from concurrent.futures import Executor, Future

import pytest

from shaft_crawler.narration.narrator import Narrator


class ManualExecutor(Executor):
    """Executor that only runs jobs when the test says so."""

    def __init__(self) -> None:
        self.queued: list[tuple[Future, object, tuple]] = []

    def submit(self, fn, /, *args, **kwargs) -> Future:
        future: Future = Future()
        self.queued.append((future, fn, args))
        return future

    def run_all(self) -> None:
        queued, self.queued = self.queued, []
        for future, fn, args in queued:
            if not future.set_running_or_notify_cancel():
                continue
            try:
                future.set_result(fn(*args))
            except Exception as exc:
                future.set_exception(exc)


class FakeNarrator(Narrator):
    """Narrator that records prompts and answers with canned text."""

    supports_portraits = True

    def __init__(self, text: str = "The dark stirs.", image: str | None = "data:image/png;base64,AAAA") -> None:
        self.text = text
        self.image = image
        self.prompts: list[str] = []
        self.portrait_prompts: list[str] = []

    def narrate(self, prompt: str, context: str = "") -> str:
        self.prompts.append(prompt)
        return self.text

    def portrait(self, prompt: str) -> str | None:
        self.portrait_prompts.append(prompt)
        return self.image


@pytest.fixture
def manual_executor() -> ManualExecutor:
    return ManualExecutor()


@pytest.fixture
def fake_narrator() -> FakeNarrator:
    return FakeNarrator()
