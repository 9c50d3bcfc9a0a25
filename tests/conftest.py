from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the project root importable when pytest is launched through its entrypoint.
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from sori.structures import Prompt  # noqa: E402


class FakeProvider:
    """Completion provider double that replays scripted replies."""

    def __init__(self, *replies: str) -> None:
        self.replies = list(replies)
        self.calls: list[tuple[Prompt, dict]] = []

    def complete(self, prompt: Prompt, **kwargs) -> str:
        self.calls.append((prompt, kwargs))
        if not self.replies:
            return prompt.user
        return self.replies.pop(0)

    @property
    def prompts(self) -> list[Prompt]:
        return [prompt for prompt, _ in self.calls]


@pytest.fixture
def fake_provider_factory():
    return FakeProvider
