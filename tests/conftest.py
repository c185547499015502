"""Shared fixtures: fake clock, mocked GitHub API, recording card."""

from __future__ import annotations

import base64
from typing import Callable, Sequence

import httpx
import pytest

from core.domain.models import StatItem


def b64(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGitHub:
    """Routes `/repos/<owner>/<name>[/readme]` to canned responses and logs calls."""

    def __init__(self) -> None:
        self.repos: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.readmes: dict[str, Callable[[httpx.Request], httpx.Response]] = {}
        self.calls: list[str] = []

    def add_repo(self, key: str, payload: dict, *, readme: str | None = None) -> None:
        self.repos[key] = lambda _r: httpx.Response(200, json=payload)
        if readme is not None:
            self.readmes[key] = lambda _r: httpx.Response(200, json={"content": b64(readme), "encoding": "base64"})

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path
        self.calls.append(path)
        parts = path.strip("/").split("/")
        # repos/<owner>/<name>[/readme]
        key = f"{parts[1]}/{parts[2]}"
        routes = self.readmes if len(parts) == 4 and parts[3] == "readme" else self.repos
        route = routes.get(key)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        return route(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def metadata_calls(self) -> list[str]:
        return [c for c in self.calls if not c.endswith("/readme")]


class RecordingCard:
    """In-memory `ProjectCard` that records every mutation in order."""

    def __init__(self, url: str | None) -> None:
        self.url = url
        self.title: str | None = None
        self.description: str | None = None
        self.stats: list[StatItem] | None = None
        self.loading = False
        self.events: list[str] = []

    def repository_url(self) -> str | None:
        return self.url

    def set_title(self, text: str) -> None:
        self.events.append("title")
        self.title = text

    def set_description(self, text: str) -> None:
        self.events.append("description")
        self.description = text

    def show_loading(self) -> None:
        self.events.append("show_loading")
        self.loading = True

    def hide_loading(self) -> None:
        self.events.append("hide_loading")
        self.loading = False

    def replace_stats(self, items: Sequence[StatItem]) -> None:
        self.events.append("stats")
        self.stats = list(items)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def github() -> FakeGitHub:
    return FakeGitHub()
