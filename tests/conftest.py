"""Shared test configuration and fixtures."""

from pathlib import Path

import pytest
from dotenv import load_dotenv

from gridtable_html.config import ENV_NO_HEADER

# Load .env from project root for all tests
root = Path(__file__).parent.parent.resolve()
load_dotenv(root / ".env")


class RecordingState:
    """Minimal conversion context: text and paragraphs only, records every patch call."""

    def __init__(self):
        self.patched: list[tuple[dict, dict]] = []

    def all(self, node: dict) -> list[dict]:
        results = []
        for child in node.get("children") or []:
            if child["type"] == "text":
                results.append({"type": "text", "value": child["value"]})
            elif child["type"] == "paragraph":
                results.append({"type": "element", "tagName": "p", "properties": {}, "children": self.all(child)})
            elif child["type"] == "inlineCode":
                results.append(
                    {"type": "element", "tagName": "code", "properties": {}, "children": [{"type": "text", "value": child["value"]}]}
                )
            else:
                raise KeyError(child["type"])
        return results

    def patch(self, source: dict, target: dict) -> None:
        self.patched.append((source, target))
        if "position" in source:
            target["position"] = source["position"]


@pytest.fixture
def state() -> RecordingState:
    return RecordingState()


@pytest.fixture(autouse=True)
def _clear_no_header_env(monkeypatch):
    """Keep a developer's .env from leaking header suppression into tests."""
    monkeypatch.delenv(ENV_NO_HEADER, raising=False)
