"""FastAPI entrypoint exposing the analyze and group contracts."""

from __future__ import annotations

from fastapi import FastAPI, HTTPException

from link_inspector.config.settings import load_config
from link_inspector.core.errors import LinkInspectorError
from link_inspector.orchestrator.dispatch import dispatch
from link_inspector.scoring.rules import RuleSet

app = FastAPI(title="link-inspector")


def _rules() -> RuleSet:
    config, _ = load_config()
    return config.rules


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/analyze")
def analyze(payload: dict[str, object]) -> dict[str, object]:
    try:
        response = dispatch({**payload, "type": "analyze"}, rules=_rules())
    except LinkInspectorError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return response.model_dump(mode="json")


@app.post("/group")
def group(payload: dict[str, object]) -> dict[str, object]:
    try:
        response = dispatch({**payload, "type": "group"})
    except LinkInspectorError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    result = response.model_dump(mode="json")
    for item in result["groups"]:
        item["count"] = len(item["members"])
    return result
