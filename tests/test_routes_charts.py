"""Tests des routes `/charts` (correspondances, rareté, synthèse)."""

from __future__ import annotations

from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from chartmatch.app.main import app
from chartmatch.core.container import container
from chartmatch.core.http_constants import HTTP_OK, HTTP_UNPROCESSABLE_ENTITY
from tests.factories import build_chart

# Constantes pour éviter les erreurs PLR2004 (Magic values)
EXPECTED_COUNT_3 = 3
EXPECTED_COUNT_5 = 5

client = TestClient(app)


def _chart_payload(**kwargs) -> dict:
    return build_chart(**kwargs).model_dump()


def test_matches_default_top_n() -> None:
    """Teste le classement avec le nombre de correspondances par défaut."""
    r = client.post("/charts/matches", json={"chart": _chart_payload()})
    assert r.status_code == HTTP_OK
    matches = r.json()["matches"]
    assert len(matches) == EXPECTED_COUNT_5
    scores = [m["score"] for m in matches]
    assert scores == sorted(scores, reverse=True)
    first = matches[0]
    assert set(first["breakdown"]) == {
        "day_master",
        "dm_strength",
        "elements",
        "structure",
        "pillars",
        "stars",
    }
    assert first["label"] in {"Strong", "Notable", "Moderate", "Light"}
    assert first["person"]["id"]


def test_matches_top_n_and_category() -> None:
    """Teste la restriction à une catégorie du corpus."""
    r = client.post(
        "/charts/matches",
        json={"chart": _chart_payload(), "top_n": 3, "category": "scientist"},
    )
    assert r.status_code == HTTP_OK
    matches = r.json()["matches"]
    assert len(matches) == EXPECTED_COUNT_3
    assert {m["person"]["category"] for m in matches} == {"scientist"}


def test_matches_whole_corpus_when_top_n_exceeds_size() -> None:
    """Teste qu'un top_n élevé renvoie au plus la taille du corpus."""
    r = client.post("/charts/matches", json={"chart": _chart_payload(), "top_n": 50})
    assert r.status_code == HTTP_OK
    assert len(r.json()["matches"]) == min(50, len(container.corpus_repo))


def test_matches_accepts_sparse_chart() -> None:
    """Teste qu'une carte presque vide est acceptée sans erreur."""
    r = client.post("/charts/matches", json={"chart": {"day_master": {"stem": "甲"}}})
    assert r.status_code == HTTP_OK
    assert r.json()["matches"][0]["breakdown"]["day_master"] == 100


def test_matches_rejects_invalid_top_n() -> None:
    """Teste l'enveloppe d'erreur de validation."""
    r = client.post("/charts/matches", json={"chart": _chart_payload(), "top_n": 0})
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
    body = r.json()
    assert body["code"] == "VALIDATION_ERROR"
    assert body["trace_id"]
    assert body["details"]["errors"][0]["loc"][-1] == "top_n"


def test_matches_rejects_negative_percentage() -> None:
    """Teste le rejet d'un pourcentage négatif."""
    payload = _chart_payload()
    payload["elements"]["percentages"]["Fire"] = -5
    r = client.post("/charts/matches", json={"chart": payload})
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY


def test_rarity() -> None:
    """Teste l'estimation de rareté via l'API."""
    r = client.post("/charts/rarity", json={"chart": _chart_payload()})
    assert r.status_code == HTTP_OK
    body = r.json()
    assert body["ratio"] == 4000
    assert body["label"] == "Uncommon"
    assert body["description"] == "Approximately 1 in 4,000 charts share your pattern"
    assert body["factors"][0] == {
        "name": "Day Master Stem",
        "description": "甲 is one of 10 Day Masters (not a rarity factor)",
        "unusual": False,
    }


def test_insights() -> None:
    """Teste la synthèse correspondances + rareté."""
    r = client.post("/charts/insights", json={"chart": _chart_payload(), "top_n": 3})
    assert r.status_code == HTTP_OK
    body = r.json()
    assert len(body["matches"]) == EXPECTED_COUNT_3
    assert body["rarity"]["label"] == "Uncommon"


def test_business_metrics_exposed() -> None:
    """Teste que les métriques métier apparaissent sur /metrics."""
    client.post("/charts/rarity", json={"chart": _chart_payload()})
    r = client.get("/metrics")
    assert r.status_code == HTTP_OK
    assert 'chart_rarity_label_total{label="Uncommon"}' in r.text
    assert "http_requests_total" in r.text


def test_matches_default_top_n_follows_settings(monkeypatch) -> None:
    """Teste que le nombre par défaut provient de la configuration."""
    monkeypatch.setattr(container.settings, "MATCH_DEFAULT_TOP_N", 2)
    r = client.post("/charts/matches", json={"chart": _chart_payload()})
    assert r.status_code == HTTP_OK
    assert len(r.json()["matches"]) == 2  # noqa: PLR2004


def test_matches_top_n_capped_by_settings(monkeypatch) -> None:
    """Teste le plafonnement de top_n par MATCH_MAX_TOP_N."""
    monkeypatch.setattr(container.settings, "MATCH_MAX_TOP_N", 4)
    r = client.post("/charts/matches", json={"chart": _chart_payload(), "top_n": 10})
    assert r.status_code == HTTP_OK
    assert len(r.json()["matches"]) == 4  # noqa: PLR2004


def test_matches_top_n_above_default_cap_is_clamped() -> None:
    """Teste qu'un top_n supérieur au plafond est ramené à MATCH_MAX_TOP_N, sans 422."""
    r = client.post("/charts/matches", json={"chart": _chart_payload(), "top_n": 500})
    assert r.status_code == HTTP_OK
    expected = min(container.settings.MATCH_MAX_TOP_N, len(container.corpus_repo))
    assert len(r.json()["matches"]) == expected


def test_matches_rejects_non_finite_percentage() -> None:
    """Teste le rejet d'un pourcentage NaN dans le corps JSON."""
    body = (
        '{"chart": {"elements": {"percentages": '
        '{"Wood": NaN, "Fire": 10, "Earth": 10, "Metal": 10, "Water": 10}}}}'
    )
    r = client.post(
        "/charts/matches", content=body, headers={"Content-Type": "application/json"}
    )
    assert r.status_code == HTTP_UNPROCESSABLE_ENTITY
    assert r.json()["code"] == "VALIDATION_ERROR"


def test_insights_observes_match_latency() -> None:
    """Teste que l'appel combiné alimente l'histogramme de latence du classement."""
    before = REGISTRY.get_sample_value("chart_match_latency_seconds_count") or 0.0
    r = client.post("/charts/insights", json={"chart": _chart_payload()})
    assert r.status_code == HTTP_OK
    after = REGISTRY.get_sample_value("chart_match_latency_seconds_count")
    assert after == before + 1
