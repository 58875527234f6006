# This file tests article endpoints for pet type, category, and keyword filtering.

from __future__ import annotations

from pet_catalog.query.filter_spec import KeywordClause
from tests.api.support import ARTICLE_ID, FakeQueryExecutor, api_test_client


def test_list_articles_with_keyword() -> None:
    executor = FakeQueryExecutor()
    with api_test_client(executor=executor) as client:
        response = client.get("/api/v1/articles?petType=dog&category=nutrition&keyword=Puppy")

    assert response.status_code == 200
    assert response.json()["message"] == "Articles retrieved successfully."
    spec = executor.last_spec
    assert spec.predicate_map() == {"petType": "dog", "category": "nutrition"}
    assert spec.keyword == KeywordClause(text="Puppy", fields=("title", "summary"))


def test_unknown_pet_type_is_invalid_enum() -> None:
    with api_test_client() as client:
        response = client.get("/api/v1/articles?petType=bird")

    assert response.status_code == 400
    payload = response.json()
    assert payload["statusCode"] == 400
    assert [(e["field"], e["reason"]) for e in payload["errors"]] == [("petType", "invalid_enum")]


def test_missing_pet_type() -> None:
    with api_test_client() as client:
        response = client.get("/api/v1/articles?keyword=food")

    assert response.status_code == 400
    assert response.json()["errors"][0]["reason"] == "missing"


def test_get_article_by_id() -> None:
    with api_test_client() as client:
        response = client.get(f"/api/v1/articles/{ARTICLE_ID}")

    assert response.status_code == 200
    assert response.json()["data"]["petType"] == "dog"
