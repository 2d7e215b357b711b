"""Tests for the Cosmic REST client and content repository (httpx.MockTransport)."""

import json
from collections.abc import Callable

import httpx
import pytest

from wanderbites.application.dtos.search import SearchFilterSet
from wanderbites.domain.exceptions import TransportFailure, ValidationException
from wanderbites.infrastructure.cosmic import CosmicContentRepository, CosmicRESTClient
from wanderbites.infrastructure.cosmic.repositories.content_repo_cosmic import (
    build_text_clause,
    sort_newest_first,
)
from wanderbites.shared.enums import ContentKind

BASE_URL = "https://cosmic.test/v3"


def _post(id: str, title: str, published: str | None = None, **metadata) -> dict:
    if published is not None:
        metadata["publication_date"] = published
    return {
        "id": id,
        "slug": title.lower().replace(" ", "-"),
        "title": title,
        "type": "blog-posts",
        "metadata": metadata,
    }


class CosmicStub:
    """MockTransport handler that records requests and answers from a callable."""

    def __init__(self, respond: Callable[[httpx.Request, dict], httpx.Response]) -> None:
        self.respond = respond
        self.requests: list[httpx.Request] = []

    def queries(self) -> list[dict]:
        return [json.loads(r.url.params["query"]) for r in self.requests]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request, json.loads(request.url.params["query"]))


def _objects(objects: list[dict], total: int | None = None) -> httpx.Response:
    return httpx.Response(200, json={"objects": objects, "total": total if total is not None else len(objects)})


def _not_found() -> httpx.Response:
    return httpx.Response(404, json={"message": "No objects found"})


@pytest.fixture
async def make_repo():
    clients: list[httpx.AsyncClient] = []

    def factory(stub: CosmicStub) -> CosmicContentRepository:
        http = httpx.AsyncClient(transport=httpx.MockTransport(stub))
        clients.append(http)
        client = CosmicRESTClient("wanderbites", "secret-key", base_url=BASE_URL, http_client=http)
        return CosmicContentRepository(client)

    yield factory
    for http in clients:
        await http.aclose()


async def test_list_all_requests_depth_and_sorts_newest_first(make_repo) -> None:
    stub = CosmicStub(
        lambda req, q: _objects(
            [
                _post("p1", "Old", "2023-01-01"),
                _post("p2", "Undated"),
                _post("p3", "New", "2024-06-01"),
            ]
        )
    )
    records = await make_repo(stub).list_all(ContentKind.BLOG_POSTS)

    assert [r.id for r in records] == ["p3", "p1", "p2"]
    request = stub.requests[0]
    assert request.url.path == "/v3/buckets/wanderbites/objects"
    assert request.url.params["depth"] == "1"
    assert request.url.params["read_key"] == "secret-key"
    assert stub.queries() == [{"type": "blog-posts"}]


async def test_list_all_pages_until_total(make_repo) -> None:
    first_page = [_post(f"p{i}", f"Post {i}") for i in range(100)]
    second_page = [_post("p100", "Post 100")]

    def respond(req: httpx.Request, q: dict) -> httpx.Response:
        skip = int(req.url.params.get("skip", 0))
        return _objects(first_page if skip == 0 else second_page, total=101)

    stub = CosmicStub(respond)
    records = await make_repo(stub).list_all(ContentKind.BLOG_POSTS)

    assert len(records) == 101
    assert [r.url.params.get("skip") for r in stub.requests] == [None, "100"]


async def test_not_found_means_empty_or_none(make_repo) -> None:
    repo = make_repo(CosmicStub(lambda req, q: _not_found()))
    assert await repo.list_all(ContentKind.AUTHORS) == []
    assert await repo.get_by_slug(ContentKind.BLOG_POSTS, "missing") is None


async def test_get_by_slug_queries_type_and_slug(make_repo) -> None:
    stub = CosmicStub(lambda req, q: _objects([_post("p1", "Tokyo Ramen Crawl")]))
    record = await make_repo(stub).get_by_slug(ContentKind.BLOG_POSTS, "tokyo-ramen-crawl")
    assert record.id == "p1"
    assert stub.queries() == [{"type": "blog-posts", "slug": "tokyo-ramen-crawl"}]
    assert stub.requests[0].url.params["limit"] == "1"


async def test_list_by_relation_queries_the_referencing_metafield(make_repo) -> None:
    stub = CosmicStub(lambda req, q: _objects([]))
    repo = make_repo(stub)
    await repo.list_by_relation(ContentKind.AUTHORS, "a1")
    await repo.list_by_relation(ContentKind.CATEGORIES, "c1")
    assert stub.queries() == [
        {"type": "blog-posts", "metadata.author": "a1"},
        {"type": "blog-posts", "metadata.categories": "c1"},
    ]


async def test_list_by_relation_rejects_posts_kind(make_repo) -> None:
    repo = make_repo(CosmicStub(lambda req, q: _objects([])))
    with pytest.raises(ValidationException):
        await repo.list_by_relation(ContentKind.BLOG_POSTS, "p1")


async def test_error_status_raises_transport_failure(make_repo) -> None:
    repo = make_repo(CosmicStub(lambda req, q: httpx.Response(500, text="oops")))
    with pytest.raises(TransportFailure) as exc_info:
        await repo.list_all(ContentKind.BLOG_POSTS)
    assert exc_info.value.status_code == 500


async def test_connection_error_raises_transport_failure(make_repo) -> None:
    def respond(req: httpx.Request, q: dict) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=req)

    with pytest.raises(TransportFailure):
        await make_repo(CosmicStub(respond)).get_by_slug(ContentKind.AUTHORS, "maya")


async def test_undecodable_body_raises_transport_failure(make_repo) -> None:
    repo = make_repo(CosmicStub(lambda req, q: httpx.Response(200, text="<html>")))
    with pytest.raises(TransportFailure):
        await repo.list_all(ContentKind.CATEGORIES)


async def test_search_pushes_text_and_post_filters_the_rest(make_repo) -> None:
    objects = [
        _post("p1", "Tokyo Ramen Crawl", "2024-03-05", region={"key": "asia"}, rating={"key": "5"}),
        _post("p2", "Ramen in Paris", "2024-02-01", region={"key": "europe"}, rating={"key": "4"}),
    ]
    stub = CosmicStub(lambda req, q: _objects(objects))
    page = await make_repo(stub).search(SearchFilterSet(text="ramen", region="asia"))

    assert [r.id for r in page.records] == ["p1"]
    assert page.total_count == 1
    query = stub.queries()[0]
    assert query["type"] == "blog-posts"
    assert query["$or"] == build_text_clause("ramen")
    assert "region" not in json.dumps(query)


async def test_search_rechecks_text_locally(make_repo) -> None:
    stub = CosmicStub(lambda req, q: _objects([_post("p1", "Paris Bakery Guide")]))
    page = await make_repo(stub).search(SearchFilterSet(text="ramen"))
    assert page.records == []


async def test_search_resolves_category_slug_to_id(make_repo) -> None:
    def respond(req: httpx.Request, q: dict) -> httpx.Response:
        if q["type"] == "categories":
            return _objects([{"id": "c1", "slug": "street-food", "title": "Street Food", "type": "categories"}])
        return _objects([_post("p1", "Tokyo Ramen Crawl")])

    stub = CosmicStub(respond)
    page = await make_repo(stub).search(SearchFilterSet(category="street-food"))

    assert [r.id for r in page.records] == ["p1"]
    assert stub.queries() == [
        {"type": "categories", "slug": "street-food"},
        {"type": "blog-posts", "metadata.categories": "c1"},
    ]


async def test_search_with_unknown_category_skips_post_query(make_repo) -> None:
    stub = CosmicStub(lambda req, q: _not_found())
    page = await make_repo(stub).search(SearchFilterSet(category="nope", text="ramen"))
    assert page.records == []
    assert len(stub.requests) == 1


def test_text_clause_escapes_regex_metacharacters() -> None:
    clause = build_text_clause("c++")
    assert clause[0] == {"title": {"$regex": r"c\+\+", "$options": "i"}}
    assert [next(iter(c)) for c in clause] == [
        "title",
        "metadata.excerpt",
        "metadata.city",
        "metadata.country",
    ]


def test_sort_keeps_undated_records_in_store_order() -> None:
    from wanderbites.domain.entities.content import ContentRecord

    records = [ContentRecord.from_cosmic(_post(i, i)) for i in ("a", "b", "c")]
    assert sort_newest_first(records) == records


async def test_client_closes_only_its_own_http_client() -> None:
    http = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: _objects([])))
    client = CosmicRESTClient("bucket", "key", http_client=http)
    await client.aclose()
    assert not http.is_closed
    await http.aclose()

    owned = CosmicRESTClient("bucket", "key")
    await owned.aclose()
    assert owned.http.is_closed


def test_client_requires_bucket_slug() -> None:
    with pytest.raises(ValueError):
        CosmicRESTClient("", "key")
