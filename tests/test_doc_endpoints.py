from __future__ import annotations


def test_status_is_plain_ok(client):
    r = client.get("/status")
    assert r.status_code == 200
    assert r.text == "OK"
    assert r.headers["content-type"].startswith("text/plain")


def test_single_document_lifecycle(client):
    r = client.put("/doc/a", content=b'{"x":1}')
    assert r.status_code == 204
    assert r.content == b""

    r = client.get("/doc/a")
    assert r.status_code == 200
    assert r.json() == {"x": 1}

    r = client.get("/keys")
    assert r.status_code == 200
    assert r.json() == ["a"]

    r = client.delete("/doc/a")
    assert r.status_code == 204
    assert r.content == b""

    r = client.get("/doc/a")
    assert r.status_code == 200
    assert r.text == "null"


def test_batch_put_inserts_every_pair(client):
    r = client.put("/doc", content=b'{"a":1,"b":2}')
    assert r.status_code == 204

    r = client.get("/doc")
    assert r.status_code == 200
    assert r.json() == {"a": 1, "b": 2}
    assert client.get("/count").json() == 2


def test_malformed_body_is_rejected_without_mutation(client, store):
    store.set("a", {"keep": True})

    r = client.put("/doc/a", content=b"not-json")
    assert r.status_code == 422
    assert "detail" in r.json()

    assert store.get("a") == ({"keep": True}, True)
    assert client.get("/doc/a").json() == {"keep": True}


def test_empty_body_is_rejected(client, store):
    r = client.put("/doc/a", content=b"")
    assert r.status_code == 422
    assert store.count() == 0


def test_batch_requires_json_object(client, store):
    for body in (b"not-json", b"[1,2]", b"5", b"null"):
        r = client.put("/doc", content=body)
        assert r.status_code == 422, body
    assert store.count() == 0


def test_batch_with_empty_key_changes_nothing(client, store):
    r = client.put("/doc", content=b'{"a":1,"":2}')
    assert r.status_code == 422
    assert store.count() == 0


def test_any_json_value_can_be_stored(client):
    for key, body, expected in [
        ("n", b"null", None),
        ("b", b"false", False),
        ("i", b"7", 7),
        ("s", b'"str"', "str"),
        ("l", b"[1,[2],{}]", [1, [2], {}]),
    ]:
        assert client.put(f"/doc/{key}", content=body).status_code == 204
        assert client.get(f"/doc/{key}").json() == expected

    assert client.get("/count").json() == 5


def test_put_overwrites(client):
    client.put("/doc/k", json={"v": 1})
    client.put("/doc/k", json={"v": 2})
    assert client.get("/doc/k").json() == {"v": 2}
    assert client.get("/count").json() == 1


def test_delete_missing_key_succeeds(client):
    r = client.delete("/doc/never-set")
    assert r.status_code == 204
    assert client.get("/count").json() == 0


def test_empty_collections(client):
    assert client.get("/count").json() == 0
    assert client.get("/keys").json() == []
    assert client.get("/doc").json() == {}


def test_percent_encoded_keys_roundtrip(client, store):
    r = client.put("/doc/hello%20world", json=[1])
    assert r.status_code == 204
    assert store.get("hello world") == ([1], True)
    assert client.get("/doc/hello%20world").json() == [1]


def test_handlers_share_the_injected_store(client, store):
    store.set("direct", {"from": "store"})
    assert client.get("/doc").json() == {"direct": {"from": "store"}}

    client.put("/doc/http", json="from-http")
    assert store.get("http") == ("from-http", True)


def test_non_finite_numbers_are_rejected_and_reads_keep_working(client, store):
    store.set("a", {"keep": True})
    store.set("good", {"ok": 1})

    for body in (b"NaN", b"Infinity", b"-Infinity", b'{"x": NaN}', b"1e400"):
        r = client.put("/doc/a", content=body)
        assert r.status_code == 422, body
    r = client.put("/doc", content=b'{"bad": NaN, "other": 1}')
    assert r.status_code == 422

    assert store.items() == {"a": {"keep": True}, "good": {"ok": 1}}
    assert client.get("/doc/a").json() == {"keep": True}
    assert client.get("/doc").json() == {"a": {"keep": True}, "good": {"ok": 1}}


def test_every_read_route_after_mixed_writes(client):
    assert client.put("/doc", json={"a": 1, "b": [1.5, None], "c": {"d": "e"}}).status_code == 204
    assert client.put("/doc/b", json={"replaced": True}).status_code == 204
    assert client.put("/doc/z", content=b"1e308").status_code == 204
    assert client.delete("/doc/c").status_code == 204

    expected = {"a": 1, "b": {"replaced": True}, "z": 1e308}
    assert client.get("/count").json() == 3
    assert sorted(client.get("/keys").json()) == ["a", "b", "z"]
    assert client.get("/doc").json() == expected
    for key, doc in expected.items():
        assert client.get(f"/doc/{key}").json() == doc
    assert client.get("/doc/c").json() is None


def test_put_handlers_write_through_threadpool(client, monkeypatch):
    import endpoints.doc_endpoints as doc_endpoints

    calls = []
    real = doc_endpoints.run_in_threadpool

    async def recording(func, *args, **kwargs):
        calls.append(func.__name__)
        return await real(func, *args, **kwargs)

    monkeypatch.setattr(doc_endpoints, "run_in_threadpool", recording)

    assert client.put("/doc/a", json={"x": 1}).status_code == 204
    assert client.put("/doc", json={"b": 2}).status_code == 204

    assert calls == ["set", "set_many"]
    assert client.get("/doc").json() == {"a": {"x": 1}, "b": 2}
