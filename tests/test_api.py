from fastapi.testclient import TestClient

from hashtree.hashing import sha256_hex
from hashtree.tree import HashTree


def _client(height: int = 2, hash_function=sha256_hex):
    from hashtree.main import create_app

    return TestClient(create_app(HashTree.from_height(hash_function, height)))


def test_healthz():
    r = _client().get("/healthz")
    assert r.status_code == 200
    assert r.json()["ok"] is True


def test_insert_recompute_root_flow():
    client = _client(height=1, hash_function=lambda x: f"H({x})")
    r1 = client.post("/tree/leaves", json={"value": "1"})
    assert r1.status_code == 200, r1.text
    assert r1.json() == {"position": 0, "length": 1, "hash": "H(1)"}
    client.post("/tree/leaves", json={"value": "2"})

    stale = client.get("/tree/root")
    assert stale.status_code == 409
    assert client.get("/tree").json()["root"] is None

    r = client.post("/tree/recompute")
    assert r.status_code == 200
    assert r.json() == {"updated": 1, "root": "H(H(1) | H(2))"}
    assert client.get("/tree/root").json() == {"root": "H(H(1) | H(2))"}
    info = client.get("/tree").json()
    assert info == {"height": 1, "capacity": 2, "length": 2, "root": "H(H(1) | H(2))"}


def test_insert_into_full_tree_conflicts():
    client = _client(height=1)
    for v in ("a", "b"):
        assert client.post("/tree/leaves", json={"value": v}).status_code == 200
    r = client.post("/tree/leaves", json={"value": "c"})
    assert r.status_code == 409


def test_insert_rejects_bad_payloads():
    client = _client()
    assert client.post("/tree/leaves", json={"value": 5}).status_code == 400
    assert client.post("/tree/leaves", json={}).status_code == 400
    r = client.post(
        "/tree/leaves",
        content=b"not-json",
        headers={"content-type": "application/json"},
    )
    assert r.status_code == 400
    assert client.get("/tree").json()["length"] == 0


def test_leaf_value_and_bounds():
    client = _client(height=2)
    client.post("/tree/leaves", json={"value": "x"})
    r = client.get("/tree/leaves/0")
    assert r.json() == {"position": 0, "hash": sha256_hex("x")}
    assert client.get("/tree/leaves/3").json()["hash"] == sha256_hex("empty node")
    assert client.get("/tree/leaves/4").status_code == 404
    assert client.get("/tree/leaves/-1").status_code == 404


def test_opening():
    client = _client(height=2)
    for v in ("Hello", "Merkle", "Tree"):
        client.post("/tree/leaves", json={"value": v})
    assert client.get("/tree/leaves/2/opening").status_code == 409
    client.post("/tree/recompute")
    r = client.get("/tree/leaves/2/opening")
    assert r.status_code == 200
    body = r.json()
    assert body["partner_hash"] == sha256_hex("empty node")
    assert body["root_child_hash"] == sha256_hex(
        f"{sha256_hex('Tree')} | {sha256_hex('empty node')}"
    )
    assert client.get("/tree/leaves/9/opening").status_code == 404
