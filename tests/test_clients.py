"""Tests for Client API endpoints."""
from datetime import date


def test_list_clients(client):
    response = client.get("/api/clientes")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store, no-cache, must-revalidate"
    clients = response.json()["clientes"]
    assert clients[0]["idcliente"] == "1"
    assert clients[0]["fechaCreacion"] == "2024-01-10"


def test_create_client(client, backend):
    response = client.post("/api/clientes", json={"nombre": "Bruno", "telefono": "333"})

    assert response.status_code == 200
    created = response.json()["cliente"]
    assert created["idcliente"] == "2"
    assert created["fechaCreacion"] == date.today().isoformat()
    assert backend.records("clientes")[1]["telefono"] == "333"


def test_create_client_requires_name(client):
    assert client.post("/api/clientes", json={"telefono": "333"}).status_code == 400


def test_client_exists(client):
    assert client.get("/api/clientes/1").json() == {"exists": True}
    assert client.get("/api/clientes/2").json() == {"exists": False}


def test_update_client_keeps_creation_date(client, backend):
    response = client.put("/api/clientes/1", json={"nombre": "Ana María", "email": "am@example.com"})

    assert response.status_code == 200
    record = backend.records("clientes")[0]
    assert record["nombre"] == "Ana María"
    assert record["email"] == "am@example.com"
    assert record["telefono"] == "111"
    assert record["fechacreacion"] == "2024-01-10"


def test_update_client_requires_name(client):
    assert client.put("/api/clientes/1", json={"email": "x@example.com"}).status_code == 400


def test_update_unknown_client(client):
    assert client.put("/api/clientes/9", json={"nombre": "X"}).status_code == 404


def test_delete_client(client, backend):
    response = client.delete("/api/clientes/1")

    assert response.status_code == 200
    assert backend.records("clientes") == []


def test_delete_unknown_client(client):
    assert client.delete("/api/clientes/9").status_code == 404
