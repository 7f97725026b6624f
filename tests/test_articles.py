"""Tests for Article API endpoints."""


def test_list_articles(client):
    response = client.get("/api/articulos")

    assert response.status_code == 200
    assert response.headers["cache-control"] == "no-store, no-cache, must-revalidate"
    articles = response.json()["articulos"]
    assert [a["idarticulo"] for a in articles] == ["A", "B", "C"]
    assert articles[0]["codbarra"] == "7791"
    assert articles[0]["precio"] == 100.0
    assert articles[0]["stock"] == 5
    assert articles[0]["categoria"] == "Almacen"


def test_create_article(client, backend):
    response = client.post(
        "/api/articulos",
        json={"idarticulo": "D", "nombre": "Aceite", "codbarra": "7793", "precio": 300, "stock": 4}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["articulo"]["idarticulo"] == "D"
    assert backend.stock_of("D") == 4
    assert backend.article("D")["codbarra"] == "7793"


def test_created_article_exists_and_is_listed(client):
    """A new id is free before creation, taken after it, and listed with the posted values."""
    posted = {
        "codbarra": "7793",
        "idarticulo": "D",
        "nombre": "Aceite",
        "descripcion": "Girasol 1l",
        "precio": 300.5,
        "stock": 4,
    }
    assert client.get("/api/articulos/D").json() == {"exists": False}

    assert client.post("/api/articulos", json=posted).status_code == 200

    assert client.get("/api/articulos/D").json() == {"exists": True}
    listed = [a for a in client.get("/api/articulos").json()["articulos"] if a["idarticulo"] == "D"]
    assert len(listed) == 1
    for field, value in posted.items():
        assert listed[0][field] == value


def test_create_article_accepts_id_alias_and_numeric_barcode(client, backend):
    response = client.post("/api/articulos", json={"id": "E", "nombre": "Sal", "codbarra": 7794})

    assert response.status_code == 200
    assert backend.article("E")["codbarra"] == "7794"
    assert backend.stock_of("E") == 0


def test_create_article_missing_name(client):
    response = client.post("/api/articulos", json={"idarticulo": "D"})

    assert response.status_code == 400
    assert "error" in response.json()


def test_create_article_duplicate_id(client):
    response = client.post("/api/articulos", json={"idarticulo": "a", "nombre": "Otro"})

    assert response.status_code == 400


def test_create_article_duplicate_barcode(client):
    response = client.post(
        "/api/articulos",
        json={"idarticulo": "D", "nombre": "Otro", "codbarra": "7791"}
    )

    assert response.status_code == 400
    assert "barras" in response.json()["error"]


def test_create_article_negative_price(client):
    response = client.post(
        "/api/articulos",
        json={"idarticulo": "D", "nombre": "Otro", "precio": -1}
    )

    assert response.status_code == 400


def test_article_exists(client):
    assert client.get("/api/articulos/A").json() == {"exists": True}
    assert client.get("/api/articulos/Z").json() == {"exists": False}


def test_article_exists_answers_false_on_backend_error(client, backend):
    backend.fail_on("get_values", "articulos")

    response = client.get("/api/articulos/A")

    assert response.status_code == 200
    assert response.json() == {"exists": False}


def test_update_article_merges_fields(client, backend):
    response = client.put("/api/articulos/A", json={"nombre": "Arroz integral", "precio": 120})

    assert response.status_code == 200
    assert response.json() == {"success": True}
    article = backend.article("A")
    assert article["nombre"] == "Arroz integral"
    assert article["precio"] == "120.0"
    assert article["stock"] == "5"
    assert article["descripcion"] == "Largo fino"


def test_update_article_requires_name(client):
    response = client.put("/api/articulos/A", json={"precio": 120})

    assert response.status_code == 400


def test_update_article_renames_id(client, backend):
    response = client.put("/api/articulos/A", json={"idarticulo": "A2", "nombre": "Arroz"})

    assert response.status_code == 200
    assert backend.article("A") is None
    assert backend.stock_of("A2") == 5


def test_update_article_new_id_taken(client):
    response = client.put("/api/articulos/A", json={"idarticulo": "B", "nombre": "Arroz"})

    assert response.status_code == 400


def test_update_article_keeps_own_barcode(client):
    response = client.put("/api/articulos/A", json={"nombre": "Arroz", "codbarra": "7791"})

    assert response.status_code == 200


def test_update_article_barcode_of_another(client):
    response = client.put("/api/articulos/A", json={"nombre": "Arroz", "codbarra": "7792"})

    assert response.status_code == 400


def test_update_unknown_article(client):
    response = client.put("/api/articulos/Z", json={"nombre": "Nada"})

    assert response.status_code == 404


def test_delete_article(client, backend):
    response = client.delete("/api/articulos/B")

    assert response.status_code == 200
    assert backend.article("B") is None
    assert client.get("/api/articulos/B").json() == {"exists": False}


def test_delete_unknown_article(client):
    assert client.delete("/api/articulos/Z").status_code == 404


def test_find_by_barcode(client):
    response = client.get("/api/articulos/buscar", params={"codbarra": "7792"})

    assert response.status_code == 200
    article = response.json()["articulo"]
    assert article["idarticulo"] == "B"
    assert article["id"] == "B"


def test_find_by_id(client):
    article = client.get("/api/articulos/buscar", params={"id": "c"}).json()["articulo"]

    assert article["nombre"] == "Yerba"


def test_find_no_match(client):
    response = client.get("/api/articulos/buscar", params={"codbarra": "0000"})

    assert response.status_code == 200
    assert response.json()["articulo"] is None


def test_find_requires_a_parameter(client):
    assert client.get("/api/articulos/buscar").status_code == 400


def test_check_barcode(client):
    assert client.get("/api/articulos/check-codbarra", params={"codbarra": "7791"}).json() == {"exists": True}
    assert client.get(
        "/api/articulos/check-codbarra", params={"codbarra": "7791", "excluirId": "A"}
    ).json() == {"exists": False}
    assert client.get("/api/articulos/check-codbarra", params={"codbarra": ""}).json() == {"exists": False}


def test_missing_key_column_is_server_error(client, backend):
    backend.tabs["articulos"] = [["nombre"], ["Arroz"]]

    response = client.put("/api/articulos/A", json={"nombre": "Arroz"})

    assert response.status_code == 500
    assert "idarticulo" in response.json()["error"]
