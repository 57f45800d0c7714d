"""Route tests for /api/products.

Tests cover:
    - Validation error counts and messages per route
    - Not-found status per operation (400 for reads, 404 for writes)
    - Create, list ordering, update, availability toggle and delete
"""


# --- POST /api/products -------------------------------------------------------

async def test_create_with_empty_body_returns_four_errors(client):
    response = await client.post("/api/products", json={})
    assert response.status_code == 400
    body = response.json()
    assert "errors" in body
    assert len(body["errors"]) == 4
    assert [e["msg"] for e in body["errors"]] == [
        "You must enter a valid name",
        "You must enter a valid price",
        "You must enter price",
        "You must enter a valid price",
    ]


async def test_create_without_body_returns_four_errors(client):
    response = await client.post("/api/products")
    assert response.status_code == 400
    assert len(response.json()["errors"]) == 4


async def test_create_rejects_zero_price(client):
    response = await client.post(
        "/api/products", json={"name": "Monitor Curvo", "price": 0},
    )
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert len(errors) == 1
    assert errors[0]["msg"] == "You must enter a valid price"
    assert errors[0]["path"] == "price"
    assert errors[0]["location"] == "body"
    assert errors[0]["value"] == 0


async def test_create_rejects_negative_price(client):
    response = await client.post(
        "/api/products", json={"name": "Monitor Curvo", "price": -5},
    )
    assert response.status_code == 400
    assert len(response.json()["errors"]) == 1


async def test_create_rejects_non_numeric_price(client):
    response = await client.post(
        "/api/products", json={"name": "Monitor Curvo", "price": "hola"},
    )
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert len(errors) == 2
    assert all(e["value"] == "hola" for e in errors)


async def test_create_rejects_malformed_json(client):
    response = await client.post(
        "/api/products",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["errors"][0]["msg"] == "Malformed JSON body"


async def test_create_ignores_non_json_content_type(client):
    response = await client.post(
        "/api/products",
        content=b'{"name": "Keyboard", "price": 10}',
        headers={"Content-Type": "text/plain"},
    )
    assert response.status_code == 400
    assert len(response.json()["errors"]) == 4


async def test_create_ignores_form_body(client):
    response = await client.post("/api/products", data={"name": "Keyboard", "price": "5"})
    assert response.status_code == 400
    assert len(response.json()["errors"]) == 4


async def test_create_accepts_json_suffix_content_type(client):
    response = await client.post(
        "/api/products",
        content=b'{"name": "Keyboard", "price": 10}',
        headers={"Content-Type": "application/vnd.api+json; charset=utf-8"},
    )
    assert response.status_code == 201


async def test_create_with_hex_price_fails_only_numeric_check(client):
    response = await client.post(
        "/api/products", json={"name": "Keyboard", "price": "0x10"},
    )
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert [e["msg"] for e in errors] == ["You must enter a valid price"]
    assert errors[0]["value"] == "0x10"


async def test_create_accepts_single_item_list_price(client):
    response = await client.post("/api/products", json={"name": "Keyboard", "price": [5]})
    assert response.status_code == 201
    assert response.json()["data"]["price"] == 5


async def test_create_honours_supplied_availability(client):
    response = await client.post(
        "/api/products", json={"name": "Keyboard", "price": 5, "availability": False},
    )
    assert response.status_code == 201
    assert response.json()["data"]["availability"] is False


async def test_create_ignores_non_boolean_availability(client):
    response = await client.post(
        "/api/products", json={"name": "Keyboard", "price": 5, "availability": "maybe"},
    )
    assert response.status_code == 201
    assert response.json()["data"]["availability"] is True


async def test_create_product(client):
    response = await client.post(
        "/api/products", json={"name": "Mouse - Testing", "price": 50},
    )
    assert response.status_code == 201
    body = response.json()
    assert "data" in body
    assert "error" not in body
    data = body["data"]
    assert data["id"] == 1
    assert data["name"] == "Mouse - Testing"
    assert data["price"] == 50
    assert data["availability"] is True
    assert data["createdAt"] is not None
    assert data["updatedAt"] is not None


async def test_create_accepts_numeric_string_price(client):
    response = await client.post(
        "/api/products", json={"name": "Keyboard", "price": "19.99"},
    )
    assert response.status_code == 201
    assert response.json()["data"]["price"] == 19.99


# --- GET /api/products --------------------------------------------------------

async def test_list_products_returns_json(client, product):
    response = await client.get("/api/products")
    assert response.status_code == 200
    assert "json" in response.headers["content-type"]
    body = response.json()
    assert "errors" not in body
    assert len(body["data"]) == 1


async def test_list_products_empty(client):
    response = await client.get("/api/products")
    assert response.status_code == 200
    assert response.json() == {"data": []}


async def test_list_products_sorted_by_price_descending(client):
    for name, price in [("Cable", 5), ("Monitor", 300), ("Mouse", 50)]:
        await client.post("/api/products", json={"name": name, "price": price})

    response = await client.get("/api/products")
    data = response.json()["data"]
    assert [p["price"] for p in data] == [300, 50, 5]
    for item in data:
        assert set(item) == {"id", "name", "price", "availability"}


# --- GET /api/products/{id} ---------------------------------------------------

async def test_get_nonexistent_product_is_bad_request(client):
    response = await client.get("/api/products/2000")
    assert response.status_code == 400
    assert response.json() == {"error": "Product does not exist"}


async def test_get_with_invalid_id(client):
    response = await client.get("/api/products/not-valid-url")
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert len(errors) == 1
    assert errors[0]["msg"] == "Invalid ID"
    assert errors[0]["location"] == "params"


async def test_get_product(client, product):
    response = await client.get(f"/api/products/{product['id']}")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["name"] == "Curved Monitor"
    assert "createdAt" not in data


# --- PUT /api/products/{id} ---------------------------------------------------

async def test_update_with_invalid_id(client):
    response = await client.put(
        "/api/products/not-valid-url",
        json={"name": "Curved Monitor", "availability": True, "price": 300},
    )
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert len(errors) == 1
    assert errors[0]["msg"] == "Invalid ID"


async def test_update_with_empty_body_returns_five_errors(client, product):
    response = await client.put(f"/api/products/{product['id']}", json={})
    assert response.status_code == 400
    body = response.json()
    assert len(body["errors"]) == 5
    assert body["errors"][-1]["msg"] == "Value not valid"
    assert "data" not in body


async def test_update_rejects_negative_price(client, product):
    response = await client.put(
        f"/api/products/{product['id']}",
        json={"name": "Curved Monitor", "availability": True, "price": -300},
    )
    assert response.status_code == 400
    errors = response.json()["errors"]
    assert len(errors) == 1
    assert errors[0]["msg"] == "You must enter a valid price"


async def test_update_nonexistent_product_is_not_found(client):
    response = await client.put(
        "/api/products/2000",
        json={"name": "Curved Monitor", "availability": True, "price": 300},
    )
    assert response.status_code == 404
    body = response.json()
    assert body["error"] == "Product does not exist"
    assert "data" not in body


async def test_update_product(client, product):
    response = await client.put(
        f"/api/products/{product['id']}",
        json={"name": "Flat Monitor", "availability": False, "price": 250.5},
    )
    assert response.status_code == 200
    body = response.json()
    assert "errors" not in body
    assert body["data"]["id"] == product["id"]
    assert body["data"]["name"] == "Flat Monitor"
    assert body["data"]["price"] == 250.5
    assert body["data"]["availability"] is False


async def test_update_accepts_string_boolean(client, product):
    response = await client.put(
        f"/api/products/{product['id']}",
        json={"name": "Flat Monitor", "availability": "false", "price": 250},
    )
    assert response.status_code == 200
    assert response.json()["data"]["availability"] is False


# --- PATCH /api/products/{id} -------------------------------------------------

async def test_toggle_nonexistent_product_is_not_found(client):
    response = await client.patch("/api/products/2000")
    assert response.status_code == 404
    assert response.json()["error"] == "Product does not exist"


async def test_toggle_with_invalid_id(client):
    response = await client.patch("/api/products/abc")
    assert response.status_code == 400
    assert response.json()["errors"][0]["msg"] == "Invalid ID"


async def test_toggle_flips_availability(client, product):
    response = await client.patch(f"/api/products/{product['id']}")
    assert response.status_code == 200
    body = response.json()
    assert "error" not in body
    assert body["data"]["availability"] is False
    assert body["data"]["name"] == product["name"]
    assert body["data"]["price"] == product["price"]


async def test_toggle_twice_restores_availability(client, product):
    await client.patch(f"/api/products/{product['id']}")
    response = await client.patch(f"/api/products/{product['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["availability"] is True


# --- DELETE /api/products/{id} ------------------------------------------------

async def test_delete_with_invalid_id(client):
    response = await client.delete("/api/products/not-valid")
    assert response.status_code == 400
    assert response.json()["errors"][0]["msg"] == "Invalid ID"


async def test_delete_nonexistent_product_is_not_found(client):
    response = await client.delete("/api/products/2000")
    assert response.status_code == 404
    assert response.json()["error"] == "Product does not exist"


async def test_delete_product(client, product):
    response = await client.delete(f"/api/products/{product['id']}")
    assert response.status_code == 200
    assert response.json() == {"data": "The product has been eliminated"}

    response = await client.get(f"/api/products/{product['id']}")
    assert response.status_code == 400
    assert response.json()["error"] == "Product does not exist"
