def test_crud_roundtrip(client):
    r = client.post("/employees", json={"name": "  Emily Davis  "})
    assert r.status_code == 201
    emp = r.json()
    assert emp["name"] == "Emily Davis"
    assert {"id", "name", "createdAt", "updatedAt"} <= emp.keys()

    assert client.get(f"/employees/{emp['id']}").json()["name"] == "Emily Davis"

    r = client.put(f"/employees/{emp['id']}", json={"name": "Emily Stone"})
    assert r.status_code == 200
    assert r.json()["name"] == "Emily Stone"

    assert client.delete(f"/employees/{emp['id']}").status_code == 204
    assert client.get(f"/employees/{emp['id']}").status_code == 404


def test_list_sorted_by_name(client):
    for name in ("Sarah Johnson", "David Wilson", "John Smith"):
        client.post("/employees", json={"name": name})
    names = [e["name"] for e in client.get("/employees").json()]
    assert names == ["David Wilson", "John Smith", "Sarah Johnson"]


def test_blank_name_rejected(client):
    r = client.post("/employees", json={"name": "   "})
    assert r.status_code == 422
    assert r.json()["errors"]


def test_missing_name_rejected(client):
    r = client.post("/employees", json={})
    assert r.status_code == 422
    assert r.json()["detail"] == "name is required"


def test_missing_employee(client):
    assert client.get("/employees/999").status_code == 404
    assert client.put("/employees/999", json={"name": "x"}).status_code == 404
    assert client.delete("/employees/999").status_code == 404
