
def test_categories(client):
    r = client.get("/api/v0/catalog/categories")
    assert r.status_code == 200, r.text
    assert r.json()["items"] == ["Deposition", "Etching", "Lithography", "Cleaning"]


def test_steps_of_category_use_camel_case(client):
    r = client.get("/api/v0/catalog/categories/Lithography/steps")
    assert r.status_code == 200, r.text
    items = r.json()
    assert [i["id"] for i in items] == ["photoresist_coat", "euv_exposure"]
    assert items[1]["powerWatts"] == 5000
    assert items[1]["envImpact"] == "very_high"


def test_unknown_category_is_empty_list(client):
    r = client.get("/api/v0/catalog/categories/Nope/steps")
    assert r.status_code == 200
    assert r.json() == []


def test_get_unknown_template_is_404(client):
    r = client.get("/api/v0/catalog/steps/nope")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"
