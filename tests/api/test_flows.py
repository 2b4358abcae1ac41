import json


def create(client, **body):
    r = client.post("/api/v0/flows", json=body or None)
    assert r.status_code == 201, r.text
    return r.json()


def add(client, flow_id, template_id):
    r = client.post(f"/api/v0/flows/{flow_id}/steps", json={"templateId": template_id})
    assert r.status_code == 201, r.text
    return r.json()


def test_healthz_and_request_id(client):
    r = client.get("/api/v0/healthz")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}
    assert r.headers["X-Request-Id"].startswith("req_")


def test_create_flow_default_name(client):
    body = create(client)
    assert body["id"].startswith("flow_")
    assert body["name"] == "Process Flow 1"
    assert body["steps"] == []
    assert body["createdAt"] == body["modifiedAt"]


def test_create_flow_with_name(client):
    assert create(client, name="Backend metal")["name"] == "Backend metal"


def test_list_flows_paginates(client):
    ids = [create(client)["id"] for _ in range(3)]
    r = client.get("/api/v0/flows", params={"limit": 2, "offset": 1})
    assert r.status_code == 200, r.text
    page = r.json()
    assert page["total"] == 3
    assert page["limit"] == 2 and page["offset"] == 1
    assert [f["id"] for f in page["items"]] == ids[1:]


def test_get_unknown_flow_is_404(client):
    r = client.get("/api/v0/flows/flow_missing")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


def test_rename_flow(client):
    flow = create(client)
    r = client.put(f"/api/v0/flows/{flow['id']}", json={"name": "Renamed"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["name"] == "Renamed"
    assert body["modifiedAt"] > flow["modifiedAt"]
    assert client.get(f"/api/v0/flows/{flow['id']}").json()["name"] == "Renamed"


def test_append_duplicate_remove(client):
    flow_id = create(client)["id"]
    add(client, flow_id, "cvd_oxide")
    add(client, flow_id, "rca_clean")

    r = client.post(f"/api/v0/flows/{flow_id}/steps/0:duplicate")
    assert r.status_code == 201, r.text
    steps = r.json()["steps"]
    assert [s["id"] for s in steps] == ["cvd_oxide", "rca_clean", "cvd_oxide"]
    assert steps[2]["instanceId"] != steps[0]["instanceId"]

    r = client.delete(f"/api/v0/flows/{flow_id}/steps/1")
    assert r.status_code == 200, r.text
    steps = r.json()["steps"]
    assert [s["id"] for s in steps] == ["cvd_oxide", "cvd_oxide"]
    assert [s["position"] for s in steps] == [0, 1]


def test_step_index_out_of_range_is_422(client):
    flow = create(client)
    r = client.delete(f"/api/v0/flows/{flow['id']}/steps/0")
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "STEP_INDEX"
    # nothing was written
    assert client.get(f"/api/v0/flows/{flow['id']}").json() == flow


def test_append_unknown_template_is_404(client):
    flow_id = create(client)["id"]
    r = client.post(f"/api/v0/flows/{flow_id}/steps", json={"templateId": "nope"})
    assert r.status_code == 404


def test_impact(client):
    flow_id = create(client)["id"]
    r = client.get(f"/api/v0/flows/{flow_id}/impact")
    assert r.json() == {"totalEnergyWh": 0.0, "totalTimeMinutes": 0, "chemicals": [], "riskLevel": "low"}

    for template_id in ("ald_hfO2", "wet_etch_metal", "euv_exposure", "rca_clean"):
        add(client, flow_id, template_id)
    body = client.get(f"/api/v0/flows/{flow_id}/impact").json()
    # 1500*180/60 + 0 + 5000*180/60 + 100*20/60
    assert body["totalEnergyWh"] == 19533.3
    assert body["totalTimeMinutes"] == 410
    assert body["chemicals"] == ["TDMAH", "H2O", "H2SO4", "H2O2", "NH4OH", "HCl"]
    assert body["riskLevel"] == "very_high"


def test_export_then_import(client):
    flow_id = create(client, name="Gate stack")["id"]
    add(client, flow_id, "cvd_oxide")

    r = client.get(f"/api/v0/flows/{flow_id}/export")
    assert r.status_code == 200, r.text
    assert "Gate_stack.json" in r.headers["content-disposition"]
    document = r.content

    r = client.post("/api/v0/flows:import", files={"file": ("Gate_stack.json", document, "application/json")})
    assert r.status_code == 201, r.text
    imported = r.json()
    original = json.loads(document)
    assert imported["id"] != original["id"]
    assert imported["steps"] == original["steps"]
    assert imported["createdAt"] == original["createdAt"]

    listed = client.get("/api/v0/flows").json()
    assert [f["id"] for f in listed["items"]] == [flow_id, imported["id"]]


def test_import_malformed_leaves_store_unchanged(client):
    create(client)
    r = client.post("/api/v0/flows:import", files={"file": ("bad.json", b"{nope", "application/json")})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "IMPORT_PARSE_FAILURE"
    assert client.get("/api/v0/flows").json()["total"] == 1


def test_import_wrong_shape(client):
    r = client.post("/api/v0/flows:import", files={"file": ("x.json", b'{"schemaVersion": 1}', "application/json")})
    assert r.status_code == 400
    error = r.json()["error"]
    assert error["code"] == "IMPORT_INVALID_SHAPE"
    assert {d["path"] for d in error["details"]} == {"name", "createdAt"}


def test_import_over_size_limit_is_rejected(client, monkeypatch):
    from processflow.config import settings

    flow_id = create(client)["id"]
    add(client, flow_id, "cvd_oxide")
    document = client.get(f"/api/v0/flows/{flow_id}/export").content
    monkeypatch.setattr(settings, "max_import_bytes", len(document) - 1)

    r = client.post("/api/v0/flows:import", files={"file": ("big.json", document, "application/json")})

    assert r.status_code == 400
    error = r.json()["error"]
    assert error["code"] == "IMPORT_PARSE_FAILURE"
    assert "exceeds" in error["message"]
    assert client.get("/api/v0/flows").json()["total"] == 1


def test_import_exactly_at_size_limit_is_accepted(client, monkeypatch):
    from processflow.config import settings

    flow_id = create(client)["id"]
    document = client.get(f"/api/v0/flows/{flow_id}/export").content
    monkeypatch.setattr(settings, "max_import_bytes", len(document))

    r = client.post("/api/v0/flows:import", files={"file": ("ok.json", document, "application/json")})
    assert r.status_code == 201, r.text
