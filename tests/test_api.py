import httpx
import pytest
from conftest import FakeCatalog, ScriptedCompletion, make_item
from fastapi.testclient import TestClient

from woocopy.main import app
from woocopy.services import get_workspace
from woocopy.services.errors import CatalogError
from woocopy.services.generator import DescriptionGenerator
from woocopy.services.run_controller import PROFILE_REQUIRED, SELECTION_REQUIRED
from woocopy.services.store import JsonStore
from woocopy.services.woocommerce import WooCommerceClient
from woocopy.services.workspace import Workspace

PROFILE = {
    "companyName": "Acme Supplies",
    "targetAudience": "trade buyers",
    "description": "Family-run supplier of industrial consumables.",
    "businessType": "distributor",
    "usps": [],
    "writingTone": "technical",
}


@pytest.fixture
def catalog():
    return FakeCatalog([make_item(1), make_item(2), make_item(3)], failing={"3"})


@pytest.fixture
def workspace(tmp_path, catalog):
    return Workspace(
        JsonStore(tmp_path / "store.json"),
        generator=DescriptionGenerator(ScriptedCompletion([])),
        catalog=catalog,
        auto_push=False,
    )


@pytest.fixture
def client(workspace):
    app.dependency_overrides[get_workspace] = lambda: workspace
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_healthz(client):
    response = client.get("/healthz")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.json()["run_state"] == "idle"


def test_business_profile_and_usps(client):
    response = client.put("/api/business-profile", json=PROFILE)
    assert response.status_code == 200
    assert response.json()["generationPermitted"] is True

    response = client.post("/api/business-profile/usps", json={"usp": "  Same-day dispatch  "})
    assert response.json()["usps"] == ["Same-day dispatch"]

    assert client.post("/api/business-profile/usps", json={"usp": "   "}).status_code == 400
    assert client.delete("/api/business-profile/usps/4").status_code == 404

    response = client.delete("/api/business-profile/usps/0")
    assert response.json()["usps"] == []


def test_generate_requires_profile_and_selection(client):
    response = client.post("/api/generate")
    assert response.status_code == 400
    assert response.json() == {"success": False, "error": PROFILE_REQUIRED}

    client.put("/api/business-profile", json=PROFILE)
    response = client.post("/api/generate")
    assert response.status_code == 400
    assert response.json()["error"] == SELECTION_REQUIRED


def test_generate_push_and_export(client, catalog):
    client.put("/api/business-profile", json=PROFILE)

    products = client.get("/api/products").json()
    assert [p["id"] for p in products["products"]] == ["1", "2", "3"]
    assert products["total"] == 3

    response = client.post("/api/products/selection/all")
    assert response.json()["count"] == 3

    summary = client.post("/api/generate", json={"autoPush": False}).json()
    assert summary["success"] is True
    assert summary["count"] == 3
    assert summary["pushed"] is False
    assert catalog.updates == []

    status = client.get("/api/run").json()
    assert status["canPush"] is True
    assert status["lastState"] == "generate_done"

    descriptions = client.get("/api/descriptions").json()
    assert descriptions["count"] == 3
    assert descriptions["descriptions"]["1"]["wordCount"] > 0

    summary = client.post("/api/push").json()
    assert summary["pushed"] is True
    assert summary["succeeded"] == 2
    assert summary["failed"] == 1
    assert set(summary["errors"]) == {"3"}

    flags = {p["id"]: p["recentlyUpdated"] for p in client.get("/api/products").json()["products"]}
    assert flags == {"1": True, "2": True, "3": False}

    response = client.get("/api/export-csv")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert response.content.startswith(b"\xef\xbb\xbf")
    lines = response.content.decode("utf-8-sig").splitlines()
    assert lines[0] == "id,sku,name,shortDescription,longDescription,wordCount,recentlyUpdated"


def test_selection_toggle_and_clear(client):
    client.get("/api/products")

    response = client.put("/api/products/selection", json={"ids": [2, 1, 2]})
    assert response.json()["selected"] == ["2", "1"]

    response = client.post("/api/products/selection/2/toggle")
    assert response.json()["isSelected"] is False
    assert response.json()["selected"] == ["1"]

    assert client.delete("/api/products/selection").json()["count"] == 0


def test_push_without_results(client):
    response = client.post("/api/push")
    assert response.status_code == 400
    assert response.json()["success"] is False


def test_export_without_results(client):
    assert client.get("/api/export-csv").status_code == 400


def test_settings(client, workspace):
    response = client.put("/api/settings/generator-key", json={"apiKey": "xai-key"})
    assert response.json()["configured"] is True
    assert workspace.store.load_generator_key() == "xai-key"

    response = client.put("/api/settings/auto-push", json={"autoPush": True})
    assert response.json()["autoPush"] is True
    assert workspace.controller.auto_push is True

    client.delete("/api/settings/data")
    assert workspace.store.load_generator_key() == ""
    assert workspace.selection == []


def test_connect_requires_all_fields(client):
    response = client.post("/api/connection", json={"siteUrl": "https://shop.example.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "Please fill in all fields"


def test_failed_connection_saved_as_disconnected(client, workspace, monkeypatch):
    async def refuse(self):
        raise CatalogError("WooCommerce returned HTTP 401 for GET products", 401)

    monkeypatch.setattr(WooCommerceClient, "test_connection", refuse)

    response = client.post(
        "/api/connection",
        json={"siteUrl": "https://shop.example.com", "consumerKey": "ck", "consumerSecret": "cs_secret"},
    )

    assert response.status_code == 502
    stored = workspace.store.load_connection()
    assert stored.site_url == "https://shop.example.com"
    assert stored.is_connected is False

    masked = client.get("/api/connection").json()
    assert masked["consumerSecret"] == "*****cret"


def test_successful_connection_swaps_catalog(client, workspace, monkeypatch):
    async def accept(self):
        return True

    monkeypatch.setattr(WooCommerceClient, "test_connection", accept)

    response = client.post(
        "/api/connection",
        json={"siteUrl": "https://shop.example.com/", "consumerKey": "ck", "consumerSecret": "cs"},
    )

    assert response.status_code == 200
    assert workspace.store.load_connection().is_connected is True
    assert isinstance(workspace.catalog, WooCommerceClient)
    assert workspace.catalog.site_url == "https://shop.example.com"


def test_products_page_range_uses_one_snapshot(tmp_path):
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        page = int(request.url.params["page"])
        requested.append(page)
        return httpx.Response(
            200,
            json=[{"id": page * 10, "name": f"Item {page}"}],
            headers={"X-WP-TotalPages": "3", "X-WP-Total": "3"},
        )

    catalog = WooCommerceClient("https://shop.example.com", "ck", "cs", transport=httpx.MockTransport(handler))
    workspace = Workspace(JsonStore(tmp_path / "store.json"), catalog=catalog)
    app.dependency_overrides[get_workspace] = lambda: workspace
    try:
        response = TestClient(app).get("/api/products", params={"page": 2, "last_page": 5})
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 200
    assert requested == [2, 3]
    assert [p["id"] for p in response.json()["products"]] == ["20", "30"]
    assert response.json()["totalPages"] == 3
    assert [p.id for p in workspace.store.load_products()] == ["20", "30"]
