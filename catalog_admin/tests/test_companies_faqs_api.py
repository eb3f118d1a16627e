"""Companies, FAQs, dashboard stats và health endpoints."""
import pytest


@pytest.mark.asyncio
async def test_company_crud(client) -> None:
    r = await client.post("/companies", json={"name": "Rental Motor Ubud", "industry": "rental"})
    assert r.status_code == 201, r.text
    company = r.json()
    assert company["slug"] == "rental-motor-ubud"
    assert company["domain_type"] == "none"
    assert company["settings"] == {}

    r = await client.patch(
        f"/companies/{company['id']}",
        json={"display_name": "Ubud Moto", "domain_type": "custom", "custom_domain": "ubudmoto.id", "name": None},
    )
    assert r.status_code == 200
    data = r.json()
    assert data["display_name"] == "Ubud Moto"
    assert data["custom_domain"] == "ubudmoto.id"
    assert data["name"] == "Rental Motor Ubud"

    r = await client.get("/companies")
    assert [c["id"] for c in r.json()] == [company["id"]]

    assert (await client.delete(f"/companies/{company['id']}")).status_code == 204
    assert (await client.get(f"/companies/{company['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_company_slug_conflict(client, company) -> None:
    r = await client.post("/companies", json={"name": "Other", "industry": "travel", "slug": company["slug"]})
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_company_rejects_unknown_domain_type(client) -> None:
    r = await client.post("/companies", json={"name": "X", "industry": "y", "domain_type": "wildcard"})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_faq_crud(client, company) -> None:
    r = await client.post(
        "/faqs",
        json={
            "company_id": company["id"],
            "question": "Apakah harga termasuk bensin?",
            "answer": "Belum, bensin ditanggung penyewa.",
            "category": "rental",
            "priority": 2,
        },
    )
    assert r.status_code == 201, r.text
    faq = r.json()

    await client.post(
        "/faqs",
        json={"company_id": company["id"], "question": "Bisa antar ke hotel?", "answer": "Bisa.", "priority": 7},
    )
    r = await client.get("/faqs", params={"company_id": company["id"]})
    assert [f["priority"] for f in r.json()] == [7, 2]

    r = await client.get("/faqs", params={"category": "rental"})
    assert [f["id"] for f in r.json()] == [faq["id"]]

    r = await client.patch(f"/faqs/{faq['id']}", json={"answer": "Sudah termasuk."})
    assert r.json()["answer"] == "Sudah termasuk."

    assert (await client.delete(f"/faqs/{faq['id']}")).status_code == 204
    assert (await client.get(f"/faqs/{faq['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_faq_unknown_company(client) -> None:
    r = await client.post(
        "/faqs",
        json={"company_id": "00000000-0000-0000-0000-000000000000", "question": "Q", "answer": "A"},
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_dashboard_stats(client, company, item_payload) -> None:
    await client.post("/items", json=item_payload("product", "Kopi", {"price": 1}))
    await client.post("/items", json=item_payload("product", "Teh", {"price": 1}, is_active=False))
    await client.post("/faqs", json={"company_id": company["id"], "question": "Q", "answer": "A"})
    await client.post("/personas", json={"company_id": company["id"], "name": "Ayu", "system_prompt": "Kamu CS."})
    await client.post("/guardrails", json={"company_id": company["id"], "name": "No promise", "rules": "Jangan janji."})
    await client.post("/sync/outbox/drain")

    r = await client.get("/dashboard/stats", params={"company_id": company["id"]})
    assert r.status_code == 200
    assert r.json() == {
        "company_id": company["id"],
        "companies": 1,
        "items": 2,
        "active_items": 1,
        "knowledge_records": 2,
        "faqs": 1,
        "quick_responses": 0,
        "personas": 1,
        "guardrails": 1,
        "chat_patterns": 0,
    }


@pytest.mark.asyncio
async def test_health_endpoints(client) -> None:
    assert (await client.get("/health")).json()["status"] == "ok"
    assert (await client.get("/api/healthz")).json() == {"status": "ok"}
    r = await client.get("/api/readyz")
    assert r.status_code == 200
    assert r.json()["db"] == "ok"
    r = await client.get("/")
    assert r.json()["name"] == "catalog_admin"
    assert "X-Correlation-ID" in r.headers
