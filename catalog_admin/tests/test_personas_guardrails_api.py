"""
Personas / guardrails / chat patterns API: CRUD cấu hình hành vi chatbot theo company.
Chạy: pytest tests/test_personas_guardrails_api.py -v
"""
import uuid

import pytest


def _persona(company: dict, name: str, **extra) -> dict:
    body = {"company_id": company["id"], "name": name, "system_prompt": f"Kamu adalah {name}, CS ramah."}
    body.update(extra)
    return body


@pytest.mark.asyncio
async def test_create_persona_defaults(client, company) -> None:
    r = await client.post(
        "/personas",
        json=_persona(company, "Ayu", signature_phrases=[" Siap kak! ", "", "Siap kak!", "Ditunggu ya"]),
    )
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["persona_type"] == "cs"
    assert data["is_default"] is True
    assert data["temperature"] == 0.7
    assert data["max_tokens"] == 1000
    assert data["personality"] == {
        "tone": "friendly",
        "formality": "semi-formal",
        "greeting": "",
        "emoji_usage": "moderate",
        "humor": "subtle",
    }
    assert data["capabilities"][0] == "product_info"
    assert "booking" not in data["capabilities"]
    assert data["signature_phrases"] == ["Siap kak!", "Ditunggu ya"]


@pytest.mark.asyncio
async def test_persona_validation(client, company) -> None:
    assert (await client.post("/personas", json=_persona(company, "Ayu", temperature=1.5))).status_code == 422
    assert (await client.post("/personas", json=_persona(company, "Ayu", max_tokens=50))).status_code == 422
    assert (await client.post("/personas", json=_persona(company, "Ayu", capabilities=["hacking"]))).status_code == 422
    r = await client.post("/personas", json=_persona(company, "Ayu", personality={"tone": "angry"}))
    assert r.status_code == 422
    r = await client.post("/personas", json={"company_id": company["id"], "name": "Ayu"})
    assert r.status_code == 422
    r = await client.post("/personas", json={**_persona(company, "Ayu"), "company_id": str(uuid.uuid4())})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_single_default_persona_per_company(client, company) -> None:
    ayu = (await client.post("/personas", json=_persona(company, "Ayu"))).json()
    budi = (await client.post("/personas", json=_persona(company, "Budi", persona_type="sales"))).json()
    await client.post("/personas", json=_persona(company, "Citra", is_default=False))

    r = await client.get("/personas", params={"company_id": company["id"]})
    listed = r.json()
    assert listed[0]["id"] == budi["id"]
    assert [p["name"] for p in listed if p["is_default"]] == ["Budi"]

    r = await client.get("/personas/default", params={"company_id": company["id"]})
    assert r.json()["id"] == budi["id"]

    r = await client.patch(f"/personas/{ayu['id']}", json={"is_default": True})
    assert r.status_code == 200
    r = await client.get("/personas/default", params={"company_id": company["id"]})
    assert r.json()["id"] == ayu["id"]
    r = await client.get("/personas", params={"company_id": company["id"]})
    assert sum(p["is_default"] for p in r.json()) == 1


@pytest.mark.asyncio
async def test_default_persona_missing(client, company) -> None:
    await client.post("/personas", json=_persona(company, "Ayu", is_default=False))
    r = await client.get("/personas/default", params={"company_id": company["id"]})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_persona_null_handling(client, company) -> None:
    created = (await client.post("/personas", json=_persona(company, "Ayu", display_name="Kak Ayu"))).json()
    r = await client.patch(
        f"/personas/{created['id']}",
        json={"display_name": None, "system_prompt": None, "personality": {"tone": "casual", "greeting": "Halo kak!"}},
    )
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["display_name"] is None
    assert data["system_prompt"] == created["system_prompt"]
    assert data["personality"]["tone"] == "casual"
    assert data["personality"]["greeting"] == "Halo kak!"
    assert data["personality"]["humor"] == "subtle"

    assert (await client.delete(f"/personas/{created['id']}")).status_code == 204
    assert (await client.patch(f"/personas/{created['id']}", json={"name": "X"})).status_code == 404


@pytest.mark.asyncio
async def test_guardrail_triggers_and_priority(client, company) -> None:
    base = {"company_id": company["id"], "rules": "Jangan menjanjikan diskon."}
    r = await client.post(
        "/guardrails",
        json={**base, "name": "Nego", "trigger_intent": ["NEGO", "NEGO"], "trigger_topic": [], "priority": 5,
              "forbidden": ["diskon 50%", "  "], "required": ["cek dengan tim"]},
    )
    assert r.status_code == 201, r.text
    data = r.json()
    assert data["trigger_intent"] == ["NEGO"]
    assert data["trigger_topic"] is None
    assert data["trigger_emotion"] is None
    assert data["forbidden"] == ["diskon 50%"]

    await client.post("/guardrails", json={**base, "name": "Always", "trigger_always": True, "priority": 50})

    r = await client.get("/guardrails", params={"company_id": company["id"]})
    assert [g["name"] for g in r.json()] == ["Always", "Nego"]

    r = await client.post("/guardrails", json={**base, "name": "Bad", "trigger_emotion": ["angry"]})
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_guardrail_update_toggle_delete(client, company) -> None:
    created = (
        await client.post(
            "/guardrails",
            json={"company_id": company["id"], "name": "Komplain", "rules": "Minta maaf dulu.",
                  "trigger_intent": ["KOMPLAIN"], "trigger_emotion": ["frustrated"]},
        )
    ).json()

    r = await client.patch(f"/guardrails/{created['id']}", json={"trigger_intent": None, "trigger_emotion": [], "rules": None})
    assert r.status_code == 200, r.text
    data = r.json()
    assert data["trigger_intent"] is None
    assert data["trigger_emotion"] is None
    assert data["rules"] == "Minta maaf dulu."

    r = await client.patch(f"/guardrails/{created['id']}/toggle-active", json={"is_active": False})
    assert r.json()["is_active"] is False
    r = await client.get("/guardrails", params={"company_id": company["id"], "is_active": True})
    assert r.json() == []

    assert (await client.delete(f"/guardrails/{created['id']}")).status_code == 204
    assert (await client.delete(f"/guardrails/{created['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_chat_patterns_crud(client, company) -> None:
    base = {"company_id": company["id"], "example_input": "Mahal banget", "example_output": "Boleh tahu budgetnya?"}
    r = await client.post("/chat-patterns", json={**base, "name": "Objection", "pattern_type": "objection", "priority": 3})
    assert r.status_code == 201, r.text
    objection = r.json()
    await client.post("/chat-patterns", json={**base, "name": "Closing", "pattern_type": "closing", "priority": 9})

    r = await client.get("/chat-patterns", params={"company_id": company["id"]})
    assert [p["name"] for p in r.json()] == ["Closing", "Objection"]
    r = await client.get("/chat-patterns", params={"company_id": company["id"], "pattern_type": "objection"})
    assert [p["id"] for p in r.json()] == [objection["id"]]

    r = await client.patch(f"/chat-patterns/{objection['id']}", json={"explanation": "Gali kebutuhan dulu"})
    assert r.json()["explanation"] == "Gali kebutuhan dulu"
    r = await client.patch(f"/chat-patterns/{objection['id']}", json={"explanation": None, "example_input": None})
    assert r.json()["explanation"] is None
    assert r.json()["example_input"] == "Mahal banget"

    assert (await client.post("/chat-patterns", json={**base, "name": "X", "pattern_type": "spam"})).status_code == 422
    r = await client.patch(f"/chat-patterns/{objection['id']}/toggle-active", json={"is_active": False})
    assert r.json()["is_active"] is False
    assert (await client.delete(f"/chat-patterns/{objection['id']}")).status_code == 204
    assert (await client.get("/chat-patterns", params={"company_id": company["id"]})).json()[0]["name"] == "Closing"


@pytest.mark.asyncio
async def test_company_delete_removes_behaviour_config(client, company) -> None:
    await client.post("/personas", json=_persona(company, "Ayu"))
    await client.post("/guardrails", json={"company_id": company["id"], "name": "G", "rules": "R"})
    await client.post(
        "/chat-patterns",
        json={"company_id": company["id"], "name": "P", "example_input": "a", "example_output": "b"},
    )
    assert (await client.delete(f"/companies/{company['id']}")).status_code == 204

    for path in ("/personas", "/guardrails", "/chat-patterns"):
        assert (await client.get(path)).json() == []
