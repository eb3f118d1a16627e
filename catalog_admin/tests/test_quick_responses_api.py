"""Quick responses API: CRUD rule, regex phải compile được, toggle, thứ tự priority."""
import pytest

from app.services.quick_response_service import InvalidTriggerPatternError, validate_triggers


def test_validate_triggers_only_checks_regex() -> None:
    validate_triggers("exact", ["(unclosed"])
    validate_triggers("regex", [r"^(halo|hai)\b"])
    with pytest.raises(InvalidTriggerPatternError) as exc:
        validate_triggers("regex", ["ok", "(unclosed"])
    assert exc.value.pattern == "(unclosed"
    assert str(exc.value) == "invalid_trigger_pattern"


@pytest.mark.asyncio
async def test_create_and_list_by_priority(client, company) -> None:
    base = {"company_id": company["id"], "responses": ["Halo! Ada yang bisa dibantu?"]}
    r = await client.post("/quick-responses", json={**base, "triggers": ["halo", " ", "hai "], "priority": 1})
    assert r.status_code == 201, r.text
    assert r.json()["triggers"] == ["halo", "hai"]
    await client.post(
        "/quick-responses",
        json={**base, "trigger_type": "regex", "triggers": [r"^terima\s*kasih"], "category": "thanks", "priority": 10},
    )

    r = await client.get("/quick-responses", params={"company_id": company["id"]})
    assert [q["priority"] for q in r.json()] == [10, 1]

    r = await client.get("/quick-responses", params={"company_id": company["id"], "category": "thanks"})
    assert len(r.json()) == 1


@pytest.mark.asyncio
async def test_bad_regex_is_rejected(client, company) -> None:
    r = await client.post(
        "/quick-responses",
        json={"company_id": company["id"], "trigger_type": "regex", "triggers": ["[a-"], "responses": ["x"]},
    )
    assert r.status_code == 400
    detail = r.json()["detail"]
    assert detail["code"] == "invalid_trigger_pattern"
    assert detail["pattern"] == "[a-"


@pytest.mark.asyncio
async def test_update_to_regex_validates_existing_triggers(client, company) -> None:
    created = (
        await client.post(
            "/quick-responses",
            json={"company_id": company["id"], "triggers": ["(promo"], "responses": ["Cek katalog kami"]},
        )
    ).json()
    r = await client.patch(f"/quick-responses/{created['id']}", json={"trigger_type": "regex"})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_empty_lines_only_is_422(client, company) -> None:
    r = await client.post(
        "/quick-responses",
        json={"company_id": company["id"], "triggers": ["  "], "responses": ["x"]},
    )
    assert r.status_code == 422


@pytest.mark.asyncio
async def test_toggle_and_delete(client, company) -> None:
    created = (
        await client.post(
            "/quick-responses",
            json={"company_id": company["id"], "triggers": ["bye"], "responses": ["Sampai jumpa!"], "category": "farewell"},
        )
    ).json()
    r = await client.patch(f"/quick-responses/{created['id']}/toggle-active", json={"is_active": False})
    assert r.status_code == 200
    assert r.json()["is_active"] is False

    assert (await client.delete(f"/quick-responses/{created['id']}")).status_code == 204
    assert (await client.delete(f"/quick-responses/{created['id']}")).status_code == 404
