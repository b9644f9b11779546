"""Mesa Routes — end-to-end HTTP behaviour through FastAPI + SQLite.

Tests cover:
    - POST 201 with status forced to 1; missing/invalid fields 400 without writes
    - GET list / by id, 404 envelope for unknown ids
    - PUT partial update, invalid status, deactivated target
    - DELETE logical delete, idempotent repeat
    - GET /local/{local}: 404 when empty, inactive visibility both ways
    - Storage failures render as generic 500
"""

from app.core.errors import StorageError
from app.services.mesa_repository import SqlAlchemyMesaRepository

MESAS = "/api/mesas"


async def _create(client, payload):
    res = await client.post(MESAS, json=payload)
    assert res.status_code == 201, res.text
    return res.json()


# ─── create / read ───────────────────────────────────────────────

async def test_create_returns_201_active(client, mesa_payload):
    res = await client.post(MESAS, json=mesa_payload)
    assert res.status_code == 201
    body = res.json()
    assert body["status"] == 1
    assert body["capacidade"] == 4
    assert body["local"] == "Restaurante A"
    assert body["created_at"] == body["updated_at"]


async def test_create_ignores_status_in_body(client, mesa_payload):
    body = await _create(client, {**mesa_payload, "status": -1})
    assert body["status"] == 1


async def test_create_missing_capacidade_is_400_and_stores_nothing(client):
    before = (await client.get(MESAS)).json()
    res = await client.post(MESAS, json={"descricao": "x", "local": "A"})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["message"] == "missing required field"
    assert error["context"]["field"] == "capacidade"
    after = (await client.get(MESAS)).json()
    assert len(after) == len(before)


async def test_create_non_numeric_capacidade_is_400(client, mesa_payload):
    res = await client.post(MESAS, json={**mesa_payload, "capacidade": "quatro"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_create_boolean_capacidade_is_400_and_stores_nothing(client, mesa_payload):
    res = await client.post(MESAS, json={**mesa_payload, "capacidade": True})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["context"]["field"] == "capacidade"
    assert (await client.get(MESAS)).json() == []


async def test_create_blank_capacidade_is_missing(client, mesa_payload):
    res = await client.post(MESAS, json={**mesa_payload, "capacidade": ""})
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["message"] == "missing required field"
    assert error["context"]["field"] == "capacidade"


async def test_create_numeric_string_capacidade_is_coerced(client, mesa_payload):
    body = await _create(client, {**mesa_payload, "capacidade": "4"})
    assert body["capacidade"] == 4


async def test_create_zero_capacidade_is_400(client, mesa_payload):
    res = await client.post(MESAS, json={**mesa_payload, "capacidade": 0})
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "capacidade"


async def test_get_by_id_round_trip(client, mesa_payload):
    created = await _create(client, mesa_payload)
    res = await client.get(f"{MESAS}/{created['id']}")
    assert res.status_code == 200
    assert res.json() == created


async def test_get_unknown_id_is_404(client):
    res = await client.get(f"{MESAS}/999")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "MESA_NOT_FOUND"
    assert error["message"] == "Mesa não encontrada"


async def test_get_non_integer_id_is_400(client):
    res = await client.get(f"{MESAS}/abc")
    assert res.status_code == 400


async def test_list_empty_is_200(client):
    res = await client.get(MESAS)
    assert res.status_code == 200
    assert res.json() == []


async def test_list_status_filter(client, mesa_payload):
    a = await _create(client, mesa_payload)
    b = await _create(client, mesa_payload)
    await client.delete(f"{MESAS}/{b['id']}")
    res = await client.get(MESAS, params={"status": 1})
    assert [m["id"] for m in res.json()] == [a["id"]]


async def test_list_invalid_status_filter_is_400(client):
    res = await client.get(MESAS, params={"status": 3})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "status inválido"


# ─── update ──────────────────────────────────────────────────────

async def test_put_updates_supplied_fields(client, mesa_payload):
    created = await _create(client, mesa_payload)
    res = await client.put(f"{MESAS}/{created['id']}", json={"capacidade": 6})
    assert res.status_code == 200
    body = res.json()
    assert body["capacidade"] == 6
    assert body["descricao"] == created["descricao"]
    assert body["created_at"] == created["created_at"]
    assert body["updated_at"] >= created["updated_at"]


async def test_put_invalid_status_is_400(client, mesa_payload):
    created = await _create(client, mesa_payload)
    res = await client.put(f"{MESAS}/{created['id']}", json={"status": 2})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "status inválido"


async def test_put_boolean_status_is_400_and_keeps_mesa(client, mesa_payload):
    created = await _create(client, mesa_payload)
    res = await client.put(f"{MESAS}/{created['id']}", json={"status": True})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "status inválido"
    assert (await client.get(f"{MESAS}/{created['id']}")).json() == created


async def test_put_null_descricao_is_400(client, mesa_payload):
    created = await _create(client, mesa_payload)
    res = await client.put(f"{MESAS}/{created['id']}", json={"descricao": None})
    assert res.status_code == 400


async def test_put_unknown_id_is_404(client):
    res = await client.put(f"{MESAS}/999", json={"descricao": "x"})
    assert res.status_code == 404


# ─── deactivate ──────────────────────────────────────────────────

async def test_delete_deactivates(client, mesa_payload):
    created = await _create(client, mesa_payload)
    res = await client.delete(f"{MESAS}/{created['id']}")
    assert res.status_code == 200
    assert res.json()["status"] == -1
    still_there = await client.get(f"{MESAS}/{created['id']}")
    assert still_there.status_code == 200
    assert still_there.json()["status"] == -1


async def test_delete_twice_is_idempotent(client, mesa_payload):
    created = await _create(client, mesa_payload)
    first = (await client.delete(f"{MESAS}/{created['id']}")).json()
    res = await client.delete(f"{MESAS}/{created['id']}")
    assert res.status_code == 200
    assert res.json()["status"] == -1
    assert res.json()["updated_at"] == first["updated_at"]


async def test_delete_unknown_id_is_404(client):
    res = await client.delete(f"{MESAS}/999")
    assert res.status_code == 404


# ─── location search ─────────────────────────────────────────────

async def test_local_search_returns_matches(client, mesa_payload):
    created = await _create(client, mesa_payload)
    await _create(client, {**mesa_payload, "local": "Varanda"})
    res = await client.get(f"{MESAS}/local/Restaurante%20A")
    assert res.status_code == 200
    assert [m["id"] for m in res.json()] == [created["id"]]


async def test_local_search_empty_is_404(client, mesa_payload):
    await _create(client, mesa_payload)
    res = await client.get(f"{MESAS}/local/Terraço")
    assert res.status_code == 404
    error = res.json()["error"]
    assert error["code"] == "LOCAL_NOT_FOUND"
    assert error["message"] == "nenhuma mesa encontrada para o local especificado"


async def test_local_search_query_param_hides_inactive(client, mesa_payload):
    created = await _create(client, mesa_payload)
    await client.delete(f"{MESAS}/{created['id']}")
    res = await client.get(
        f"{MESAS}/local/Restaurante%20A", params={"incluir_inativas": "false"},
    )
    assert res.status_code == 404


async def test_local_search_setting_hides_inactive(client, settings, mesa_payload):
    settings.local_search_include_inactive = False
    active = await _create(client, mesa_payload)
    inactive = await _create(client, mesa_payload)
    await client.delete(f"{MESAS}/{inactive['id']}")
    res = await client.get(f"{MESAS}/local/Restaurante%20A")
    assert [m["id"] for m in res.json()] == [active["id"]]
    res = await client.get(
        f"{MESAS}/local/Restaurante%20A", params={"incluir_inativas": "true"},
    )
    assert len(res.json()) == 2


# ─── full scenario ───────────────────────────────────────────────

async def test_deactivated_mesa_lifecycle_scenario(client, mesa_payload):
    created = await _create(client, mesa_payload)
    mesa_url = f"{MESAS}/{created['id']}"

    res = await client.put(mesa_url, json={"status": -1})
    assert res.status_code == 200
    assert res.json()["status"] == -1

    res = await client.put(mesa_url, json={"descricao": "x"})
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "mesa desativada"
    assert res.json()["error"]["code"] == "MESA_DESATIVADA"

    res = await client.get(mesa_url)
    assert res.status_code == 200
    assert res.json()["descricao"] == "Mesa perto da janela"

    res = await client.get(
        f"{MESAS}/local/Restaurante%20A", params={"incluir_inativas": "true"},
    )
    assert res.status_code == 200
    assert [m["status"] for m in res.json()] == [-1]

    res = await client.get(
        f"{MESAS}/local/Restaurante%20A", params={"incluir_inativas": "false"},
    )
    assert res.status_code == 404


# ─── storage failures ────────────────────────────────────────────

async def test_storage_error_is_generic_500(client, monkeypatch):
    async def broken_find_all(self, status=None):
        raise StorageError("find_all")

    monkeypatch.setattr(SqlAlchemyMesaRepository, "find_all", broken_find_all)
    res = await client.get(MESAS)
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "STORAGE_ERROR"
    assert "find_all" not in error["message"]
