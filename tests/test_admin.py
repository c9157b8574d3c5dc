import pytest
from httpx import AsyncClient

from app.models.admission import AdmissionState
from conftest import PROFILE_COOKIE, profile_store

CREDENTIALS = {"identifier": "admin_mu_eng_2024", "secret": "MU_Papers_Secure@2024"}


@pytest.mark.asyncio
async def test_login_admits_and_persists(client: AsyncClient, admission_dir):
    response = await client.post("/api/v1/admin/login", json=CREDENTIALS)

    assert response.status_code == 200
    assert response.json()["admitted"] is True
    assert response.json()["identifier"] == CREDENTIALS["identifier"]
    assert PROFILE_COOKIE in response.cookies
    stored = profile_store(client, admission_dir).load()
    assert stored == AdmissionState(admitted=True, identifier=CREDENTIALS["identifier"])


@pytest.mark.asyncio
async def test_wrong_credentials_are_not_an_error(client: AsyncClient, admission_dir):
    response = await client.post("/api/v1/admin/login", json={**CREDENTIALS, "secret": "guess"})

    assert response.status_code == 200
    assert response.json()["admitted"] is False
    assert response.json()["message"]
    assert not profile_store(client, admission_dir).path.exists()


@pytest.mark.asyncio
async def test_empty_credentials_are_rejected_by_validation(client: AsyncClient):
    response = await client.post("/api/v1/admin/login", json={"identifier": "", "secret": ""})

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_logout_twice(admitted_client: AsyncClient, admission_dir):
    first = await admitted_client.post("/api/v1/admin/logout")
    second = await admitted_client.post("/api/v1/admin/logout")

    assert first.json() == second.json()
    assert second.json()["admitted"] is False
    status = await admitted_client.get("/api/v1/admin/status")
    assert status.json() == {"admitted": False, "identifier": None, "message": None}
    assert profile_store(admitted_client, admission_dir).load() == AdmissionState()


@pytest.mark.asyncio
async def test_admission_is_scoped_to_the_client_profile(admitted_client: AsyncClient, client_factory):
    other = await client_factory()

    status = await other.get("/api/v1/admin/status")

    assert status.json() == {"admitted": False, "identifier": None, "message": None}
    assert other.cookies.get(PROFILE_COOKIE) != admitted_client.cookies.get(PROFILE_COOKIE)


@pytest.mark.asyncio
async def test_status_reads_state_written_outside_the_server(client: AsyncClient, admission_dir):
    await client.get("/api/v1/admin/status")
    store = profile_store(client, admission_dir)

    store.save(AdmissionState(admitted=True, identifier="admin_mu_eng_2024"))
    assert (await client.get("/api/v1/admin/status")).json()["admitted"] is True

    store.save(AdmissionState())
    assert (await client.get("/api/v1/admin/status")).json()["admitted"] is False


@pytest.mark.asyncio
async def test_malformed_profile_cookie_gets_a_fresh_profile(client_factory):
    client = await client_factory()
    client.cookies.set(PROFILE_COOKIE, "../../etc/passwd")

    response = await client.get("/api/v1/admin/status")

    assert response.status_code == 200
    assert response.json()["admitted"] is False
    assert response.cookies.get(PROFILE_COOKIE) != "../../etc/passwd"
