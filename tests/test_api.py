import httpx
import pytest
import pytest_asyncio

from treasure_board.authentication.basic_authentication_crud import CreateAuthentication
from treasure_board.dependencies import get_board_registry, get_session_factory
from treasure_board.domain.board_rules import STAKE_UNIT
from treasure_board.main import app

from board_helpers import CREATOR, SMALL_COMMITMENT, SMALL_SOLUTION, units

PASSWORD = "correct horse"


@pytest_asyncio.fixture
async def client(session_factory, registry):
    for username in (CREATOR, "alice.near", "bob.near", "carol.near"):
        await CreateAuthentication.create_user_data(username, PASSWORD, session_factory)

    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_board_registry] = lambda: registry
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


def auth(username: str) -> tuple[str, str]:
    return (username, PASSWORD)


async def create_small_game(client) -> int:
    response = await client.post(
        "/games",
        json={"size": "Small", "commitment": SMALL_COMMITMENT.hex(), "deposit": units(4)},
        auth=auth(CREATOR),
    )
    assert response.status_code == 200
    return response.json()


@pytest.mark.asyncio
async def test_create_requires_authentication(client):
    body = {"size": "Small", "commitment": SMALL_COMMITMENT.hex(), "deposit": units(4)}

    response = await client.post("/games", json=body)
    assert response.status_code == 401

    response = await client.post("/games", json=body, auth=(CREATOR, "wrong"))
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid password"


@pytest.mark.asyncio
async def test_full_game(client):
    board_id = await create_small_game(client)

    for slot, player in ((0, "alice.near"), (1, "bob.near")):
        response = await client.post(
            f"/games/{board_id}/claim", json={"slot": slot, "stake": STAKE_UNIT}, auth=auth(player)
        )
        assert response.status_code == 200
    assert response.json()["status"] == "closed"

    response = await client.post(
        f"/games/{board_id}/claim", json={"slot": 2, "stake": STAKE_UNIT}, auth=auth("carol.near")
    )
    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "BoardClosed"

    response = await client.get("/games")
    assert response.json() == [{"id": board_id, "size": "Small", "claimed_slots": [0, 1]}]

    response = await client.post(
        f"/games/{board_id}/reveal", json={"solution": list(SMALL_SOLUTION)}, auth=auth("bob.near")
    )
    assert response.status_code == 403

    response = await client.post(
        f"/games/{board_id}/reveal", json={"solution": list(SMALL_SOLUTION)}, auth=auth(CREATOR)
    )
    assert response.status_code == 200
    assert response.json() == {
        "id": board_id,
        "bombs": [0, 1],
        "payouts": [{"recipient": CREATOR, "amount": units(6)}],
    }

    response = await client.post(
        f"/games/{board_id}/reveal", json={"solution": list(SMALL_SOLUTION)}, auth=auth(CREATOR)
    )
    assert response.status_code == 409
    assert response.json()["detail"]["error"] == "AlreadyRevealed"

    response = await client.get(f"/accounts/{CREATOR}/balance")
    assert response.json()["balance"] == units(2)
    assert len(response.json()["transfers"]) == 2


@pytest.mark.asyncio
async def test_insufficient_deposit(client):
    response = await client.post(
        "/games",
        json={"size": "Big", "commitment": SMALL_COMMITMENT.hex(), "deposit": units(4)},
        auth=auth(CREATOR),
    )
    assert response.status_code == 402
    assert response.json()["detail"]["error"] == "InsufficientDeposit"


@pytest.mark.asyncio
async def test_malformed_requests(client):
    response = await client.post(
        "/games",
        json={"size": "Small", "commitment": "not-hex", "deposit": units(4)},
        auth=auth(CREATOR),
    )
    assert response.status_code == 422

    response = await client.post(
        "/games",
        json={"size": "Huge", "commitment": SMALL_COMMITMENT.hex(), "deposit": units(4)},
        auth=auth(CREATOR),
    )
    assert response.status_code == 422

    board_id = await create_small_game(client)
    response = await client.post(
        f"/games/{board_id}/claim", json={"slot": 256, "stake": STAKE_UNIT}, auth=auth("alice.near")
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_unknown_game(client):
    response = await client.get("/games/10000")
    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "GameNotFound"


@pytest.mark.asyncio
async def test_get_game(client):
    board_id = await create_small_game(client)
    await client.post(
        f"/games/{board_id}/claim", json={"slot": 3, "stake": STAKE_UNIT}, auth=auth("alice.near")
    )

    response = await client.get(f"/games/{board_id}")

    body = response.json()
    assert body["creator"] == CREATOR
    assert body["commitment"] == SMALL_COMMITMENT.hex()
    assert body["deposit"] == units(4)
    assert body["status"] == "open"
    assert body["assignments"] == [{"slot": 3, "claimant": "alice.near"}]


@pytest.mark.asyncio
async def test_unknown_game_above_64_bits(client):
    board_id = 2**64

    response = await client.get(f"/games/{board_id}")
    assert response.status_code == 404
    assert response.json()["detail"]["error"] == "GameNotFound"

    response = await client.post(
        f"/games/{board_id}/claim", json={"slot": 0, "stake": STAKE_UNIT}, auth=auth("alice.near")
    )
    assert response.status_code == 404

    response = await client.post(
        f"/games/{board_id}/reveal", json={"solution": list(SMALL_SOLUTION)}, auth=auth(CREATOR)
    )
    assert response.status_code == 404
