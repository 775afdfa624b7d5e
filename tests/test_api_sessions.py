"""Tests for card session endpoints."""

import pytest
from httpx import AsyncClient

from songbingo.db.operations import upsert_songs

FREE = 12


@pytest.fixture
async def session_id(client: AsyncClient, seeded_db) -> str:
    response = await client.post("/sessions")
    assert response.status_code == 201
    return response.json()["sessionId"]


@pytest.fixture
async def generated(client: AsyncClient, session_id: str) -> dict:
    response = await client.post(f"/sessions/{session_id}/generate")
    assert response.status_code == 200
    return response.json()


async def _start_editing(client: AsyncClient, session_id: str) -> dict:
    response = await client.post(f"/sessions/{session_id}/editing")
    assert response.json()["applied"]
    return response.json()["session"]


def _ids(session: dict) -> list[str]:
    return [cell["songId"] for cell in session["cells"]]


class TestSessionLifecycle:
    async def test_new_session_has_no_card(self, client: AsyncClient, session_id: str) -> None:
        response = await client.get(f"/sessions/{session_id}")

        assert response.status_code == 200
        data = response.json()
        assert data["cells"] == []
        assert data["mode"] == "viewing"
        assert data["drag"] == {"draggingIndex": None, "hoverIndex": None, "active": False}

    async def test_generate_builds_card(self, generated: dict, seeded_db) -> None:
        cells = generated["cells"]

        assert len(cells) == 25
        assert [c["position"] for c in cells] == list(range(25))
        assert cells[FREE]["isFreeSpot"]
        assert cells[FREE]["songId"] == "FREE_SPOT"
        ids = [c["songId"] for c in cells if not c["isFreeSpot"]]
        assert len(set(ids)) == 24
        assert set(ids) <= {item.item_id for item in seeded_db}

    async def test_generate_with_small_catalog(self, client: AsyncClient) -> None:
        session_id = (await client.post("/sessions")).json()["sessionId"]

        response = await client.post(f"/sessions/{session_id}/generate")

        assert response.status_code == 503
        assert response.json()["failure"]["kind"] == "insufficient_pool"
        state = (await client.get(f"/sessions/{session_id}")).json()
        assert state["cells"] == []
        assert "24" in state["error"]

    async def test_generate_after_catalog_seeded(
        self, client: AsyncClient, session, catalog_items
    ) -> None:
        session_id = (await client.post("/sessions")).json()["sessionId"]
        assert (await client.post(f"/sessions/{session_id}/generate")).status_code == 503

        await upsert_songs(session, catalog_items)
        await session.commit()

        response = await client.post(f"/sessions/{session_id}/generate")

        assert response.status_code == 200
        assert len(response.json()["cells"]) == 25
        assert response.json()["error"] is None

    async def test_unknown_session(self, client: AsyncClient) -> None:
        response = await client.get("/sessions/does-not-exist")

        assert response.status_code == 404
        assert response.json()["failure"]["kind"] == "not_found"

    async def test_delete_session(self, client: AsyncClient, session_id: str) -> None:
        assert (await client.delete(f"/sessions/{session_id}")).status_code == 204
        assert (await client.get(f"/sessions/{session_id}")).status_code == 404
        assert (await client.delete(f"/sessions/{session_id}")).status_code == 404


class TestSessionEditing:
    async def test_swap_requires_editing(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        response = await client.post(
            f"/sessions/{session_id}/swap", json={"positionA": 0, "positionB": 1}
        )

        assert response.status_code == 200
        data = response.json()
        assert not data["applied"]
        assert data["rejection"]["kind"] == "not_editable"
        assert _ids(data["session"]) == _ids(generated)

    async def test_swap_twice_restores(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        await _start_editing(client, session_id)
        before = _ids(generated)

        first = await client.post(
            f"/sessions/{session_id}/swap", json={"positionA": 0, "positionB": 1}
        )
        swapped = _ids(first.json()["session"])
        assert swapped[0] == before[1] and swapped[1] == before[0]

        second = await client.post(
            f"/sessions/{session_id}/swap", json={"positionA": 0, "positionB": 1}
        )
        assert _ids(second.json()["session"]) == before

    async def test_swap_with_free_cell_refused(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        await _start_editing(client, session_id)

        response = await client.post(
            f"/sessions/{session_id}/swap", json={"positionA": FREE, "positionB": 3}
        )

        data = response.json()
        assert not data["applied"]
        assert data["rejection"]["kind"] == "fixed_cell"
        assert data["session"]["cells"] == generated["cells"]

    async def test_replace_with_song_off_card(
        self, client: AsyncClient, session_id: str, generated: dict, seeded_db
    ) -> None:
        await _start_editing(client, session_id)
        off_card = next(i.item_id for i in seeded_db if i.item_id not in _ids(generated))

        response = await client.post(
            f"/sessions/{session_id}/replace", json={"position": 5, "songId": off_card}
        )

        data = response.json()
        assert data["applied"]
        assert data["session"]["cells"][5]["songId"] == off_card

    async def test_replace_with_duplicate_refused(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        await _start_editing(client, session_id)
        on_card = generated["cells"][3]["songId"]

        response = await client.post(
            f"/sessions/{session_id}/replace", json={"position": 5, "songId": on_card}
        )

        data = response.json()
        assert not data["applied"]
        assert data["rejection"]["kind"] == "duplicate_item"
        assert data["session"]["cells"] == generated["cells"]

    async def test_replace_unknown_song(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        await _start_editing(client, session_id)

        response = await client.post(
            f"/sessions/{session_id}/replace", json={"position": 5, "songId": "nope"}
        )

        assert response.status_code == 404

    async def test_finish_returns_to_viewing(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        await _start_editing(client, session_id)

        response = await client.post(f"/sessions/{session_id}/finish")

        assert response.json()["session"]["mode"] == "viewing"


class TestSessionPicker:
    async def test_picker_flags_songs_on_card(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        response = await client.get(f"/sessions/{session_id}/picker")

        entries = response.json()["entries"]
        assert len(entries) == 30
        flagged = {e["song"]["songId"] for e in entries if e["alreadyOnCard"]}
        assert flagged == {c["songId"] for c in generated["cells"] if not c["isFreeSpot"]}

    async def test_picker_search(self, client: AsyncClient, session_id: str) -> None:
        response = await client.get(f"/sessions/{session_id}/picker", params={"search": "song 1"})

        titles = {e["song"]["title"] for e in response.json()["entries"]}
        assert "Song 1" in titles
        assert "Song 10" in titles
        assert "Song 2" not in titles

    async def test_open_and_close_picker(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        await _start_editing(client, session_id)

        opened = await client.post(f"/sessions/{session_id}/picker", json={"position": 4})
        assert opened.json()["session"]["pickerPosition"] == 4

        closed = await client.post(f"/sessions/{session_id}/picker", json={})
        assert closed.json()["session"]["pickerPosition"] is None

    async def test_picker_on_free_cell_refused(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        await _start_editing(client, session_id)

        response = await client.post(f"/sessions/{session_id}/picker", json={"position": FREE})

        assert response.json()["rejection"]["kind"] == "fixed_cell"


class TestSessionDrag:
    async def test_drag_gesture_swaps(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        await _start_editing(client, session_id)
        before = _ids(generated)

        begin = await client.post(f"/sessions/{session_id}/drag/begin", json={"position": 0})
        assert begin.json()["session"]["drag"]["draggingIndex"] == 0

        hover = await client.post(f"/sessions/{session_id}/drag/hover", json={"position": 7})
        assert hover.json()["session"]["drag"]["hoverIndex"] == 7

        commit = await client.post(f"/sessions/{session_id}/drag/commit", json={"position": 7})
        data = commit.json()
        assert data["applied"]
        after = _ids(data["session"])
        assert after[0] == before[7] and after[7] == before[0]
        assert data["session"]["drag"]["active"] is False

    async def test_begin_requires_position(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        response = await client.post(f"/sessions/{session_id}/drag/begin", json={})
        assert response.status_code == 400

    async def test_commit_without_position_cancels(
        self, client: AsyncClient, session_id: str, generated: dict
    ) -> None:
        await _start_editing(client, session_id)
        await client.post(f"/sessions/{session_id}/drag/begin", json={"position": 0})

        response = await client.post(f"/sessions/{session_id}/drag/commit", json={})

        data = response.json()
        assert data["applied"]
        assert _ids(data["session"]) == _ids(generated)
        assert data["session"]["drag"]["active"] is False

    async def test_unknown_phase(self, client: AsyncClient, session_id: str) -> None:
        response = await client.post(f"/sessions/{session_id}/drag/fling", json={})
        assert response.status_code == 422
