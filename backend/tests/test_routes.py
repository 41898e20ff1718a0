"""
Palette Backend: HTTP Endpoint Tests
=====================================

What:  Status codes, response shapes and error bodies of the color routes.
How:   Two flavors:
         - mocked_db_client: real routes and ColorService, mock session
         - test_client + db_tables: full stack against a SQLite file

What we test:
    ✅ Raw and derived listings, exact-match lookups
    ✅ 404 / 400 / 409 / 500 mapping with the shared error body
    ✅ Request ID header round-trip
    ✅ End-to-end insert then transform, including corrupt stored data
"""

from unittest.mock import AsyncMock, patch

import pytest


class TestColorRoutesMocked:
    """Routes backed by a mock session."""

    @pytest.mark.asyncio
    async def test_root_lists_raw_records(self, mocked_db_client, mock_db_session, make_rows):
        mock_db_session.execute.return_value = make_rows(("1", "#FF0000", "red"))

        response = await mocked_db_client.get("/")

        assert response.status_code == 200
        assert response.json() == [{"id": "1", "hex": "#FF0000", "name": "red"}]

    @pytest.mark.asyncio
    async def test_colors_returns_derived_objects(self, mocked_db_client, mock_db_session, make_rows):
        mock_db_session.execute.return_value = make_rows(
            ("g", "#00FF00", "green"),
            ("k", "#000000", "black"),
        )

        response = await mocked_db_client.get("/colors")

        assert response.status_code == 200
        body = response.json()
        assert [o["id"] for o in body] == ["g", "k"]
        assert set(body[0]) == {
            "id", "name", "hex", "red", "green", "blue",
            "chroma", "hue", "saturation", "value", "luma",
        }
        assert body[0]["hue"] == pytest.approx(120)
        assert body[1]["value"] == 0

    @pytest.mark.asyncio
    async def test_colors_empty_is_404(self, mocked_db_client, mock_db_session, make_rows):
        mock_db_session.execute.return_value = make_rows()

        response = await mocked_db_client.get("/colors")

        assert response.status_code == 404
        assert response.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_colors_malformed_stored_hex_is_500(self, mocked_db_client, mock_db_session, make_rows):
        mock_db_session.execute.return_value = make_rows(
            ("ok", "#FF0000", "red"),
            ("bad", "#ZZZZZZ", "broken"),
        )

        response = await mocked_db_client.get("/colors")

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "malformed_color_data"
        assert body["details"]["channel"] == "red"
        assert body["details"]["substring"] == "ZZ"
        assert body["details"]["record_id"] == "bad"

    @pytest.mark.asyncio
    async def test_color_by_hex_path_encoded(self, mocked_db_client, mock_db_session, make_rows):
        mock_db_session.execute.return_value = make_rows(("1", "#FF0000", "red"))

        response = await mocked_db_client.get("/color/%23FF0000")

        assert response.status_code == 200
        assert response.json()[0]["hex"] == "#FF0000"

    @pytest.mark.asyncio
    async def test_colorid_without_id_lists_all(self, mocked_db_client, mock_db_session, make_rows):
        mock_db_session.execute.return_value = make_rows(
            ("1", "#FF0000", "red"),
            ("2", "#0000FF", "blue"),
        )

        response = await mocked_db_client.get("/colorid")

        assert response.status_code == 200
        assert len(response.json()) == 2

    @pytest.mark.asyncio
    async def test_colorid_unknown_is_404(self, mocked_db_client, mock_db_session, make_rows):
        mock_db_session.execute.return_value = make_rows()

        response = await mocked_db_client.get("/colorid/missing")

        assert response.status_code == 404
        assert "missing" in response.json()["message"]

    @pytest.mark.asyncio
    async def test_addcolor_created(self, mocked_db_client, mock_db_session, count_result):
        mock_db_session.execute.return_value = count_result(0)

        response = await mocked_db_client.post(
            "/addcolor", json={"hex": "#ABCDEF", "name": "pale"}
        )

        assert response.status_code == 201
        assert response.json()["inserted_id"]

    @pytest.mark.asyncio
    async def test_addcolor_duplicate_is_409(self, mocked_db_client, mock_db_session, count_result):
        mock_db_session.execute.return_value = count_result(1)

        response = await mocked_db_client.post(
            "/addcolor", json={"hex": "#ABCDEF", "name": "pale"}
        )

        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    @pytest.mark.asyncio
    async def test_addcolor_missing_name_is_400(self, mocked_db_client):
        response = await mocked_db_client.post("/addcolor", json={"hex": "#ABCDEF"})

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "validation_error"
        assert body["details"]["field"] == "name"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, mocked_db_client, mock_db_session, make_rows):
        mock_db_session.execute.return_value = make_rows()

        response = await mocked_db_client.get("/", headers={"X-Request-ID": "trace-42"})

        assert response.headers["X-Request-ID"] == "trace-42"
        assert response.json()["request_id"] == "trace-42"


class TestHealthRoute:
    """Tests for GET /health."""

    @pytest.mark.asyncio
    async def test_healthy(self, test_client):
        with patch("palette.routes.health.ping_database", AsyncMock(return_value=True)):
            response = await test_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_unhealthy_when_database_down(self, test_client):
        with patch(
            "palette.routes.health.ping_database",
            AsyncMock(side_effect=ConnectionError("refused")),
        ):
            response = await test_client.get("/health")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"
        assert response.json()["database"] == "disconnected"


class TestColorRoutesEndToEnd:
    """Full stack against the SQLite test database."""

    @pytest.mark.asyncio
    async def test_insert_then_transform_keeps_insertion_order(self, db_tables, test_client):
        for hex_value, name in [("#0000FF", "blue"), ("#FF0000", "red"), ("#808080", "grey")]:
            response = await test_client.post("/addcolor", json={"hex": hex_value, "name": name})
            assert response.status_code == 201

        response = await test_client.get("/colors")

        assert response.status_code == 200
        body = response.json()
        assert [o["name"] for o in body] == ["blue", "red", "grey"]
        assert body[0]["hue"] == pytest.approx(240)
        assert body[2]["saturation"] == 0
        assert body[2]["luma"] == pytest.approx(128 / 255)

    @pytest.mark.asyncio
    async def test_duplicate_insert_rejected(self, db_tables, test_client):
        first = await test_client.post("/addcolor", json={"hex": "#123456", "name": "a"})
        second = await test_client.post("/addcolor", json={"hex": "#123456", "name": "b"})

        assert first.status_code == 201
        assert second.status_code == 409

    @pytest.mark.asyncio
    async def test_duplicate_caught_by_unique_constraint(self, db_tables, test_client):
        from palette.services.color_service import ColorService

        first = await test_client.post("/addcolor", json={"hex": "#654321", "name": "a"})
        # Simulate a concurrent insert slipping past the existence check
        with patch.object(ColorService, "hex_exists", AsyncMock(return_value=False)):
            second = await test_client.post("/addcolor", json={"hex": "#654321", "name": "b"})

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["error"] == "conflict"
        assert second.json()["details"]["hex"] == "#654321"

    @pytest.mark.asyncio
    async def test_lookup_by_name_and_id(self, db_tables, test_client):
        created = await test_client.post("/addcolor", json={"hex": "#C0FFEE", "name": "coffee"})
        color_id = created.json()["inserted_id"]

        by_name = await test_client.get("/colorname/coffee")
        by_id = await test_client.get(f"/colorid/{color_id}")

        assert by_name.json() == [{"id": color_id, "hex": "#C0FFEE", "name": "coffee"}]
        assert by_id.json() == by_name.json()

    @pytest.mark.asyncio
    async def test_corrupt_stored_color_fails_listing(self, db_tables, test_client):
        from palette.database import async_session_factory
        from palette.models.color import Color

        await test_client.post("/addcolor", json={"hex": "#FFFFFF", "name": "white"})
        # Bypass the API validation to simulate bad data already in the table
        async with async_session_factory() as session:
            session.add(Color(id="corrupt", hex="#FFF", name="short"))
            await session.commit()

        response = await test_client.get("/colors")

        assert response.status_code == 500
        assert response.json()["error"] == "malformed_color_data"
        assert response.json()["details"]["record_id"] == "corrupt"


class TestAccessLogLevel:
    """Tests for the access log severity mapping."""

    def test_levels_follow_status_class(self):
        import logging

        from palette.middleware.logging import level_for_status

        assert level_for_status(201) == logging.INFO
        assert level_for_status(404) == logging.WARNING
        assert level_for_status(500) == logging.ERROR
