"""End-to-end tests through the HTTP API."""

import pytest

API = "/api/v1"


async def _register(client, name="Alice", **extra):
    response = await client.post(f"{API}/users", json={"name": name, "goal": "cut", **extra})
    assert response.status_code == 201
    return response.json()


async def _upload_and_confirm(client, user_id, measured_at, **fields):
    response = await client.post(
        f"{API}/users/{user_id}/reports",
        json={"measured_at": measured_at, "raw_json": {"body_fat_pct": fields.get("body_fat_pct")}},
    )
    assert response.status_code == 201
    report = response.json()
    assert report["confirmed"] is False

    response = await client.post(f"{API}/reports/{report['id']}/confirm", json=fields)
    assert response.status_code == 200
    return response.json()


class TestHealth:
    @pytest.mark.asyncio
    async def test_liveness(self, client):
        response = await client.get(f"{API}/health")

        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_readiness(self, client):
        response = await client.get(f"{API}/health/ready")

        assert response.json() == {"status": "ok", "database": "sqlite", "participants": 0, "pending_reports": 0}

    @pytest.mark.asyncio
    async def test_readiness_counts_participants_and_pending_reports(self, client):
        user = await _register(client)
        await _register(client, "Guest", is_demo=True)
        await client.post(f"{API}/users/{user['id']}/reports", json={"measured_at": "2024-01-10"})

        body = (await client.get(f"{API}/health/ready")).json()

        assert body["participants"] == 1
        assert body["pending_reports"] == 1


class TestUsers:
    @pytest.mark.asyncio
    async def test_register(self, client):
        user = await _register(client)

        assert user["goal"] == "cut"
        assert user["is_demo"] is False
        assert user["competition_start"] is None

    @pytest.mark.asyncio
    async def test_unknown_user(self, client):
        response = await client.get(f"{API}/users/999/prediction")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_goal(self, client):
        response = await client.post(f"{API}/users", json={"name": "Bob", "goal": "shred"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_competition_override(self, client):
        user = await _register(client)

        response = await client.put(
            f"{API}/users/{user['id']}/competition",
            json={"competition_start": "2024-02-01", "competition_end": "2024-04-01"},
        )

        assert response.status_code == 200
        assert response.json()["competition_end"] == "2024-04-01"

    @pytest.mark.asyncio
    async def test_competition_override_rejects_inverted_window(self, client):
        user = await _register(client)

        response = await client.put(
            f"{API}/users/{user['id']}/competition",
            json={"competition_start": "2024-04-01", "competition_end": "2024-02-01"},
        )

        assert response.status_code == 422


class TestReportFlow:
    @pytest.mark.asyncio
    async def test_first_confirmation_opens_window_and_awards(self, client):
        user = await _register(client)

        result = await _upload_and_confirm(client, user["id"], "2024-01-10T08:30:00", body_fat_pct=25.0)

        assert result["report"]["confirmed"] is True
        assert result["report"]["measurement"]["body_fat_pct"] == 25.0
        assert result["new_badges"] == [{"type": "first_upload", "label": "🎯 起步"}]

        refreshed = (await client.get(f"{API}/users/{user['id']}")).json()
        assert refreshed["competition_start"] == "2024-01-10"
        assert refreshed["competition_end"] == "2024-03-10"

    @pytest.mark.asyncio
    async def test_window_is_not_moved_by_later_reports(self, client):
        user = await _register(client)
        await _upload_and_confirm(client, user["id"], "2024-01-10", body_fat_pct=25.0)
        await _upload_and_confirm(client, user["id"], "2024-01-20", body_fat_pct=24.0)

        refreshed = (await client.get(f"{API}/users/{user['id']}")).json()

        assert refreshed["competition_start"] == "2024-01-10"

    @pytest.mark.asyncio
    async def test_corrected_measured_at(self, client):
        user = await _register(client)
        report = (
            await client.post(f"{API}/users/{user['id']}/reports", json={"measured_at": "2024-01-10"})
        ).json()

        response = await client.post(
            f"{API}/reports/{report['id']}/confirm",
            json={"measured_at": "2024-01-09", "body_fat_pct": 25.0},
        )

        assert response.json()["report"]["measured_at"] == "2024-01-09"

    @pytest.mark.asyncio
    async def test_confirm_twice_conflicts(self, client):
        user = await _register(client)
        result = await _upload_and_confirm(client, user["id"], "2024-01-10", body_fat_pct=25.0)

        response = await client.post(f"{API}/reports/{result['report']['id']}/confirm", json={})

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_bad_timestamp(self, client):
        user = await _register(client)

        response = await client.post(f"{API}/users/{user['id']}/reports", json={"measured_at": "last tuesday"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_pending_reports_listed_but_not_in_series(self, client):
        user = await _register(client)
        await _upload_and_confirm(client, user["id"], "2024-01-10", body_fat_pct=25.0)
        await client.post(f"{API}/users/{user['id']}/reports", json={"measured_at": "2024-01-17"})

        reports = (await client.get(f"{API}/users/{user['id']}/reports")).json()
        series = (await client.get(f"{API}/users/{user['id']}/series")).json()

        assert [r["confirmed"] for r in reports] == [False, True]
        assert [p["measured_at"] for p in series] == ["2024-01-10"]

    @pytest.mark.asyncio
    async def test_segmental_breakdown(self, client):
        user = await _register(client)

        result = await _upload_and_confirm(
            client, user["id"], "2024-01-10", segmental_lean={"trunk": 24.5, "left_arm": 3.0}
        )

        assert result["report"]["measurement"]["segmental_lean"] == {
            "right_arm": None,
            "left_arm": 3.0,
            "trunk": 24.5,
            "right_leg": None,
            "left_leg": None,
        }


class TestPredictionAndLeaderboard:
    @pytest.mark.asyncio
    async def test_prediction_locked_until_two_points(self, client):
        user = await _register(client)
        await _upload_and_confirm(client, user["id"], "2024-01-01", body_fat_pct=25.0)

        locked = (await client.get(f"{API}/users/{user['id']}/prediction")).json()
        await _upload_and_confirm(client, user["id"], "2024-01-31", body_fat_pct=24.0)
        unlocked = (await client.get(f"{API}/users/{user['id']}/prediction")).json()

        assert locked == {"user_id": user["id"], "reason": "insufficient_data"}
        # -1.0 per 30 days, window ends 2024-03-01 (60 days)
        assert unlocked["predicted_fat_pct"] == 23.0
        assert unlocked["predicted_change"] == -2.0
        assert unlocked["data_points"] == 2

    @pytest.mark.asyncio
    async def test_leaderboard_excludes_demo(self, client):
        alice = await _register(client, "Alice")
        bob = await _register(client, "Bob")
        demo = await _register(client, "Demo", is_demo=True)
        for user, (first, last) in ((alice, (25.0, 24.0)), (bob, (25.0, 22.0)), (demo, (30.0, 20.0))):
            await _upload_and_confirm(client, user["id"], "2024-01-01", body_fat_pct=first)
            await _upload_and_confirm(client, user["id"], "2024-01-31", body_fat_pct=last)

        board = (await client.get(f"{API}/leaderboard/predictions")).json()

        assert [e["name"] for e in board["entries"]] == ["Bob", "Alice"]
        assert [e["band"] for e in board["entries"]] == ["winner", "danger"]
        assert board["matchups"][0]["loser"]["name"] == "Alice"

    @pytest.mark.asyncio
    async def test_evaluate_is_idempotent(self, client):
        user = await _register(client)
        await _upload_and_confirm(client, user["id"], "2024-01-01", body_fat_pct=25.0)

        response = await client.post(f"{API}/users/{user['id']}/badges/evaluate")
        badges = (await client.get(f"{API}/users/{user['id']}/badges")).json()

        assert response.json() == []
        assert [b["type"] for b in badges] == ["first_upload"]

    @pytest.mark.asyncio
    async def test_dashboard(self, client):
        user = await _register(client)
        for day, fat in ((1, 25.0), (11, 24.0), (21, 23.0), (31, 22.0)):
            await _upload_and_confirm(client, user["id"], f"2024-01-{day:02d}", body_fat_pct=fat)

        dashboard = (await client.get(f"{API}/users/{user['id']}/dashboard")).json()

        assert dashboard["confirmed_reports"] == 4
        assert dashboard["unlocks"] == {"trend": True, "advice": True}
        assert dashboard["rank"] == 1
        assert dashboard["total_ranked"] == 1
        assert dashboard["prediction"]["predicted_fat_pct"] == 19.0
        assert "four_uploads" in [b["type"] for b in dashboard["badges"]]
        assert dashboard["badge_count"] == len(dashboard["badges"])
        assert dashboard["targets"] is None


class TestDeletes:
    @pytest.mark.asyncio
    async def test_delete_user_cascades(self, client):
        user = await _register(client)
        result = await _upload_and_confirm(client, user["id"], "2024-01-01", body_fat_pct=25.0)

        response = await client.delete(f"{API}/users/{user['id']}")

        assert response.status_code == 204
        assert (await client.get(f"{API}/users/{user['id']}")).status_code == 404
        assert (await client.get(f"{API}/reports/{result['report']['id']}")).status_code == 404

    @pytest.mark.asyncio
    async def test_delete_report_keeps_badges(self, client):
        user = await _register(client)
        result = await _upload_and_confirm(client, user["id"], "2024-01-01", body_fat_pct=25.0)

        response = await client.delete(f"{API}/reports/{result['report']['id']}")
        series = (await client.get(f"{API}/users/{user['id']}/series")).json()
        badges = (await client.get(f"{API}/users/{user['id']}/badges")).json()

        assert response.status_code == 204
        assert series == []
        assert [b["type"] for b in badges] == ["first_upload"]


class TestTimestampOrdering:
    @pytest.mark.asyncio
    async def test_mixed_separators_sort_by_time(self, client):
        user = await _register(client)
        await _upload_and_confirm(client, user["id"], "2024-01-05T08:00", body_fat_pct=30.0)
        result = await _upload_and_confirm(client, user["id"], "2024-01-05 20:00", body_fat_pct=26.0)

        series = (await client.get(f"{API}/users/{user['id']}/series")).json()
        prediction = (await client.get(f"{API}/users/{user['id']}/prediction")).json()

        assert [p["measured_at"] for p in series] == ["2024-01-05T08:00:00+00:00", "2024-01-05T20:00:00+00:00"]
        assert prediction["first_fat_pct"] == 30.0
        assert prediction["current_fat_pct"] == 26.0
        assert [b["type"] for b in result["new_badges"]] == ["second_upload", "fat_down_1", "fat_down_3"]

    @pytest.mark.asyncio
    async def test_offsets_are_converted_to_utc(self, client):
        user = await _register(client)
        await _upload_and_confirm(client, user["id"], "2024-01-09T20:00", body_fat_pct=25.0)
        # 17:00 UTC, earlier than the reading above
        await _upload_and_confirm(client, user["id"], "2024-01-10T01:00:00+08:00", body_fat_pct=26.0)
        await _upload_and_confirm(client, user["id"], "2024-01-10T06:00:00Z", body_fat_pct=24.0)

        series = (await client.get(f"{API}/users/{user['id']}/series")).json()
        history = (await client.get(f"{API}/users/{user['id']}/reports")).json()

        assert [p["body_fat_pct"] for p in series] == [26.0, 25.0, 24.0]
        assert [r["measured_at"] for r in history] == [
            "2024-01-10T06:00:00+00:00",
            "2024-01-09T20:00:00+00:00",
            "2024-01-09T17:00:00+00:00",
        ]

    @pytest.mark.asyncio
    async def test_date_only_kept_as_date(self, client):
        user = await _register(client)

        report = (
            await client.post(f"{API}/users/{user['id']}/reports", json={"measured_at": " 2024-01-10 "})
        ).json()

        assert report["measured_at"] == "2024-01-10"


class TestSettings:
    @pytest.mark.asyncio
    async def test_defaults_before_first_save(self, client):
        user = await _register(client)

        settings = (await client.get(f"{API}/users/{user['id']}/settings")).json()

        assert settings == {
            "user_id": user["id"],
            "goal": "cut",
            "target_weight": None,
            "target_body_fat_pct": None,
            "target_skeletal_muscle": None,
        }

    @pytest.mark.asyncio
    async def test_save_and_replace(self, client):
        user = await _register(client)

        first = await client.put(
            f"{API}/users/{user['id']}/settings",
            json={"goal": "bulk", "target_body_fat_pct": 18.0, "target_skeletal_muscle": 34.0},
        )
        second = await client.put(f"{API}/users/{user['id']}/settings", json={"target_weight": 70.0})
        refreshed = (await client.get(f"{API}/users/{user['id']}")).json()

        assert first.status_code == 200
        assert first.json()["goal"] == "bulk"
        assert first.json()["target_body_fat_pct"] == 18.0
        assert second.json()["goal"] == "maintain"
        assert second.json()["target_weight"] == 70.0
        assert second.json()["target_body_fat_pct"] is None
        assert refreshed["goal"] == "maintain"

    @pytest.mark.asyncio
    async def test_out_of_range_target(self, client):
        user = await _register(client)

        response = await client.put(f"{API}/users/{user['id']}/settings", json={"target_body_fat_pct": 150})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_dashboard_carries_targets(self, client):
        user = await _register(client)
        await client.put(f"{API}/users/{user['id']}/settings", json={"goal": "cut", "target_body_fat_pct": 17.0})

        dashboard = (await client.get(f"{API}/users/{user['id']}/dashboard")).json()

        assert dashboard["targets"] == {
            "target_weight": None,
            "target_body_fat_pct": 17.0,
            "target_skeletal_muscle": None,
        }


class TestMetricLeaderboard:
    @pytest.mark.asyncio
    async def test_muscle_gain_ranks_first(self, client):
        alice = await _register(client, "Alice")
        bob = await _register(client, "Bob")
        for user, (first, last) in ((alice, (30.0, 30.5)), (bob, (30.0, 32.0))):
            await _upload_and_confirm(client, user["id"], "2024-01-01", skeletal_muscle=first)
            await _upload_and_confirm(client, user["id"], "2024-01-31", skeletal_muscle=last)

        board = (await client.get(f"{API}/leaderboard", params={"metric": "skeletal_muscle", "period": "all"})).json()

        assert board["lower_is_better"] is False
        assert [e["name"] for e in board["entries"]] == ["Bob", "Alice"]
        assert [e["change"] for e in board["entries"]] == [2.0, 0.5]
        # first_upload, second_upload, muscle_up_05, plus muscle_up_1 for Bob
        assert [e["badge_count"] for e in board["entries"]] == [4, 3]

    @pytest.mark.asyncio
    async def test_unknown_metric(self, client):
        response = await client.get(f"{API}/leaderboard", params={"metric": "weight"})

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_unknown_period(self, client):
        response = await client.get(f"{API}/leaderboard", params={"period": "7"})

        assert response.status_code == 422


class TestDemoEndpoint:
    @pytest.mark.asyncio
    async def test_reset_keeps_id(self, client):
        first = (await client.post(f"{API}/users/demo")).json()
        second = (await client.post(f"{API}/users/demo")).json()

        settings = (await client.get(f"{API}/users/{second['id']}/settings")).json()

        assert second["id"] == first["id"]
        assert second["is_demo"] is True
        assert settings["target_body_fat_pct"] == 17.0
