import uuid
from datetime import timedelta

from moodflow.core.time_utils import utc_now
from moodflow.models.enums import MoodType
from moodflow.models.mood import Mood
from moodflow.stores import SqlEntryStore, create_entry


def post_mood(client, user, mood_type="happy", score=4, emoji="😊", note=None):
    body = {"user_id": user["id"], "mood_type": mood_type, "emoji": emoji, "mood_score": score}
    if note is not None:
        body["note"] = note
    return client.post("/api/moods", headers=user["headers"], json=body)


def insert_mood(session, user, mood_type, score, days_ago):
    created = utc_now() - timedelta(days=days_ago)
    session.add(Mood(
        user_id=uuid.UUID(user["id"]),
        mood_type=mood_type,
        emoji="🙂",
        mood_score=score,
        created_at=created,
        updated_at=created,
    ))
    session.commit()


class TestCreateMood:
    def test_created(self, client, alice):
        response = post_mood(client, alice, note="  Feeling great today!  ")
        assert response.status_code == 201
        data = response.json()
        assert data["user_id"] == alice["id"]
        assert data["mood_type"] == "happy"
        assert data["mood_score"] == 4
        assert data["note"] == "Feeling great today!"
        assert data["created_at"].endswith("Z")
        uuid.UUID(data["id"])

    def test_requires_auth(self, client, alice):
        response = client.post("/api/moods", json={
            "user_id": alice["id"], "mood_type": "happy", "emoji": "😊", "mood_score": 4,
        })
        assert response.status_code == 401

    def test_invalid_token(self, client, alice):
        response = client.post(
            "/api/moods",
            headers={"Authorization": "Bearer not-a-token"},
            json={"user_id": alice["id"], "mood_type": "happy", "emoji": "😊", "mood_score": 4},
        )
        assert response.status_code == 401

    def test_for_another_user_is_forbidden(self, client, alice, bob):
        response = client.post("/api/moods", headers=alice["headers"], json={
            "user_id": bob["id"], "mood_type": "happy", "emoji": "😊", "mood_score": 4,
        })
        assert response.status_code == 403

    def test_score_out_of_range(self, client, alice):
        assert post_mood(client, alice, score=6).status_code == 400
        assert post_mood(client, alice, score=0).status_code == 400

    def test_unknown_mood_type(self, client, alice):
        assert post_mood(client, alice, mood_type="bored").status_code == 400

    def test_missing_fields(self, client, alice):
        response = client.post("/api/moods", headers=alice["headers"], json={
            "user_id": alice["id"], "mood_type": "happy",
        })
        assert response.status_code == 400
        missing = {error["loc"][-1] for error in response.json()["detail"]}
        assert missing == {"emoji", "mood_score"}


class TestListMoods:
    def test_newest_first(self, client, alice):
        post_mood(client, alice, "sad", 2, note="first")
        post_mood(client, alice, "calm", 3, note="second")

        response = client.get(f"/api/moods/user/{alice['id']}", headers=alice["headers"])
        assert response.status_code == 200
        assert [m["note"] for m in response.json()] == ["second", "first"]

    def test_limit(self, client, alice):
        for _ in range(4):
            post_mood(client, alice)
        response = client.get(f"/api/moods/user/{alice['id']}?limit=3", headers=alice["headers"])
        assert len(response.json()) == 3

    def test_only_own_entries(self, client, alice, bob):
        post_mood(client, bob)
        response = client.get(f"/api/moods/user/{bob['id']}", headers=alice["headers"])
        assert response.status_code == 403
        response = client.get(f"/api/moods/user/{alice['id']}", headers=alice["headers"])
        assert response.json() == []


class TestStatistics:
    def test_counts_and_average(self, client, alice):
        post_mood(client, alice, "happy", 4)
        post_mood(client, alice, "happy", 5)
        post_mood(client, alice, "sad", 2)

        response = client.get(f"/api/moods/stats/{alice['id']}", headers=alice["headers"])
        assert response.status_code == 200
        data = response.json()
        assert data["total_entries"] == 3
        assert data["average_mood_score"] == 3.67
        assert data["mood_distribution"] == [
            {"mood_type": "happy", "count": 2, "avg_score": 4.5},
            {"mood_type": "sad", "count": 1, "avg_score": 2.0},
        ]

    def test_empty(self, client, alice):
        data = client.get(f"/api/moods/stats/{alice['id']}", headers=alice["headers"]).json()
        assert data == {"mood_distribution": [], "total_entries": 0, "average_mood_score": 0.0}


class TestWeeklyTrend:
    def test_trailing_week_newest_first(self, client, session, alice):
        insert_mood(session, alice, "happy", 4, 0)
        insert_mood(session, alice, "sad", 2, 0)
        insert_mood(session, alice, "calm", 3, 2)
        insert_mood(session, alice, "angry", 1, 6)
        insert_mood(session, alice, "excited", 5, 7)

        response = client.get(f"/api/moods/weekly/{alice['id']}", headers=alice["headers"])
        assert response.status_code == 200
        data = response.json()
        assert [d["entries_count"] for d in data] == [2, 1, 1]
        assert [d["avg_score"] for d in data] == [3.0, 3.0, 1.0]
        assert data[0]["date"] == utc_now().date().isoformat()


class TestSummary:
    def test_dashboard_stats(self, client, session, alice):
        post_mood(client, alice, "happy", 4)
        post_mood(client, alice, "happy", 4)
        insert_mood(session, alice, "sad", 2, 1)

        response = client.get(f"/api/moods/summary/{alice['id']}", headers=alice["headers"])
        assert response.status_code == 200
        data = response.json()
        assert data["total_entries"] == 3
        assert data["mood_distribution"] == {"happy": 2, "sad": 1, "angry": 0, "calm": 0, "excited": 0}
        assert data["mood_percentages"] == {"happy": 67, "sad": 33, "angry": 0, "calm": 0, "excited": 0}
        assert data["average_mood"] == "happy"
        assert data["streak_count"] == 2
        assert data["this_week"] == 3
        assert len(data["weekly_data"]) == 7
        assert data["weekly_data"][-1]["date"] == utc_now().date().isoformat()
        assert [b["score"] for b in data["weekly_data"]][-2:] == [2, 4]

    def test_empty(self, client, alice):
        data = client.get(f"/api/moods/summary/{alice['id']}", headers=alice["headers"]).json()
        assert data["total_entries"] == 0
        assert data["streak_count"] == 0
        assert data["this_week"] == 0
        assert [b["score"] for b in data["weekly_data"]] == [0] * 7


class TestUpdateMood:
    def test_updated(self, client, alice):
        mood_id = post_mood(client, alice, note="meh").json()["id"]
        response = client.put(f"/api/moods/{mood_id}", headers=alice["headers"], json={
            "mood_type": "excited", "emoji": "🎉", "mood_score": 5, "note": "better now",
        })
        assert response.status_code == 200
        data = response.json()
        assert data["mood_type"] == "excited"
        assert data["note"] == "better now"

    def test_missing_fields(self, client, alice):
        mood_id = post_mood(client, alice).json()["id"]
        response = client.put(f"/api/moods/{mood_id}", headers=alice["headers"], json={"note": "x"})
        assert response.status_code == 400

    def test_not_found(self, client, alice):
        response = client.put(f"/api/moods/{uuid.uuid4()}", headers=alice["headers"], json={
            "mood_type": "calm", "emoji": "😌", "mood_score": 3,
        })
        assert response.status_code == 404

    def test_another_users_entry_is_not_found(self, client, alice, bob):
        mood_id = post_mood(client, bob).json()["id"]
        response = client.put(f"/api/moods/{mood_id}", headers=alice["headers"], json={
            "mood_type": "calm", "emoji": "😌", "mood_score": 3,
        })
        assert response.status_code == 404


class TestDeleteMood:
    def test_deleted(self, client, alice):
        mood_id = post_mood(client, alice).json()["id"]
        response = client.delete(f"/api/moods/{mood_id}", headers=alice["headers"])
        assert response.status_code == 204
        assert client.delete(f"/api/moods/{mood_id}", headers=alice["headers"]).status_code == 404

    def test_not_found(self, client, alice):
        response = client.delete(f"/api/moods/{uuid.uuid4()}", headers=alice["headers"])
        assert response.status_code == 404


class TestSqlEntryStore:
    def test_append_and_list(self, session, alice):
        store = SqlEntryStore(session, uuid.UUID(alice["id"]))
        stored = store.append(create_entry(MoodType.CALM, "quiet evening"))
        store.append(create_entry(MoodType.EXCITED))

        entries = store.list_all()
        assert [e.mood for e in entries] == [MoodType.EXCITED, MoodType.CALM]
        assert entries[1].id == stored.id
        assert entries[1].note == "quiet evening"
        assert entries[1].timestamp.tzinfo is not None
        assert store.recent(1) == entries[:1]

    def test_scores_follow_mood_kind(self, session, alice):
        store = SqlEntryStore(session, uuid.UUID(alice["id"]))
        store.append(create_entry(MoodType.ANGRY))
        mood = store.service.get_all_user_moods(uuid.UUID(alice["id"]))[0]
        assert mood.mood_score == 1
