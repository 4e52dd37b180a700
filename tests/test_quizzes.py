"""Tests for whole-quiz attempts."""
from tests.conftest import find_module, module_quiz, register


def fractions_quiz(client, headers):
    module = find_module(client, headers, "Fractions Basics")
    return module_quiz(client, headers, module["id"])


def attempt(client, headers, quiz_id, answers):
    return client.post(f"/api/quizzes/{quiz_id}/attempts", headers=headers, json={"answers": answers})


class TestAttempts:
    def test_passing_attempt_awards_quiz_points(self, client, student):
        headers, _ = student
        quiz = fractions_quiz(client, headers)

        response = attempt(client, headers, quiz["id"], {"q1": "3", "q2": "3/6"})
        assert response.status_code == 201
        data = response.json()
        assert data["score"] == 100
        assert data["passed"] is True
        assert data["points_earned"] == 20
        assert data["total_points"] == 20
        assert [a["title"] for a in data["new_achievements"]] == ["First Steps"]

    def test_second_pass_pays_nothing(self, client, student):
        headers, _ = student
        quiz = fractions_quiz(client, headers)
        attempt(client, headers, quiz["id"], {"q1": "3", "q2": "3/6"})

        data = attempt(client, headers, quiz["id"], {"q1": "3", "q2": "3/6"}).json()
        assert data["passed"] is True
        assert data["points_earned"] == 0
        assert data["total_points"] == 20

    def test_failing_attempt(self, client, student):
        headers, _ = student
        quiz = fractions_quiz(client, headers)

        data = attempt(client, headers, quiz["id"], {"q1": "3", "q2": "1/3"}).json()
        assert data["score"] == 50
        assert data["passed"] is False
        assert data["points_earned"] == 0
        assert data["total_points"] == 0

    def test_pass_after_fail_still_pays(self, client, student):
        headers, _ = student
        quiz = fractions_quiz(client, headers)
        attempt(client, headers, quiz["id"], {})

        data = attempt(client, headers, quiz["id"], {"q1": "3", "q2": "3/6"}).json()
        assert data["points_earned"] == 20

    def test_unknown_quiz(self, client, student):
        headers, _ = student
        assert attempt(client, headers, 999, {"q1": "3"}).status_code == 404


class TestQuizReads:
    def test_get_quiz_hides_answers(self, client, student):
        headers, _ = student
        quiz = fractions_quiz(client, headers)
        data = client.get(f"/api/quizzes/{quiz['id']}", headers=headers).json()
        assert data["title"] == "Fractions Basics Quiz"
        assert data["points_reward"] == 20
        assert all(set(q) == {"id", "question", "options"} for q in data["questions"])

    def test_history_newest_first_and_private(self, client, student):
        headers, _ = student
        quiz = fractions_quiz(client, headers)
        attempt(client, headers, quiz["id"], {"q1": "1"})
        attempt(client, headers, quiz["id"], {"q1": "3", "q2": "3/6"})

        history = client.get(f"/api/quizzes/{quiz['id']}/attempts", headers=headers).json()
        assert [a["score"] for a in history] == [100, 0]

        other_headers, _ = register(client, "other@example.com")
        assert client.get(f"/api/quizzes/{quiz['id']}/attempts", headers=other_headers).json() == []
