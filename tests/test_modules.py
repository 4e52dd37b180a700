"""Tests for module progress: answering, completion, badges and reset."""
import asyncio

from sqlalchemy import func, select

from skillpath.db.session import AsyncSessionLocal
from skillpath.models import ModuleProgress
from skillpath.services import progress as progress_service
from tests.conftest import find_module, module_quiz, register, set_points

FRACTIONS_ANSWERS = {"q1": "3", "q2": "3/6"}


def answer(client, headers, module_id, quiz_id, question_id, value):
    return client.post(
        f"/api/modules/{module_id}/answer",
        headers=headers,
        json={"quiz_id": quiz_id, "question_id": question_id, "answer": value},
    )


def fractions(client, headers):
    module = find_module(client, headers, "Fractions Basics")
    quiz = module_quiz(client, headers, module["id"])
    return module, quiz


class TestCatalog:
    def test_list_seeded_modules(self, client, student):
        headers, _ = student
        modules = client.get("/api/modules", headers=headers).json()
        assert [m["title"] for m in modules] == ["Fractions Basics", "Cells and Organisms", "Reading Strategies"]
        first = modules[0]
        assert first["quiz_count"] == 1
        assert first["points_reward"] == 5
        assert first["progress_percentage"] == 0
        assert first["is_completed"] is False
        assert first["is_generated"] is False

    def test_get_unknown_module(self, client, student):
        headers, _ = student
        assert client.get("/api/modules/999", headers=headers).status_code == 404

    def test_requires_auth(self, client):
        assert client.get("/api/modules").status_code == 401

    def test_quizzes_hide_correct_answers(self, client, student):
        headers, _ = student
        _, quiz = fractions(client, headers)
        assert quiz["passing_score"] == 70
        assert [q["id"] for q in quiz["questions"]] == ["q1", "q2"]
        assert all("correct_answer" not in q for q in quiz["questions"])

    def test_start_is_idempotent(self, client, student):
        headers, _ = student
        module, quiz = fractions(client, headers)
        first = client.post(f"/api/modules/{module['id']}/start", headers=headers)
        assert first.status_code == 200
        assert first.json()["progress_percentage"] == 0

        answer(client, headers, module["id"], quiz["id"], "q1", "3")
        second = client.post(f"/api/modules/{module['id']}/start", headers=headers).json()
        assert second["progress_percentage"] == 50
        assert second["answers"] == {f"{quiz['id']}:q1": "3"}


class TestAnswers:
    def test_correct_answer_awards_points_and_progress(self, client, student):
        headers, _ = student
        module, quiz = fractions(client, headers)

        data = answer(client, headers, module["id"], quiz["id"], "q1", "3").json()
        assert data["correct"] is True
        assert data["points_earned"] == 5
        assert data["progress_percentage"] == 50
        assert data["total_points"] == 5
        assert [a["title"] for a in data["new_achievements"]] == ["First Steps"]

    def test_repeated_correct_answer_pays_once(self, client, student):
        headers, _ = student
        module, quiz = fractions(client, headers)
        answer(client, headers, module["id"], quiz["id"], "q1", "3")
        data = answer(client, headers, module["id"], quiz["id"], "q1", "3").json()
        assert data["points_earned"] == 0
        assert data["total_points"] == 5
        assert data["progress_percentage"] == 50

    def test_wrong_answer(self, client, student):
        headers, _ = student
        module, quiz = fractions(client, headers)
        data = answer(client, headers, module["id"], quiz["id"], "q2", "2/3").json()
        assert data["correct"] is False
        assert data["points_earned"] == 0
        assert data["progress_percentage"] == 0

        progress = client.get(f"/api/modules/{module['id']}/progress", headers=headers).json()
        assert progress["answers"] == {f"{quiz['id']}:q2": "2/3"}

    def test_all_correct_reaches_full_progress_without_completing(self, client, student):
        headers, _ = student
        module, quiz = fractions(client, headers)
        for qid, value in FRACTIONS_ANSWERS.items():
            answer(client, headers, module["id"], quiz["id"], qid, value)
        fetched = client.get(f"/api/modules/{module['id']}", headers=headers).json()
        assert fetched["progress_percentage"] == 100
        assert fetched["is_completed"] is False

    def test_unknown_question(self, client, student):
        headers, _ = student
        module, quiz = fractions(client, headers)
        assert answer(client, headers, module["id"], quiz["id"], "q9", "3").status_code == 404

    def test_quiz_from_other_module(self, client, student):
        headers, _ = student
        module, _ = fractions(client, headers)
        cells = find_module(client, headers, "Cells and Organisms")
        cells_quiz = module_quiz(client, headers, cells["id"])
        assert answer(client, headers, module["id"], cells_quiz["id"], "q1", "Cell").status_code == 404


class TestCompletion:
    def test_complete_with_high_score_awards_badge(self, client, student):
        headers, profile = student
        module, quiz = fractions(client, headers)
        for qid, value in FRACTIONS_ANSWERS.items():
            answer(client, headers, module["id"], quiz["id"], qid, value)

        response = client.post(f"/api/modules/{module['id']}/complete", headers=headers)
        assert response.status_code == 200
        data = response.json()
        assert data["score"] == 100
        assert data["points_earned"] == 5
        assert data["total_points"] == 15
        assert data["badge"]["name"] == "Beginner Badge"
        assert data["badge"]["description"] == "Completed Fractions Basics"
        assert data["previous_level"] == "Beginner Level 1"
        assert data["level_up"] is False

        fetched = client.get(f"/api/modules/{module['id']}", headers=headers).json()
        assert fetched["progress_percentage"] == 100
        assert fetched["is_completed"] is True
        assert fetched["is_read_only"] is True

        badges = client.get(f"/api/badges/{profile['user_id']}", headers=headers).json()
        assert len(badges) == 1

    def test_low_score_completes_without_badge(self, client, student):
        headers, _ = student
        module, quiz = fractions(client, headers)
        answer(client, headers, module["id"], quiz["id"], "q1", "3")
        answer(client, headers, module["id"], quiz["id"], "q2", "4/6")

        data = client.post(f"/api/modules/{module['id']}/complete", headers=headers).json()
        assert data["score"] == 50
        assert data["badge"] is None
        assert data["points_earned"] == 5

    def test_completed_module_is_read_only(self, client, student):
        headers, _ = student
        module, quiz = fractions(client, headers)
        client.post(f"/api/modules/{module['id']}/complete", headers=headers)

        assert answer(client, headers, module["id"], quiz["id"], "q1", "3").status_code == 409
        assert client.post(f"/api/modules/{module['id']}/complete", headers=headers).status_code == 409

    def test_reading_module_without_quiz_scores_full(self, client, student):
        headers, _ = student
        module = find_module(client, headers, "Reading Strategies")
        data = client.post(f"/api/modules/{module['id']}/complete", headers=headers).json()
        assert data["score"] == 100
        assert data["badge"]["name"] == "Beginner Badge"

    def test_level_up_reported(self, client, student):
        headers, profile = student
        set_points(profile["user_id"], 97)
        module = find_module(client, headers, "Reading Strategies")
        data = client.post(f"/api/modules/{module['id']}/complete", headers=headers).json()
        assert data["previous_level"] == "Beginner Level 1"
        assert data["current_level"] == "Beginner Level 2"
        assert data["level_up"] is True


class TestReset:
    def test_reset_keeps_points_and_badge(self, client, student):
        headers, profile = student
        module, quiz = fractions(client, headers)
        for qid, value in FRACTIONS_ANSWERS.items():
            answer(client, headers, module["id"], quiz["id"], qid, value)
        client.post(f"/api/modules/{module['id']}/complete", headers=headers)

        progress = client.post(f"/api/modules/{module['id']}/reset", headers=headers).json()
        assert progress["progress_percentage"] == 0
        assert progress["is_completed"] is False
        assert progress["is_read_only"] is False
        assert progress["answers"] == {}
        assert client.get("/api/profile", headers=headers).json()["total_points"] == 15

    def test_retake_pays_nothing_twice(self, client, student):
        headers, profile = student
        module, quiz = fractions(client, headers)
        for qid, value in FRACTIONS_ANSWERS.items():
            answer(client, headers, module["id"], quiz["id"], qid, value)
        client.post(f"/api/modules/{module['id']}/complete", headers=headers)
        client.post(f"/api/modules/{module['id']}/reset", headers=headers)

        for qid, value in FRACTIONS_ANSWERS.items():
            retake = answer(client, headers, module["id"], quiz["id"], qid, value).json()
            assert retake["correct"] is True
            assert retake["points_earned"] == 0
        assert retake["progress_percentage"] == 100

        data = client.post(f"/api/modules/{module['id']}/complete", headers=headers).json()
        assert data["points_earned"] == 0
        assert data["total_points"] == 15
        assert data["badge"] is None

        badges = client.get(f"/api/badges/{profile['user_id']}", headers=headers).json()
        assert len(badges) == 1


def test_progress_is_per_user(client, student):
    headers, _ = student
    other_headers, _ = register(client, "other@example.com")
    module, quiz = fractions(client, headers)
    answer(client, headers, module["id"], quiz["id"], "q1", "3")

    theirs = client.get(f"/api/modules/{module['id']}", headers=other_headers).json()
    assert theirs["progress_percentage"] == 0


async def _count_progress_rows(user_id, module_id):
    async with AsyncSessionLocal() as db:
        return await db.scalar(
            select(func.count(ModuleProgress.id)).where(
                ModuleProgress.user_id == user_id, ModuleProgress.module_id == module_id
            )
        )


def test_progress_row_created_concurrently_is_reused(client, student, monkeypatch):
    headers, profile = student
    module, quiz = fractions(client, headers)
    answer(client, headers, module["id"], quiz["id"], "q1", "3")

    # the first lookup misses, as if another request inserted the row meanwhile
    real_find = progress_service.find_progress
    lookups = []

    async def late_find(db, user_id, module_id):
        lookups.append(module_id)
        if len(lookups) == 1:
            return None
        return await real_find(db, user_id, module_id)

    monkeypatch.setattr(progress_service, "find_progress", late_find)

    async def start():
        async with AsyncSessionLocal() as db:
            progress = await progress_service.get_or_create_progress(db, profile["user_id"], module["id"])
            await db.commit()
            return progress.progress_percentage, progress.answers

    percentage, answers = asyncio.run(start())
    assert len(lookups) == 2
    assert percentage == 50
    assert answers == {f"{quiz['id']}:q1": "3"}
    assert asyncio.run(_count_progress_rows(profile["user_id"], module["id"])) == 1
