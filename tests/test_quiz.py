import json

from openai import OpenAIError

from careerconnect.services.quiz_service import (
    MISSING_KEY_ANALYSIS, compute_stats, grade_submission, round_half_up
)


def _add(client, text, answer="4", category="Aptitude"):
    response = client.post("/api/quiz/add", json={
        "question_text": text,
        "options": ["3", "4", "5"],
        "correct_answer": answer,
        "category": category,
        "explanation": "Because.",
    })
    assert response.status_code == 201, response.text
    return response.json()["question"]


def test_add_question_rejects_duplicates(client):
    question = _add(client, "2 + 2 = ?")
    assert question["_id"]
    assert question["correct_answer"] == "4"

    response = client.post("/api/quiz/add", json={
        "question_text": "2 + 2 = ?", "options": ["4"], "correct_answer": "4"
    })
    assert response.status_code == 400
    assert response.json() == {"message": "Question already exists"}


def test_student_view_hides_answers_and_caps_size(client):
    for i in range(12):
        _add(client, f"Question {i}")

    questions = client.get("/api/quiz/questions").json()
    assert len(questions) == 10
    assert len({q["_id"] for q in questions}) == 10
    for q in questions:
        assert "correct_answer" not in q
        assert "explanation" not in q


def test_admin_view_paginates_with_answers(client):
    for i in range(3):
        _add(client, f"Question {i}", category="Verbal" if i else "Aptitude")

    body = client.get("/api/quiz/questions", params={"admin": "true", "limit": 2}).json()
    assert body["pagination"] == {"totalRecords": 3, "currentPage": 1, "totalPages": 2, "limit": 2}
    assert "correct_answer" in body["data"][0]

    body = client.get("/api/quiz/questions", params={"admin": "true", "category": "verbal"}).json()
    assert body["pagination"]["totalRecords"] == 2

    body = client.get("/api/quiz/questions", params={"search": "question 0"}).json()
    assert [q["question_text"] for q in body["data"]] == ["Question 0"]


def test_delete_question(client):
    question = _add(client, "Delete me")
    response = client.delete(f"/api/quiz/{question['_id']}")
    assert response.json() == {"message": "Question deleted successfully"}
    assert client.delete(f"/api/quiz/{question['_id']}").status_code == 404


def test_submit_grades_and_records_attempt(client, make_student, db):
    make_student("alice")
    q1 = _add(client, "2 + 2 = ?", answer="4")
    q2 = _add(client, "3 + 2 = ?", answer="5")

    response = client.post("/api/quiz/submit", json={
        "username": "alice",
        "category": "Aptitude",
        "answers": {q1["_id"]: "4", q2["_id"]: "3"},
        "proctoringLog": [{"snapshotUrl": "https://x/1.jpg", "reason": "Phone detected"}],
    })
    assert response.status_code == 200
    body = response.json()
    assert body["score"] == 1
    assert body["total"] == 2
    assert body["message"] == "You scored 1 out of 2"
    assert {"question": "3 + 2 = ?", "selected": "3", "correct": "5", "isCorrect": False} in body["results"]

    attempts = db.students.find_one({"username": "alice"})["quizAttempts"]
    assert len(attempts) == 1
    assert attempts[0]["score"] == 1
    assert attempts[0]["proctoringLog"][0]["reason"] == "Phone detected"


def test_submit_for_unknown_student_still_grades(client):
    q1 = _add(client, "2 + 2 = ?")
    response = client.post("/api/quiz/submit", json={"username": "ghost", "answers": {q1["_id"]: "4"}})
    assert response.status_code == 200
    assert response.json()["score"] == 1


def test_stats(client, make_student, db):
    make_student("alice")
    db.students.update_one({"username": "alice"}, {"$set": {"quizAttempts": [
        {"score": 5, "total": 10},
        {"score": 9, "total": 10},
        {"score": 0, "total": 0},
    ]}})

    response = client.get("/api/quiz/stats/alice")
    assert response.json() == {"totalTests": 3, "topScore": 90, "averageScore": 47}
    assert client.get("/api/quiz/stats/nobody").status_code == 404


def test_analyze_without_key(client, llm):
    llm.api_key = ""
    response = client.post("/api/quiz/analyze-ai", json={"results": [], "score": 0, "total": 0})
    assert response.status_code == 500
    assert response.json() == {"analysis": MISSING_KEY_ANALYSIS}


def test_analyze_returns_model_text(client, llm):
    report = json.dumps({"summary": "Solid start", "strengths": [], "weaknesses": [], "roadmap": [], "resources": []})
    llm.replies.append(report)

    response = client.post("/api/quiz/analyze-ai", json={
        "results": [{"question": "2 + 2 = ?", "isCorrect": True, "category": "Aptitude"}],
        "score": 1,
        "total": 1,
    })
    assert response.status_code == 200
    assert response.json() == {"analysis": report}
    assert llm.calls[0]["json_mode"] is True
    assert "Q1: 2 + 2 = ? (Status: Correct, Topic: Aptitude)" in llm.calls[0]["messages"][0]["content"]


def test_analyze_failure(client, llm):
    llm.error = OpenAIError("rate limited")
    response = client.post("/api/quiz/analyze-ai", json={"results": [], "score": 0, "total": 0})
    assert response.status_code == 500
    body = response.json()
    assert body["message"] == "Error generating analysis"
    assert body["error"] == "rate limited"
    assert body["analysis"].startswith("## Analysis Failed")


def test_proctor_flags_and_uploads_snapshot(client, llm, storage):
    llm.replies.append('{"isSuspicious": true, "reason": "Two people in frame"}')
    response = client.post("/api/quiz/proctor", json={"imageBase64": "data:image/jpeg;base64,AAAA"})
    assert response.status_code == 200
    body = response.json()
    assert body["isSuspicious"] is True
    assert body["reason"] == "Two people in frame"
    assert "proctoring_violations" in body["snapshotUrl"]
    assert llm.calls[0]["model"] == llm.vision_model


def test_proctor_clean_frame_skips_upload(client, llm, storage):
    llm.replies.append('{"isSuspicious": false, "reason": null}')
    response = client.post("/api/quiz/proctor", json={"imageBase64": "data:image/jpeg;base64,AAAA"})
    assert response.json() == {"isSuspicious": False, "reason": None}
    assert storage.uploads == []


def test_proctor_upload_failure_keeps_verdict(client, llm, storage):
    storage.fail = True
    llm.replies.append('{"isSuspicious": true, "reason": "Phone"}')
    response = client.post("/api/quiz/proctor", json={"imageBase64": "data:image/jpeg;base64,AAAA"})
    assert response.status_code == 200
    assert response.json()["isSuspicious"] is True
    assert "snapshotUrl" not in response.json()


def test_proctor_errors(client, llm):
    llm.replies.append("I cannot tell")
    response = client.post("/api/quiz/proctor", json={"imageBase64": "data:image/jpeg;base64,AAAA"})
    assert response.status_code == 500
    assert response.json()["isSuspicious"] is False

    llm.api_key = ""
    response = client.post("/api/quiz/proctor", json={"imageBase64": "data:image/jpeg;base64,AAAA"})
    assert response.status_code == 500
    assert response.json() == {"message": "Groq key missing"}


def test_grade_submission_counts_unknown_ids():
    questions = {"a": {"question_text": "Q", "correct_answer": "x"}}
    score, total, results = grade_submission({"a": "x", "missing": "y"}, questions)
    assert (score, total) == (1, 2)
    assert len(results) == 1


def test_round_half_up():
    assert round_half_up(46.5) == 47
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4) == 2


def test_compute_stats_empty():
    assert compute_stats([]) == {"totalTests": 0, "topScore": 0, "averageScore": 0}
