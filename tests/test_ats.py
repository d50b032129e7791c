import io
from datetime import datetime, timedelta

from docx import Document

SCAN_REPLY = """Here is the analysis:
```json
{"match_percentage": 72, "missing_keywords": ["Docker"], "summary": "Good backend fit.", "recommendation": "Add container work."}
```"""

RESUME = ("resume.txt", b"Python developer with FastAPI and MongoDB experience.", "text/plain")


def test_scan_saves_history_case_insensitively(client, make_student, llm, storage, db):
    make_student("alice")
    llm.replies.append(SCAN_REPLY)

    response = client.post(
        "/api/ats/scan",
        files={"resume": RESUME},
        data={"jobDescription": "Backend engineer: Python, Docker", "username": "ALICE"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["match_percentage"] == 72
    assert body["missing_keywords"] == ["Docker"]
    assert "student_resumes" in body["resumeUrl"]
    assert storage.uploads[0]["resource_type"] == "raw"
    assert storage.uploads[0]["public_id"].endswith(".txt")

    prompt = llm.calls[0]["messages"][0]["content"]
    assert "FastAPI and MongoDB" in prompt
    assert "Backend engineer" in prompt

    scans = db.students.find_one({"username": "alice"})["atsScans"]
    assert len(scans) == 1
    assert scans[0]["matchPercentage"] == 72
    assert scans[0]["recommendation"] == "Add container work."
    assert scans[0]["resumeUrl"] == body["resumeUrl"]


def test_scan_defaults_missing_fields_in_history(client, make_student, llm, db):
    make_student("alice")
    llm.replies.append('{"match_percentage": 40}')
    client.post("/api/ats/scan", files={"resume": RESUME}, data={"jobDescription": "x" * 800, "username": "alice"})

    scan = db.students.find_one({"username": "alice"})["atsScans"][0]
    assert scan["summary"] == "No summary provided"
    assert scan["missingKeywords"] == []
    assert scan["recommendation"] == "No recommendation"
    assert len(scan["jobDescription"]) == 500


def test_scan_without_username_skips_history(client, llm, db):
    llm.replies.append(SCAN_REPLY)
    response = client.post("/api/ats/scan", files={"resume": RESUME}, data={"jobDescription": "JD"})
    assert response.status_code == 200
    assert db.students.count_documents({}) == 0


def test_scan_upload_failure_leaves_url_empty(client, llm, storage):
    storage.fail = True
    llm.replies.append(SCAN_REPLY)
    response = client.post("/api/ats/scan", files={"resume": RESUME}, data={"jobDescription": "JD"})
    assert response.status_code == 200
    assert response.json()["resumeUrl"] == ""


def test_scan_reads_docx(client, llm):
    document = Document()
    document.add_paragraph("Kubernetes administrator")
    buffer = io.BytesIO()
    document.save(buffer)

    llm.replies.append(SCAN_REPLY)
    response = client.post(
        "/api/ats/scan",
        files={"resume": ("cv.docx", buffer.getvalue(), "application/octet-stream")},
        data={"jobDescription": "JD"},
    )
    assert response.status_code == 200
    assert "Kubernetes administrator" in llm.calls[0]["messages"][0]["content"]


def test_scan_validation(client):
    response = client.post("/api/ats/scan", data={"jobDescription": "JD"})
    assert response.status_code == 400
    assert response.json() == {"message": "Resume and Job Description are required."}

    response = client.post("/api/ats/scan", files={"resume": RESUME})
    assert response.status_code == 400

    response = client.post(
        "/api/ats/scan",
        files={"resume": ("resume.exe", b"MZ", "application/octet-stream")},
        data={"jobDescription": "JD"},
    )
    assert response.status_code == 400

    response = client.post(
        "/api/ats/scan",
        files={"resume": ("resume.txt", b"   ", "text/plain")},
        data={"jobDescription": "JD"},
    )
    assert response.status_code == 400


def test_scan_unparseable_model_output(client, llm):
    llm.replies.append("Sorry, I can't help with that.")
    response = client.post("/api/ats/scan", files={"resume": RESUME}, data={"jobDescription": "JD"})
    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}


def test_history_newest_first(client, make_student, db):
    make_student("alice")
    now = datetime.utcnow()
    db.students.update_one({"username": "alice"}, {"$set": {"atsScans": [
        {"summary": "old", "timestamp": now - timedelta(days=2)},
        {"summary": "new", "timestamp": now},
        {"summary": "undated"},
    ]}})

    response = client.get("/api/ats/history/Alice")
    assert response.status_code == 200
    assert [s["summary"] for s in response.json()] == ["new", "old", "undated"]

    assert client.get("/api/ats/history/nobody").status_code == 404
