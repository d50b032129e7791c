import cloudinary.uploader
import pytest

from careerconnect.main import app
from careerconnect.services.media_storage import MediaStorage, MediaUploadError, get_media_storage

FRAME = "data:image/jpeg;base64,AAAA"


@pytest.fixture
def unconfigured():
    return MediaStorage(cloud_name="", api_key="", api_secret="")


@pytest.fixture
def configured():
    return MediaStorage(cloud_name="demo", api_key="key", api_secret="secret")


@pytest.fixture
def sent(monkeypatch):
    """Capture what would be sent to Cloudinary."""
    calls = []

    def fake_upload(file, **options):
        calls.append(options)
        return {"secure_url": f"https://res.cloudinary.com/demo/{options['folder']}/x"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return calls


def test_unconfigured_storage_raises_upload_error(unconfigured):
    assert unconfigured.is_configured is False
    with pytest.raises(MediaUploadError):
        unconfigured.upload_snapshot(FRAME)


def test_sdk_config_errors_become_upload_errors(configured, monkeypatch):
    def reject(file, **options):
        raise ValueError("Must supply api_key")

    monkeypatch.setattr(cloudinary.uploader, "upload", reject)
    with pytest.raises(MediaUploadError):
        configured.upload_resume(b"%PDF-1.4", "cv.pdf")


def test_pdf_resume_is_stored_as_viewable_pdf(configured, sent):
    configured.upload_resume(b"%PDF-1.4", "cv.pdf")
    assert sent[0]["resource_type"] == "image"
    assert sent[0]["format"] == "pdf"


def test_other_resumes_are_stored_raw(configured, sent):
    configured.upload_resume(b"docx bytes", "CV.DOCX")
    configured.upload_resume(b"plain text", "cv.txt")
    assert [c["resource_type"] for c in sent] == ["raw", "raw"]
    assert sent[0]["public_id"].endswith(".docx")
    assert sent[1]["public_id"].endswith(".txt")
    assert "format" not in sent[0]


def test_scan_without_cloudinary_keeps_going(client, llm, unconfigured):
    app.dependency_overrides[get_media_storage] = lambda: unconfigured

    llm.replies.append('{"match_percentage": 55, "missing_keywords": [], "summary": "ok", "recommendation": "ok"}')
    response = client.post(
        "/api/ats/scan",
        files={"resume": ("resume.txt", b"Python developer", "text/plain")},
        data={"jobDescription": "Python"},
    )
    assert response.status_code == 200
    assert response.json()["resumeUrl"] == ""
    assert response.json()["match_percentage"] == 55


def test_proctor_without_cloudinary_keeps_verdict(client, llm, unconfigured):
    app.dependency_overrides[get_media_storage] = lambda: unconfigured

    llm.replies.append('{"isSuspicious": true, "reason": "Phone"}')
    response = client.post("/api/quiz/proctor", json={"imageBase64": FRAME})
    assert response.status_code == 200
    assert response.json() == {"isSuspicious": True, "reason": "Phone"}


def test_photo_upload_without_cloudinary(client, make_student, unconfigured):
    app.dependency_overrides[get_media_storage] = lambda: unconfigured

    make_student("alice")
    response = client.post(
        "/students/alice/upload-photo",
        files={"profilePicture": ("me.png", b"png", "image/png")},
    )
    assert response.status_code == 500
    assert response.json() == {"message": "Image upload failed"}
