import io

from docx import Document

from rebound.routes import documents_routes
from rebound.services import documents
from rebound.services import symptom_analysis as sa


def test_upload_text_document(client, headers):
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        files={"file": ("note.txt", b"Patient reports neck pain and confusion.", "text/plain")},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["red_flags"] == ["Neck pain"]
    assert set(body["symptoms_by_category"]) == {"Physical", "Cognitive"}
    assert "Neck pain" in body["document_summary"]
    history = client.get("/api/symptoms/analyses", headers=headers).json()
    assert history[0]["source"] == "document"


def test_upload_and_save(client, headers):
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        params={"save": "true"},
        files={"file": ("note.txt", b"Ongoing insomnia", "text/plain")},
    )
    assert r.status_code == 200
    saved = client.get("/api/profile/symptoms", headers=headers).json()
    assert [s["name"] for s in saved] == ["Insomnia"]
    assert saved[0]["notes"] == "From document analysis. Category: Sleep"


def test_upload_pdf(client, headers, monkeypatch):
    class _Page:
        def extract_text(self):
            return "Worsening headaches over the week"

    class _Reader:
        def __init__(self, *_a, **_k):
            self.pages = [_Page()]

    monkeypatch.setattr(documents, "PdfReader", _Reader)
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        files={"file": ("scan.pdf", b"%PDF-1.4", "application/pdf")},
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert "Worsening headaches" in body["red_flags"]
    assert body["recommendations"][0] == sa.URGENT_CARE_WARNING


def test_upload_unsupported_type(client, headers):
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        files={"file": ("photo.png", b"\x89PNG\r\n", "image/png")},
    )
    assert r.status_code == 415
    body = r.json()
    assert body["code"] == "UNSUPPORTED_MEDIA_TYPE"
    assert "trace_id" in body


def test_upload_empty_file(client, headers):
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        files={"file": ("empty.txt", b"", "text/plain")},
    )
    assert r.status_code == 400
    assert "Empty file" in r.json()["message"]


def test_upload_too_large(client, headers, monkeypatch):
    monkeypatch.setattr(documents, "MAX_DOCUMENT_BYTES", 4)
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        files={"file": ("note.txt", b"headache", "text/plain")},
    )
    assert r.status_code == 413
    assert r.json()["code"] == "PAYLOAD_TOO_LARGE"


def test_analyze_document_text(client, headers):
    r = client.post("/api/documents/analyze-text", headers=headers, json={"text": "nothing notable"})
    assert r.status_code == 200
    body = r.json()
    assert body["extracted_symptoms"][0]["name"] == "Unspecified Symptoms"
    assert body["document_summary"].startswith("No specific")


def test_analyze_document_text_requires_text(client, headers):
    r = client.post("/api/documents/analyze-text", headers=headers, json={"text": "   "})
    assert r.status_code == 400
    assert r.json()["message"] == "No document text"


def test_upload_whitespace_text_document_rejected(client, headers):
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        params={"save": "true"},
        files={"file": ("blank.txt", b"   \n ", "text/plain")},
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Upload failed: No text extracted from document"
    assert client.get("/api/symptoms/analyses", headers=headers).json() == []
    assert client.get("/api/profile/symptoms", headers=headers).json() == []


def test_upload_docx(client, headers):
    doc = Document()
    doc.add_paragraph("Follow-up: persistent insomnia and neck pain.")
    buf = io.BytesIO()
    doc.save(buf)
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        files={
            "file": (
                "letter.docx",
                buf.getvalue(),
                "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
            )
        },
    )
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["red_flags"] == ["Neck pain"]
    assert "Insomnia" in [s["name"] for s in body["extracted_symptoms"]]


def test_upload_legacy_doc_unsupported(client, headers):
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        files={"file": ("letter.doc", b"\xd0\xcf\x11\xe0", "application/msword")},
    )
    assert r.status_code == 415


def test_oversized_upload_rejected_before_extraction(client, headers, monkeypatch):
    calls = []
    monkeypatch.setattr(documents, "MAX_DOCUMENT_BYTES", 4)
    monkeypatch.setattr(documents_routes, "extract_text_from_bytes", lambda *a: calls.append(a))
    r = client.post(
        "/api/documents/analyze",
        headers=headers,
        files={"file": ("note.txt", b"headache and nausea", "text/plain")},
    )
    assert r.status_code == 413
    assert calls == []
