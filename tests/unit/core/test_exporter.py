"""Tests for resume and cover letter export."""
import io
import unittest

from docx import Document
from pypdf import PdfReader

from core.exporter import (
    cover_letter_document,
    export_document,
    resume_document,
    resume_plain_text,
    safe_filename,
)

RESUME_CONTENT = {
    "contactInfo": {"name": "Jane Doe", "email": "jane@example.com", "phone": "555-0100"},
    "summary": "Backend engineer focused on data platforms.",
    "skills": ["Python", "SQL", "AWS"],
    "workExperience": [{
        "title": "Senior Engineer",
        "company": "Acme",
        "startDate": "2021-01",
        "current": True,
        "description": "Owned the ingestion platform.",
        "achievements": ["Cut pipeline cost by 40%"],
    }],
    "education": [{"degree": "BSc", "field": "Computer Science", "institution": "State University",
                   "startDate": "2013", "endDate": "2017"}],
    "projects": [{"title": "Open source ETL", "description": "Maintainer", "achievements": []}],
    "certifications": [{"name": "AWS SA", "issuer": "Amazon", "date": "2022"}],
    "languages": [{"language": "Spanish", "proficiency": "Fluent"}],
}


class TestResumeDocument(unittest.TestCase):

    def test_sections_in_order(self):
        doc = resume_document("My Resume", RESUME_CONTENT)

        self.assertEqual(doc.title, "Jane Doe")
        self.assertIn("jane@example.com", doc.subtitle)
        headings = [s.heading for s in doc.sections]
        self.assertEqual(headings, ["Summary", "Skills", "Experience", "Education",
                                    "Projects", "Certifications", "Languages"])

    def test_current_job_shows_present(self):
        doc = resume_document("My Resume", RESUME_CONTENT)
        experience = next(s for s in doc.sections if s.heading == "Experience")

        self.assertIn("Senior Engineer, Acme (2021-01 - Present)", experience.paragraphs)
        self.assertEqual(experience.bullets, ["Cut pipeline cost by 40%"])

    def test_empty_content_uses_title(self):
        doc = resume_document("Untitled", {})

        self.assertEqual(doc.title, "Untitled")
        self.assertEqual(doc.sections, [])

    def test_plain_text(self):
        text = resume_plain_text("My Resume", RESUME_CONTENT)

        self.assertTrue(text.startswith("Jane Doe"))
        self.assertIn("SKILLS\nPython, SQL, AWS", text)
        self.assertIn("- Cut pipeline cost by 40%", text)


class TestExportFormats(unittest.TestCase):

    def setUp(self):
        self.doc = resume_document("My Resume", RESUME_CONTENT)

    def test_txt(self):
        data = export_document(self.doc, "txt")
        self.assertIn(b"EXPERIENCE", data)

    def test_docx(self):
        data = export_document(self.doc, "docx")
        text = "\n".join(p.text for p in Document(io.BytesIO(data)).paragraphs)

        self.assertIn("Jane Doe", text)
        self.assertIn("Cut pipeline cost by 40%", text)

    def test_pdf(self):
        data = export_document(self.doc, "pdf")

        self.assertTrue(data.startswith(b"%PDF"))
        text = "".join(page.extract_text() for page in PdfReader(io.BytesIO(data)).pages)
        self.assertIn("Jane Doe", text)

    def test_pdf_escapes_markup(self):
        doc = cover_letter_document("Letter", "Experience with <b>R&D</b> teams.")
        self.assertTrue(export_document(doc, "pdf").startswith(b"%PDF"))

    def test_unsupported_format(self):
        with self.assertRaises(ValueError):
            export_document(self.doc, "rtf")


class TestCoverLetterDocument(unittest.TestCase):

    def test_paragraphs_split_on_blank_lines(self):
        doc = cover_letter_document("Letter", "Dear team,\n\nFirst paragraph.\n\n\nSecond.")
        self.assertEqual(doc.sections[0].paragraphs, ["Dear team,", "First paragraph.", "Second."])

    def test_safe_filename(self):
        self.assertEqual(safe_filename("Cover Letter - Engineer at Acme/Co", "pdf"),
                         "Cover_Letter_-_Engineer_at_AcmeCo.pdf")
        self.assertEqual(safe_filename("", "txt"), "document.txt")
