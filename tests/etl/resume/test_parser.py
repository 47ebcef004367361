"""Tests for the multi-format resume parser."""
import io
import json
import tempfile
from pathlib import Path
from unittest import TestCase

from docx import Document
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from etl.resume.parser import ResumeParser


def _pdf_bytes(lines):
    packet = io.BytesIO()
    c = canvas.Canvas(packet, pagesize=letter)
    y = 700
    for line in lines:
        c.drawString(100, y, line)
        y -= 20
    c.save()
    return packet.getvalue()


def _docx_bytes():
    doc = Document()
    doc.add_heading('Maria Lopez', 0)
    doc.add_paragraph('Product Manager')
    table = doc.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = 'Skills'
    table.rows[0].cells[1].text = 'Roadmaps, SQL'
    buffer = io.BytesIO()
    doc.save(buffer)
    return buffer.getvalue()


class TestResumeParserFiles(TestCase):
    """Parsing resumes from disk."""

    def setUp(self):
        self.parser = ResumeParser()
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        import shutil
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def _write(self, filename: str, content) -> str:
        path = Path(self.temp_dir) / filename
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding='utf-8')
        return str(path)

    def test_parse_json_file(self):
        data = {"contactInfo": {"name": "Maria Lopez"}, "skills": ["SQL"]}
        result = self.parser.parse(self._write('resume.json', json.dumps(data)))

        self.assertEqual(result.format, 'json')
        self.assertEqual(result.data['contactInfo']['name'], 'Maria Lopez')
        self.assertFalse(result.needs_extraction)

    def test_parse_yaml_file(self):
        content = "contactInfo:\n  name: Maria Lopez\nskills:\n  - Roadmaps\n"
        result = self.parser.parse(self._write('resume.yml', content))

        self.assertEqual(result.format, 'yaml')
        self.assertEqual(result.data['skills'], ['Roadmaps'])

    def test_parse_pdf_file(self):
        result = self.parser.parse(self._write('resume.pdf', _pdf_bytes(["Maria Lopez", "Product Manager"])))

        self.assertEqual(result.format, 'pdf')
        self.assertTrue(result.needs_extraction)
        self.assertIn('Maria Lopez', result.text)

    def test_parse_file_not_found(self):
        with self.assertRaises(FileNotFoundError):
            self.parser.parse('/nonexistent/resume.pdf')

    def test_parse_unsupported_format(self):
        with self.assertRaises(ValueError) as ctx:
            self.parser.parse(self._write('resume.rtf', 'Some content'))

        self.assertIn('Unsupported', str(ctx.exception))

    def test_parse_empty_txt(self):
        with self.assertRaises(ValueError) as ctx:
            self.parser.parse(self._write('empty.txt', ''))

        self.assertIn('Empty resume file', str(ctx.exception))


class TestResumeParserUploads(TestCase):
    """Parsing uploaded bytes."""

    def setUp(self):
        self.parser = ResumeParser()

    def test_txt_upload_needs_extraction(self):
        result = self.parser.parse_bytes(b"Maria Lopez\nProduct Manager", "resume.TXT")

        self.assertEqual(result.format, 'txt')
        self.assertIsNone(result.data)
        self.assertTrue(result.needs_extraction)
        self.assertEqual(result.source, "resume.TXT")

    def test_docx_upload_includes_tables(self):
        result = self.parser.parse_bytes(_docx_bytes(), "resume.docx")

        self.assertEqual(result.format, 'docx')
        self.assertIn('Maria Lopez', result.text)
        self.assertIn('Skills Roadmaps, SQL', result.text)

    def test_json_upload_with_unicode(self):
        data = {"contactInfo": {"name": "山田太郎"}}
        result = self.parser.parse_bytes(json.dumps(data, ensure_ascii=False).encode('utf-8'), "r.json")

        self.assertEqual(result.data['contactInfo']['name'], '山田太郎')
        self.assertIn('山田太郎', result.text)

    def test_json_array_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            self.parser.parse_bytes(b"[1, 2]", "resume.json")

        self.assertIn('must contain an object', str(ctx.exception))

    def test_invalid_json_reports_position(self):
        with self.assertRaises(ValueError) as ctx:
            self.parser.parse_bytes(b"{invalid}", "resume.json")

        self.assertIn('Invalid JSON', str(ctx.exception))

    def test_yaml_list_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            self.parser.parse_bytes(b"- item1\n- item2", "resume.yaml")

        self.assertIn('mapping/dict', str(ctx.exception))

    def test_non_utf8_text_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            self.parser.parse_bytes("café".encode('latin-1'), "resume.txt")

        self.assertIn('UTF-8', str(ctx.exception))

    def test_empty_upload_rejected(self):
        with self.assertRaises(ValueError):
            self.parser.parse_bytes(b"", "resume.pdf")

    def test_corrupt_pdf_rejected(self):
        with self.assertRaises(ValueError) as ctx:
            self.parser.parse_bytes(b"not a pdf", "resume.pdf")

        self.assertIn('Failed to parse PDF', str(ctx.exception))

    def test_supported_formats(self):
        self.assertEqual(ResumeParser.get_supported_formats(),
                         ['.docx', '.json', '.pdf', '.txt', '.yaml', '.yml'])
        self.assertTrue(self.parser.is_supported('Resume.PDF'))
        self.assertFalse(self.parser.is_supported('resume'))
