"""
Multi-format Resume Parser - Read resumes from files or uploaded bytes.

Supports:
- JSON (.json): structured dict + JSON text
- YAML (.yaml, .yml): structured dict + JSON text
- Plain Text (.txt): text only
- Word Documents (.docx): text from paragraphs and tables
- PDF (.pdf): text from all pages

Structured formats can be used directly; text formats need LLM extraction.
"""
import io
import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Dict, Any

import yaml
from docx import Document
from pypdf import PdfReader

logger = logging.getLogger(__name__)


@dataclass
class ParsedResume:
    """Result of parsing a resume.

    Attributes:
        data: Structured data dict for JSON/YAML formats, None for text-based formats
        text: Extracted text suitable for LLM processing
        format: Detected format ('json', 'yaml', 'txt', 'docx', 'pdf')
        source: File path or uploaded file name
    """
    data: Optional[Dict[str, Any]]
    text: str
    format: str
    source: str

    @property
    def needs_extraction(self) -> bool:
        return self.data is None


class ResumeParser:
    """Parse resumes from multiple formats.

    Every entry point reads raw bytes and routes on the file extension, so
    local files and multipart uploads share one code path.
    """

    SUPPORTED_FORMATS = {
        '.json', '.yaml', '.yml', '.txt', '.docx', '.pdf'
    }

    def parse(self, file_path: str) -> ParsedResume:
        """Parse a resume file from disk.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If format is unsupported or parsing fails
        """
        path = Path(file_path)
        if not path.exists():
            raise FileNotFoundError(f"Resume file not found: {file_path}")

        ext = self._check_extension(path.name)
        logger.info(f"Parsing resume from {file_path} (format: {ext})")
        return self._dispatch(ext, path.read_bytes(), str(path))

    def parse_bytes(self, content: bytes, filename: str) -> ParsedResume:
        """Parse an uploaded resume given its bytes and original file name."""
        ext = self._check_extension(filename)
        if not content:
            raise ValueError(f"Empty resume file: {filename}")
        logger.info(f"Parsing uploaded resume {filename} ({len(content)} bytes)")
        return self._dispatch(ext, content, filename)

    def _check_extension(self, name: str) -> str:
        ext = Path(name).suffix.lower()
        if ext not in self.SUPPORTED_FORMATS:
            supported = ', '.join(sorted(self.SUPPORTED_FORMATS))
            raise ValueError(
                f"Unsupported resume format: {ext or '(none)'}. "
                f"Supported formats: {supported}"
            )
        return ext

    def _dispatch(self, ext: str, raw: bytes, source: str) -> ParsedResume:
        if ext == '.json':
            return self._parse_json(raw, source)
        elif ext in ('.yaml', '.yml'):
            return self._parse_yaml(raw, source)
        elif ext == '.txt':
            return self._parse_txt(raw, source)
        elif ext == '.docx':
            return self._parse_docx(raw, source)
        return self._parse_pdf(raw, source)

    @staticmethod
    def _decode(raw: bytes, source: str) -> str:
        try:
            return raw.decode('utf-8')
        except UnicodeDecodeError as e:
            raise ValueError(
                f"File encoding issue in {source}: {e}. "
                f"Ensure file is UTF-8 encoded."
            )

    def _parse_json(self, raw: bytes, source: str) -> ParsedResume:
        try:
            data = json.loads(self._decode(raw, source))
        except json.JSONDecodeError as e:
            raise ValueError(
                f"Invalid JSON in resume file: {e}. "
                f"Check line {e.lineno}, column {e.colno}"
            )
        if not isinstance(data, dict):
            raise ValueError(f"JSON resume must contain an object, got {type(data).__name__}")

        text = json.dumps(data, indent=2, ensure_ascii=False)
        return ParsedResume(data=data, text=text, format='json', source=source)

    def _parse_yaml(self, raw: bytes, source: str) -> ParsedResume:
        try:
            data = yaml.safe_load(self._decode(raw, source))
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in resume file: {e}")

        # YAML can load any type
        if not isinstance(data, dict):
            raise ValueError(
                f"YAML resume must contain a mapping/dict, got {type(data).__name__}"
            )

        text = json.dumps(data, indent=2, ensure_ascii=False, default=str)
        return ParsedResume(data=data, text=text, format='yaml', source=source)

    def _parse_txt(self, raw: bytes, source: str) -> ParsedResume:
        text = self._decode(raw, source)
        if not text.strip():
            raise ValueError(f"Empty resume file: {source}")
        return ParsedResume(data=None, text=text, format='txt', source=source)

    def _parse_docx(self, raw: bytes, source: str) -> ParsedResume:
        try:
            doc = Document(io.BytesIO(raw))
        except Exception as e:
            raise ValueError(f"Failed to parse DOCX file {source}: {e}")

        paragraphs = [p.text.strip() for p in doc.paragraphs if p.text.strip()]

        # Tables are common in resume templates
        for table in doc.tables:
            for row in table.rows:
                row_texts = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if row_texts:
                    paragraphs.append(' '.join(row_texts))

        text = '\n\n'.join(paragraphs)
        if not text.strip():
            logger.warning(f"Empty or minimal content in DOCX: {source}")

        return ParsedResume(data=None, text=text, format='docx', source=source)

    def _parse_pdf(self, raw: bytes, source: str) -> ParsedResume:
        try:
            reader = PdfReader(io.BytesIO(raw))
            page_count = len(reader.pages)
        except Exception as e:
            raise ValueError(f"Failed to parse PDF file {source}: {e}")

        if page_count == 0:
            raise ValueError("PDF file has no pages")

        pages_text = []
        for i, page in enumerate(reader.pages):
            try:
                page_text = page.extract_text()
            except Exception as e:
                logger.warning(f"Failed to extract text from page {i + 1}: {e}")
                continue
            if page_text and page_text.strip():
                pages_text.append(page_text.strip())

        text = '\n\n'.join(pages_text)
        if not text.strip():
            logger.warning(
                f"No text extracted from PDF {source}. "
                f"The PDF may be scanned images or have text extraction disabled."
            )

        logger.debug(f"Parsed PDF resume from {source} ({page_count} pages, {len(text)} chars)")
        return ParsedResume(data=None, text=text, format='pdf', source=source)

    def is_supported(self, file_name: str) -> bool:
        return Path(file_name).suffix.lower() in self.SUPPORTED_FORMATS

    @classmethod
    def get_supported_formats(cls) -> list[str]:
        return sorted(cls.SUPPORTED_FORMATS)
