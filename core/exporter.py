"""
Document export for resumes and cover letters.

Content is first flattened into an ExportDocument (title + sections of
paragraphs and bullets), then rendered as plain text, DOCX (python-docx)
or PDF (reportlab).
"""
import io
import logging
import re
from dataclasses import dataclass, field
from html import escape
from typing import Any, Dict, List, Optional

from docx import Document
from docx.shared import Pt
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

logger = logging.getLogger(__name__)

EXPORT_MEDIA_TYPES = {
    "pdf": "application/pdf",
    "docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "txt": "text/plain; charset=utf-8",
}


@dataclass
class ExportSection:
    heading: Optional[str] = None
    paragraphs: List[str] = field(default_factory=list)
    bullets: List[str] = field(default_factory=list)


@dataclass
class ExportDocument:
    title: str
    subtitle: Optional[str] = None
    sections: List[ExportSection] = field(default_factory=list)


def safe_filename(name: str, extension: str) -> str:
    stem = re.sub(r"[^\w\s-]", "", name or "").strip().replace(" ", "_") or "document"
    return f"{stem[:80]}.{extension}"


def _date_range(item: Dict[str, Any]) -> str:
    start = item.get("startDate") or ""
    end = "Present" if item.get("current") else (item.get("endDate") or "")
    return f"{start} - {end}".strip(" -")


def resume_document(title: str, content: Dict[str, Any]) -> ExportDocument:
    """Flatten structured resume content into sections."""
    contact = content.get("contactInfo") or {}
    contact_parts = [contact.get(k) for k in ("email", "phone", "city", "linkedin", "github", "website")]
    doc = ExportDocument(
        title=contact.get("name") or title,
        subtitle=" | ".join(p for p in contact_parts if p) or None,
    )

    if content.get("summary"):
        doc.sections.append(ExportSection("Summary", paragraphs=[content["summary"]]))

    if content.get("skills"):
        doc.sections.append(ExportSection("Skills", paragraphs=[", ".join(content["skills"])]))

    experience = ExportSection("Experience")
    for job in content.get("workExperience") or []:
        header = f"{job.get('title', '')}, {job.get('company', '')}".strip(", ")
        dates = _date_range(job)
        experience.paragraphs.append(f"{header} ({dates})" if dates else header)
        if job.get("description"):
            experience.paragraphs.append(job["description"])
        experience.bullets.extend(job.get("achievements") or [])
    if experience.paragraphs:
        doc.sections.append(experience)

    education = ExportSection("Education")
    for school in content.get("education") or []:
        line = f"{school.get('degree', '')} in {school.get('field', '')}, {school.get('institution', '')}"
        dates = _date_range(school)
        education.paragraphs.append(f"{line} ({dates})" if dates else line)
    if education.paragraphs:
        doc.sections.append(education)

    projects = ExportSection("Projects")
    for project in content.get("projects") or []:
        projects.paragraphs.append(f"{project.get('title', '')}: {project.get('description', '')}")
        projects.bullets.extend(project.get("achievements") or [])
    if projects.paragraphs:
        doc.sections.append(projects)

    certs = [f"{c.get('name', '')} ({c.get('issuer', '')}, {c.get('date', '')})"
             for c in content.get("certifications") or []]
    if certs:
        doc.sections.append(ExportSection("Certifications", bullets=certs))

    languages = [f"{l.get('language', '')} - {l.get('proficiency', '')}" for l in content.get("languages") or []]
    if languages:
        doc.sections.append(ExportSection("Languages", bullets=languages))

    return doc


def cover_letter_document(title: str, content: str) -> ExportDocument:
    paragraphs = [p.strip() for p in re.split(r"\n\s*\n", content or "") if p.strip()]
    return ExportDocument(title=title, sections=[ExportSection(paragraphs=paragraphs)])


def render_text(doc: ExportDocument) -> bytes:
    lines = [doc.title]
    if doc.subtitle:
        lines.append(doc.subtitle)
    for section in doc.sections:
        lines.append("")
        if section.heading:
            lines.append(section.heading.upper())
        for paragraph in section.paragraphs:
            lines.append(paragraph)
            if not section.heading:
                lines.append("")
        lines.extend(f"- {bullet}" for bullet in section.bullets)
    return ("\n".join(lines).rstrip() + "\n").encode("utf-8")


def render_docx(doc: ExportDocument) -> bytes:
    document = Document()
    style = document.styles['Normal']
    style.font.name = 'Calibri'
    style.font.size = Pt(11)

    document.add_heading(doc.title, level=1)
    if doc.subtitle:
        document.add_paragraph(doc.subtitle)

    for section in doc.sections:
        if section.heading:
            document.add_heading(section.heading, level=2)
        for paragraph in section.paragraphs:
            document.add_paragraph(paragraph)
        for bullet in section.bullets:
            document.add_paragraph(bullet, style='List Bullet')

    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


def render_pdf(doc: ExportDocument) -> bytes:
    buffer = io.BytesIO()
    template = SimpleDocTemplate(
        buffer, pagesize=letter,
        rightMargin=0.75 * inch, leftMargin=0.75 * inch,
        topMargin=0.75 * inch, bottomMargin=0.75 * inch,
        title=doc.title,
    )
    styles = getSampleStyleSheet()
    bullet_style = ParagraphStyle('Bullet', parent=styles['BodyText'], leftIndent=12)

    # Paragraph parses inline markup, so user text must be escaped
    flowables = [Paragraph(escape(doc.title), styles['Title'])]
    if doc.subtitle:
        flowables.append(Paragraph(escape(doc.subtitle), styles['BodyText']))

    for section in doc.sections:
        flowables.append(Spacer(1, 8))
        if section.heading:
            flowables.append(Paragraph(escape(section.heading), styles['Heading2']))
        for paragraph in section.paragraphs:
            flowables.append(Paragraph(escape(paragraph), styles['BodyText']))
        for bullet in section.bullets:
            flowables.append(Paragraph(f"&bull; {escape(bullet)}", bullet_style))

    template.build(flowables)
    return buffer.getvalue()


RENDERERS = {
    "txt": render_text,
    "docx": render_docx,
    "pdf": render_pdf,
}


def export_document(doc: ExportDocument, export_format: str) -> bytes:
    """Render `doc` in the requested format ('pdf', 'docx' or 'txt')."""
    renderer = RENDERERS.get(export_format)
    if renderer is None:
        raise ValueError(f"Unsupported export format: {export_format}. Use one of: {', '.join(RENDERERS)}")
    data = renderer(doc)
    logger.debug(f"Exported '{doc.title}' as {export_format} ({len(data)} bytes)")
    return data


def resume_plain_text(title: str, content: Dict[str, Any]) -> str:
    """Resume content as plain text, the form prompts and keyword matching read."""
    return render_text(resume_document(title, content or {})).decode("utf-8")
