from __future__ import annotations

import io
import re

import pdfplumber
from loguru import logger
from pypdf import PdfReader

from talent_match.errors import ExtractionFailed


class CVTextExtractor:
    """Turns an uploaded PDF into plain text.

    pdfplumber handles most layouts; pypdf is tried when pdfplumber raises or
    finds no text at all.
    """

    def extract(self, data: bytes) -> str:
        if not data:
            raise ExtractionFailed("Uploaded file is empty")
        if b"%PDF-" not in data[:1024]:
            raise ExtractionFailed("Uploaded file is not a PDF document")

        try:
            text = self._read_with_pdfplumber(data)
            if text.strip():
                return self._clean(text)
        except Exception as exc:
            logger.warning(f"pdfplumber could not read the PDF, falling back to pypdf: {exc}")

        try:
            text = self._read_with_pypdf(data)
        except Exception as exc:
            raise ExtractionFailed(f"Could not extract text from PDF: {exc}") from exc
        return self._clean(text)

    def _read_with_pdfplumber(self, data: bytes) -> str:
        texts: list[str] = []
        with pdfplumber.open(io.BytesIO(data)) as pdf:
            for page in pdf.pages:
                texts.append(page.extract_text() or "")
        return "\n".join(texts)

    def _read_with_pypdf(self, data: bytes) -> str:
        reader = PdfReader(io.BytesIO(data))
        return "\n".join(page.extract_text() or "" for page in reader.pages)

    def _clean(self, text: str) -> str:
        return re.sub(r"[ \t]+\n", "\n", text).strip()
