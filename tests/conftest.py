import io

import pytest
from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas


def _render_pdf(*pages: list[str]) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=A4)
    for lines in pages:
        y = 780
        for line in lines:
            c.drawString(72, y, line)
            y -= 18
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single-page sale deed with known English text."""
    return _render_pdf(["Sale deed No 1234/2021", "Seller: B Singh  Buyer: A Kumar"])


@pytest.fixture()
def two_page_pdf_bytes() -> bytes:
    """Two pages, the maximum the upload client accepts."""
    return _render_pdf(["Page one: schedule of property"], ["Page two: witnesses"])


@pytest.fixture()
def blank_pdf_bytes() -> bytes:
    """A valid PDF whose only page carries no text (a scanned deed, say)."""
    return _render_pdf([])
