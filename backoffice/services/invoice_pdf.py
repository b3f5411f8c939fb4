"""Invoice PDF rendering (reportlab platypus)."""
import logging
from io import BytesIO
from typing import List, Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.platypus import (
    BaseDocTemplate, Frame, PageTemplate, PageBreak, Paragraph, Spacer, Table, TableStyle
)
from reportlab.platypus.doctemplate import LayoutError

from backoffice.exceptions import RenderFailureError
from backoffice.models import InvoiceData, InvoiceFormat
from backoffice.services.invoice_layout import InvoiceLayout, InvoicePage, build_invoice_layout
from backoffice.utils.formatters import money, percentage, invoice_date

logger = logging.getLogger(__name__)

MARGIN = 15
PRINTABLE_WIDTH = 565

# S.No, Code, Product Name, Quantity, Rate, Actual, Disc %, Discount, Total
COLUMN_WIDTHS = (35, 50, 160, 50, 50, 60, 40, 60, 60)
COLUMN_HEADINGS = ('S.No', 'Code', 'Product Name', 'Quantity', 'Rate', 'Actual', 'Disc %', 'Discount', 'Total')
COLUMN_ALIGNMENTS = ('CENTER', 'CENTER', 'LEFT', 'CENTER', 'RIGHT', 'RIGHT', 'CENTER', 'RIGHT', 'RIGHT')

# Left edge of the Disc % column; customer block and footer split here
SPLIT_X = sum(COLUMN_WIDTHS[:6])

HEADER_ROW_HEIGHT = 20
ROW_HEIGHT = 18
INFO_ROW_HEIGHT = 16
CELL_PADDING = 2

FONT = 'Helvetica'
FONT_BOLD = 'Helvetica-Bold'
FONT_ITALIC = 'Helvetica-Oblique'
BODY_SIZE = 8
LABEL_SIZE = 9

BORDER_COLOR = colors.black
SHADE_COLOR = colors.HexColor('#E8E8E8')
RULE_COLOR = colors.HexColor('#CCCCCC')


def fit_text(text, width: float, font_name: str = FONT, font_size: float = BODY_SIZE) -> str:
    """Clip text to a cell width, ending with '...' when it does not fit."""
    text = '' if text is None else str(text)
    available = width - 2 * CELL_PADDING
    if stringWidth(text, font_name, font_size) <= available:
        return text

    ellipsis = '...'
    while text and stringWidth(text + ellipsis, font_name, font_size) > available:
        text = text[:-1]
    return text.rstrip() + ellipsis


def _draw_border(canvas, doc):
    canvas.saveState()
    canvas.setStrokeColor(BORDER_COLOR)
    canvas.rect(doc.leftMargin, doc.bottomMargin, doc.width, doc.height)
    canvas.restoreState()


def _page_header(layout: InvoiceLayout, page: InvoicePage) -> Table:
    """Store banner; continuation pages show the invoice number and page position."""
    store = layout.invoice.store
    half = PRINTABLE_WIDTH / 2

    if page.is_first:
        contacts = store.contact_lines()
        phone_line = next((line for line in contacts if line.startswith('WhatsApp')), '')
        email_line = next((line for line in contacts if line.startswith('Email')), '')
        data = [
            [fit_text(store.name, PRINTABLE_WIDTH, FONT_BOLD, 18), ''],
            [fit_text(store.website, PRINTABLE_WIDTH, FONT, 12), ''],
            [fit_text(phone_line, half, FONT_BOLD, 10), fit_text(email_line, half, FONT_BOLD, 10)],
        ]
        row_heights = [24, 16, 20]
    else:
        position = f"Invoice {layout.invoice.invoice_number} - Page {page.number} of {layout.page_count}"
        data = [
            [fit_text(store.name, PRINTABLE_WIDTH, FONT_BOLD, 16), ''],
            [fit_text(position, PRINTABLE_WIDTH, FONT_ITALIC, 10), ''],
        ]
        row_heights = [24, 18]

    table = Table(data, colWidths=[half, half], rowHeights=row_heights, hAlign='LEFT')
    style = [
        ('SPAN', (0, 0), (1, 0)),
        ('SPAN', (0, 1), (1, 1)),
        ('ALIGN', (0, 0), (-1, 1), 'CENTER'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('FONTNAME', (0, 0), (-1, 0), FONT_BOLD),
        ('FONTSIZE', (0, 0), (-1, 0), 18 if page.is_first else 16),
        ('TEXTCOLOR', (0, 0), (-1, -1), colors.black),
    ]
    if page.is_first:
        style += [
            ('FONTNAME', (0, 1), (-1, 1), FONT),
            ('FONTSIZE', (0, 1), (-1, 1), 12),
            ('FONTNAME', (0, 2), (-1, 2), FONT_BOLD),
            ('FONTSIZE', (0, 2), (-1, 2), 10),
            ('ALIGN', (0, 2), (0, 2), 'LEFT'),
            ('ALIGN', (1, 2), (1, 2), 'RIGHT'),
            ('LEFTPADDING', (0, 2), (0, 2), 15),
            ('RIGHTPADDING', (1, 2), (1, 2), 15),
            ('LINEABOVE', (0, 2), (-1, 2), 1, BORDER_COLOR),
            ('LINEBELOW', (0, 2), (-1, 2), 1, BORDER_COLOR),
        ]
    else:
        style += [
            ('FONTNAME', (0, 1), (-1, 1), FONT_ITALIC),
            ('FONTSIZE', (0, 1), (-1, 1), 10),
        ]
    table.setStyle(TableStyle(style))
    return table


def _customer_block(layout: InvoiceLayout, invoice_format: InvoiceFormat) -> Table:
    """Customer details on the left, invoice number and date from the Disc % column on."""
    invoice = layout.invoice
    widths = [55, SPLIT_X - 55, 65, PRINTABLE_WIDTH - SPLIT_X - 65]

    data = [
        ['Name :', fit_text(invoice.customer.name, widths[1], FONT_BOLD, LABEL_SIZE),
         'Invoice No :', fit_text(invoice.invoice_number, widths[3], FONT_BOLD, LABEL_SIZE)],
        ['Address :', fit_text(invoice.customer.address, widths[1], FONT_BOLD, LABEL_SIZE),
         'Date :', invoice_date(invoice.generated_at, invoice_format.date_format)],
        ['Contact :', fit_text(invoice.customer.contact, widths[1], FONT_BOLD, LABEL_SIZE), '', ''],
    ]

    table = Table(data, colWidths=widths, rowHeights=[INFO_ROW_HEIGHT] * 3, hAlign='LEFT')
    table.setStyle(TableStyle([
        ('FONTNAME', (0, 0), (-1, -1), FONT),
        ('FONTNAME', (1, 0), (1, -1), FONT_BOLD),
        ('FONTNAME', (3, 0), (3, -1), FONT_BOLD),
        ('FONTSIZE', (0, 0), (-1, -1), LABEL_SIZE),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('LEFTPADDING', (0, 0), (0, -1), 10),
        ('LEFTPADDING', (2, 0), (2, -1), 8),
        ('LINEAFTER', (1, 0), (1, -1), 1, BORDER_COLOR),
        ('LINEBELOW', (0, -1), (-1, -1), 1, BORDER_COLOR),
    ]))
    return table


def _item_cells(row) -> List[str]:
    item = row.item
    cells = [
        str(row.serial),
        item.product_code,
        item.name,
        str(item.quantity),
        money(item.unit_rate),
        money(item.actual_amount),
        percentage(item.discount_percentage),
        money(item.discount_amount),
        money(item.line_total),
    ]
    return [fit_text(cell, width) for cell, width in zip(cells, COLUMN_WIDTHS)]


def _items_table(layout: InvoiceLayout, page: InvoicePage) -> Table:
    """Fixed-width item table: heading row, item rows, blank padding, totals on the last page."""
    data = [list(COLUMN_HEADINGS)]
    data += [_item_cells(row) for row in page.rows]
    data += [[''] * len(COLUMN_WIDTHS) for _ in range(page.blank_rows)]
    row_heights = [HEADER_ROW_HEIGHT] + [ROW_HEIGHT] * (len(data) - 1)

    if page.is_last:
        totals = layout.totals
        data.append([
            '', '', 'TOTAL:', str(totals.quantity), '',
            fit_text(money(totals.actual), COLUMN_WIDTHS[5], FONT_BOLD, LABEL_SIZE), '',
            fit_text(money(totals.discount), COLUMN_WIDTHS[7], FONT_BOLD, LABEL_SIZE),
            fit_text(money(totals.amount), COLUMN_WIDTHS[8], FONT_BOLD, LABEL_SIZE),
        ])
        row_heights.append(ROW_HEIGHT)

    table = Table(data, colWidths=list(COLUMN_WIDTHS), rowHeights=row_heights, hAlign='LEFT')
    style = [
        ('GRID', (0, 0), (-1, -1), 0.5, BORDER_COLOR),
        ('BACKGROUND', (0, 0), (-1, 0), SHADE_COLOR),
        ('FONTNAME', (0, 0), (-1, 0), FONT_BOLD),
        ('FONTSIZE', (0, 0), (-1, 0), LABEL_SIZE),
        ('ALIGN', (0, 0), (-1, 0), 'CENTER'),
        ('FONTNAME', (0, 1), (-1, -1), FONT),
        ('FONTSIZE', (0, 1), (-1, -1), BODY_SIZE),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('LEFTPADDING', (0, 0), (-1, -1), CELL_PADDING),
        ('RIGHTPADDING', (0, 0), (-1, -1), CELL_PADDING),
    ]
    for column, alignment in enumerate(COLUMN_ALIGNMENTS):
        style.append(('ALIGN', (column, 1), (column, -1), alignment))
    if page.is_last:
        style += [
            ('BACKGROUND', (0, -1), (-1, -1), SHADE_COLOR),
            ('FONTNAME', (0, -1), (-1, -1), FONT_BOLD),
            ('FONTSIZE', (0, -1), (-1, -1), LABEL_SIZE),
            ('ALIGN', (2, -1), (2, -1), 'RIGHT'),
        ]
    table.setStyle(TableStyle(style))
    return table


def _summary_block(layout: InvoiceLayout, invoice_format: InvoiceFormat, words_style) -> Table:
    """Amount in words on the left, payment breakdown on the right."""
    summary = layout.summary
    label_width = 80
    value_width = PRINTABLE_WIDTH - SPLIT_X - label_width
    currency = invoice_format.currency_label

    def amount(value):
        return fit_text(f"{currency} {money(value)}", value_width, FONT_BOLD, LABEL_SIZE)

    data = [
        ['Amount in Words:', 'Actual Total :', amount(summary.actual_total)],
        [Paragraph(summary.amount_in_words, words_style), 'Discount Total:', amount(summary.discount_total)],
        ['', 'Sub Total :', amount(summary.sub_total)],
        ['', 'Packaging :', amount(summary.packaging)],
        ['', 'Final Amount :', amount(summary.final_amount)],
    ]

    table = Table(data, colWidths=[SPLIT_X, label_width, value_width],
                  rowHeights=[INFO_ROW_HEIGHT] * len(data), hAlign='LEFT')
    table.setStyle(TableStyle([
        ('SPAN', (0, 1), (0, -1)),
        ('FONTNAME', (0, 0), (-1, -1), FONT),
        ('FONTSIZE', (0, 0), (-1, -1), LABEL_SIZE),
        ('FONTNAME', (0, 0), (0, 0), FONT_BOLD),
        ('FONTSIZE', (0, 0), (0, 0), 10),
        ('FONTNAME', (1, -1), (-1, -1), FONT_BOLD),
        ('FONTSIZE', (1, -1), (-1, -1), 10),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('VALIGN', (0, 1), (0, -1), 'TOP'),
        ('LEFTPADDING', (0, 0), (0, -1), 8),
        ('LEFTPADDING', (1, 0), (1, -1), 8),
        ('LINEAFTER', (0, 0), (0, -1), 1, BORDER_COLOR),
        ('LINEABOVE', (1, -1), (-1, -1), 0.5, RULE_COLOR),
        ('LINEBELOW', (0, -1), (-1, -1), 1, BORDER_COLOR),
    ]))
    return table


def _closing_block(layout: InvoiceLayout, invoice_format: InvoiceFormat) -> Table:
    store = layout.invoice.store
    data = [[fit_text(invoice_format.thank_you, PRINTABLE_WIDTH, FONT_BOLD, LABEL_SIZE)]]
    if store.address:
        data.append([fit_text(f"Address: {store.address}", PRINTABLE_WIDTH, FONT, BODY_SIZE)])

    table = Table(data, colWidths=[PRINTABLE_WIDTH], rowHeights=[14] + [12] * (len(data) - 1), hAlign='LEFT')
    table.setStyle(TableStyle([
        ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('FONTNAME', (0, 0), (-1, 0), FONT_BOLD),
        ('FONTSIZE', (0, 0), (-1, 0), LABEL_SIZE),
        ('FONTNAME', (0, 1), (-1, -1), FONT),
        ('FONTSIZE', (0, 1), (-1, -1), BODY_SIZE),
    ]))
    return table


def _build_story(layout: InvoiceLayout, invoice_format: InvoiceFormat) -> list:
    styles = getSampleStyleSheet()
    words_style = ParagraphStyle(
        'AmountInWords',
        parent=styles['Normal'],
        fontName=FONT,
        fontSize=LABEL_SIZE,
        leading=11,
    )

    elements = []
    for page in layout.pages:
        if not page.is_first:
            elements.append(PageBreak())

        # 1. Page header (customer block on the first page only)
        elements.append(_page_header(layout, page))
        if page.is_first:
            elements.append(_customer_block(layout, invoice_format))

        # 2. Items table
        elements.append(_items_table(layout, page))

        # 3. Footer summary, last page only
        if page.is_last:
            elements.append(_summary_block(layout, invoice_format, words_style))
            elements.append(Spacer(1, 8))
            elements.append(_closing_block(layout, invoice_format))

    return elements


def render_layout(layout: InvoiceLayout, invoice_format: Optional[InvoiceFormat] = None) -> bytes:
    """Draw an already paginated invoice and return the PDF bytes."""
    invoice_format = invoice_format or InvoiceFormat()
    invoice = layout.invoice

    buffer = BytesIO()
    doc = BaseDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=MARGIN,
        rightMargin=MARGIN,
        topMargin=MARGIN,
        bottomMargin=MARGIN,
        title=f"Invoice {invoice.invoice_number}",
        author=invoice.store.name,
        subject='Invoice',
        creator=invoice.store.name,
        keywords=['invoice', 'crackers', 'fireworks'],
        invariant=1,
    )
    frame = Frame(
        doc.leftMargin, doc.bottomMargin, doc.width, doc.height,
        leftPadding=0, rightPadding=0, topPadding=0, bottomPadding=0,
        id='invoice'
    )
    doc.addPageTemplates([PageTemplate(id='invoice', frames=[frame], onPage=_draw_border)])

    try:
        doc.build(_build_story(layout, invoice_format))
    except LayoutError as e:
        raise RenderFailureError(f"Invoice layout failed: {e}")

    pdf = buffer.getvalue()
    logger.info(
        f"Invoice PDF generated for {invoice.invoice_number}: "
        f"{len(pdf)} bytes, {layout.page_count} page(s), {len(invoice.items)} item(s)"
    )
    return pdf


def render_invoice(invoice: InvoiceData, invoice_format: Optional[InvoiceFormat] = None) -> bytes:
    """
    Render an invoice to PDF bytes.

    Up to 25 items always fit on a single page; longer invoices break after
    every 25 rows and only the last page carries totals and the footer.
    Output is byte-identical for identical input.
    """
    layout = build_invoice_layout(invoice, invoice_format)
    return render_layout(layout, invoice_format)
