"""Services package - pricing and invoice engines."""
from backoffice.services.pricing_service import (
    compute_pricing, compute_packaging_cost, validate_packaging_tiers,
    update_packaging_settings, calculate_total_quantity, compute_order_summary
)
from backoffice.services.invoice_layout import build_invoice_layout, page_count, page_slot, ITEMS_PER_PAGE
from backoffice.services.invoice_pdf import render_invoice
from backoffice.services.invoice_service import (
    build_invoice_data, generate_invoice_pdf, issue_invoice, validate_pdf_buffer, invoice_filename
)
