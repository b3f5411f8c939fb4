"""
CLI commands for back-office developer tasks.

Commands:
- backoffice sample-invoice: Write a sample invoice PDF
- backoffice pricing: Print the price breakdown for a supplier cost
- backoffice packaging-cost: Print the packaging surcharge for an order value
"""

import sys
from datetime import datetime

import click

from config import Config
from backoffice import configure_logging
from backoffice.exceptions import BackofficeError
from backoffice.models import DEFAULT_PACKAGING_TIERS
from backoffice.services.invoice_layout import page_count
from backoffice.services.invoice_service import generate_invoice_pdf
from backoffice.services.pricing_service import compute_pricing, compute_packaging_cost
from backoffice.utils.formatters import money, percentage


def build_sample_order(item_count=12, generated_at=None):
    """Paid order document shaped like the stored ones, with predictable items."""
    generated_at = generated_at or datetime.now()
    items = []
    for idx in range(item_count):
        price = round(60.78947368421055 + (idx % 3) * 5, 2)
        items.append({
            'productSnapshot': {
                'productCode': 100 + idx,
                'name': f'Sample Product {idx + 1}',
                'price': price,
                'discountPercentage': 81,
            },
            'quantity': (idx % 4) + 1,
            'price': price,
            'discountPercentage': 81,
        })

    return {
        'orderId': 'ORD-TEST-001',
        'paymentStatus': 'paid',
        'invoice': {
            'invoiceNumber': 'INV-TEST-001',
            'generatedAt': generated_at,
            'generatedBy': 'system',
        },
        'customerDetails': {
            'name': 'John Doe',
            'mobile': '9876543210',
            'deliveryContact': '9123456780',
            'address': {
                'street': '12/417, Jeyam Nagar',
                'landmark': 'Near Main Market',
                'nearestTown': 'Meenampatti',
                'district': 'Sivakasi',
                'state': 'Tamil Nadu',
                'pincode': '626189',
            },
        },
        'items': items,
        'orderSummary': {'packagingPrice': 50},
    }


@click.group()
@click.option('--verbose', is_flag=True, help='Log at DEBUG level')
def cli(verbose):
    """Fireworks store back-office tools."""
    logger = configure_logging(Config)
    if verbose:
        logger.setLevel('DEBUG')


@cli.command('sample-invoice')
@click.option('--items', 'item_count', default=12, show_default=True, type=click.IntRange(0, 1000),
              help='Number of line items')
@click.option('--output', default='sample-invoice.pdf', show_default=True, type=click.Path(dir_okay=False),
              help='Where to write the PDF')
def sample_invoice(item_count, output):
    """Generate a sample invoice PDF."""
    order = build_sample_order(item_count)

    try:
        buffer = generate_invoice_pdf(order)
    except BackofficeError as e:
        click.echo(click.style(f'❌ Failed to generate sample invoice: {e.message}', fg='red'))
        sys.exit(1)

    with open(output, 'wb') as f:
        f.write(buffer.getvalue())

    click.echo(click.style('✅ Sample invoice generated', fg='green', bold=True))
    click.echo(f'   File: {output}')
    click.echo(f'   Items: {item_count}')
    click.echo(f'   Pages: {page_count(item_count)}')


@cli.command('pricing')
@click.argument('base_price')
@click.option('--margin', default=Config.DEFAULT_PROFIT_MARGIN_PERCENTAGE, show_default=True,
              help='Profit margin percentage')
@click.option('--discount', default=Config.DEFAULT_DISCOUNT_PERCENTAGE, show_default=True,
              help='Displayed discount percentage')
def pricing(base_price, margin, discount):
    """Show offer and original prices for a supplier cost."""
    try:
        result = compute_pricing(base_price, margin, discount)
    except BackofficeError as e:
        click.echo(click.style(f'❌ {e.message}', fg='red'))
        sys.exit(1)

    click.echo(f'Base price:      {money(result.base_price)}')
    click.echo(f'Profit margin:   {percentage(result.profit_margin_percentage)}')
    click.echo(f'Offer price:     {money(result.offer_price)}')
    click.echo(f'Original price:  {money(result.calculated_original_price)}')
    click.echo(f'Discount shown:  {percentage(result.discount_percentage)}')
    click.echo(f'Savings:         {money(result.savings)} ({result.savings_percentage}%)')


@cli.command('packaging-cost')
@click.argument('order_value')
@click.option('--inactive', is_flag=True, help='Treat packaging charges as switched off')
def packaging_cost(order_value, inactive):
    """Show the packaging surcharge for an order value under the default tiers."""
    try:
        cost = compute_packaging_cost(order_value, DEFAULT_PACKAGING_TIERS, is_active=not inactive)
    except BackofficeError as e:
        click.echo(click.style(f'❌ {e.message}', fg='red'))
        sys.exit(1)

    click.echo(f'Packaging cost: {Config.CURRENCY_LABEL} {money(cost)}')


if __name__ == '__main__':
    cli()
