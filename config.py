"""Configuration module for the back-office engines."""
import os
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Config:
    """Base configuration class."""

    ENV = os.getenv('BACKOFFICE_ENV', 'development')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Store Information (printed on every invoice page)
    STORE_NAME = os.getenv('STORE_NAME', 'SUN CRACKERS')
    STORE_WEBSITE = os.getenv('STORE_WEBSITE', 'www.suncrackers.com')
    STORE_ADDRESS = os.getenv(
        'STORE_ADDRESS',
        '12/417, Jeyam Nagar, Meenampatti, Sivakasi-626189'
    )
    STORE_CONTACT_EMAIL = os.getenv('STORE_CONTACT_EMAIL', 'suncrackers4500@gmail.com')
    STORE_CONTACT_PHONE = os.getenv('STORE_CONTACT_PHONE', '+91 9443569475')

    # Invoice formatting
    CURRENCY_LABEL = os.getenv('CURRENCY_LABEL', 'Rs.')
    CURRENCY_WORDS = os.getenv('CURRENCY_WORDS', 'Rupees')
    INVOICE_DATE_FORMAT = os.getenv('INVOICE_DATE_FORMAT', '%d/%m/%Y')
    INVOICE_THANK_YOU = os.getenv('INVOICE_THANK_YOU', 'Thank you for business with us!')

    # Caller-side sanity floor for generated PDFs (bytes)
    MIN_INVOICE_PDF_SIZE = int(os.getenv('MIN_INVOICE_PDF_SIZE', '1000'))

    # Pricing defaults for new products
    DEFAULT_PROFIT_MARGIN_PERCENTAGE = os.getenv('DEFAULT_PROFIT_MARGIN_PERCENTAGE', '65')
    DEFAULT_DISCOUNT_PERCENTAGE = os.getenv('DEFAULT_DISCOUNT_PERCENTAGE', '81')
