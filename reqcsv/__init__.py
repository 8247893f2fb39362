"""Extract chapter / requirement / description records from specification PDFs into CSV."""

__version__ = "0.1.0"

BASE_LOGGERNAME = "reqcsv"
