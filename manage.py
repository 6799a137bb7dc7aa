#!/usr/bin/env python3
"""
InvoiceFlow management CLI.

Usage:
    python manage.py init
    python manage.py next-number
    python manage.py log [--limit N]
    python manage.py inventory [--search TEXT]
    python manage.py invoices [--search TEXT] [--status draft|sent|paid|void]
    python manage.py reset-log --yes
"""

import sys

from invoiceflow.cli import main

if __name__ == "__main__":
    sys.exit(main())
