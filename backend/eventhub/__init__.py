# backend/eventhub/__init__.py
"""
EventHub package: event listings and bookings.

Loads environment variables from a .env file if present, before any module
reads its configuration through os.getenv.
"""

from dotenv import load_dotenv

load_dotenv()
