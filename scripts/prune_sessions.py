"""Delete expired sessions from the SQL session table.

Usage: python scripts/prune_sessions.py
"""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from storefront import create_app  # noqa: E402
from storefront.sessions import prune_expired_sessions  # noqa: E402

app = create_app()

with app.app_context():
    print(f"Removed {prune_expired_sessions()} expired sessions")
