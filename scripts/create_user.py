"""Create a shop user from the command line.

Usage: python scripts/create_user.py EMAIL PASSWORD
"""
import sys
import os

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from werkzeug.security import generate_password_hash  # noqa: E402

from storefront import create_app  # noqa: E402
from storefront.extensions import db  # noqa: E402
from storefront.models import User  # noqa: E402

if len(sys.argv) != 3:
    print(__doc__)
    sys.exit(2)

email, password = sys.argv[1].strip().lower(), sys.argv[2]
app = create_app()

with app.app_context():
    user = User.query.filter_by(email=email).first()

    if not user:
        user = User(email=email, password_hash=generate_password_hash(password))
        db.session.add(user)
        print("New user created")
    else:
        user.password_hash = generate_password_hash(password)
        print("Existing user password reset")

    db.session.commit()
