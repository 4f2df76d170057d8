"""
Product Model
"""

from storefront.extensions import db


class Product(db.Model):
    """Product listed in the shop"""
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(120), nullable=False)
    price = db.Column(db.Float, nullable=False)
    description = db.Column(db.String(400), nullable=False)
    # Stored filename under the upload folder; None when no image was provided
    image_url = db.Column(db.String(255))
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)

    def __repr__(self):
        return f'<Product {self.title}>'
