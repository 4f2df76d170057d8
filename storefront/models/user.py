"""
User and Cart Models
"""

from datetime import datetime

from flask_login import UserMixin
from storefront.extensions import db


class User(UserMixin, db.Model):
    """Customer account; also the owner of the products it creates"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    products = db.relationship('Product', backref='owner', lazy=True)
    cart_items = db.relationship('CartItem', backref='user', lazy=True,
                                 cascade='all, delete-orphan')
    orders = db.relationship('Order', backref='user', lazy=True,
                             order_by='Order.created_at.desc()')

    @classmethod
    def get_by_id(cls, user_id):
        """Return the user with this id, or None if it no longer exists."""
        try:
            user_id = int(user_id)
        except (TypeError, ValueError):
            return None
        return db.session.get(cls, user_id)

    def add_to_cart(self, product):
        """Add one unit of `product`, merging with an existing cart line."""
        item = CartItem.query.filter_by(user_id=self.id, product_id=product.id).first()
        if item:
            item.quantity += 1
        else:
            item = CartItem(user_id=self.id, product_id=product.id, quantity=1)
            db.session.add(item)
        db.session.commit()
        return item

    def remove_from_cart(self, product_id):
        CartItem.query.filter_by(user_id=self.id, product_id=product_id).delete()
        db.session.commit()

    def clear_cart(self):
        CartItem.query.filter_by(user_id=self.id).delete()
        db.session.commit()

    def __repr__(self):
        return f'<User {self.email}>'


class CartItem(db.Model):
    """One product line in a user's cart"""
    __tablename__ = 'cart_items'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey('products.id'), nullable=False)
    quantity = db.Column(db.Integer, nullable=False, default=1)

    product = db.relationship('Product')

    def __repr__(self):
        return f'<CartItem User:{self.user_id} Product:{self.product_id} x{self.quantity}>'
