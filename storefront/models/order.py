"""
Order Models
"""

from datetime import datetime

from storefront.extensions import db


class Order(db.Model):
    """A placed order"""
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    items = db.relationship('OrderItem', backref='order', lazy=True,
                            cascade='all, delete-orphan')

    @property
    def total(self):
        return round(sum(item.price * item.quantity for item in self.items), 2)

    def __repr__(self):
        return f'<Order {self.id} User:{self.user_id}>'


class OrderItem(db.Model):
    """Snapshot of a product at the time it was ordered"""
    __tablename__ = 'order_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False, index=True)
    # Plain id: the product may be deleted after the order is placed
    product_id = db.Column(db.Integer, nullable=False)
    title = db.Column(db.String(120), nullable=False)
    price = db.Column(db.Float, nullable=False)
    quantity = db.Column(db.Integer, nullable=False)

    def __repr__(self):
        return f'<OrderItem {self.title} x{self.quantity}>'
