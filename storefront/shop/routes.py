"""
Shop Routes

Catalogue pages are public; cart and orders need a logged-in user.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, abort, current_app, send_from_directory
from flask_login import login_required, current_user
from storefront.shop import shop_bp
from storefront.extensions import db
from storefront.models import Product, Order, OrderItem, CartItem

logger = logging.getLogger(__name__)


def _paginate_products(page_title, path, template):
    page = request.args.get('page', 1, type=int)
    pagination = Product.query.order_by(Product.id).paginate(
        page=page,
        per_page=current_app.config['PRODUCTS_PER_PAGE'],
        error_out=False,
    )
    return render_template(template,
                           page_title=page_title,
                           path=path,
                           products=pagination.items,
                           pagination=pagination)


@shop_bp.route('/')
def index():
    """Shop front page"""
    return _paginate_products('Shop', '/', 'shop/index.html')


@shop_bp.route('/products')
def products():
    """All products"""
    return _paginate_products('All Products', '/products', 'shop/product_list.html')


@shop_bp.route('/products/<int:product_id>')
def product_detail(product_id):
    product = db.session.get(Product, product_id)
    if product is None:
        abort(404)
    return render_template('shop/product_detail.html',
                           page_title=product.title,
                           path='/products',
                           product=product)


@shop_bp.route('/images/<path:filename>')
def uploaded_image(filename):
    """Serve a stored product image."""
    return send_from_directory(current_app.config['UPLOAD_FOLDER'], filename)


@shop_bp.route('/cart')
@login_required
def cart():
    items = CartItem.query.filter_by(user_id=current_user.id).order_by(CartItem.id).all()
    total = round(sum(item.product.price * item.quantity for item in items), 2)
    return render_template('shop/cart.html',
                           page_title='Your Cart',
                           path='/cart',
                           items=items,
                           total=total)


@shop_bp.route('/cart', methods=['POST'])
@login_required
def add_to_cart():
    product = db.session.get(Product, request.form.get('product_id', type=int) or 0)
    if product is None:
        abort(404)
    current_user.add_to_cart(product)
    flash(f'"{product.title}" added to your cart.', 'success')
    return redirect(url_for('shop.cart'))


@shop_bp.route('/cart-delete-item', methods=['POST'])
@login_required
def delete_cart_item():
    product_id = request.form.get('product_id', type=int)
    if product_id is not None:
        current_user.remove_from_cart(product_id)
    return redirect(url_for('shop.cart'))


@shop_bp.route('/create-order', methods=['POST'])
@login_required
def create_order():
    """Turn the cart into an order and empty the cart."""
    items = CartItem.query.filter_by(user_id=current_user.id).all()
    if not items:
        flash('Your cart is empty.', 'warning')
        return redirect(url_for('shop.cart'))

    order = Order(user_id=current_user.id)
    for item in items:
        order.items.append(OrderItem(product_id=item.product.id,
                                     title=item.product.title,
                                     price=item.product.price,
                                     quantity=item.quantity))
    db.session.add(order)
    db.session.commit()
    current_user.clear_cart()
    logger.info("User %s placed order %s", current_user.id, order.id)
    return redirect(url_for('shop.orders'))


@shop_bp.route('/orders')
@login_required
def orders():
    user_orders = Order.query.filter_by(user_id=current_user.id)\
        .order_by(Order.created_at.desc()).all()
    return render_template('shop/orders.html',
                           page_title='Your Orders',
                           path='/orders',
                           orders=user_orders)
