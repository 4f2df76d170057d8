"""
Admin Routes

Product management. Every route requires a logged-in user, and a product
can only be edited or deleted by the user who created it.
"""

import logging

from flask import render_template, request, redirect, url_for, flash, abort, current_app
from flask_login import login_required, current_user
from storefront.admin import admin_bp
from storefront.extensions import db
from storefront.models import Product, CartItem
from storefront.uploads import claim_upload, delete_upload

logger = logging.getLogger(__name__)


def validate_product_form(form):
    """Validate the product form.

    Returns:
        (values, errors) where values holds the cleaned fields and errors is
        a list of messages, empty when the form is valid.
    """
    errors = []
    title = form.get('title', '').strip()
    description = form.get('description', '').strip()
    raw_price = form.get('price', '').strip()

    if len(title) < 3:
        errors.append('Title must be at least 3 characters long.')

    try:
        price = round(float(raw_price), 2)
        if price <= 0:
            raise ValueError(raw_price)
    except ValueError:
        price = None
        errors.append('Price must be a positive number.')

    if not 5 <= len(description) <= 400:
        errors.append('Description must be between 5 and 400 characters.')

    return {'title': title, 'price': price, 'description': description, 'raw_price': raw_price}, errors


def _render_edit_form(product, editing, errors=None, status=200):
    return render_template('admin/edit_product.html',
                           page_title='Edit Product' if editing else 'Add Product',
                           path='/admin/edit-product' if editing else '/admin/add-product',
                           editing=editing,
                           product=product,
                           errors=errors or []), status


def _get_owned_product(product_id):
    if product_id is None:
        abort(404)
    product = db.session.get(Product, product_id)
    if product is None:
        abort(404)
    if product.user_id != current_user.id:
        return None
    return product


@admin_bp.route('/add-product', methods=['GET', 'POST'])
@login_required
def add_product():
    """Show the product form and create products from it."""
    if request.method == 'POST':
        values, errors = validate_product_form(request.form)
        if errors:
            return _render_edit_form(values, editing=False, errors=errors, status=422)

        image = claim_upload()
        product = Product(title=values['title'],
                          price=values['price'],
                          description=values['description'],
                          image_url=image.filename if image else None,
                          user_id=current_user.id)
        db.session.add(product)
        db.session.commit()
        logger.info("User %s created product %s", current_user.id, product.id)
        flash(f'Product "{product.title}" created.', 'success')
        return redirect(url_for('admin.products'))

    return _render_edit_form(None, editing=False)


@admin_bp.route('/products')
@login_required
def products():
    """List the products owned by the current user."""
    owned = Product.query.filter_by(user_id=current_user.id).order_by(Product.id).all()
    return render_template('admin/products.html',
                           page_title='Admin Products',
                           path='/admin/products',
                           products=owned)


@admin_bp.route('/edit-product/<int:product_id>')
@login_required
def edit_product(product_id):
    """Show the form for one owned product."""
    product = _get_owned_product(product_id)
    if product is None:
        return redirect(url_for('shop.index'))
    return _render_edit_form(product, editing=True)


@admin_bp.route('/edit-product', methods=['POST'])
@login_required
def post_edit_product():
    """Update an owned product. Without a new image the old one is kept."""
    product_id = request.form.get('product_id', type=int)
    product = _get_owned_product(product_id)
    if product is None:
        return redirect(url_for('shop.index'))

    values, errors = validate_product_form(request.form)
    if errors:
        values['id'] = product.id
        values['image_url'] = product.image_url
        return _render_edit_form(values, editing=True, errors=errors, status=422)

    product.title = values['title']
    product.price = values['price']
    product.description = values['description']
    image = claim_upload()
    if image:
        delete_upload(current_app.config['UPLOAD_FOLDER'], product.image_url)
        product.image_url = image.filename
    db.session.commit()
    flash(f'Product "{product.title}" updated.', 'success')
    return redirect(url_for('admin.products'))


@admin_bp.route('/delete-product/<int:product_id>', methods=['POST'])
@login_required
def delete_product(product_id):
    """Delete an owned product, its image and any cart lines holding it."""
    product = _get_owned_product(product_id)
    if product is None:
        flash('You can only delete your own products.', 'danger')
        return redirect(url_for('admin.products'))

    title, image_url = product.title, product.image_url
    CartItem.query.filter_by(product_id=product.id).delete()
    db.session.delete(product)
    db.session.commit()
    delete_upload(current_app.config['UPLOAD_FOLDER'], image_url)

    flash(f'Product "{title}" deleted.', 'success')
    return redirect(url_for('admin.products'))
