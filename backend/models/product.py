from datetime import datetime
from . import db

class Department(db.Model):
    __tablename__ = 'departments'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    image = db.Column(db.String(500), nullable=True)
    image_upload_url = db.Column(db.String(500), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<Department {self.name}>'

class Category(db.Model):
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    image = db.Column(db.String(500), nullable=True)
    image_upload_url = db.Column(db.String(500), nullable=True)
    department_id = db.Column(db.Integer, db.ForeignKey('departments.id'), nullable=True)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    department = db.relationship('Department', backref='categories', lazy=True)

    def __repr__(self):
        return f'<Category {self.name}>'

class Subcategory(db.Model):
    __tablename__ = 'subcategories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    image = db.Column(db.String(500), nullable=True)
    image_upload_url = db.Column(db.String(500), nullable=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)
    ordering = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    category = db.relationship('Category', backref='subcategories', lazy=True)

    def __repr__(self):
        return f'<Subcategory {self.name}>'

class Brand(db.Model):
    __tablename__ = 'brands'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    alt = db.Column(db.String(100), nullable=True)  # Alternate spelling used in section configs
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<Brand {self.name}>'

class Product(db.Model):
    __tablename__ = 'products'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)

    # Pricing
    price = db.Column(db.Numeric(10, 2), nullable=False, default=0.00)
    discount = db.Column(db.Numeric(5, 2), nullable=False, default=0)  # Percent

    # Inventory
    stock = db.Column(db.Integer, default=0, nullable=False)

    # Images
    image = db.Column(db.String(500), nullable=True)
    image_upload_url = db.Column(db.String(500), nullable=True)

    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)
    department_id = db.Column(db.Integer, db.ForeignKey('departments.id'), nullable=True)

    # Status & Flags
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    is_new_arrival = db.Column(db.Boolean, default=False, nullable=False)
    is_top_selling = db.Column(db.Boolean, default=False, nullable=False)
    is_trending = db.Column(db.Boolean, default=False, nullable=False)
    is_featured = db.Column(db.Boolean, default=False, nullable=False)
    sections = db.Column(db.JSON, nullable=True)  # Named merchandising sections e.g. ["summer-sale"]

    # Timestamps
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    category = db.relationship('Category', backref=db.backref('products', lazy=True), lazy=True)
    department = db.relationship('Department', backref=db.backref('products', lazy=True), lazy=True)

    def __repr__(self):
        return f'<Product {self.name}>'

    @property
    def final_price(self):
        """Price after the percentage discount"""
        price = float(self.price or 0)
        discount = float(self.discount or 0)
        return round(price * (1 - discount / 100), 2)
