from datetime import datetime
from . import db

class Slider(db.Model):
    __tablename__ = 'sliders'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=True)
    description = db.Column(db.Text, nullable=True)

    image = db.Column(db.String(500), nullable=True)
    image_upload_url = db.Column(db.String(500), nullable=True)
    image_mobile_upload_url = db.Column(db.String(500), nullable=True)
    image_alt = db.Column(db.String(255), nullable=True)

    button_text = db.Column(db.String(100), nullable=True)
    button_link = db.Column(db.String(500), nullable=True)
    link = db.Column(db.String(500), nullable=True)

    order = db.Column(db.Integer, default=0, nullable=False)
    is_active = db.Column(db.Boolean, default=True, nullable=False)

    def __repr__(self):
        return f'<Slider {self.title}>'

class Banner(db.Model):
    __tablename__ = 'banners'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=True)
    image = db.Column(db.String(500), nullable=True)
    image_upload_url = db.Column(db.String(500), nullable=True)
    link = db.Column(db.String(500), nullable=True)
    position = db.Column(db.String(20), default='middle', nullable=False)  # top, middle, bottom
    is_active = db.Column(db.Boolean, default=True, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<Banner {self.title}>'
