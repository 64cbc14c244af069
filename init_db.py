from flask import Flask

from config import Config
from models import db, Category

DEFAULT_CATEGORIES = [
    ("Food", "🍔"),
    ("Transport", "🚗"),
    ("Housing", "🏠"),
    ("Health", "💊"),
    ("Leisure", "🎮"),
    ("Education", "📚"),
    ("Salary", "💼"),
    ("Other", "💰"),
]


def make_schema_app(database_uri):
    app = Flask(__name__)
    app.config['SQLALCHEMY_DATABASE_URI'] = database_uri
    db.init_app(app)
    return app


def seed_default_categories():
    existing = {name for (name,) in db.session.query(Category.name).filter(Category.is_default.is_(True))}
    added = 0
    for name, icon in DEFAULT_CATEGORIES:
        if name not in existing:
            db.session.add(Category(name=name, icon=icon, is_default=True))
            added += 1
    db.session.commit()
    return added


def init_db(database_uri=None):
    """Create the tables and seed the default categories. Safe to run twice."""
    app = make_schema_app(database_uri or Config.database_uri())
    with app.app_context():
        db.create_all()
        added = seed_default_categories()
        app.logger.info("Schema ready, %d default categories added", added)
    return app

if __name__ == "__main__":
    init_db()
