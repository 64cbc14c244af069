from flask_sqlalchemy import SQLAlchemy

db = SQLAlchemy()

class Category(db.Model):
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    icon = db.Column(db.String(16), nullable=False, default='💰')
    is_default = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())

class Transaction(db.Model):
    __tablename__ = 'transactions'
    __table_args__ = (
        db.CheckConstraint('amount > 0', name='ck_transactions_amount_positive'),
        db.CheckConstraint("type = 'income' OR category_id IS NOT NULL", name='ck_transactions_expense_category'),
        db.Index('ix_transactions_date', 'date', 'created_at'),
    )

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.Enum('income', 'expense', name='transaction_type'), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=True)
    date = db.Column(db.Date, nullable=False)
    description = db.Column(db.Text)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())

class Budget(db.Model):
    __tablename__ = 'budgets'
    __table_args__ = (
        db.UniqueConstraint('category_id', 'month', 'year', name='uq_budgets_category_period'),
        db.CheckConstraint('month BETWEEN 1 AND 12', name='ck_budgets_month'),
    )

    id = db.Column(db.Integer, primary_key=True)
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id'), nullable=False)
    amount = db.Column(db.Numeric(10, 2), nullable=False)
    month = db.Column(db.Integer, nullable=False)
    year = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())
