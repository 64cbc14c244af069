from datetime import date

from flask import Blueprint, jsonify

from api_utils import CATEGORY_COLUMNS, parse_query, serialize_row, store_errors
from schemas import PeriodQuery
from store import get_store

dashboard_bp = Blueprint('dashboard', __name__, url_prefix='/api/dashboard')

TOTALS_BY_TYPE = """
    SELECT type, COALESCE(SUM(amount), 0) AS total
    FROM transactions
    WHERE MONTH(date) = %s AND YEAR(date) = %s
    GROUP BY type
"""

BUDGET_PROGRESS = f"""
    SELECT b.id, b.category_id, b.amount, b.month, b.year, b.created_at,
           {CATEGORY_COLUMNS},
           COALESCE(SUM(t.amount), 0) AS spent
    FROM budgets b
    LEFT JOIN categories c ON b.category_id = c.id
    LEFT JOIN transactions t ON t.category_id = b.category_id
        AND t.type = 'expense'
        AND MONTH(t.date) = b.month
        AND YEAR(t.date) = b.year
    WHERE b.month = %s AND b.year = %s
    GROUP BY b.id, c.id
    ORDER BY b.created_at DESC, b.id DESC
"""


def build_stats(type_totals, budget_rows):
    """Shape the two query results into the dashboard payload.

    ``type_totals`` holds one ``{type, total}`` row per transaction type that
    had activity in the month; a missing type counts as zero.
    """
    totals = {row['type']: float(row['total'] or 0) for row in type_totals}
    income = totals.get('income', 0.0)
    expenses = totals.get('expense', 0.0)

    budgets = []
    for row in budget_rows:
        budget = serialize_row(row)
        budget['spent'] = float(row['spent'] or 0)
        budget['amount'] = float(row['amount'] or 0)
        budgets.append(budget)

    return {
        "income": income,
        "expenses": expenses,
        "balance": income - expenses,
        "budgets": budgets,
    }


@dashboard_bp.route('/stats', methods=['GET'])
@store_errors("Failed to fetch dashboard stats")
def stats():
    period = parse_query(PeriodQuery)
    today = date.today()
    month = period.month or today.month
    year = period.year or today.year

    conn = get_store().get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute(TOTALS_BY_TYPE, (month, year))
            type_totals = cur.fetchall()

            cur.execute(BUDGET_PROGRESS, (month, year))
            budget_rows = cur.fetchall()

        return jsonify(build_stats(type_totals, budget_rows))
    finally:
        conn.close()
