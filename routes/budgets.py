from flask import Blueprint, jsonify

from api_utils import CATEGORY_COLUMNS, ApiError, parse_body, parse_query, serialize_row, store_errors
from schemas import BudgetIn, PeriodQuery
from store import get_store

budgets_bp = Blueprint('budgets', __name__, url_prefix='/api/budgets')

SELECT_JOINED = f"""
    SELECT b.id, b.category_id, b.amount, b.month, b.year, b.created_at,
           {CATEGORY_COLUMNS}
    FROM budgets b
    LEFT JOIN categories c ON b.category_id = c.id
"""

# rowcount for ON DUPLICATE KEY UPDATE: 1 inserted, 2 updated, 0 updated to the same value
INSERTED = 1


def build_list_query(period):
    query = SELECT_JOINED + " WHERE 1=1"
    params = []

    if period.month:
        query += " AND b.month = %s"
        params.append(period.month)

    if period.year:
        query += " AND b.year = %s"
        params.append(period.year)

    query += " ORDER BY b.created_at DESC, b.id DESC"
    return query, tuple(params)


@budgets_bp.route('', methods=['GET'])
@store_errors("Failed to fetch budgets")
def list_budgets():
    query, params = build_list_query(parse_query(PeriodQuery))

    conn = get_store().get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute(query, params)
            rows = cur.fetchall()
        return jsonify([serialize_row(row) for row in rows])
    finally:
        conn.close()


@budgets_bp.route('', methods=['POST'])
@store_errors("Failed to create budget")
def upsert_budget():
    """Create the budget, or overwrite the amount of the one already set for that category and month.

    Answers 201 for a new budget and 200 when an existing one was overwritten.
    """
    budget = parse_body(BudgetIn)

    conn = get_store().get_connection()
    try:
        with conn.cursor(dictionary=True) as cur:
            cur.execute(
                """
                INSERT INTO budgets (category_id, amount, month, year)
                VALUES (%s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE amount = VALUES(amount)
                """,
                (budget.category_id, budget.amount, budget.month, budget.year)
            )
            created = cur.rowcount == INSERTED
            conn.commit()
            cur.execute(
                SELECT_JOINED + " WHERE b.category_id = %s AND b.month = %s AND b.year = %s",
                (budget.category_id, budget.month, budget.year)
            )
            row = cur.fetchone()
        return jsonify(serialize_row(row)), 201 if created else 200
    finally:
        conn.close()


@budgets_bp.route('/<int:id>', methods=['DELETE'])
@store_errors("Failed to delete budget")
def delete_budget(id):
    conn = get_store().get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute("DELETE FROM budgets WHERE id = %s", (id,))
            if cur.rowcount == 0:
                raise ApiError("Budget not found", 404)
            conn.commit()
        return jsonify({"message": "Budget deleted successfully"})
    finally:
        conn.close()
